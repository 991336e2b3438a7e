"""Canonicalize raw text so obfuscated spellings compare equal.

The pipeline runs on (character, source index) pairs rather than on a plain
string, so the output carries an index map back into the original text.
The censor uses that map to mask exactly the characters a normalized match
came from.

Every step is fault-tolerant: a failing step is logged and skipped, and the
pipeline continues from the previous step's output.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Callable

from textmod.errors import NormalizationStepError

logger = logging.getLogger(__name__)

# Homoglyph / leetspeak substitutions. Applied literally, one character at a
# time, so regex metacharacters like "$", "+", "|" or "(" need no escaping.
HOMOGLYPHS: dict[str, str] = {
    "@": "a",
    "4": "a",
    "&": "a",
    "8": "b",
    "(": "c",
    "<": "c",
    "0": "o",
    "1": "i",
    "!": "i",
    "|": "i",
    "3": "e",
    "$": "s",
    "5": "s",
    "+": "t",
    "7": "t",
    "2": "z",
    "9": "g",
    "6": "g",
    "#": "h",
    "%": "x",
    "*": "x",
    "°": "o",
    "ø": "o",
    "ß": "b",
}

_Chars = list[tuple[str, int]]


@dataclass(frozen=True)
class NormalizedText:
    """Normalized text plus, for each of its characters, the source index."""

    text: str
    offsets: tuple[int, ...] = field(default_factory=tuple)

    def source_span(self, start: int, end: int) -> tuple[int, int]:
        """Map ``text[start:end]`` to the ``(start, end)`` span of the source."""
        if start >= end or end > len(self.offsets):
            raise ValueError(f"Span {start}:{end} outside normalized text of length {len(self.text)}")
        return self.offsets[start], self.offsets[end - 1] + 1


def _lowercase(chars: _Chars) -> _Chars:
    return [(lowered, index) for char, index in chars for lowered in char.lower()]


def _drop_format_chars(chars: _Chars) -> _Chars:
    # Zero-width and other invisible format characters vanish without leaving a gap.
    return [(char, index) for char, index in chars if unicodedata.category(char) != "Cf"]


def _in_run(char: str) -> bool:
    return char.isalnum() or char in HOMOGLYPHS


def _substitute_run(run: _Chars) -> _Chars:
    out: _Chars = []
    for i, (char, index) in enumerate(run):
        substitute = HOMOGLYPHS.get(char)
        if substitute is not None and not char.isalnum():
            following = run[i + 1][0] if i + 1 < len(run) else ""
            if not following.isalnum():
                substitute = None
        out.append((substitute or char, index))
    return out


def _substitute_homoglyphs(chars: _Chars) -> _Chars:
    # Only runs that already contain a letter are de-leeted, so "c0nn@rd" reads
    # as a word while "19", "06 12" or "#42" stay numbers. Inside a run a symbol
    # stands for a letter only when a letter or digit follows it, so sentence
    # punctuation ("connard!") is not read as part of the word.
    out: _Chars = []
    i = 0
    while i < len(chars):
        if not _in_run(chars[i][0]):
            out.append(chars[i])
            i += 1
            continue
        end = i
        while end < len(chars) and _in_run(chars[end][0]):
            end += 1
        run = chars[i:end]
        if any(char.isalpha() for char, _ in run):
            out.extend(_substitute_run(run))
        else:
            out.extend(run)
        i = end
    return out


def _strip_diacritics(chars: _Chars) -> _Chars:
    out: _Chars = []
    for char, index in chars:
        for part in unicodedata.normalize("NFD", char):
            if unicodedata.category(part) != "Mn":
                out.append((part, index))
    return out


def _strip_punctuation(chars: _Chars) -> _Chars:
    return [
        (" " if unicodedata.category(char)[0] in ("P", "S") else char, index)
        for char, index in chars
    ]


def _collapse_whitespace(chars: _Chars) -> _Chars:
    out: _Chars = []
    for char, index in chars:
        if char.isspace():
            if out and out[-1][0] != " ":
                out.append((" ", index))
            continue
        out.append((char, index))
    if out and out[-1][0] == " ":
        out.pop()
    return out


_STEPS: tuple[tuple[str, Callable[[_Chars], _Chars]], ...] = (
    ("format", _drop_format_chars),
    ("lowercase", _lowercase),
    ("homoglyphs", _substitute_homoglyphs),
    ("diacritics", _strip_diacritics),
    ("punctuation", _strip_punctuation),
    ("whitespace", _collapse_whitespace),
)


def normalize_with_map(text: str) -> NormalizedText:
    """Normalize *text* and keep the source index of every output character."""
    if not text:
        return NormalizedText(text="")

    chars: _Chars = [(char, index) for index, char in enumerate(text)]
    for name, step in _STEPS:
        try:
            chars = step(chars)
        except Exception as exc:
            logger.error("%s", NormalizationStepError(name, str(exc)))

    return NormalizedText(
        text="".join(char for char, _ in chars),
        offsets=tuple(index for _, index in chars),
    )


def normalize(text: str) -> str:
    """Lowercase, de-leet, strip accents and punctuation, collapse spaces.

    Never raises. If the pipeline itself blows up the result degrades to
    ``text.lower().strip()``.
    """
    if not text:
        return ""
    try:
        return normalize_with_map(text).text
    except Exception:
        logger.exception("Normalization failed, falling back to lowercase")
        return text.lower().strip()


def fold_text(text: str) -> str:
    """Lowercase and strip diacritics only; digits and punctuation survive."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(c for c in decomposed if unicodedata.category(c) not in ("Mn", "Cf"))


_TOKEN_RE = re.compile(r"\w+")


def tokenize(text: str) -> list[str]:
    """Split folded text into word tokens (letters and digits)."""
    return _TOKEN_RE.findall(fold_text(text))
