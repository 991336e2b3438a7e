"""Decide whether one dictionary pattern occurs in a text.

Literal patterns are normalized the same way as the text, so "s@lope" and
"salope" are the same pattern. Matching is whole-word by default; the word
boundaries are Unicode look-arounds rather than ``\\b`` so accented letters
count as word characters ("pd" never hits "pédiatre").

Nothing here raises on bad input. A regex that does not compile degrades to
substring containment and the error travels back in the ``MatchResult`` so
the caller can count it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from textmod.errors import ModerationError, PatternCompilationError
from textmod.text.normalizer import normalize

logger = logging.getLogger(__name__)

PLURAL_SUFFIX = r"(?:e?s)?"
LETTER_SEPARATOR = r"[\W_]?"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one pattern: a hit or not, plus any recoverable error."""

    matched: bool
    error: Optional[ModerationError] = None

    @classmethod
    def hit(cls) -> MatchResult:
        return cls(matched=True)

    @classmethod
    def miss(cls) -> MatchResult:
        return cls(matched=False)


@lru_cache(maxsize=2048)
def compile_pattern(source: str, flags: int = re.IGNORECASE) -> re.Pattern:
    """Compile and cache a pattern. Raises ``re.error`` on invalid source."""
    return re.compile(source, flags)


def boundary_regex(word: str) -> str:
    """Regex source matching *word* (and its s/es plural) as a whole word."""
    return rf"(?<!\w){re.escape(word)}{PLURAL_SUFFIX}(?!\w)"


def flexible_regex(word: str) -> str:
    """Regex source tolerating one separator between letters ("p.u.t.e")."""
    letters = [re.escape(c) for c in word if not c.isspace()]
    body = LETTER_SEPARATOR.join(letters)
    return rf"(?<!\w){body}{PLURAL_SUFFIX}(?!\w)"


def _token_sequence_match(pattern_tokens: list[str], text_tokens: list[str]) -> bool:
    size = len(pattern_tokens)
    if not size or size > len(text_tokens):
        return False
    head, last = pattern_tokens[:-1], pattern_tokens[-1]
    for start in range(len(text_tokens) - size + 1):
        window = text_tokens[start:start + size]
        if window[:-1] != head:
            continue
        tail = window[-1]
        if tail in (last, last + "s", last + "es"):
            return True
    return False


def _match_regex(text: str, pattern: str, normalized: str) -> MatchResult:
    try:
        compiled = compile_pattern(pattern)
    except re.error as e:
        error = PatternCompilationError(pattern, str(e))
        logger.warning("%s; falling back to substring match", error)
        matched = pattern.lower() in text.lower()
        return MatchResult(matched=matched, error=error)

    if compiled.search(text) or (normalized and compiled.search(normalized)):
        return MatchResult.hit()
    return MatchResult.miss()


def _match_literal(text: str, pattern: str, normalized: str, whole_word: bool) -> MatchResult:
    norm_pattern = normalize(pattern)
    if not norm_pattern:
        return MatchResult.miss()

    if not whole_word:
        return MatchResult(matched=norm_pattern in normalized)

    # (a) exact token sequence, plural allowed on the last token
    if _token_sequence_match(norm_pattern.split(), normalized.split()):
        return MatchResult.hit()

    # (b) boundary regex on raw and normalized text
    error: Optional[ModerationError] = None
    for candidate, haystack in ((pattern.lower(), text.lower()), (norm_pattern, normalized)):
        if not candidate.strip():
            continue
        try:
            if compile_pattern(boundary_regex(candidate)).search(haystack):
                return MatchResult.hit()
        except re.error as e:
            error = PatternCompilationError(candidate, str(e))
            logger.warning("%s", error)

    # (c) space-padded containment
    matched = f" {norm_pattern} " in f" {normalized} "
    return MatchResult(matched=matched, error=error)


def match_pattern(
    text: str,
    pattern: str,
    *,
    is_regex: bool = False,
    whole_word: bool = True,
    normalized: Optional[str] = None,
) -> MatchResult:
    """Match one dictionary pattern against *text*.

    Args:
        text: Raw message text.
        pattern: Literal word/phrase, or regex source when ``is_regex``.
        is_regex: Treat *pattern* as a case-insensitive regex.
        whole_word: Require word boundaries; otherwise substring containment
            in the normalized text.
        normalized: Pre-computed ``normalize(text)``, to avoid redoing it per
            pattern.
    """
    if not text or not pattern:
        return MatchResult.miss()
    if normalized is None:
        normalized = normalize(text)

    if is_regex:
        return _match_regex(text, pattern, normalized)
    return _match_literal(text, pattern, normalized, whole_word)
