"""Context checks that can suppress a match: allow-phrases and quotations."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from textmod.text.normalizer import fold_text

logger = logging.getLogger(__name__)

# Phrases that signal the author is reporting or quoting someone else.
REPORT_PATTERNS: tuple[str, ...] = (
    r"\bil[/\s.]m['’e]\s?a\s+dit",
    r"\belle[/\s.]m['’e]\s?a\s+dit",
    r"\bm['’e]\s?a\s+traité",
    r"\bm['’e]\s?a\s+insulté",
    r"\bm['’e]\s?a\s+envoyé",
    r"\ba\s+écrit",
    r"\ba\s+dit\s+que",
    r"\bselon\s+(?:lui|elle)",
    r"\bd['’e]\s?après\s+(?:lui|elle)",
    r"\bje\s+cite",
    r"\bpropos\s+de",
    r"\bsignaler\s+\w+",
    r"\bje\s+signale",
    r"\bmessage\s+inapproprié",
    r"\b(?:il|elle)\s+m['’e]\s?a\s+(?:appelé|écrit)",
)

QUOTE_PATTERNS: tuple[str, ...] = (
    r'"[^"]+"',
    r"“[^”]+”",
    r"«[^»]+»",
    r"‘[^’]+’",
    # Straight single quotes only when they open and close at word edges,
    # so elisions like "l'argent" or "c'est" are not quotations.
    r"(?<!\w)'[^']+'(?!\w)",
)


def in_allowed_context(text: str, exceptions: Iterable[str]) -> bool:
    """True when any allow-phrase occurs in *text* (case- and accent-insensitive)."""
    if not text:
        return False
    lowered = text.lower()
    folded = fold_text(text)
    for phrase in exceptions or ():
        if not phrase:
            continue
        if phrase.lower() in lowered or fold_text(phrase) in folded:
            return True
    return False


def is_quote_or_report(text: str, patterns: Sequence[str] = REPORT_PATTERNS) -> bool:
    """True when *text* contains a quotation or reads like a report about someone else."""
    if not text:
        return False

    for source in (*QUOTE_PATTERNS, *patterns):
        try:
            if re.search(source, text, re.IGNORECASE):
                return True
        except re.error as e:
            logger.warning("Skipping quote/report pattern %r: %s", source, e)
    return False
