"""Inappropriate-content scorer for long-form text (listing descriptions).

Independent of the chat dictionary. The score is additive and every
heuristic that contributes records a human-readable signal:

1. explicit phrases short-circuit to 0.9
2. structural flags (+0.25 each)
3. numeric sequences that look like phone evasion (+0.25)
4. fragmented banned words (+0.35, obfuscation)
5. suspicion-keyword density (floor 0.7) and 5-word window pairs (+0.15 each)
6. category keywords, with ambiguous terms allowlisted by context
7. leetspeak spellings (obfuscation)
8. aggregate, minus legitimate-context discounts, clamped to [0, 1]
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable, Optional, Union

from textmod.scoring.models import Category, DescriptionSection, InappropriateContentResult, ScorerTables
from textmod.scoring.tables import default_tables
from textmod.text.normalizer import fold_text, tokenize

logger = logging.getLogger(__name__)

MAX_INPUT_LENGTH = 20_000
EXPLICIT_SCORE = 0.9
STRUCTURE_WEIGHT = 0.25
NUMERIC_WEIGHT = 0.25
FRAGMENTATION_WEIGHT = 0.35
PAIR_WEIGHT = 0.15
MAX_PAIR_BONUS = 0.45
DENSITY_FLOOR = 0.7
DENSITY_KEYWORDS = 3
WINDOW_SIZE = 5
LONG_DIGIT_RUN = 6
THRESHOLD = 0.3
INTRO_THRESHOLD = 0.5

MAX_LEGIT_DISCOUNT = 0.4
LEGIT_TERM_DISCOUNT = 0.1
MAX_SUPPRESSED_DISCOUNT = 0.3
SUPPRESSED_TERM_DISCOUNT = 0.1
LOW_DENSITY_DISCOUNT = 0.2
LOW_DENSITY_MIN_LENGTH = 500
LOW_DENSITY_RATIO = 0.01
ADULT_LEGIT_TERMS_REQUIRED = 4

_PHONE_RE = re.compile(r"(?:\+33|(?<!\d)0)\s?[1-9](?:[\s.-]?\d{2}){4}(?!\d)")
_EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.]+")
_SEPARATOR_RUN_RE = re.compile(r"([^\w\s])\1{9,}")
_DIGIT_RUN_RE = re.compile(r"\d{5,}")
_MASKED_NUMBER_RE = re.compile(r"\d{2,}[xX*#]{2,}")
_DELIMITED_GROUPS_RE = re.compile(r"(?<!\d)\d{2}(?:[ .\-/]\d{2}){3,}(?!\d)")
_WORD_RE = re.compile(r"\w+")


@lru_cache(maxsize=4096)
def _word_start(term: str) -> re.Pattern:
    return re.compile(rf"(?<!\w){re.escape(term)}")


@lru_cache(maxsize=256)
def _fragmented(word: str) -> re.Pattern:
    gap = r"[\W\d_]{1,3}"
    return re.compile(rf"(?<![a-z]){gap.join(re.escape(c) for c in word)}(?![a-z])")


@lru_cache(maxsize=256)
def _leet(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


def _present(terms: Iterable[str], folded: str) -> list[str]:
    return [t for t in terms if _word_start(t).search(folded)]


def _explicit_hit(folded: str, tables: ScorerTables) -> Optional[tuple[Category, str]]:
    for category, phrases in tables.explicit_phrases.items():
        for phrase in phrases:
            if _word_start(phrase).search(folded):
                return category, phrase
    return None


def _structural_flags(content: str, folded: str, tables: ScorerTables) -> list[str]:
    flags: list[str] = []

    lines = [line.strip() for line in content.splitlines() if line.strip()]
    if len(lines) >= 6 and sum(len(line) < 30 for line in lines) / len(lines) >= 0.8:
        flags.append("list-like short-line formatting")

    for keyword in tables.suspicion_keywords:
        if len(_word_start(keyword).findall(folded)) >= 3:
            flags.append(f"suspicion keyword repeated: {keyword}")
            break

    middle = len(folded) // 2
    first, second = folded[:middle], folded[middle:]
    if (
        len(_present(tables.legitimate_terms, first)) >= 3
        and not _present(tables.suspicion_keywords, first)
        and len(_present(tables.suspicion_keywords, second)) >= 2
    ):
        flags.append("legitimate opening followed by suspicious content")

    if _SEPARATOR_RUN_RE.search(content):
        flags.append("long separator run")

    suspicious = {k for k in tables.suspicion_keywords if " " not in k}
    for word in _WORD_RE.findall(content):
        if len(word) >= 3 and word.isupper() and fold_text(word) in suspicious:
            flags.append(f"suspicion keyword in capitals: {word}")
            break

    return flags


def _numeric_signal(content: str) -> Optional[str]:
    if sum(c.isdigit() for c in content) > 15:
        return "more than 15 digits"
    if len(_DIGIT_RUN_RE.findall(content)) >= 2:
        return "several long digit runs"
    if _MASKED_NUMBER_RE.search(content):
        return "partially masked number"
    if _DELIMITED_GROUPS_RE.search(content):
        return "delimited number groups"
    return None


def _window_pairs(tokens: list[str], tables: ScorerTables) -> list[str]:
    sale_verbs, substances = set(tables.sale_verbs), set(tables.substances)
    contact_verbs, providers = set(tables.contact_verbs), set(tables.email_providers)

    pairs: list[str] = []
    for i, token in enumerate(tokens):
        if token not in sale_verbs and token not in contact_verbs:
            continue
        nearby = tokens[max(0, i - WINDOW_SIZE + 1):i] + tokens[i + 1:i + WINDOW_SIZE]
        for other in nearby:
            pair = None
            if token in sale_verbs and other in substances:
                pair = f"{token} ~ {other}"
            elif token in contact_verbs and other in providers:
                pair = f"{token} ~ {other}"
            elif token in contact_verbs and other.isdigit() and len(other) >= LONG_DIGIT_RUN:
                pair = f"{token} ~ <number>"
            if pair and pair not in pairs:
                pairs.append(pair)
    return pairs


def _scan_categories(folded: str, tables: ScorerTables, result: InappropriateContentResult) -> int:
    """Record category keyword hits; return how many ambiguous hits were allowlisted."""
    legit_present = set(_present(tables.legitimate_terms, folded))
    suppressed = 0

    for category, keywords in tables.categories.items():
        for keyword in keywords:
            if not _word_start(keyword).search(folded):
                continue
            contexts = tables.ambiguous.get(keyword)
            if contexts is not None:
                found = _present(contexts, folded)
                if category is Category.ADULT:
                    allowed = len(legit_present | set(found)) >= ADULT_LEGIT_TERMS_REQUIRED
                else:
                    allowed = bool(found)
                if allowed:
                    suppressed += 1
                    result.signals.append(f"allowlisted by context: {keyword}")
                    continue
            result.add_match(keyword, category)

    return suppressed


def _scan_leetspeak(folded: str, tables: ScorerTables, result: InappropriateContentResult) -> None:
    for leet in tables.leetspeak:
        for match in _leet(leet.pattern).finditer(folded):
            if match.group(0).startswith(leet.label):
                continue
            result.add_match(leet.label, leet.category)
            result.obfuscation_detected = True
            result.signals.append(f"leetspeak: {match.group(0)}")
            break


def _score(content: str, tables: ScorerTables) -> InappropriateContentResult:
    result = InappropriateContentResult()
    folded = fold_text(content)

    explicit = _explicit_hit(folded, tables)
    if explicit:
        category, phrase = explicit
        result.add_match(phrase, category)
        result.score = EXPLICIT_SCORE
        result.is_inappropriate = True
        result.signals.append(f"explicit phrase: {phrase}")
        return result

    bonus = 0.0
    for flag in _structural_flags(content, folded, tables):
        bonus += STRUCTURE_WEIGHT
        result.signals.append(f"structure: {flag}")

    numeric = _numeric_signal(content)
    if numeric:
        bonus += NUMERIC_WEIGHT
        result.signals.append(f"numbers: {numeric}")

    for target in tables.fragmentation_targets:
        if _fragmented(target).search(folded):
            bonus += FRAGMENTATION_WEIGHT
            result.obfuscation_detected = True
            result.add_match(target)
            result.signals.append(f"fragmented word: {target}")
            break

    suspicion_hits = _present(tables.suspicion_keywords, folded)
    density_floor = len(suspicion_hits) >= DENSITY_KEYWORDS
    if density_floor:
        result.signals.append(f"suspicion density: {', '.join(suspicion_hits)}")

    tokens = tokenize(content)
    pairs = _window_pairs(tokens, tables)
    if pairs:
        result.categories.add(Category.SPAM)
        bonus += min(MAX_PAIR_BONUS, PAIR_WEIGHT * len(pairs))
        result.signals.extend(f"suspicious pair: {pair}" for pair in pairs)

    suppressed = _scan_categories(folded, tables, result)
    _scan_leetspeak(folded, tables, result)

    score = (
        0.4 * min(1.0, len(result.categories) / 3)
        + 0.4 * min(1.0, len(result.matches) / 5)
        + (0.2 if result.obfuscation_detected else 0.0)
        + bonus
    )

    legit_terms = _present(tables.legitimate_terms, folded)
    discount = min(MAX_LEGIT_DISCOUNT, LEGIT_TERM_DISCOUNT * len(legit_terms))
    discount += min(MAX_SUPPRESSED_DISCOUNT, SUPPRESSED_TERM_DISCOUNT * suppressed)
    if (
        len(content) > LOW_DENSITY_MIN_LENGTH
        and tokens
        and len(result.matches) / len(tokens) < LOW_DENSITY_RATIO
    ):
        discount += LOW_DENSITY_DISCOUNT

    if Category.ADULT in result.categories and (_PHONE_RE.search(content) or _EMAIL_RE.search(content)):
        discount = 0.0
        result.signals.append("adult content with contact details: no discount")

    score = max(0.0, min(1.0, score - discount))
    if density_floor:
        score = max(score, DENSITY_FLOOR)
    result.score = round(score, 2)
    return result


def detect_inappropriate_content(
    content: str,
    field: Union[DescriptionSection, str, None] = None,
    tables: Optional[ScorerTables] = None,
) -> InappropriateContentResult:
    """Score long-form *content* for inappropriate material.

    Args:
        content: Text to score; only the first 20 000 characters are read.
        field: Listing section the text comes from. The intro is held to a
            higher threshold (0.5 instead of 0.3).
        tables: Keyword tables; defaults to the packaged ones.

    Never raises: on an internal error the content is reported as clean.
    """
    if not content or not content.strip():
        return InappropriateContentResult()

    field_name = field.value if isinstance(field, DescriptionSection) else field
    threshold = INTRO_THRESHOLD if field_name == DescriptionSection.INTRO.value else THRESHOLD

    try:
        result = _score(content[:MAX_INPUT_LENGTH], tables if tables is not None else default_tables())
    except Exception:
        logger.exception("Content scoring failed; content treated as clean")
        return InappropriateContentResult()

    result.is_inappropriate = result.is_inappropriate or result.score > threshold
    return result
