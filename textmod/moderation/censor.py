"""Mask forbidden terms in place.

All spans are collected against the original message first and applied in a
single pass, so each masked span keeps its original length and censoring an
already-censored message changes nothing.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from textmod.dictionary import Dictionary, ForbiddenWordEntry, default_dictionary
from textmod.dictionary.models import Severity
from textmod.matching.context import in_allowed_context, is_quote_or_report
from textmod.matching.matcher import boundary_regex, compile_pattern, flexible_regex
from textmod.text.normalizer import NormalizedText, normalize, normalize_with_map

logger = logging.getLogger(__name__)

Span = tuple[int, int]

PLURAL_SUFFIXES = ("", "s", "es")


def _regex_spans(source: str, message: str) -> list[Span]:
    return [m.span() for m in compile_pattern(source).finditer(message) if m.end() > m.start()]


def _normalized_spans(word: str, mapped: NormalizedText, whole_word: bool) -> list[Span]:
    target = normalize(word)
    if not target:
        return []
    text = mapped.text
    spans: list[Span] = []
    start = text.find(target)
    while start != -1:
        end = start + len(target)
        if not whole_word:
            spans.append(mapped.source_span(start, end))
        elif start == 0 or text[start - 1] == " ":
            # Same plural allowance as the matcher: the suffix is masked too.
            for suffix in PLURAL_SUFFIXES:
                stop = end + len(suffix)
                if text.startswith(suffix, end) and (stop == len(text) or text[stop] == " "):
                    spans.append(mapped.source_span(start, stop))
                    end = stop
                    break
        start = text.find(target, end)
    return spans


def _entry_spans(entry: ForbiddenWordEntry, message: str, mapped: NormalizedText) -> list[Span]:
    spans: list[Span] = []

    literals = entry.aliases
    if entry.is_regex:
        try:
            spans.extend(_regex_spans(entry.word, message))
        except re.error as e:
            logger.warning("Invalid regex for entry %r: %s", entry.display_name, e)
    else:
        literals = entry.patterns

    for literal in literals:
        try:
            spans.extend(_regex_spans(boundary_regex(literal), message))
            spans.extend(_regex_spans(flexible_regex(literal), message))
        except re.error as e:
            logger.warning("Invalid pattern %r for entry %r: %s", literal, entry.display_name, e)
        spans.extend(_normalized_spans(literal, mapped, entry.whole_word_only))

    return spans


def _apply_mask(message: str, spans: list[Span], mask_char: str) -> str:
    chars = list(message)
    for start, end in spans:
        for i in range(start, end):
            if not chars[i].isspace():
                chars[i] = mask_char
    return "".join(chars)


def censor_message(message: str, dictionary: Optional[Dictionary] = None, mask_char: str = "*") -> str:
    """Replace every forbidden term in *message* with *mask_char*, keeping length."""
    if not message:
        return message

    dictionary = dictionary if dictionary is not None else default_dictionary()
    reporting = is_quote_or_report(message)
    mapped = normalize_with_map(message)

    spans: list[Span] = []
    for entry in dictionary:
        try:
            if reporting and entry.severity is Severity.LOW:
                continue
            if entry.context_exceptions and in_allowed_context(message, entry.context_exceptions):
                continue
            spans.extend(_entry_spans(entry, message, mapped))
        except Exception:
            logger.exception("Could not censor entry %r", entry.display_name)

    return _apply_mask(message, spans, mask_char)
