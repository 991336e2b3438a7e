"""Scan a message against a dictionary and resolve severity and action.

Each entry is evaluated on its own and yields an ``EntryOutcome``; errors
are collected in an ``ErrorBudget`` instead of aborting the scan. Once the
budget is spent the message is let through: moderation fails open.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from textmod.dictionary import Dictionary, ForbiddenWordEntry, default_dictionary
from textmod.dictionary.models import Action, Severity
from textmod.errors import EntryEvaluationError, ErrorBudgetExceeded, ModerationError
from textmod.matching.context import in_allowed_context, is_quote_or_report
from textmod.matching.matcher import match_pattern
from textmod.moderation.models import ModerationVerdict
from textmod.text.normalizer import normalize

logger = logging.getLogger(__name__)

ERROR_THRESHOLD = 5
SHORT_MESSAGE_LENGTH = 20


class ErrorBudget:
    """Errors recorded during one resolution, with a hard limit."""

    def __init__(self, limit: int = ERROR_THRESHOLD) -> None:
        self.limit = limit
        self.errors: list[ModerationError] = []

    @property
    def count(self) -> int:
        return len(self.errors)

    @property
    def exhausted(self) -> bool:
        return self.count >= self.limit

    def record(self, error: ModerationError) -> None:
        self.errors.append(error)
        logger.error("%s", error)


@dataclass(frozen=True)
class EntryOutcome:
    """Result of evaluating one entry: whether it matched and what went wrong."""

    entry: ForbiddenWordEntry
    matched: bool
    errors: tuple[ModerationError, ...] = field(default_factory=tuple)


def evaluate_entry(entry: ForbiddenWordEntry, message: str, normalized: str) -> EntryOutcome:
    """Match the entry's main word, then its aliases; first hit wins."""
    errors: list[ModerationError] = []

    for position, pattern in enumerate(entry.patterns):
        result = match_pattern(
            message,
            pattern,
            is_regex=entry.is_regex and position == 0,
            whole_word=entry.whole_word_only,
            normalized=normalized,
        )
        if result.error:
            errors.append(result.error)
        if result.matched:
            return EntryOutcome(entry, True, tuple(errors))

    return EntryOutcome(entry, False, tuple(errors))


def _is_suppressed(entry: ForbiddenWordEntry, message: str, quote_or_report: bool) -> bool:
    if entry.context_exceptions and in_allowed_context(message, entry.context_exceptions):
        return True
    if quote_or_report and entry.severity is Severity.LOW:
        return True
    # A lone low-severity word in a very short message is too ambiguous to act on
    if (
        len(message.strip()) < SHORT_MESSAGE_LENGTH
        and entry.severity is Severity.LOW
        and entry.action in (None, Action.WARN)
    ):
        return True
    return False


def _resolve(message: str, dictionary: Dictionary) -> ModerationVerdict:
    normalized = normalize(message)
    quote_or_report = is_quote_or_report(message)
    budget = ErrorBudget()

    matched: list[ForbiddenWordEntry] = []
    for entry in dictionary:
        try:
            outcome = evaluate_entry(entry, message, normalized)
            for error in outcome.errors:
                budget.record(error)
            if outcome.matched and not _is_suppressed(entry, message, quote_or_report):
                matched.append(entry)
        except Exception as e:
            budget.record(EntryEvaluationError(entry.word, str(e)))

        if budget.exhausted:
            logger.warning("%s; message allowed unmoderated", ErrorBudgetExceeded(budget.count, budget.limit))
            return ModerationVerdict.clean(quote_or_report, error_count=budget.count)

    if not matched:
        return ModerationVerdict.clean(quote_or_report, error_count=budget.count)

    terms: list[str] = []
    for entry in matched:
        if entry.display_name not in terms:
            terms.append(entry.display_name)

    return ModerationVerdict(
        has_forbidden_content=True,
        matched_terms=tuple(terms),
        severity=max(entry.severity for entry in matched),
        possible_quote_or_report=quote_or_report,
        recommended_action=Action.highest(entry.effective_action for entry in matched),
        error_count=budget.count,
    )


def check_forbidden_content(message: str, dictionary: Optional[Dictionary] = None) -> ModerationVerdict:
    """Scan *message* and return a verdict. Never raises.

    Args:
        message: Raw user text.
        dictionary: Entries to scan for; defaults to the packaged table.
    """
    if not message:
        return ModerationVerdict.clean()

    try:
        return _resolve(message, dictionary if dictionary is not None else default_dictionary())
    except Exception:
        logger.exception("Forbidden-content check failed; message allowed")
        return ModerationVerdict.clean()
