"""Error taxonomy for the moderation engine.

None of these reach end users: the engine absorbs them, logs them, and
fails open. ``DictionaryError`` is the exception, raised at load time.
"""

from __future__ import annotations


class ModerationError(Exception):
    """Base class for every error the engine records."""


class PatternCompilationError(ModerationError):
    """A dictionary word, alias or table pattern is not a valid regex."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class NormalizationStepError(ModerationError):
    """One normalization step failed; the previous step's output is kept."""

    def __init__(self, step: str, reason: str) -> None:
        super().__init__(f"Normalization step '{step}' failed: {reason}")
        self.step = step


class EntryEvaluationError(ModerationError):
    """Evaluating one dictionary entry raised unexpectedly."""

    def __init__(self, word: str, reason: str) -> None:
        super().__init__(f"Entry {word!r} could not be evaluated: {reason}")
        self.word = word


class ErrorBudgetExceeded(ModerationError):
    """Too many errors in a single resolution; the message passes unmoderated."""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"{count} errors during resolution (limit {limit})")
        self.count = count
        self.limit = limit


class DictionaryError(ModerationError):
    """A dictionary or scorer table file is malformed."""
