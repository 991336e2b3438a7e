"""Data models for chat-message moderation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from textmod.dictionary.models import Action, Severity


@dataclass(frozen=True)
class ModerationVerdict:
    """Result of scanning one message against a dictionary."""

    has_forbidden_content: bool
    matched_terms: tuple[str, ...] = ()
    severity: Optional[Severity] = None
    possible_quote_or_report: bool = False
    recommended_action: Optional[Action] = None
    error_count: int = 0

    @classmethod
    def clean(cls, possible_quote_or_report: bool = False, error_count: int = 0) -> ModerationVerdict:
        """The "no violation" verdict, also used as the fail-open default."""
        return cls(
            has_forbidden_content=False,
            possible_quote_or_report=possible_quote_or_report,
            error_count=error_count,
        )


@dataclass
class ValidationOptions:
    """Per-call knobs for ``validate_message``."""

    allow_empty: bool = False
    max_length: int = 5000
    min_length: int = 1
    censor_instead_of_block: bool = False
    allow_low_severity_words: bool = False
    allow_quoted_words: bool = False
    respect_recommended_actions: bool = True


@dataclass
class ValidationResult:
    """Outcome of validating a message before it is sent."""

    is_valid: bool
    original_text: str
    censored_text: str
    violations: list[str] = field(default_factory=list)
    matched_terms: tuple[str, ...] = ()
    severity: Optional[Severity] = None
    recommended_action: Optional[Action] = None
    possible_quote_or_report: bool = False
    should_notify_moderator: bool = False
    warning_text: Optional[str] = None

    @property
    def censored(self) -> bool:
        return self.censored_text != self.original_text
