"""Data models for the forbidden-word dictionary."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional


class Severity(Enum):
    """How serious a matched term is. Ordered: LOW < MEDIUM < HIGH."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other: Severity) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: Severity) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: Severity) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: Severity) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {Severity.LOW: 1, Severity.MEDIUM: 2, Severity.HIGH: 3}


class Action(Enum):
    """What the caller should do with a message that matched."""

    BLOCK = "block"
    WARN = "warn"
    CENSOR = "censor"
    NOTIFY_MOD = "notify_mod"

    @property
    def priority(self) -> int:
        return _ACTION_PRIORITY[self]

    @classmethod
    def highest(cls, actions: Iterable[Action]) -> Optional[Action]:
        """Pick the action that wins: block > notify_mod > warn > censor."""
        ranked = sorted(set(actions), key=lambda a: a.priority, reverse=True)
        return ranked[0] if ranked else None


_ACTION_PRIORITY = {
    Action.BLOCK: 4,
    Action.NOTIFY_MOD: 3,
    Action.WARN: 2,
    Action.CENSOR: 1,
}

_DEFAULT_ACTIONS = {
    Severity.HIGH: Action.BLOCK,
    Severity.MEDIUM: Action.CENSOR,
    Severity.LOW: Action.WARN,
}


@dataclass(frozen=True)
class ForbiddenWordEntry:
    """One banned term with its variants, exceptions and handling policy."""

    word: str
    severity: Severity
    aliases: tuple[str, ...] = ()
    context_exceptions: tuple[str, ...] = ()
    is_regex: bool = False
    action: Optional[Action] = None
    whole_word_only: bool = True
    label: Optional[str] = None  # Display name for regex entries (e.g. "numéro de téléphone")

    @property
    def display_name(self) -> str:
        return self.label or self.word

    @property
    def effective_action(self) -> Action:
        """The declared action, or the one derived from severity."""
        return self.action or _DEFAULT_ACTIONS[self.severity]

    @property
    def patterns(self) -> tuple[str, ...]:
        """Main word first, then aliases, in evaluation order."""
        return (self.word, *self.aliases)


@dataclass(frozen=True)
class Dictionary:
    """An ordered, immutable collection of forbidden-word entries."""

    name: str
    entries: tuple[ForbiddenWordEntry, ...] = field(default_factory=tuple)
    version: str = "1.0.0"

    def __iter__(self) -> Iterator[ForbiddenWordEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
