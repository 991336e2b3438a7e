"""Data models for long-form content scoring."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class Category(Enum):
    SPAM = "spam"
    DRUGS = "drugs"
    ADULT = "adult"
    GAMBLING = "gambling"
    MALWARE = "malware"
    HATE_SPEECH = "hateSpeech"
    SCAM = "scam"
    ILLEGAL = "illegal"
    VIOLENCE = "violence"


@dataclass
class InappropriateContentResult:
    """Verdict of the heuristic scorer for one piece of long-form text.

    ``signals`` lists, in order, each heuristic that contributed to the
    score, so a moderator can see why a listing was flagged.
    """

    is_inappropriate: bool = False
    categories: set[Category] = field(default_factory=set)
    matches: list[str] = field(default_factory=list)
    score: float = 0.0
    obfuscation_detected: bool = False
    signals: list[str] = field(default_factory=list)

    def add_match(self, label: str, category: Optional[Category] = None) -> None:
        if label not in self.matches:
            self.matches.append(label)
        if category is not None:
            self.categories.add(category)


@dataclass(frozen=True)
class LeetspeakPattern:
    label: str
    category: Category
    pattern: str


@dataclass(frozen=True)
class ScorerTables:
    """Immutable keyword tables driving the scorer. Keywords are stored folded."""

    categories: Mapping[Category, tuple[str, ...]]
    explicit_phrases: Mapping[Category, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    ambiguous: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    legitimate_terms: tuple[str, ...] = ()
    suspicion_keywords: tuple[str, ...] = ()
    fragmentation_targets: tuple[str, ...] = ()
    sale_verbs: tuple[str, ...] = ()
    substances: tuple[str, ...] = ()
    contact_verbs: tuple[str, ...] = ()
    email_providers: tuple[str, ...] = ()
    leetspeak: tuple[LeetspeakPattern, ...] = ()


class DescriptionSection(Enum):
    """Sections of a service listing, in display order."""

    INTRO = "intro"
    SERVICE = "service"
    DELIVERABLES = "deliverables"
    REQUIREMENTS = "requirements"
    TIMING = "timing"
    EXCLUSIONS = "exclusions"


@dataclass(frozen=True)
class SectionValidation:
    is_valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> SectionValidation:
        return cls(is_valid=True)

    @classmethod
    def failed(cls, error: str) -> SectionValidation:
        return cls(is_valid=False, error=error)
