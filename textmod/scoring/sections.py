"""Validation and assembly of the sections of a service listing."""

from __future__ import annotations

from typing import Mapping, Optional, Union

from textmod.scoring.models import DescriptionSection, ScorerTables, SectionValidation
from textmod.scoring.scorer import detect_inappropriate_content
from textmod.text.sanitize import sanitize_content

SECTION_LIMITS: dict[DescriptionSection, tuple[int, int]] = {
    DescriptionSection.INTRO: (50, 5000),
    DescriptionSection.SERVICE: (1000, 10000),
    DescriptionSection.DELIVERABLES: (50, 5000),
    DescriptionSection.REQUIREMENTS: (50, 5000),
    DescriptionSection.TIMING: (50, 5000),
    DescriptionSection.EXCLUSIONS: (50, 5000),
}

# Only the intro may be left empty
OPTIONAL_SECTIONS = {DescriptionSection.INTRO}

SECTION_TITLES: dict[DescriptionSection, str] = {
    DescriptionSection.INTRO: "Introduction",
    DescriptionSection.SERVICE: "Description du service",
    DescriptionSection.DELIVERABLES: "Ce que vous obtiendrez",
    DescriptionSection.REQUIREMENTS: "Ce dont j'ai besoin de vous",
    DescriptionSection.TIMING: "Délais et révisions",
    DescriptionSection.EXCLUSIONS: "Ce qui n'est pas inclus",
}

SECTION_HEADINGS: dict[DescriptionSection, str] = {
    DescriptionSection.INTRO: "Introduction :",
    DescriptionSection.SERVICE: "📝 Description du service :",
    DescriptionSection.DELIVERABLES: "🎯 Ce que vous obtiendrez :",
    DescriptionSection.REQUIREMENTS: "🛠️ Ce dont j'ai besoin de vous :",
    DescriptionSection.TIMING: "⏱️ Délais et révisions :",
    DescriptionSection.EXCLUSIONS: "❌ Ce qui n'est pas inclus :",
}

SectionKey = Union[DescriptionSection, str]


def _as_section(section: SectionKey) -> DescriptionSection:
    return section if isinstance(section, DescriptionSection) else DescriptionSection(section)


def _field(fields: Mapping[SectionKey, str], section: DescriptionSection) -> str:
    value = fields.get(section)
    if value is None:
        value = fields.get(section.value)
    return value or ""


def validate_section(
    section: SectionKey, content: str, tables: Optional[ScorerTables] = None
) -> SectionValidation:
    """Check one section's length, then score its content."""
    section = _as_section(section)
    minimum, maximum = SECTION_LIMITS[section]
    title = SECTION_TITLES[section]
    length = len((content or "").strip())

    if length == 0:
        if section in OPTIONAL_SECTIONS:
            return SectionValidation.ok()
        return SectionValidation.failed(f"La section {title} est obligatoire")

    if length < minimum:
        return SectionValidation.failed(
            f"La section {title} doit contenir au moins {minimum} caractères (actuellement {length})"
        )

    if length > maximum:
        return SectionValidation.failed(
            f"La section {title} ne doit pas dépasser {maximum} caractères (actuellement {length})"
        )

    verdict = detect_inappropriate_content(content, field=section, tables=tables)
    if verdict.is_inappropriate:
        message = f"La section {title} contient du contenu inapproprié"
        if verdict.categories:
            names = sorted(c.value for c in verdict.categories)
            message += f" (catégories: {', '.join(names)})"
        return SectionValidation.failed(message)

    return SectionValidation.ok()


def validate_all_sections(
    fields: Mapping[SectionKey, str], tables: Optional[ScorerTables] = None
) -> SectionValidation:
    """Validate every section in display order; stop at the first failure."""
    for section in SECTION_LIMITS:
        result = validate_section(section, _field(fields, section), tables)
        if not result.is_valid:
            return result
    return SectionValidation.ok()


def build_full_description(fields: Mapping[SectionKey, str]) -> str:
    """Assemble the published description from sanitized sections."""
    blocks = [
        f"{SECTION_HEADINGS[section]}\n{sanitize_content(_field(fields, section))}"
        for section in SECTION_LIMITS
    ]
    return "\n\n".join(blocks)
