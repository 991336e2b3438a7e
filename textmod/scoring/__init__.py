"""Heuristic scoring of long-form listing text, and listing section checks."""

from textmod.scoring.models import (
    Category,
    DescriptionSection,
    InappropriateContentResult,
    ScorerTables,
    SectionValidation,
)
from textmod.scoring.scorer import detect_inappropriate_content
from textmod.scoring.sections import (
    SECTION_LIMITS,
    build_full_description,
    validate_all_sections,
    validate_section,
)
from textmod.scoring.tables import default_tables, load_scorer_tables

__all__ = [
    "Category",
    "DescriptionSection",
    "InappropriateContentResult",
    "SECTION_LIMITS",
    "ScorerTables",
    "SectionValidation",
    "build_full_description",
    "default_tables",
    "detect_inappropriate_content",
    "load_scorer_tables",
    "validate_all_sections",
    "validate_section",
]
