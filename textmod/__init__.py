"""textmod — lexical moderation engine for marketplace chat and listings.

Public entry points:
- ``check_forbidden_content`` / ``censor_message`` / ``validate_message`` for chat
- ``detect_inappropriate_content`` / ``validate_section`` for long-form listings
"""

__version__ = "0.3.0"

from textmod.dictionary import Dictionary, ForbiddenWordEntry, default_dictionary, load_dictionary
from textmod.dictionary.models import Action, Severity
from textmod.moderation.censor import censor_message
from textmod.moderation.models import ModerationVerdict, ValidationOptions, ValidationResult
from textmod.moderation.moderator import ContentModerator
from textmod.moderation.resolver import check_forbidden_content
from textmod.moderation.validator import is_message_valid, validate_message
from textmod.scoring.models import Category, InappropriateContentResult
from textmod.scoring.scorer import detect_inappropriate_content
from textmod.scoring.sections import validate_all_sections, validate_section
from textmod.text.normalizer import normalize

__all__ = [
    "Action",
    "Category",
    "ContentModerator",
    "Dictionary",
    "ForbiddenWordEntry",
    "InappropriateContentResult",
    "ModerationVerdict",
    "Severity",
    "ValidationOptions",
    "ValidationResult",
    "censor_message",
    "check_forbidden_content",
    "default_dictionary",
    "detect_inappropriate_content",
    "is_message_valid",
    "load_dictionary",
    "normalize",
    "validate_all_sections",
    "validate_message",
    "validate_section",
]
