"""Chat-message moderation: resolution, censoring and validation."""

from textmod.moderation.censor import censor_message
from textmod.moderation.models import ModerationVerdict, ValidationOptions, ValidationResult
from textmod.moderation.moderator import ContentModerator
from textmod.moderation.resolver import ErrorBudget, check_forbidden_content
from textmod.moderation.validator import is_message_valid, validate_message

__all__ = [
    "ContentModerator",
    "ErrorBudget",
    "ModerationVerdict",
    "ValidationOptions",
    "ValidationResult",
    "censor_message",
    "check_forbidden_content",
    "is_message_valid",
    "validate_message",
]
