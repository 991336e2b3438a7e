"""Content moderator bound to one dictionary.

Convenience facade for callers that moderate many messages against the same
(custom or default) dictionary without passing it on every call.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from textmod.dictionary import Dictionary, default_dictionary, load_dictionary
from textmod.moderation.censor import censor_message
from textmod.moderation.models import ModerationVerdict, ValidationOptions, ValidationResult
from textmod.moderation.resolver import check_forbidden_content
from textmod.moderation.validator import validate_message


class ContentModerator:
    """Stateless moderator holding an immutable dictionary."""

    def __init__(self, dictionary: Optional[Dictionary] = None) -> None:
        self.dictionary = dictionary if dictionary is not None else default_dictionary()

    @classmethod
    def from_file(cls, path: str | Path) -> ContentModerator:
        """Build a moderator from a dictionary YAML file."""
        return cls(load_dictionary(path))

    # -- public API ----------------------------------------------------------

    def check(self, message: str) -> ModerationVerdict:
        return check_forbidden_content(message, self.dictionary)

    def censor(self, message: str, mask_char: str = "*") -> str:
        return censor_message(message, self.dictionary, mask_char)

    def validate(self, message: str, options: Optional[ValidationOptions] = None) -> ValidationResult:
        return validate_message(message, options, dictionary=self.dictionary)

    def is_valid(self, message: str, options: Optional[ValidationOptions] = None) -> bool:
        return self.validate(message, options).is_valid
