"""Forbidden-word dictionary: models, YAML loading, and the packaged default table."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from textmod.dictionary.loader import dictionary_from_dict, load_dictionary, validate_dictionary_file
from textmod.dictionary.models import Action, Dictionary, ForbiddenWordEntry, Severity

DEFAULT_DICTIONARY_PATH = Path(__file__).parent / "data" / "forbidden_words.yaml"


@lru_cache(maxsize=1)
def default_dictionary() -> Dictionary:
    """The canonical marketplace dictionary, loaded once per process."""
    return load_dictionary(DEFAULT_DICTIONARY_PATH)


__all__ = [
    "Action",
    "DEFAULT_DICTIONARY_PATH",
    "Dictionary",
    "ForbiddenWordEntry",
    "Severity",
    "default_dictionary",
    "dictionary_from_dict",
    "load_dictionary",
    "validate_dictionary_file",
]
