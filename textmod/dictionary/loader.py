"""Load and check forbidden-word dictionaries stored as YAML.

File layout::

    name: marketplace-fr
    version: 2.1.0
    entries:
      - word: connard
        severity: high
        aliases: [conard, connnard]
        action: block
      - word: '\\b0[1-9]([ .-]?[0-9]{2}){4}\\b'
        severity: high
        regex: true
        action: notify_mod
"""

from __future__ import annotations

import re
from pathlib import Path

import yaml

from textmod.dictionary.models import Action, Dictionary, ForbiddenWordEntry, Severity
from textmod.errors import DictionaryError

VALID_SEVERITIES = {s.value for s in Severity}
VALID_ACTIONS = {a.value for a in Action}
KNOWN_ENTRY_FIELDS = {
    "word",
    "label",
    "severity",
    "aliases",
    "context_exceptions",
    "regex",
    "action",
    "whole_word_only",
}


def load_dictionary(path: str | Path) -> Dictionary:
    """Load a dictionary from a YAML file.

    Raises:
        DictionaryError: if the file is missing, unparsable, or structurally invalid.
    """
    path = Path(path)
    if not path.exists():
        raise DictionaryError(f"Dictionary file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DictionaryError(f"Invalid YAML in {path}: {e}") from e

    return dictionary_from_dict(data, source=str(path))


def dictionary_from_dict(data: dict, source: str = "<memory>") -> Dictionary:
    """Build a Dictionary from already-parsed YAML/JSON data."""
    issues = check_dictionary_data(data)
    if issues:
        raise DictionaryError(f"Invalid dictionary {source}: " + "; ".join(issues))

    entries = []
    for raw in data.get("entries", []):
        action = raw.get("action")
        entries.append(
            ForbiddenWordEntry(
                word=raw["word"],
                severity=Severity(raw["severity"]),
                aliases=tuple(raw.get("aliases") or ()),
                context_exceptions=tuple(raw.get("context_exceptions") or ()),
                is_regex=bool(raw.get("regex", False)),
                action=Action(action) if action else None,
                whole_word_only=bool(raw.get("whole_word_only", True)),
                label=raw.get("label"),
            )
        )

    return Dictionary(
        name=data.get("name", "unnamed"),
        version=str(data.get("version", "1.0.0")),
        entries=tuple(entries),
    )


def check_dictionary_data(data) -> list[str]:
    """Return structural issues in parsed dictionary data. Empty list means valid.

    Regex entries are test-compiled here so a broken pattern is reported at
    load time; at runtime the matcher still degrades gracefully.
    """
    if not isinstance(data, dict):
        return ["Top level must be a mapping"]

    entries = data.get("entries")
    if not isinstance(entries, list) or not entries:
        return ["Missing or empty 'entries' list"]

    issues: list[str] = []
    seen: set[str] = set()
    for i, entry in enumerate(entries):
        where = f"Entry {i + 1}"
        if not isinstance(entry, dict):
            issues.append(f"{where} must be a mapping")
            continue

        word = entry.get("word")
        if not isinstance(word, str) or not word.strip():
            issues.append(f"{where} missing 'word'")
            continue
        where = f"{where} ({word!r})"

        if word in seen:
            issues.append(f"{where} is a duplicate")
        seen.add(word)

        severity = entry.get("severity")
        if severity not in VALID_SEVERITIES:
            issues.append(f"{where} invalid severity {severity!r}. Must be one of: {sorted(VALID_SEVERITIES)}")

        action = entry.get("action")
        if action is not None and action not in VALID_ACTIONS:
            issues.append(f"{where} invalid action {action!r}. Must be one of: {sorted(VALID_ACTIONS)}")

        for list_field in ("aliases", "context_exceptions"):
            value = entry.get(list_field)
            if value is not None and (
                not isinstance(value, list) or not all(isinstance(v, str) and v for v in value)
            ):
                issues.append(f"{where} '{list_field}' must be a list of non-empty strings")

        unknown = set(entry) - KNOWN_ENTRY_FIELDS
        if unknown:
            issues.append(f"{where} unknown field(s): {', '.join(sorted(unknown))}")

        if entry.get("regex"):
            try:
                re.compile(word)
            except re.error as e:
                issues.append(f"{where} regex does not compile: {e}")

    return issues


def validate_dictionary_file(path: str | Path) -> list[str]:
    """Validate a dictionary YAML file. Returns a list of issues; empty means valid."""
    path = Path(path)
    if not path.exists():
        return [f"File not found: {path}"]

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return [f"Invalid YAML: {e}"]

    return check_dictionary_data(data)
