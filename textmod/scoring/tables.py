"""Load the scorer's keyword tables from YAML."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

import yaml

from textmod.errors import DictionaryError
from textmod.scoring.models import Category, LeetspeakPattern, ScorerTables
from textmod.text.normalizer import fold_text

DEFAULT_TABLES_PATH = Path(__file__).parent / "data" / "tables.yaml"

VALID_CATEGORIES = {c.value for c in Category}
LIST_FIELDS = (
    "legitimate_terms",
    "suspicion_keywords",
    "fragmentation_targets",
    "sale_verbs",
    "substances",
    "contact_verbs",
    "email_providers",
)


def _folded(words) -> tuple[str, ...]:
    return tuple(fold_text(w) for w in words or ())


def check_tables_data(data) -> list[str]:
    """Return structural issues in parsed table data. Empty list means valid."""
    if not isinstance(data, dict):
        return ["Top level must be a mapping"]

    issues: list[str] = []
    categories = data.get("categories")
    if not isinstance(categories, dict) or not categories:
        issues.append("Missing or empty 'categories' mapping")
        categories = {}

    for key in ("categories", "explicit_phrases"):
        for name in data.get(key) or {}:
            if name not in VALID_CATEGORIES:
                issues.append(f"Unknown category '{name}' in '{key}'. Must be one of: {sorted(VALID_CATEGORIES)}")

    for list_field in LIST_FIELDS:
        value = data.get(list_field, [])
        if not isinstance(value, list) or not all(isinstance(v, str) and v for v in value):
            issues.append(f"'{list_field}' must be a list of non-empty strings")

    ambiguous = data.get("ambiguous", {})
    if not isinstance(ambiguous, dict):
        issues.append("'ambiguous' must be a mapping of keyword to context terms")
    else:
        for word, contexts in ambiguous.items():
            if not isinstance(contexts, list) or not contexts:
                issues.append(f"Ambiguous keyword '{word}' needs a non-empty list of context terms")

    for i, entry in enumerate(data.get("leetspeak") or []):
        if not isinstance(entry, dict) or not {"label", "category", "pattern"} <= set(entry):
            issues.append(f"Leetspeak entry {i + 1} needs 'label', 'category' and 'pattern'")
            continue
        if entry["category"] not in VALID_CATEGORIES:
            issues.append(f"Leetspeak entry {i + 1} has unknown category '{entry['category']}'")
        try:
            re.compile(entry["pattern"])
        except re.error as e:
            issues.append(f"Leetspeak entry {i + 1} regex does not compile: {e}")

    return issues


def tables_from_dict(data: dict, source: str = "<memory>") -> ScorerTables:
    issues = check_tables_data(data)
    if issues:
        raise DictionaryError(f"Invalid scorer tables {source}: " + "; ".join(issues))

    # Read-only views: the default tables are cached and shared process-wide.
    return ScorerTables(
        categories=MappingProxyType(
            {Category(name): _folded(words) for name, words in data["categories"].items()}
        ),
        explicit_phrases=MappingProxyType(
            {Category(name): _folded(phrases) for name, phrases in (data.get("explicit_phrases") or {}).items()}
        ),
        ambiguous=MappingProxyType(
            {fold_text(word): _folded(ctx) for word, ctx in (data.get("ambiguous") or {}).items()}
        ),
        leetspeak=tuple(
            LeetspeakPattern(label=e["label"], category=Category(e["category"]), pattern=e["pattern"])
            for e in data.get("leetspeak") or []
        ),
        **{name: _folded(data.get(name)) for name in LIST_FIELDS},
    )


def load_scorer_tables(path: str | Path) -> ScorerTables:
    """Load scorer tables from a YAML file.

    Raises:
        DictionaryError: if the file is missing, unparsable, or structurally invalid.
    """
    path = Path(path)
    if not path.exists():
        raise DictionaryError(f"Scorer tables not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DictionaryError(f"Invalid YAML in {path}: {e}") from e

    return tables_from_dict(data, source=str(path))


@lru_cache(maxsize=1)
def default_tables() -> ScorerTables:
    """The packaged scorer tables, loaded once per process."""
    return load_scorer_tables(DEFAULT_TABLES_PATH)
