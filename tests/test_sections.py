"""Tests for listing section validation and description assembly."""

from textmod.scoring.models import DescriptionSection
from textmod.scoring.sections import (
    SECTION_LIMITS,
    build_full_description,
    validate_all_sections,
    validate_section,
)

PARAGRAPH = (
    "Je réalise la conception complète de votre logo et de votre charte graphique, "
    "avec plusieurs propositions et un accompagnement attentif à chaque étape du projet. "
)


def _fields(**overrides):
    fields = {
        "intro": "",
        "service": PARAGRAPH * 8,
        "deliverables": "Un logo vectoriel, une charte graphique et les fichiers sources.",
        "requirements": "Votre secteur d'activité, vos couleurs préférées et vos concurrents.",
        "timing": "Première proposition sous cinq jours, deux révisions comprises.",
        "exclusions": "L'impression des supports et la création du site web ne sont pas incluses.",
    }
    fields.update(overrides)
    return fields


# --- Limits ---


def test_section_limits():
    assert SECTION_LIMITS[DescriptionSection.SERVICE] == (1000, 10000)
    assert SECTION_LIMITS[DescriptionSection.INTRO] == (50, 5000)


def test_intro_may_be_empty():
    assert validate_section("intro", "").is_valid


def test_other_sections_are_required():
    result = validate_section("service", "  ")
    assert not result.is_valid
    assert result.error == "La section Description du service est obligatoire"


def test_too_short():
    result = validate_section(DescriptionSection.DELIVERABLES, "Un logo.")
    assert not result.is_valid
    assert "au moins 50 caractères (actuellement 8)" in result.error


def test_too_long():
    result = validate_section("timing", "a" * 5001)
    assert not result.is_valid
    assert "ne doit pas dépasser 5000 caractères" in result.error


def test_inappropriate_content_reports_categories():
    content = "casino poker roulette jackpot et encore plus de casino chaque soir pour vous"
    result = validate_section("deliverables", content)
    assert not result.is_valid
    assert result.error.endswith("contient du contenu inapproprié (catégories: gambling)")


def test_valid_section():
    result = validate_section("deliverables", _fields()["deliverables"])
    assert result.is_valid
    assert result.error is None


# --- All sections ---


def test_all_sections_valid():
    assert validate_all_sections(_fields()).is_valid


def test_first_failure_is_returned():
    result = validate_all_sections(_fields(timing="", exclusions=""))
    assert not result.is_valid
    assert result.error == "La section Délais et révisions est obligatoire"


def test_enum_keys_are_accepted():
    fields = {DescriptionSection(k): v for k, v in _fields().items()}
    assert validate_all_sections(fields).is_valid


# --- Full description ---


def test_full_description_is_sanitized_and_ordered():
    text = build_full_description(_fields(intro="<b>Bonjour</b><script>alert(1)</script>"))
    assert text.startswith("Introduction :\n&lt;b&gt;Bonjour&lt;/b&gt;\n\n")
    assert "alert" not in text
    assert text.index("Description du service") < text.index("Ce qui n'est pas inclus")
