"""Tests for allow-phrase context checks and quote/report detection."""

from textmod.matching.context import in_allowed_context, is_quote_or_report


# --- Allowed context ---


def test_allow_phrase_present():
    assert in_allowed_context("Je cherche une race de chien calme", ["race de chien"])


def test_allow_phrase_is_case_and_accent_insensitive():
    assert in_allowed_context("RDV chez le PEDIATRE demain", ["pédiatre"])


def test_no_allow_phrase():
    assert not in_allowed_context("t'es qu'un pd", ["pédiatre", "pédiatrie"])
    assert not in_allowed_context("texte", [])
    assert not in_allowed_context("", ["texte"])


# --- Quotes ---


def test_double_quotes():
    assert is_quote_or_report('il a écrit "connard" dans le chat')
    assert is_quote_or_report('Il a dit "connard"')


def test_typographic_quotes():
    assert is_quote_or_report("Il m'a répondu « dégage »")
    assert is_quote_or_report("Il m'a répondu “dégage”")


def test_single_quotes_at_word_edges():
    assert is_quote_or_report("Il répond 'dégage' à chaque fois")


def test_elisions_are_not_quotes():
    assert not is_quote_or_report("C'est l'heure d'y aller")
    assert not is_quote_or_report("Bonjour, ça va ?")


# --- Reporting phrases ---


def test_reporting_phrases():
    assert is_quote_or_report("il m'a insulté hier soir")
    assert is_quote_or_report("Elle m’a dit des horreurs")
    assert is_quote_or_report("je signale ce vendeur")
    assert is_quote_or_report("d'après lui c'est normal")


def test_broken_pattern_is_skipped():
    assert is_quote_or_report("hello", patterns=("([", r"hel+o"))
    assert not is_quote_or_report("bonjour", patterns=("([",))
