"""Tests for in-place censoring, including over- and under-masking cases."""

import pytest

from textmod.dictionary.models import Dictionary, ForbiddenWordEntry, Severity
from textmod.moderation.censor import censor_message


def _dictionary(*entries: ForbiddenWordEntry) -> Dictionary:
    return Dictionary(name="test", entries=tuple(entries))


# --- Basic masking ---


def test_plain_word_is_masked():
    assert censor_message("Quel connard, vraiment") == "Quel *******, vraiment"


def test_plural_is_masked_entirely():
    assert censor_message("Bande de connards") == "Bande de ********"


def test_obfuscated_word_masked_through_index_map():
    assert censor_message("Salut s@lope, ça va?") == "Salut ******, ça va?"
    assert censor_message("tu es un peu c0nn@rd non?") == "tu es un peu ******* non?"


def test_spaced_out_letters_are_masked():
    assert censor_message("espèce de p.u.t.e") == "espèce de *******"


def test_contact_details_are_masked():
    censored = censor_message("Contactez-moi au 0612345678 ou sur gmail")
    assert censored == "Contactez-moi au ********** ou sur *****"


def test_custom_mask_character():
    assert censor_message("connard", mask_char="#") == "#######"


def test_empty_message():
    assert censor_message("") == ""


# --- Length and idempotence ---


@pytest.mark.parametrize(
    "message",
    [
        "Quel connard, vraiment",
        "Salut s@lope, ça va?",
        "Contactez-moi au 06 12 34 56 78 ou sur gmail",
        "espèce de p.u.t.e et de c0nn@rd!",
        "merci beaucoup",
    ],
)
def test_censoring_preserves_length_and_is_idempotent(message):
    once = censor_message(message)
    assert len(once) == len(message)
    assert censor_message(once) == once


# --- Over-masking ---


def test_neighbouring_words_are_untouched():
    censored = censor_message("Ce connard de vendeur")
    assert censored.startswith("Ce ")
    assert censored.endswith(" de vendeur")


def test_longer_word_containing_a_short_entry_is_untouched():
    dictionary = _dictionary(ForbiddenWordEntry("pd", Severity.HIGH))
    assert censor_message("Il est pendant la pause", dictionary) == "Il est pendant la pause"


def test_context_exception_prevents_masking():
    assert censor_message("Mon pédiatre dit que le pd est parti") == "Mon pédiatre dit que le pd est parti"


def test_low_severity_not_masked_when_reporting():
    dictionary = _dictionary(
        ForbiddenWordEntry("zut", Severity.LOW),
        ForbiddenWordEntry("connard", Severity.HIGH),
    )
    censored = censor_message('il m\'a dit "zut connard"', dictionary)
    assert censored == 'il m\'a dit "zut *******"'


# --- Under-masking ---


def test_every_occurrence_is_masked():
    assert censor_message("connard, connard et c0nnard") == "*******, ******* et *******"


def test_obfuscated_span_keeps_its_exact_length():
    dictionary = _dictionary(ForbiddenWordEntry("salope", Severity.HIGH))
    assert censor_message("sal0pe!!", dictionary) == "******!!"


def test_invalid_regex_entry_is_skipped():
    dictionary = _dictionary(
        ForbiddenWordEntry("([0-9", Severity.HIGH, is_regex=True),
        ForbiddenWordEntry("connard", Severity.HIGH),
    )
    assert censor_message("quel connard", dictionary) == "quel *******"


def test_obfuscated_plural_is_masked():
    assert censor_message("bande de c0nn@rds") == "bande de ********"
    assert censor_message("quels bât@rds") == "quels *******"


def test_zero_width_character_inside_a_word_is_masked():
    assert censor_message("quel con\u200bnard") == "quel ********"


def test_alias_is_masked_through_the_index_map():
    dictionary = _dictionary(ForbiddenWordEntry("connard", Severity.HIGH, aliases=("konar",)))
    assert censor_message("espèce de k0nar va", dictionary) == "espèce de ***** va"


def test_numbers_are_left_alone():
    assert censor_message("Livraison le 19 mars, 82 places") == "Livraison le 19 mars, 82 places"
