"""Tests for HTML sanitization of listing sections."""

from textmod.text.sanitize import sanitize_content


def test_script_block_removed():
    assert sanitize_content("<script>alert(1)</script>Bonjour") == "Bonjour"


def test_unclosed_script_tag_removed():
    assert sanitize_content("<script src=x>Bonjour") == "Bonjour"


def test_javascript_href_removed():
    assert sanitize_content('<a href="javascript:alert(1)">x</a>') == "&lt;a&gt;x&lt;/a&gt;"


def test_event_handler_removed():
    assert sanitize_content('<img src=x onerror="alert(1)">') == "&lt;img src=x&gt;"


def test_special_characters_escaped():
    assert sanitize_content("Tom & \"Jerry\" l'ami") == "Tom &amp; &quot;Jerry&quot; l&#x27;ami"


def test_empty():
    assert sanitize_content("") == ""
    assert sanitize_content(None) == ""
