"""Tests for the textmod command line."""

import logging
import tempfile

import pytest
import yaml
from click.testing import CliRunner

from textmod import __version__
from textmod.cli import main


def _write_yaml(data) -> str:
    """Write data to a temporary YAML file and return the path."""
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False, encoding="utf-8")
    yaml.dump(data, f, allow_unicode=True)
    f.close()
    return f.name


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def small_dictionary():
    return _write_yaml(
        {
            "name": "small",
            "version": "0.1.0",
            "entries": [
                {"word": "connard", "severity": "high"},
                {"word": "zut", "severity": "low"},
            ],
        }
    )


# --- check ---


def test_check_valid(runner):
    result = runner.invoke(main, ["check", "merci beaucoup"])
    assert result.exit_code == 0
    assert "VALID" in result.output


def test_check_blocked(runner):
    result = runner.invoke(main, ["check", "connard"])
    assert result.exit_code == 1
    assert "BLOCKED" in result.output
    assert "connard" in result.output


def test_check_legacy_censor(runner):
    result = runner.invoke(main, ["check", "--legacy", "--censor-instead-of-block", "quel connard ce type"])
    assert result.exit_code == 0
    assert "quel ******* ce type" in result.output


# --- censor ---


def test_censor(runner):
    result = runner.invoke(main, ["censor", "Quel connard, vraiment"])
    assert result.exit_code == 0
    assert "Quel *******, vraiment" in result.output


def test_censor_custom_mask(runner, small_dictionary):
    result = runner.invoke(main, ["censor", "-d", small_dictionary, "--mask", "#", "connard"])
    assert "#######" in result.output


# --- score ---


def test_score_explicit_phrase(runner):
    result = runner.invoke(main, ["score", "Je propose des services sexuels"])
    assert result.exit_code == 0
    assert "INAPPROPRIATE" in result.output
    assert "Score: 0.90" in result.output


def test_score_from_file(runner):
    with tempfile.NamedTemporaryFile("w", suffix=".txt", delete=False, encoding="utf-8") as f:
        f.write("Création de logo et de charte graphique pour votre entreprise.")
    result = runner.invoke(main, ["score", "--file", f.name])
    assert result.exit_code == 0
    assert "OK" in result.output


def test_score_requires_text(runner):
    result = runner.invoke(main, ["score"])
    assert result.exit_code == 2


# --- dictionary ---


def test_dictionary_list_default(runner):
    result = runner.invoke(main, ["dictionary", "list"])
    assert result.exit_code == 0
    assert "marketplace-fr" in result.output
    assert "connard" in result.output


def test_dictionary_list_filtered(runner, small_dictionary):
    result = runner.invoke(main, ["dictionary", "list", "-d", small_dictionary, "--severity", "low"])
    assert result.exit_code == 0
    assert "zut" in result.output
    assert "connard" not in result.output


def test_dictionary_list_invalid_file(runner):
    path = _write_yaml({"entries": []})
    result = runner.invoke(main, ["dictionary", "list", "-d", path])
    assert result.exit_code == 1


def test_dictionary_validate(runner, small_dictionary):
    result = runner.invoke(main, ["dictionary", "validate", small_dictionary])
    assert result.exit_code == 0
    assert "Valid!" in result.output


def test_dictionary_validate_invalid(runner):
    path = _write_yaml({"entries": [{"word": "x", "severity": "extreme"}]})
    result = runner.invoke(main, ["dictionary", "validate", path])
    assert result.exit_code == 1
    assert "Invalid dictionary" in result.output


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert __version__ in result.output
