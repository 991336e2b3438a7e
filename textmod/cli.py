"""textmod CLI — ad-hoc moderation checks for operators."""

import logging

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from textmod import __version__
from textmod.logging import configure_logging

console = Console()

_SEVERITY_STYLES = {"high": "red", "medium": "yellow", "low": "cyan"}


def _load(dictionary_path: str | None):
    from textmod.dictionary import default_dictionary, load_dictionary

    return load_dictionary(dictionary_path) if dictionary_path else default_dictionary()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Level of the JSON logs written to stderr",
)
def main(log_level: str):
    """textmod — moderation engine for marketplace chat and listings.

    Check, censor or validate chat messages against a forbidden-word
    dictionary, and score long-form listing text.
    """
    configure_logging(getattr(logging, log_level.upper()))


# ── Check ────────────────────────────────────────────────────────────


@main.command()
@click.argument("message")
@click.option("--dictionary", "-d", "dictionary_path", default=None, help="Dictionary YAML file")
@click.option("--legacy", is_flag=True, help="Dispatch on option flags instead of recommended actions")
@click.option("--censor-instead-of-block", is_flag=True, help="Legacy mode: censor rather than block")
@click.option("--allow-quoted", is_flag=True, help="Legacy mode: let quoted/reported words through")
@click.option("--allow-low", is_flag=True, help="Legacy mode: let low-severity words through")
def check(
    message: str,
    dictionary_path: str | None,
    legacy: bool,
    censor_instead_of_block: bool,
    allow_quoted: bool,
    allow_low: bool,
):
    """Validate a chat MESSAGE as the pre-send hook would."""
    from textmod.moderation.models import ValidationOptions
    from textmod.moderation.validator import validate_message

    options = ValidationOptions(
        respect_recommended_actions=not legacy,
        censor_instead_of_block=censor_instead_of_block,
        allow_quoted_words=allow_quoted,
        allow_low_severity_words=allow_low,
    )
    result = validate_message(message, options, dictionary=_load(dictionary_path))

    status = "[green]VALID[/]" if result.is_valid else "[red]BLOCKED[/]"
    lines = [f"Status: {status}"]
    if result.severity:
        style = _SEVERITY_STYLES[result.severity.value]
        lines.append(f"Severity: [{style}]{result.severity.value}[/]")
    if result.recommended_action:
        lines.append(f"Action: {result.recommended_action.value}")
    if result.matched_terms:
        lines.append(f"Matched: {escape(', '.join(result.matched_terms))}")
    if result.possible_quote_or_report:
        lines.append("Quote or report suspected")
    if result.censored:
        lines.append(f"Censored: {escape(result.censored_text)}")
    if result.should_notify_moderator:
        lines.append("[yellow]Moderator notification required[/]")
    if result.warning_text:
        lines.append(f"[yellow]{escape(result.warning_text)}[/]")
    for violation in result.violations:
        lines.append(f"[red]x[/] {escape(violation)}")

    console.print(Panel("\n".join(lines), title="Message check"))

    if not result.is_valid:
        raise SystemExit(1)


# ── Censor ───────────────────────────────────────────────────────────


@main.command()
@click.argument("message")
@click.option("--dictionary", "-d", "dictionary_path", default=None, help="Dictionary YAML file")
@click.option("--mask", default="*", help="Mask character")
def censor(message: str, dictionary_path: str | None, mask: str):
    """Print MESSAGE with forbidden terms masked."""
    from textmod.moderation.censor import censor_message

    console.print(censor_message(message, _load(dictionary_path), mask), markup=False, highlight=False)


# ── Score ────────────────────────────────────────────────────────────


@main.command()
@click.argument("text", required=False)
@click.option("--file", "-f", "file_path", type=click.Path(exists=True, dir_okay=False), help="Read text from a file")
@click.option(
    "--field",
    default=None,
    type=click.Choice(["intro", "service", "deliverables", "requirements", "timing", "exclusions"]),
    help="Listing section the text belongs to",
)
def score(text: str | None, file_path: str | None, field: str | None):
    """Score long-form TEXT (or --file) for inappropriate content."""
    from textmod.scoring.scorer import detect_inappropriate_content

    if file_path:
        with open(file_path, encoding="utf-8") as f:
            text = f.read()
    if not text:
        console.print("[red]Provide TEXT or --file.[/]")
        raise SystemExit(2)

    result = detect_inappropriate_content(text, field=field)

    status = "[red]INAPPROPRIATE[/]" if result.is_inappropriate else "[green]OK[/]"
    lines = [f"Status: {status}", f"Score: {result.score:.2f}"]
    if result.categories:
        lines.append(f"Categories: {', '.join(sorted(c.value for c in result.categories))}")
    if result.matches:
        lines.append(f"Matches: {escape(', '.join(result.matches))}")
    if result.obfuscation_detected:
        lines.append("[yellow]Obfuscation detected[/]")
    console.print(Panel("\n".join(lines), title="Content score"))

    if result.signals:
        console.print("\n[bold]Signals:[/]")
        for signal in result.signals:
            console.print(f"  - {signal}", markup=False)


# ── Dictionary ───────────────────────────────────────────────────────


@main.group()
def dictionary():
    """Inspect and validate forbidden-word dictionaries."""


@dictionary.command(name="list")
@click.option("--dictionary", "-d", "dictionary_path", default=None, help="Dictionary YAML file")
@click.option("--severity", "-s", default=None, type=click.Choice(["low", "medium", "high"]))
def list_entries(dictionary_path: str | None, severity: str | None):
    """List dictionary entries."""
    from textmod.errors import DictionaryError

    try:
        loaded = _load(dictionary_path)
    except DictionaryError as e:
        console.print(f"[red]{escape(str(e))}[/]")
        raise SystemExit(1)

    entries = [e for e in loaded if severity is None or e.severity.value == severity]

    table = Table(title=f"{loaded.name} v{loaded.version} ({len(entries)} entries)")
    table.add_column("Word", style="cyan")
    table.add_column("Severity")
    table.add_column("Action")
    table.add_column("Aliases", justify="right")
    table.add_column("Exceptions", justify="right")

    for entry in entries:
        style = _SEVERITY_STYLES[entry.severity.value]
        table.add_row(
            escape(entry.display_name),
            f"[{style}]{entry.severity.value}[/]",
            entry.effective_action.value,
            str(len(entry.aliases)),
            str(len(entry.context_exceptions)),
        )

    console.print(table)


@dictionary.command(name="validate")
@click.argument("path")
def validate_file(path: str):
    """Check a dictionary YAML file for structural problems."""
    from textmod.dictionary.loader import validate_dictionary_file

    issues = validate_dictionary_file(path)
    if issues:
        console.print(f"[red]Invalid dictionary:[/] {path}")
        for issue in issues:
            console.print(f"  [red]x[/] {escape(issue)}")
        raise SystemExit(1)

    console.print(f"[green]Valid![/] {path}")


if __name__ == "__main__":
    main()
