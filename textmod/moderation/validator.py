"""Pre-send validation of chat messages.

Length rules are checked first and independently of content. The content
verdict is then turned into a decision, either by following the recommended
action of the matched entries or, in legacy mode, by the option flags.
User-facing violation texts are in French, like the rest of the product.
"""

from __future__ import annotations

from typing import Optional

from textmod.dictionary import Dictionary
from textmod.dictionary.models import Action, Severity
from textmod.moderation.censor import censor_message
from textmod.moderation.models import ModerationVerdict, ValidationOptions, ValidationResult
from textmod.moderation.resolver import check_forbidden_content

EMPTY_MESSAGE = "Le message ne peut pas être vide"
TOO_SHORT = "Le message doit contenir au moins {n} caractère(s)"
TOO_LONG = "Le message ne doit pas dépasser {n} caractères"
FORBIDDEN_CONTENT = "Le message contient du contenu interdit : {terms}"
INAPPROPRIATE_WORDS = "Le message contient des mots inappropriés : {terms}"
QUOTE_SUSPECTED = (
    "Le message contient des mots inappropriés. Si vous citez quelqu'un, "
    'veuillez utiliser le bouton "Signaler" à la place.'
)
WARNING = (
    "Attention: Ce message contient des mots qui pourraient être inappropriés "
    "dans certains contextes: {terms}"
)


def _check_length(message: str, options: ValidationOptions) -> list[str]:
    issues: list[str] = []
    if len(message.strip()) < options.min_length:
        issues.append(TOO_SHORT.format(n=options.min_length))
    if len(message) > options.max_length:
        issues.append(TOO_LONG.format(n=options.max_length))
    return issues


def _apply_recommended_action(
    result: ValidationResult, verdict: ModerationVerdict, dictionary: Optional[Dictionary]
) -> None:
    terms = ", ".join(verdict.matched_terms)
    action = verdict.recommended_action

    if action is Action.BLOCK:
        result.is_valid = False
        result.violations.append(FORBIDDEN_CONTENT.format(terms=terms))
    elif action is Action.WARN:
        result.warning_text = WARNING.format(terms=terms)
    elif action is Action.CENSOR:
        result.censored_text = censor_message(result.original_text, dictionary)
    elif action is Action.NOTIFY_MOD:
        result.should_notify_moderator = True
        result.censored_text = censor_message(result.original_text, dictionary)


def _apply_legacy_rules(
    result: ValidationResult,
    verdict: ModerationVerdict,
    options: ValidationOptions,
    dictionary: Optional[Dictionary],
) -> None:
    should_block = verdict.has_forbidden_content
    if should_block and verdict.possible_quote_or_report and options.allow_quoted_words:
        should_block = False
    if should_block and verdict.severity is Severity.LOW and options.allow_low_severity_words:
        should_block = False
    if not should_block:
        return

    if options.censor_instead_of_block:
        result.censored_text = censor_message(result.original_text, dictionary)
        return

    result.is_valid = False
    terms = ", ".join(verdict.matched_terms)
    if verdict.possible_quote_or_report:
        result.violations.append(QUOTE_SUSPECTED)
    elif verdict.severity is Severity.HIGH:
        result.violations.append(FORBIDDEN_CONTENT.format(terms=terms))
    else:
        result.violations.append(INAPPROPRIATE_WORDS.format(terms=terms))


def validate_message(
    message: str,
    options: Optional[ValidationOptions] = None,
    *,
    dictionary: Optional[Dictionary] = None,
) -> ValidationResult:
    """Validate a chat message before it is sent.

    Args:
        message: Raw user text.
        options: Validation knobs; defaults to ``ValidationOptions()``.
        dictionary: Dictionary to scan against; defaults to the packaged table.

    Returns:
        A ``ValidationResult``. ``censored_text`` is what should be shown to
        the recipient; it equals the original unless something was masked.
    """
    options = options or ValidationOptions()
    message = message or ""
    result = ValidationResult(is_valid=True, original_text=message, censored_text=message)

    if not message.strip():
        if not options.allow_empty:
            result.is_valid = False
            result.violations.append(EMPTY_MESSAGE)
        return result

    length_issues = _check_length(message, options)
    if length_issues:
        result.is_valid = False
        result.violations.extend(length_issues)

    verdict = check_forbidden_content(message, dictionary)
    result.matched_terms = verdict.matched_terms
    result.severity = verdict.severity
    result.recommended_action = verdict.recommended_action
    result.possible_quote_or_report = verdict.possible_quote_or_report

    if options.respect_recommended_actions:
        if verdict.has_forbidden_content and verdict.recommended_action:
            _apply_recommended_action(result, verdict, dictionary)
    else:
        _apply_legacy_rules(result, verdict, options, dictionary)

    return result


def is_message_valid(
    message: str,
    options: Optional[ValidationOptions] = None,
    *,
    dictionary: Optional[Dictionary] = None,
) -> bool:
    """Shortcut for ``validate_message(...).is_valid``."""
    return validate_message(message, options, dictionary=dictionary).is_valid
