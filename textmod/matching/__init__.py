"""Pattern matching and the context checks that can suppress a match."""

from textmod.matching.context import REPORT_PATTERNS, in_allowed_context, is_quote_or_report
from textmod.matching.matcher import MatchResult, compile_pattern, match_pattern

__all__ = [
    "MatchResult",
    "REPORT_PATTERNS",
    "compile_pattern",
    "in_allowed_context",
    "is_quote_or_report",
    "match_pattern",
]
