"""Injury history durability analysis."""

from .analyzer import (
    analyze_durability,
    find_recurring_issue,
    get_durability_color,
    months_since,
    severity_score,
    unknown_analysis,
)

__all__ = [
    "analyze_durability",
    "find_recurring_issue",
    "get_durability_color",
    "months_since",
    "severity_score",
    "unknown_analysis",
]
