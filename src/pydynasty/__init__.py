"""Dynasty fantasy football roster analysis: injury durability and team diagnosis."""

from .diagnosis import analyze_roster, diagnose_team, diagnose_win_now
from .durability import analyze_durability, get_durability_color

__all__ = [
    "analyze_durability",
    "analyze_roster",
    "diagnose_team",
    "diagnose_win_now",
    "get_durability_color",
]
