"""Team diagnosis: position grouping, classification and recommendations."""

from .classifier import classify, contender_score, diagnose_team, rebuild_score
from .grouping import build_position_group, build_position_groups, group_by_position
from .service import (
    DEFAULT_AGE,
    DynastyValueProvider,
    InjuryHistoryLookup,
    ProductionProvider,
    SellWindowProvider,
    UnsupportedPositionError,
    analyze_roster,
    score_player,
)
from .win_now import compare_outlooks, diagnose_win_now

__all__ = [
    "DEFAULT_AGE",
    "DynastyValueProvider",
    "InjuryHistoryLookup",
    "ProductionProvider",
    "SellWindowProvider",
    "UnsupportedPositionError",
    "analyze_roster",
    "build_position_group",
    "build_position_groups",
    "classify",
    "compare_outlooks",
    "contender_score",
    "diagnose_team",
    "diagnose_win_now",
    "group_by_position",
    "rebuild_score",
    "score_player",
]
