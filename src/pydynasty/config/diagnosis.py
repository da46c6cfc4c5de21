"""Thresholds, starter counts and scripted playbooks for the team diagnosis."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

from pydynasty.models.diagnosis import Classification, StrengthRating
from pydynasty.models.roster import Position


@dataclass(frozen=True)
class StrengthBand:
    """Inclusive lower bound on a score mapped to a strength rating."""

    min_value: float
    rating: StrengthRating


@dataclass(frozen=True)
class ProductionThresholds:
    """Points-per-game floors for production strength at one position."""

    elite: float
    strong: float
    average: float
    weak: float

    def bands(self) -> Tuple[StrengthBand, ...]:
        return (
            StrengthBand(self.elite, "elite"),
            StrengthBand(self.strong, "strong"),
            StrengthBand(self.average, "average"),
            StrengthBand(self.weak, "weak"),
        )


@dataclass(frozen=True)
class Playbook:
    """Scripted text for one classification."""

    summary: str
    outlook: str
    moves: Tuple[str, ...]
    targets: Tuple[str, ...]
    aging_moves: Tuple[str, ...] = ()


# Tiers are (threshold, points); the first satisfied tier wins.
Tiers = Tuple[Tuple[float, int], ...]

_STARTER_COUNTS: Dict[Position, int] = {
    Position.QB: 1,
    # RB and WR carry a flex-eligible third starter.
    Position.RB: 3,
    Position.WR: 3,
    Position.TE: 1,
}

_STRENGTH_BANDS: Tuple[StrengthBand, ...] = (
    StrengthBand(80, "elite"),
    StrengthBand(65, "strong"),
    StrengthBand(50, "average"),
    StrengthBand(35, "weak"),
)

_PRODUCTION_THRESHOLDS: Dict[Position, ProductionThresholds] = {
    Position.QB: ProductionThresholds(elite=22, strong=18, average=14, weak=10),
    Position.RB: ProductionThresholds(elite=18, strong=14, average=10, weak=6),
    Position.WR: ProductionThresholds(elite=18, strong=14, average=10, weak=6),
    Position.TE: ProductionThresholds(elite=14, strong=10, average=7, weak=4),
}

_PRODUCTION_RANKS: Dict[str, str] = {
    "elite": "Top 3",
    "strong": "Top 8",
    "average": "Top 15",
    "weak": "Below Average",
    "dire": "Bottom Tier",
}


@dataclass(frozen=True)
class DiagnosisConfig:
    starter_counts: Mapping[Position, int] = field(
        default_factory=lambda: MappingProxyType(dict(_STARTER_COUNTS))
    )
    strength_bands: Tuple[StrengthBand, ...] = _STRENGTH_BANDS
    floor_strength: StrengthRating = "dire"
    strong_ratings: frozenset[str] = frozenset({"elite", "strong"})
    weak_ratings: frozenset[str] = frozenset({"weak", "dire"})

    elite_score: float = 75
    young_age: int = 25
    aging_urgencies: frozenset[str] = frozenset({"SELL NOW", "SELL SOON"})
    sell_now_urgency: str = "SELL NOW"
    sell_soon_urgency: str = "SELL SOON"
    hold_urgency: str = "HOLD"
    hold_min_score: float = 60
    max_sells: int = 3
    max_holds: int = 3

    contender_avg_tiers: Tiers = ((70, 40), (60, 20))
    contender_elite_tiers: Tiers = ((4, 30), (2, 15))
    contender_position_bonus: int = 15
    contender_bonus_positions: Tuple[Position, ...] = (Position.QB, Position.RB)
    contender_cutoff: int = 60
    contender_confidence_cap: int = 95

    # Average-score tiers here are strict upper bounds.
    rebuild_avg_tiers: Tiers = ((50, 40), (55, 20))
    rebuild_young_tiers: Tiers = ((5, 30), (3, 15))
    rebuild_aging_tiers: Tiers = ((3, 20), (2, 10))
    rebuild_thin_elite_max: int = 1
    rebuild_thin_elite_points: int = 10
    rebuild_cutoff: int = 50
    rebuild_avg_trigger: float = 50
    rebuild_confidence_cap: int = 90
    rebuild_confidence_floor: int = 50

    stuck_confidence: int = 70

    youth_core_min: int = 4
    elite_core_min: int = 3
    aging_core_min: int = 3
    closing_window_age: float = 28

    window_base_age: float = 26
    window_base_years: int = 3
    window_age_step: float = 2

    production_thresholds: Mapping[Position, ProductionThresholds] = field(
        default_factory=lambda: MappingProxyType(dict(_PRODUCTION_THRESHOLDS))
    )
    production_ranks: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(_PRODUCTION_RANKS))
    )
    season_ppg_weight: float = 0.4
    last4_ppg_weight: float = 0.6
    weekly_starters: int = 8
    injured_games_max: int = 10
    hot_trends: frozenset[str] = frozenset({"hot", "warm"})
    cold_trends: frozenset[str] = frozenset({"cold", "ice"})
    championship_points: float = 130
    playoff_points: float = 115
    bubble_points: float = 100
    trend_margin: float = 0.1
    dire_ppg: float = 8

    def starter_count(self, position: Position) -> int:
        return self.starter_counts.get(position, 0)

    def strength_for(self, value: float) -> StrengthRating:
        for band in self.strength_bands:
            if value >= band.min_value:
                return band.rating
        return self.floor_strength


DEFAULT_DIAGNOSIS_CONFIG = DiagnosisConfig()


_PLAYBOOKS: Dict[Classification, Playbook] = {
    Classification.CONTENDER: Playbook(
        summary=(
            "Championship-caliber roster with {elite_assets} elite assets and "
            "{avg_starter_score} avg starter score."
        ),
        outlook="Championship window: {years}-{years_end} years. Maximize this core NOW.",
        moves=(
            "Go all-in: trade future picks for proven producers",
            "Prioritize floor over ceiling in acquisitions",
        ),
        targets=(
            "Veteran WRs with target share",
            "High-floor RB2s for depth",
        ),
        aging_moves=("Accept aging stars - their window aligns with yours",),
    ),
    Classification.REBUILD: Playbook(
        summary=(
            "Rebuilding roster with {young_assets} young assets. "
            "Focus on accumulating picks and youth."
        ),
        outlook="Projected competitiveness: 2-3 years out. Patience and pick accumulation are key.",
        moves=(
            "Sell all aging assets for picks and young players",
            "Accumulate 2026-2027 1sts aggressively",
            "Target underperforming young players",
        ),
        targets=(
            "1st round picks (2026, 2027)",
            "Young WRs on bad teams",
            "Rookie RBs in committee situations",
        ),
    ),
    Classification.STUCK: Playbook(
        summary="Roster lacks elite ceiling for contention but has too much value to tank. Decision time.",
        outlook="Risk: Wasting years in mediocrity. Make a decisive move in the next 6 months.",
        moves=(
            "PICK A DIRECTION: Either commit to contention or rebuild",
            "If contending: Move 2 young assets for 1 proven star",
            "If rebuilding: Sell every player over age 27",
        ),
        targets=(
            "Elite young WR (if going young)",
            "Proven RB1 (if going old)",
        ),
    ),
}


def get_playbook(classification: Classification | str) -> Playbook:
    """Fetch the scripted playbook for a classification, raising KeyError if missing."""

    try:
        key = Classification(classification)
    except ValueError:
        key = None
    if key is None or key not in _PLAYBOOKS:
        raise KeyError(f"No playbook configured for classification={classification!r}")
    return _PLAYBOOKS[key]


def iter_playbooks() -> Iterable[Playbook]:
    """Return an iterator of all configured playbooks."""

    return _PLAYBOOKS.values()
