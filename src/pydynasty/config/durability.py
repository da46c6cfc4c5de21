"""Scoring tables for the injury durability analyzer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from pydynasty.models.injury import DurabilityRating, InjuryType, RiskLevel


logger = logging.getLogger(__name__)

_CURRENT_SEASON_ENV = "PYDYNASTY_CURRENT_SEASON"


@dataclass(frozen=True)
class RatingBand:
    """Availability floor (inclusive) mapped to a rating and base score."""

    min_availability: int
    rating: DurabilityRating
    score: int


@dataclass(frozen=True)
class RecoveryStage:
    """Recovery label for injuries fewer than ``max_months`` months old."""

    max_months: int
    status: str


@dataclass(frozen=True)
class RecurringRule:
    injury_types: frozenset[InjuryType]
    template: str

    def describe(self, count: int) -> str:
        return self.template.format(count=count)


@dataclass(frozen=True)
class AgeRiskRule:
    """Age + injury combination; all set thresholds must hold for a match."""

    level: RiskLevel
    min_age: int
    template: str
    min_soft_tissue: int = 0
    min_games_missed: int = 0
    severity_above: Optional[float] = None

    def matches(self, *, age: int, soft_tissue: int, games_missed: int, severity: float) -> bool:
        if age < self.min_age:
            return False
        if soft_tissue < self.min_soft_tissue:
            return False
        if games_missed < self.min_games_missed:
            return False
        if self.severity_above is not None and severity <= self.severity_above:
            return False
        return True

    def describe(self, age: int) -> str:
        return self.template.format(age=age)


_TYPE_WEIGHTS: Dict[InjuryType, float] = {
    InjuryType.KNEE_ACL: 10,
    InjuryType.CONCUSSION: 9,
    InjuryType.KNEE_OTHER: 6,
    InjuryType.ANKLE_FOOT: 5,
    InjuryType.SOFT_TISSUE: 7,
    InjuryType.BACK: 6,
    InjuryType.SHOULDER: 4,
    InjuryType.WRIST_HAND: 3,
    InjuryType.RIBS: 2,
    InjuryType.ILLNESS: 1,
    InjuryType.OTHER: 2,
}

# Keyed by seasons before the current one.
_SEASON_WEIGHTS: Dict[int, float] = {0: 1.5, 1: 1.0, 2: 0.6}

_RATING_BANDS: Tuple[RatingBand, ...] = (
    RatingBand(94, "iron_man", 30),
    RatingBand(85, "durable", 25),
    RatingBand(75, "moderate", 20),
    RatingBand(60, "injury_prone", 12),
    RatingBand(0, "glass", 5),
)

_RECOVERY_STAGES: Tuple[RecoveryStage, ...] = (
    RecoveryStage(9, "Still recovering - elevated risk"),
    RecoveryStage(12, "Recent return - monitor workload"),
    RecoveryStage(18, "Returned successfully - normal risk"),
)

_RECURRING_RULES: Tuple[RecurringRule, ...] = (
    RecurringRule(frozenset({InjuryType.SOFT_TISSUE}), "Chronic soft tissue issues"),
    RecurringRule(frozenset({InjuryType.CONCUSSION}), "{count} concussions - cumulative risk"),
    RecurringRule(frozenset({InjuryType.ANKLE_FOOT}), "Recurring ankle/foot problems"),
    RecurringRule(frozenset({InjuryType.KNEE_ACL, InjuryType.KNEE_OTHER}), "Multiple knee injuries"),
)

_AGE_RISK_RULES: Tuple[AgeRiskRule, ...] = (
    AgeRiskRule("extreme", 30, "Age {age} + soft tissue history = EXTREME RISK", min_soft_tissue=2),
    AgeRiskRule("high", 28, "Age {age} + soft tissue history = HIGH RISK", min_soft_tissue=1),
    AgeRiskRule("high", 30, "Age {age} + injury history = HIGH RISK", min_games_missed=10),
    AgeRiskRule("medium", 27, "Age {age} + wear concerns", severity_above=20),
)


@dataclass(frozen=True)
class DurabilityConfig:
    current_season: int = 2024
    tracked_seasons: int = 3
    games_per_season: int = 17
    type_weights: Mapping[InjuryType, float] = field(
        default_factory=lambda: MappingProxyType(dict(_TYPE_WEIGHTS))
    )
    default_type_weight: float = 2
    season_weights: Mapping[int, float] = field(
        default_factory=lambda: MappingProxyType(dict(_SEASON_WEIGHTS))
    )
    default_season_weight: float = 0.5
    major_bonus: float = 1.5
    games_per_severity_unit: float = 4
    rating_bands: Tuple[RatingBand, ...] = _RATING_BANDS
    recovery_stages: Tuple[RecoveryStage, ...] = _RECOVERY_STAGES
    recovered_status: str = "Fully recovered"
    recovery_display_months: int = 18
    recurring_min_count: int = 2
    recurring_rules: Tuple[RecurringRule, ...] = _RECURRING_RULES
    age_risk_rules: Tuple[AgeRiskRule, ...] = _AGE_RISK_RULES
    unknown_score: int = 20
    min_score: int = 5
    recurring_penalty: int = 5
    concussion_penalties: Tuple[Tuple[int, int], ...] = ((3, 8), (2, 4))
    age_risk_penalties: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({"extreme": 8, "high": 5})
    )

    def tracked_season_years(self) -> Tuple[int, ...]:
        first = self.current_season - self.tracked_seasons + 1
        return tuple(range(first, self.current_season + 1))

    def type_weight(self, injury_type: InjuryType) -> float:
        return self.type_weights.get(injury_type, self.default_type_weight)

    def season_weight(self, season: int) -> float:
        return self.season_weights.get(self.current_season - season, self.default_season_weight)

    def rating_for(self, availability_rate: int) -> RatingBand:
        for band in self.rating_bands:
            if availability_rate >= band.min_availability:
                return band
        return self.rating_bands[-1]

    def recovery_status(self, months: int) -> str:
        for stage in self.recovery_stages:
            if months < stage.max_months:
                return stage.status
        return self.recovered_status


DEFAULT_DURABILITY_CONFIG = DurabilityConfig()


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def durability_config_from_env(base: DurabilityConfig = DEFAULT_DURABILITY_CONFIG) -> DurabilityConfig:
    """Apply ``PYDYNASTY_CURRENT_SEASON`` on top of ``base``."""

    season = _env_int(_CURRENT_SEASON_ENV, base.current_season, min_value=1900)
    if season == base.current_season:
        return base
    return replace(base, current_season=season)
