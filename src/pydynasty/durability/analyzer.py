"""Injury durability scoring.

Turns a three-season injury history into a 5-30 durability score with the
narrative that explains it:

* availability over the tracked seasons sets the base rating
* injury types are tallied; the first repeated type (in ``InjuryType``
  order) is the recurring issue
* severity weighs each injury by type, recency, and whether it was major
* recurring issues, concussions, and age + injury combinations subtract
  from the base score, never below the configured floor
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from typing import Callable, Iterable, Mapping, Optional, Sequence, Tuple

from pydynasty.config.durability import DEFAULT_DURABILITY_CONFIG, DurabilityConfig
from pydynasty.formatting import round_half_up
from pydynasty.models.injury import (
    AgeInjuryRisk,
    DurabilityAnalysis,
    InjuryRecord,
    InjuryType,
    MajorInjuryRecovery,
    PlayerInjuryHistory,
)


logger = logging.getLogger(__name__)

_RATING_LABELS: Mapping[str, str] = {
    "iron_man": "Iron Man",
    "durable": "Durable",
    "moderate": "Moderate concern",
    "injury_prone": "Injury prone",
    "glass": "Glass",
    "unknown": "Unknown",
}

_SHORT_RATING_LABELS: Mapping[str, str] = {
    "iron_man": "Iron Man",
    "durable": "Durable",
    "moderate": "Moderate",
    "injury_prone": "Injury Prone",
    "glass": "Glass",
    "unknown": "Unknown",
}

_RATING_COLORS: Mapping[str, str] = {
    "iron_man": "text-emerald-400 bg-emerald-950/30 border-emerald-500/50",
    "durable": "text-lime-400 bg-lime-950/30 border-lime-500/50",
    "moderate": "text-amber-400 bg-amber-950/30 border-amber-500/50",
    "injury_prone": "text-orange-400 bg-orange-950/30 border-orange-500/50",
    "glass": "text-red-400 bg-red-950/30 border-red-500/50",
}
_DEFAULT_COLOR = "text-zinc-400 bg-zinc-800/50 border-zinc-600/50"

_NarrativeRule = Tuple[Callable[[Counter], bool], Callable[[Counter], str]]

_ACL = InjuryType.KNEE_ACL
_KNEE = InjuryType.KNEE_OTHER
_CONCUSSION = InjuryType.CONCUSSION
_SOFT = InjuryType.SOFT_TISSUE
_ANKLE = InjuryType.ANKLE_FOOT

# Each group contributes at most one message (first match); groups are independent.
_RISK_NARRATIVES: Tuple[Tuple[_NarrativeRule, ...], ...] = (
    (
        (lambda c: c[_CONCUSSION] >= 3, lambda c: f"SERIOUS: {c[_CONCUSSION]} concussions - career risk"),
        (lambda c: c[_CONCUSSION] == 2, lambda c: f"{c[_CONCUSSION]} concussions - monitor closely"),
    ),
    (
        (lambda c: c[_SOFT] >= 3, lambda c: "Chronic soft tissue issues"),
        (lambda c: c[_SOFT] == 2, lambda c: "Recurring soft tissue concerns"),
    ),
    (
        (lambda c: c[_ACL] >= 2, lambda c: "Multiple ACL injuries - extreme risk"),
        (lambda c: c[_ACL] == 1 and c[_KNEE] >= 1, lambda c: "ACL history + additional knee issues"),
        (lambda c: c[_ACL] == 1, lambda c: "ACL history - monitor knee"),
    ),
    (
        (lambda c: c[_ANKLE] >= 3, lambda c: "Chronic ankle/foot issues"),
        (lambda c: c[_ANKLE] == 2, lambda c: "Recurring ankle problems"),
    ),
)


def months_since(year_month: str, as_of: date) -> int:
    """Whole calendar months from a ``YYYY-MM`` stamp to ``as_of``, never negative."""

    year, month = (int(part) for part in year_month.split("-", 1))
    return max(0, (as_of.year - year) * 12 + (as_of.month - month))


def count_injuries(injuries: Iterable[InjuryRecord]) -> Counter:
    return Counter(record.type for record in injuries)


def find_recurring_issue(
    counts: Mapping[InjuryType, int],
    *,
    config: DurabilityConfig = DEFAULT_DURABILITY_CONFIG,
) -> Tuple[Optional[InjuryType], Optional[str]]:
    """Return the first repeated injury type in enum order and its description.

    A repeated type that no recurring rule covers (``back``, ``shoulder`` ...)
    is still returned, with a description of ``None``; it counts as a
    recurring issue for the score penalty but adds nothing to the display text.
    """

    for injury_type in InjuryType:
        count = counts.get(injury_type, 0)
        if count < config.recurring_min_count:
            continue
        for rule in config.recurring_rules:
            if injury_type in rule.injury_types:
                return injury_type, rule.describe(count)
        return injury_type, None
    return None, None


def severity_score(
    injuries: Iterable[InjuryRecord],
    *,
    config: DurabilityConfig = DEFAULT_DURABILITY_CONFIG,
) -> float:
    """Unrounded sum of type weight x recency x major bonus x games missed per unit."""

    total = 0.0
    for injury in injuries:
        major_bonus = config.major_bonus if injury.is_major else 1.0
        total += (
            config.type_weight(injury.type)
            * config.season_weight(injury.season)
            * major_bonus
            * (injury.games_missed / config.games_per_severity_unit)
        )
    return total


def risk_factors(counts: Counter) -> list[str]:
    factors: list[str] = []
    for group in _RISK_NARRATIVES:
        for predicate, message in group:
            if predicate(counts):
                factors.append(message(counts))
                break
    return factors


def assess_age_risk(
    age: Optional[int],
    *,
    soft_tissue: int,
    games_missed: int,
    severity: float,
    config: DurabilityConfig = DEFAULT_DURABILITY_CONFIG,
) -> Optional[AgeInjuryRisk]:
    if not age:
        return None
    for rule in config.age_risk_rules:
        if rule.matches(age=age, soft_tissue=soft_tissue, games_missed=games_missed, severity=severity):
            return AgeInjuryRisk(level=rule.level, description=rule.describe(age))
    return None


def _apply_penalties(
    score: int,
    *,
    has_recurring_issue: bool,
    concussions: int,
    age_risk: Optional[AgeInjuryRisk],
    config: DurabilityConfig,
) -> int:
    def penalize(value: int, penalty: int) -> int:
        return max(config.min_score, value - penalty)

    if has_recurring_issue:
        score = penalize(score, config.recurring_penalty)
    for min_count, penalty in config.concussion_penalties:
        if concussions >= min_count:
            score = penalize(score, penalty)
            break
    if age_risk is not None and age_risk.level in config.age_risk_penalties:
        score = penalize(score, config.age_risk_penalties[age_risk.level])
    return score


def _display_text(
    rating: str,
    games_played: int,
    possible_games: int,
    availability_rate: int,
    recurring_description: Optional[str],
    recovery: Optional[MajorInjuryRecovery],
    config: DurabilityConfig,
) -> str:
    text = (
        f"DURABILITY: {_RATING_LABELS[rating]} - "
        f"{games_played}/{possible_games} games ({availability_rate}%)"
    )
    if recurring_description:
        text += f" - {recurring_description}"
    if recovery is not None and recovery.months_since < config.recovery_display_months:
        text += f" | {recovery.months_since} months post-{recovery.injury.split(' ')[0]}"
    return text


def unknown_analysis(config: DurabilityConfig = DEFAULT_DURABILITY_CONFIG) -> DurabilityAnalysis:
    """Neutral result for players without injury data."""

    return DurabilityAnalysis(
        games_played=0,
        games_missed=0,
        availability_rate=0,
        seasons_tracked=0,
        durability_rating="unknown",
        durability_score=config.unknown_score,
        display_text="No injury data available",
        short_display="DURABILITY: Unknown",
    )


def analyze_durability(
    history: Optional[PlayerInjuryHistory],
    age: Optional[int] = None,
    *,
    config: DurabilityConfig = DEFAULT_DURABILITY_CONFIG,
    as_of: Optional[date] = None,
) -> DurabilityAnalysis:
    """Score a player's durability from their injury history.

    ``as_of`` anchors the major-injury recovery timeline and defaults to
    today; pass it explicitly for reproducible output.
    """

    if history is None:
        return unknown_analysis(config)

    season_games: Sequence[int] = [history.games_in(season) for season in config.tracked_season_years()]
    games_played = sum(season_games)
    seasons_active = sum(1 for games in season_games if games > 0)
    possible_games = seasons_active * config.games_per_season
    games_missed = possible_games - games_played
    if possible_games > 0:
        availability_rate = min(100, round_half_up(games_played / possible_games * 100))
    else:
        availability_rate = 100

    counts = count_injuries(history.injuries)
    injury_types = {injury_type: counts[injury_type] for injury_type in InjuryType if counts[injury_type]}
    recurring_type, recurring_description = find_recurring_issue(counts, config=config)
    has_recurring_issue = recurring_type is not None

    severity = severity_score(history.injuries, config=config)

    recovery: Optional[MajorInjuryRecovery] = None
    if history.major_injury_date:
        months = months_since(history.major_injury_date, as_of or date.today())
        recovery = MajorInjuryRecovery(
            injury=history.major_injury_type or "Major injury",
            months_since=months,
            recovery_status=config.recovery_status(months),
        )

    age_risk = assess_age_risk(
        age,
        soft_tissue=counts[InjuryType.SOFT_TISSUE],
        games_missed=games_missed,
        severity=severity,
        config=config,
    )

    band = config.rating_for(availability_rate)
    score = _apply_penalties(
        band.score,
        has_recurring_issue=has_recurring_issue,
        concussions=counts[InjuryType.CONCUSSION],
        age_risk=age_risk,
        config=config,
    )

    logger.debug(
        "Durability %s: %d/%d games (%d%%), severity %.1f, score %d",
        band.rating,
        games_played,
        possible_games,
        availability_rate,
        severity,
        score,
    )

    return DurabilityAnalysis(
        games_played=games_played,
        games_missed=games_missed,
        availability_rate=availability_rate,
        seasons_tracked=seasons_active,
        durability_rating=band.rating,
        durability_score=score,
        injury_types=injury_types,
        has_recurring_issue=has_recurring_issue,
        recurring_type=recurring_type,
        recurring_description=recurring_description,
        risk_factors=risk_factors(counts),
        severity_score=round_half_up(severity),
        major_injury_recovery=recovery,
        age_injury_risk=age_risk,
        display_text=_display_text(
            band.rating,
            games_played,
            possible_games,
            availability_rate,
            recurring_description,
            recovery,
            config,
        ),
        short_display=f"{_SHORT_RATING_LABELS[band.rating]} ({availability_rate}%)",
    )


def get_durability_color(rating: str) -> str:
    """CSS utility classes for rendering a durability rating."""

    return _RATING_COLORS.get(rating, _DEFAULT_COLOR)
