"""Contend / rebuild / stuck classification for a dynasty roster."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Mapping, Tuple

from pydynasty.config.diagnosis import (
    DEFAULT_DIAGNOSIS_CONFIG,
    DiagnosisConfig,
    Tiers,
    get_playbook,
)
from pydynasty.formatting import format_number, mean_or_zero, round_half_up, round_tenth
from pydynasty.models.diagnosis import (
    Classification,
    PositionGroup,
    Recommendations,
    TeamDiagnosis,
    TeamMetrics,
)
from pydynasty.models.roster import Position, RosterPlayer

from .grouping import build_position_groups


logger = logging.getLogger(__name__)


def _points_at_least(value: float, tiers: Tiers) -> int:
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return 0


def _points_below(value: float, tiers: Tiers) -> int:
    for threshold, points in tiers:
        if value < threshold:
            return points
    return 0


def contender_score(
    avg_starter_score: float,
    elite_assets: int,
    positions: Mapping[Position, PositionGroup],
    *,
    config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> int:
    score = _points_at_least(avg_starter_score, config.contender_avg_tiers)
    score += _points_at_least(elite_assets, config.contender_elite_tiers)
    for position in config.contender_bonus_positions:
        if positions[position].strength_rating in config.strong_ratings:
            score += config.contender_position_bonus
    return score


def rebuild_score(
    avg_starter_score: float,
    young_assets: int,
    aging_assets: int,
    elite_assets: int,
    *,
    config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> int:
    score = _points_below(avg_starter_score, config.rebuild_avg_tiers)
    score += _points_at_least(young_assets, config.rebuild_young_tiers)
    score += _points_at_least(aging_assets, config.rebuild_aging_tiers)
    if elite_assets <= config.rebuild_thin_elite_max:
        score += config.rebuild_thin_elite_points
    return score


def classify(
    contender: int,
    rebuild: int,
    avg_starter_score: float,
    *,
    config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> Tuple[Classification, int]:
    """Pick the classification and its confidence from the two scores."""

    if contender >= config.contender_cutoff:
        return Classification.CONTENDER, min(config.contender_confidence_cap, contender)
    if rebuild >= config.rebuild_cutoff or avg_starter_score < config.rebuild_avg_trigger:
        confidence = min(config.rebuild_confidence_cap, rebuild)
        if rebuild < config.rebuild_cutoff:
            confidence = max(config.rebuild_confidence_floor, confidence)
        return Classification.REBUILD, confidence
    return Classification.STUCK, config.stuck_confidence


def _strengths_and_weaknesses(
    positions: Mapping[Position, PositionGroup],
    metrics: TeamMetrics,
    avg_starter_age: float,
    config: DiagnosisConfig,
) -> Tuple[List[str], List[str]]:
    strengths: List[str] = []
    weaknesses: List[str] = []

    for position in Position:
        group = positions[position]
        note = f"{position.value} room is {group.strength_rating} ({group.avg_score} avg)"
        if group.strength_rating in config.strong_ratings:
            strengths.append(note)
        elif group.strength_rating in config.weak_ratings:
            weaknesses.append(note)

    if metrics.young_assets >= config.youth_core_min:
        strengths.append(
            f"{metrics.young_assets} players age {config.young_age} or under - strong youth core"
        )
    if metrics.elite_assets >= config.elite_core_min:
        strengths.append(
            f"{metrics.elite_assets} elite-tier assets ({format_number(config.elite_score)}+ score)"
        )
    if metrics.aging_assets >= config.aging_core_min:
        weaknesses.append(f"{metrics.aging_assets} players in sell window - aging core")
    if avg_starter_age > config.closing_window_age:
        weaknesses.append(
            f"Avg starter age {format_number(metrics.avg_starter_age)} - window closing"
        )
    return strengths, weaknesses


def _recommendations(
    roster: List[RosterPlayer],
    classification: Classification,
    aging_assets: int,
    config: DiagnosisConfig,
) -> Recommendations:
    playbook = get_playbook(classification)

    def is_sell(player: RosterPlayer) -> bool:
        if player.urgency == config.sell_now_urgency:
            return True
        return player.urgency == config.sell_soon_urgency and classification != Classification.CONTENDER

    sells = [
        f"{player.name} ({player.urgency}: {player.sell_window.reason})"
        for player in roster
        if is_sell(player)
    ][: config.max_sells]
    holds = [
        f"{player.name} ({format_number(player.score)} pts, "
        f"{format_number(player.dynasty_value.years_of_elite_production)}+ elite years)"
        for player in roster
        if player.score >= config.hold_min_score and player.urgency == config.hold_urgency
    ][: config.max_holds]

    moves = list(playbook.moves)
    if aging_assets > 0:
        moves.extend(playbook.aging_moves)

    return Recommendations(moves=moves, targets=list(playbook.targets), sells=sells, holds=holds)


def championship_window_years(avg_starter_age: float, *, config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG) -> int:
    steps = math.floor((avg_starter_age - config.window_base_age) / config.window_age_step)
    return max(1, config.window_base_years - steps)


def diagnose_team(
    players: Iterable[RosterPlayer],
    *,
    config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> TeamDiagnosis:
    """Classify a roster and explain the call.

    Players are taken in the caller's order; the sells and holds lists keep
    that order while starters are chosen by dynasty value.
    """

    roster = list(players)
    positions = build_position_groups(roster, config=config)
    starters = [player for position in Position for player in positions[position].starters]

    avg_starter_age = mean_or_zero(player.age for player in starters)
    avg_starter_score = mean_or_zero(player.score for player in starters)
    elite_assets = sum(1 for player in roster if player.score >= config.elite_score)
    young_assets = sum(1 for player in roster if player.age <= config.young_age)
    aging_assets = sum(1 for player in roster if player.urgency in config.aging_urgencies)

    metrics = TeamMetrics(
        total_roster_value=sum(player.score for player in roster),
        avg_starter_age=round_tenth(avg_starter_age),
        avg_starter_score=round_half_up(avg_starter_score),
        elite_assets=elite_assets,
        young_assets=young_assets,
        aging_assets=aging_assets,
        draft_capital=0,
    )

    contender = contender_score(avg_starter_score, elite_assets, positions, config=config)
    rebuild = rebuild_score(avg_starter_score, young_assets, aging_assets, elite_assets, config=config)
    classification, confidence = classify(contender, rebuild, avg_starter_score, config=config)
    logger.debug(
        "Diagnosis %s (confidence %d): contender=%d rebuild=%d avg_score=%.1f",
        classification.value,
        confidence,
        contender,
        rebuild,
        avg_starter_score,
    )

    playbook = get_playbook(classification)
    years = championship_window_years(avg_starter_age, config=config)
    strengths, weaknesses = _strengths_and_weaknesses(positions, metrics, avg_starter_age, config)

    return TeamDiagnosis(
        classification=classification,
        confidence=confidence,
        summary=playbook.summary.format(
            elite_assets=elite_assets,
            young_assets=young_assets,
            avg_starter_score=metrics.avg_starter_score,
        ),
        positions=positions,
        metrics=metrics,
        recommendations=_recommendations(roster, classification, aging_assets, config),
        strengths=strengths,
        weaknesses=weaknesses,
        outlook=playbook.outlook.format(years=years, years_end=years + 1),
    )
