"""Production-based win-now assessment and its comparison with the dynasty outlook."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from pydynasty.config.diagnosis import DEFAULT_DIAGNOSIS_CONFIG, DiagnosisConfig
from pydynasty.formatting import format_number, mean_or_zero, round_half_up, round_tenth
from pydynasty.models.diagnosis import (
    Classification,
    DiagnosisComparison,
    ProductionPositionGroup,
    ProductionStarter,
    StrengthRating,
    TeamDiagnosis,
    WinNowAssessment,
    WinNowMetrics,
    WinNowVerdict,
)
from pydynasty.models.roster import TRACKED_POSITIONS, Position, RosterPlayer


_RATING_ORDER: Sequence[StrengthRating] = ("dire", "weak", "average", "strong", "elite")


def production_strength(
    avg_ppg: float,
    position: Position,
    *,
    config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> StrengthRating:
    thresholds = config.production_thresholds.get(position, config.production_thresholds[Position.WR])
    for band in thresholds.bands():
        if avg_ppg >= band.min_value:
            return band.rating
    return config.floor_strength


def build_production_group(
    players: Sequence[RosterPlayer],
    starter_count: int,
    position: Position,
    *,
    config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> ProductionPositionGroup:
    """Pick starters by recent-weighted production; players without stats are skipped."""

    with_production = [player for player in players if player.production is not None]
    with_production.sort(
        key=lambda player: (
            player.production.season_ppg * config.season_ppg_weight
            + player.production.last4_ppg * config.last4_ppg_weight
        ),
        reverse=True,
    )

    starters = [
        ProductionStarter(
            name=player.name,
            position=player.position,
            season_ppg=player.production.season_ppg,
            last4_ppg=player.production.last4_ppg,
            games_played=player.production.games_played,
            trend=player.production.trend,
        )
        for player in with_production[:starter_count]
    ]
    avg_ppg = mean_or_zero(starter.season_ppg for starter in starters)
    avg_last4 = mean_or_zero(starter.last4_ppg for starter in starters)
    strength = production_strength(avg_ppg, position, config=config)

    return ProductionPositionGroup(
        starters=starters,
        avg_ppg=round_tenth(avg_ppg),
        avg_last4_ppg=round_tenth(avg_last4),
        strength_rating=strength,
        position_rank=config.production_ranks[strength],
    )


def diagnose_win_now(
    players: Iterable[RosterPlayer],
    *,
    config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> WinNowAssessment:
    """Judge whether this season's production can win a title."""

    grouped: Dict[Position, List[RosterPlayer]] = {position: [] for position in Position}
    for player in players:
        if player.position in TRACKED_POSITIONS:
            grouped[Position(player.position)].append(player)

    positions = {
        position: build_production_group(
            grouped[position], config.starter_count(position), position, config=config
        )
        for position in Position
    }
    starters = [starter for position in Position for starter in positions[position].starters]

    avg_ppg = mean_or_zero(starter.season_ppg for starter in starters)
    avg_last4 = mean_or_zero(starter.last4_ppg for starter in starters)
    hot_players = sum(1 for starter in starters if starter.trend in config.hot_trends)
    cold_players = sum(1 for starter in starters if starter.trend in config.cold_trends)
    injured_starters = sum(1 for starter in starters if starter.games_played < config.injured_games_max)
    projected_points = avg_ppg * config.weekly_starters

    metrics = WinNowMetrics(
        projected_weekly_points=round_tenth(projected_points),
        avg_starter_ppg=round_tenth(avg_ppg),
        avg_last4_ppg=round_tenth(avg_last4),
        hot_players=hot_players,
        cold_players=cold_players,
        injured_starters=injured_starters,
    )

    ratings = [group.strength_rating for group in positions.values()]
    elite_positions = sum(1 for rating in ratings if rating == "elite")
    weak_positions = sum(1 for rating in ratings if rating in config.weak_ratings)

    if (
        projected_points >= config.championship_points
        and elite_positions >= 2
        and weak_positions == 0
    ):
        verdict = WinNowVerdict.CHAMPIONSHIP_READY
        confidence = min(90, 70 + elite_positions * 5 + hot_players * 2)
        summary = (
            f"Elite production across the board. {hot_players} starters trending up. "
            "Championship ceiling."
        )
    elif projected_points >= config.playoff_points and weak_positions <= 1:
        verdict = WinNowVerdict.PLAYOFF_TEAM
        confidence = min(85, 60 + elite_positions * 5)
        summary = (
            f"Solid production with {elite_positions} elite position group(s). "
            "Playoff-caliber roster."
        )
    elif projected_points >= config.bubble_points or (elite_positions >= 1 and weak_positions <= 2):
        verdict = WinNowVerdict.BUBBLE_TEAM
        confidence = 65
        summary = f"Inconsistent production. {weak_positions} weak position group(s) hurting ceiling."
    else:
        verdict = WinNowVerdict.NOT_COMPETING
        confidence = 75
        summary = (
            f"Below-average production ({format_number(metrics.avg_starter_ppg)} PPG). "
            "Not a playoff contender this year."
        )

    issues: List[str] = []
    strengths: List[str] = []
    for position in Position:
        group = positions[position]
        avg = format_number(group.avg_ppg)
        if group.strength_rating in config.strong_ratings:
            strengths.append(f"{position.value}: {avg} PPG ({group.position_rank})")
        if group.strength_rating in config.weak_ratings:
            issues.append(f"{position.value} production is {group.strength_rating} ({avg} PPG)")

    if cold_players >= 2:
        issues.append(f"{cold_players} starters trending cold - recent performance declining")
    if injured_starters >= 2:
        issues.append(f"{injured_starters} starters have missed significant time")
    if hot_players >= 3:
        strengths.append(f"{hot_players} starters are hot - momentum heading into playoffs")

    if avg_ppg > 0:
        if avg_last4 > avg_ppg * (1 + config.trend_margin):
            change = (avg_last4 / avg_ppg - 1) * 100
            strengths.append(f"Team trending UP - last 4 weeks {round_half_up(change)}% better than season avg")
        elif avg_last4 < avg_ppg * (1 - config.trend_margin):
            change = (1 - avg_last4 / avg_ppg) * 100
            issues.append(f"Team trending DOWN - last 4 weeks {round_half_up(change)}% worse than season avg")

    return WinNowAssessment(
        verdict=verdict,
        confidence=confidence,
        summary=summary,
        positions=positions,
        metrics=metrics,
        issues=issues,
        strengths=strengths,
    )


def dynasty_rating(classification: Classification, avg_starter_score: float) -> StrengthRating:
    if classification == Classification.CONTENDER:
        return "elite" if avg_starter_score >= 75 else "strong"
    if classification == Classification.REBUILD:
        return "dire" if avg_starter_score < 40 else "weak"
    return "average"


def win_now_rating(
    assessment: WinNowAssessment,
    *,
    config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> StrengthRating:
    if assessment.verdict == WinNowVerdict.CHAMPIONSHIP_READY:
        return "elite"
    if assessment.verdict == WinNowVerdict.PLAYOFF_TEAM:
        return "strong"
    if assessment.verdict == WinNowVerdict.BUBBLE_TEAM:
        return "average"
    return "dire" if assessment.metrics.avg_starter_ppg < config.dire_ppg else "weak"


def comparison_gap(dynasty: StrengthRating, win_now: StrengthRating) -> str:
    gap = _RATING_ORDER.index(dynasty) - _RATING_ORDER.index(win_now)
    if gap >= 2:
        return (
            f"Dynasty {dynasty.upper()} but Win Now {win_now.upper()} - "
            "assets haven't produced yet"
        )
    if gap <= -2:
        return (
            f"Win Now {win_now.upper()} but Dynasty {dynasty.upper()} - "
            "aging core overperforming"
        )
    if gap == 1:
        return "Dynasty slightly ahead - young talent developing"
    if gap == -1:
        return "Win Now slightly ahead - maximize this window"
    return f"Aligned - {dynasty.upper()} in both dynasty value and production"


def compare_outlooks(
    diagnosis: TeamDiagnosis,
    assessment: WinNowAssessment,
    *,
    config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> DiagnosisComparison:
    dynasty = dynasty_rating(diagnosis.classification, diagnosis.metrics.avg_starter_score)
    win_now = win_now_rating(assessment, config=config)
    return DiagnosisComparison(
        dynasty_rating=dynasty,
        win_now_rating=win_now,
        gap=comparison_gap(dynasty, win_now),
    )
