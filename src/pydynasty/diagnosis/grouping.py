"""Position grouping and per-position strength."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from pydynasty.config.diagnosis import DEFAULT_DIAGNOSIS_CONFIG, DiagnosisConfig
from pydynasty.formatting import mean_or_zero, round_half_up, round_tenth
from pydynasty.models.diagnosis import PositionGroup
from pydynasty.models.roster import TRACKED_POSITIONS, Position, RosterPlayer


def group_by_position(players: Iterable[RosterPlayer]) -> Dict[Position, List[RosterPlayer]]:
    """Bucket players by tracked position, best dynasty value first.

    Players at any other position (K, DEF, ...) are left out.
    """

    groups: Dict[Position, List[RosterPlayer]] = {position: [] for position in Position}
    for player in players:
        if player.position in TRACKED_POSITIONS:
            groups[Position(player.position)].append(player)

    for members in groups.values():
        members.sort(key=lambda player: player.score, reverse=True)
    return groups


def build_position_group(
    players: Sequence[RosterPlayer],
    starter_count: int,
    *,
    config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> PositionGroup:
    """Split an already sorted position list into starters and depth."""

    starters = list(players[:starter_count])
    depth = list(players[starter_count:])
    avg_score = mean_or_zero(player.score for player in starters)
    avg_age = mean_or_zero(player.age for player in starters)

    return PositionGroup(
        starters=starters,
        depth=depth,
        total_value=sum(player.score for player in players),
        avg_age=round_tenth(avg_age),
        avg_score=round_half_up(avg_score),
        strength_rating=config.strength_for(avg_score),
    )


def build_position_groups(
    players: Iterable[RosterPlayer],
    *,
    config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> Dict[Position, PositionGroup]:
    grouped = group_by_position(players)
    return {
        position: build_position_group(grouped[position], config.starter_count(position), config=config)
        for position in Position
    }
