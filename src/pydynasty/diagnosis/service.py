"""Roster analysis built on injected injury, value and sell-window providers."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from pydynasty.config.diagnosis import DEFAULT_DIAGNOSIS_CONFIG, DiagnosisConfig
from pydynasty.config.durability import DEFAULT_DURABILITY_CONFIG, DurabilityConfig
from pydynasty.durability import analyze_durability
from pydynasty.models.diagnosis import TeamDiagnosis
from pydynasty.models.injury import PlayerInjuryHistory
from pydynasty.models.roster import (
    TRACKED_POSITIONS,
    DynastyValue,
    PlayerInput,
    ProductionStats,
    RosterPlayer,
    SellWindowAlert,
)

from .classifier import diagnose_team
from .win_now import compare_outlooks, diagnose_win_now


logger = logging.getLogger(__name__)

DEFAULT_AGE = 25

InjuryHistoryLookup = Callable[[str], Optional[PlayerInjuryHistory]]
DynastyValueProvider = Callable[[PlayerInput], DynastyValue]
SellWindowProvider = Callable[[PlayerInput], SellWindowAlert]
ProductionProvider = Callable[[Sequence[PlayerInput]], Mapping[str, ProductionStats]]


class UnsupportedPositionError(ValueError):
    """Raised in strict mode when roster entries sit outside QB/RB/WR/TE."""

    def __init__(self, players: Sequence[PlayerInput]):
        listing = ", ".join(f"{player.name} ({player.position})" for player in players)
        super().__init__(f"Unsupported positions: {listing}")
        self.players = list(players)


def _as_input(player: PlayerInput | Mapping[str, Any]) -> PlayerInput:
    if isinstance(player, PlayerInput):
        return player
    return PlayerInput.model_validate(player)


def score_player(
    player: PlayerInput,
    *,
    injury_lookup: InjuryHistoryLookup,
    value_provider: DynastyValueProvider,
    sell_window_provider: SellWindowProvider,
    production: Optional[ProductionStats] = None,
    durability_config: DurabilityConfig = DEFAULT_DURABILITY_CONFIG,
    as_of: Optional[date] = None,
) -> RosterPlayer:
    """Attach durability, dynasty value and sell window to one roster entry."""

    # An age of 0 means the source did not know it.
    age = player.age or DEFAULT_AGE
    durability = analyze_durability(
        injury_lookup(player.name),
        age,
        config=durability_config,
        as_of=as_of,
    )
    return RosterPlayer(
        name=player.name,
        position=player.position,
        age=age,
        player_id=player.player_id,
        dynasty_value=value_provider(player),
        sell_window=sell_window_provider(player),
        durability=durability,
        production=production,
    )


def analyze_roster(
    players: Iterable[PlayerInput | Mapping[str, Any]],
    *,
    injury_lookup: InjuryHistoryLookup,
    value_provider: DynastyValueProvider,
    sell_window_provider: SellWindowProvider,
    production_provider: Optional[ProductionProvider] = None,
    strict_positions: bool = False,
    durability_config: DurabilityConfig = DEFAULT_DURABILITY_CONFIG,
    diagnosis_config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
    as_of: Optional[date] = None,
) -> TeamDiagnosis:
    """Score every player and diagnose the roster.

    Players outside QB/RB/WR/TE still count toward roster-wide metrics but
    never start; ``strict_positions`` rejects them instead. When a
    production provider is given the result also carries the win-now
    assessment and the dynasty / win-now comparison.
    """

    inputs = [_as_input(player) for player in players]

    unsupported = [player for player in inputs if player.position not in TRACKED_POSITIONS]
    if unsupported:
        if strict_positions:
            raise UnsupportedPositionError(unsupported)
        logger.info(
            "%d players outside tracked positions will not be grouped: %s",
            len(unsupported),
            ", ".join(player.name for player in unsupported),
        )

    production: Mapping[str, ProductionStats] = {}
    if production_provider is not None:
        try:
            production = production_provider(inputs)
        except Exception as exc:
            logger.warning("Could not fetch production stats: %s", exc)

    roster = [
        score_player(
            player,
            injury_lookup=injury_lookup,
            value_provider=value_provider,
            sell_window_provider=sell_window_provider,
            production=production.get(player.name),
            durability_config=durability_config,
            as_of=as_of,
        )
        for player in inputs
    ]

    diagnosis = diagnose_team(roster, config=diagnosis_config)
    if production_provider is None:
        return diagnosis

    win_now = diagnose_win_now(roster, config=diagnosis_config)
    return diagnosis.model_copy(
        update={
            "win_now": win_now,
            "comparison": compare_outlooks(diagnosis, win_now, config=diagnosis_config),
        }
    )
