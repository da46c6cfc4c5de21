"""Helpers to load roster CSVs and injury-history JSON into canonical inputs."""

from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ValidationError

from pydynasty.models import (
    DynastyValue,
    PlayerInjuryHistory,
    PlayerInput,
    ProductionStats,
    SellWindowAlert,
)


logger = logging.getLogger(__name__)

DEFAULT_URGENCY = "HOLD"

DEFAULT_ROSTER_MAPPING = {
    "player_id": "player_id",
    "name": "name",
    "position": "position",
    "age": "age",
    "overall_score": "overall_score",
    "elite_years": "elite_years",
    "urgency": "urgency",
    "sell_reason": "sell_reason",
    "season_ppg": "season_ppg",
    "last4_ppg": "last4_ppg",
    "games_played": "games_played",
    "trend": "trend",
}


class RosterRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: str
    raw_position: str
    raw_age: Optional[str] = None
    raw_score: str = "0"
    raw_elite_years: Optional[str] = None
    raw_urgency: Optional[str] = None
    raw_sell_reason: Optional[str] = None
    raw_season_ppg: Optional[str] = None
    raw_last4_ppg: Optional[str] = None
    raw_games_played: Optional[str] = None
    raw_trend: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(key: str, *, default: Optional[str] = None) -> Optional[str]:
            spec = mapping.get(key)
            if spec is None:
                return default
            if "|" in spec:
                parts = [row.get(col.strip(), "").strip() for col in spec.split("|")]
                parts = [part for part in parts if part]
                return " ".join(parts) if parts else default
            value = row.get(spec)
            if value is None or not value.strip():
                return default
            return value.strip()

        return cls(
            raw_id=extract("player_id"),
            raw_name=extract("name", default=""),
            raw_position=extract("position", default=""),
            raw_age=extract("age"),
            raw_score=extract("overall_score", default="0"),
            raw_elite_years=extract("elite_years"),
            raw_urgency=extract("urgency"),
            raw_sell_reason=extract("sell_reason"),
            raw_season_ppg=extract("season_ppg"),
            raw_last4_ppg=extract("last4_ppg"),
            raw_games_played=extract("games_played"),
            raw_trend=extract("trend"),
        )


def load_roster_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[RosterRow]:
    mapping = mapping or DEFAULT_ROSTER_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [RosterRow.from_mapping(row, mapping) for row in reader]
    return rows


def _parse_number(raw: Optional[str], label: str, *, default: float | None = None) -> float:
    text = (raw or "").strip()
    if not text:
        if default is not None:
            return default
        raise ValueError(f"{label} is missing")
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"{label} '{raw}' is not numeric") from None


def _parse_age(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    return int(_parse_number(raw, "age"))


def rows_to_inputs(rows: Sequence[RosterRow]) -> List[PlayerInput]:
    """Convert rows into roster entries; nameless rows are skipped."""

    inputs: List[PlayerInput] = []
    for row in rows:
        if not row.raw_name:
            logger.debug("Skipping roster row without a name: %s", row)
            continue
        inputs.append(
            PlayerInput(
                name=row.raw_name,
                position=row.raw_position.upper(),
                age=_parse_age(row.raw_age),
                player_id=row.raw_id,
            )
        )
    return inputs


def _row_production(row: RosterRow) -> Optional[ProductionStats]:
    if not row.raw_season_ppg or not row.raw_last4_ppg:
        return None
    return ProductionStats(
        season_ppg=_parse_number(row.raw_season_ppg, "season_ppg"),
        last4_ppg=_parse_number(row.raw_last4_ppg, "last4_ppg"),
        games_played=int(_parse_number(row.raw_games_played, "games_played", default=0)),
        trend=(row.raw_trend or "neutral").lower(),
    )


@dataclass
class RosterSource:
    """Per-player values read from the roster file, exposed as providers."""

    rows: Dict[str, RosterRow] = field(default_factory=dict)

    @classmethod
    def from_rows(cls, rows: Iterable[RosterRow]) -> "RosterSource":
        return cls(rows={row.raw_name: row for row in rows if row.raw_name})

    def _row(self, player: PlayerInput) -> RosterRow:
        try:
            return self.rows[player.name]
        except KeyError:
            raise KeyError(f"No roster row for player {player.name!r}") from None

    def dynasty_value(self, player: PlayerInput) -> DynastyValue:
        row = self._row(player)
        return DynastyValue(
            overall_score=_parse_number(row.raw_score, "overall_score", default=0.0),
            years_of_elite_production=_parse_number(row.raw_elite_years, "elite_years", default=0.0),
        )

    def sell_window(self, player: PlayerInput) -> SellWindowAlert:
        row = self._row(player)
        return SellWindowAlert(
            urgency=(row.raw_urgency or DEFAULT_URGENCY).upper(),
            reason=row.raw_sell_reason or "",
        )

    def production(self, players: Sequence[PlayerInput]) -> Dict[str, ProductionStats]:
        stats: Dict[str, ProductionStats] = {}
        for player in players:
            row = self.rows.get(player.name)
            if row is None:
                continue
            production = _row_production(row)
            if production is not None:
                stats[player.name] = production
        return stats

    def has_production(self) -> bool:
        return any(_row_production(row) is not None for row in self.rows.values())


class InjuryHistoryStore:
    """Injury histories keyed by player name with forgiving name lookup."""

    def __init__(self, histories: Mapping[str, PlayerInjuryHistory] | None = None):
        self._histories: Dict[str, PlayerInjuryHistory] = dict(histories or {})

    def __len__(self) -> int:
        return len(self._histories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __call__(self, name: str) -> Optional[PlayerInjuryHistory]:
        return self.get(name)

    def get(self, name: str) -> Optional[PlayerInjuryHistory]:
        """Exact match, then case-insensitive, then either name containing the other."""

        if name in self._histories:
            return self._histories[name]
        search = name.lower()
        for key, history in self._histories.items():
            if key.lower() == search:
                return history
        for key, history in self._histories.items():
            lowered = key.lower()
            if search in lowered or lowered in search:
                logger.debug("Matched injury history %r for %r by substring", key, name)
                return history
        return None


def load_injury_histories(path: Path) -> InjuryHistoryStore:
    """Read a JSON object of ``{player name: injury history}``."""

    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"{path} must contain a JSON object keyed by player name")
    histories: Dict[str, PlayerInjuryHistory] = {}
    for name, raw in payload.items():
        try:
            histories[name] = PlayerInjuryHistory.model_validate(raw)
        except ValidationError as exc:
            raise ValueError(f"Invalid injury history for {name!r}: {exc}") from exc
    return InjuryHistoryStore(histories)
