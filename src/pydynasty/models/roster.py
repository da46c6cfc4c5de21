"""Roster-level player records and the externally computed scores attached to them."""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .injury import DurabilityAnalysis


class Position(str, Enum):
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"


TRACKED_POSITIONS: frozenset[str] = frozenset(position.value for position in Position)

Trend = Literal["hot", "warm", "neutral", "cold", "ice"]


class DynastyValue(BaseModel):
    """Long-horizon value score from the valuation service.

    Only ``overall_score`` and ``years_of_elite_production`` are read here;
    any other fields the provider returns are kept as-is.
    """

    overall_score: float
    years_of_elite_production: float = 0

    model_config = ConfigDict(frozen=True, extra="allow")


class SellWindowAlert(BaseModel):
    """Trade-timing signal (``SELL NOW``, ``SELL SOON``, ``HOLD``, ``BUY LOW`` ...)."""

    urgency: str
    reason: str = ""

    model_config = ConfigDict(frozen=True, extra="allow")


class ProductionStats(BaseModel):
    """Current-season fantasy production used by the win-now assessment."""

    season_ppg: float = Field(..., ge=0.0)
    last4_ppg: float = Field(..., ge=0.0)
    games_played: int = Field(..., ge=0)
    trend: Trend = "neutral"

    model_config = ConfigDict(frozen=True)


class PlayerInput(BaseModel):
    """Caller-supplied roster entry before any scoring."""

    name: str = Field(..., min_length=1)
    position: str
    age: Optional[int] = Field(default=None, ge=0)
    player_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class RosterPlayer(BaseModel):
    """Fully scored roster entry consumed by the team diagnosis."""

    name: str
    position: str
    age: int = Field(..., ge=0)
    dynasty_value: DynastyValue
    sell_window: SellWindowAlert
    player_id: Optional[str] = None
    durability: Optional[DurabilityAnalysis] = None
    production: Optional[ProductionStats] = None

    model_config = ConfigDict(frozen=True)

    @property
    def score(self) -> float:
        return self.dynasty_value.overall_score

    @property
    def urgency(self) -> str:
        return self.sell_window.urgency
