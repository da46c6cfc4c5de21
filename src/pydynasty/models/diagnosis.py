"""Team diagnosis outputs."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .roster import Position, RosterPlayer, Trend


class Classification(str, Enum):
    CONTENDER = "CONTENDER"
    REBUILD = "REBUILD"
    STUCK = "STUCK IN THE MIDDLE"


class WinNowVerdict(str, Enum):
    CHAMPIONSHIP_READY = "CHAMPIONSHIP READY"
    PLAYOFF_TEAM = "PLAYOFF TEAM"
    BUBBLE_TEAM = "BUBBLE TEAM"
    NOT_COMPETING = "NOT COMPETING"


StrengthRating = Literal["elite", "strong", "average", "weak", "dire"]


class PositionGroup(BaseModel):
    starters: List[RosterPlayer] = Field(default_factory=list)
    depth: List[RosterPlayer] = Field(default_factory=list)
    total_value: float = 0.0
    avg_age: float = 0.0
    avg_score: int = 0
    strength_rating: StrengthRating = "dire"

    model_config = ConfigDict(frozen=True)


class TeamMetrics(BaseModel):
    total_roster_value: float = 0.0
    avg_starter_age: float = 0.0
    avg_starter_score: int = 0
    elite_assets: int = 0
    young_assets: int = 0
    aging_assets: int = 0
    draft_capital: int = 0

    model_config = ConfigDict(frozen=True)


class Recommendations(BaseModel):
    moves: List[str] = Field(default_factory=list)
    targets: List[str] = Field(default_factory=list)
    sells: List[str] = Field(default_factory=list)
    holds: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ProductionStarter(BaseModel):
    name: str
    position: str
    season_ppg: float
    last4_ppg: float
    games_played: int
    trend: Trend

    model_config = ConfigDict(frozen=True)


class ProductionPositionGroup(BaseModel):
    starters: List[ProductionStarter] = Field(default_factory=list)
    avg_ppg: float = 0.0
    avg_last4_ppg: float = 0.0
    strength_rating: StrengthRating = "dire"
    position_rank: str = "Bottom Tier"

    model_config = ConfigDict(frozen=True)


class WinNowMetrics(BaseModel):
    projected_weekly_points: float = 0.0
    avg_starter_ppg: float = 0.0
    avg_last4_ppg: float = 0.0
    hot_players: int = 0
    cold_players: int = 0
    injured_starters: int = 0

    model_config = ConfigDict(frozen=True)


class WinNowAssessment(BaseModel):
    """Production-based view of whether the roster can win this season."""

    verdict: WinNowVerdict
    confidence: int
    summary: str
    positions: Dict[Position, ProductionPositionGroup]
    metrics: WinNowMetrics
    issues: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class DiagnosisComparison(BaseModel):
    dynasty_rating: StrengthRating
    win_now_rating: StrengthRating
    gap: str

    model_config = ConfigDict(frozen=True)


class TeamDiagnosis(BaseModel):
    """Strategy classification and supporting detail for one roster."""

    classification: Classification
    confidence: int = Field(..., ge=0, le=100)
    summary: str
    positions: Dict[Position, PositionGroup]
    metrics: TeamMetrics
    recommendations: Recommendations
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    outlook: str
    win_now: Optional[WinNowAssessment] = None
    comparison: Optional[DiagnosisComparison] = None

    model_config = ConfigDict(frozen=True)
