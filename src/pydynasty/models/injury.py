"""Injury history inputs and the durability analysis produced from them."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class InjuryType(str, Enum):
    """Injury categories; declaration order is the scan order for recurring issues."""

    KNEE_ACL = "knee_acl"
    CONCUSSION = "concussion"
    KNEE_OTHER = "knee_other"
    ANKLE_FOOT = "ankle_foot"
    SOFT_TISSUE = "soft_tissue"
    BACK = "back"
    SHOULDER = "shoulder"
    WRIST_HAND = "wrist_hand"
    RIBS = "ribs"
    ILLNESS = "illness"
    OTHER = "other"


DurabilityRating = Literal["iron_man", "durable", "moderate", "injury_prone", "glass", "unknown"]
RiskLevel = Literal["low", "medium", "high", "extreme"]


class InjuryRecord(BaseModel):
    """One injury in one season."""

    season: int
    type: InjuryType
    games_missed: int = Field(..., ge=0)
    is_major: bool = False
    description: str = ""

    model_config = ConfigDict(frozen=True)


class PlayerInjuryHistory(BaseModel):
    """Games played over the tracked seasons plus the injuries behind the misses."""

    games_played: Dict[int, int] = Field(default_factory=dict)
    injuries: List[InjuryRecord] = Field(default_factory=list)
    major_injury_date: Optional[str] = Field(default=None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    major_injury_type: Optional[str] = None
    is_currently_injured: Optional[bool] = None
    notes: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def games_in(self, season: int) -> int:
        return max(0, self.games_played.get(season, 0))


class MajorInjuryRecovery(BaseModel):
    injury: str
    months_since: int
    recovery_status: str

    model_config = ConfigDict(frozen=True)


class AgeInjuryRisk(BaseModel):
    level: RiskLevel
    description: str

    model_config = ConfigDict(frozen=True)


class DurabilityAnalysis(BaseModel):
    """Durability verdict for a single player."""

    games_played: int
    games_missed: int
    availability_rate: int = Field(..., ge=0, le=100)
    seasons_tracked: int = Field(..., ge=0)

    durability_rating: DurabilityRating
    durability_score: int = Field(..., ge=5, le=30)

    injury_types: Dict[InjuryType, int] = Field(default_factory=dict)
    has_recurring_issue: bool = False
    recurring_type: Optional[InjuryType] = None
    recurring_description: Optional[str] = None

    risk_factors: List[str] = Field(default_factory=list)
    severity_score: int = 0

    major_injury_recovery: Optional[MajorInjuryRecovery] = None
    age_injury_risk: Optional[AgeInjuryRisk] = None

    display_text: str
    short_display: str

    model_config = ConfigDict(frozen=True)
