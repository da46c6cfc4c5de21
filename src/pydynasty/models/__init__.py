"""Canonical models shared across the durability, diagnosis and API layers."""

from .diagnosis import (
    Classification,
    DiagnosisComparison,
    PositionGroup,
    ProductionPositionGroup,
    ProductionStarter,
    Recommendations,
    StrengthRating,
    TeamDiagnosis,
    TeamMetrics,
    WinNowAssessment,
    WinNowMetrics,
    WinNowVerdict,
)
from .injury import (
    AgeInjuryRisk,
    DurabilityAnalysis,
    DurabilityRating,
    InjuryRecord,
    InjuryType,
    MajorInjuryRecovery,
    PlayerInjuryHistory,
)
from .roster import (
    TRACKED_POSITIONS,
    DynastyValue,
    PlayerInput,
    Position,
    ProductionStats,
    RosterPlayer,
    SellWindowAlert,
)

__all__ = [
    "AgeInjuryRisk",
    "Classification",
    "DiagnosisComparison",
    "DurabilityAnalysis",
    "DurabilityRating",
    "DynastyValue",
    "InjuryRecord",
    "InjuryType",
    "MajorInjuryRecovery",
    "PlayerInjuryHistory",
    "PlayerInput",
    "Position",
    "PositionGroup",
    "ProductionPositionGroup",
    "ProductionStarter",
    "ProductionStats",
    "Recommendations",
    "RosterPlayer",
    "SellWindowAlert",
    "StrengthRating",
    "TRACKED_POSITIONS",
    "TeamDiagnosis",
    "TeamMetrics",
    "WinNowAssessment",
    "WinNowMetrics",
    "WinNowVerdict",
]
