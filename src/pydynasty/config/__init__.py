"""Configuration tables for durability scoring and team diagnosis."""

from .diagnosis import (
    DEFAULT_DIAGNOSIS_CONFIG,
    DiagnosisConfig,
    Playbook,
    ProductionThresholds,
    StrengthBand,
    get_playbook,
    iter_playbooks,
)
from .durability import (
    DEFAULT_DURABILITY_CONFIG,
    AgeRiskRule,
    DurabilityConfig,
    RatingBand,
    RecoveryStage,
    RecurringRule,
    durability_config_from_env,
)

__all__ = [
    "AgeRiskRule",
    "DEFAULT_DIAGNOSIS_CONFIG",
    "DEFAULT_DURABILITY_CONFIG",
    "DiagnosisConfig",
    "DurabilityConfig",
    "Playbook",
    "ProductionThresholds",
    "RatingBand",
    "RecoveryStage",
    "RecurringRule",
    "StrengthBand",
    "durability_config_from_env",
    "get_playbook",
    "iter_playbooks",
]
