"""Persist and load tuning profiles that override the default scoring tables."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Optional

from pydynasty.config import (
    DEFAULT_DIAGNOSIS_CONFIG,
    DEFAULT_DURABILITY_CONFIG,
    DiagnosisConfig,
    DurabilityConfig,
)
from pydynasty.models.injury import InjuryType
from pydynasty.models.roster import Position


@dataclass
class TuningProfile:
    current_season: Optional[int] = None
    games_per_season: Optional[int] = None
    type_weights: Dict[str, float] = field(default_factory=dict)
    starter_counts: Dict[str, int] = field(default_factory=dict)
    elite_score: Optional[float] = None
    young_age: Optional[int] = None

    @classmethod
    def load(cls, path: Path) -> "TuningProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            current_season=data.get("current_season"),
            games_per_season=data.get("games_per_season"),
            type_weights=data.get("type_weights", {}),
            starter_counts=data.get("starter_counts", {}),
            elite_score=data.get("elite_score"),
            young_age=data.get("young_age"),
        )

    def save(self, path: Path) -> None:
        payload = {
            "current_season": self.current_season,
            "games_per_season": self.games_per_season,
            "type_weights": self.type_weights,
            "starter_counts": self.starter_counts,
            "elite_score": self.elite_score,
            "young_age": self.young_age,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def durability_config(self, base: DurabilityConfig = DEFAULT_DURABILITY_CONFIG) -> DurabilityConfig:
        """Layer this profile on ``base``; unknown injury types raise ValueError."""

        overrides: Dict[str, object] = {}
        if self.current_season is not None:
            overrides["current_season"] = self.current_season
        if self.games_per_season is not None:
            overrides["games_per_season"] = self.games_per_season
        if self.type_weights:
            weights = dict(base.type_weights)
            for key, weight in self.type_weights.items():
                weights[InjuryType(key)] = float(weight)
            overrides["type_weights"] = MappingProxyType(weights)
        return replace(base, **overrides) if overrides else base

    def diagnosis_config(self, base: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG) -> DiagnosisConfig:
        """Layer this profile on ``base``; unknown positions raise ValueError."""

        overrides: Dict[str, object] = {}
        if self.starter_counts:
            counts = dict(base.starter_counts)
            for key, count in self.starter_counts.items():
                counts[Position(key.upper())] = int(count)
            overrides["starter_counts"] = MappingProxyType(counts)
        if self.elite_score is not None:
            overrides["elite_score"] = self.elite_score
        if self.young_age is not None:
            overrides["young_age"] = self.young_age
        return replace(base, **overrides) if overrides else base
