from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from pydynasty.models import DurabilityAnalysis, PlayerInjuryHistory


class DurabilityRequest(BaseModel):
    history: Optional[PlayerInjuryHistory] = None
    age: Optional[int] = Field(default=None, ge=0)
    as_of: Optional[date] = None


class DurabilityResponse(DurabilityAnalysis):
    color: str
