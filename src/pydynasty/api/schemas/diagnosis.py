from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from pydynasty.models import RosterPlayer, TeamDiagnosis


class DiagnoseRequest(BaseModel):
    players: List[RosterPlayer] = Field(default_factory=list)


class DiagnoseResponse(TeamDiagnosis):
    pass
