"""REST API for durability scoring and team diagnosis."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from pydynasty.api.schemas import (
    DiagnoseRequest,
    DiagnoseResponse,
    DurabilityRequest,
    DurabilityResponse,
)
from pydynasty.config import (
    DEFAULT_DIAGNOSIS_CONFIG,
    DiagnosisConfig,
    DurabilityConfig,
    durability_config_from_env,
)
from pydynasty.diagnosis import compare_outlooks, diagnose_team, diagnose_win_now
from pydynasty.durability import analyze_durability, get_durability_color


logger = logging.getLogger(__name__)


def create_app(
    *,
    durability_config: DurabilityConfig | None = None,
    diagnosis_config: DiagnosisConfig = DEFAULT_DIAGNOSIS_CONFIG,
) -> FastAPI:
    app = FastAPI(title="pydynasty")
    app.state.durability_config = durability_config or durability_config_from_env()
    app.state.diagnosis_config = diagnosis_config

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/durability", response_model=DurabilityResponse)
    async def durability(request: DurabilityRequest) -> DurabilityResponse:
        analysis = analyze_durability(
            request.history,
            request.age,
            config=app.state.durability_config,
            as_of=request.as_of,
        )
        return DurabilityResponse(
            **analysis.model_dump(),
            color=get_durability_color(analysis.durability_rating),
        )

    @app.post("/diagnose", response_model=DiagnoseResponse)
    async def diagnose(request: DiagnoseRequest) -> DiagnoseResponse:
        if not request.players:
            raise HTTPException(status_code=400, detail="players list is empty")

        config = app.state.diagnosis_config
        diagnosis = diagnose_team(request.players, config=config)
        update = {}
        if any(player.production is not None for player in request.players):
            win_now = diagnose_win_now(request.players, config=config)
            update = {
                "win_now": win_now,
                "comparison": compare_outlooks(diagnosis, win_now, config=config),
            }
        logger.info(
            "Diagnosed %d players as %s",
            len(request.players),
            diagnosis.classification.value,
        )
        return DiagnoseResponse.model_validate({**diagnosis.model_dump(), **update})

    return app
