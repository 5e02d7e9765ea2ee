"""REST API for league uploads and season history."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI, File, Form, HTTPException, Query, UploadFile

from retrovault.api.schemas import (
    CareerUploadResponse,
    LeaderResponse,
    LeagueViewResponse,
    ParseResponse,
    PlayerHistoryResponse,
    PurgeResponse,
    ReconcileRequest,
    ResetResponse,
    SeasonListResponse,
    SeasonUploadResponse,
    TeamAssignmentRequest,
    TeamOverridesRequest,
    TeamOverridesResponse,
)
from retrovault.config import get_schema
from retrovault.config_loader import LeagueSettings
from retrovault.ingest import assemble
from retrovault.models import PlayerEdit, SeasonSnapshot, make_player_key
from retrovault.persistence import KeyValueStore
from retrovault.seasons import reconcile_manual_seasons
from retrovault.service import LeagueService


logger = logging.getLogger(__name__)


async def _read_upload(upload: UploadFile) -> str:
    contents = await upload.read()
    if not contents or not contents.strip():
        raise HTTPException(status_code=400, detail=f"{upload.filename or 'upload'} is empty")
    return contents.decode("utf-8-sig", errors="replace")


def _schema_or_404(position: str):
    try:
        return get_schema(position)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown position {position!r}") from exc


def create_app(db_path: Path | str | None = None, settings: LeagueSettings | None = None) -> FastAPI:
    settings = settings or LeagueSettings.from_env()
    app = FastAPI(title="retrovault")
    store = KeyValueStore(db_path or settings.resolved_db_path())
    service = LeagueService(store, settings)
    app.state.store = store
    app.state.service = service

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/parse", response_model=ParseResponse)
    async def parse(blob: UploadFile = File(...)) -> ParseResponse:
        league = assemble(await _read_upload(blob))
        return ParseResponse(counts=league.counts(), league=league)

    @app.post("/career", response_model=CareerUploadResponse)
    async def upload_career(blob: UploadFile = File(...)) -> CareerUploadResponse:
        career = service.load_career(await _read_upload(blob))
        return CareerUploadResponse(counts=career.counts(), career=career)

    @app.post("/seasons", response_model=SeasonUploadResponse)
    async def upload_season(
        blob: UploadFile = File(...),
        season: str = Form(...),
    ) -> SeasonUploadResponse:
        csv_text = await _read_upload(blob)
        try:
            upload = service.load_season(csv_text, season)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return SeasonUploadResponse(
            season=upload.season,
            counts=upload.career.counts(),
            has_baseline=upload.previous is not None,
            season_data=upload.season_data,
        )

    @app.get("/career", response_model=LeagueViewResponse)
    async def career() -> LeagueViewResponse:
        league = service.career_data()
        if league is None:
            raise HTTPException(status_code=404, detail="No career export loaded")
        return LeagueViewResponse(
            season=service.current_season() or None,
            counts=league.counts(),
            league=league,
        )

    @app.get("/seasons/current", response_model=LeagueViewResponse)
    async def current_season() -> LeagueViewResponse:
        season = service.current_season()
        league = service.season_data()
        if league is None:
            raise HTTPException(status_code=404, detail="No season recorded")
        return LeagueViewResponse(season=season, counts=league.counts(), league=league)

    @app.get("/seasons", response_model=SeasonListResponse)
    async def list_seasons() -> SeasonListResponse:
        return SeasonListResponse(
            seasons=service.available_seasons(),
            current_season=service.current_season() or None,
        )

    @app.delete("/seasons/{season}", response_model=PurgeResponse)
    async def purge_season(season: str) -> PurgeResponse:
        removed = service.purge_season(season)
        return PurgeResponse(removed=removed, current_season=service.current_season() or None)

    @app.get("/players/{position}/{name}/history", response_model=PlayerHistoryResponse)
    async def player_history(position: str, name: str) -> PlayerHistoryResponse:
        schema = _schema_or_404(position)
        return PlayerHistoryResponse(
            key=make_player_key(schema.position, name),
            seasons=service.player_history(schema.position, name),
        )

    @app.post("/players/{position}/{name}/reconcile", response_model=list[SeasonSnapshot])
    async def reconcile(position: str, name: str, request: ReconcileRequest) -> list[SeasonSnapshot]:
        schema = _schema_or_404(position)
        logger.debug("Previewing %d manual seasons for %s", len(request.entries), make_player_key(schema.position, name))
        return reconcile_manual_seasons(schema.position, request.entries)

    @app.put("/players/edits")
    async def save_edit(edit: PlayerEdit) -> dict[str, Any]:
        seasons = service.save_player_edit(edit)
        return {
            "key": edit.key,
            "seasons": [snapshot.model_dump() for snapshot in seasons],
        }

    @app.delete("/players/{position}/{name}")
    async def delete_player(position: str, name: str) -> dict[str, str]:
        schema = _schema_or_404(position)
        service.delete_player_edit(schema.position, name)
        return {"key": make_player_key(schema.position, name), "status": "deleted"}

    @app.get("/leaders/{position}", response_model=dict[str, LeaderResponse])
    async def leaders(
        position: str,
        scope: str = Query("career"),
        active_only: bool = Query(False),
    ) -> dict[str, LeaderResponse]:
        schema = _schema_or_404(position)
        try:
            found = service.leaders(schema.position, scope=scope, active_only=active_only)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {stat: LeaderResponse(name=leader.name, value=leader.value) for stat, leader in found.items()}

    @app.get("/teams", response_model=TeamOverridesResponse)
    async def team_overrides() -> TeamOverridesResponse:
        return TeamOverridesResponse(overrides=service.team_overrides())

    @app.put("/teams", response_model=TeamOverridesResponse)
    async def merge_team_overrides(request: TeamOverridesRequest) -> TeamOverridesResponse:
        return TeamOverridesResponse(overrides=service.merge_team_overrides(request.overrides))

    @app.post("/teams/{position}", response_model=TeamOverridesResponse)
    async def assign_teams(position: str, request: TeamAssignmentRequest) -> TeamOverridesResponse:
        schema = _schema_or_404(position)
        try:
            overrides = service.assign_teams(schema.position, request.teams)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return TeamOverridesResponse(overrides=overrides)

    @app.delete("/data", response_model=ResetResponse)
    async def reset() -> ResetResponse:
        return ResetResponse(cleared=service.reset())

    return app
