from __future__ import annotations

from pydantic import BaseModel, Field

from retrovault.models import LeagueData, SeasonEntry, SeasonSnapshot


class ParseResponse(BaseModel):
    counts: dict[str, int]
    league: LeagueData


class CareerUploadResponse(BaseModel):
    counts: dict[str, int]
    career: LeagueData


class SeasonUploadResponse(BaseModel):
    season: str
    counts: dict[str, int]
    has_baseline: bool
    season_data: LeagueData


class SeasonListResponse(BaseModel):
    seasons: list[str]
    current_season: str | None = None


class PurgeResponse(BaseModel):
    removed: list[str]
    current_season: str | None = None


class PlayerHistoryResponse(BaseModel):
    key: str
    seasons: list[SeasonSnapshot] = Field(default_factory=list)


class ReconcileRequest(BaseModel):
    entries: list[SeasonEntry] = Field(default_factory=list)


class LeagueViewResponse(BaseModel):
    season: str | None = None
    counts: dict[str, int]
    league: LeagueData


class LeaderResponse(BaseModel):
    name: str
    value: float


class TeamOverridesRequest(BaseModel):
    overrides: dict[str, str] = Field(default_factory=dict)


class TeamAssignmentRequest(BaseModel):
    teams: str


class TeamOverridesResponse(BaseModel):
    overrides: dict[str, str] = Field(default_factory=dict)


class ResetResponse(BaseModel):
    cleared: dict[str, int]
