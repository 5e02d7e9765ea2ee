"""Pydantic models for API I/O."""

from .league import (
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

__all__ = [
    "CareerUploadResponse",
    "LeaderResponse",
    "LeagueViewResponse",
    "ParseResponse",
    "PlayerHistoryResponse",
    "PurgeResponse",
    "ReconcileRequest",
    "ResetResponse",
    "SeasonListResponse",
    "SeasonUploadResponse",
    "TeamAssignmentRequest",
    "TeamOverridesRequest",
    "TeamOverridesResponse",
]
