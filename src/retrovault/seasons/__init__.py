"""Season reconciliation: snapshot diffs and manual season entry."""

from .diff import diff_league_data, season_delta, season_from_first_upload, zero_counters
from .history import (
    available_seasons,
    history_from_json,
    history_to_json,
    purge_seasons,
    reconcile_manual_seasons,
    record_league_season,
    remove_player,
    season_order,
    season_sort_key,
    set_player_seasons,
    snapshot_from_player,
    sort_seasons,
)

__all__ = [
    "available_seasons",
    "diff_league_data",
    "history_from_json",
    "history_to_json",
    "purge_seasons",
    "reconcile_manual_seasons",
    "record_league_season",
    "remove_player",
    "season_delta",
    "season_from_first_upload",
    "season_order",
    "season_sort_key",
    "set_player_seasons",
    "snapshot_from_player",
    "sort_seasons",
    "zero_counters",
]
