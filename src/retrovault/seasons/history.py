"""Per-player season history: ordering, recording, and manual reconciliation."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from retrovault.config import get_schema
from retrovault.models import (
    BasePlayer,
    EntryMode,
    LeagueData,
    PlayerSeasonHistory,
    Position,
    SeasonEntry,
    SeasonSnapshot,
    player_key,
)


logger = logging.getLogger(__name__)

_DIGITS = "0123456789"


def season_order(label: Optional[str]) -> Optional[int]:
    """Return the integer formed by the label's trailing digits, if any.

    >>> season_order("Y31")
    31
    >>> season_order("Preseason") is None
    True
    """

    text = (label or "").strip()
    start = len(text)
    while start > 0 and text[start - 1] in _DIGITS:
        start -= 1
    if start == len(text):
        return None
    return int(text[start:])


def season_sort_key(label: Optional[str]) -> int:
    order = season_order(label)
    return order if order is not None else 0


def sort_seasons(labels: Iterable[str]) -> List[str]:
    return sorted(set(labels), key=lambda label: (season_sort_key(label), label))


def _sorted_snapshots(snapshots: Iterable[SeasonSnapshot]) -> List[SeasonSnapshot]:
    return sorted(snapshots, key=lambda snap: season_sort_key(snap.season))


def snapshot_from_player(player: BasePlayer, season: str) -> SeasonSnapshot:
    """Capture a season-local player record as a history snapshot."""

    schema = get_schema(getattr(player, "position"))
    return SeasonSnapshot(
        season=season,
        stats={field: float(getattr(player, field)) for field in schema.season_fields},
    )


def record_league_season(
    history: Mapping[str, Sequence[SeasonSnapshot]],
    season_data: LeagueData,
    season: str,
) -> PlayerSeasonHistory:
    """Add ``season`` for every player who played in it.

    Players who already have a snapshot for ``season`` keep it untouched.
    """

    updated: PlayerSeasonHistory = {key: list(snaps) for key, snaps in history.items()}
    added = 0
    for player in season_data.iter_players():
        if player.games <= 0:
            continue
        key = player_key(player)
        snapshots = updated.setdefault(key, [])
        if any(snap.season == season for snap in snapshots):
            continue
        snapshots.append(snapshot_from_player(player, season))
        updated[key] = _sorted_snapshots(snapshots)
        added += 1
    logger.info("Recorded season %s for %d players", season, added)
    return updated


def set_player_seasons(
    history: Mapping[str, Sequence[SeasonSnapshot]],
    key: str,
    snapshots: Iterable[SeasonSnapshot],
) -> PlayerSeasonHistory:
    """Replace one player's seasons; a repeated label keeps its last snapshot."""

    by_label: Dict[str, SeasonSnapshot] = {}
    for snap in snapshots:
        by_label[snap.season] = snap
    updated: PlayerSeasonHistory = {k: list(v) for k, v in history.items() if k != key}
    if by_label:
        updated[key] = _sorted_snapshots(by_label.values())
    return updated


def remove_player(history: Mapping[str, Sequence[SeasonSnapshot]], key: str) -> PlayerSeasonHistory:
    return {k: list(v) for k, v in history.items() if k != key}


def purge_seasons(
    history: Mapping[str, Sequence[SeasonSnapshot]],
    seasons: Iterable[str],
) -> PlayerSeasonHistory:
    removed = set(seasons)
    updated: PlayerSeasonHistory = {}
    for key, snapshots in history.items():
        kept = [snap for snap in snapshots if snap.season not in removed]
        if kept:
            updated[key] = kept
    return updated


def available_seasons(history: Mapping[str, Sequence[SeasonSnapshot]]) -> List[str]:
    return sort_seasons(snap.season for snapshots in history.values() for snap in snapshots)


def reconcile_manual_seasons(
    position: Position | str,
    entries: Iterable[SeasonEntry],
) -> List[SeasonSnapshot]:
    """Convert hand-entered seasons into season-local snapshots.

    Entries are ordered by season label. An additive entry is already the
    season's value and is added to the running total; a cumulative entry is
    the career total through that season, so the season's value is the
    positive part of ``total - running`` and the running total becomes
    ``total``. The running totals live only for this call, so callers re-run
    it over a player's full entry list after every edit.
    """

    schema = get_schema(position)
    fields = schema.season_fields
    additive = set(schema.additive_fields)
    running: Dict[str, float] = {field: 0.0 for field in additive}
    reconciled: List[SeasonSnapshot] = []

    for entry in sorted(entries, key=lambda e: season_sort_key(e.season)):
        unknown = set(entry.stats) - set(fields)
        if unknown:
            logger.debug(
                "Ignoring stats %s for %s season %s",
                ", ".join(sorted(unknown)),
                schema.position.value,
                entry.season,
            )
        stats: Dict[str, float] = {}
        for field in fields:
            present = field in entry.stats
            value = float(entry.stats.get(field, 0.0))
            if field not in additive:
                if present:
                    stats[field] = value
            elif entry.mode is EntryMode.additive:
                stats[field] = value
                running[field] += value
            elif present:
                delta = value - running[field]
                stats[field] = delta if delta > 0 else 0.0
                running[field] = value
            else:
                stats[field] = 0.0
        reconciled.append(SeasonSnapshot(season=entry.season, stats=stats))
    return reconciled


def history_to_json(history: Mapping[str, Sequence[SeasonSnapshot]]) -> Dict[str, List[Dict[str, Any]]]:
    return {key: [snap.model_dump() for snap in snapshots] for key, snapshots in history.items()}


def _snapshot_from_payload(item: Mapping[str, Any]) -> SeasonSnapshot:
    if "stats" in item:
        return SeasonSnapshot.model_validate(item)
    # Flat layout: {"season": "Y3", "games": 17, ...}
    stats = {
        name: float(value)
        for name, value in item.items()
        if name != "season" and isinstance(value, (int, float)) and not isinstance(value, bool)
    }
    return SeasonSnapshot(season=str(item.get("season", "")), stats=stats)


def history_from_json(payload: Optional[Mapping[str, Any]]) -> PlayerSeasonHistory:
    history: PlayerSeasonHistory = {}
    if not payload:
        return history
    for key, items in payload.items():
        if not isinstance(items, list):
            logger.warning("Discarding malformed season history for %s", key)
            continue
        snapshots = [_snapshot_from_payload(item) for item in items if isinstance(item, Mapping)]
        if snapshots:
            history[key] = _sorted_snapshots(snapshots)
    return history
