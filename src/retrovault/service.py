"""League workflows: career baselines, season uploads, purges and player edits."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from retrovault.config import get_schema
from retrovault.config_loader import LeagueSettings
from retrovault.ingest import apply_player_edits, assemble
from retrovault.leaders import StatLeader, calculate_leaders, leader_stats
from retrovault.models import LeagueData, PlayerEdit, Position, SeasonSnapshot, Status, make_player_key
from retrovault.persistence import (
    BUCKETS,
    KeyValueStore,
    PlayerEditRepository,
    SeasonHistoryRepository,
    SnapshotArchive,
    TeamOverrideRepository,
)
from retrovault.seasons import (
    diff_league_data,
    purge_seasons,
    reconcile_manual_seasons,
    record_league_season,
    remove_player,
    season_from_first_upload,
    season_sort_key,
    set_player_seasons,
    sort_seasons,
)
from retrovault.seasons.history import available_seasons as history_seasons
from retrovault.teams import assign_teams, split_teams


logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class SeasonUpload:
    season: str
    career: LeagueData
    season_data: LeagueData
    previous: Optional[LeagueData]


class LeagueService:
    """Owns the load/merge/save cycle around the pure parsing and season code."""

    def __init__(self, store: KeyValueStore, settings: LeagueSettings | None = None):
        self.settings = settings or LeagueSettings()
        self._store = store
        self.archive = SnapshotArchive(store)
        self.history = SeasonHistoryRepository(store)
        self.edits = PlayerEditRepository(store)
        self.teams = TeamOverrideRepository(store)

    def parse(self, csv_text: str) -> LeagueData:
        """Parse an export and overlay stored player edits."""

        return apply_player_edits(assemble(csv_text), self.edits.list_edits().values())

    def _diff(self, previous: LeagueData, current: LeagueData) -> LeagueData:
        return diff_league_data(
            previous,
            current,
            rookie_games_threshold=self.settings.rookie_games_threshold,
        )

    def load_career(self, csv_text: str) -> LeagueData:
        """Start a new baseline; any recorded seasons are discarded."""

        data = self.parse(csv_text)
        self.archive.set_base_csv(csv_text)
        self.archive.save_season_snapshots({})
        self.archive.set_current_season("")
        self.history.save({})
        logger.info("Loaded career baseline with %d players", sum(data.counts().values()))
        return data

    def previous_csv_for(self, season: str) -> Optional[str]:
        """Latest stored export from an earlier season, else the career baseline."""

        target = season_sort_key(season)
        snapshots = self.archive.season_snapshots()
        earlier = [label for label in sort_seasons(snapshots) if season_sort_key(label) < target]
        if earlier:
            return snapshots[earlier[-1]]
        return self.archive.get_base_csv()

    def load_season(self, csv_text: str, season: str) -> SeasonUpload:
        label = (season or "").strip()
        if not label:
            raise ValueError("season label is required")

        current = self.parse(csv_text)
        previous_csv = self.previous_csv_for(label)
        previous: Optional[LeagueData] = None
        if previous_csv is not None:
            previous = self.parse(previous_csv)
            season_data = self._diff(previous, current)
        else:
            logger.info("No earlier export for %s; recording full totals as the season", label)
            season_data = season_from_first_upload(current)

        self.history.save(record_league_season(self.history.load(), season_data, label))
        snapshots = self.archive.season_snapshots()
        snapshots[label] = csv_text
        self.archive.save_season_snapshots(snapshots)
        self.archive.set_current_season(label)
        logger.info("Loaded season %s", label)
        return SeasonUpload(season=label, career=current, season_data=season_data, previous=previous)

    def purge_season(self, season: str) -> List[str]:
        """Remove ``season`` and every later season; returns the removed labels."""

        target = season_sort_key(season)
        snapshots = self.archive.season_snapshots()
        removed = {label for label in snapshots if season_sort_key(label) >= target}
        removed.add(season)
        remaining = {label: csv for label, csv in snapshots.items() if label not in removed}

        self.archive.save_season_snapshots(remaining)
        self.history.save(purge_seasons(self.history.load(), removed))
        latest = sort_seasons(remaining)
        self.archive.set_current_season(latest[-1] if latest else "")

        removed_labels = sort_seasons(removed)
        logger.info("Purged seasons %s", ", ".join(removed_labels))
        return removed_labels

    def available_seasons(self) -> List[str]:
        return sort_seasons(set(self.archive.seasons()) | set(history_seasons(self.history.load())))

    def current_season(self) -> str:
        snapshots = self.archive.season_snapshots()
        saved = self.archive.get_current_season()
        if saved and saved in snapshots:
            return saved
        ordered = sort_seasons(snapshots)
        return ordered[-1] if ordered else ""

    def career_data(self) -> Optional[LeagueData]:
        season = self.current_season()
        csv_text = self.archive.season_snapshots().get(season) if season else self.archive.get_base_csv()
        return self.parse(csv_text) if csv_text is not None else None

    def season_data(self) -> Optional[LeagueData]:
        season = self.current_season()
        if not season:
            return None
        current = self.parse(self.archive.season_snapshots()[season])
        previous_csv = self.previous_csv_for(season)
        if previous_csv is None:
            return season_from_first_upload(current)
        return self._diff(self.parse(previous_csv), current)

    def leaders(
        self,
        position: Position | str,
        *,
        scope: str = "career",
        active_only: bool = False,
    ) -> Dict[str, StatLeader]:
        """Per-stat leaders of one position table, career totals or the current season."""

        schema = get_schema(position)
        if scope == "career":
            data = self.career_data()
        elif scope == "season":
            data = self.season_data()
        else:
            raise ValueError(f"scope must be 'career' or 'season', got {scope!r}")
        if data is None:
            return {}
        players = data.players_for(schema.position)
        if active_only:
            players = [player for player in players if player.status is Status.active]
        return calculate_leaders(players, leader_stats(schema.position))

    def team_overrides(self) -> Dict[str, str]:
        return self.teams.load()

    def merge_team_overrides(self, overrides: Mapping[str, str]) -> Dict[str, str]:
        merged = self.teams.merge(dict(overrides))
        logger.info("Saved %d team overrides", len(overrides))
        return merged

    def assign_teams(self, position: Position | str, teams_text: str) -> Dict[str, str]:
        """Map pasted team names onto the position's career table, in table order."""

        schema = get_schema(position)
        data = self.career_data()
        players = data.players_for(schema.position) if data is not None else []
        assignment = assign_teams(players, split_teams(teams_text), self.teams.load())
        return self.merge_team_overrides(assignment)

    def reset(self) -> Dict[str, int]:
        """Delete every stored export, season, edit and team override."""

        cleared = {bucket: len(self._store.keys(bucket)) for bucket in BUCKETS}
        self._store.clear()
        logger.info("Cleared all stored league data")
        return cleared

    def player_history(self, position: Position | str, name: str) -> List[SeasonSnapshot]:
        schema = get_schema(position)
        return list(self.history.load().get(make_player_key(schema.position, name), []))

    def save_player_edit(self, edit: PlayerEdit) -> List[SeasonSnapshot]:
        """Persist an edit; manual seasons replace that player's history."""

        existing = self.edits.get(edit.key)
        now = datetime.now(timezone.utc)
        stored = edit.model_copy(
            update={
                "created_at": existing.created_at if existing else edit.created_at,
                "updated_at": now,
            }
        )
        self.edits.save(stored)

        if not stored.manual_seasons:
            return []
        snapshots = reconcile_manual_seasons(stored.position, stored.manual_seasons)
        self.history.save(set_player_seasons(self.history.load(), stored.key, snapshots))
        logger.info("Reconciled %d manual seasons for %s", len(snapshots), stored.key)
        return snapshots

    def delete_player_edit(self, position: Position | str, name: str) -> None:
        key = make_player_key(get_schema(position).position, name)
        self.edits.delete(key)
        self.history.save(remove_player(self.history.load(), key))
        logger.info("Deleted edits and history for %s", key)
