"""Command-line interface for parsing exports and managing season history."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from retrovault.config import get_schema
from retrovault.config_loader import LeagueSettings
from retrovault.ingest import load_league_csv
from retrovault.models import LeagueData, SeasonEntry
from retrovault.persistence import KeyValueStore
from retrovault.seasons import diff_league_data, reconcile_manual_seasons
from retrovault.service import LeagueService


_ENTRIES_ADAPTER = TypeAdapter(List[SeasonEntry])


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Parse league exports and track season history")
    parser.add_argument("--db", type=Path, default=None, help="SQLite database path")
    parser.add_argument("--settings", type=Path, default=None, help="Load settings JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    parse_cmd = sub.add_parser("parse", help="Parse an export and print per-position counts")
    parse_cmd.add_argument("blob", type=Path, help="Path to the league export")
    parse_cmd.add_argument("--output", type=Path, default=None, help="Write parsed records as JSON")

    diff_cmd = sub.add_parser("diff", help="Season-local records between two exports")
    diff_cmd.add_argument("previous", type=Path, help="Earlier career export")
    diff_cmd.add_argument("current", type=Path, help="Later career export")
    diff_cmd.add_argument("--output", type=Path, default=None, help="Write season records as JSON")

    reconcile_cmd = sub.add_parser("reconcile", help="Reconcile hand-entered seasons for one position")
    reconcile_cmd.add_argument("position", help="Position tag, e.g. RB")
    reconcile_cmd.add_argument("entries", type=Path, help="JSON list of {season, stats, mode}")

    career_cmd = sub.add_parser("career", help="Store a new career baseline")
    career_cmd.add_argument("blob", type=Path)

    season_cmd = sub.add_parser("season", help="Upload a season export")
    season_cmd.add_argument("blob", type=Path)
    season_cmd.add_argument("--season", required=True, help="Season label, e.g. Y31")

    purge_cmd = sub.add_parser("purge", help="Remove a season and every later season")
    purge_cmd.add_argument("season")

    sub.add_parser("seasons", help="List recorded seasons")

    history_cmd = sub.add_parser("history", help="Print one player's season history")
    history_cmd.add_argument("position")
    history_cmd.add_argument("name")

    leaders_cmd = sub.add_parser("leaders", help="Per-stat leaders for one position")
    leaders_cmd.add_argument("position")
    leaders_cmd.add_argument("--scope", choices=("career", "season"), default="career")
    leaders_cmd.add_argument("--active-only", action="store_true", help="Rank active players only")

    teams_cmd = sub.add_parser("teams", help="Show team overrides, or assign teams to a position")
    teams_cmd.add_argument("--assign", nargs=2, metavar=("POSITION", "TEAMS_FILE"), help="Teams in table order")

    reset_cmd = sub.add_parser("reset", help="Delete every stored export, season, edit and team")
    reset_cmd.add_argument("--yes", action="store_true", help="Confirm deleting all data")

    return parser.parse_args(argv)


def _load_settings(args: argparse.Namespace) -> LeagueSettings:
    settings = LeagueSettings.load(args.settings) if args.settings else LeagueSettings.from_env()
    if args.db is not None:
        settings.db_path = str(args.db)
    return settings


def _service(settings: LeagueSettings) -> LeagueService:
    return LeagueService(KeyValueStore(settings.resolved_db_path()), settings)


def _print_counts(data: LeagueData) -> None:
    for tag, count in data.counts().items():
        print(f"{tag}: {count}")


def _write_json(path: Path, payload: Any) -> None:
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print(f"Wrote {path}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = _load_settings(args)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Invalid settings file: {exc}") from exc

    if args.command == "parse":
        data = load_league_csv(args.blob)
        _print_counts(data)
        if args.output:
            _write_json(args.output, data.model_dump(mode="json"))
    elif args.command == "diff":
        season = diff_league_data(
            load_league_csv(args.previous),
            load_league_csv(args.current),
            rookie_games_threshold=settings.rookie_games_threshold,
        )
        _print_counts(season)
        if args.output:
            _write_json(args.output, season.model_dump(mode="json"))
    elif args.command == "reconcile":
        try:
            schema = get_schema(args.position)
            entries = _ENTRIES_ADAPTER.validate_json(args.entries.read_text(encoding="utf-8"))
        except KeyError as exc:
            raise SystemExit(f"Unknown position {args.position!r}") from exc
        except ValidationError as exc:
            raise SystemExit(f"Invalid entries file: {exc}") from exc
        snapshots = reconcile_manual_seasons(schema.position, entries)
        print(json.dumps([snap.model_dump() for snap in snapshots], indent=2))
    elif args.command == "career":
        data = _service(settings).load_career(args.blob.read_text(encoding="utf-8"))
        _print_counts(data)
    elif args.command == "season":
        try:
            upload = _service(settings).load_season(args.blob.read_text(encoding="utf-8"), args.season)
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc
        baseline = "previous export" if upload.previous is not None else "no baseline"
        print(f"Recorded season {upload.season} ({baseline})")
        _print_counts(upload.season_data)
    elif args.command == "purge":
        removed = _service(settings).purge_season(args.season)
        print("Removed seasons: " + (", ".join(removed) if removed else "none"))
    elif args.command == "seasons":
        for season in _service(settings).available_seasons():
            print(season)
    elif args.command == "history":
        try:
            snapshots = _service(settings).player_history(args.position, args.name)
        except KeyError as exc:
            raise SystemExit(f"Unknown position {args.position!r}") from exc
        print(json.dumps([snap.model_dump() for snap in snapshots], indent=2))
    elif args.command == "leaders":
        try:
            found = _service(settings).leaders(args.position, scope=args.scope, active_only=args.active_only)
        except KeyError as exc:
            raise SystemExit(f"Unknown position {args.position!r}") from exc
        for stat, leader in found.items():
            print(f"{stat}: {leader.name} ({leader.value:g})")
    elif args.command == "teams":
        service = _service(settings)
        if args.assign:
            position, teams_file = args.assign
            try:
                overrides = service.assign_teams(position, Path(teams_file).read_text(encoding="utf-8"))
            except KeyError as exc:
                raise SystemExit(f"Unknown position {position!r}") from exc
            except ValueError as exc:
                raise SystemExit(str(exc)) from exc
        else:
            overrides = service.team_overrides()
        print(json.dumps(overrides, indent=2, sort_keys=True))
    elif args.command == "reset":
        if not args.yes:
            raise SystemExit("Refusing to delete all data without --yes")
        cleared = _service(settings).reset()
        print("Cleared " + ", ".join(f"{bucket}={count}" for bucket, count in cleared.items()))


if __name__ == "__main__":
    main()
