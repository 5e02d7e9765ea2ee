"""Lightweight REST client for the retrovault API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def _print(resp: httpx.Response) -> None:
    resp.raise_for_status()
    print(json.dumps(resp.json(), indent=2))


def _blob_file(path: Path) -> dict[str, tuple[str, bytes, str]]:
    return {"blob": (path.name, path.read_bytes(), "text/csv")}


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the retrovault REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("export", type=Path, nargs="?", help="League export CSV")
    parser.add_argument("--career", action="store_true", help="Upload the export as the career baseline")
    parser.add_argument("--season", help="Upload the export as this season, e.g. Y31")
    parser.add_argument("--list-seasons", action="store_true", help="List recorded seasons and exit")
    parser.add_argument("--purge", metavar="SEASON", help="Remove a season and every later one")
    parser.add_argument("--history", nargs=2, metavar=("POSITION", "NAME"), help="Fetch one player's seasons")
    parser.add_argument("--leaders", metavar="POSITION", help="Fetch career stat leaders for a position")
    parser.add_argument("--reset", action="store_true", help="Delete all stored league data")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_seasons:
            _print(client.get("/seasons"))
            return
        if args.purge:
            _print(client.delete(f"/seasons/{args.purge}"))
            return
        if args.leaders:
            _print(client.get(f"/leaders/{args.leaders}"))
            return
        if args.reset:
            _print(client.delete("/data"))
            return
        if args.history:
            position, name = args.history
            resp = client.get(f"/players/{position}/{name}/history")
            if resp.status_code == 404:
                raise SystemExit(f"unknown position {position}")
            _print(resp)
            return

        if args.export is None:
            raise SystemExit("an export file is required unless using --list-seasons/--purge/--history")

        if args.career:
            resp = client.post("/career", files=_blob_file(args.export))
            resp.raise_for_status()
            print("Career counts:", json.dumps(resp.json()["counts"], indent=2))
        elif args.season:
            resp = client.post("/seasons", files=_blob_file(args.export), data={"season": args.season})
            if resp.status_code == 400:
                raise SystemExit(resp.json().get("detail", "upload rejected"))
            resp.raise_for_status()
            payload = resp.json()
            baseline = "previous export" if payload["has_baseline"] else "no baseline"
            print(f"Recorded season {payload['season']} ({baseline})")
            print(json.dumps(payload["counts"], indent=2))
        else:
            resp = client.post("/parse", files=_blob_file(args.export))
            resp.raise_for_status()
            print("Parsed counts:", json.dumps(resp.json()["counts"], indent=2))


if __name__ == "__main__":
    main()
