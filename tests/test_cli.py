import json
from pathlib import Path

import pytest

from retrovault.cli import main
from retrovault.config_loader import DB_PATH_ENV

from tests.samples import rb_blob


@pytest.fixture()
def exports(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.delenv(DB_PATH_ENV, raising=False)
    (tmp_path / "base.csv").write_text(rb_blob(("Bo", 16, 1000)), encoding="utf-8")
    (tmp_path / "y1.csv").write_text(rb_blob(("Bo", 32, 1800), ("Vet", 40, 3000)), encoding="utf-8")
    return tmp_path


def test_parse_prints_counts_and_writes_json(exports: Path, capsys):
    output = exports / "parsed.json"

    main(["parse", str(exports / "y1.csv"), "--output", str(output)])

    assert "RB: 2" in capsys.readouterr().out
    assert json.loads(output.read_text())["runningbacks"][1]["name"] == "Vet"


def test_diff_uses_threshold_from_settings(exports: Path):
    settings = exports / "settings.json"
    settings.write_text(json.dumps({"rookie_games_threshold": 50}), encoding="utf-8")
    output = exports / "season.json"

    main(["--settings", str(settings), "diff", str(exports / "base.csv"), str(exports / "y1.csv"), "--output", str(output)])

    rbs = json.loads(output.read_text())["runningbacks"]
    assert [(p["name"], p["rush_yds"]) for p in rbs] == [("Bo", 800), ("Vet", 3000)]


def test_reconcile_prints_snapshots(exports: Path, capsys):
    entries = exports / "entries.json"
    entries.write_text(
        json.dumps(
            [
                {"season": "Y1", "stats": {"rush_yds": 500}},
                {"season": "Y2", "stats": {"rush_yds": 1200}, "mode": "cumulative_total"},
            ]
        ),
        encoding="utf-8",
    )

    main(["reconcile", "RB", str(entries)])

    snapshots = json.loads(capsys.readouterr().out)
    assert [s["stats"]["rush_yds"] for s in snapshots] == [500, 700]


def test_season_workflow_against_database(exports: Path, capsys):
    db = str(exports / "cli.sqlite")

    main(["--db", db, "career", str(exports / "base.csv")])
    main(["--db", db, "season", str(exports / "y1.csv"), "--season", "Y1"])
    main(["--db", db, "seasons"])
    out = capsys.readouterr().out
    assert "Recorded season Y1 (previous export)" in out
    assert out.strip().splitlines()[-1] == "Y1"

    main(["--db", db, "history", "RB", "Bo"])
    assert json.loads(capsys.readouterr().out)[0]["stats"]["rush_yds"] == 800

    main(["--db", db, "purge", "Y1"])
    assert "Removed seasons: Y1" in capsys.readouterr().out


def test_errors_exit_with_message(exports: Path):
    db = str(exports / "cli.sqlite")

    with pytest.raises(SystemExit, match="season label is required"):
        main(["--db", db, "season", str(exports / "y1.csv"), "--season", " "])
    with pytest.raises(SystemExit, match="Unknown position"):
        main(["--db", db, "history", "K", "Someone"])

    bad = exports / "bad.json"
    bad.write_text(json.dumps({"rookie_games_threshold": -1}), encoding="utf-8")
    with pytest.raises(SystemExit, match="Invalid settings"):
        main(["--settings", str(bad), "seasons"])


def test_leaders_teams_and_reset(exports: Path, capsys):
    db = str(exports / "cli.sqlite")
    teams = exports / "teams.txt"
    teams.write_text("Bears\nLions\n", encoding="utf-8")

    main(["--db", db, "career", str(exports / "y1.csv")])
    capsys.readouterr()

    main(["--db", db, "leaders", "RB"])
    assert "rush_yds: Vet (3000)" in capsys.readouterr().out

    main(["--db", db, "teams", "--assign", "RB", str(teams)])
    assert json.loads(capsys.readouterr().out) == {"Bo": "Bears", "Vet": "Lions"}

    with pytest.raises(SystemExit, match="--yes"):
        main(["--db", db, "reset"])
    main(["--db", db, "reset", "--yes"])
    assert "career_base_csv=1" in capsys.readouterr().out

    main(["--db", db, "teams"])
    assert json.loads(capsys.readouterr().out) == {}
