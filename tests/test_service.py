from pathlib import Path

import pytest

from retrovault.config_loader import DB_PATH_ENV, LeagueSettings
from retrovault.models import EntryMode, PlayerEdit, Position, SeasonEntry
from retrovault.persistence import KeyValueStore
from retrovault.service import LeagueService

from tests.samples import rb_blob


BASE = rb_blob(("Bo", 16, 1000))
Y1 = rb_blob(("Bo", 32, 1800), ("Newbie", 10, 300), ("Vet", 40, 3000))
Y2 = rb_blob(("Bo", 48, 2500), ("Newbie", 26, 900), ("Vet", 56, 3600))
Y3 = rb_blob(("Bo", 64, 3100), ("Newbie", 42, 1500), ("Vet", 72, 4000))


@pytest.fixture()
def service(tmp_path: Path, monkeypatch) -> LeagueService:
    monkeypatch.delenv(DB_PATH_ENV, raising=False)
    return LeagueService(KeyValueStore(tmp_path / "db.sqlite"), LeagueSettings())


def _rush(history, season):
    return next(s.get("rush_yds") for s in history if s.season == season)


def test_season_upload_diffs_against_baseline(service: LeagueService):
    service.load_career(BASE)

    upload = service.load_season(Y1, "Y1")

    bo, newbie, vet = upload.season_data.runningbacks
    assert upload.previous is not None
    assert (bo.games, bo.rush_yds) == (16, 800)
    assert newbie.rush_yds == 300
    assert vet.rush_yds == 0
    assert service.current_season() == "Y1"
    assert [s.season for s in service.player_history("RB", "Bo")] == ["Y1"]
    assert service.player_history(Position.RB, "Vet") == []


def test_previous_snapshot_is_chosen_by_season_order(service: LeagueService):
    service.load_career(BASE)
    service.load_season(Y1, "Y1")
    service.load_season(Y3, "Y3")

    upload = service.load_season(Y2, "Y2")

    assert upload.season_data.runningbacks[0].rush_yds == 700
    assert service.previous_csv_for("Y3") == Y2
    assert service.previous_csv_for("Y1") == BASE
    assert [_rush(service.player_history("RB", "Bo"), s) for s in ("Y1", "Y2", "Y3")] == [800, 700, 1300]


def test_first_upload_without_baseline_records_full_totals(service: LeagueService):
    upload = service.load_season(Y1, "Y1")

    assert upload.previous is None
    assert upload.season_data.runningbacks[2].rush_yds == 3000
    assert _rush(service.player_history("RB", "Vet"), "Y1") == 3000
    assert service.season_data().runningbacks[2].rush_yds == 3000


def test_blank_season_label_rejected(service: LeagueService):
    with pytest.raises(ValueError):
        service.load_season(Y1, "  ")


def test_purge_cascades_to_later_seasons(service: LeagueService):
    service.load_career(BASE)
    for label, blob in (("Y1", Y1), ("Y2", Y2), ("Y3", Y3)):
        service.load_season(blob, label)

    removed = service.purge_season("Y2")

    assert removed == ["Y2", "Y3"]
    assert service.available_seasons() == ["Y1"]
    assert service.current_season() == "Y1"
    assert [s.season for s in service.player_history("RB", "Bo")] == ["Y1"]
    assert service.career_data().runningbacks[0].rush_yds == 1800
    assert service.season_data().runningbacks[0].rush_yds == 800


def test_load_career_resets_seasons(service: LeagueService):
    service.load_career(BASE)
    service.load_season(Y1, "Y1")

    service.load_career(Y1)

    assert service.available_seasons() == []
    assert service.current_season() == ""
    assert service.career_data().counts()["RB"] == 3


def test_player_edits_override_and_add(service: LeagueService):
    service.save_player_edit(PlayerEdit(position=Position.RB, name="Bo", nickname="Sweetness", games=16))
    service.save_player_edit(
        PlayerEdit(position=Position.RB, name="Ghost", games=5, position_stats={"rush_yds": 50, "blocks": 3}, is_manually_added=True)
    )
    service.save_player_edit(PlayerEdit(position=Position.QB, name="Nobody", games=3))

    league = service.parse(BASE)

    assert [p.name for p in league.runningbacks] == ["Bo", "Ghost"]
    assert league.runningbacks[0].nickname == "Sweetness"
    assert league.runningbacks[0].rush_yds == 1000
    assert league.runningbacks[1].rush_yds == 50
    assert league.quarterbacks == []


def test_manual_seasons_replace_history(service: LeagueService):
    service.load_career(BASE)
    service.load_season(Y1, "Y1")
    edit = PlayerEdit(
        position=Position.RB,
        name="Bo",
        manual_seasons=[
            SeasonEntry(season="Y1", stats={"rush_yds": 500}),
            SeasonEntry(season="Y2", stats={"rush_yds": 1200}, mode=EntryMode.cumulative_total),
        ],
    )

    snapshots = service.save_player_edit(edit)

    assert [s.get("rush_yds") for s in snapshots] == [500, 700]
    assert [_rush(service.player_history("RB", "Bo"), s) for s in ("Y1", "Y2")] == [500, 700]
    first_created = service.edits.get("RB:Bo").created_at

    service.save_player_edit(edit.model_copy(update={"nickname": "Sweetness"}))
    assert service.edits.get("RB:Bo").created_at == first_created

    service.delete_player_edit("rb", "Bo")
    assert service.edits.get("RB:Bo") is None
    assert service.player_history("RB", "Bo") == []


def test_unknown_position_raises(service: LeagueService):
    with pytest.raises(KeyError):
        service.player_history("K", "Kicker")


def test_leaders_for_career_and_season(service: LeagueService):
    assert service.leaders("RB") == {}

    service.load_career(BASE)
    service.load_season(Y1, "Y1")

    career = service.leaders("RB")
    season = service.leaders(Position.RB, scope="season", active_only=True)

    assert (career["rush_yds"].name, career["rush_yds"].value) == ("Vet", 3000)
    assert career["games"].name == "Vet"
    assert (season["rush_yds"].name, season["rush_yds"].value) == ("Bo", 800)
    assert "true_talent" in season
    with pytest.raises(ValueError):
        service.leaders("RB", scope="decade")


def test_assign_teams_fills_missing_players_first(service: LeagueService):
    service.load_career(Y1)
    service.merge_team_overrides({"Bo": "Bears"})

    overrides = service.assign_teams("rb", "Lions Packers")

    assert overrides == {"Bo": "Bears", "Newbie": "Lions", "Vet": "Packers"}
    assert service.assign_teams("RB", "Vikings\nLions\nPackers")["Bo"] == "Vikings"
    with pytest.raises(ValueError):
        service.assign_teams("RB", "A,B,C,D")


def test_reset_clears_every_bucket(service: LeagueService):
    service.load_career(BASE)
    service.load_season(Y1, "Y1")
    service.merge_team_overrides({"Bo": "Bears"})

    cleared = service.reset()

    assert cleared["career_base_csv"] == 1
    assert cleared["season_snapshots"] == 1
    assert cleared["team_overrides"] == 1
    assert cleared["player_edits"] == 0
    assert service.available_seasons() == []
    assert service.career_data() is None
    assert service.team_overrides() == {}
