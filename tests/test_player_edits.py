from retrovault.ingest import apply_player_edits
from retrovault.models import LeagueData, PlayerEdit, Position, Status, TEPlayer


def test_edit_overrides_matching_player_only():
    league = LeagueData(tightends=[TEPlayer(name="Ted", games=16, rec_yds=800, longest=40), TEPlayer(name="Other")])
    edit = PlayerEdit(
        position=Position.TE,
        name="Ted",
        status=Status.retired,
        games=20,
        position_stats={"longest": 66, "tackles": 4},
    )

    updated = apply_player_edits(league, [edit])

    ted, other = updated.tightends
    assert ted.games == 20
    assert ted.longest == 66
    assert ted.rec_yds == 800
    assert ted.status is Status.retired
    assert not hasattr(ted, "tackles")
    assert other == league.tightends[1]
    assert league.tightends[0].games == 16


def test_unmatched_edits_only_add_manual_players():
    edits = [
        PlayerEdit(position=Position.OL, name="Added", games=3, position_stats={"blocks": 12}, is_manually_added=True),
        PlayerEdit(position=Position.OL, name="Missing", games=3),
    ]

    updated = apply_player_edits(LeagueData(), edits)

    assert [(p.name, p.blocks) for p in updated.offensiveline] == [("Added", 12)]
