import pytest

from retrovault.models import OLPlayer
from retrovault.teams import assign_teams, split_teams


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Bears Lions", ["Bears", "Lions"]),
        ("Bears\r\nNew York\n\n", ["Bears", "New York"]),
        ("Bears, Green Bay ,", ["Bears", "Green Bay"]),
        ("   ", []),
    ],
)
def test_split_teams(text, expected):
    assert split_teams(text) == expected


def test_assign_teams_by_table_order():
    players = [OLPlayer(name="A"), OLPlayer(name="B"), OLPlayer(name="C")]

    assert assign_teams(players, ["X", "Y", "Z"], {}) == {"A": "X", "B": "Y", "C": "Z"}
    assert assign_teams(players, ["Y"], {"A": "X", "C": "Z"}) == {"B": "Y"}


def test_assign_teams_rejects_count_mismatch():
    players = [OLPlayer(name="A"), OLPlayer(name="B")]

    with pytest.raises(ValueError, match="expected 2"):
        assign_teams(players, ["X", "Y", "Z"], {})
    with pytest.raises(ValueError):
        assign_teams(players, [], {})
