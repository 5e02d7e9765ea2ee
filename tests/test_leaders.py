from retrovault.leaders import StatLeader, calculate_leaders, leader_stats
from retrovault.models import QBPlayer, WRPlayer


def test_leader_stats_cover_counters_position_stats_and_metrics():
    stats = leader_stats("WR")

    assert stats[0] == "games"
    assert "longest" in stats
    assert stats[-1] == "tpg"


def test_calculate_leaders_picks_highest_and_keeps_first_on_tie():
    players = [
        QBPlayer(name="Joe", pass_yds=4000, rush_yds=100),
        QBPlayer(name="Dan", pass_yds=5000, rush_yds=100),
    ]

    leaders = calculate_leaders(players, ["pass_yds", "rush_yds", "nickname", "tackles"])

    assert leaders == {
        "pass_yds": StatLeader(name="Dan", value=5000),
        "rush_yds": StatLeader(name="Joe", value=100),
    }


def test_calculate_leaders_empty_table():
    assert calculate_leaders([], leader_stats("QB")) == {}
    assert calculate_leaders([WRPlayer(name="Solo")], ["longest"])["longest"].value == 0
