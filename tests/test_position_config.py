import pytest

from retrovault.config import BASE_COUNTERS, POSITION_TAGS, get_schema, iter_schemas
from retrovault.models import Position


def test_get_schema_handles_lowercase_tags():
    schema = get_schema(" rb ")
    assert schema.position is Position.RB
    assert schema.collection == "runningbacks"
    assert schema.stat_columns["rush_yds"] == 4


def test_receiver_tables_share_layout_and_career_fields():
    wr = get_schema(Position.WR)
    te = get_schema("TE")

    assert wr.stat_columns == te.stat_columns
    assert "longest" not in wr.additive_fields
    assert "longest" in wr.season_fields
    assert wr.additive_fields[: len(BASE_COUNTERS)] == BASE_COUNTERS


def test_schemas_cover_every_position_in_table_order():
    assert [schema.position.value for schema in iter_schemas()] == ["QB", "RB", "WR", "TE", "OL", "LB", "DB", "DL"]
    assert POSITION_TAGS == {p.value for p in Position}


def test_get_schema_missing_raises():
    with pytest.raises(KeyError):
        get_schema("K")


def test_get_schema_rejects_non_string():
    with pytest.raises(TypeError):
        get_schema(7)  # type: ignore[arg-type]
