"""Configuration helpers for position table layouts."""

from .positions import (
    BASE_COUNTERS,
    METRIC_FIELDS,
    POSITION_TAGS,
    PositionSchema,
    get_schema,
    iter_schemas,
)

__all__ = [
    "BASE_COUNTERS",
    "METRIC_FIELDS",
    "POSITION_TAGS",
    "PositionSchema",
    "get_schema",
    "iter_schemas",
]
