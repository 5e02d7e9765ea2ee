"""Split a league stat export into position sections and decode typed records."""

from __future__ import annotations

import csv
import logging
import math
import re
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from retrovault.config import POSITION_TAGS, get_schema, iter_schemas
from retrovault.config.positions import (
    GAMES_COLUMN,
    NAME_COLUMN,
    NICKNAME_COLUMN,
    STATUS_COLUMN,
    TAIL_COLUMNS,
)
from retrovault.models import PLAYER_MODELS, BasePlayer, LeagueData, Position, Status


logger = logging.getLogger(__name__)

Row = Sequence[str]
RowDecoder = Callable[[Row], Optional[BasePlayer]]

_STRIPPED_NUMBER_CHARS = str.maketrans("", "", "\"',")
# Longest leading float: "12.5%" reads as 12.5, "88 pts" as 88.
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class SectionBounds:
    header_row: int
    data_start: int
    data_end: int

    @property
    def size(self) -> int:
        return self.data_end - self.data_start


def parse_number(raw: Optional[str]) -> float:
    """Return the numeric value of a cell, or 0.0 when it has none."""

    if raw is None:
        return 0.0
    text = str(raw).translate(_STRIPPED_NUMBER_CHARS).strip()
    match = _NUMBER_PREFIX.match(text)
    if match is None:
        return 0.0
    value = float(match.group())
    if not math.isfinite(value):
        return 0.0
    return value


def parse_status(raw: Optional[str]) -> Status:
    return Status.active if (raw or "").strip().lower() == "active" else Status.retired


def parse_text(raw: Optional[str]) -> Optional[str]:
    text = (raw or "").strip()
    if not text:
        return None
    text = text.strip('"').strip()
    return text or None


def _split_line(line: str) -> List[str]:
    try:
        return next(csv.reader([line]), [])
    except csv.Error as exc:
        logger.debug("Falling back to plain split for malformed row %r: %s", line[:40], exc)
        return line.split(",")


def split_rows(blob: str) -> List[List[str]]:
    """Break the export into rows of cells; one row per physical line."""

    text = (blob or "").lstrip("\ufeff")
    return [_split_line(line.rstrip("\r")) for line in text.split("\n")]


def _first_cell(row: Row) -> str:
    return (row[0] if row else "").strip().upper()


def _is_blank(row: Row) -> bool:
    return all(not cell.strip() for cell in row)


def find_sections(rows: Sequence[Row]) -> Dict[Position, SectionBounds]:
    """Locate each position table by its marker row.

    The row after a marker is the header; data runs until the next marker,
    the first blank row after some data, or the end of input.
    """

    sections: Dict[Position, SectionBounds] = {}
    total = len(rows)
    i = 0
    while i < total:
        tag = _first_cell(rows[i])
        if tag not in POSITION_TAGS:
            i += 1
            continue

        header_row = i + 1
        data_start = min(i + 2, total)
        data_end = total
        seen_data = False
        for j in range(data_start, total):
            row = rows[j]
            if _first_cell(row) in POSITION_TAGS:
                data_end = j
                break
            if _is_blank(row):
                if seen_data:
                    data_end = j
                    break
                continue
            seen_data = True

        position = Position(tag)
        if position in sections:
            logger.warning("Position %s appears more than once; keeping the table at row %d", tag, i)
        sections[position] = SectionBounds(header_row=header_row, data_start=data_start, data_end=data_end)
        i = max(data_end, i + 1)
    return sections


def _cell(row: Row, index: int) -> str:
    return row[index] if index < len(row) else ""


def _decode(row: Row, position: Position, columns: Mapping[str, int]) -> Optional[BasePlayer]:
    name = parse_text(_cell(row, NAME_COLUMN))
    if not name:
        return None
    fields: Dict[str, object] = {
        "name": name,
        "status": parse_status(_cell(row, STATUS_COLUMN)),
        "games": parse_number(_cell(row, GAMES_COLUMN)),
        "nickname": parse_text(_cell(row, NICKNAME_COLUMN)),
    }
    for field, index in TAIL_COLUMNS.items():
        fields[field] = parse_number(_cell(row, index))
    for field, index in columns.items():
        fields[field] = parse_number(_cell(row, index))
    return PLAYER_MODELS[position](**fields)


def decode_qb(row: Row) -> Optional[BasePlayer]:
    return _decode(row, Position.QB, get_schema(Position.QB).stat_columns)


def decode_rb(row: Row) -> Optional[BasePlayer]:
    return _decode(row, Position.RB, get_schema(Position.RB).stat_columns)


def decode_receiver(row: Row, position: Position = Position.WR) -> Optional[BasePlayer]:
    """Decode a WR-layout row; TE tables share the layout."""

    return _decode(row, position, get_schema(Position.WR).stat_columns)


def decode_ol(row: Row) -> Optional[BasePlayer]:
    return _decode(row, Position.OL, get_schema(Position.OL).stat_columns)


def decode_defense(row: Row, position: Position) -> Optional[BasePlayer]:
    return _decode(row, position, get_schema(Position.LB).stat_columns)


DECODERS: Mapping[Position, RowDecoder] = {
    Position.QB: decode_qb,
    Position.RB: decode_rb,
    Position.WR: decode_receiver,
    Position.TE: partial(decode_receiver, position=Position.TE),
    Position.OL: decode_ol,
    Position.LB: partial(decode_defense, position=Position.LB),
    Position.DB: partial(decode_defense, position=Position.DB),
    Position.DL: partial(decode_defense, position=Position.DL),
}


def assemble(blob: str) -> LeagueData:
    """Parse a whole export into one league snapshot."""

    rows = split_rows(blob)
    sections = find_sections(rows)
    collected: Dict[str, List[BasePlayer]] = {schema.collection: [] for schema in iter_schemas()}

    for position, bounds in sections.items():
        if bounds.size == 0:
            logger.debug("%s table has no data rows", position.value)
            continue
        decoder = DECODERS[position]
        target = collected[get_schema(position).collection]
        skipped = 0
        for row in rows[bounds.data_start:bounds.data_end]:
            player = decoder(row)
            if player is None:
                skipped += 1
                continue
            target.append(player)
        if skipped:
            logger.debug("Skipped %d blank-name rows in %s table", skipped, position.value)

    return LeagueData(**collected)


def load_league_csv(path: Path) -> LeagueData:
    return assemble(path.read_text(encoding="utf-8"))
