"""Input adapters that turn raw league exports into typed records."""

from .edits import apply_player_edits
from .blob import (
    DECODERS,
    SectionBounds,
    assemble,
    decode_defense,
    decode_ol,
    decode_qb,
    decode_rb,
    decode_receiver,
    find_sections,
    load_league_csv,
    parse_number,
    split_rows,
)

__all__ = [
    "apply_player_edits",
    "DECODERS",
    "SectionBounds",
    "assemble",
    "decode_defense",
    "decode_ol",
    "decode_qb",
    "decode_rb",
    "decode_receiver",
    "find_sections",
    "load_league_csv",
    "parse_number",
    "split_rows",
]
