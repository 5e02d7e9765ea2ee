"""Builders for small league exports used across the test modules."""

from __future__ import annotations

from typing import Mapping, Sequence

HEADER = "Name,Status,Games,S1,S2,S3,S4,S5,S6,S7,S8,S9,Rings,MVP,OPOY,SBMVP,ROTY,,TT,DOM,LEG,TPG,,Nickname"


def player_row(
    name: str,
    games: float,
    stats: Sequence[float] = (),
    *,
    status: str = "Active",
    rings: float = 0,
    mvp: float = 0,
    true_talent: float = 0,
    nickname: str = "",
) -> str:
    cells = [""] * 24
    cells[0] = f'"{name}"' if "," in name else name
    cells[1] = status
    cells[2] = str(games)
    for offset, value in enumerate(stats):
        cells[3 + offset] = str(value)
    cells[12] = str(rings)
    cells[13] = str(mvp)
    cells[18] = str(true_talent)
    cells[23] = nickname
    return ",".join(cells)


def league_blob(sections: Mapping[str, Sequence[str]]) -> str:
    lines = []
    for tag, rows in sections.items():
        lines.append(tag)
        lines.append(HEADER)
        lines.extend(rows)
        lines.append("")
    return "\n".join(lines)


def rb_blob(*players: tuple) -> str:
    """RB-only export; each player is ``(name, games, rush_yds)``."""

    return league_blob(
        {"RB": [player_row(name, games, (0, rush_yds, 0, 0, 0, 0, 0)) for name, games, rush_yds in players]}
    )
