"""Square type alias and coordinate helpers.

Board layout (row/column, rank 8 on top)::

    row 0:  a8 b8 c8 d8 e8 f8 g8 h8
    row 1:  a7 b7 ...
    ...
    row 7:  a1 b1 ...            h1

A square is a ``(row, col)`` tuple; ``col`` 0 is the a-file.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = tuple[int, int]

_FILES = "abcdefgh"
_RANKS = "12345678"


def is_on_board(row: int, col: int) -> bool:
    """Whether ``(row, col)`` lies inside the 8x8 board."""
    return 0 <= row < 8 and 0 <= col < 8


def to_coords(text: object) -> Square | None:
    """Parse a square name, e.g. ``'e4'`` -> ``(4, 4)``.

    Returns ``None`` for anything that is not a two-character square name.
    """
    if not isinstance(text, str) or len(text) != 2:
        return None
    file_ch, rank_ch = text[0], text[1]
    if file_ch not in _FILES or rank_ch not in _RANKS:
        return None
    return (8 - int(rank_ch), _FILES.index(file_ch))


def to_algebraic(row: int, col: int) -> str:
    """Square name for ``(row, col)``, e.g. ``(7, 0)`` -> ``'a1'``."""
    if not is_on_board(row, col):
        raise ValueError(f"Square off the board: {(row, col)!r}")
    return _FILES[col] + str(8 - row)


def square_name(sq: Square) -> str:
    return to_algebraic(sq[0], sq[1])


def rank_of(sq: Square) -> int:
    """Rank index 0-7 (ranks 1-8)."""
    return 7 - sq[0]


def file_of(sq: Square) -> int:
    """File index 0-7 (files a-h)."""
    return sq[1]


ALL_SQUARES: tuple[Square, ...] = tuple((r, c) for r in range(8) for c in range(8))


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ((0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = ((1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = ((2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = ((3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = ((4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = ((5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = ((6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = ((7, c) for c in range(8))
