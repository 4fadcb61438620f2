"""UCI long-algebraic move text (``e2e4``, ``e7e8q``)."""

from __future__ import annotations

import re
from typing import NamedTuple

from chessrules.core.enums import PieceType
from chessrules.core.move import PROMO_CHARS, Move
from chessrules.core.types import Square, to_coords

_UCI_RE = re.compile(r"^([a-h][1-8])([a-h][1-8])([qrbn]?)$")
_PROMO_FROM_CHAR: dict[str, PieceType] = {v: k for k, v in PROMO_CHARS.items()}


class UciMove(NamedTuple):
    """Squares and optional promotion parsed from UCI text."""

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None


def is_valid_uci(text: object) -> bool:
    """Whether *text* is well-formed UCI (surrounding whitespace and case ignored)."""
    return isinstance(text, str) and _UCI_RE.match(text.strip().lower()) is not None


def parse_uci(text: object) -> UciMove | None:
    """Parse UCI text; ``None`` when it is malformed."""
    if not isinstance(text, str):
        return None
    match = _UCI_RE.match(text.strip().lower())
    if match is None:
        return None
    from_sq = to_coords(match.group(1))
    to_sq = to_coords(match.group(2))
    assert from_sq is not None and to_sq is not None
    promotion = _PROMO_FROM_CHAR.get(match.group(3))
    return UciMove(from_sq, to_sq, promotion)


def _normalise(move: Move | str) -> str | None:
    if isinstance(move, Move):
        return move.uci
    if is_valid_uci(move):
        return move.strip().lower()
    return None


def moves_match(first: Move | str, second: Move | str) -> bool:
    """Whether two moves are the same once written as UCI.

    Either side may be a :class:`Move` or UCI text; malformed text never
    matches anything.
    """
    a = _normalise(first)
    b = _normalise(second)
    return a is not None and a == b
