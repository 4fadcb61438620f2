"""Notation package: FEN / UCI parsing and serialization, SAN rendering."""

from chessrules.core.notation.fen import (
    STARTING_FEN,
    STARTING_PLACEMENT,
    infer_castling,
    placement_from_fen,
    placement_to_fen,
    position_from_fen,
    position_to_fen,
)
from chessrules.core.notation.san import move_to_san
from chessrules.core.notation.uci import UciMove, is_valid_uci, moves_match, parse_uci

__all__ = [
    "STARTING_FEN",
    "STARTING_PLACEMENT",
    "UciMove",
    "infer_castling",
    "is_valid_uci",
    "move_to_san",
    "moves_match",
    "parse_uci",
    "placement_from_fen",
    "placement_to_fen",
    "position_from_fen",
    "position_to_fen",
]
