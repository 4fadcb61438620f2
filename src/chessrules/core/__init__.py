"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Position, Rules, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    for move in Rules.legal_moves(pos):
        print(move)
"""

from chessrules.core.board import Board
from chessrules.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    GameResult,
    MoveFlag,
    PieceType,
    RejectReason,
)
from chessrules.core.move import Move
from chessrules.core.move_generator import (
    build_move,
    is_attacked,
    is_in_check,
    pseudo_legal_destinations,
    pseudo_legal_moves,
)
from chessrules.core.notation import (
    STARTING_FEN,
    STARTING_PLACEMENT,
    UciMove,
    is_valid_uci,
    move_to_san,
    moves_match,
    parse_uci,
    placement_from_fen,
    placement_to_fen,
    position_from_fen,
    position_to_fen,
)
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import IllegalMoveError, Rules
from chessrules.core.types import (
    Square,
    file_of,
    is_on_board,
    rank_of,
    square_name,
    to_algebraic,
    to_coords,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PROMOTION_TYPES",
    "PieceType",
    "RejectReason",
    # Types / helpers
    "Square",
    "file_of",
    "is_on_board",
    "rank_of",
    "square_name",
    "to_algebraic",
    "to_coords",
    # Domain objects
    "Board",
    "IllegalMoveError",
    "Move",
    "Piece",
    "Position",
    "Rules",
    # Generation / attacks
    "build_move",
    "is_attacked",
    "is_in_check",
    "pseudo_legal_destinations",
    "pseudo_legal_moves",
    # Notation
    "STARTING_FEN",
    "STARTING_PLACEMENT",
    "UciMove",
    "is_valid_uci",
    "move_to_san",
    "moves_match",
    "parse_uci",
    "placement_from_fen",
    "placement_to_fen",
    "position_from_fen",
    "position_to_fen",
]
