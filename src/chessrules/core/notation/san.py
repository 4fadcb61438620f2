"""SAN (Standard Algebraic Notation) rendering."""

from __future__ import annotations

from chessrules.core.enums import MoveFlag, PieceType
from chessrules.core.move import Move
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.types import file_of, rank_of, square_name

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move."""
    piece = move.piece

    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        san = "O-O"
    elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
        san = "O-O-O"
    else:
        san = ""
        if piece.kind == PieceType.PAWN:
            if move.is_capture:
                san += "abcdefgh"[file_of(move.from_sq)]
        else:
            san += _SAN_PIECE[piece.kind]

            # Disambiguation
            ambiguous = [
                m
                for m in Rules.legal_moves(position)
                if m.to_sq == move.to_sq
                and m.from_sq != move.from_sq
                and m.piece == piece
            ]
            if ambiguous:
                same_file = any(
                    file_of(m.from_sq) == file_of(move.from_sq) for m in ambiguous
                )
                same_rank = any(
                    rank_of(m.from_sq) == rank_of(move.from_sq) for m in ambiguous
                )
                if not same_file:
                    san += "abcdefgh"[file_of(move.from_sq)]
                elif not same_rank:
                    san += str(rank_of(move.from_sq) + 1)
                else:
                    san += square_name(move.from_sq)

        if move.is_capture:
            san += "x"

        san += square_name(move.to_sq)

        if move.promotion is not None:
            san += "=" + _SAN_PIECE[move.promotion]

    # Check / checkmate suffix
    after = position.apply(move)
    if Rules.is_in_check(after):
        san += "#" if not Rules.has_legal_move(after) else "+"

    return san
