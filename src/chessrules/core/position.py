"""Position: immutable game snapshot (board + metadata) and its transitions."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, MoveFlag, PieceType
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import (
    A1,
    A8,
    C1,
    C8,
    D1,
    D8,
    E1,
    E8,
    F1,
    F8,
    G1,
    G8,
    H1,
    H8,
    Square,
)

KING_HOME: dict[Color, Square] = {Color.WHITE: E1, Color.BLACK: E8}

# rook origin -> rook destination, keyed by the king's castled square
CASTLE_ROOK_MOVES: dict[Square, tuple[Square, Square]] = {
    G1: (H1, F1),
    C1: (A1, D1),
    G8: (H8, F8),
    C8: (A8, D8),
}

ROOK_CORNERS: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Positions never change; :meth:`apply` returns the successor position, so a
    scratch simulation cannot leak into the position it started from.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def initial(cls) -> Position:
        return cls()

    # ── Transitions ──────────────────────────────────────────────────────

    def apply(self, move: Move) -> Position:
        """Return the position after *move*.

        *move* is trusted to be pseudo-legal here; validation lives in
        :class:`~chessrules.core.rules.Rules`. The king/pawn move and its
        companion effects (rook slide, en-passant removal) land together in
        the one new board.
        """
        piece = move.piece
        placed = piece
        if move.promotion is not None:
            placed = Piece(piece.color, move.promotion)

        changes: dict[Square, Piece | None] = {move.from_sq: None, move.to_sq: placed}

        if move.flag == MoveFlag.EN_PASSANT:
            changes[(move.from_sq[0], move.to_sq[1])] = None
        elif move.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE):
            rook_from, rook_to = CASTLE_ROOK_MOVES[move.to_sq]
            changes[rook_from] = None
            changes[rook_to] = self.board[rook_from]

        next_en_passant: Square | None = None
        if move.flag == MoveFlag.DOUBLE_PAWN:
            next_en_passant = ((move.from_sq[0] + move.to_sq[0]) // 2, move.from_sq[1])

        if piece.kind == PieceType.PAWN or move.captured is not None:
            halfmove = 0
        else:
            halfmove = self.halfmove_clock + 1

        fullmove = self.fullmove_number
        if self.side_to_move == Color.BLACK:
            fullmove += 1

        return Position(
            board=self.board.with_pieces(changes),
            side_to_move=self.side_to_move.opposite,
            castling=self._castling_after(move),
            en_passant=next_en_passant,
            halfmove_clock=halfmove,
            fullmove_number=fullmove,
        )

    def with_side_to_move(self, color: Color) -> Position:
        """Same placement with *color* to move.

        The en-passant target only belongs to the side that was to move, so
        it is dropped when the side changes.
        """
        if color == self.side_to_move:
            return self
        return replace(self, side_to_move=color, en_passant=None)

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _castling_after(self, move: Move) -> CastlingRights:
        rights = self.castling
        if move.piece.kind == PieceType.KING:
            rights &= ~CastlingRights.both(move.piece.color)
        for sq in (move.from_sq, move.to_sq):
            corner = ROOK_CORNERS.get(sq)
            if corner is not None:
                rights &= ~corner
        return rights
