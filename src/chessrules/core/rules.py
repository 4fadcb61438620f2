"""High-level chess rules: legality, check, checkmate, stalemate."""

from __future__ import annotations

from collections.abc import Iterator

from chessrules.core.enums import (
    PROMOTION_TYPES,
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
from chessrules.core.position import Position
from chessrules.core.types import Square


class IllegalMoveError(ValueError):
    """Raised when a submitted move is refused; the game state is untouched."""

    def __init__(self, reason: RejectReason, uci: str = "") -> None:
        self.reason = reason
        self.uci = uci
        prefix = f"Illegal move {uci}: " if uci else "Illegal move: "
        super().__init__(prefix + reason.value)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # ── Legality ─────────────────────────────────────────────────────────

    @staticmethod
    def check_move(position: Position, move: Move) -> RejectReason | None:
        """First rule *move* breaks in *position*, or ``None`` if it is legal."""
        board = position.board
        piece = board[move.from_sq]
        if piece is None:
            return RejectReason.NO_PIECE
        if piece.color != position.side_to_move:
            return RejectReason.WRONG_TURN

        target = board[move.to_sq]
        if target is not None and target.color == piece.color:
            return RejectReason.OWN_PIECE

        if move.to_sq not in pseudo_legal_destinations(position, move.from_sq):
            return RejectReason.UNREACHABLE

        # Simulate the move the board implies, not the caller's record of it.
        expected = build_move(position, move.from_sq, move.to_sq, move.promotion)
        assert expected is not None
        if expected.flag == MoveFlag.PROMOTION:
            if move.promotion not in PROMOTION_TYPES:
                return RejectReason.INVALID_PROMOTION
        elif move.promotion is not None and move.promotion not in PROMOTION_TYPES:
            return RejectReason.INVALID_PROMOTION
        if move != expected:
            return RejectReason.MISMATCHED_MOVE

        scratch = position.apply(expected).board
        if piece.kind == PieceType.KING:
            king_sq: Square | None = move.to_sq
        else:
            king_sq = scratch.king_square(piece.color)
        # Boards without a king (exercise diagrams) have nothing to expose.
        if king_sq is not None and is_attacked(scratch, king_sq, piece.color.opposite):
            return RejectReason.KING_EXPOSED
        return None

    @staticmethod
    def is_legal(position: Position, move: Move) -> bool:
        return Rules.check_move(position, move) is None

    @staticmethod
    def iter_legal_moves(
        position: Position, color: Color | None = None
    ) -> Iterator[Move]:
        """Lazily yield legal moves for *color* (default: side to move)."""
        if color is not None:
            position = position.with_side_to_move(color)
        for move in pseudo_legal_moves(position):
            if Rules.is_legal(position, move):
                yield move

    @staticmethod
    def legal_moves(position: Position, color: Color | None = None) -> list[Move]:
        return list(Rules.iter_legal_moves(position, color))

    @staticmethod
    def legal_destinations(position: Position, sq: Square) -> set[Square]:
        """Legal target squares for the piece on *sq* (empty if not its turn)."""
        piece = position.board[sq]
        if piece is None or piece.color != position.side_to_move:
            return set()
        return {
            move.to_sq
            for move in pseudo_legal_moves(position)
            if move.from_sq == sq and Rules.is_legal(position, move)
        }

    @staticmethod
    def has_legal_move(position: Position, color: Color | None = None) -> bool:
        """Whether *color* has any legal move; stops at the first one found."""
        return next(Rules.iter_legal_moves(position, color), None) is not None

    # ── Check / terminal states ──────────────────────────────────────────

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        if color is None:
            color = position.side_to_move
        return is_in_check(position.board, color)

    @staticmethod
    def is_checkmate(position: Position, color: Color | None = None) -> bool:
        if color is None:
            color = position.side_to_move
        if not Rules.is_in_check(position, color):
            return False
        return not Rules.has_legal_move(position, color)

    @staticmethod
    def is_stalemate(position: Position, color: Color | None = None) -> bool:
        if color is None:
            color = position.side_to_move
        if Rules.is_in_check(position, color):
            return False
        return not Rules.has_legal_move(position, color)

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result for the side to move."""
        if Rules.has_legal_move(position):
            return GameResult.IN_PROGRESS
        if Rules.is_in_check(position):
            return (
                GameResult.BLACK_WINS
                if position.side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
        return GameResult.DRAW  # stalemate
