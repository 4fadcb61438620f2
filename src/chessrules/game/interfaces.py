"""Abstract interfaces for the game layer.

The board widget talks to a game through :class:`IBoardProvider` (reads)
and :class:`IMoveHandler` (writes); it never touches the core directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core.enums import PROMOTION_TYPES, Color, PieceType
from chessrules.core.notation import STARTING_FEN

if TYPE_CHECKING:
    from chessrules.core.move import Move
    from chessrules.core.piece import Piece
    from chessrules.core.types import Square
    from chessrules.game.state import BoardState


# ── Options ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class GameOptions:
    """Immutable per-game configuration.

    Args:
        start_fen: Position loaded at construction and on :meth:`reset`.
        default_promotion: Piece a pawn becomes when the caller names none.
    """

    start_fen: str = STARTING_FEN
    default_promotion: PieceType = PieceType.QUEEN

    def __post_init__(self) -> None:
        if self.default_promotion not in PROMOTION_TYPES:
            allowed = ", ".join(p.name for p in PROMOTION_TYPES)
            raise ValueError(
                f"default_promotion must be one of {allowed}, "
                f"got {self.default_promotion!r}"
            )


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IBoardProvider(ABC):
    """Read-only view of a game, as needed to draw and highlight a board."""

    __slots__ = ()

    @abstractmethod
    def get_piece(self, square: Square | str) -> Piece | None:
        """Piece on *square*, or ``None`` for an empty or malformed square."""

    @abstractmethod
    def get_board_state(self) -> BoardState:
        """Snapshot of board, side to move and move history."""

    @abstractmethod
    def get_current_player(self) -> Color:
        """Color whose turn it is."""

    @abstractmethod
    def legal_destinations(self, square: Square | str) -> set[Square]:
        """Squares the piece on *square* may legally move to."""


class IMoveHandler(ABC):
    """Entry point for moves coming from the UI or an exercise script."""

    __slots__ = ()

    @abstractmethod
    def make_move(
        self,
        from_sq: Square | str,
        to_sq: Square | str,
        promotion: PieceType | None = None,
    ) -> Move:
        """Play a move. Raises ``IllegalMoveError`` if it is refused."""
