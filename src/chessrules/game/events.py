"""Notifications published by a game after each move attempt."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from chessrules.core.enums import Color, GameResult, PieceType, RejectReason
from chessrules.core.move import Move
from chessrules.core.types import Square


@dataclass(frozen=True, slots=True)
class MoveCompleted:
    """A move was applied; the game state already reflects it."""

    move: Move
    san: str
    fen_after: str
    check_status: Mapping[Color, bool]
    result: GameResult

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS


@dataclass(frozen=True, slots=True)
class MoveRejected:
    """A move was refused; the game state is unchanged."""

    from_sq: Square | str
    to_sq: Square | str
    promotion: PieceType | None
    reason: RejectReason


class GameObserver(Protocol):
    """Anything that wants to hear about moves on a game."""

    def on_move_completed(self, event: MoveCompleted) -> None: ...

    def on_move_rejected(self, event: MoveRejected) -> None: ...
