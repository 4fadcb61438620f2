"""Game state: owns the authoritative position, history and observers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import NoReturn

from chessrules.core.board import Board
from chessrules.core.enums import Color, GameResult, PieceType, RejectReason
from chessrules.core.move import Move
from chessrules.core.move_generator import build_move
from chessrules.core.notation import (
    STARTING_FEN,
    move_to_san,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import IllegalMoveError, Rules
from chessrules.core.types import Square, is_on_board, square_name, to_coords
from chessrules.game.events import GameObserver, MoveCompleted, MoveRejected
from chessrules.game.interfaces import GameOptions, IBoardProvider, IMoveHandler

_LOGGER = logging.getLogger(__name__)

_START_ALIASES = frozenset({"", "start", "startpos"})


def coerce_square(value: object) -> Square | None:
    """Accept ``'e4'`` or ``(row, col)``; ``None`` for anything else."""
    if isinstance(value, str):
        return to_coords(value)
    if (
        isinstance(value, tuple)
        and len(value) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in value)
        and is_on_board(value[0], value[1])
    ):
        return (value[0], value[1])
    return None


def _describe(value: object) -> str:
    sq = coerce_square(value)
    return square_name(sq) if sq is not None else str(value)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    san: str
    fen_after: str
    was_check: bool = False
    was_checkmate: bool = False


@dataclass(frozen=True, slots=True)
class BoardState:
    """Read-only snapshot handed to the board widget."""

    board: Board
    side_to_move: Color
    move_history: tuple[Move, ...]


class GameState(IBoardProvider, IMoveHandler):
    """One game session: a position that changes only through :meth:`make_move`.

    This is a pure logic class: no threading, no UI. Observers are called
    synchronously once a transition is complete.
    """

    __slots__ = (
        "_options",
        "_position",
        "_start_fen",
        "_history",
        "_check_status",
        "_observers",
    )

    def __init__(self, options: GameOptions | None = None) -> None:
        self._options = options or GameOptions()
        self._observers: list[GameObserver] = []
        self._history: list[MoveRecord] = []
        self._check_status: dict[Color, bool] = {Color.WHITE: False, Color.BLACK: False}
        self._start_fen = self._options.start_fen
        self._position = Position()
        self.load_position(self._options.start_fen)

    # ── Initialisation ───────────────────────────────────────────────────

    def load_position(self, fen: str | None) -> None:
        """Replace the game with the position described by *fen*.

        Accepts a full FEN, a bare placement field, or ``"start"``. Malformed
        input is degraded, never raised.
        """
        if fen is None or (isinstance(fen, str) and fen.strip() in _START_ALIASES):
            fen = STARTING_FEN
        self._position = position_from_fen(fen)
        self._start_fen = position_to_fen(self._position)
        self._history.clear()
        self._update_check_status()
        _LOGGER.info("Loaded position %s", self._start_fen)

    def reset(self) -> None:
        """Return to the configured start position."""
        self.load_position(self._options.start_fen)

    def export_position(self) -> str:
        """Current position as FEN."""
        return position_to_fen(self._position)

    # ── Observers ────────────────────────────────────────────────────────

    def subscribe(self, observer: GameObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: GameObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    # ── IBoardProvider impl ──────────────────────────────────────────────

    def get_piece(self, square: Square | str) -> Piece | None:
        sq = coerce_square(square)
        if sq is None:
            return None
        return self._position.board[sq]

    def get_board_state(self) -> BoardState:
        return BoardState(
            board=self._position.board,
            side_to_move=self._position.side_to_move,
            move_history=tuple(record.move for record in self._history),
        )

    def get_current_player(self) -> Color:
        return self._position.side_to_move

    def legal_destinations(self, square: Square | str) -> set[Square]:
        sq = coerce_square(square)
        if sq is None:
            return set()
        return Rules.legal_destinations(self._position, sq)

    # ── IMoveHandler impl ────────────────────────────────────────────────

    def make_move(
        self,
        from_sq: Square | str,
        to_sq: Square | str,
        promotion: PieceType | None = None,
    ) -> Move:
        origin = coerce_square(from_sq)
        target = coerce_square(to_sq)
        if origin is None or target is None:
            self._reject(from_sq, to_sq, promotion, RejectReason.MALFORMED_SQUARE)

        position = self._position
        move = build_move(
            position,
            origin,
            target,
            promotion,
            default_promotion=self._options.default_promotion,
        )
        if move is None:
            self._reject(from_sq, to_sq, promotion, RejectReason.NO_PIECE)
        reason = Rules.check_move(position, move)
        if reason is not None:
            self._reject(from_sq, to_sq, promotion, reason)

        san = move_to_san(position, move)
        self._position = position.apply(move)
        self._update_check_status()

        mover = move.piece.color
        record = MoveRecord(
            move=move,
            san=san,
            fen_after=position_to_fen(self._position),
            was_check=self._check_status[mover.opposite],
            was_checkmate=san.endswith("#"),
        )
        self._history.append(record)
        _LOGGER.debug("Played %s (%s) -> %s", move.uci, san, record.fen_after)

        event = MoveCompleted(
            move=move,
            san=san,
            fen_after=record.fen_after,
            check_status=MappingProxyType(dict(self._check_status)),
            result=self.result,
        )
        for observer in list(self._observers):
            observer.on_move_completed(event)
        return move

    def make_uci_move(self, text: str) -> Move:
        """Play a move given as UCI text, e.g. ``'e7e8n'``."""
        parsed = parse_uci(text)
        if parsed is None:
            self._reject(text, "", None, RejectReason.MALFORMED_SQUARE)
        return self.make_move(parsed.from_sq, parsed.to_sq, parsed.promotion)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def options(self) -> GameOptions:
        return self._options

    @property
    def position(self) -> Position:
        return self._position

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def start_fen(self) -> str:
        return self._start_fen

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def check_status(self) -> dict[Color, bool]:
        return dict(self._check_status)

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self._history)

    @property
    def result(self) -> GameResult:
        return Rules.game_result(self._position)

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return Rules.legal_moves(self._position)

    def is_legal(
        self,
        from_sq: Square | str,
        to_sq: Square | str,
        promotion: PieceType | None = None,
    ) -> bool:
        origin = coerce_square(from_sq)
        target = coerce_square(to_sq)
        if origin is None or target is None:
            return False
        move = build_move(
            self._position,
            origin,
            target,
            promotion,
            default_promotion=self._options.default_promotion,
        )
        return move is not None and Rules.is_legal(self._position, move)

    def is_in_check(self, color: Color | None = None) -> bool:
        if color is None:
            color = self._position.side_to_move
        return self._check_status[color]

    def is_checkmate(self, color: Color) -> bool:
        return Rules.is_checkmate(self._position, color)

    def is_stalemate(self, color: Color) -> bool:
        return Rules.is_stalemate(self._position, color)

    # ── Internal ─────────────────────────────────────────────────────────

    def _update_check_status(self) -> None:
        for color in Color:
            self._check_status[color] = Rules.is_in_check(self._position, color)

    def _reject(
        self,
        from_sq: Square | str,
        to_sq: Square | str,
        promotion: PieceType | None,
        reason: RejectReason,
    ) -> NoReturn:
        _LOGGER.debug("Rejected %s -> %s: %s", from_sq, to_sq, reason.value)
        event = MoveRejected(from_sq, to_sq, promotion, reason)
        for observer in list(self._observers):
            observer.on_move_rejected(event)
        raise IllegalMoveError(reason, _describe(from_sq) + _describe(to_sq))
