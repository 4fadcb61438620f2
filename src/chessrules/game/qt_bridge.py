"""Qt bridge that re-emits game notifications as signals for a board widget."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from chessrules.game.events import MoveCompleted, MoveRejected
from chessrules.game.state import GameState


class QtGameObserver(QObject):
    """Observer that turns :class:`GameState` events into Qt signals.

    Signals are emitted on the thread that played the move; connect with a
    queued connection if the game is driven off the GUI thread.
    """

    move_completed = pyqtSignal(object)  # MoveCompleted
    move_rejected = pyqtSignal(object)  # MoveRejected
    game_over = pyqtSignal(object)  # GameResult

    def __init__(
        self, game: GameState | None = None, parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self._game: GameState | None = None
        if game is not None:
            self.attach(game)

    @property
    def game(self) -> GameState | None:
        return self._game

    def attach(self, game: GameState) -> None:
        """Start relaying events from *game*, detaching from any previous one."""
        self.detach()
        game.subscribe(self)
        self._game = game

    def detach(self) -> None:
        if self._game is not None:
            self._game.unsubscribe(self)
            self._game = None

    # ── GameObserver impl ────────────────────────────────────────────────

    def on_move_completed(self, event: MoveCompleted) -> None:
        self.move_completed.emit(event)
        if event.is_game_over:
            self.game_over.emit(event.result)

    def on_move_rejected(self, event: MoveRejected) -> None:
        self.move_rejected.emit(event)
