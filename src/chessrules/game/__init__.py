"""Game management layer: session state, notifications, interfaces.

Quick start::

    from chessrules.game import GameState

    game = GameState()
    game.make_move("e2", "e4")
    game.legal_destinations("g8")  # {(2, 5), (2, 7)}

The Qt signal adapter lives in :mod:`chessrules.game.qt_bridge` and is not
imported here, so the rules can be used without a Qt event loop.
"""

from chessrules.game.events import GameObserver, MoveCompleted, MoveRejected
from chessrules.game.interfaces import GameOptions, IBoardProvider, IMoveHandler
from chessrules.game.state import BoardState, GameState, MoveRecord, coerce_square

__all__ = [
    # Interfaces
    "GameObserver",
    "IBoardProvider",
    "IMoveHandler",
    # Events
    "MoveCompleted",
    "MoveRejected",
    # Concrete
    "BoardState",
    "GameOptions",
    "GameState",
    "MoveRecord",
    "coerce_square",
]
