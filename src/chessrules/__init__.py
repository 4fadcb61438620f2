"""Chess rules engine: board state, legal moves, check, checkmate, stalemate."""

__version__ = "0.1.0"
