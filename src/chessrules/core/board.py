"""Board - immutable piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square, is_on_board

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(sq: Square) -> int:
    row, col = sq
    if not is_on_board(row, col):
        raise IndexError(f"Square off the board: {sq!r}")
    return row * 8 + col


class Board:
    """Immutable 64-square snapshot.

    Every "mutation" returns a new :class:`Board`; instances can be shared
    freely between the authoritative game state and simulations.
    """

    __slots__ = ("_squares",)

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * 64
        elif len(squares) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(squares)}")
        self._squares: tuple[Piece | None, ...] = tuple(squares)

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[_index(sq)]

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for occupied squares, optionally by color."""
        for idx, piece in enumerate(self._squares):
            if piece is not None and (color is None or piece.color == color):
                yield (idx >> 3, idx & 7), piece

    def pieces(self, color: Color, kind: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *kind*."""
        target = Piece(color, kind)
        return [sq for sq, piece in self.occupied(color) if piece == target]

    def king_square(self, color: Color) -> Square | None:
        """The square of *color*'s king, or ``None`` if it is missing."""
        target = Piece(color, PieceType.KING)
        for idx, piece in enumerate(self._squares):
            if piece == target:
                return (idx >> 3, idx & 7)
        return None

    def rows(self) -> tuple[tuple[Piece | None, ...], ...]:
        """Row-major 8x8 snapshot, row 0 being rank 8."""
        return tuple(self._squares[r * 8 : r * 8 + 8] for r in range(8))

    # -- Derived boards -----------------------------------------------------

    def with_pieces(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with each square in *changes* set to its value."""
        squares = list(self._squares)
        for sq, piece in changes.items():
            squares[_index(sq)] = piece
        return Board(tuple(squares))

    def moved(self, from_sq: Square, to_sq: Square) -> Board:
        """New board with the piece on *from_sq* relocated to *to_sq*."""
        return self.with_pieces({from_sq: None, to_sq: self[from_sq]})

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        squares: list[Piece | None] = [None] * 64
        for col, kind in enumerate(_BACK_RANK):
            squares[col] = Piece(Color.BLACK, kind)
            squares[8 + col] = Piece(Color.BLACK, PieceType.PAWN)
            squares[48 + col] = Piece(Color.WHITE, PieceType.PAWN)
            squares[56 + col] = Piece(Color.WHITE, kind)
        return cls(tuple(squares))

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(self._squares)

    def __repr__(self) -> str:
        lines: list[str] = []
        for row_idx, row in enumerate(self.rows()):
            cells = " ".join(str(p) if p else "." for p in row)
            lines.append(f"{8 - row_idx} {cells}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
