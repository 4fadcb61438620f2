"""FEN parsing and serialization.

The decoder is forgiving by default: a malformed token is logged and skipped
so that a bad diagram degrades to a partial board instead of an exception.
Pass ``strict=True`` to get :class:`ValueError` on the first problem.
"""

from __future__ import annotations

import logging

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.position import KING_HOME, ROOK_CORNERS, Position
from chessrules.core.types import Square, square_name, to_coords

_LOGGER = logging.getLogger(__name__)

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
STARTING_FEN = f"{STARTING_PLACEMENT} w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def _problem(message: str, strict: bool) -> None:
    if strict:
        raise ValueError(message)
    _LOGGER.warning("Ignoring malformed FEN input: %s", message)


# ── Piece placement ──────────────────────────────────────────────────────────


def placement_from_fen(placement: str, *, strict: bool = False) -> Board:
    """Parse the piece-placement field into a :class:`Board`."""
    if not isinstance(placement, str):
        _problem(f"placement must be a string, got {type(placement).__name__}", strict)
        return Board.empty()

    ranks = placement.split("/")
    if len(ranks) != 8:
        _problem(f"expected 8 ranks, got {len(ranks)}: {placement!r}", strict)

    pieces: dict[Square, Piece] = {}
    kings_seen: set[Color] = set()
    for row, rank_text in enumerate(ranks[:8]):
        col = 0
        for ch in rank_text:
            if ch in "0123456789":
                step = int(ch)
                if not 1 <= step <= 8:
                    _problem(f"invalid digit {ch!r} in rank {8 - row}", strict)
                    continue
                col += step
                continue
            try:
                piece = Piece.from_char(ch)
            except ValueError:
                _problem(f"invalid piece character {ch!r} in rank {8 - row}", strict)
                continue
            if col >= 8:
                _problem(f"rank {8 - row} is wider than 8 squares", strict)
                break
            if piece.kind == PieceType.KING:
                if piece.color in kings_seen:
                    _problem(f"second {piece.color} king in rank {8 - row}", strict)
                    col += 1
                    continue
                kings_seen.add(piece.color)
            pieces[(row, col)] = piece
            col += 1
        if col != 8:
            _problem(f"rank {8 - row} spans {col} squares instead of 8", strict)

    return Board.empty().with_pieces(pieces)


def placement_to_fen(board: Board) -> str:
    """Serialise *board* as a FEN piece-placement field (always 8 ranks)."""
    rows: list[str] = []
    for rank in board.rows():
        empty = 0
        row = ""
        for piece in rank:
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def infer_castling(board: Board) -> CastlingRights:
    """Castling rights implied by kings and rooks standing on their home squares."""
    rights = CastlingRights.NONE
    for corner, right in ROOK_CORNERS.items():
        color = Color.WHITE if right & CastlingRights.WHITE_BOTH else Color.BLACK
        if (
            board[KING_HOME[color]] == Piece(color, PieceType.KING)
            and board[corner] == Piece(color, PieceType.ROOK)
        ):
            rights |= right
    return rights


# ── Full FEN ─────────────────────────────────────────────────────────────────


def position_from_fen(fen: str, *, strict: bool = False) -> Position:
    """Parse a FEN string into a :class:`Position`.

    Only the placement field is required. When the castling field is
    absent, rights are inferred from the placement.
    """
    if not isinstance(fen, str):
        _problem(f"FEN must be a string, got {type(fen).__name__}", strict)
        return Position(Board.empty(), castling=CastlingRights.NONE)

    parts = fen.split()
    if not parts:
        _problem("empty FEN", strict)
        return Position(Board.empty(), castling=CastlingRights.NONE)
    if len(parts) > 6:
        _problem(f"too many fields: {fen!r}", strict)

    # 1. Piece placement
    board = placement_from_fen(parts[0], strict=strict)

    # 2. Side to move
    side = Color.WHITE
    if len(parts) > 1:
        if parts[1] == "b":
            side = Color.BLACK
        elif parts[1] != "w":
            _problem(f"invalid side-to-move field {parts[1]!r}", strict)

    # 3. Castling
    if len(parts) > 2:
        castling = CastlingRights.NONE
        if parts[2] != "-":
            for ch in parts[2]:
                right = _CASTLING_CHARS.get(ch)
                if right is None or castling & right:
                    _problem(f"invalid castling field {parts[2]!r}", strict)
                    continue
                castling |= right
    else:
        castling = infer_castling(board)

    # 4. En passant
    en_passant: Square | None = None
    if len(parts) > 3 and parts[3] != "-":
        en_passant = to_coords(parts[3])
        expected_row = 2 if side == Color.WHITE else 5
        if en_passant is None or en_passant[0] != expected_row:
            _problem(f"invalid en-passant square {parts[3]!r}", strict)
            en_passant = None

    # 5–6. Clocks (optional)
    halfmove = _parse_clock(parts, 4, default=0, minimum=0, strict=strict)
    fullmove = _parse_clock(parts, 5, default=1, minimum=1, strict=strict)

    return Position(board, side, castling, en_passant, halfmove, fullmove)


def _parse_clock(
    parts: list[str], index: int, *, default: int, minimum: int, strict: bool
) -> int:
    if len(parts) <= index:
        return default
    try:
        value = int(parts[index])
    except ValueError:
        _problem(f"invalid clock field {parts[index]!r}", strict)
        return default
    if value < minimum:
        _problem(f"clock field {value} below {minimum}", strict)
        return default
    return value


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    board_str = placement_to_fen(pos.board)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if pos.castling & right
    )
    if not castling_str:
        castling_str = "-"

    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )
