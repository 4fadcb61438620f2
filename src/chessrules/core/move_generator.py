"""Pseudo-legal move generation + attack detection.

Everything here is a pure function of a :class:`Board` or :class:`Position`
snapshot; king safety is the job of :mod:`chessrules.core.rules`.
"""

from __future__ import annotations

from collections.abc import Iterator

from chessrules.core.board import Board
from chessrules.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    MoveFlag,
    PieceType,
)
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.position import CASTLE_ROOK_MOVES, KING_HOME, Position
from chessrules.core.types import ALL_SQUARES, Square, is_on_board

# Offsets are (d_row, d_col); row 0 is rank 8.
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_FORWARD: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
_PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
_PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for row, col in ALL_SQUARES:
        targets[(row, col)] = tuple(
            (row + dr, col + dc)
            for dr, dc in offsets
            if is_on_board(row + dr, col + dc)
        )
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[tuple[Square, ...], ...]]:
    rays_per_square: dict[Square, tuple[tuple[Square, ...], ...]] = {}
    for row, col in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            r, c = row + dr, col + dc
            ray: list[Square] = []
            while is_on_board(r, c):
                ray.append((r, c))
                r += dr
                c += dc
            square_rays.append(tuple(ray))
        rays_per_square[(row, col)] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


# -- Attack detection --------------------------------------------------------


def is_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color* on *board*?

    An attack is "could capture there": pawns count their diagonals only,
    castling never counts, and the attacker's own king safety is ignored.
    """
    row, col = sq

    pawn_row = row - _FORWARD[by_color]
    pawn = Piece(by_color, PieceType.PAWN)
    for pawn_col in (col - 1, col + 1):
        if is_on_board(pawn_row, pawn_col) and board[(pawn_row, pawn_col)] == pawn:
            return True

    knight = Piece(by_color, PieceType.KNIGHT)
    if any(board[to_sq] == knight for to_sq in _KNIGHT_TARGETS[sq]):
        return True

    king = Piece(by_color, PieceType.KING)
    if any(board[to_sq] == king for to_sq in _KING_TARGETS[sq]):
        return True

    for rays, kinds in (
        (_BISHOP_RAYS[sq], (PieceType.BISHOP, PieceType.QUEEN)),
        (_ROOK_RAYS[sq], (PieceType.ROOK, PieceType.QUEEN)),
    ):
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.kind in kinds:
                    return True
                break

    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked? A board without that king is never in check."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_attacked(board, king_sq, color.opposite)


# -- Pseudo-legal destinations -------------------------------------------------


def pseudo_legal_destinations(position: Position, sq: Square) -> set[Square]:
    """Squares the piece on *sq* can reach, ignoring its own king's safety."""
    piece = position.board[sq]
    if piece is None:
        return set()
    if piece.kind == PieceType.PAWN:
        return set(_pawn_destinations(position, sq, piece.color))
    if piece.kind == PieceType.KNIGHT:
        return set(_step_destinations(position.board, _KNIGHT_TARGETS[sq], piece.color))
    if piece.kind == PieceType.KING:
        dests = set(_step_destinations(position.board, _KING_TARGETS[sq], piece.color))
        dests.update(_castling_destinations(position, sq, piece.color))
        return dests
    rays = _SLIDER_RAYS[piece.kind][sq]
    return set(_sliding_destinations(position.board, rays, piece.color))


def _pawn_destinations(
    position: Position, sq: Square, color: Color
) -> Iterator[Square]:
    board = position.board
    row, col = sq
    step = _FORWARD[color]
    ahead = row + step
    if not 0 <= ahead < 8:
        return

    if board.is_empty((ahead, col)):
        yield (ahead, col)
        two_ahead = ahead + step
        if row == _PAWN_START_ROW[color] and board.is_empty((two_ahead, col)):
            yield (two_ahead, col)

    for cap_col in (col - 1, col + 1):
        if not 0 <= cap_col < 8:
            continue
        cap_sq = (ahead, cap_col)
        target = board[cap_sq]
        if target is not None:
            if target.color != color:
                yield cap_sq
        elif cap_sq == position.en_passant:
            passed = board[(row, cap_col)]
            if passed == Piece(color.opposite, PieceType.PAWN):
                yield cap_sq


def _step_destinations(
    board: Board, targets: tuple[Square, ...], color: Color
) -> Iterator[Square]:
    for to_sq in targets:
        target = board[to_sq]
        if target is None or target.color != color:
            yield to_sq


def _sliding_destinations(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    color: Color,
) -> Iterator[Square]:
    for ray in rays:
        for to_sq in ray:
            target = board[to_sq]
            if target is None:
                yield to_sq
                continue
            if target.color != color:
                yield to_sq
            break


def _castling_destinations(
    position: Position, sq: Square, color: Color
) -> Iterator[Square]:
    if sq != KING_HOME[color]:
        return

    board = position.board
    opponent = color.opposite
    row = sq[0]
    rook = Piece(color, PieceType.ROOK)
    sides = (
        (CastlingRights.kingside(color), (row, 6), ((row, 5), (row, 6))),
        (CastlingRights.queenside(color), (row, 2), ((row, 1), (row, 2), (row, 3))),
    )
    for right, king_to, between in sides:
        if not position.castling & right:
            continue
        rook_from = CASTLE_ROOK_MOVES[king_to][0]
        if board[rook_from] != rook:
            continue
        if not all(board.is_empty(s) for s in between):
            continue
        # The king may not start on, pass through or land on an attacked square.
        king_path = (sq, (row, (sq[1] + king_to[1]) // 2), king_to)
        if any(is_attacked(board, s, opponent) for s in king_path):
            continue
        yield king_to


# -- Move construction -----------------------------------------------------------


def build_move(
    position: Position,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceType | None = None,
    default_promotion: PieceType = PieceType.QUEEN,
) -> Move | None:
    """Describe moving the piece on *from_sq* to *to_sq* as a :class:`Move`.

    Classifies the move (double push, en passant, castling, promotion) and
    records the captured piece. Returns ``None`` when *from_sq* is empty.
    No legality is implied.
    """
    board = position.board
    piece = board[from_sq]
    if piece is None:
        return None

    captured = board[to_sq]
    flag = MoveFlag.NORMAL
    promo: PieceType | None = None

    if piece.kind == PieceType.PAWN:
        if to_sq[0] == _PROMOTION_ROW[piece.color]:
            flag = MoveFlag.PROMOTION
            promo = promotion if promotion is not None else default_promotion
        elif abs(to_sq[0] - from_sq[0]) == 2:
            flag = MoveFlag.DOUBLE_PAWN
        elif (
            captured is None
            and to_sq[1] != from_sq[1]
            and to_sq == position.en_passant
        ):
            flag = MoveFlag.EN_PASSANT
            captured = board[(from_sq[0], to_sq[1])]
    elif (
        piece.kind == PieceType.KING
        and from_sq == KING_HOME[piece.color]
        and to_sq in CASTLE_ROOK_MOVES
        and to_sq[0] == from_sq[0]
    ):
        if to_sq[1] > from_sq[1]:
            flag = MoveFlag.CASTLE_KINGSIDE
        else:
            flag = MoveFlag.CASTLE_QUEENSIDE

    return Move(from_sq, to_sq, piece, captured, promo, flag)


def pseudo_legal_moves(position: Position, color: Color | None = None) -> list[Move]:
    """All pseudo-legal moves for *color* (default: side to move).

    A pawn reaching the last rank yields one move per promotion choice.
    """
    if color is None:
        color = position.side_to_move
    moves: list[Move] = []
    for from_sq, piece in position.board.occupied(color):
        for to_sq in pseudo_legal_destinations(position, from_sq):
            if piece.kind == PieceType.PAWN and to_sq[0] == _PROMOTION_ROW[color]:
                for kind in PROMOTION_TYPES:
                    move = build_move(position, from_sq, to_sq, kind)
                    assert move is not None
                    moves.append(move)
            else:
                move = build_move(position, from_sq, to_sq)
                assert move is not None
                moves.append(move)
    return moves
