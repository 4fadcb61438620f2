"""Move-generator tests: attack detection, pseudo-legal moves and perft.

Perft reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, MoveFlag, PieceType
from chessrules.core.move_generator import (
    build_move,
    is_attacked,
    is_in_check,
    pseudo_legal_destinations,
    pseudo_legal_moves,
)
from chessrules.core.notation import STARTING_FEN, position_from_fen
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.types import (
    C1, D1, D2, D3, D4, D5, D6, E1, E2, E3, E4, E5, E7, E8, F1, F2, F3, G1, H3, H5,
)


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes at *depth*; each child is a fresh position."""
    if depth == 0:
        return 1
    moves = Rules.legal_moves(position)
    if depth == 1:
        return len(moves)
    return sum(perft(position.apply(move), depth - 1) for move in moves)


def play(position: Position, *moves: str) -> Position:
    """Apply UCI moves without validation; test helper for short lines."""
    for text in moves:
        from_sq = (8 - int(text[1]), ord(text[0]) - ord("a"))
        to_sq = (8 - int(text[3]), ord(text[2]) - ord("a"))
        move = build_move(position, from_sq, to_sq)
        assert move is not None, text
        position = position.apply(move)
    return position


# ── Attack detection ─────────────────────────────────────────────────────────


class TestIsAttacked:
    def test_initial_knight_and_pawn_cover(self) -> None:
        board = Board.initial()
        assert is_attacked(board, F3, Color.WHITE)
        assert is_attacked(board, H3, Color.WHITE)
        assert not is_attacked(board, E4, Color.WHITE)

    def test_pawn_attacks_diagonally_only(self) -> None:
        board = Board.empty().with_pieces({E2: Piece(Color.WHITE, PieceType.PAWN)})
        assert is_attacked(board, D3, Color.WHITE)
        assert is_attacked(board, F3, Color.WHITE)
        assert not is_attacked(board, E3, Color.WHITE)
        assert not is_attacked(board, E4, Color.WHITE)

    def test_black_pawn_attacks_downward(self) -> None:
        board = Board.empty().with_pieces({E5: Piece(Color.BLACK, PieceType.PAWN)})
        assert is_attacked(board, D4, Color.BLACK)
        assert not is_attacked(board, D6, Color.BLACK)

    def test_slider_blocked(self) -> None:
        board = Board.empty().with_pieces(
            {
                E1: Piece(Color.WHITE, PieceType.ROOK),
                E3: Piece(Color.WHITE, PieceType.PAWN),
            }
        )
        assert is_attacked(board, E2, Color.WHITE)
        assert is_attacked(board, E3, Color.WHITE)
        assert not is_attacked(board, E4, Color.WHITE)

    def test_queen_diagonal(self) -> None:
        board = Board.empty().with_pieces({D1: Piece(Color.BLACK, PieceType.QUEEN)})
        assert is_attacked(board, H5, Color.BLACK)
        assert not is_attacked(board, E3, Color.BLACK)

    def test_king_adjacency(self) -> None:
        board = Board.empty().with_pieces({E1: Piece(Color.WHITE, PieceType.KING)})
        assert is_attacked(board, D2, Color.WHITE)
        assert not is_attacked(board, E3, Color.WHITE)

    def test_empty_board(self) -> None:
        assert not is_attacked(Board.empty(), E4, Color.WHITE)


class TestIsInCheck:
    def test_initial(self) -> None:
        assert not is_in_check(Board.initial(), Color.WHITE)
        assert not is_in_check(Board.initial(), Color.BLACK)

    def test_rook_check(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4R1K1 b - - 0 1")
        assert is_in_check(pos.board, Color.BLACK)
        assert not is_in_check(pos.board, Color.WHITE)

    def test_no_king_is_never_in_check(self) -> None:
        board = Board.empty().with_pieces({E1: Piece(Color.BLACK, PieceType.ROOK)})
        assert not is_in_check(board, Color.WHITE)


# ── Pseudo-legal destinations ────────────────────────────────────────────────


class TestPseudoLegalDestinations:
    def test_initial_pawn(self) -> None:
        assert pseudo_legal_destinations(Position.initial(), E2) == {E3, E4}

    def test_initial_knight(self) -> None:
        assert pseudo_legal_destinations(Position.initial(), G1) == {F3, H3}

    def test_initial_blocked_pieces(self) -> None:
        pos = Position.initial()
        assert pseudo_legal_destinations(pos, E1) == set()
        assert pseudo_legal_destinations(pos, D1) == set()

    def test_empty_square(self) -> None:
        assert pseudo_legal_destinations(Position.initial(), E4) == set()

    def test_pawn_capture_and_block(self) -> None:
        pos = play(Position.initial(), "e2e4", "d7d5")
        assert pseudo_legal_destinations(pos, E4) == {E5, D5}

    def test_pawn_fully_blocked(self) -> None:
        pos = play(Position.initial(), "e2e4", "e7e5")
        assert pseudo_legal_destinations(pos, E4) == set()

    def test_double_push_needs_both_squares(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert pseudo_legal_destinations(pos, E2) == set()

    def test_en_passant_offered_right_after_double_push(self) -> None:
        pos = play(Position.initial(), "e2e4", "a7a6", "e4e5", "d7d5")
        assert D6 in pseudo_legal_destinations(pos, E5)

    def test_en_passant_expires(self) -> None:
        pos = play(
            Position.initial(), "e2e4", "a7a6", "e4e5", "d7d5", "h2h3", "h7h6"
        )
        assert D6 not in pseudo_legal_destinations(pos, E5)


class TestCastlingGeneration:
    def test_both_sides_available(self) -> None:
        pos = position_from_fen("r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1")
        assert pseudo_legal_destinations(pos, E1) == {D1, F1, G1, C1}

    def test_no_castling_through_attacked_square(self) -> None:
        pos = position_from_fen("4k3/8/8/8/2b5/8/8/4K2R w K - 0 1")
        assert G1 not in pseudo_legal_destinations(pos, E1)

    def test_no_castling_out_of_check(self) -> None:
        pos = position_from_fen("4k3/4r3/8/8/8/8/8/4K2R w K - 0 1")
        assert G1 not in pseudo_legal_destinations(pos, E1)

    def test_queenside_b_file_may_be_attacked(self) -> None:
        pos = position_from_fen("1r2k3/8/8/8/8/8/8/R3K3 w Q - 0 1")
        assert C1 in pseudo_legal_destinations(pos, E1)

    def test_requires_rook_on_corner(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 w K - 0 1")
        assert G1 not in pseudo_legal_destinations(pos, E1)

    def test_requires_right(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K2R w - - 0 1")
        assert pseudo_legal_destinations(pos, E1).isdisjoint({C1, G1})

    def test_path_must_be_empty(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/RN2K1NR w KQ - 0 1")
        assert pseudo_legal_destinations(pos, E1).isdisjoint({C1, G1})


# ── Move construction ────────────────────────────────────────────────────────


class TestBuildMove:
    def test_double_pawn(self) -> None:
        move = build_move(Position.initial(), E2, E4)
        assert move is not None
        assert move.flag == MoveFlag.DOUBLE_PAWN
        assert move.uci == "e2e4"

    def test_empty_origin(self) -> None:
        assert build_move(Position.initial(), E4, E5) is None

    def test_capture_recorded(self) -> None:
        pos = play(Position.initial(), "e2e4", "d7d5")
        move = build_move(pos, E4, D5)
        assert move is not None
        assert move.captured == Piece(Color.BLACK, PieceType.PAWN)
        assert move.is_capture

    def test_en_passant_records_passed_pawn(self) -> None:
        pos = play(Position.initial(), "e2e4", "a7a6", "e4e5", "d7d5")
        move = build_move(pos, E5, D6)
        assert move is not None
        assert move.flag == MoveFlag.EN_PASSANT
        assert move.captured == Piece(Color.BLACK, PieceType.PAWN)

    def test_promotion_defaults(self) -> None:
        pos = position_from_fen("8/4P3/8/8/8/8/8/k3K3 w - - 0 1")
        move = build_move(pos, E7, E8)
        assert move is not None
        assert move.flag == MoveFlag.PROMOTION
        assert move.promotion == PieceType.QUEEN
        assert move.uci == "e7e8q"

    def test_promotion_choice_ignored_off_last_rank(self) -> None:
        move = build_move(Position.initial(), E2, E4, PieceType.KNIGHT)
        assert move is not None
        assert move.promotion is None

    def test_castling_flag(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        kingside = build_move(pos, E1, G1)
        queenside = build_move(pos, E1, C1)
        assert kingside is not None and kingside.flag == MoveFlag.CASTLE_KINGSIDE
        assert queenside is not None and queenside.flag == MoveFlag.CASTLE_QUEENSIDE
        assert kingside.is_castling

    def test_promotions_expanded(self) -> None:
        pos = position_from_fen("8/4P3/8/8/8/8/8/k3K3 w - - 0 1")
        promos = {m.promotion for m in pseudo_legal_moves(pos) if m.from_sq == E7}
        assert promos == {
            PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT
        }

    def test_moves_for_other_color(self) -> None:
        moves = pseudo_legal_moves(Position.initial(), Color.BLACK)
        assert len(moves) == 20
        assert all(m.piece.color == Color.BLACK for m in moves)
        assert not any(m.from_sq == F2 for m in moves)


# ── Perft: starting position ─────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert perft(pos, 1) == 20

    def test_depth_2(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert perft(pos, 2) == 400

    def test_depth_3(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert perft(pos, 3) == 8_902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert perft(pos, 4) == 197_281


# ── Kiwipete (castling, en passant, promotions) ──────────────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        pos = position_from_fen(KIWIPETE)
        assert perft(pos, 1) == 48

    def test_depth_2(self) -> None:
        pos = position_from_fen(KIWIPETE)
        assert perft(pos, 2) == 2_039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        pos = position_from_fen(KIWIPETE)
        assert perft(pos, 3) == 97_862


# ── Position 3 (discovered checks along the rank) ────────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS3), 2) == 191

    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POS3), 3) == 2_812


# ── Position 4 (promotions and checks) ───────────────────────────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS4), 1) == 6

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS4), 2) == 264

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POS4), 3) == 9_467


# ── Position 5 ───────────────────────────────────────────────────────────────

POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftPos5:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS5), 1) == 44

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS5), 2) == 1_486

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POS5), 3) == 62_379
