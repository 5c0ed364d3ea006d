"""Tests for per-piece movement rules and attack detection."""

from chessgrid.core.board import Board
from chessgrid.core.enums import Color, PieceType
from chessgrid.core.movement import (
    MOVE_RULES,
    bishop_actions,
    get_possible_actions,
    is_checked,
    king_actions,
    knight_actions,
    pawn_actions,
    queen_actions,
    rook_actions,
)
from chessgrid.core.types import (
    A1, B1, C1, D1, E1, F1, G1,
    A2, B2, C2, D2, E2, F2, H2,
    A3, B3, C3, D3, E3, F3, G3, H3,
    A4, B4, C4, D4, E4, F4, H4,
    C5, D5, E5, F5, G5,
    D6, E6,
    D7, E7,
)


def _actions(board: Board, square) -> list:
    piece = board.query(square)
    assert piece is not None
    return piece.possible_actions(board)


class TestDispatch:
    def test_every_kind_has_a_rule(self) -> None:
        assert set(MOVE_RULES) == set(PieceType)

    def test_dispatch_matches_rule(self, initial: Board) -> None:
        assert get_possible_actions(
            PieceType.KNIGHT, B1, Color.WHITE, initial, False
        ) == knight_actions(B1, Color.WHITE, initial, False)

    def test_starting_position_has_twenty_candidates_per_side(
        self, initial: Board
    ) -> None:
        for color in (Color.WHITE, Color.BLACK):
            total = sum(len(p.possible_actions(initial)) for p in initial.pieces_of(color))
            assert total == 20


class TestSlidingPieces:
    def test_rook_stops_at_blockers(self, make_board) -> None:
        board = make_board({"d4": "R", "d6": "P", "f4": "p", "e1": "K", "h8": "k"})
        assert rook_actions(D4, Color.WHITE, board, False) == [
            E4, F4, C4, B4, A4, D5, D3, D2, D1,
        ]

    def test_rook_excludes_own_blocker(self, make_board) -> None:
        board = make_board({"d4": "R", "d6": "P", "e1": "K", "h8": "k"})
        assert D6 not in rook_actions(D4, Color.WHITE, board, False)

    def test_bishop_blocked_at_start(self, initial: Board) -> None:
        assert _actions(initial, C1) == []

    def test_bishop_captures_and_stops(self, make_board) -> None:
        board = make_board({"c1": "B", "e3": "p", "h1": "K", "h8": "k"})
        actions = bishop_actions(C1, Color.WHITE, board, False)
        assert actions == [D2, E3, B2, A3]
        assert F4 not in actions

    def test_queen_is_rook_plus_bishop(self, make_board) -> None:
        board = make_board({"d4": "Q", "b8": "K", "h5": "k"})
        actions = queen_actions(D4, Color.WHITE, board, False)
        assert len(actions) == 27
        assert actions == rook_actions(D4, Color.WHITE, board, False) + bishop_actions(
            D4, Color.WHITE, board, False
        )

    def test_queen_blocked_at_start(self, initial: Board) -> None:
        assert _actions(initial, D1) == []


class TestKnight:
    def test_jumps_over_pieces(self, initial: Board) -> None:
        assert _actions(initial, B1) == [C3, A3]

    def test_captures_but_not_own(self, make_board) -> None:
        board = make_board({"e4": "N", "d6": "p", "f6": "P", "a1": "K", "h8": "k"})
        assert knight_actions(E4, Color.WHITE, board, False) == [
            D6, F2, D2, G5, G3, C5, C3,
        ]

    def test_corner(self, make_board) -> None:
        board = make_board({"a1": "N", "e1": "K", "e8": "k"})
        assert knight_actions(A1, Color.WHITE, board, False) == [B3, C2]


class TestPawn:
    def test_double_step_when_unmoved(self, initial: Board) -> None:
        assert _actions(initial, E2) == [E3, E4]

    def test_single_step_after_moving(self, initial: Board) -> None:
        assert pawn_actions(E2, Color.WHITE, initial, True) == [E3]

    def test_black_moves_down(self, initial: Board) -> None:
        assert _actions(initial, E7) == [E6, E5]

    def test_blocked_first_square(self, make_board) -> None:
        board = make_board({"e2": "P", "e3": "n", "e1": "K", "e8": "k"})
        assert pawn_actions(E2, Color.WHITE, board, False) == []

    def test_blocked_second_square(self, make_board) -> None:
        board = make_board({"e2": "P", "e4": "n", "e1": "K", "e8": "k"})
        assert pawn_actions(E2, Color.WHITE, board, False) == [E3]

    def test_diagonal_captures(self, make_board) -> None:
        board = make_board(
            {"e4": "P", "d5": "p", "e5": "p", "f5": "p", "e1": "K", "e8": "k"},
            moved=["e4"],
        )
        assert _actions(board, E4) == [F5, D5]

    def test_no_capture_of_own_piece(self, make_board) -> None:
        board = make_board({"e4": "P", "d5": "N", "e1": "K", "e8": "k"}, moved=["e4"])
        assert _actions(board, E4) == [E5]

    def test_no_en_passant(self, make_board) -> None:
        board = make_board(
            {"e5": "P", "d7": "p", "e1": "K", "e8": "k"},
            side_to_move=Color.BLACK,
            moved=["e5"],
        )
        after = board.move(D7, D5)
        assert isinstance(after, Board)
        assert _actions(after, E5) == [E6]

    def test_edge_files(self, make_board) -> None:
        board = make_board({"a2": "P", "b3": "n", "h2": "P", "e1": "K", "e8": "k"})
        assert _actions(board, A2) == [A3, A4, B3]
        assert _actions(board, H2) == [H3, H4]


class TestKing:
    def test_boxed_in_at_start(self, initial: Board) -> None:
        assert _actions(initial, E1) == []

    def test_avoids_attacked_squares(self, make_board) -> None:
        board = make_board({"e1": "K", "a2": "r", "e8": "k"})
        assert king_actions(E1, Color.WHITE, board, False, True) == [F1, D1]

    def test_attacks_only_mode_keeps_unsafe_squares(self, make_board) -> None:
        board = make_board({"e1": "K", "a2": "r", "e8": "k"})
        assert king_actions(E1, Color.WHITE, board, False, False) == [
            F1, D1, F2, E2, D2,
        ]

    def test_may_capture_undefended_piece(self, make_board) -> None:
        board = make_board({"e1": "K", "d2": "p", "e8": "k"})
        assert D2 in _actions(board, E1)

    def test_facing_kings_terminate(self, make_board) -> None:
        board = make_board({"e4": "K", "e6": "k"})
        assert _actions(board, E4) == [F4, D4, D3, E3, F3]
        black = board.query(E6)
        assert black is not None
        assert D5 not in black.possible_actions(board)
        assert E5 not in black.possible_actions(board)


class TestCastling:
    LAYOUT = {"e1": "K", "a1": "R", "h1": "R", "e8": "k"}

    def test_both_sides_offered(self, make_board) -> None:
        actions = _actions(make_board(self.LAYOUT), E1)
        assert G1 in actions
        assert C1 in actions

    def test_not_offered_after_king_moved(self, make_board) -> None:
        board = make_board(self.LAYOUT, moved=["e1"])
        actions = _actions(board, E1)
        assert G1 not in actions
        assert C1 not in actions

    def test_not_offered_with_moved_rook(self, make_board) -> None:
        board = make_board(self.LAYOUT, moved=["h1"])
        actions = _actions(board, E1)
        assert G1 not in actions
        assert C1 in actions

    def test_kingside_blocked(self, make_board) -> None:
        board = make_board({**self.LAYOUT, "f1": "B"})
        assert G1 not in _actions(board, E1)

    def test_kingside_attacked(self, make_board) -> None:
        board = make_board({**self.LAYOUT, "f8": "r"})
        actions = _actions(board, E1)
        assert G1 not in actions
        assert C1 in actions

    def test_queenside_blocked_on_b_file(self, make_board) -> None:
        board = make_board({**self.LAYOUT, "b1": "N"})
        assert C1 not in _actions(board, E1)

    def test_queenside_attacked_on_d_file(self, make_board) -> None:
        board = make_board({**self.LAYOUT, "d8": "r"})
        assert C1 not in _actions(board, E1)

    def test_queenside_ignores_attack_on_b_file(self, make_board) -> None:
        # b1 must be empty but is never attack-checked.
        board = make_board({**self.LAYOUT, "b8": "r"})
        assert is_checked(B1, Color.WHITE, board)
        assert C1 in _actions(board, E1)

    def test_offered_while_in_check(self, make_board) -> None:
        board = make_board({"e1": "K", "h1": "R", "e5": "r", "h8": "k"})
        assert is_checked(E1, Color.WHITE, board)
        assert G1 in _actions(board, E1)

    def test_never_offered_in_attacks_only_mode(self, make_board) -> None:
        board = make_board(self.LAYOUT)
        actions = king_actions(E1, Color.WHITE, board, False, False)
        assert G1 not in actions
        assert C1 not in actions

    def test_castling_then_move_places_rook(self, make_board) -> None:
        board = make_board(self.LAYOUT)
        assert G1 in _actions(board, E1)
        after = board.move(E1, G1)
        assert isinstance(after, Board)
        rook = after.query(F1)
        assert rook is not None and rook.kind == PieceType.ROOK and rook.has_moved


class TestIsChecked:
    def test_quiet_start(self, initial: Board) -> None:
        assert not is_checked(E1, Color.WHITE, initial)
        assert not is_checked(E3, Color.WHITE, initial)

    def test_rook_attacks_rank(self, make_board) -> None:
        board = make_board({"e1": "K", "a2": "r", "e8": "k"})
        assert is_checked(E2, Color.WHITE, board)
        assert is_checked(H2, Color.WHITE, board)
        assert not is_checked(F1, Color.WHITE, board)

    def test_opposing_king_counts_in_attacks_only_mode(self, make_board) -> None:
        board = make_board({"e4": "K", "e6": "k"})
        assert is_checked(E5, Color.WHITE, board)
        assert not is_checked(E3, Color.WHITE, board)

    def test_pawn_forward_square_counts_as_attacked(self, make_board) -> None:
        board = make_board({"e1": "K", "d2": "p", "e8": "k"})
        assert is_checked(D1, Color.WHITE, board)
