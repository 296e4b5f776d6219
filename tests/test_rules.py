"""Comprehensive tests for the rules engine."""

import numpy as np

from reversi.board import board_from_strings, count_pieces
from reversi.constants import BLACK, BOARD_DIM, EMPTY, WHITE
from reversi.rules.engine import ClassicRules, MoveRecord
from reversi.rules.update import StandardFlankingUpdateRule
from reversi.rules.validation import AvailableRule, StandardFlankingValidationRule, is_in_board

EMPTY_ROW = "........"


class TestBounds:
    """Test board boundary checks."""

    def test_is_in_board_boundary_values(self) -> None:
        """(0,0) and (7,7) are in, -1 and 8 are out on either axis."""
        assert is_in_board(0, 0)
        assert is_in_board(7, 7)
        assert is_in_board(3, 4)
        assert not is_in_board(-1, 0)
        assert not is_in_board(0, -1)
        assert not is_in_board(8, 0)
        assert not is_in_board(0, 8)

    def test_engine_bounds_match(self, rules: ClassicRules) -> None:
        """is_within_bounds agrees with is_in_board on and around the board."""
        for i in range(-2, BOARD_DIM + 2):
            for j in range(-2, BOARD_DIM + 2):
                assert rules.is_within_bounds(i, j) == is_in_board(i, j)

    def test_out_of_bounds_never_legal(
        self, rules: ClassicRules, opening_board: np.ndarray
    ) -> None:
        """Coordinates off the board are rejected instead of wrapping around."""
        for row, col in [(-1, 3), (3, -1), (8, 4), (4, 8), (-1, -1)]:
            assert not rules.is_legal_move(opening_board, row, col, BLACK)
            assert not rules.is_legal_move(opening_board, row, col, WHITE)


class TestValidationRules:
    """Test the individual validation rules."""

    def test_available_rule(self, opening_board: np.ndarray) -> None:
        """Empty squares pass, occupied ones fail."""
        assert AvailableRule.is_valid(opening_board, 0, 0, BLACK)
        assert not AvailableRule.is_valid(opening_board, 3, 4, BLACK)
        assert not AvailableRule.is_valid(opening_board, 3, 3, BLACK)

    def test_flanking_horizontal_and_vertical(self, opening_board: np.ndarray) -> None:
        """(2,3) flanks vertically and (3,2) horizontally for BLACK at the opening."""
        assert StandardFlankingValidationRule.is_valid(opening_board, 2, 3, BLACK)
        assert StandardFlankingValidationRule.is_valid(opening_board, 3, 2, BLACK)

    def test_flanking_diagonal(self) -> None:
        """(4,4) flanks diagonally through (3,3) to (2,2)."""
        board = board_from_strings(
            [EMPTY_ROW] * 2 + ["..B.....", "...W....", EMPTY_ROW] + [EMPTY_ROW] * 3
        )
        assert StandardFlankingValidationRule.is_valid(board, 4, 4, BLACK)
        assert not StandardFlankingValidationRule.is_valid(board, 4, 4, WHITE)

    def test_no_closing_piece(self) -> None:
        """Opponent run that reaches the edge does not flank."""
        board = board_from_strings([".WW....."] + [EMPTY_ROW] * 7)
        assert not StandardFlankingValidationRule.is_valid(board, 0, 0, BLACK)

    def test_gap_in_flanking_sequence(self) -> None:
        """Opponent pieces with an EMPTY gap do not flank."""
        board = board_from_strings([EMPTY_ROW] * 3 + ["...BW.W.", EMPTY_ROW] + [EMPTY_ROW] * 3)
        assert not StandardFlankingValidationRule.is_valid(board, 3, 7, BLACK)

    def test_adjacent_own_piece_does_not_flank(self) -> None:
        """A run of zero opponent pieces is not a capture."""
        board = board_from_strings([EMPTY_ROW] * 3 + ["...BB...", EMPTY_ROW] + [EMPTY_ROW] * 3)
        assert not StandardFlankingValidationRule.is_valid(board, 3, 5, BLACK)


class TestLegalMoves:
    """Test is_legal_move and enumerate_legal_moves."""

    def test_opening_moves_black(self, rules: ClassicRules, opening_board: np.ndarray) -> None:
        """BLACK opening moves are exactly (2,3), (3,2), (4,5), (5,4)."""
        assert rules.enumerate_legal_moves(opening_board, BLACK) == [(2, 3), (3, 2), (4, 5), (5, 4)]

    def test_opening_moves_white(self, rules: ClassicRules, opening_board: np.ndarray) -> None:
        """WHITE would have the mirrored set."""
        assert rules.enumerate_legal_moves(opening_board, WHITE) == [(2, 4), (3, 5), (4, 2), (5, 3)]

    def test_enumeration_is_row_major(self, rules: ClassicRules, random_positions: list) -> None:
        """Moves come back sorted by (row, col) and agree with is_legal_move."""
        for board, player in random_positions:
            moves = rules.enumerate_legal_moves(board, player)
            assert moves == sorted(moves)
            expected = [
                (i, j)
                for i in range(BOARD_DIM)
                for j in range(BOARD_DIM)
                if rules.is_legal_move(board, i, j, player)
            ]
            assert moves == expected
            assert rules.has_any_legal_move(board, player) == bool(moves)

    def test_occupied_cells_never_legal(self, rules: ClassicRules, random_positions: list) -> None:
        """No occupied cell is ever a legal move, for either player."""
        for board, _ in random_positions:
            for i, j in zip(*np.nonzero(board), strict=True):
                assert not rules.is_legal_move(board, i, j, BLACK)
                assert not rules.is_legal_move(board, i, j, WHITE)

    def test_no_moves_on_full_board(self, rules: ClassicRules) -> None:
        """A full board has no moves for anybody."""
        board = np.full((BOARD_DIM, BOARD_DIM), BLACK, dtype=np.int8)
        board[:4] = WHITE
        assert rules.enumerate_legal_moves(board, BLACK) == []
        assert not rules.has_any_legal_move(board, WHITE)


class TestApplyMove:
    """Test apply_move, play and undo."""

    def test_first_move_d3(self, rules: ClassicRules, opening_board: np.ndarray) -> None:
        """BLACK plays (2,3): flips (3,3), places piece at (2,3)."""
        board = rules.apply_move(opening_board, 2, 3, BLACK)
        expected = opening_board.copy()
        expected[2, 3] = BLACK
        expected[3, 3] = BLACK
        assert np.array_equal(board, expected)

    def test_input_not_modified(self, rules: ClassicRules, opening_board: np.ndarray) -> None:
        """apply_move returns a new board."""
        before = opening_board.copy()
        board = rules.apply_move(opening_board, 2, 3, BLACK)
        assert board is not opening_board
        assert np.array_equal(opening_board, before)

    def test_illegal_move_is_noop(self, rules: ClassicRules, opening_board: np.ndarray) -> None:
        """Illegal, occupied and off-board moves return the input unchanged."""
        before = opening_board.copy()
        for row, col in [(0, 0), (3, 3), (-1, 2), (8, 8)]:
            assert rules.apply_move(opening_board, row, col, BLACK) is opening_board
        assert np.array_equal(opening_board, before)
        assert rules.play(opening_board, 0, 0, BLACK) is None
        assert np.array_equal(opening_board, before)

    def test_flips_in_several_directions(self, rules: ClassicRules) -> None:
        """Every capturing direction flips, non-capturing runs stay."""
        board = board_from_strings(
            [
                EMPTY_ROW,
                EMPTY_ROW,
                "....B...",
                "..BWW.W.",
                "...W.W..",
                "...B..W.",
                EMPTY_ROW,
                EMPTY_ROW,
            ]
        )
        # Only the north run is closed by a BLACK piece; west, east and north-west end on empties.
        record = rules.play(board, 4, 4, BLACK)
        assert record is not None
        assert sorted(record.flipped) == [(3, 4)]
        assert board[3, 4] == BLACK
        assert board[4, 3] == WHITE
        assert board[3, 3] == WHITE

    def test_flips_two_directions(self, rules: ClassicRules) -> None:
        """(4,4) captures both horizontally flanked runs at once."""
        board = board_from_strings(
            [EMPTY_ROW] * 3 + ["....B...", "..BW.WB.", "....W...", EMPTY_ROW, EMPTY_ROW]
        )
        after = rules.apply_move(board, 4, 4, BLACK)
        assert after[4, 3] == BLACK
        assert after[4, 5] == BLACK
        assert after[5, 4] == WHITE
        record = rules.play(board.copy(), 4, 4, BLACK)
        assert record.flipped == [(4, 3), (4, 5)]

    def test_long_run_flipped(self, rules: ClassicRules) -> None:
        """A run of six opponent pieces is flipped in full."""
        board = board_from_strings(["BWWWWWW."] + [EMPTY_ROW] * 7)
        after = rules.apply_move(board, 0, 7, BLACK)
        assert np.all(after[0] == BLACK)

    def test_piece_count_invariant(self, rules: ClassicRules, random_positions: list) -> None:
        """Every legal move adds one piece and flips at least one."""
        for board, player in random_positions[::3]:
            before = count_pieces(board)
            for row, col in rules.enumerate_legal_moves(board, player):
                flips = rules.play(board.copy(), row, col, player).flipped
                assert len(flips) >= 1
                after = count_pieces(rules.apply_move(board, row, col, player))
                assert after.empty == before.empty - 1
                own_before, own_after = (
                    (before.black, after.black) if player == BLACK else (before.white, after.white)
                )
                assert own_after == own_before + 1 + len(flips)

    def test_deterministic(self, rules: ClassicRules, random_positions: list) -> None:
        """Same board, move and player always give the same result."""
        for board, player in random_positions[::5]:
            for row, col in rules.enumerate_legal_moves(board, player):
                first = rules.apply_move(board, row, col, player)
                second = rules.apply_move(board.copy(), row, col, player)
                assert np.array_equal(first, second)

    def test_undo_restores_exactly(self, rules: ClassicRules, random_positions: list) -> None:
        """undo is the exact inverse of play."""
        for board, player in random_positions[::2]:
            work = board.copy()
            for row, col in rules.enumerate_legal_moves(board, player):
                record = rules.play(work, row, col, player)
                assert isinstance(record, MoveRecord)
                assert work[row, col] == player
                rules.undo(work, record)
                assert np.array_equal(work, board)

    def test_update_rule_returns_flipped(self, opening_board: np.ndarray) -> None:
        """The update rule writes in place and reports what it flipped."""
        flipped = StandardFlankingUpdateRule.update(opening_board, 2, 3, BLACK)
        assert flipped == [(3, 3)]
        assert opening_board[2, 3] == BLACK
        assert opening_board[3, 3] == BLACK
        assert opening_board[0, 0] == EMPTY
