"""Pytest configuration and fixtures for reversi tests."""

from collections.abc import Callable

import numpy as np
import pytest

from reversi.board import board_from_strings
from reversi.constants import BLACK, WHITE
from reversi.evaluation import Evaluator
from reversi.rules.base import InitializeBoard
from reversi.rules.engine import ClassicRules
from reversi.rules.initialization import ClassicInitialization
from reversi.search import SearchEngine


@pytest.fixture
def rules() -> ClassicRules:
    """Classic rules engine."""
    return ClassicRules()


@pytest.fixture
def opening_board() -> np.ndarray:
    """Canonical Othello starting position."""
    return ClassicInitialization.init_board()


@pytest.fixture
def seeded_search(rules: ClassicRules) -> SearchEngine:
    """Search engine with a fixed tie-break seed."""
    return SearchEngine(Evaluator(rules=rules), rules, np.random.default_rng(1234))


@pytest.fixture
def fixed_position() -> Callable[[list[str]], type[InitializeBoard]]:
    """Factory for initialization rules that start from a given position."""

    def make(rows: list[str]) -> type[InitializeBoard]:
        class FixedInitialization(InitializeBoard):
            @staticmethod
            def init_board() -> np.ndarray:
                return board_from_strings(rows)

        return FixedInitialization

    return make


@pytest.fixture
def random_positions(rules: ClassicRules) -> list[tuple[np.ndarray, int]]:
    """(board, side to move) pairs sampled from seeded random games, terminal ones included."""
    rng = np.random.default_rng(7)
    positions = []
    for _ in range(4):
        board = ClassicInitialization.init_board()
        player = BLACK
        while True:
            positions.append((board.copy(), player))
            moves = rules.enumerate_legal_moves(board, player)
            if not moves:
                player = -player
                if not rules.has_any_legal_move(board, player):
                    break
                continue
            row, col = moves[int(rng.integers(len(moves)))]
            board = rules.apply_move(board, row, col, player)
            player = WHITE if player == BLACK else BLACK
    return positions
