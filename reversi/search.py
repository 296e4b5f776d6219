"""Depth-limited minimax search with alpha-beta pruning."""

from __future__ import annotations

import logging
import time

import numpy as np

from .constants import COLOR_NAMES, tuple2move
from .evaluation import Evaluator
from .rules.engine import ClassicRules, RulesEngine

logger = logging.getLogger(__name__)

INF = float("inf")


class SearchEngine:
    """Chooses moves by minimax over a rules engine and an evaluator.

    Every node is scored from the point of view of the player the root call was made
    for, whichever side is to move at that node. Ties between equally good root moves
    are broken uniformly at random using ``rng``; pass a seeded generator for
    reproducible play.

    The search never touches the board it is handed: it copies it once and then plays
    and takes back moves on that private copy.
    """

    def __init__(
        self,
        evaluator: Evaluator | None = None,
        rules: RulesEngine | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.rules = rules or ClassicRules()
        self.evaluator = evaluator or Evaluator(rules=self.rules)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.nodes = 0

    def choose_move(self, board: np.ndarray, player: int, depth: int) -> tuple[int, int] | None:
        """Best move for `player` looking `depth` plies ahead, or None if it cannot move."""
        if depth < 1:
            raise ValueError(f"Search depth must be >= 1, got {depth}")

        moves = self.rules.enumerate_legal_moves(board, player)
        if not moves:
            return None

        start = time.perf_counter()
        self.nodes = 0
        work = board.copy()

        best_score = -INF
        best_moves: list[tuple[int, int]] = []
        for row, col in moves:
            record = self.rules.play(work, row, col, player)
            score = self.minimax(work, depth - 1, -INF, INF, False, player)
            self.rules.undo(work, record)

            if score > best_score:
                best_score = score
                best_moves = [(row, col)]
            elif score == best_score:
                best_moves.append((row, col))

        move = best_moves[int(self.rng.integers(len(best_moves)))]
        logger.debug(
            "%s depth %d: %s (score %s, %d tied of %d, %d nodes, %.3fs)",
            COLOR_NAMES[player],
            depth,
            tuple2move[move],
            best_score,
            len(best_moves),
            len(moves),
            self.nodes,
            time.perf_counter() - start,
        )
        return move

    def minimax(
        self,
        board: np.ndarray,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        root: int,
    ) -> float:
        """Alpha-beta value of `board` for `root`, the player the search was started for.

        `board` is modified during the call and restored before it returns.
        """
        self.nodes += 1
        if depth == 0:
            return self.evaluator.evaluate(board, root)

        side = root if maximizing else -root
        moves = self.rules.enumerate_legal_moves(board, side)
        if not moves:
            return self.evaluator.evaluate(board, root)

        if maximizing:
            value = -INF
            for row, col in moves:
                record = self.rules.play(board, row, col, side)
                value = max(value, self.minimax(board, depth - 1, alpha, beta, False, root))
                self.rules.undo(board, record)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value

        value = INF
        for row, col in moves:
            record = self.rules.play(board, row, col, side)
            value = min(value, self.minimax(board, depth - 1, alpha, beta, True, root))
            self.rules.undo(board, record)
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value
