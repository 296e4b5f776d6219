"""Heuristic board evaluation.

Scores are always from one side's point of view (positive favours ``perspective``) and
are the sum of three terms:

- positional: a fixed weight per square, added for own pieces and subtracted for
  opponent pieces;
- mobility: the difference in legal move counts, scaled by ``mobility_weight``;
- stability: corner occupancy, ``corner_weight`` per corner.
"""

from __future__ import annotations

import numpy as np

from .config import EvalConfig
from .constants import CORNERS, EMPTY
from .rules.engine import ClassicRules, RulesEngine


class Evaluator:
    """Positional + mobility + corner evaluator."""

    def __init__(self, config: EvalConfig | None = None, rules: RulesEngine | None = None) -> None:
        self.config = config or EvalConfig()
        self.rules = rules or ClassicRules()
        self.weights = np.array(self.config.position_weights, dtype=np.int64)

    def positional(self, board: np.ndarray, perspective: int) -> int:
        """Sum of square weights, positive for own pieces and negative for the opponent's."""
        # Own pieces count +1 and opponent pieces -1 once multiplied by the perspective colour.
        signs = board.astype(np.int64) * perspective
        return int(np.sum(self.weights * signs))

    def mobility(self, board: np.ndarray, perspective: int) -> int:
        """Scaled difference in legal move counts."""
        own = len(self.rules.enumerate_legal_moves(board, perspective))
        theirs = len(self.rules.enumerate_legal_moves(board, -perspective))
        return self.config.mobility_weight * (own - theirs)

    def stability(self, board: np.ndarray, perspective: int) -> int:
        """Corner occupancy: plus or minus `corner_weight` per occupied corner."""
        score = 0
        for i, j in CORNERS:
            if board[i, j] == EMPTY:
                continue
            weight = self.config.corner_weight
            score += weight if board[i, j] == perspective else -weight
        return score

    def evaluate(self, board: np.ndarray, perspective: int) -> int:
        """Total score of `board` for `perspective`."""
        return (
            self.positional(board, perspective)
            + self.mobility(board, perspective)
            + self.stability(board, perspective)
        )
