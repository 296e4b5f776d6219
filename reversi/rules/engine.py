"""Rules engine: legality, move application and move enumeration over a board."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from ..constants import BOARD_DIM, EMPTY, tuple2move
from .base import UpdateRule, ValidationRule
from .update import StandardFlankingUpdateRule
from .validation import AvailableRule, StandardFlankingValidationRule, is_in_board

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    """Everything needed to take back a move played in place."""

    row: int
    col: int
    player: int
    flipped: list[tuple[int, int]] = field(default_factory=list)


class RulesEngine:
    """Applies a set of validation and update rules to boards it is handed.

    The engine holds no board of its own; every operation takes the board and the
    acting player explicitly, so the same engine is shared by the session and the search.
    """

    def __init__(
        self,
        validation_rules: list[type[ValidationRule]],
        update_rules: list[type[UpdateRule]],
    ) -> None:
        """Initialize a rules engine with the given rules."""
        self.validation_rules = validation_rules
        self.update_rules = update_rules

    @staticmethod
    def is_within_bounds(row: int, col: int) -> bool:
        """Check if (row, col) lies on the board."""
        return is_in_board(row, col)

    def is_legal_move(self, board: np.ndarray, row: int, col: int, player: int) -> bool:
        """Check if `player` may place a piece at (row, col)."""
        if not self.is_within_bounds(row, col):
            return False
        return all(rule.is_valid(board, row, col, player) for rule in self.validation_rules)

    def play(self, board: np.ndarray, row: int, col: int, player: int) -> MoveRecord | None:
        """Apply a move to `board` in place.

        Returns a record that :meth:`undo` can reverse exactly, or None (board untouched)
        if the move is illegal.
        """
        if not self.is_legal_move(board, row, col, player):
            return None
        flipped: list[tuple[int, int]] = []
        for rule in self.update_rules:
            flipped.extend(rule.update(board, row, col, player))
        return MoveRecord(row, col, player, flipped)

    @staticmethod
    def undo(board: np.ndarray, record: MoveRecord) -> None:
        """Reverse a move previously applied with :meth:`play`."""
        board[record.row, record.col] = EMPTY
        for fx, fy in record.flipped:
            board[fx, fy] = -record.player

    def apply_move(self, board: np.ndarray, row: int, col: int, player: int) -> np.ndarray:
        """Return the board after `player` moves at (row, col).

        The input board is never modified. Illegal moves return the input unchanged.
        """
        new_board = board.copy()
        record = self.play(new_board, row, col, player)
        if record is None:
            logger.debug("Ignoring illegal move %s for %d", tuple2move.get((row, col)), player)
            return board
        return new_board

    def enumerate_legal_moves(self, board: np.ndarray, player: int) -> list[tuple[int, int]]:
        """All legal moves for `player` in row-major order."""
        return [
            (i, j)
            for i in range(BOARD_DIM)
            for j in range(BOARD_DIM)
            if self.is_legal_move(board, i, j, player)
        ]

    def has_any_legal_move(self, board: np.ndarray, player: int) -> bool:
        """Check if `player` has at least one legal move."""
        return any(
            self.is_legal_move(board, i, j, player)
            for i in range(BOARD_DIM)
            for j in range(BOARD_DIM)
        )


class ClassicRules(RulesEngine):
    """Standard Othello rules: place on an empty square, flip every flanked run."""

    def __init__(self) -> None:
        """Initialize the classic rules engine."""
        super().__init__(
            validation_rules=[AvailableRule, StandardFlankingValidationRule],
            update_rules=[StandardFlankingUpdateRule],
        )
