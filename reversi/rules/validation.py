import numpy as np

from ..constants import BOARD_DIM, DIRECTIONS, EMPTY
from .base import ValidationRule


def is_in_board(x: int, y: int) -> bool:
    """Check if coordinates are within the board boundaries."""
    return 0 <= x < BOARD_DIM and 0 <= y < BOARD_DIM


class AvailableRule(ValidationRule):
    """Checks if the move is made on an empty square."""

    @staticmethod
    def is_valid(board: np.ndarray, x: int, y: int, player: int) -> bool:
        """Check if the square at (x, y) is empty."""
        return board[x, y] == EMPTY


class StandardFlankingValidationRule(ValidationRule):
    """Checks if the move captures at least one opponent piece in any direction."""

    @staticmethod
    def is_valid(board: np.ndarray, x: int, y: int, player: int) -> bool:
        """Check if the move flanks at least one opponent piece."""
        for direction in DIRECTIONS:
            nx, ny = x + direction[0], y + direction[1]
            if not is_in_board(nx, ny) or board[nx, ny] != -player:
                continue

            while True:
                nx, ny = nx + direction[0], ny + direction[1]
                if not is_in_board(nx, ny) or board[nx, ny] == EMPTY:
                    break
                if board[nx, ny] == player:
                    return True

        return False
