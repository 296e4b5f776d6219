import numpy as np

from ..constants import DIRECTIONS
from .base import UpdateRule
from .validation import is_in_board


def flanked_cells(board: np.ndarray, x: int, y: int, player: int) -> list[tuple[int, int]]:
    """Return every opponent cell a move at (x, y) would capture, direction by direction."""
    captured = []
    for direction in DIRECTIONS:
        nx, ny = x + direction[0], y + direction[1]
        run = []
        while is_in_board(nx, ny) and board[nx, ny] == -player:
            run.append((nx, ny))
            nx, ny = nx + direction[0], ny + direction[1]
        if run and is_in_board(nx, ny) and board[nx, ny] == player:
            captured.extend(run)
    return captured


class StandardFlankingUpdateRule(UpdateRule):
    """Standard Othello update rule that flips flanked opponent pieces."""

    @staticmethod
    def update(board: np.ndarray, x: int, y: int, player: int) -> list[tuple[int, int]]:
        """Place piece and flip all flanked opponent pieces to the player's colour."""
        # Runs are collected before anything is written so every direction sees the pre-move board.
        flipped = flanked_cells(board, x, y, player)
        board[x, y] = player
        for fx, fy in flipped:
            board[fx, fy] = player
        return flipped
