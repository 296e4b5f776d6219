import numpy as np

from ..board import empty_board
from ..constants import BLACK, WHITE
from .base import InitializeBoard


class ClassicInitialization(InitializeBoard):
    """Classic Othello initialization with 4 pieces in the center.

    Starting position: W[d4, e5], B[e4, d5].
    """

    @staticmethod
    def init_board() -> np.ndarray:
        """Return a board with the classic Othello starting position."""
        board = empty_board()
        board[3, 3] = WHITE
        board[3, 4] = BLACK
        board[4, 3] = BLACK
        board[4, 4] = WHITE
        return board


class OpenSpreadInitialization(InitializeBoard):
    """Open spread initialization with 4 pieces spread across the board.

    Starting position: W[f3, c6], B[c3, f6]. Under standard flanking rules
    neither side can move from here, so a session using it ends immediately.
    """

    @staticmethod
    def init_board() -> np.ndarray:
        """Return a board with the open spread starting position."""
        board = empty_board()
        board[2, 5] = WHITE
        board[2, 2] = BLACK
        board[5, 2] = WHITE
        board[5, 5] = BLACK
        return board
