"""Abstract base classes for Reversi rules."""

from abc import ABC, abstractmethod

import numpy as np


class InitializeBoard(ABC):
    """Abstract base class for starting-position rules."""

    @staticmethod
    @abstractmethod
    def init_board() -> np.ndarray:
        """Return a fresh board holding the starting pieces."""
        pass


class ValidationRule(ABC):
    """Abstract base class for move validation rules."""

    @staticmethod
    @abstractmethod
    def is_valid(board: np.ndarray, x: int, y: int, player: int) -> bool:
        """Check if `player` may move at (x, y) on `board`."""
        pass


class UpdateRule(ABC):
    """Abstract base class for board update rules."""

    @staticmethod
    @abstractmethod
    def update(board: np.ndarray, x: int, y: int, player: int) -> list[tuple[int, int]]:
        """Apply a move at (x, y) in place and return the cells that changed colour."""
        pass
