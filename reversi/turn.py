"""Turn transitions: who moves next, forced passes and game end."""

from __future__ import annotations

import logging
from enum import Enum

import numpy as np

from .board import Scores
from .constants import BLACK, COLOR_NAMES, EMPTY, WHITE, opposite
from .rules.engine import RulesEngine

logger = logging.getLogger(__name__)


class TurnState(Enum):
    """States of the turn state machine. GAME_OVER is only left by a reset."""

    BLACK_TO_MOVE = BLACK
    WHITE_TO_MOVE = WHITE
    GAME_OVER = EMPTY

    @classmethod
    def to_move(cls, player: int) -> TurnState:
        """State in which `player` is to move."""
        return cls.BLACK_TO_MOVE if player == BLACK else cls.WHITE_TO_MOVE

    @property
    def player(self) -> int:
        """Colour to move, or EMPTY once the game is over."""
        return self.value


def advance(rules: RulesEngine, board: np.ndarray, mover: int) -> TurnState:
    """Decide the next state after `mover` has played on `board`.

    The opponent moves if it can; otherwise the mover goes again (the opponent passes);
    if neither side can move the game is over.
    """
    opponent = opposite(mover)
    if rules.has_any_legal_move(board, opponent):
        return TurnState.to_move(opponent)
    if rules.has_any_legal_move(board, mover):
        logger.debug("%s has no legal move and passes", COLOR_NAMES[opponent])
        return TurnState.to_move(mover)
    return TurnState.GAME_OVER


def winner(scores: Scores) -> int:
    """Colour with strictly more pieces, or EMPTY for a draw."""
    if scores.black > scores.white:
        return BLACK
    if scores.white > scores.black:
        return WHITE
    return EMPTY
