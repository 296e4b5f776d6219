"""Text and matplotlib renderings of a board, for debugging and the command line."""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes

from .board import PIECE_SYMBOLS
from .constants import BLACK, BOARD_DIM, WHITE
from .rules.engine import ClassicRules, RulesEngine


def format_board(board: np.ndarray, to_move: int | None = None) -> str:
    """Render the board as text, columns A-H and rows 1-8."""
    lines = ["  " + " ".join([chr(ord("A") + i) for i in range(BOARD_DIM)])]
    for i in range(BOARD_DIM):
        cells = " ".join(PIECE_SYMBOLS[int(board[i, j])] for j in range(BOARD_DIM))
        lines.append(str(i + 1) + " " + cells)
    if to_move is not None:
        lines.append(f"{['W', 'B'][to_move == BLACK]} to move.")
    return "\n".join(lines)


def plot_board(
    board: np.ndarray,
    ax: Axes | None = None,
    player: int | None = None,
    move: tuple[int, int] | None = None,
    rules: RulesEngine | None = None,
) -> Axes:
    """Plot the board.

    The board is shown as a grid with black or white circles in the appropriate places.
    If ``player`` is given its legal moves are shaded; ``move`` highlights one square.
    """
    if ax is None:
        _fig, ax = plt.subplots()

    ax.set_aspect("equal")
    ax.set_xlim(0, BOARD_DIM)
    ax.set_ylim(0, BOARD_DIM)

    if player is not None:
        rules = rules or ClassicRules()
        for i, j in rules.enumerate_legal_moves(board, player):
            ax.add_artist(plt.Rectangle((j, i), 1, 1, fill=True, color="salmon", alpha=0.7))

    if move is not None:
        move_rect = plt.Rectangle(
            (move[1], move[0]), 1, 1, fill=True, color="cornflowerblue", alpha=0.7
        )
        ax.add_artist(move_rect)

    for x, y in np.ndindex(BOARD_DIM, BOARD_DIM):
        if board[x, y] == BLACK:
            circle = plt.Circle((y + 0.5, x + 0.5), 0.4, color="black", ec="black", lw=1)
            ax.add_artist(circle)
        elif board[x, y] == WHITE:
            circle = plt.Circle((y + 0.5, x + 0.5), 0.4, color="white", ec="black", lw=1)
            ax.add_artist(circle)

    ax.invert_yaxis()
    ax.axis("off")
    outline = plt.Rectangle((0, 0), BOARD_DIM, BOARD_DIM, edgecolor="black", facecolor="none")
    ax.add_artist(outline)

    for i in range(1, BOARD_DIM):
        ax.axhline(i, color="black", lw=0.5)
        ax.axvline(i, color="black", lw=0.5)

    for i in range(BOARD_DIM):
        ax.text(i + 0.5, -0.5, chr(ord("A") + i), ha="center", va="center", fontsize=12)
        ax.text(-0.5, i + 0.5, str(i + 1), ha="center", va="center", fontsize=12)

    return ax
