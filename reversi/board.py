"""Board helpers: construction, validation and piece counts."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from .constants import BLACK, BOARD_DIM, EMPTY, WHITE

PIECE_SYMBOLS = {BLACK: "B", WHITE: "W", EMPTY: "."}
SYMBOL_PIECES = {v: k for k, v in PIECE_SYMBOLS.items()}


class Scores(NamedTuple):
    """Piece counts derived from a board."""

    empty: int
    black: int
    white: int


def empty_board() -> np.ndarray:
    """Return an 8x8 board with every cell EMPTY."""
    return np.zeros((BOARD_DIM, BOARD_DIM), dtype=np.int8)


def validate_board(board: np.ndarray) -> np.ndarray:
    """Check shape and cell values, returning the board as an int8 array."""
    board = np.asarray(board)
    if board.shape != (BOARD_DIM, BOARD_DIM):
        raise ValueError(f"Board must be {BOARD_DIM}x{BOARD_DIM}, got shape {board.shape}")
    if not np.isin(board, (BLACK, WHITE, EMPTY)).all():
        raise ValueError("Board cells must be BLACK, WHITE or EMPTY")
    return board.astype(np.int8, copy=False)


def count_pieces(board: np.ndarray) -> Scores:
    """Count empty, black and white cells."""
    return Scores(
        empty=int(np.sum(board == EMPTY)),
        black=int(np.sum(board == BLACK)),
        white=int(np.sum(board == WHITE)),
    )


def board_from_strings(rows: list[str]) -> np.ndarray:
    """Build a board from 8 strings of 'B', 'W' and '.' (whitespace ignored).

    Mostly useful for setting up positions in tests and at the REPL::

        board_from_strings(["........"] * 3 + ["...WB...", "...BW..."] + ["........"] * 3)
    """
    if len(rows) != BOARD_DIM:
        raise ValueError(f"Expected {BOARD_DIM} rows, got {len(rows)}")
    board = empty_board()
    for i, row in enumerate(rows):
        cells = "".join(row.split())
        if len(cells) != BOARD_DIM:
            raise ValueError(f"Row {i} must have {BOARD_DIM} cells, got {len(cells)}")
        for j, symbol in enumerate(cells):
            if symbol not in SYMBOL_PIECES:
                raise ValueError(f"Unknown piece symbol {symbol!r} at ({i}, {j})")
            board[i, j] = SYMBOL_PIECES[symbol]
    return board
