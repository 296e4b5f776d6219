"""Constants for the Reversi engine."""

### Pieces
BLACK = -1
WHITE = 1
EMPTY = 0
DIRECTIONS = [[i, j] for i in [-1, 0, 1] for j in [-1, 0, 1] if not (i == 0 and j == 0)]
BOARD_DIM = 8
COLOR_NAMES = {BLACK: "BLACK", WHITE: "WHITE", EMPTY: "EMPTY"}

letters = "abcdefgh"
number = "12345678"

tuple2move = {(i, j): letters[j] + number[i] for i in range(BOARD_DIM) for j in range(BOARD_DIM)}

move2tuple = {letters[j] + number[i]: (i, j) for i in range(BOARD_DIM) for j in range(BOARD_DIM)}

### Evaluation
POSITION_WEIGHTS = [
    [100, -20, 10, 5, 5, 10, -20, 100],
    [-20, -50, -2, -2, -2, -2, -50, -20],
    [10, -2, -1, -1, -1, -1, -2, 10],
    [5, -2, -1, -1, -1, -1, -2, 5],
    [5, -2, -1, -1, -1, -1, -2, 5],
    [10, -2, -1, -1, -1, -1, -2, 10],
    [-20, -50, -2, -2, -2, -2, -50, -20],
    [100, -20, 10, 5, 5, 10, -20, 100],
]
MOBILITY_WEIGHT = 10
CORNER_WEIGHT = 50
CORNERS = [(0, 0), (0, BOARD_DIM - 1), (BOARD_DIM - 1, 0), (BOARD_DIM - 1, BOARD_DIM - 1)]


def opposite(piece: int) -> int:
    """Return the opposing piece. EMPTY is its own opposite."""
    return -piece
