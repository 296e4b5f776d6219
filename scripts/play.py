"""Play Reversi from the command line.

Examples:
    python scripts/play.py --black human --white ai5
    python scripts/play.py --black ai4 --white ai6 --games 20 --seed 0
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from tqdm import tqdm

from reversi.config import Config
from reversi.constants import COLOR_NAMES, EMPTY, move2tuple
from reversi.display import format_board, plot_board
from reversi.session import GameSession, PlayerType

logger = logging.getLogger(__name__)


def play_matches(black: PlayerType, white: PlayerType, games: int, config: Config) -> Counter:
    """Play `games` AI-vs-AI games and tally the results by winner name."""
    results: Counter = Counter()
    base_seed = config.search.seed
    for i in tqdm(range(games), desc=f"{black.value} vs {white.value}"):
        if base_seed is not None:
            config.search.seed = base_seed + i
        session = GameSession(black, white, config=config)
        session.start_ai_move_if_needed()
        result = session.winner
        results["draw" if result == EMPTY else COLOR_NAMES[result]] += 1
        logger.debug("Game %d: black %d, white %d", i, session.scores.black, session.scores.white)
    config.search.seed = base_seed
    return results


def play_interactive(session: GameSession) -> None:
    """Read moves such as ``d3`` from stdin until the game ends."""
    session.start_ai_move_if_needed()
    while not session.game_over:
        print(format_board(session.board, session.current_player))
        try:
            text = input("Your move (e.g. d3, q to quit): ").strip().lower()
        except EOFError:
            return
        if text in ("q", "quit"):
            return
        if text not in move2tuple:
            print(f"Unknown square {text!r}")
            continue
        if not session.drop_piece(*move2tuple[text]):
            print(f"{text} is not a legal move")

    print(format_board(session.board))
    scores = session.scores
    result = session.winner
    outcome = "Draw" if result == EMPTY else f"{COLOR_NAMES[result].title()} wins"
    print(f"{outcome}: black {scores.black}, white {scores.white}")


def main() -> None:
    """Parse arguments and run a game or a series of AI matches."""
    parser = argparse.ArgumentParser(description="Play Reversi against the minimax AI.")
    choices = [t.value for t in PlayerType]
    parser.add_argument("--black", default="human", choices=choices, help="Controller for black")
    parser.add_argument("--white", default="ai4", choices=choices, help="Controller for white")
    parser.add_argument("--games", type=int, default=1, help="Number of AI-vs-AI games to play")
    parser.add_argument("--seed", type=int, default=None, help="Seed for tie-breaking")
    parser.add_argument("--config", type=str, default="reversi.toml", help="TOML config file")
    parser.add_argument("--plot", type=Path, default=None, help="Save the final board as an image")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level")
    args = parser.parse_args()

    config = Config.load_from_toml(args.config)
    if args.seed is not None:
        config.search.seed = args.seed
    logging.basicConfig(
        level=(args.log_level or config.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    black = PlayerType.parse(args.black)
    white = PlayerType.parse(args.white)

    if black.is_ai and white.is_ai and args.games > 1:
        results = play_matches(black, white, args.games, config)
        for name in ("BLACK", "WHITE", "draw"):
            print(f"{name}: {results[name]}")
        return

    if args.games > 1:
        parser.error("--games only applies when both players are AI")

    with GameSession(black, white, config=config) as session:
        play_interactive(session)
        if args.plot is not None:
            ax = plot_board(session.board, player=session.current_player)
            ax.figure.savefig(args.plot, bbox_inches="tight")
            plt.close(ax.figure)
            logger.info("Saved final board to %s", args.plot)


if __name__ == "__main__":
    sys.exit(main())
