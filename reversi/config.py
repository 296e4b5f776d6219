"""Engine configuration: evaluation weights, search seed and log level.

Defaults come from `constants`; `Config.load_from_toml` overlays a TOML file and the
`REVERSI_SEED` environment variable.
"""

from __future__ import annotations

import copy
import logging
import os
import tomllib
from dataclasses import dataclass, field

from .constants import BOARD_DIM, CORNER_WEIGHT, MOBILITY_WEIGHT, POSITION_WEIGHTS

logger = logging.getLogger(__name__)


@dataclass
class EvalConfig:
    """Weights used by the evaluator."""

    position_weights: list[list[int]] = field(
        default_factory=lambda: copy.deepcopy(POSITION_WEIGHTS)
    )
    mobility_weight: int = MOBILITY_WEIGHT
    corner_weight: int = CORNER_WEIGHT

    def __post_init__(self) -> None:
        if len(self.position_weights) != BOARD_DIM or any(
            len(row) != BOARD_DIM for row in self.position_weights
        ):
            raise ValueError(f"position_weights must be {BOARD_DIM}x{BOARD_DIM}")


@dataclass
class SearchConfig:
    """Search settings. Depths belong to the player types."""

    seed: int | None = None  # None means fresh entropy on every run


@dataclass
class Config:
    """Top-level configuration."""

    eval: EvalConfig = field(default_factory=EvalConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "reversi.toml") -> Config:
        """Merge a TOML file onto the defaults. A missing file yields the defaults."""
        cfg = Config()
        if os.path.exists(path):
            with open(path, "rb") as f:
                raw = tomllib.load(f)
            if "eval" in raw:
                cfg.eval = EvalConfig(**_known_keys(EvalConfig, raw["eval"]))
            if "search" in raw:
                cfg.search = SearchConfig(**_known_keys(SearchConfig, raw["search"]))
            if "log_level" in raw:
                cfg.log_level = str(raw["log_level"])
        else:
            logger.debug("No config file at %s, using defaults", path)

        seed = os.environ.get("REVERSI_SEED")
        if seed:
            cfg.search.seed = int(seed)
        return cfg


def _known_keys(cls: type, section: dict) -> dict:
    """Drop keys the dataclass does not define."""
    names = set(cls.__dataclass_fields__)
    unknown = set(section) - names
    if unknown:
        logger.warning("Ignoring unknown %s keys: %s", cls.__name__, sorted(unknown))
    return {k: v for k, v in section.items() if k in names}
