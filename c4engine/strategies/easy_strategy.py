"""Easy difficulty: weighted-random column choice biased toward the center."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from c4engine.errors import NoLegalMoves
from c4engine.games.connect4 import Board, Disc, legal_columns
from c4engine.search.clock import SearchClock
from .base_strategy import SearchStats, Strategy

logger = logging.getLogger(__name__)

MIN_BUDGET_MS = 10.0
MAX_BUDGET_MS = 200.0
MAX_CENTER_BIAS = 3.0


@dataclass
class EasyConfig:
    time_budget_ms: float = 50.0
    center_bias: float = 1.5
    jitter: float = 0.2
    thinking_fraction: float = 0.3


class EasyStrategy(Strategy):
    """
    Beatable opponent: no lookahead at all.

    Each legal column gets weight ``1 + bias * (1 - distance / max_distance)``
    plus uniform jitter, and one column is drawn proportionally to its
    weight. A short interruptible pause keeps the pace natural.
    """

    name = "easy"

    def __init__(
        self,
        config: Optional[EasyConfig] = None,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config or EasyConfig()
        self.rng = rng or np.random.default_rng(seed)
        self._stats = SearchStats()

    def choose_move(
        self,
        board: Board,
        player: Disc,
        opponent: Disc,
        *,
        time_budget_ms: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> int:
        columns = legal_columns(board)
        if not columns:
            raise NoLegalMoves("Board is full")
        self._stats = SearchStats()
        if len(columns) == 1:
            return columns[0]

        budget = time_budget_ms or self.config.time_budget_ms
        clock = SearchClock(budget, cancel_event)

        weights = self.column_weights(columns, board.columns)
        column = self._weighted_choice(columns, weights)
        self._stats.nodes_evaluated = len(columns)
        self._stats.search_depth = 1

        pause_ms = min(clock.remaining_ms(), budget * self.config.thinking_fraction)
        clock.wait(pause_ms / 1000.0)
        logger.debug("easy picked column %d from weights %s", column, np.round(weights, 2).tolist())
        return column

    def analyze(
        self,
        board: Board,
        player: Disc,
        opponent: Disc,
        depth: Optional[int] = None,
    ) -> Tuple[int, float]:
        """A weighted draw without the pause; easy never scores positions."""
        columns = legal_columns(board)
        if not columns:
            raise NoLegalMoves("Board is full")
        if len(columns) == 1:
            return columns[0], 0.0
        return self._weighted_choice(columns, self.column_weights(columns, board.columns)), 0.0

    def column_weights(self, columns: Sequence[int], num_columns: int) -> List[float]:
        center = (num_columns - 1) // 2
        max_distance = max(center, num_columns - 1 - center) or 1
        jitter = self.rng.uniform(0.0, self.config.jitter, size=len(columns))
        return [
            1.0 + self.config.center_bias * (1.0 - abs(column - center) / max_distance) + float(noise)
            for column, noise in zip(columns, jitter)
        ]

    def _weighted_choice(self, columns: Sequence[int], weights: Sequence[float]) -> int:
        # Cumulative draw over the columns in left-to-right order.
        draw = self.rng.uniform(0.0, sum(weights))
        cumulative = 0.0
        for column, weight in zip(columns, weights):
            cumulative += weight
            if draw < cumulative:
                return column
        return columns[-1]

    def configure(self, **options: Any) -> None:
        unknown = set(options) - {"time_budget_ms", "center_bias", "thinking_fraction"}
        if unknown:
            raise ValueError(f"Unknown options for easy strategy: {sorted(unknown)}")
        if options.get("time_budget_ms") is not None:
            self.config.time_budget_ms = float(
                np.clip(options["time_budget_ms"], MIN_BUDGET_MS, MAX_BUDGET_MS)
            )
        if options.get("center_bias") is not None:
            self.config.center_bias = float(np.clip(options["center_bias"], 0.0, MAX_CENTER_BIAS))
        if options.get("thinking_fraction") is not None:
            self.config.thinking_fraction = float(np.clip(options["thinking_fraction"], 0.0, 1.0))

    def reset(self) -> None:
        self._stats = SearchStats()

    def get_stats(self) -> SearchStats:
        return self._stats

    def explain_move(self, board: Board, column: int, player: Disc, opponent: Disc) -> str:
        text = f"Easy AI chose column {column}."
        if abs(column - (board.columns - 1) // 2) <= 1:
            text += " Center columns take part in more lines of four."
        return text

    def difficulty_info(self) -> Dict[str, Any]:
        return {
            "level": self.name,
            "description": "Random moves with center bias, for beginners",
            "time_budget_ms": self.config.time_budget_ms,
            "strategy": "Weighted random selection preferring center columns",
            "center_bias": self.config.center_bias,
        }
