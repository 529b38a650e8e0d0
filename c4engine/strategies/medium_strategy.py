"""Medium difficulty: fixed-depth alpha-beta search."""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from c4engine.errors import NoLegalMoves
from c4engine.games.connect4 import Board, Disc, apply_move, is_terminal, legal_columns
from c4engine.search.clock import SearchClock
from c4engine.search.evaluation import HeuristicValueFn, evaluate_move
from c4engine.search.value_fn import BoardValueFn
from .base_strategy import SearchStats, Strategy
from .tactics import find_immediate_block, find_immediate_win

logger = logging.getLogger(__name__)

MIN_BUDGET_MS = 50.0
MAX_BUDGET_MS = 2000.0
MAX_DEPTH = 5


@dataclass
class MediumConfig:
    time_budget_ms: float = 200.0
    max_depth: int = 3
    root_time_fraction: float = 0.8


class MediumStrategy(Strategy):
    """
    Win/block shortcuts followed by a negamax alpha-beta search of
    ``max_depth`` plies.

    Root columns are tried left to right and ties keep the leftmost one. The
    root loop stops starting new columns once ``root_time_fraction`` of the
    budget is used; inner nodes fall back to the static evaluation when the
    whole budget is gone.
    """

    name = "medium"

    def __init__(
        self,
        config: Optional[MediumConfig] = None,
        value_fn: Optional[BoardValueFn] = None,
    ) -> None:
        self.config = config or MediumConfig()
        self.value_fn = value_fn or HeuristicValueFn()
        self._stats = SearchStats()
        self.analysis_stats = SearchStats()

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

        win = find_immediate_win(board, player)
        if win is not None:
            logger.debug("medium plays immediate win at column %d", win)
            return win
        block = find_immediate_block(board, opponent)
        if block is not None:
            logger.debug("medium blocks opponent win at column %d", block)
            return block

        clock = SearchClock(time_budget_ms or self.config.time_budget_ms, cancel_event)
        column, score = self._search_root(board, player, opponent, self.config.max_depth, clock)
        logger.debug(
            "medium searched %d nodes in %.1f ms, column %d scores %s",
            self._stats.nodes_evaluated,
            clock.elapsed_ms(),
            column,
            score,
        )
        return column

    def analyze(
        self,
        board: Board,
        player: Disc,
        opponent: Disc,
        depth: Optional[int] = None,
    ) -> Tuple[int, float]:
        """
        Fixed-depth search without shortcuts or deadline; returns (column, score).

        Counters go to ``analysis_stats`` so :meth:`get_stats` keeps describing
        the last played move.
        """
        if not legal_columns(board):
            raise NoLegalMoves("Board is full")
        saved_stats = self._stats
        self._stats = SearchStats()
        try:
            result = self._search_root(board, player, opponent, depth or self.config.max_depth, None)
            self.analysis_stats = self._stats
        finally:
            self._stats = saved_stats
        return result

    def _search_root(
        self,
        board: Board,
        player: Disc,
        opponent: Disc,
        depth: int,
        clock: Optional[SearchClock],
    ) -> Tuple[int, float]:
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")
        columns = legal_columns(board)
        best_value = -math.inf
        best_column = columns[0]
        root_alpha = -math.inf

        for column in columns:
            if (
                clock is not None
                and best_value > -math.inf
                and clock.past(self.config.root_time_fraction)
            ):
                break
            child = apply_move(board, column, player)
            value = -self._negamax(
                child,
                depth - 1,
                alpha=-math.inf,
                beta=-root_alpha,
                player=opponent,
                opponent=player,
                clock=clock,
            )
            if value > best_value:
                best_value = value
                best_column = column
            root_alpha = max(root_alpha, value)

        self._stats.search_depth = depth
        return best_column, best_value

    def _negamax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        player: Disc,
        opponent: Disc,
        clock: Optional[SearchClock],
    ) -> float:
        self._stats.nodes_evaluated += 1
        if depth == 0 or is_terminal(board) or (clock is not None and clock.past(1.0)):
            return self.value_fn.evaluate(board, player, opponent)

        value = -math.inf
        for column in legal_columns(board):
            child = apply_move(board, column, player)
            child_value = -self._negamax(
                child,
                depth - 1,
                alpha=-beta,
                beta=-alpha,
                player=opponent,
                opponent=player,
                clock=clock,
            )
            if child_value > value:
                value = child_value
            if value > alpha:
                alpha = value
            if alpha >= beta:
                self._stats.pruning_count += 1
                break
        return value

    def configure(self, **options: Any) -> None:
        unknown = set(options) - {"time_budget_ms", "max_depth"}
        if unknown:
            raise ValueError(f"Unknown options for medium strategy: {sorted(unknown)}")
        if options.get("time_budget_ms") is not None:
            self.config.time_budget_ms = float(
                np.clip(options["time_budget_ms"], MIN_BUDGET_MS, MAX_BUDGET_MS)
            )
        if options.get("max_depth") is not None:
            self.config.max_depth = int(np.clip(options["max_depth"], 1, MAX_DEPTH))

    def reset(self) -> None:
        self._stats = SearchStats()

    def get_stats(self) -> SearchStats:
        return self._stats

    def explain_move(self, board: Board, column: int, player: Disc, opponent: Disc) -> str:
        text = f"Medium AI chose column {column}."
        score = evaluate_move(board, column, player, opponent)
        if score > 1000:
            text += " This move creates a strong offensive position."
        elif score < -1000:
            text += " This move blocks an important threat."
        else:
            text += " This move provides a solid positional advantage."
        text += f" I analyzed {self._stats.nodes_evaluated} positions with alpha-beta pruning."
        return text

    def difficulty_info(self) -> Dict[str, Any]:
        return {
            "level": self.name,
            "description": f"Minimax with depth {self.config.max_depth} and alpha-beta pruning",
            "time_budget_ms": self.config.time_budget_ms,
            "strategy": "Tactical analysis with offensive and defensive awareness",
            "max_depth": self.config.max_depth,
        }
