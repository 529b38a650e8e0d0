"""Hard difficulty: iterative-deepening alpha-beta with a transposition table."""

from __future__ import annotations

import logging
import math
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, DefaultDict, Dict, List, Optional, Sequence, Tuple

import numpy as np

from c4engine.errors import NoLegalMoves, SearchTimeExceeded
from c4engine.games.connect4 import (
    CONNECT_LENGTH,
    Board,
    Disc,
    apply_move,
    center_weights,
    check_n_in_row,
    empty_cells,
    is_terminal,
    legal_columns,
)
from c4engine.search.clock import SearchClock
from c4engine.search.evaluation import HeuristicValueFn, evaluate_move
from c4engine.search.transposition import Bound, TranspositionTable
from c4engine.search.value_fn import BoardValueFn
from .base_strategy import SearchStats, Strategy
from .tactics import find_forced_win, find_immediate_block, find_immediate_win

logger = logging.getLogger(__name__)

MIN_BUDGET_MS = 100.0
MAX_BUDGET_MS = 10000.0
MAX_DEPTH = 15


@dataclass
class HardConfig:
    time_budget_ms: float = 500.0
    max_depth: int = 12
    # no new iteration once this share of the budget is used
    deepen_time_fraction: float = 0.7
    # no new root column once this share is used
    root_time_fraction: float = 0.9
    max_killers: int = 2
    tt_max_entries: int = 250_000
    tt_max_age: int = 4


class HardStrategy(Strategy):
    """
    Strongest opponent.

    After the win, block and forced-win shortcuts it deepens one ply at a
    time. Depth 1 always completes; a deeper iteration that hits the deadline
    is thrown away and the previous depth's move is played.

    Move ordering at each node: transposition-table move, then killer moves
    of that ply, then history score for ``(column, depth)``, then a cheap
    one-ply score. The transposition table and the history counters live for
    the whole game; killer moves are cleared before every search.
    """

    name = "hard"

    def __init__(
        self,
        config: Optional[HardConfig] = None,
        value_fn: Optional[BoardValueFn] = None,
    ) -> None:
        self.config = config or HardConfig()
        self.value_fn = value_fn or HeuristicValueFn()
        self.tt = TranspositionTable(self.config.tt_max_entries, self.config.tt_max_age)
        self.killers: Dict[int, List[int]] = {}
        self.history: DefaultDict[Tuple[int, int], int] = defaultdict(int)
        self._stats = SearchStats()
        self.analysis_stats = SearchStats()

    @property
    def proven_win(self) -> float:
        """Lowest score of a line that ends in a completed four; static scores stay below it."""
        return 2 * self.value_fn.win_score

    def leaf_value(self, board: Board, depth: int, player: Disc, opponent: Disc) -> float:
        """
        Value of a node where the search stops.

        A completed four scores beyond any static evaluation, plus the
        remaining depth so that sooner wins (and later losses) are preferred.
        """
        score = self.value_fn.evaluate(board, player, opponent)
        if score == 0 or not is_terminal(board):
            return score
        decisive = self.proven_win + depth
        return decisive if score > 0 else -decisive

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

        for shortcut, column in (
            ("immediate win", find_immediate_win(board, player)),
            ("immediate block", find_immediate_block(board, opponent)),
        ):
            if column is not None:
                logger.debug("hard plays %s at column %d", shortcut, column)
                return column
        forced = find_forced_win(board, player, opponent, depth=1)
        if forced is not None:
            logger.debug("hard plays forced win at column %d", forced)
            return forced

        clock = SearchClock(time_budget_ms or self.config.time_budget_ms, cancel_event)
        self.tt.new_search()
        self.killers = {}

        best_column = columns[0]
        max_depth = min(self.config.max_depth, empty_cells(board))
        for depth in range(1, max_depth + 1):
            if depth > 1 and clock.past(self.config.deepen_time_fraction):
                break
            try:
                column, score = self._search_root(
                    board, player, opponent, depth, clock if depth > 1 else None, self.tt
                )
            except SearchTimeExceeded:
                logger.debug("hard abandoned depth %d after %.1f ms", depth, clock.elapsed_ms())
                break
            best_column = column
            self._stats.search_depth = depth
            logger.debug(
                "hard depth %d: column %d score %s (%d nodes, %.1f ms)",
                depth,
                column,
                score,
                self._stats.nodes_evaluated,
                clock.elapsed_ms(),
            )
            if score >= self.proven_win:
                break
        return best_column

    def analyze(
        self,
        board: Board,
        player: Disc,
        opponent: Disc,
        depth: Optional[int] = None,
    ) -> Tuple[int, float]:
        """
        One alpha-beta search of exactly ``depth`` plies, without deadline or
        shortcuts. Uses a private transposition table so that the score is the
        plain fixed-depth minimax value of the position.

        The game's table, history, killers and :meth:`get_stats` are left as
        they were; the counters of this search go to ``analysis_stats``.
        """
        if not legal_columns(board):
            raise NoLegalMoves("Board is full")
        depth = depth or self.config.max_depth
        saved_stats, saved_killers = self._stats, self.killers
        self._stats = SearchStats()
        self.killers = {}
        try:
            table = TranspositionTable(self.config.tt_max_entries, self.config.tt_max_age)
            column, score = self._search_root(board, player, opponent, depth, None, table)
            self._stats.search_depth = depth
            self.analysis_stats = self._stats
        finally:
            self._stats, self.killers = saved_stats, saved_killers
        return column, score

    def _search_root(
        self,
        board: Board,
        player: Disc,
        opponent: Disc,
        depth: int,
        clock: Optional[SearchClock],
        table: TranspositionTable,
    ) -> Tuple[int, float]:
        key = (board.key(), int(player))
        entry = table.get(key)
        tt_move = entry.best_move if entry is not None else None

        alpha = -math.inf
        best_value = -math.inf
        ordered = self._order_root(board, player, opponent, tt_move)
        best_column = ordered[0]
        for column in ordered:
            if clock is not None:
                clock.check(self.config.root_time_fraction)
            child = apply_move(board, column, player)
            value = -self._negamax(
                child, depth - 1, -math.inf, -alpha, opponent, player, 1, clock, table
            )
            if value > best_value:
                best_value = value
                best_column = column
            if value > alpha:
                alpha = value

        self._store(table, key, best_value, depth, Bound.EXACT, best_column)
        return best_column, best_value

    def _negamax(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        player: Disc,
        opponent: Disc,
        ply: int,
        clock: Optional[SearchClock],
        table: TranspositionTable,
    ) -> float:
        self._stats.nodes_evaluated += 1
        if clock is not None:
            clock.check(1.0)
        if depth == 0 or is_terminal(board):
            return self.leaf_value(board, depth, player, opponent)

        key = (board.key(), int(player))
        tt_move = None
        entry = table.get(key)
        if entry is not None:
            tt_move = entry.best_move
            if entry.depth >= depth:
                if entry.bound is Bound.EXACT:
                    return entry.score
                if entry.bound is Bound.LOWER:
                    alpha = max(alpha, entry.score)
                else:
                    beta = min(beta, entry.score)
                if alpha >= beta:
                    return entry.score

        window_alpha = alpha
        value = -math.inf
        best_column = -1
        for column in self._order_moves(board, player, opponent, tt_move, ply, depth):
            child = apply_move(board, column, player)
            score = -self._negamax(
                child, depth - 1, -beta, -alpha, opponent, player, ply + 1, clock, table
            )
            if score > value:
                value = score
                best_column = column
            if value > alpha:
                alpha = value
            if alpha >= beta:
                self._stats.pruning_count += 1
                self._record_killer(ply, column)
                break

        if value <= window_alpha:
            bound = Bound.UPPER
        elif value >= beta:
            bound = Bound.LOWER
        else:
            bound = Bound.EXACT
        self._store(table, key, value, depth, bound, best_column)
        return value

    def _store(
        self,
        table: TranspositionTable,
        key: Tuple[bytes, int],
        score: float,
        depth: int,
        bound: Bound,
        best_column: int,
    ) -> None:
        table.store(key, score, depth, bound, best_column)
        if table is self.tt:
            self.history[(best_column, depth)] += depth * depth

    def _record_killer(self, ply: int, column: int) -> None:
        killers = self.killers.setdefault(ply, [])
        if column in killers:
            killers.remove(column)
        killers.insert(0, column)
        del killers[self.config.max_killers:]

    def _order_root(
        self,
        board: Board,
        player: Disc,
        opponent: Disc,
        tt_move: Optional[int],
    ) -> List[int]:
        scores = {
            column: self.value_fn.evaluate(apply_move(board, column, player), player, opponent)
            for column in legal_columns(board)
        }
        return sorted(
            scores,
            key=lambda column: (column == tt_move, scores[column]),
            reverse=True,
        )

    def _order_moves(
        self,
        board: Board,
        player: Disc,
        opponent: Disc,
        tt_move: Optional[int],
        ply: int,
        depth: int,
    ) -> List[int]:
        cells = board.cells()
        killers = self.killers.get(ply, ())
        weights = center_weights(board.columns)

        def priority(column: int) -> Tuple[bool, bool, int, int]:
            return (
                column == tt_move,
                column in killers,
                self.history.get((column, depth), 0),
                _quick_score(cells, column, player, opponent, weights),
            )

        return sorted(legal_columns(board), key=priority, reverse=True)

    def configure(self, **options: Any) -> None:
        unknown = set(options) - {"time_budget_ms", "max_depth"}
        if unknown:
            raise ValueError(f"Unknown options for hard strategy: {sorted(unknown)}")
        if options.get("time_budget_ms") is not None:
            self.config.time_budget_ms = float(
                np.clip(options["time_budget_ms"], MIN_BUDGET_MS, MAX_BUDGET_MS)
            )
        if options.get("max_depth") is not None:
            self.config.max_depth = int(np.clip(options["max_depth"], 1, MAX_DEPTH))

    def reset(self) -> None:
        self.tt.reset()
        self.killers = {}
        self.history.clear()
        self._stats = SearchStats()

    def get_stats(self) -> SearchStats:
        return self._stats

    def explain_move(self, board: Board, column: int, player: Disc, opponent: Disc) -> str:
        text = f"Hard AI chose column {column}."
        score = evaluate_move(board, column, player, opponent)
        if score >= self.value_fn.win_score:
            text += " This move creates a winning position."
        elif score > 10_000:
            text += " This move establishes an overwhelming advantage."
        elif score > 1000:
            text += " This move creates significant tactical opportunities."
        else:
            text += " This move optimizes long-term strategic position."
        text += (
            f" I analyzed {self._stats.nodes_evaluated} positions using iterative"
            f" deepening to depth {self._stats.search_depth}."
        )
        return text

    def difficulty_info(self) -> Dict[str, Any]:
        return {
            "level": self.name,
            "description": "Iterative deepening search with transposition table and move ordering",
            "time_budget_ms": self.config.time_budget_ms,
            "strategy": "Deep tactical search within the time budget",
            "max_depth": self.config.max_depth,
        }


def _quick_score(
    cells: Sequence[Sequence[int]],
    column: int,
    player: int,
    opponent: int,
    weights: Sequence[int],
) -> int:
    """Cheap ordering score: winning now beats blocking beats central columns."""
    row = len(cells) - 1
    while cells[row][column] != Disc.EMPTY:
        row -= 1
    if check_n_in_row(cells, row, column, player, n=CONNECT_LENGTH):
        return 200
    if check_n_in_row(cells, row, column, opponent, n=CONNECT_LENGTH):
        return 100
    return weights[column]
