"""Engine orchestration: dispatch by difficulty, fallback moves, statistics."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from time import perf_counter
from typing import Any, Dict, Optional, Sequence, Tuple

from c4engine.config.schema import EngineConfig
from c4engine.errors import NoLegalMoves, StrategyInternalFailure
from c4engine.games.connect4 import Board, Disc, apply_move, legal_columns
from c4engine.search.evaluation import evaluate_board, move_evaluations, position_strength
from c4engine.strategies import DIFFICULTIES, SearchStats, Strategy, make_strategy
from .messages import MoveRequest, MoveResponse, QuickAnalysis
from .stats import PerformanceStats

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.1

DIFFICULTY_FEATURES: Dict[str, Tuple[str, ...]] = {
    "easy": (
        "Random move selection",
        "Center bias preference",
        "Short thinking time",
    ),
    "medium": (
        "Minimax algorithm",
        "Alpha-beta pruning",
        "Position evaluation",
        "Immediate win/loss detection",
    ),
    "hard": (
        "Iterative deepening",
        "Transposition table",
        "Killer move heuristics",
        "History heuristics",
        "Forced win detection",
    ),
}

# Search depth used for UI hints; easy does not search.
QUICK_ANALYSIS_DEPTH: Dict[str, Optional[int]] = {"easy": None, "medium": 1, "hard": 2}


class EngineService:
    """
    Single entry point for move requests.

    Each service owns one strategy per difficulty, so separate games should use
    separate services (or call :meth:`reset` between games). Any failure inside
    a strategy is logged and answered with a safe fallback move. The only
    error a caller sees for a well-formed request is :class:`NoLegalMoves`.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        self._strategies: Dict[str, Strategy] = {}
        for difficulty in DIFFICULTIES:
            kwargs: Dict[str, Any] = {}
            if difficulty == "easy":
                kwargs["seed"] = self.config.seed
            strategy = make_strategy(difficulty, **kwargs)
            strategy.configure(**self.config.for_difficulty(difficulty).options())
            self._strategies[difficulty] = strategy
        self._performance = {difficulty: PerformanceStats() for difficulty in DIFFICULTIES}
        self._cancel_event: Optional[threading.Event] = None

    def strategy(self, difficulty: str) -> Strategy:
        try:
            return self._strategies[difficulty]
        except KeyError:
            raise ValueError(
                f"Unknown difficulty: {difficulty!r}; expected one of {DIFFICULTIES}"
            ) from None

    def choose_move(self, request: MoveRequest) -> MoveResponse:
        """
        Pick a move for ``request``.

        Raises:
            ValueError: unknown difficulty or invalid color assignment.
            NoLegalMoves: the board has no open column.
        """
        strategy = self.strategy(request.difficulty)
        player, opponent = _parse_colors(request.player_color, request.opponent_color)
        board = request.board
        columns = legal_columns(board)
        if not columns:
            raise NoLegalMoves("Board is full; the game is already decided")

        cancel_event = threading.Event()
        self._cancel_event = cancel_event
        start = perf_counter()
        try:
            move = strategy.choose_move(
                board,
                player,
                opponent,
                time_budget_ms=request.time_budget_ms,
                cancel_event=cancel_event,
            )
            thinking_time_ms = (perf_counter() - start) * 1000.0
            if move not in columns:
                raise StrategyInternalFailure(
                    f"{request.difficulty} strategy returned illegal column {move!r}"
                )
            after = apply_move(board, move, player)
            response = MoveResponse(
                move=move,
                score=evaluate_board(after, player, opponent),
                confidence=abs(position_strength(after, player, opponent)),
                thinking_time_ms=thinking_time_ms,
                explanation=strategy.explain_move(board, move, player, opponent),
                stats=replace(strategy.get_stats()),
            )
        except Exception:
            logger.warning(
                "%s strategy failed, playing fallback move", request.difficulty, exc_info=True
            )
            response = MoveResponse(
                move=fallback_move(columns, board.columns),
                score=0,
                confidence=FALLBACK_CONFIDENCE,
                thinking_time_ms=(perf_counter() - start) * 1000.0,
                explanation="Fallback move due to engine error",
                used_fallback=True,
            )
        finally:
            if self._cancel_event is cancel_event:
                self._cancel_event = None

        self._performance[request.difficulty].record_move(
            response.thinking_time_ms, response.stats or SearchStats(), response.used_fallback
        )
        logger.debug(
            "%s plays column %d (score %s, %.1f ms)",
            request.difficulty,
            response.move,
            response.score,
            response.thinking_time_ms,
        )
        return response

    def cancel(self) -> bool:
        """Ask the in-flight request to stop at its next checkpoint."""
        event = self._cancel_event
        if event is None:
            return False
        event.set()
        return True

    def quick_analysis(
        self,
        board: Board,
        player: Disc,
        opponent: Disc,
        difficulty: str,
    ) -> QuickAnalysis:
        """Cheap hint: a shallow recommendation plus one-ply scores of every column."""
        strategy = self.strategy(difficulty)
        player, opponent = _parse_colors(player, opponent)
        if not legal_columns(board):
            raise NoLegalMoves("Board is full; the game is already decided")
        column, score = strategy.analyze(
            board, player, opponent, depth=QUICK_ANALYSIS_DEPTH[difficulty]
        )
        after = apply_move(board, column, player)
        return QuickAnalysis(
            best_move=column,
            score=score,
            confidence=abs(position_strength(after, player, opponent)),
            move_evaluations=move_evaluations(board, player, opponent),
        )

    def difficulty_info(self, difficulty: str) -> Dict[str, Any]:
        info = dict(self.strategy(difficulty).difficulty_info())
        info["features"] = list(DIFFICULTY_FEATURES[difficulty])
        return info

    def configure(self, difficulty: str, **options: Any) -> None:
        self.strategy(difficulty).configure(**options)

    def reset(self, difficulty: Optional[str] = None) -> None:
        """Clear search tables of one difficulty, or of all of them."""
        targets = DIFFICULTIES if difficulty is None else (difficulty,)
        for name in targets:
            self.strategy(name).reset()

    def record_game_result(self, difficulty: str, result: str) -> None:
        self.strategy(difficulty)
        self._performance[difficulty].record_game(result)

    def performance_stats(self, difficulty: str) -> PerformanceStats:
        self.strategy(difficulty)
        return replace(self._performance[difficulty])

    def all_performance_stats(self) -> Dict[str, PerformanceStats]:
        return {difficulty: self.performance_stats(difficulty) for difficulty in DIFFICULTIES}


def fallback_move(columns: Sequence[int], num_columns: int) -> int:
    """Center column if open, else the leftmost open column."""
    center = num_columns // 2
    return center if center in columns else columns[0]


def _parse_colors(player: Any, opponent: Any) -> Tuple[Disc, Disc]:
    player = Disc.parse(player)
    opponent = Disc.parse(opponent)
    if Disc.EMPTY in (player, opponent) or player == opponent:
        raise ValueError(f"Invalid color assignment: player={player!r}, opponent={opponent!r}")
    return player, opponent
