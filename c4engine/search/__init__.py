"""Evaluation and search infrastructure shared by the strategies."""

from .clock import SearchClock
from .evaluation import (
    DEFAULT_WEIGHTS,
    ENDGAME_EMPTY_CELLS,
    EvaluationWeights,
    HeuristicValueFn,
    MoveEvaluation,
    endgame_multiplier,
    evaluate_board,
    evaluate_move,
    is_forced_win,
    move_evaluations,
    position_strength,
    positional_bound,
)
from .transposition import Bound, TranspositionTable, TTEntry
from .value_fn import BoardValueFn

__all__ = [
    "DEFAULT_WEIGHTS",
    "ENDGAME_EMPTY_CELLS",
    "Bound",
    "BoardValueFn",
    "EvaluationWeights",
    "HeuristicValueFn",
    "MoveEvaluation",
    "SearchClock",
    "TTEntry",
    "TranspositionTable",
    "endgame_multiplier",
    "evaluate_board",
    "evaluate_move",
    "is_forced_win",
    "move_evaluations",
    "position_strength",
    "positional_bound",
]
