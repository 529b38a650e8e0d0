"""Request and response types of the engine's move contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from c4engine.games.connect4 import Board, Disc
from c4engine.search.evaluation import MoveEvaluation
from c4engine.strategies.base_strategy import SearchStats


@dataclass(frozen=True)
class MoveRequest:
    board: Board
    player_color: Disc
    opponent_color: Disc
    difficulty: str
    time_budget_ms: Optional[float] = None


@dataclass(frozen=True)
class MoveResponse:
    move: int
    score: float
    confidence: float
    thinking_time_ms: float
    explanation: Optional[str] = None
    stats: Optional[SearchStats] = None
    used_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Camel-cased mapping for callers outside Python."""
        data: Dict[str, Any] = {
            "move": self.move,
            "score": self.score,
            "confidence": self.confidence,
            "thinkingTimeMs": self.thinking_time_ms,
        }
        if self.explanation is not None:
            data["explanation"] = self.explanation
        if self.stats is not None:
            data["stats"] = {
                "nodesEvaluated": self.stats.nodes_evaluated,
                "pruningCount": self.stats.pruning_count,
                "pruningEfficiency": self.stats.pruning_efficiency,
                "searchDepth": self.stats.search_depth,
            }
        return data


@dataclass(frozen=True)
class QuickAnalysis:
    best_move: int
    score: float
    confidence: float
    move_evaluations: List[MoveEvaluation] = field(default_factory=list)
