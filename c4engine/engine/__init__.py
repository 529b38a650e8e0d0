"""Engine facade: request/response contract and orchestration."""

from .messages import MoveRequest, MoveResponse, QuickAnalysis
from .service import EngineService, fallback_move
from .stats import PerformanceStats

__all__ = [
    "EngineService",
    "MoveRequest",
    "MoveResponse",
    "PerformanceStats",
    "QuickAnalysis",
    "fallback_move",
]
