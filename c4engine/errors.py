"""Error taxonomy for the move engine."""

from __future__ import annotations


class EngineError(Exception):
    """Base class for engine errors."""


class NoLegalMoves(EngineError):
    """The board has no open column, so no move can be produced."""


class InvalidColumn(EngineError, ValueError):
    """A column outside the board, or a full column, was played."""

    def __init__(self, column: int, reason: str = "out of range") -> None:
        super().__init__(f"Invalid column {column}: {reason}")
        self.column = column
        self.reason = reason


class SearchTimeExceeded(EngineError):
    """Raised inside a search when its time budget ran out or it was cancelled."""


class StrategyInternalFailure(EngineError):
    """A strategy produced an unusable result."""
