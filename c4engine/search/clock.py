"""Cooperative time budgeting for move searches."""

from __future__ import annotations

import threading
from time import perf_counter
from typing import Optional

from c4engine.errors import SearchTimeExceeded


class SearchClock:
    """
    Wall-clock budget of one move request.

    Searches poll :meth:`past` at their checkpoints; nothing is interrupted
    preemptively. A set ``cancel_event`` makes every threshold count as
    reached, so cancellation is observed at the same checkpoints.
    """

    def __init__(
        self,
        budget_ms: float,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        if budget_ms <= 0:
            raise ValueError(f"Time budget must be positive, got {budget_ms}")
        self.budget_ms = float(budget_ms)
        self.cancel_event = cancel_event
        self._start = perf_counter()

    def elapsed_ms(self) -> float:
        return (perf_counter() - self._start) * 1000.0

    def remaining_ms(self) -> float:
        return max(0.0, self.budget_ms - self.elapsed_ms())

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def past(self, fraction: float = 1.0) -> bool:
        """True once ``fraction`` of the budget is used, or on cancellation."""
        return self.cancelled or self.elapsed_ms() >= self.budget_ms * fraction

    def check(self, fraction: float = 1.0) -> None:
        if self.past(fraction):
            reason = "cancelled" if self.cancelled else f"{self.elapsed_ms():.1f} ms elapsed"
            raise SearchTimeExceeded(f"Search stopped: {reason} (budget {self.budget_ms:.0f} ms)")

    def wait(self, seconds: float) -> None:
        """Sleep up to ``seconds``, waking early on cancellation."""
        if seconds <= 0:
            return
        if self.cancel_event is not None:
            self.cancel_event.wait(seconds)
        else:
            threading.Event().wait(seconds)
