"""Connect4 value types: discs, positions, moves and boards."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import List, NamedTuple, Optional, Sequence, Union

import numpy as np

from .utils import CONNECT4_COLS, CONNECT4_ROWS


class Disc(IntEnum):
    """Cell contents. Player tokens are +1 and -1, as in the rules code."""

    EMPTY = 0
    RED = 1
    YELLOW = -1

    @property
    def opponent(self) -> "Disc":
        if self is Disc.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return Disc(-int(self))

    @classmethod
    def parse(cls, value: Union["Disc", str, int]) -> "Disc":
        """Accept a Disc, a color name ("red"/"yellow") or a token."""
        if isinstance(value, Disc):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown disc color: {value!r}") from None
        return cls(int(value))


# Red opens the game; used to break the tie when both sides hold equal counts.
FIRST_PLAYER = Disc.RED


class Position(NamedTuple):
    row: int
    column: int

    def is_valid(self, rows: int = CONNECT4_ROWS, cols: int = CONNECT4_COLS) -> bool:
        return 0 <= self.row < rows and 0 <= self.column < cols


@dataclass(frozen=True)
class Move:
    column: int
    row: int
    color: Disc
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True, eq=False)
class Board:
    """
    Immutable board snapshot.

    ``grid`` is a read-only ``int8`` array with row 0 at the top. Operations in
    :mod:`c4engine.games.connect4.board` never modify a board; they return a new
    one, so sibling search branches can never see each other's discs.
    """

    grid: np.ndarray
    last_move: Optional[Position] = None

    def __post_init__(self) -> None:
        grid = np.array(self.grid, dtype=np.int8)
        if grid.ndim != 2 or grid.shape[0] == 0 or grid.shape[1] == 0:
            raise ValueError(f"Board grid must be a non-empty 2D array, got shape {grid.shape}")
        if not np.isin(grid, (Disc.EMPTY, Disc.RED, Disc.YELLOW)).all():
            raise ValueError("Board cells must be 0 (empty), 1 (red) or -1 (yellow)")
        grid.setflags(write=False)
        object.__setattr__(self, "grid", grid)

    @classmethod
    def empty(cls, rows: int = CONNECT4_ROWS, cols: int = CONNECT4_COLS) -> "Board":
        return cls(np.zeros((rows, cols), dtype=np.int8))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Union[int, str, None]]]) -> "Board":
        """
        Build a board from nested rows (top row first).

        Cells may be tokens, ``Disc`` values, color names or ``None`` for empty.
        """
        grid = [
            [Disc.EMPTY if cell is None else Disc.parse(cell) for cell in row]
            for row in rows
        ]
        return cls(np.array(grid, dtype=np.int8))

    @classmethod
    def _from_trusted_grid(cls, grid: np.ndarray, last_move: Optional[Position]) -> "Board":
        # Skips validation; only for grids derived from an existing board.
        board = object.__new__(cls)
        grid.setflags(write=False)
        object.__setattr__(board, "grid", grid)
        object.__setattr__(board, "last_move", last_move)
        return board

    @property
    def rows(self) -> int:
        return int(self.grid.shape[0])

    @property
    def columns(self) -> int:
        return int(self.grid.shape[1])

    def cells(self) -> List[List[int]]:
        """Plain nested lists; much faster than numpy scalars in Python loops."""
        return self.grid.tolist()

    def key(self) -> bytes:
        """Collision-free encoding of the grid contents."""
        return self.grid.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid.shape == other.grid.shape and bool(np.array_equal(self.grid, other.grid))

    def __hash__(self) -> int:
        return hash((self.grid.shape, self.key()))
