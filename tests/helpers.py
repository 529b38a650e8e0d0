"""Board builders shared by the test modules."""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from c4engine.games.connect4 import (
    Board,
    Disc,
    apply_move,
    board_from_string,
    is_terminal,
    legal_columns,
)

# Full 6x7 board without any line of four (rows alternate in pairs).
DRAW_ROWS = (
    "RYRYRYR",
    "RYRYRYR",
    "YRYRYRY",
    "YRYRYRY",
    "RYRYRYR",
    "RYRYRYR",
)


def board_from_rows(*rows: str) -> Board:
    """Build a board from six row strings, top row first."""
    return board_from_string("".join(rows))


def full_board() -> Board:
    return board_from_rows(*DRAW_ROWS)


def board_with_one_open_cell(column: int = 3) -> Board:
    """The draw board with the top cell of ``column`` emptied."""
    rows = list(DRAW_ROWS)
    rows[0] = rows[0][:column] + "_" + rows[0][column + 1:]
    return board_from_rows(*rows)


def board_from_moves(columns: Iterable[int], first: Disc = Disc.RED) -> Board:
    """Play ``columns`` alternately starting with ``first``."""
    board = Board.empty()
    color = first
    for column in columns:
        board = apply_move(board, column, color)
        color = color.opponent
    return board


def random_position(rng: np.random.Generator, max_moves: int = 20) -> Optional[Board]:
    """A non-terminal position reached by random play, or None if the game ended."""
    board = Board.empty()
    color = Disc.RED
    for _ in range(int(rng.integers(0, max_moves + 1))):
        board = apply_move(board, int(rng.choice(legal_columns(board))), color)
        if is_terminal(board):
            return None
        color = color.opponent
    return board
