"""Pure board operations: legality, disc placement and line detection."""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from c4engine.errors import InvalidColumn
from .state import FIRST_PLAYER, Board, Disc, Position
from .utils import (
    CONNECT_LENGTH,
    DIRECTIONS,
    center_weights,
    check_n_in_row,
    count_in_direction,
)

_SYMBOLS = {Disc.EMPTY: "_", Disc.RED: "R", Disc.YELLOW: "Y"}
_RENDER_SYMBOLS = {Disc.EMPTY: ".", Disc.RED: "X", Disc.YELLOW: "O"}


def is_legal_move(board: Board, column: int) -> bool:
    """Column in range and its top cell empty."""
    return 0 <= column < board.columns and board.grid[0, column] == Disc.EMPTY


def lowest_empty_row(board: Board, column: int) -> Optional[int]:
    """Row a disc dropped into ``column`` would land on, or None if full."""
    if not 0 <= column < board.columns:
        return None
    col = board.grid[:, column]
    for row in range(board.rows - 1, -1, -1):
        if col[row] == Disc.EMPTY:
            return row
    return None


def legal_columns(board: Board) -> List[int]:
    """Open columns, ordered left to right."""
    top = board.grid[0].tolist()
    return [col for col, cell in enumerate(top) if cell == Disc.EMPTY]


def is_full(board: Board) -> bool:
    return not (board.grid[0] == Disc.EMPTY).any()


def apply_move(board: Board, column: int, color: Disc) -> Board:
    """Return a new board with ``color`` dropped into ``column``."""
    if color == Disc.EMPTY:
        raise ValueError("Cannot drop an EMPTY disc")
    if not 0 <= column < board.columns:
        raise InvalidColumn(column)
    row = lowest_empty_row(board, column)
    if row is None:
        raise InvalidColumn(column, "column is full")
    grid = board.grid.copy()
    grid[row, column] = color
    return Board._from_trusted_grid(grid, Position(row, column))


def remove_top_disc(board: Board, column: int) -> Board:
    """
    Return a new board with the highest disc of ``column`` removed.

    Only search simulation uses this. An empty column yields an unchanged copy.
    """
    if not 0 <= column < board.columns:
        raise InvalidColumn(column)
    grid = board.grid.copy()
    for row in range(board.rows):
        if grid[row, column] != Disc.EMPTY:
            grid[row, column] = Disc.EMPTY
            break
    return Board._from_trusted_grid(grid, None)


def count_consecutive(
    board: Board,
    position: Position,
    direction: Tuple[int, int],
    color: Disc,
) -> int:
    """
    Length of the ``color`` run through ``position`` along ``direction``.

    Walks both ways from the seed cell. Returns 0 when the seed cell does not
    hold ``color`` or lies outside the board.
    """
    if not position.is_valid(board.rows, board.columns):
        return 0
    cells = board.cells()
    row, col = position
    if cells[row][col] != color:
        return 0
    dr, dc = direction
    return (
        1
        + count_in_direction(cells, row, col, dr, dc, color)
        + count_in_direction(cells, row, col, -dr, -dc, color)
    )


def would_win(board: Board, position: Position, color: Disc) -> bool:
    """True if a hypothetical ``color`` disc at an empty ``position`` makes four."""
    if not position.is_valid(board.rows, board.columns):
        return False
    cells = board.cells()
    if cells[position.row][position.column] != Disc.EMPTY:
        return False
    return check_n_in_row(cells, position.row, position.column, color, n=CONNECT_LENGTH)


def winning_columns(board: Board, color: Disc) -> List[int]:
    """Columns where ``color`` wins immediately, left to right."""
    cells = board.cells()
    result = []
    for column in legal_columns(board):
        row = _landing_row(cells, column)
        if check_n_in_row(cells, row, column, color, n=CONNECT_LENGTH):
            result.append(column)
    return result


def winning_opportunities(board: Board, color: Disc) -> List[Position]:
    """Every empty cell (playable or not) that would complete four for ``color``."""
    cells = board.cells()
    return [
        Position(row, col)
        for row in range(board.rows)
        for col in range(board.columns)
        if cells[row][col] == Disc.EMPTY
        and check_n_in_row(cells, row, col, color, n=CONNECT_LENGTH)
    ]


def threat_positions(board: Board, color: Disc) -> List[Position]:
    """Empty cells where a ``color`` disc would make exactly three in some line."""
    cells = board.cells()
    threats = []
    for row in range(board.rows):
        for col in range(board.columns):
            if cells[row][col] != Disc.EMPTY:
                continue
            for dr, dc in DIRECTIONS:
                run = (
                    1
                    + count_in_direction(cells, row, col, dr, dc, color)
                    + count_in_direction(cells, row, col, -dr, -dc, color)
                )
                if run == CONNECT_LENGTH - 1:
                    threats.append(Position(row, col))
                    break
    return threats


def center_control(board: Board, color: Disc) -> int:
    """Column-weighted disc count, heaviest at the center column."""
    weights = np.array(center_weights(board.columns), dtype=np.int64)
    return int(((board.grid == color) * weights).sum())


def mirrored_pairs(board: Board, color: Disc) -> int:
    """Number of left/right mirrored cell pairs both holding ``color``."""
    half = board.columns // 2
    left = board.grid[:, :half]
    right = board.grid[:, ::-1][:, :half]
    return int(((left == color) & (right == color)).sum())


def count_discs(board: Board, color: Disc) -> int:
    return int((board.grid == color).sum())


def empty_cells(board: Board) -> int:
    return int((board.grid == Disc.EMPTY).sum())


def side_to_move(board: Board) -> Disc:
    """The color with fewer discs moves; equal counts mean the first player moves."""
    red = count_discs(board, Disc.RED)
    yellow = count_discs(board, Disc.YELLOW)
    if red < yellow:
        return Disc.RED
    if yellow < red:
        return Disc.YELLOW
    return FIRST_PLAYER


def find_winner(board: Board) -> Optional[Tuple[Disc, List[Position]]]:
    """
    Find a completed line of four.

    Returns the winning color and the four positions of the first line found
    scanning top-left to bottom-right, or None.
    """
    cells = board.cells()
    rows, cols = board.rows, board.columns
    for row in range(rows):
        for col in range(cols):
            disc = cells[row][col]
            if disc == Disc.EMPTY:
                continue
            for dr, dc in DIRECTIONS:
                end_r = row + dr * (CONNECT_LENGTH - 1)
                end_c = col + dc * (CONNECT_LENGTH - 1)
                if not (0 <= end_r < rows and 0 <= end_c < cols):
                    continue
                line = [Position(row + dr * i, col + dc * i) for i in range(CONNECT_LENGTH)]
                if all(cells[r][c] == disc for r, c in line):
                    return Disc(disc), line
    return None


def is_terminal(board: Board) -> bool:
    """A line of four exists or the board is full."""
    if board.last_move is not None:
        row, col = board.last_move
        disc = int(board.grid[row, col])
        if disc != Disc.EMPTY and check_n_in_row(board.cells(), row, col, disc, n=CONNECT_LENGTH):
            return True
        return is_full(board)
    return is_full(board) or find_winner(board) is not None


def validate_board(board: Board) -> bool:
    """
    Check that discs obey gravity and that turn counts are consistent.

    No disc may sit above an empty cell in its column, and the two colors'
    disc counts may differ by at most one.
    """
    occupied = board.grid != Disc.EMPTY
    # Once a column turns occupied going down, it must stay occupied.
    below_empty = ~occupied[1:] & occupied[:-1]
    if below_empty.any():
        return False
    return abs(count_discs(board, Disc.RED) - count_discs(board, Disc.YELLOW)) <= 1


def board_to_string(board: Board) -> str:
    """Compact row-major encoding: ``R``, ``Y`` or ``_`` per cell, top row first."""
    return "".join(_SYMBOLS[Disc(cell)] for row in board.cells() for cell in row)


def board_from_string(text: str, rows: int = 6, cols: int = 7) -> Board:
    """Inverse of :func:`board_to_string`."""
    text = "".join(text.split())
    if len(text) != rows * cols:
        raise ValueError(f"Invalid board string length: {len(text)} (expected {rows * cols})")
    lookup = {symbol: disc for disc, symbol in _SYMBOLS.items()}
    try:
        flat = [lookup[ch.upper()] for ch in text]
    except KeyError as exc:
        raise ValueError(f"Invalid board symbol: {exc.args[0]!r}") from None
    grid = np.array(flat, dtype=np.int8).reshape(rows, cols)
    return Board(grid)


def render_board(board: Board) -> str:
    """Human-readable board with column indices underneath."""
    lines = [" ".join(_RENDER_SYMBOLS[Disc(cell)] for cell in row) for row in board.cells()]
    lines.append(" ".join(str(col) for col in range(board.columns)))
    return "\n".join(lines)


def _landing_row(cells, column: int) -> int:
    for row in range(len(cells) - 1, -1, -1):
        if cells[row][column] == Disc.EMPTY:
            return row
    return -1
