"""Shared utilities for Connect4 game logic."""

from __future__ import annotations

from typing import List, Sequence, Tuple

# Default board dimensions
CONNECT4_ROWS = 6
CONNECT4_COLS = 7
CONNECT_LENGTH = 4

# horizontal, vertical, diagonal down-right, diagonal down-left
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))

Cells = Sequence[Sequence[int]]


def center_weights(cols: int = CONNECT4_COLS) -> List[int]:
    """
    Column weights peaking at the center column.

    For the standard 7-column board this is ``[1, 2, 3, 4, 3, 2, 1]``.
    """
    center = cols // 2
    return [center + 1 - abs(col - center) for col in range(cols)]


def count_in_direction(
    cells: Cells,
    row: int,
    col: int,
    dr: int,
    dc: int,
    player: int,
) -> int:
    """Count ``player`` cells stepping from (row, col) along (dr, dc), start excluded."""
    rows = len(cells)
    cols = len(cells[0])
    count = 0
    r, c = row + dr, col + dc
    while 0 <= r < rows and 0 <= c < cols and cells[r][c] == player:
        count += 1
        r += dr
        c += dc
    return count


def count_line(
    cells: Cells,
    row: int,
    col: int,
    dr: int,
    dc: int,
    player: int,
) -> int:
    """
    Length of the line through (row, col) if a ``player`` disc stood there.

    The cell itself is not inspected, which lets callers test hypothetical
    placements on empty cells without copying the board.
    """
    return (
        1
        + count_in_direction(cells, row, col, dr, dc, player)
        + count_in_direction(cells, row, col, -dr, -dc, player)
    )


def check_n_in_row(
    cells: Cells,
    row: int,
    col: int,
    player: int,
    n: int = CONNECT_LENGTH,
) -> bool:
    """
    Check if there are at least n pieces in a row for the given player
    passing through (row, col).

    Args:
        cells: Board rows (nested lists or a 2D array).
        row: Row position to check from.
        col: Column position to check from.
        player: Player token (1 or -1).
        n: Number of pieces in a row to check for.

    Returns:
        True if player has at least n in a row through (row, col).
    """
    for dr, dc in DIRECTIONS:
        if count_line(cells, row, col, dr, dc, player) >= n:
            return True
    return False
