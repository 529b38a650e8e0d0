"""Heuristic position evaluation for Connect4."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from c4engine.games.connect4 import (
    CONNECT4_COLS,
    CONNECT4_ROWS,
    CONNECT_LENGTH,
    DIRECTIONS,
    FIRST_PLAYER,
    Board,
    Disc,
    apply_move,
    center_weights,
    check_n_in_row,
    count_line,
    is_legal_move,
    legal_columns,
    winning_columns,
)
from .value_fn import BoardValueFn

ENDGAME_EMPTY_CELLS = 10


@dataclass(frozen=True)
class EvaluationWeights:
    """
    Integer weight per board feature.

    ``win`` must exceed every reachable sum of the other features so that a
    tactical result always dominates positional preference.
    ``win_opportunity`` and ``block_opponent_win`` must be equal for the
    evaluation to stay antisymmetric.
    """

    win: int = 1_000_000
    win_opportunity: int = 10_000
    block_opponent_win: int = 10_000
    three_in_a_row: int = 1_000
    two_in_a_row: int = 100
    center_control: int = 50
    symmetry: int = 10
    threat: int = 500

    def __post_init__(self) -> None:
        bound = positional_bound(self)
        if self.win <= bound:
            raise ValueError(
                f"win weight {self.win} must exceed the positional bound {bound}"
            )

    @property
    def is_zero_sum(self) -> bool:
        return self.win_opportunity == self.block_opponent_win


def positional_bound(
    weights: EvaluationWeights,
    rows: int = CONNECT4_ROWS,
    cols: int = CONNECT4_COLS,
) -> int:
    """Upper bound on the magnitude of all non-win terms for a board size."""
    cells = rows * cols
    return (
        cells * max(weights.win_opportunity, weights.block_opponent_win)
        + cells * weights.threat
        + cells * len(DIRECTIONS) * weights.three_in_a_row
        + cells * max(center_weights(cols)) * weights.center_control
        + rows * (cols // 2) * weights.symmetry
    )


DEFAULT_WEIGHTS = EvaluationWeights()


def endgame_multiplier(empty: int) -> float:
    """Win/loss scale: 1.0 until fewer than 10 cells remain, then +0.1 per filled cell."""
    return 1.0 + 0.1 * max(0, ENDGAME_EMPTY_CELLS - empty)


def _win_score(weights: EvaluationWeights, empty: int) -> int:
    return round(weights.win * endgame_multiplier(empty))


def _mover(count_player: int, count_opponent: int, player: int, opponent: int) -> int:
    if count_player < count_opponent:
        return player
    if count_opponent < count_player:
        return opponent
    return FIRST_PLAYER if FIRST_PLAYER in (player, opponent) else player


def evaluate_board(
    board: Board,
    player: Disc,
    opponent: Disc,
    weights: EvaluationWeights = DEFAULT_WEIGHTS,
) -> int:
    """
    Score ``board`` for ``player``; positive favors ``player``.

    Terms are checked in order, returning early on certainty:

    1. A completed four is a win (or loss). A full board is a draw.
    2. A winning placement playable right now wins for its owner. The side to
       move is checked first.
    3. Otherwise the sum of latent winning cells, threat cells, reachable
       two/three patterns, center control and mirrored occupancy, each taken
       as ``player`` minus ``opponent``.

    Win scores grow by 10% per filled cell once fewer than 10 cells are empty.
    The result is a pure function of the board and the two colors.
    """
    cells = board.cells()
    rows = len(cells)
    cols = len(cells[0])
    p = int(player)
    o = int(opponent)
    col_weights = center_weights(cols)

    index = {p: 0, o: 1}
    discs = [0, 0]
    patterns = [0, 0]
    center = [0, 0]
    completed = [False, False]
    empty = 0

    for r in range(rows):
        row = cells[r]
        for c in range(cols):
            disc = row[c]
            if disc == Disc.EMPTY:
                empty += 1
                continue
            side = index.get(disc)
            if side is None:
                continue
            discs[side] += 1
            center[side] += col_weights[c]
            for dr, dc in DIRECTIONS:
                run, span = _run_and_span(cells, r, c, dr, dc, disc, rows, cols)
                if run >= CONNECT_LENGTH:
                    completed[side] = True
                elif span >= CONNECT_LENGTH:
                    if run >= 3:
                        patterns[side] += weights.three_in_a_row
                    elif run >= 2:
                        patterns[side] += weights.two_in_a_row

    win = _win_score(weights, empty)
    if completed[0]:
        return win
    if completed[1]:
        return -win
    if empty == 0:
        return 0

    mover = _mover(discs[0], discs[1], p, o)
    for side in (mover, o if mover == p else p):
        if _has_playable_win(cells, side, rows, cols):
            return win if side == p else -win

    opportunities = [0, 0]
    threats = [0, 0]
    for r in range(rows):
        row = cells[r]
        for c in range(cols):
            if row[c] != Disc.EMPTY:
                continue
            for side, disc in ((0, p), (1, o)):
                best = 0
                threat = False
                for dr, dc in DIRECTIONS:
                    length = count_line(cells, r, c, dr, dc, disc)
                    if length > best:
                        best = length
                    if length == CONNECT_LENGTH - 1:
                        threat = True
                if best >= CONNECT_LENGTH:
                    opportunities[side] += 1
                if threat:
                    threats[side] += 1

    symmetry = [0, 0]
    for r in range(rows):
        row = cells[r]
        for c in range(cols // 2):
            disc = row[c]
            if disc != Disc.EMPTY and disc == row[cols - 1 - c]:
                side = index.get(disc)
                if side is not None:
                    symmetry[side] += 1

    score = opportunities[0] * weights.win_opportunity
    score -= opportunities[1] * weights.block_opponent_win
    score += (threats[0] - threats[1]) * weights.threat
    score += patterns[0] - patterns[1]
    score += (center[0] - center[1]) * weights.center_control
    score += (symmetry[0] - symmetry[1]) * weights.symmetry
    return score


def _run_and_span(cells, r, c, dr, dc, disc, rows, cols):
    """Run of ``disc`` through (r, c) and the length of the open line around it."""
    run = 1
    span = 1
    for sign in (1, -1):
        rr = r + sign * dr
        cc = c + sign * dc
        in_run = True
        for _ in range(CONNECT_LENGTH - 1):
            if not (0 <= rr < rows and 0 <= cc < cols):
                break
            cell = cells[rr][cc]
            if cell == disc:
                if in_run:
                    run += 1
                span += 1
            elif cell == Disc.EMPTY:
                in_run = False
                span += 1
            else:
                break
            rr += sign * dr
            cc += sign * dc
    return run, span


def _has_playable_win(cells, disc: int, rows: int, cols: int) -> bool:
    for c in range(cols):
        for r in range(rows - 1, -1, -1):
            if cells[r][c] == Disc.EMPTY:
                if check_n_in_row(cells, r, c, disc, n=CONNECT_LENGTH):
                    return True
                break
    return False


class MoveEvaluation(NamedTuple):
    column: int
    score: int


def evaluate_move(
    board: Board,
    column: int,
    player: Disc,
    opponent: Disc,
    weights: EvaluationWeights = DEFAULT_WEIGHTS,
) -> int:
    """Evaluate the board after ``player`` drops a disc into ``column``."""
    return evaluate_board(apply_move(board, column, player), player, opponent, weights)


def move_evaluations(
    board: Board,
    player: Disc,
    opponent: Disc,
    weights: EvaluationWeights = DEFAULT_WEIGHTS,
) -> List[MoveEvaluation]:
    """One-ply scores of every legal column, best first (ties left to right)."""
    evaluations = [
        MoveEvaluation(column, evaluate_move(board, column, player, opponent, weights))
        for column in legal_columns(board)
    ]
    evaluations.sort(key=lambda item: item.score, reverse=True)
    return evaluations


def position_strength(
    board: Board,
    player: Disc,
    opponent: Disc,
    weights: EvaluationWeights = DEFAULT_WEIGHTS,
) -> float:
    """Score normalized to [-1, 1]."""
    score = evaluate_board(board, player, opponent, weights)
    return max(-1.0, min(1.0, score / (2 * weights.win)))


def is_forced_win(
    board: Board,
    column: int,
    player: Disc,
    opponent: Disc,
    depth: int = 1,
) -> bool:
    """
    True if playing ``column`` wins now, or forces a win within ``depth`` replies.

    A forced win means every opponent reply (none of which may win for the
    opponent) leaves ``player`` a column that is itself a forced win one level
    shallower.
    """
    if not is_legal_move(board, column):
        return False
    after = apply_move(board, column, player)
    row, col = after.last_move
    if check_n_in_row(after.grid, row, col, player, n=CONNECT_LENGTH):
        return True
    if depth <= 0:
        return False
    replies = legal_columns(after)
    if not replies:
        return False
    for reply in replies:
        reply_board = apply_move(after, reply, opponent)
        r, c = reply_board.last_move
        if check_n_in_row(reply_board.grid, r, c, opponent, n=CONNECT_LENGTH):
            return False
        if depth == 1:
            if not winning_columns(reply_board, player):
                return False
        elif not any(
            is_forced_win(reply_board, follow_up, player, opponent, depth - 1)
            for follow_up in legal_columns(reply_board)
        ):
            return False
    return True


class HeuristicValueFn(BoardValueFn):
    """Evaluates Connect4 positions with :func:`evaluate_board`."""

    def __init__(self, weights: Optional[EvaluationWeights] = None) -> None:
        self.weights = weights or DEFAULT_WEIGHTS

    def evaluate(self, board: Board, player: Disc, opponent: Disc) -> int:
        return evaluate_board(board, player, opponent, self.weights)

    @property
    def win_score(self) -> int:
        return self.weights.win
