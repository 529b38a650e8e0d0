"""CLI for analyzing a single board position."""

import logging
from typing import Literal, Optional

import tyro

from c4engine.config import EngineConfig, load_config
from c4engine.engine import EngineService, MoveRequest
from c4engine.games.connect4 import Disc, board_from_string, render_board, side_to_move, validate_board


def analyze_board(
    board: str,
    difficulty: Literal["easy", "medium", "hard"] = "hard",
    player: Optional[Literal["red", "yellow"]] = None,
    time_budget_ms: Optional[float] = None,
    config_path: Optional[str] = None,
    log_level: str = "WARNING",
):
    """
    Print the engine's move and per-column scores for a position.

    Args:
        board: 42 characters, top row first: R (red), Y (yellow), _ (empty)
        difficulty: Engine difficulty level
        player: Color to move; inferred from the disc counts if omitted
        time_budget_ms: Per-move budget; the difficulty default if omitted
        config_path: Optional YAML engine config
        log_level: Logging level for engine diagnostics
    """
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    position = board_from_string(board)
    if not validate_board(position):
        print("Warning: board violates gravity or turn order")

    color = Disc.parse(player) if player else side_to_move(position)
    config = load_config(config_path) if config_path else EngineConfig()
    service = EngineService(config)

    print(render_board(position))
    print()
    print(f"To move: {color.name.lower()}")

    analysis = service.quick_analysis(position, color, color.opponent, difficulty)
    print("One-ply scores:")
    for evaluation in analysis.move_evaluations:
        print(f"  column {evaluation.column}: {evaluation.score}")

    response = service.choose_move(
        MoveRequest(
            board=position,
            player_color=color,
            opponent_color=color.opponent,
            difficulty=difficulty,
            time_budget_ms=time_budget_ms,
        )
    )
    print("=" * 50)
    print(f"Best move: {response.move}")
    print(f"Score: {response.score}  Confidence: {response.confidence:.2f}")
    print(f"Thinking time: {response.thinking_time_ms:.1f} ms")
    if response.stats is not None:
        stats = response.stats
        print(
            f"Depth {stats.search_depth}, {stats.nodes_evaluated} nodes, "
            f"{stats.pruning_count} cutoffs ({stats.pruning_efficiency:.1%})"
        )
    if response.explanation:
        print(response.explanation)


def main() -> None:
    tyro.cli(analyze_board)


if __name__ == "__main__":
    main()
