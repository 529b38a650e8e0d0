"""CLI for playing engine vs engine."""

import logging
from typing import Literal, Optional

import tyro

from c4engine.config import EngineConfig, load_config
from c4engine.engine import EngineService, MoveResponse
from c4engine.games.connect4 import GameState, render_board
from c4engine.utils.match import play_match


def play_engine_vs_engine(
    red_difficulty: Literal["easy", "medium", "hard"] = "hard",
    yellow_difficulty: Literal["easy", "medium", "hard"] = "medium",
    num_games: int = 1,
    time_budget_ms: Optional[float] = None,
    config_path: Optional[str] = None,
    render: bool = True,
    log_level: str = "WARNING",
):
    """
    Play engine vs engine games.

    Args:
        red_difficulty: Difficulty of red (moves first)
        yellow_difficulty: Difficulty of yellow
        num_games: Number of games to play
        time_budget_ms: Per-move budget for both sides; difficulty defaults if omitted
        config_path: Optional YAML engine config
        render: Whether to render every move
        log_level: Logging level for engine diagnostics
    """
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = load_config(config_path) if config_path else EngineConfig()
    red_service = EngineService(config)
    yellow_service = EngineService(config)

    print("=" * 50)
    print("Connect Four - Engine vs Engine")
    print("=" * 50)
    print(f"Red: {red_difficulty}")
    print(f"Yellow: {yellow_difficulty}")
    print(f"Games: {num_games}")
    print("=" * 50)
    print()

    def show(state: GameState, response: MoveResponse) -> None:
        mover = state.moves[-1].color.name.lower()
        print(f"{mover} plays column {response.move} ({response.thinking_time_ms:.0f} ms)")
        print(render_board(state.board))
        print()

    red_wins, draws, yellow_wins = play_match(
        red_service,
        yellow_service,
        red_difficulty,
        yellow_difficulty,
        num_games=num_games,
        time_budget_ms=time_budget_ms,
        on_move=show if render else None,
    )

    red_stats = red_service.performance_stats(red_difficulty)
    yellow_stats = yellow_service.performance_stats(yellow_difficulty)

    print("=" * 50)
    print("Results Summary")
    print("=" * 50)
    print(f"Red wins: {red_wins} ({red_wins/num_games*100:.1f}%)")
    print(f"Yellow wins: {yellow_wins} ({yellow_wins/num_games*100:.1f}%)")
    print(f"Draws: {draws} ({draws/num_games*100:.1f}%)")
    print(f"Red avg think time: {red_stats.average_think_time_ms:.1f} ms")
    print(f"Yellow avg think time: {yellow_stats.average_think_time_ms:.1f} ms")
    print("=" * 50)


def main() -> None:
    tyro.cli(play_engine_vs_engine)


if __name__ == "__main__":
    main()
