"""CLI for playing against the engine."""

import logging
from typing import Literal, Optional

import tyro

from c4engine.config import EngineConfig, load_config
from c4engine.engine import EngineService, MoveRequest
from c4engine.games.connect4 import Connect4Game, Disc, render_board


def play_human_vs_engine(
    difficulty: Literal["easy", "medium", "hard"] = "medium",
    human_first: bool = True,
    time_budget_ms: Optional[float] = None,
    config_path: Optional[str] = None,
    show_explanations: bool = False,
    log_level: str = "WARNING",
):
    """
    Play a game against the engine.

    Args:
        difficulty: Engine difficulty level
        human_first: Whether human plays first (red, X)
        time_budget_ms: Per-move engine budget; the difficulty default if omitted
        config_path: Optional YAML engine config
        show_explanations: Print the engine's reason for each move
        log_level: Logging level for engine diagnostics
    """
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = load_config(config_path) if config_path else EngineConfig()
    service = EngineService(config)
    game = Connect4Game()

    human = Disc.RED if human_first else Disc.YELLOW

    print("=" * 50)
    print("Connect Four - Human vs Engine")
    print("=" * 50)
    print(f"Difficulty: {difficulty}")
    print(f"Human plays: {'first (X)' if human_first else 'second (O)'}")
    print("=" * 50)
    print()

    state = game.initial_state()
    while not game.is_terminal(state):
        print(render_board(state.board))
        legal_actions = list(game.legal_actions(state))

        if state.to_move == human:
            print(f"Your turn! Legal columns: {legal_actions}")
            while True:
                try:
                    action = int(input(f"Enter column (0-{state.board.columns - 1}): "))
                    if action in legal_actions:
                        break
                    print(f"Invalid column! Legal columns: {legal_actions}")
                except ValueError:
                    print("Please enter a valid number!")
        else:
            print("Engine's turn...")
            response = service.choose_move(
                MoveRequest(
                    board=state.board,
                    player_color=state.to_move,
                    opponent_color=human,
                    difficulty=difficulty,
                    time_budget_ms=time_budget_ms,
                )
            )
            action = response.move
            print(f"Engine chose column: {action} ({response.thinking_time_ms:.0f} ms)")
            if show_explanations and response.explanation:
                print(response.explanation)

        state = game.apply_action(state, action)
        print()

    print(render_board(state.board))
    if state.winner == human:
        print("You win!")
        service.record_game_result(difficulty, "loss")
    elif state.winner == 0:
        print("It's a draw!")
        service.record_game_result(difficulty, "draw")
    else:
        print("Engine wins!")
        service.record_game_result(difficulty, "win")


def main() -> None:
    tyro.cli(play_human_vs_engine)


if __name__ == "__main__":
    main()
