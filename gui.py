# Launcher for the Snake arcade window.
from __future__ import annotations

import argparse

try:
    from .game_logic import Difficulty, SnakeConfig
    from .snake_gui import run_player_gui
    from .utils import configure_logging, default_high_score_path
except ImportError:
    from game_logic import Difficulty, SnakeConfig
    from snake_gui import run_player_gui
    from utils import configure_logging, default_high_score_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Snake.")
    parser.add_argument(
        "--difficulty",
        choices=[d.name.lower() for d in Difficulty],
        default=Difficulty.MEDIUM.name.lower(),
        help="Starting difficulty (can be changed from the menu).",
    )
    parser.add_argument("--cell-size", type=int, default=20, help="Pixels per tile.")
    parser.add_argument("--high-score-file", default=None, help="Where the best score is stored.")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ... (default: SNAKE_LOG_LEVEL or WARNING)")
    return parser


def config_from_args(args: argparse.Namespace) -> SnakeConfig:
    return SnakeConfig(
        cell_size=args.cell_size,
        difficulty=Difficulty[args.difficulty.upper()],
        high_score_path=args.high_score_file or default_high_score_path(),
    )


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    run_player_gui(config_from_args(args))


if __name__ == "__main__":
    main()
