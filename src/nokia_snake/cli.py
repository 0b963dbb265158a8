"""Command-line tools for Nokia Snake."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nokia_snake.config import GameConfig

logger = logging.getLogger(__name__)

DEFAULT_STORE = Path("~/.nokia_snake/high_score.json")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nokia-snake",
        description="Nokia Snake headless simulation and maintenance tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play random games headlessly.",
    )
    sim_p.add_argument("--games", type=int, default=10)
    sim_p.add_argument("--max-frames", type=int, default=2_000)
    sim_p.add_argument("--seed", type=int, default=0)
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON game config file.",
    )
    sim_p.add_argument(
        "--store", type=str, default=None,
        help="High-score JSON file to read and update.",
    )
    sim_p.add_argument(
        "--show", action="store_true",
        help="Print the final board after the run.",
    )

    # --- high-score ---
    hs_p = sub.add_parser("high-score", help="Show or reset the high score.")
    hs_p.add_argument("--store", type=str, default=str(DEFAULT_STORE))
    hs_p.add_argument("--reset", action="store_true")

    # --- config ---
    cfg_p = sub.add_parser("config", help="Print a game config as JSON.")
    cfg_p.add_argument(
        "--config", type=str, default=None,
        help="Config file to validate and print instead of the defaults.",
    )
    cfg_p.add_argument(
        "--output", type=str, default=None,
        help="Write the config here instead of printing it.",
    )

    return parser


def _load_config(path: str | None) -> GameConfig | None:
    """Load *path* (or the defaults); report a bad file and return None."""
    from nokia_snake.config import GameConfig

    if not path:
        return GameConfig()
    try:
        return GameConfig.load(path)
    except (OSError, TypeError, ValueError) as exc:
        print(f"invalid config {path}: {exc}", file=sys.stderr)  # noqa: T201
        return None


def _run_simulate(args: argparse.Namespace) -> int:
    from nokia_snake.persistence import JsonHighScoreStore
    from nokia_snake.render import render_text
    from nokia_snake.simulate import simulate

    if args.games < 1:
        print("--games must be at least 1", file=sys.stderr)  # noqa: T201
        return 2

    config = _load_config(args.config)
    if config is None:
        return 2

    store = JsonHighScoreStore(args.store) if args.store else None
    result, game = simulate(
        config,
        games=args.games,
        max_frames=args.max_frames,
        seed=args.seed,
        store=store,
    )
    print(result.summary())  # noqa: T201
    if args.show:
        print(render_text(game.snapshot(), game.grid))  # noqa: T201
    return 0


def _run_high_score(args: argparse.Namespace) -> int:
    from nokia_snake.persistence import JsonHighScoreStore

    store = JsonHighScoreStore(args.store)
    if args.reset:
        store.save(0)
        logger.info("High score reset in %s", store.path)
    print(f"High score: {store.load()}")  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    config = _load_config(args.config)
    if config is None:
        return 2
    if args.output:
        config.save(args.output)
    else:
        print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``nokia-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "high-score": _run_high_score,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
