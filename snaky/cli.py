"""Command line launcher for the snake game."""

import argparse
import asyncio
import logging
import random
import sys
from typing import Optional

from .constants import DEFAULT_SPEED, GRID_H, GRID_W, MIN_GRID_H, MIN_GRID_W, WEB_HOST, WEB_PORT
from .game import Game
from .models import Speed

logger = logging.getLogger(__name__)

USAGE_EXAMPLE = "snaky -x 30 -y 15 -s fast"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snaky",
        description="Snake game in the terminal.",
        epilog=f"example: {USAGE_EXAMPLE}",
    )
    parser.add_argument(
        "-x", type=int, default=GRID_W, dest="width",
        help=f"grid width, default: {GRID_W} (minimum {MIN_GRID_W})",
    )
    parser.add_argument(
        "-y", type=int, default=GRID_H, dest="height",
        help=f"grid height, default: {GRID_H} (minimum {MIN_GRID_H})",
    )
    parser.add_argument(
        "-s", default=DEFAULT_SPEED, dest="speed",
        help=f"game speed: slow, medium or fast, default: {DEFAULT_SPEED}",
    )
    parser.add_argument(
        "--ui", choices=("terminal", "web"), default="terminal",
        help="play in the terminal or in a browser",
    )
    parser.add_argument("--host", default=WEB_HOST, help="web ui host")
    parser.add_argument("--port", type=int, default=WEB_PORT, help="web ui port")
    parser.add_argument("--seed", type=int, default=None, help="seed for food placement")
    parser.add_argument("--log-file", default=None, help="write logs to this file")
    parser.add_argument("--log-level", default="WARNING", help="logging level")
    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    args = build_parser().parse_args(argv)
    args.width = max(args.width, MIN_GRID_W)
    args.height = max(args.height, MIN_GRID_H)
    args.speed = Speed.parse(args.speed)
    return args


def setup_logging(args: argparse.Namespace):
    level = getattr(logging, str(args.log_level).upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        filename=args.log_file,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def make_rng(args: argparse.Namespace) -> random.Random:
    return random.Random(args.seed)


def run_terminal(args: argparse.Namespace):
    import curses

    from .terminal import TerminalRenderer

    def play(screen):
        renderer = TerminalRenderer(screen)
        game = Game(args.width, args.height, args.speed, renderer, rng=make_rng(args))
        try:
            asyncio.run(game.run())
        finally:
            renderer.close()

    curses.wrapper(play)


async def play_web(args: argparse.Namespace):
    from .web import WebRenderer

    renderer = WebRenderer()
    game = Game(args.width, args.height, args.speed, renderer, rng=make_rng(args))
    server = asyncio.create_task(renderer.serve(args.host, args.port))
    try:
        await game.run()
    finally:
        renderer.shutdown()
        await server


def run_web(args: argparse.Namespace):
    asyncio.run(play_web(args))


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args)
    logger.info(
        "starting %dx%d game at %s speed (%s ui)",
        args.width, args.height, args.speed.value, args.ui,
    )

    runner = run_web if args.ui == "web" else run_terminal
    try:
        runner(args)
    except Exception as err:
        logger.error("game stopped with an error: %s", err)
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
