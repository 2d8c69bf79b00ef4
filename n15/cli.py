"""
n15 CLI - Command-line interface for the game server.

Usage:
    n15 serve [--host H] [--port P]   Run the TCP game server
    n15 play                          Play one game on this terminal
"""

import argparse
import asyncio
import random
import sys

from pydantic import ValidationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="n15 - Number 15 game server",
        prog="n15",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the TCP game server")
    serve_parser.add_argument("--host", help="Listen address (default 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, help="Listen port (default 10015)")
    serve_parser.add_argument("--policy", choices=["heuristic", "random"], help="Machine opponent")
    serve_parser.add_argument("--seed", type=int, help="Seed for reproducible games")
    serve_parser.add_argument("--log-level", dest="log_level", help="Log level (default INFO)")
    serve_parser.add_argument(
        "--api", dest="api_enabled", action="store_true", default=None,
        help="Also serve the HTTP status API",
    )
    serve_parser.add_argument("--api-port", dest="api_port", type=int, help="Status API port")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play one game on this terminal")
    play_parser.add_argument("--policy", choices=["heuristic", "random"], default="heuristic")
    play_parser.add_argument("--seed", type=int, help="Seed for reproducible games")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "play":
        cmd_play(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the game server until interrupted."""
    from .config import ServerConfig, configure_logging
    from .server import run_server

    try:
        config = ServerConfig.from_env(
            host=args.host,
            port=args.port,
            policy=args.policy,
            seed=args.seed,
            log_level=args.log_level,
            api_enabled=args.api_enabled,
            api_port=args.api_port,
        )
    except ValidationError as e:
        print(f"Error: invalid configuration\n{e}", file=sys.stderr)
        sys.exit(2)

    configure_logging(config.log_level)
    try:
        asyncio.run(run_server(config))
    except KeyboardInterrupt:
        pass


def cmd_play(args):
    """Play a single game against the machine on stdin/stdout."""
    from .bots import create_policy
    from .config import configure_logging
    from .session import GameSession, ConsoleLineReader, ConsoleLineWriter, ConnectionClosed

    configure_logging("WARNING")
    rng = random.Random(args.seed)
    game = GameSession(
        ConsoleLineReader(),
        ConsoleLineWriter(),
        rng=rng,
        policy=create_policy(args.policy, rng=rng),
    )
    try:
        asyncio.run(game.run())
    except (KeyboardInterrupt, ConnectionClosed):
        print()
        sys.exit(1)


if __name__ == "__main__":
    main()
