"""
Mars Rover CLI - Command-line interface for the engine.

Usage:
    marsrover run <instructions_file> [--speed N]   Run an instruction file
    marsrover serve [--host H] [--port P]           Start the REST API
"""

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Mars Rover - Rovers on a (possibly relativistic) plateau",
        prog="marsrover",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Run an instruction file")
    run_parser.add_argument("instructions_file", help="Path to instructions ('-' for stdin)")
    run_parser.add_argument("--speed", type=int, default=0, help="Observer speed")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    from .config import Settings, configure_logging
    settings = Settings.from_env()
    configure_logging(settings)

    if args.command == "run":
        return cmd_run(args, settings)
    elif args.command == "serve":
        return cmd_serve(args, settings)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_run(args, settings):
    """Parse and execute an instruction file, print final rover positions."""
    from .application import GameService, parse_instructions
    from .domain import GameError

    try:
        if args.instructions_file == "-":
            text = sys.stdin.read()
        else:
            with open(args.instructions_file, "r", encoding="utf-8") as f:
                text = f.read()
    except FileNotFoundError:
        print(f"Error: File not found: {args.instructions_file}")
        sys.exit(1)

    game = GameService()
    try:
        commands = parse_instructions(
            text,
            observer_speed=args.speed,
            name_prefix=settings.rover_name_prefix,
        )
        game.execute_all(commands)
    except GameError as e:
        logger.debug("Run aborted", exc_info=True)
        print(f"Error: {e}")
        _print_rovers(game)
        sys.exit(1)

    _print_rovers(game)


def _print_rovers(game):
    if not game.context.list_plateaus():
        return
    plateau = game.context.get_plateau()
    rovers = game.rover_service.get_all_rovers_on_plateau(plateau.plateau_id)
    for rover in rovers:
        print(f"{rover.position.abscissa} {rover.position.ordinate} {rover.orientation.value}")


def cmd_serve(args, settings):
    """Start the REST API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    from .api import create_app
    uvicorn.run(create_app(settings=settings), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
