"""
Job Guess CLI - Command-line interface for the engine.

Usage:
    jobguess play [--catalog FILE]     Play a session in the terminal
    jobguess catalog [--reveal]        Show the job catalog
    jobguess serve [--port 8000]       Run the REST API

Settings not given as flags come from JOBGUESS_* environment variables.
"""

import argparse
import sys
from typing import Iterable, TextIO

from .config import GameConfig, setup_logging


PLAY_HELP = """Commands:
  up N / down N          Vote on the description ranked N
  add NAME: TEXT         Submit a description
  del N                  Delete the description ranked N
  next / prev            Move between questions
  start / pause / reset  Control the timer
  tick [K]               Let K seconds pass (default 1)
  restart                Back to question 1
  results                Show the results board
  help / quit"""


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Job Guess - Guess the job from crowd-written descriptions",
        prog="jobguess",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable DEBUG logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a session in the terminal")
    play_parser.add_argument("--catalog", help="Path to a JSON job catalog")
    play_parser.add_argument("--timer", type=int, help="Seconds per question")
    play_parser.add_argument(
        "--expiry", choices=["hold", "stop", "advance"], help="What happens when time runs out"
    )

    # Catalog command
    catalog_parser = subparsers.add_parser("catalog", help="Show the job catalog")
    catalog_parser.add_argument("--catalog", help="Path to a JSON job catalog")
    catalog_parser.add_argument("--reveal", action="store_true", help="Show job titles")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port")

    args = parser.parse_args(argv)

    try:
        config = GameConfig()
    except ValueError as e:
        print(f"Error: Invalid configuration: {e}")
        sys.exit(1)
    setup_logging("DEBUG" if args.verbose else config.log_level)

    if args.command == "play":
        return cmd_play(args, config)
    elif args.command == "catalog":
        return cmd_catalog(args, config)
    elif args.command == "serve":
        return cmd_serve(args, config)
    else:
        parser.print_help()
        sys.exit(1)


def _apply_overrides(args, config: GameConfig) -> GameConfig:
    overrides = {}
    if getattr(args, "catalog", None) is not None:
        overrides["catalog_path"] = args.catalog
    if getattr(args, "timer", None) is not None:
        overrides["timer_seconds"] = args.timer
    if getattr(args, "expiry", None) is not None:
        overrides["timer_expiry"] = args.expiry
    if not overrides:
        return config
    return GameConfig(**{**config.model_dump(), **overrides})


def cmd_catalog(args, config: GameConfig):
    """Show the job catalog."""
    from .session import SessionManager

    try:
        config = _apply_overrides(args, config)
        catalog = SessionManager(config).default_catalog()
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"{len(catalog)} jobs")
    for position, job in enumerate(catalog, start=1):
        title = job.title if args.reveal else "???"
        print(f"\n{position}. {title} ({job.count} descriptions)")
        for d in job.ranked_view():
            print(f"   [{d.votes:+d}] {d.text} - {d.contributor}")


def cmd_serve(args, config: GameConfig):
    """Run the REST API with uvicorn."""
    import uvicorn
    from .api import create_app

    app = create_app(config=config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=config.log_level.lower())


def cmd_play(args, config: GameConfig, stdin: TextIO = None, out: TextIO = None):
    """Play a session in the terminal."""
    from .session import SessionManager, GameController

    try:
        config = _apply_overrides(args, config)
        session = SessionManager(config).create_session()
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    controller = GameController(session)
    lines = stdin if stdin is not None else _prompt_lines()
    run_interactive(controller, lines, out or sys.stdout)


def _prompt_lines():
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def run_interactive(controller, lines: Iterable[str], out: TextIO) -> None:
    """
    Read commands line by line and print the session after each one.

    Stops at 'quit' or when lines run out.
    """
    print(PLAY_HELP, file=out)
    render_snapshot(controller.snapshot(), out)

    for line in lines:
        command, _, rest = line.strip().partition(" ")
        command = command.lower()
        if not command:
            continue
        if command in ("quit", "exit"):
            break
        if command == "help":
            print(PLAY_HELP, file=out)
            continue
        if command == "results":
            render_results(controller.results(), out)
            continue

        try:
            result = _run_command(controller, command, rest.strip())
        except ValueError as e:
            print(f"! {e}", file=out)
            continue

        if result is None:
            print(f"! Unknown command: {command} (try 'help')", file=out)
            continue
        if not result.success:
            print(f"! {result.error}", file=out)
        for change in result.state_changes:
            print(f"* {change}", file=out)
        render_snapshot(controller.snapshot(), out)


def _run_command(controller, command: str, rest: str):
    """Map a terminal command to a controller call."""
    snapshot = controller.snapshot()
    job = snapshot.current_job

    def ranked_id(arg: str) -> str:
        if job is None or not arg.isdigit():
            raise ValueError("Give the rank number of a description")
        position = int(arg)
        if position < 1 or position > len(job.descriptions):
            raise ValueError(f"No description ranked {position}")
        return job.descriptions[position - 1].description_id

    if command in ("up", "down"):
        description_id = ranked_id(rest)
        return controller.vote(job.job_id, description_id, command)
    if command == "del":
        description_id = ranked_id(rest)
        return controller.delete_description(job.job_id, description_id)
    if command == "add":
        if job is None:
            raise ValueError("No job to add to")
        contributor, _, text = rest.partition(":")
        return controller.add_description(job.job_id, text.strip(), contributor.strip())
    if command == "tick":
        count = max(1, int(rest)) if rest.isdigit() else 1
        result = None
        for _ in range(count):
            result = controller.tick()
        return result

    simple = {
        "next": controller.next_question,
        "prev": controller.previous_question,
        "start": controller.start_timer,
        "pause": controller.pause_timer,
        "reset": controller.reset_timer,
        "restart": controller.restart,
    }
    handler = simple.get(command)
    return handler() if handler else None


def render_snapshot(snapshot, out: TextIO) -> None:
    """Print the guess view, or the results board once complete."""
    if snapshot.is_complete:
        render_results(snapshot.results, out)
        print("Type 'restart' to play again.", file=out)
        return

    timer = snapshot.timer
    state = "running" if timer.is_running else "paused"
    print(
        f"\nQuestion {snapshot.question_number} of {snapshot.total_questions}"
        f"  |  {timer.remaining_seconds}s ({state})",
        file=out,
    )
    job = snapshot.current_job
    if job is None or not job.descriptions:
        print("No descriptions yet. Be the first to add one!", file=out)
        return
    for d in job.descriptions:
        print(f"  {d.rank}. [{d.votes:+d}] {d.text} - {d.contributor}", file=out)


def render_results(results, out: TextIO) -> None:
    if not results:
        print("No results until the last question is done.", file=out)
        return
    print("\nResults", file=out)
    for result in results:
        print(f"\n{result.title}", file=out)
        for d in result.descriptions:
            print(f"  {d.rank}. [{d.votes:+d}] {d.text} - {d.contributor}", file=out)


if __name__ == "__main__":
    main()
