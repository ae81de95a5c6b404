"""
gridbot command line interface.

    gridbot run commands.txt
    echo "PLACE 0,0,NORTH\nMOVE\nREPORT" | gridbot run
    gridbot --env-file .env run --cache memory --format json commands.txt
    gridbot cache-stats
"""

import logging
from typing import Any, TextIO

import click

from gridbot.application.cache import RobotCache, validate_cache_id
from gridbot.application.processor import process_lines
from gridbot.domain.models import ProcessSignal
from gridbot.infrastructure.sinks import CallbackOutputSink, CollectingOutputSink
from gridbot.runtime.bootstrap import build_cache, build_processor
from gridbot.runtime.config import ConfigurationError, RobotSettings
from gridbot.runtime.console import (
    console,
    print_cache_stats,
    print_commands,
    print_error,
    print_header,
    print_scenario,
    print_success,
)
from gridbot.runtime.logging_setup import setup_logging

logger = logging.getLogger(__name__)

COMMAND_DESCRIPTIONS = {
    "PLACE": "PLACE X,Y,F - Place robot at position (X,Y) facing direction F",
    "MOVE": "MOVE - Move robot one step forward",
    "LEFT": "LEFT - Turn robot 90 degrees counter-clockwise",
    "RIGHT": "RIGHT - Turn robot 90 degrees clockwise",
    "REPORT": "REPORT - Show current position and direction",
    "EXIT": "EXIT - Exit the application",
    "QUIT": "QUIT - Exit the application",
}

EXAMPLE_SCENARIOS: dict[str, dict[str, Any]] = {
    "basic_movement": {
        "name": "Basic Movement",
        "commands": ["PLACE 0,0,NORTH", "MOVE", "REPORT"],
        "description": "Place robot at origin, move north, report position",
    },
    "rotation": {
        "name": "Rotation Test",
        "commands": ["PLACE 0,0,NORTH", "LEFT", "REPORT"],
        "description": "Place robot, turn left, report direction",
    },
    "complex_sequence": {
        "name": "Complex Sequence",
        "commands": ["PLACE 1,2,EAST", "MOVE", "MOVE", "LEFT", "MOVE", "REPORT"],
        "description": "Place robot, move twice, turn left, move, report",
    },
    "edge_cases": {
        "name": "Edge Cases",
        "commands": ["MOVE", "LEFT", "REPORT", "PLACE 0,0,NORTH"]
        + ["MOVE"] * 6
        + ["REPORT"],
        "description": "Test invalid commands and boundary conditions",
    },
}


def _load_settings(ctx: click.Context, **overrides: Any) -> RobotSettings:
    """Build settings from the group options, or exit with an error panel."""
    try:
        return RobotSettings.from_env(env_file=ctx.obj.get("env_file"), **overrides)
    except ConfigurationError as e:
        print_error(str(e), hint="Check ROBOT_* environment variables and --env-file")
        raise click.exceptions.Exit(1) from e


def _robot_id_option(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> str | None:
    if value is None:
        return None
    try:
        return validate_cache_id(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _require_cache(settings: RobotSettings) -> RobotCache:
    try:
        cache = build_cache(settings)
    except ConfigurationError as e:
        print_error(str(e))
        raise click.exceptions.Exit(1) from e
    if cache is None:
        print_error("Caching is disabled", hint="Set ROBOT_CACHE_BACKEND or pass --cache")
        raise click.exceptions.Exit(1)
    return cache


@click.group()
@click.option(
    "--env-file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="KEY=VALUE file with ROBOT_* settings",
)
@click.option(
    "--log-file",
    default=None,
    type=click.Path(),
    help="Path to log file",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose (DEBUG) logging to console",
)
@click.pass_context
def cli(ctx: click.Context, env_file: str | None, log_file: str | None, verbose: bool) -> None:
    """Toy robot simulator on a bounded grid."""
    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file
    settings = _load_settings(ctx)
    setup_logging(
        "gridbot",
        log_file=log_file,
        verbose=verbose or settings.debug_mode,
        level=settings.log_level,
    )


@cli.command()
@click.argument("input_file", type=click.File("r"), default="-")
@click.option("--width", type=int, default=None, help="Table width (default: 5)")
@click.option("--height", type=int, default=None, help="Table height (default: 5)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "xml", "csv", "quiet"], case_sensitive=False),
    default=None,
    help="Output format (default: text)",
)
@click.option(
    "--cache",
    "cache_backend",
    type=click.Choice(["none", "memory", "redis"], case_sensitive=False),
    default=None,
    help="Cache backend (default: none)",
)
@click.option(
    "--strategy",
    "cache_strategy",
    type=click.Choice(["state", "result", "both"], case_sensitive=False),
    default=None,
    help="What to cache: robot state, command results, or both (default: state)",
)
@click.option("--redis-url", default=None, help="Redis connection URL")
@click.option(
    "--robot-id",
    default=None,
    callback=_robot_id_option,
    help="Cache id; resumes the robot's cached state",
)
@click.option("--max-commands", type=int, default=None, help="Stop after N lines")
@click.pass_context
def run(
    ctx: click.Context,
    input_file: TextIO,
    width: int | None,
    height: int | None,
    output_format: str | None,
    cache_backend: str | None,
    cache_strategy: str | None,
    redis_url: str | None,
    robot_id: str | None,
    max_commands: int | None,
) -> None:
    """Process commands from INPUT_FILE (or stdin) until EOF or EXIT."""
    settings = _load_settings(
        ctx,
        table_width=width,
        table_height=height,
        output_format=output_format,
        cache_backend=cache_backend,
        cache_strategy=cache_strategy,
        redis_url=redis_url,
        max_commands=max_commands,
    )
    try:
        processor = build_processor(settings, CallbackOutputSink(click.echo), robot_id=robot_id)
    except ConfigurationError as e:
        print_error(str(e))
        raise click.exceptions.Exit(1) from e

    signal, count = process_lines(processor, input_file, settings.max_commands)
    logger.debug(
        "Processed %d lines (%s)",
        count,
        "terminated" if signal is ProcessSignal.TERMINATE else "end of input",
    )


@cli.command("commands")
def list_commands() -> None:
    """List the commands the parser understands."""
    processor = build_processor(RobotSettings(), CollectingOutputSink())
    print_commands(processor.available_commands(), COMMAND_DESCRIPTIONS)


@cli.command("cache-stats")
@click.option("--cache", "cache_backend", default=None, help="Cache backend override")
@click.option("--redis-url", default=None, help="Redis connection URL")
@click.pass_context
def cache_stats(ctx: click.Context, cache_backend: str | None, redis_url: str | None) -> None:
    """Show cache statistics and health."""
    settings = _load_settings(ctx, cache_backend=cache_backend, redis_url=redis_url)
    cache = _require_cache(settings)
    health = cache.health_check()
    print_cache_stats(health["stats"], health)


@cli.command("cache-clear")
@click.option(
    "--robot-id",
    default=None,
    callback=_robot_id_option,
    help="Only clear this robot's entries",
)
@click.option("--cache", "cache_backend", default=None, help="Cache backend override")
@click.option("--redis-url", default=None, help="Redis connection URL")
@click.pass_context
def cache_clear(
    ctx: click.Context,
    robot_id: str | None,
    cache_backend: str | None,
    redis_url: str | None,
) -> None:
    """Delete cached robot state and command results."""
    settings = _load_settings(ctx, cache_backend=cache_backend, redis_url=redis_url)
    cache = _require_cache(settings)
    deleted = cache.invalidate_robot(robot_id) if robot_id else cache.clear()
    print_success(f"Deleted {deleted} cache entries from '{settings.cache_namespace}'")


@cli.command()
@click.argument("names", nargs=-1)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "xml", "csv", "quiet"], case_sensitive=False),
    default="text",
    help="Output format (default: text)",
)
@click.pass_context
def scenarios(ctx: click.Context, names: tuple[str, ...], output_format: str) -> None:
    """Run the built-in example scenarios (all of them if NAMES is empty)."""
    unknown = [name for name in names if name not in EXAMPLE_SCENARIOS]
    if unknown:
        print_error(
            f"Unknown scenario: {', '.join(unknown)}",
            hint=f"Available: {', '.join(EXAMPLE_SCENARIOS)}",
        )
        raise click.exceptions.Exit(1)

    settings = _load_settings(ctx, output_format=output_format, cache_backend="none")
    print_header("Example scenarios", f"{settings.table_width}x{settings.table_height} table")
    for key in names or EXAMPLE_SCENARIOS:
        scenario = EXAMPLE_SCENARIOS[key]
        sink = CollectingOutputSink()
        processor = build_processor(settings, sink, load_plugins=False)
        process_lines(processor, scenario["commands"])
        print_scenario(scenario["name"], scenario["commands"], sink.messages)
        console.print(f"[dim]{scenario['description']}[/dim]\n")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
