"""
Command processing benchmark.

Feeds the same generated command stream through the plain pipeline and
through each caching strategy, and reports throughput and cache hit rates.

    python benchmarks/processing_benchmark.py --commands 50000 --seed 7
"""

import csv
import logging
import random
import time
from dataclasses import dataclass

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from gridbot.application.cache import CachedCommandProcessor, RobotCache
from gridbot.domain.interfaces import CommandProcessorInterface
from gridbot.infrastructure.cache import InMemoryCacheBackend
from gridbot.infrastructure.sinks import CollectingOutputSink
from gridbot.runtime.bootstrap import build_processor
from gridbot.runtime.config import RobotSettings

# =============================================================================
# CONFIGURATION
# =============================================================================

DEFAULT_COMMANDS = 20_000
STRATEGIES = ("none", "state", "result", "both")
DIRECTIONS = ("NORTH", "EAST", "SOUTH", "WEST")

console = Console()
logger = logging.getLogger("processing_benchmark")


@dataclass
class BenchmarkResult:
    strategy: str
    commands: int
    seconds: float
    outputs: int
    hits: int = 0
    misses: int = 0

    @property
    def rate(self) -> float:
        return self.commands / self.seconds if self.seconds else 0.0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


def generate_commands(count: int, width: int, height: int, seed: int) -> list[str]:
    """Random command stream that starts with a valid PLACE."""
    rng = random.Random(seed)
    lines = [f"PLACE 0,0,{DIRECTIONS[0]}"]
    while len(lines) < count:
        roll = rng.random()
        if roll < 0.05:
            x, y = rng.randrange(width + 2), rng.randrange(height + 2)
            lines.append(f"PLACE {x},{y},{rng.choice(DIRECTIONS)}")
        elif roll < 0.55:
            lines.append("MOVE")
        elif roll < 0.7:
            lines.append("LEFT")
        elif roll < 0.85:
            lines.append("RIGHT")
        else:
            lines.append("REPORT")
    return lines


def run_strategy(
    strategy: str, lines: list[str], width: int, height: int, progress: Progress
) -> BenchmarkResult:
    """Time one pass of the command stream through a freshly built pipeline."""
    sink = CollectingOutputSink()
    settings = RobotSettings(
        table_width=width,
        table_height=height,
        cache_backend="none" if strategy == "none" else "memory",
        cache_strategy="state" if strategy == "none" else strategy,
    )
    cache = None if strategy == "none" else RobotCache(InMemoryCacheBackend())
    processor: CommandProcessorInterface = build_processor(
        settings, sink, robot_id="bench", cache=cache, load_plugins=False
    )

    task_id = progress.add_task(f"{strategy:>6}", total=len(lines))
    start = time.perf_counter()
    for i, line in enumerate(lines, 1):
        processor.process(line)
        if i % 1000 == 0:
            progress.advance(task_id, 1000)
    elapsed = time.perf_counter() - start
    progress.update(task_id, completed=len(lines))

    result = BenchmarkResult(strategy, len(lines), elapsed, len(sink.messages))
    if isinstance(processor, CachedCommandProcessor):
        result.hits, result.misses = processor.hits, processor.misses
    logger.debug("%s: %.3fs, %d outputs", strategy, elapsed, result.outputs)
    return result


def print_results(results: list[BenchmarkResult]) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Strategy")
    table.add_column("Commands", justify="right")
    table.add_column("Seconds", justify="right")
    table.add_column("Commands/s", justify="right")
    table.add_column("Outputs", justify="right")
    table.add_column("Hit Rate", justify="right")

    for row in results:
        table.add_row(
            row.strategy,
            str(row.commands),
            f"{row.seconds:.3f}",
            f"{row.rate:,.0f}",
            str(row.outputs),
            f"{row.hit_rate:.1%}" if row.hits or row.misses else "-",
        )

    console.print(table)


def write_csv(results: list[BenchmarkResult], path: str) -> None:
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["strategy", "commands", "seconds", "rate", "outputs", "hits", "misses"])
        for row in results:
            writer.writerow(
                [row.strategy, row.commands, f"{row.seconds:.6f}", f"{row.rate:.1f}",
                 row.outputs, row.hits, row.misses]
            )


@click.command()
@click.option("--commands", default=DEFAULT_COMMANDS, help="Number of generated commands")
@click.option("--width", default=5, help="Table width")
@click.option("--height", default=5, help="Table height")
@click.option("--seed", default=0, help="Random seed for the command stream")
@click.option(
    "--strategy",
    "strategies",
    multiple=True,
    type=click.Choice(STRATEGIES),
    help="Strategies to run (default: all)",
)
@click.option("--output", default=None, help="Optional CSV results file")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
def main(commands, width, height, seed, strategies, output, verbose):
    """Benchmark the command pipeline with and without caching."""
    handler = RichHandler(console=console, rich_tracebacks=True)
    handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.basicConfig(level=logging.DEBUG, handlers=[handler], format="%(message)s")

    lines = generate_commands(commands, width, height, seed)
    console.print(
        f"[bold]{len(lines)}[/bold] commands on a {width}x{height} table (seed {seed})"
    )

    results = []
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        for strategy in strategies or STRATEGIES:
            results.append(run_strategy(strategy, lines, width, height, progress))

    print_results(results)
    if output:
        write_csv(results, output)
        console.print(f"Results written to {output}")


if __name__ == "__main__":
    main()
