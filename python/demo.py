"""
Command-line entry point for the maze race solver.
Reads a puzzle input, prints both answers and optionally draws the optimal tiles.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_maze, render_solution
from grid_parser import Maze, parse_maze
from grid_types import MazeError, Position
from maze_race import (
    START_FACING,
    QueueStrategy,
    RaceResult,
    RuleSet,
    State,
    race,
    solve,
    terminal_states,
    trace_optimal_positions,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemoConfig:
    """Presentation toggles for the command line. Never seen by the solver."""

    show: bool = False
    color: bool = False
    animate_delay: float = 0.0
    strategy: QueueStrategy = QueueStrategy.FIFO
    verbose: bool = False


def parse_args(argv: list[str] | None = None) -> tuple[Path, DemoConfig]:
    parser = argparse.ArgumentParser(
        prog="maze-race",
        description="Find the cheapest reindeer route through a maze and count the tiles on any cheapest route.",
    )
    parser.add_argument("input", type=Path, help="puzzle input file")
    parser.add_argument("--show", action="store_true", help="draw the maze with the optimal tiles marked")
    parser.add_argument("--color", action="store_true", help="colorize the drawing")
    parser.add_argument(
        "--animate",
        type=float,
        default=0.0,
        metavar="SECONDS",
        help="reveal the optimal tiles one at a time with this delay",
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in QueueStrategy],
        default=QueueStrategy.FIFO.value,
        help="worklist used by the solver (default: fifo)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    if args.animate < 0:
        parser.error("--animate must not be negative")

    config = DemoConfig(
        show=args.show,
        color=args.color,
        animate_delay=args.animate,
        strategy=QueueStrategy(args.strategy),
        verbose=args.verbose,
    )
    return args.input, config


def animate(maze: Maze, config: DemoConfig, console: Console | None = None) -> list[Position]:
    """Reveal the optimal tiles in backward order, end first. Returns them in reveal order."""
    console = console or Console()
    distances = solve(maze.grid, State(maze.start, START_FACING), RuleSet(config.strategy))
    trace = trace_optimal_positions(distances, terminal_states(maze.grid, maze.end))

    revealed: list[Position] = []

    def frame() -> Panel:
        drawing = Text.from_ansi(render_maze(maze, revealed, color=config.color))
        return Panel(drawing, title="Maze Race", subtitle=f"{len(revealed)} tiles", border_style="green", expand=False)

    with Live(frame(), console=console, refresh_per_second=30) as live:
        for pos in trace:
            revealed.append(pos)
            live.update(frame())
            time.sleep(config.animate_delay)
    return revealed


def run(maze: Maze, config: DemoConfig) -> RaceResult:
    """Solve a maze and print the answers, plus any drawing the config asks for."""
    result = race(maze, RuleSet(config.strategy))

    if config.animate_delay > 0:
        animate(maze, config)
    elif config.show:
        print(render_solution(maze, result, color=config.color))

    print(f"Part 1: {result.best_cost}")
    print(f"Part 2: {result.position_count}")
    return result


def main(argv: list[str] | None = None) -> int:
    path, config = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        maze = parse_maze(path.read_text())
        logger.info("main: parsed %dx%d maze from %s", maze.grid.rows, maze.grid.cols, path)
        run(maze, config)
    except OSError as exc:
        print(f"maze-race: cannot read {path}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except MazeError as exc:
        print(f"maze-race: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        first_line = str(exc).splitlines()[0] if str(exc) else "invalid input"
        print(f"maze-race: {path}: {first_line}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
