"""
ASCII rendering for mazes and their optimal tiles.

Provides two rendering approaches:
1. Plain character grid in the puzzle's own alphabet (#, ., S, E) with O for optimal tiles
2. Bordered solution panel with the answers in the title and footer
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_parser import END_CHAR, FLOOR_CHAR, START_CHAR, WALL_CHAR, Maze
from grid_types import Position, Wall
from maze_race import RaceResult

logger = logging.getLogger(__name__)

PATH_CHAR = "O"


def _plain(s: str) -> str:
    return s


def render_maze(
    maze: Maze,
    highlight: Iterable[Position] = (),
    color: bool = False,
) -> str:
    """
    Render a maze as a character grid.

    Start and end are drawn over any highlight so both stay visible.

    Args:
        maze: The maze to render
        highlight: Positions to mark with PATH_CHAR (typically the optimal tiles)
        color: Colorize walls, path and endpoints with ANSI escapes

    Returns:
        Rows joined by newlines, without a trailing newline
    """
    return "\n".join(_render_rows(maze, frozenset(highlight), color))


def _render_rows(maze: Maze, highlight: frozenset[Position], color: bool) -> list[str]:
    colorize: dict[str, Callable[[str], str]] = {
        WALL_CHAR: chalk.blue if color else _plain,
        FLOOR_CHAR: _plain,
        PATH_CHAR: chalk.greenBright if color else _plain,
        START_CHAR: chalk.bgWhite.black if color else _plain,
        END_CHAR: chalk.bgWhite.black if color else _plain,
    }

    grid = maze.grid
    lines: list[str] = []
    for r_idx, row in enumerate(grid.cells):
        line_parts: list[str] = []
        for c_idx, cell in enumerate(row):
            pos = Position(r_idx, c_idx)
            if pos == maze.start:
                char = START_CHAR
            elif pos == maze.end:
                char = END_CHAR
            elif isinstance(cell, Wall):
                char = WALL_CHAR
            elif pos in highlight:
                char = PATH_CHAR
            else:
                char = FLOOR_CHAR
            line_parts.append(colorize[char](char))
        lines.append("".join(line_parts))
    return lines


def render_solution(maze: Maze, result: RaceResult, color: bool = False) -> str:
    """
    Render a maze with its optimal tiles inside a titled box.

    Example:
        ┌─ cost 7036 ────┐
        │###############│
        ...
        └─ 45 tiles ─────┘

    Labels that do not fit the maze width are dropped from the border.
    """
    rows = _render_rows(maze, result.positions, color)
    inner_width = maze.grid.cols
    frame = chalk.green if color else _plain

    def border(left: str, label: str, right: str) -> str:
        label = f" {label} "
        if len(label) + 2 > inner_width:
            return left + "─" * inner_width + right
        return left + "─" + label + "─" * (inner_width - len(label) - 1) + right

    lines = [frame(border("┌", f"cost {result.best_cost}", "┐"))]
    lines.extend(frame("│") + row + frame("│") for row in rows)
    lines.append(frame(border("└", f"{result.position_count} tiles", "┘")))

    logger.debug("render_solution: %dx%d maze, %d highlighted", maze.grid.rows, inner_width, result.position_count)
    return "\n".join(lines)
