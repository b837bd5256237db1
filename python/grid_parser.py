"""
Maze parsing utilities.

Provides two parsing formats:
1. Puzzle input format with one row per line
2. Compact format with rows separated by |
"""

from __future__ import annotations

from dataclasses import dataclass

from grid_types import Cell, Empty, Grid, Position, Wall

__all__ = ["Maze", "parse_maze", "parse_maze_rows"]

WALL_CHAR = "#"
FLOOR_CHAR = "."
START_CHAR = "S"
END_CHAR = "E"


@dataclass(frozen=True)
class Maze:
    """A parsed maze: the grid plus its unique start and end tiles."""

    grid: Grid
    start: Position
    end: Position


def parse_maze(text: str) -> Maze:
    """
    Parse a maze from puzzle input text.

    Format:
    - One row per line; blank lines and surrounding whitespace are ignored
    - Cell characters:
      * '#': Wall
      * '.': Empty
      * 'S': Empty, the start tile (exactly one)
      * 'E': Empty, the end tile (exactly one)

    Example:
        \"\"\"
        #####
        #S.E#
        #####
        \"\"\"
        Creates a 3x5 grid with start (1, 1) and end (1, 3).

    Args:
        text: The raw puzzle input

    Returns:
        Maze with the parsed grid, start and end

    Raises:
        ValueError: If the text contains an invalid character, ragged rows,
            or not exactly one start and one end
    """
    lines = [line.strip() for line in text.splitlines()]
    return _parse_rows([line for line in lines if line])


def parse_maze_rows(definition: str) -> Maze:
    """
    Parse a maze from the compact single-line format.

    Rows are separated by |, cells use the same characters as parse_maze.

    Example:
        "S..|##.|##E"
        Creates a 3x3 grid with start (0, 0) and end (2, 2).
    """
    return _parse_rows([row.strip() for row in definition.strip().split("|")])


def _parse_rows(row_strings: list[str]) -> Maze:
    if not row_strings or not any(row_strings):
        raise ValueError("Empty maze definition")

    rows: list[tuple[Cell, ...]] = []
    starts: list[Position] = []
    ends: list[Position] = []

    for row_idx, row_str in enumerate(row_strings):
        cells: list[Cell] = []
        for col_idx, char in enumerate(row_str):
            if char == WALL_CHAR:
                cells.append(Wall())
                continue
            if char not in (FLOOR_CHAR, START_CHAR, END_CHAR):
                raise ValueError(
                    f"Invalid character '{char}' in maze\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid characters: '#' (wall), '.' (floor), 'S' (start), 'E' (end)"
                )
            cells.append(Empty())
            if char == START_CHAR:
                starts.append(Position(row_idx, col_idx))
            elif char == END_CHAR:
                ends.append(Position(row_idx, col_idx))
        rows.append(tuple(cells))

    # Validate all rows have same length
    cols = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in maze\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    start = _single_marker(starts, START_CHAR, "start")
    end = _single_marker(ends, END_CHAR, "end")
    return Maze(Grid(tuple(rows)), start, end)


def _single_marker(found: list[Position], char: str, name: str) -> Position:
    if len(found) != 1:
        locations = ", ".join(f"({p.row}, {p.col})" for p in found) or "none"
        raise ValueError(
            f"Expected exactly one {name} tile '{char}', found {len(found)}\n"
            f"  Locations: {locations}"
        )
    return found[0]
