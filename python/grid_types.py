"""
Shared type definitions for the maze race solver.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class MazeError(Exception):
    """Base class for failures raised by the maze race core."""


class OutOfBounds(MazeError, IndexError):
    """A referenced position lies outside the grid."""


class Direction(Enum):
    """Cardinal direction for traversal."""

    N = "N"  # Up (decreasing row)
    E = "E"  # Right (increasing col)
    S = "S"  # Down (increasing row)
    W = "W"  # Left (decreasing col)

    @property
    def delta(self) -> tuple[int, int]:
        """(row_delta, col_delta) for one step in this direction."""
        return _DELTAS[self]

    def rotate_cw(self) -> Direction:
        return _CLOCKWISE[self]

    def rotate_ccw(self) -> Direction:
        return _COUNTER_CLOCKWISE[self]

    def invert(self) -> Direction:
        return _CLOCKWISE[_CLOCKWISE[self]]


_DELTAS = {
    Direction.N: (-1, 0),
    Direction.E: (0, 1),
    Direction.S: (1, 0),
    Direction.W: (0, -1),
}

_CLOCKWISE = {
    Direction.N: Direction.E,
    Direction.E: Direction.S,
    Direction.S: Direction.W,
    Direction.W: Direction.N,
}

_COUNTER_CLOCKWISE = {after: before for before, after in _CLOCKWISE.items()}


@dataclass(frozen=True)
class Position:
    """A (row, col) location within a grid."""

    row: int
    col: int

    def step(self, direction: Direction) -> Position:
        dr, dc = direction.delta
        return Position(self.row + dr, self.col + dc)


# =============================================================================
# Grid Definition Types
# =============================================================================


@dataclass(frozen=True)
class Empty:
    """An open floor tile."""

    pass


@dataclass(frozen=True)
class Wall:
    """An impassable tile."""

    pass


Cell = Empty | Wall


@dataclass(frozen=True)
class Grid:
    """A rectangular 2D grid of cells."""

    cells: tuple[tuple[Cell, ...], ...]

    def __post_init__(self) -> None:
        if not self.cells:
            return
        cols = len(self.cells[0])
        mismatched = [(i, len(row)) for i, row in enumerate(self.cells) if len(row) != cols]
        if mismatched:
            error_msg = (
                f"Invalid grid shape\n"
                f"  Expected: {cols} columns (from row 0)\n"
                f"  Mismatched rows:\n"
            )
            for row_idx, actual_cols in mismatched:
                error_msg += f"    Row {row_idx}: {actual_cols} columns\n"
            error_msg += "  All rows must have the same number of cells"
            raise ValueError(error_msg)

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def get(self, pos: Position) -> Cell:
        """Return the cell at pos, raising OutOfBounds outside the grid."""
        if not self.in_bounds(pos):
            raise OutOfBounds(
                f"Position ({pos.row}, {pos.col}) is outside the {self.rows}x{self.cols} grid"
            )
        return self.cells[pos.row][pos.col]

    def is_open(self, pos: Position) -> bool:
        """True if pos is inside the grid and not a wall."""
        return self.in_bounds(pos) and isinstance(self.cells[pos.row][pos.col], Empty)

    def positions(self) -> Iterator[Position]:
        """All positions in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield Position(row, col)
