"""Tests for grid_parser module."""

import pytest

from grid_parser import Maze, parse_maze, parse_maze_rows
from grid_types import Empty, Position, Wall


class TestParseMaze:
    """Tests for the puzzle input parser."""

    def test_simple_maze(self) -> None:
        """Parse a small walled maze."""
        maze = parse_maze(
            """
            #####
            #S.E#
            #####
            """
        )

        assert isinstance(maze, Maze)
        assert maze.grid.rows == 3
        assert maze.grid.cols == 5
        assert maze.start == Position(1, 1)
        assert maze.end == Position(1, 3)

    def test_cell_kinds(self) -> None:
        """Walls become Wall, floor and endpoints become Empty."""
        maze = parse_maze("#S\n.E")
        assert isinstance(maze.grid.cells[0][0], Wall)
        assert isinstance(maze.grid.cells[0][1], Empty)
        assert isinstance(maze.grid.cells[1][0], Empty)
        assert isinstance(maze.grid.cells[1][1], Empty)

    def test_blank_lines_ignored(self) -> None:
        """Leading, trailing and interior blank lines are skipped."""
        maze = parse_maze("\n\nS.\n\n.E\n\n")
        assert maze.grid.rows == 2
        assert maze.end == Position(1, 1)

    def test_windows_line_endings(self) -> None:
        """Carriage returns are stripped with the rest of the whitespace."""
        maze = parse_maze("S.\r\n.E\r\n")
        assert (maze.grid.rows, maze.grid.cols) == (2, 2)

    def test_invalid_character(self) -> None:
        """An unknown character is reported with its row and column."""
        with pytest.raises(ValueError, match="Invalid character 'x'") as exc_info:
            parse_maze("S.\n.xE")
        assert "Row 1" in str(exc_info.value)
        assert "column 1" in str(exc_info.value)

    def test_ragged_rows(self) -> None:
        """Rows of different lengths are rejected."""
        with pytest.raises(ValueError, match="Inconsistent row lengths") as exc_info:
            parse_maze("S..\n.E")
        assert "Row 1: 2 columns" in str(exc_info.value)

    def test_missing_start(self) -> None:
        """A maze without S is rejected."""
        with pytest.raises(ValueError, match="exactly one start"):
            parse_maze("..E")

    def test_duplicate_end(self) -> None:
        """A maze with two E tiles is rejected and both are listed."""
        with pytest.raises(ValueError, match="exactly one end") as exc_info:
            parse_maze("SEE")
        assert "(0, 1), (0, 2)" in str(exc_info.value)

    def test_empty_input(self) -> None:
        """Whitespace-only input is rejected."""
        with pytest.raises(ValueError, match="Empty maze"):
            parse_maze("  \n\n ")


class TestParseMazeRows:
    """Tests for the compact | separated parser."""

    def test_rows(self) -> None:
        """Rows are separated by |."""
        maze = parse_maze_rows("S..|##.|##E")
        assert (maze.grid.rows, maze.grid.cols) == (3, 3)
        assert maze.start == Position(0, 0)
        assert maze.end == Position(2, 2)
        assert isinstance(maze.grid.cells[1][0], Wall)

    def test_single_row(self) -> None:
        """A definition without | is one row."""
        maze = parse_maze_rows("S.E")
        assert maze.grid.rows == 1
        assert maze.end == Position(0, 2)

    def test_matches_multiline(self) -> None:
        """Both formats parse the same maze identically."""
        assert parse_maze_rows("#S#|#E#") == parse_maze("#S#\n#E#")

    def test_empty_definition(self) -> None:
        """An empty definition is rejected."""
        with pytest.raises(ValueError, match="Empty maze"):
            parse_maze_rows("")
