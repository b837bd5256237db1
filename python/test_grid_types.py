"""Tests for the grid primitives."""

import pytest

from grid_types import Direction, Empty, Grid, OutOfBounds, Position, Wall


class TestDirection:
    """Tests for compass directions."""

    def test_exactly_four(self) -> None:
        """There are four directions."""
        assert len(Direction) == 4

    def test_deltas(self) -> None:
        """Each direction moves one tile along one axis."""
        assert Direction.N.delta == (-1, 0)
        assert Direction.E.delta == (0, 1)
        assert Direction.S.delta == (1, 0)
        assert Direction.W.delta == (0, -1)

    def test_clockwise_cycle(self) -> None:
        """Clockwise rotation goes N -> E -> S -> W -> N."""
        assert Direction.N.rotate_cw() == Direction.E
        assert Direction.E.rotate_cw() == Direction.S
        assert Direction.S.rotate_cw() == Direction.W
        assert Direction.W.rotate_cw() == Direction.N

    @pytest.mark.parametrize("direction", list(Direction))
    def test_rotations_are_inverse(self, direction: Direction) -> None:
        """rotate_ccw undoes rotate_cw and vice versa."""
        assert direction.rotate_cw().rotate_ccw() == direction
        assert direction.rotate_ccw().rotate_cw() == direction

    @pytest.mark.parametrize("direction", list(Direction))
    def test_invert(self, direction: Direction) -> None:
        """Inverting negates the delta and is its own inverse."""
        dr, dc = direction.delta
        assert direction.invert().delta == (-dr, -dc)
        assert direction.invert().invert() == direction


class TestPosition:
    """Tests for grid positions."""

    def test_step(self) -> None:
        """Stepping adds the direction's delta."""
        assert Position(2, 3).step(Direction.N) == Position(1, 3)
        assert Position(2, 3).step(Direction.W) == Position(2, 2)

    def test_hashable(self) -> None:
        """Equal positions are one set member."""
        assert len({Position(1, 1), Position(1, 1), Position(1, 2)}) == 2


class TestGrid:
    """Tests for the rectangular cell grid."""

    def make_grid(self) -> Grid:
        return Grid(
            (
                (Wall(), Empty(), Wall()),
                (Empty(), Empty(), Empty()),
            )
        )

    def test_dimensions(self) -> None:
        """rows and cols reflect the cell tuples."""
        grid = self.make_grid()
        assert grid.rows == 2
        assert grid.cols == 3

    def test_ragged_rows_rejected(self) -> None:
        """Construction fails unless every row has the same length."""
        with pytest.raises(ValueError, match="Row 1: 1 columns"):
            Grid(((Empty(), Empty()), (Empty(),)))

    def test_get(self) -> None:
        """get returns the stored cell."""
        grid = self.make_grid()
        assert grid.get(Position(0, 0)) == Wall()
        assert grid.get(Position(1, 2)) == Empty()

    @pytest.mark.parametrize("pos", [Position(-1, 0), Position(0, -1), Position(2, 0), Position(0, 3)])
    def test_get_out_of_bounds(self, pos: Position) -> None:
        """get outside the grid raises OutOfBounds."""
        with pytest.raises(OutOfBounds):
            self.make_grid().get(pos)

    def test_is_open(self) -> None:
        """Only in-bounds Empty cells are open."""
        grid = self.make_grid()
        assert grid.is_open(Position(0, 1))
        assert not grid.is_open(Position(0, 0))
        assert not grid.is_open(Position(-1, 1))
        assert not grid.is_open(Position(5, 5))

    def test_positions_row_major(self) -> None:
        """positions walks rows first."""
        positions = list(self.make_grid().positions())
        assert len(positions) == 6
        assert positions[:4] == [Position(0, 0), Position(0, 1), Position(0, 2), Position(1, 0)]

    def test_empty_grid(self) -> None:
        """A grid without rows has no columns."""
        grid = Grid(())
        assert (grid.rows, grid.cols) == (0, 0)
        assert not grid.in_bounds(Position(0, 0))
