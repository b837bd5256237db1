"""
Oriented-grid shortest paths with multi-optimal-path reconstruction.
Two-phase algorithm: solve (relaxation over (position, facing) states) ->
reconstruct (backward closure over every equally-cheap predecessor).
"""

from __future__ import annotations

import heapq
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from itertools import count, pairwise
from typing import Iterable, Iterator, Sequence

from grid_parser import Maze
from grid_types import Direction, Grid, MazeError, OutOfBounds, Position

logger = logging.getLogger(__name__)

FORWARD_COST = 1
TURN_COST = 1000

START_FACING = Direction.E


class InvalidTransition(MazeError, ValueError):
    """Cost requested between two states that are not neighbours."""


class Unreachable(MazeError):
    """None of the terminal states was reached from the start."""


class QueueStrategy(Enum):
    """Worklist discipline used by solve()."""

    FIFO = "fifo"  # Plain queue, states reopened whenever their cost improves
    PRIORITY = "priority"  # Binary heap keyed by cost


@dataclass(frozen=True)
class RuleSet:
    """Rules governing solver behavior."""

    strategy: QueueStrategy = QueueStrategy.FIFO


# =============================================================================
# Data Structures: Search State
# =============================================================================


@dataclass(frozen=True)
class State:
    """A reindeer on a tile, facing one of the four directions."""

    position: Position
    facing: Direction

    def step(self) -> State:
        return State(self.position.step(self.facing), self.facing)

    def rotate_cw(self) -> State:
        return State(self.position, self.facing.rotate_cw())

    def rotate_ccw(self) -> State:
        return State(self.position, self.facing.rotate_ccw())

    def neighbors(self) -> tuple[State, State, State]:
        """Forward step, then both rotations. No bounds or wall checks."""
        return (self.step(), self.rotate_cw(), self.rotate_ccw())


@dataclass(frozen=True)
class DistanceRecord:
    """Best known cost to a state and every predecessor achieving it."""

    cost: int
    predecessors: frozenset[State]


DistanceMap = dict[State, DistanceRecord]


@dataclass(frozen=True)
class RaceResult:
    """Minimum cost to the end and the tiles on any path achieving it."""

    best_cost: int
    positions: frozenset[Position]

    @property
    def position_count(self) -> int:
        return len(self.positions)


# =============================================================================
# Costs
# =============================================================================


def cost(from_state: State, to_state: State) -> int:
    """
    Edge weight between two neighbouring states.

    Moving forward costs FORWARD_COST, rotating either way costs TURN_COST.

    Raises:
        InvalidTransition: If to_state is not one of from_state's neighbours
    """
    if from_state.step() == to_state:
        return FORWARD_COST
    if to_state in (from_state.rotate_cw(), from_state.rotate_ccw()):
        return TURN_COST
    raise InvalidTransition(f"Cannot reach {to_state} from {from_state}")


def route_cost(route: Sequence[State]) -> int:
    """Total cost of an explicit route, one neighbouring state after another."""
    return sum(cost(a, b) for a, b in pairwise(route))


# =============================================================================
# Phase 1: Solve
# =============================================================================


def solve(grid: Grid, start: State, rules: RuleSet = RuleSet()) -> DistanceMap:
    """
    Compute the minimum cost and all optimal predecessors of every reachable state.

    States are only recorded on open tiles: a neighbour that lands on a wall or
    off the grid is pruned before it is relaxed.

    Relaxation of a neighbour `nxt` reached from `current`:
    - strictly cheaper: replace its record with {current} and reopen it
    - equally cheap: add current to its predecessor set
    - more expensive: ignore

    Args:
        grid: The maze grid
        start: Initial state, recorded with cost 0 and no predecessors
        rules: Solver configuration (worklist strategy)

    Returns:
        DistanceMap from every reachable state to its DistanceRecord

    Raises:
        OutOfBounds: If the start position lies outside the grid
    """
    if not grid.in_bounds(start.position):
        raise OutOfBounds(
            f"Start ({start.position.row}, {start.position.col}) is outside "
            f"the {grid.rows}x{grid.cols} grid"
        )

    costs: dict[State, int] = {start: 0}
    predecessors: dict[State, set[State]] = {start: set()}
    finalized: set[State] = set()
    pops = 0
    reopened = 0

    def relax(current: State) -> Iterator[tuple[State, int, bool]]:
        """Relax every open neighbour of current, yielding (state, cost, improved)."""
        nonlocal reopened
        cost_here = costs[current]
        for nxt in current.neighbors():
            if not grid.is_open(nxt.position):
                continue

            candidate = cost_here + cost(current, nxt)
            previous = costs.get(nxt)

            if previous is None or candidate < previous:
                costs[nxt] = candidate
                predecessors[nxt] = {current}
                if nxt in finalized:
                    finalized.discard(nxt)
                    reopened += 1
                    logger.debug("solve: reopened %s (%s -> %d)", nxt, previous, candidate)
                yield nxt, candidate, True
            else:
                if candidate == previous:
                    predecessors[nxt].add(current)
                yield nxt, candidate, False

    if rules.strategy is QueueStrategy.FIFO:
        queue: deque[State] = deque([start])
        while queue:
            current = queue.popleft()
            pops += 1
            if current in finalized:
                continue
            finalized.add(current)
            for nxt, _, _ in relax(current):
                # Duplicates are absorbed by the finalized check above
                queue.append(nxt)
    else:
        tie_breaker = count()
        heap: list[tuple[int, int, State]] = [(0, next(tie_breaker), start)]
        while heap:
            _, _, current = heapq.heappop(heap)
            pops += 1
            if current in finalized:
                continue
            finalized.add(current)
            for nxt, candidate, improved in relax(current):
                if improved:
                    heapq.heappush(heap, (candidate, next(tie_breaker), nxt))

    logger.info(
        "solve: strategy=%s, states=%d, pops=%d, reopened=%d",
        rules.strategy.value,
        len(costs),
        pops,
        reopened,
    )
    return {
        state: DistanceRecord(state_cost, frozenset(predecessors[state]))
        for state, state_cost in costs.items()
    }


# =============================================================================
# Phase 2: Reconstruct
# =============================================================================


def terminal_states(grid: Grid, end: Position) -> tuple[State, ...]:
    """The end tile in each of the four facings."""
    if not grid.in_bounds(end):
        raise OutOfBounds(
            f"End ({end.row}, {end.col}) is outside the {grid.rows}x{grid.cols} grid"
        )
    return tuple(State(end, facing) for facing in Direction)


def best_cost(distances: DistanceMap, terminals: Iterable[State]) -> int:
    """
    Minimum recorded cost over the terminal states.

    Raises:
        Unreachable: If no terminal state has a record
    """
    reached = [distances[t].cost for t in terminals if t in distances]
    if not reached:
        raise Unreachable("No terminal state is reachable from the start")
    return min(reached)


def trace_optimal_positions(distances: DistanceMap, terminals: Iterable[State]) -> Iterator[Position]:
    """
    Walk backwards from the cheapest terminal states through every optimal predecessor.

    Yields each distinct position once, in the order the backward closure first
    reaches it (end first, start last).

    Raises:
        Unreachable: If no terminal state has a record
    """
    terminals = tuple(dict.fromkeys(terminals))
    target = best_cost(distances, terminals)
    seeds = [t for t in terminals if t in distances and distances[t].cost == target]
    return _walk_predecessors(distances, seeds)


def _walk_predecessors(distances: DistanceMap, seeds: list[State]) -> Iterator[Position]:
    queue: deque[State] = deque(seeds)
    expanded: set[State] = set()
    seen: set[Position] = set()

    while queue:
        current = queue.popleft()
        if current in expanded:
            continue
        expanded.add(current)

        if current.position not in seen:
            seen.add(current.position)
            yield current.position

        queue.extend(distances[current].predecessors)


def optimal_positions(
    distances: DistanceMap, terminals: Iterable[State]
) -> tuple[int, frozenset[Position]]:
    """Best cost over the terminals and every position on a path achieving it."""
    terminals = tuple(terminals)
    target = best_cost(distances, terminals)
    return target, frozenset(trace_optimal_positions(distances, terminals))


def reconstruct(distances: DistanceMap, terminals: Iterable[State]) -> tuple[int, int]:
    """Return (best_cost, number of distinct positions on any optimal path)."""
    target, positions = optimal_positions(distances, terminals)
    return target, len(positions)


def race(maze: Maze, rules: RuleSet = RuleSet()) -> RaceResult:
    """Solve a parsed maze from its start tile facing East."""
    distances = solve(maze.grid, State(maze.start, START_FACING), rules)
    target, positions = optimal_positions(distances, terminal_states(maze.grid, maze.end))
    logger.info("race: best_cost=%d, optimal tiles=%d", target, len(positions))
    return RaceResult(target, positions)
