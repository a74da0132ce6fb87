"""
Tests for the path reconstructor and the two step-wise solvers.
"""

import random

import pytest

from helpers import BLOCKED, CORRIDOR, LOOP, FixedOrder, ReversedOrder, assert_valid_path, reference_distances
from maze_race.maze import Maze
from maze_race.solvers import (
    FINISHED,
    IDLE,
    RUNNING,
    ClassicSolver,
    QuantumSolver,
    reconstruct_path,
)


def seeded(solver, maze):
    solver.seed(maze.start, maze.goal)
    return solver


def run_until_finished(solver, maze, limit=None):
    limit = limit or maze.width * maze.height
    for _ in range(limit):
        if solver.is_finished:
            break
        solver.step(maze)
    return solver


# =============================================================================
# Path reconstruction
# =============================================================================


class TestReconstructPath:
    def test_empty_map(self) -> None:
        assert reconstruct_path({}, (3, 3)) == []

    def test_undiscovered_goal(self) -> None:
        parents = {(2, 1): (1, 1)}
        assert reconstruct_path(parents, (3, 3)) == []

    def test_chain_back_to_origin(self) -> None:
        parents = {(2, 1): (1, 1), (3, 1): (2, 1), (3, 2): (3, 1), (1, 2): (1, 1)}
        assert reconstruct_path(parents, (3, 2)) == [(1, 1), (2, 1), (3, 1), (3, 2)]

    def test_single_edge(self) -> None:
        assert reconstruct_path({(2, 1): (1, 1)}, (2, 1)) == [(1, 1), (2, 1)]

    def test_does_not_modify_map(self) -> None:
        parents = {(2, 1): (1, 1)}
        reconstruct_path(parents, (2, 1))
        assert parents == {(2, 1): (1, 1)}


# =============================================================================
# Classic solver
# =============================================================================


class TestClassicSolver:
    """Stack-based, one pop per tick."""

    def test_idle_until_seeded(self) -> None:
        maze = Maze.from_rows(CORRIDOR)
        solver = ClassicSolver(rng=FixedOrder())
        assert solver.status == IDLE
        solver.step(maze)
        snap = solver.snapshot()
        assert snap.steps == 0
        assert snap.visited == frozenset()
        assert snap.frontier == ()

    def test_seed_marks_start_visited(self) -> None:
        maze = Maze.from_rows(CORRIDOR)
        solver = seeded(ClassicSolver(rng=FixedOrder()), maze)
        assert solver.status == RUNNING
        assert solver.visited == {(1, 1)}
        assert solver.stack == [(1, 1)]

    def test_straight_corridor(self) -> None:
        maze = Maze.from_rows(CORRIDOR)
        solver = run_until_finished(seeded(ClassicSolver(rng=FixedOrder()), maze), maze)
        snap = solver.snapshot()
        assert snap.is_finished
        assert snap.steps == 4  # corridor of 5 cells
        assert snap.path == ((1, 1), (2, 1), (3, 1), (4, 1), (5, 1))
        assert snap.frontier == ()
        assert solver.status == FINISHED

    def test_single_head_frontier(self) -> None:
        maze = Maze.from_rows(CORRIDOR)
        solver = seeded(ClassicSolver(rng=FixedOrder()), maze)
        solver.step(maze)
        assert solver.snapshot().frontier == ((1, 1),)
        solver.step(maze)
        assert solver.snapshot().frontier == ((2, 1),)

    def test_pops_last_pushed_first(self) -> None:
        """With N/E/S/W order on LOOP, south is pushed last and explored first."""
        maze = Maze.from_rows(LOOP)
        solver = seeded(ClassicSolver(rng=FixedOrder()), maze)
        solver.step(maze)
        assert solver.stack == [(2, 1), (1, 2)]
        solver.step(maze)
        assert solver.frontier == [(1, 2)]

    def test_shuffle_changes_order_not_outcome(self) -> None:
        maze = Maze.from_rows(LOOP)
        a = run_until_finished(seeded(ClassicSolver(rng=FixedOrder()), maze), maze)
        b = run_until_finished(seeded(ClassicSolver(rng=ReversedOrder()), maze), maze)
        assert a.is_finished and b.is_finished
        assert a.path != b.path
        assert_valid_path(maze, a.path)
        assert_valid_path(maze, b.path)

    @pytest.mark.parametrize("seed", range(8))
    def test_tick_advances_steps_by_one(self, seed) -> None:
        maze = Maze(15, rng=random.Random(seed))
        solver = seeded(ClassicSolver(rng=random.Random(seed)), maze)
        previous = solver.snapshot()
        while not solver.is_finished:
            solver.step(maze)
            current = solver.snapshot()
            if current.is_finished:
                assert current.steps == previous.steps
            else:
                assert current.steps == previous.steps + 1
            assert current.visited >= previous.visited
            previous = current

    @pytest.mark.parametrize("seed", range(8))
    def test_finished_path_is_valid(self, seed) -> None:
        maze = Maze(21, rng=random.Random(seed))
        solver = run_until_finished(seeded(ClassicSolver(rng=random.Random(seed + 100)), maze), maze)
        assert solver.is_finished
        assert_valid_path(maze, solver.path)

    def test_finished_is_idempotent(self) -> None:
        maze = Maze(11, rng=random.Random(5))
        solver = run_until_finished(seeded(ClassicSolver(rng=random.Random(5)), maze), maze)
        done = solver.snapshot()
        for _ in range(10):
            solver.step(maze)
        assert solver.snapshot() == done

    def test_unreachable_goal_stalls(self) -> None:
        maze = Maze.from_rows(BLOCKED)
        solver = seeded(ClassicSolver(rng=FixedOrder()), maze)
        for _ in range(10):
            solver.step(maze)
        snap = solver.snapshot()
        assert snap.steps == 2
        assert not snap.is_finished
        assert solver.status == RUNNING
        assert snap.path == ()

    def test_parent_written_once(self) -> None:
        maze = Maze.from_rows(LOOP)
        solver = run_until_finished(seeded(ClassicSolver(rng=FixedOrder()), maze), maze)
        # every discovered cell except the start has exactly one parent
        assert set(solver.parents) == solver.visited - {maze.start}

    def test_custom_name(self) -> None:
        assert ClassicSolver(name="Sequential").snapshot().name == "Sequential"
        assert ClassicSolver().snapshot().name == "Classic"


# =============================================================================
# Quantum solver
# =============================================================================


class TestQuantumSolver:
    """Wavefront, whole frontier per tick."""

    def test_seed_exposes_start_wave(self) -> None:
        maze = Maze.from_rows(LOOP)
        solver = seeded(QuantumSolver(), maze)
        snap = solver.snapshot()
        assert snap.frontier == ((1, 1),)
        assert snap.visited == frozenset({(1, 1)})
        assert snap.steps == 0

    def test_wave_progression_on_loop(self) -> None:
        maze = Maze.from_rows(LOOP)
        solver = seeded(QuantumSolver(), maze)
        waves = []
        for _ in range(4):
            solver.step(maze)
            waves.append(list(solver.frontier))
        assert waves == [
            [(2, 1), (1, 2)],
            [(3, 1), (1, 3)],
            [(3, 2), (2, 3)],
            [(3, 3)],
        ]

    def test_cell_claimed_by_first_wave_member(self) -> None:
        maze = Maze.from_rows(LOOP)
        solver = run_until_finished(seeded(QuantumSolver(), maze), maze)
        assert solver.parents[(3, 3)] == (3, 2)
        assert solver.path == [(1, 1), (2, 1), (3, 1), (3, 2), (3, 3)]
        assert solver.steps == 4

    def test_straight_corridor(self) -> None:
        maze = Maze.from_rows(CORRIDOR)
        solver = run_until_finished(seeded(QuantumSolver(), maze), maze)
        assert solver.steps == 4
        assert solver.path == [(1, 1), (2, 1), (3, 1), (4, 1), (5, 1)]
        assert solver.snapshot().frontier == ()

    @pytest.mark.parametrize("seed", range(10))
    def test_steps_equal_shortest_distance(self, seed) -> None:
        maze = Maze(25, rng=random.Random(seed))
        solver = run_until_finished(seeded(QuantumSolver(), maze), maze)
        assert solver.is_finished
        assert solver.steps == reference_distances(maze)[maze.goal]
        assert len(solver.path) - 1 == solver.steps
        assert_valid_path(maze, solver.path)

    @pytest.mark.parametrize("seed", range(10))
    def test_never_more_steps_than_classic(self, seed) -> None:
        maze = Maze(21, rng=random.Random(seed))
        quantum = run_until_finished(seeded(QuantumSolver(), maze), maze)
        classic = run_until_finished(seeded(ClassicSolver(rng=random.Random(seed)), maze), maze)
        assert quantum.steps <= classic.steps

    def test_no_duplicates_in_wave(self) -> None:
        maze = Maze(15, rng=random.Random(9))
        solver = seeded(QuantumSolver(), maze)
        while not solver.is_finished:
            solver.step(maze)
            assert len(set(solver.frontier)) == len(solver.frontier)

    def test_finished_is_idempotent(self) -> None:
        maze = Maze(9, rng=random.Random(2))
        solver = run_until_finished(seeded(QuantumSolver(), maze), maze)
        done = solver.snapshot()
        for _ in range(5):
            solver.step(maze)
        assert solver.snapshot() == done

    def test_unreachable_goal_runs_dry(self) -> None:
        maze = Maze.from_rows(BLOCKED)
        solver = seeded(QuantumSolver(), maze)
        for _ in range(10):
            solver.step(maze)
        assert solver.frontier == []
        assert solver.steps == 2
        assert not solver.is_finished

    def test_frontier_max_metric(self) -> None:
        maze = Maze.from_rows(LOOP)
        solver = run_until_finished(seeded(QuantumSolver(), maze), maze)
        assert solver.snapshot().frontier_max == 2


class TestNodesExpanded:
    """Both solvers count every cell they take out and examine, goal included."""

    def test_corridor_counts_match(self) -> None:
        maze = Maze.from_rows(CORRIDOR)
        classic = run_until_finished(seeded(ClassicSolver(rng=FixedOrder()), maze), maze)
        quantum = run_until_finished(seeded(QuantumSolver(), maze), maze)
        # One cell per tick plus the goal on the finishing tick
        assert classic.snapshot().nodes_expanded == 5
        assert quantum.snapshot().nodes_expanded == 5
        assert quantum.snapshot().nodes_expanded == len(quantum.path)

    def test_quantum_loop(self) -> None:
        maze = Maze.from_rows(LOOP)
        solver = run_until_finished(seeded(QuantumSolver(), maze), maze)
        # Waves of 1, 2, 2, 2 then the lone goal
        assert solver.snapshot().nodes_expanded == 8

    def test_quantum_stops_counting_at_goal(self) -> None:
        maze = Maze.from_rows([
            "#####",
            "#S..#",
            "#E###",
            "#####",
        ])
        solver = seeded(QuantumSolver(), maze)
        solver.step(maze)
        assert solver.frontier == [(2, 1), (1, 2)]
        solver.step(maze)
        assert solver.is_finished
        assert solver.snapshot().nodes_expanded == 3
