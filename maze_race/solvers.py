import collections
import logging
import random

from maze_race.maze import STEP_DIRECTIONS

logger = logging.getLogger(__name__)

# --- Solver states ---
IDLE = 'idle'
RUNNING = 'running'
FINISHED = 'finished'

CLASSIC = 'Classic'
QUANTUM = 'Quantum'

# Immutable per-tick view of a solver, consumed by the renderer and stats panel
SolverSnapshot = collections.namedtuple('SolverSnapshot', [
    'name',
    'visited',         # frozenset of (x, y) keys discovered so far
    'frontier',        # tuple of (x, y) points active this tick
    'path',            # tuple of (x, y) from start to goal, empty until solved
    'steps',           # ticks that did work
    'is_finished',
    'nodes_expanded',  # cells taken off the stack/wave and examined, goal included
    'frontier_max',    # largest pending stack/wave seen
])


def reconstruct_path(parents, goal):
    """Walks the parent map backward from goal and returns the path origin -> goal.

    The origin is the first key with no parent entry. A goal that was never
    discovered (absent from the map) yields an empty list, meaning "no path
    yet"; a solved path always has at least two points.
    """
    if goal not in parents:
        return []
    path = []
    node = goal
    while node in parents:
        path.append(node)
        node = parents[node]
    path.append(node)  # origin
    path.reverse()
    return path


class Solver:
    """
    Common traversal workspace for the step-wise solvers.

    State machine: idle -> running (after seed) -> finished (goal reached).
    Each solver owns its own visited set and parent map; the maze is passed
    into step() and never modified. The driver owns the solver objects, so a
    paused race keeps all of this intact until reset() replaces them.

    Published fields (read through snapshot()):
      - visited: keys discovered so far, grows monotonically
      - frontier: the points shown as "active" after the latest tick
      - path: final path once finished
      - steps: number of ticks that advanced the search
    """
    name = None

    def __init__(self, name=None):
        if name is not None:
            self.name = name
        self.visited = set()
        self.parents = {}  # child key -> parent key, write-once
        self.frontier = []
        self.path = []
        self.steps = 0
        self.is_finished = False
        self.goal = None
        self.metrics = {
            'nodes_expanded': 0,  # Points popped/scanned and examined
            'frontier_max': 0,    # Largest pending container size
        }

    @property
    def status(self):
        if self.is_finished:
            return FINISHED
        if self.goal is None:
            return IDLE
        return RUNNING

    def seed(self, start, goal):
        """Primes the workspace with the start cell; the solver becomes running."""
        self.goal = goal
        self.visited.add(start)

    def _discover(self, neighbor, parent):
        self.visited.add(neighbor)
        self.parents[neighbor] = parent

    def _finish(self):
        self.is_finished = True
        self.path = reconstruct_path(self.parents, self.goal)
        self.frontier = []
        logger.info("%s solver reached %s after %d steps (path length %d, explored %d)",
                    self.name, self.goal, self.steps, len(self.path), len(self.visited))

    def _bump_frontier_metric(self, size):
        if size > self.metrics['frontier_max']:
            self.metrics['frontier_max'] = size

    def step(self, maze):
        raise NotImplementedError

    def snapshot(self):
        return SolverSnapshot(
            name=self.name,
            visited=frozenset(self.visited),
            frontier=tuple(self.frontier),
            path=tuple(self.path),
            steps=self.steps,
            is_finished=self.is_finished,
            nodes_expanded=self.metrics['nodes_expanded'],
            frontier_max=self.metrics['frontier_max'],
        )

    def __repr__(self):
        return f"{type(self).__name__}(status={self.status!r}, steps={self.steps}, visited={len(self.visited)})"


class ClassicSolver(Solver):
    """Sequential explorer: pops ONE point from a stack per tick (depth-first).

    Using a stack gives a single exploring "head" that snakes through the
    maze and backtracks, in contrast with the quantum wave. Neighbour order is
    shuffled with the injected random source; the shuffle only changes the
    visual pattern, never whether the goal is found.
    """
    name = CLASSIC

    def __init__(self, name=None, rng=None):
        super().__init__(name)
        self.rng = rng if rng is not None else random.Random()
        self.stack = []

    def seed(self, start, goal):
        super().seed(start, goal)
        self.stack = [start]
        self._bump_frontier_metric(len(self.stack))

    def step(self, maze):
        if self.is_finished or not self.stack:
            return

        current = self.stack.pop()
        self.metrics['nodes_expanded'] += 1

        if current == self.goal:
            self._finish()
            return

        directions = list(STEP_DIRECTIONS)
        self.rng.shuffle(directions)
        for neighbor in maze.open_neighbors(current[0], current[1], directions):
            if neighbor not in self.visited:
                self._discover(neighbor, current)
                self.stack.append(neighbor)

        self.frontier = [current]  # Classic has one head
        self.steps += 1
        self._bump_frontier_metric(len(self.stack))
        logger.debug("%s step %d at %s, stack size %d", self.name, self.steps, current, len(self.stack))


class QuantumSolver(Solver):
    """Wavefront explorer: expands the WHOLE frontier per tick (breadth-first).

    Every tick advances the wave by one cell in every direction at once, so
    the step counter equals the BFS depth and the goal is reached after
    exactly shortest-path-distance steps. Neighbours are examined in fixed
    N/E/S/W order. A cell reachable from two members of the same wave is
    claimed by whichever member is processed first.
    """
    name = QUANTUM

    def seed(self, start, goal):
        super().seed(start, goal)
        self.frontier = [start]
        self._bump_frontier_metric(len(self.frontier))

    def step(self, maze):
        if self.is_finished or not self.frontier:
            return

        found = False
        for scanned, current in enumerate(self.frontier, 1):
            if current == self.goal:
                found = True
                break

        if found:
            # Members scanned up to the goal count like Classic's final pop
            self.metrics['nodes_expanded'] += scanned
            self._finish()
            return

        next_frontier = []
        for current in self.frontier:
            self.metrics['nodes_expanded'] += 1
            for neighbor in maze.open_neighbors(current[0], current[1]):
                if neighbor not in self.visited:
                    self._discover(neighbor, current)
                    next_frontier.append(neighbor)

        self.frontier = next_frontier
        self.steps += 1
        self._bump_frontier_metric(len(self.frontier))
        logger.debug("%s step %d, wave size %d", self.name, self.steps, len(self.frontier))
