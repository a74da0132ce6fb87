import logging
import random

from maze_race.config import MAZE_SIZE, TICK_MS
from maze_race.maze import Maze
from maze_race.solvers import ClassicSolver, QuantumSolver

logger = logging.getLogger(__name__)

# --- Driver states ---
IDLE = 'idle'
RUNNING = 'running'
PAUSED = 'paused'


class Simulation:
    """
    Drives the classic and quantum solvers over one shared maze.

    The driver owns the maze and both solver workspaces and exposes the
    commands the UI sends:
      - start(): begin a fresh race (seeds both solvers) or resume a paused one
      - pause(): stop ticking, keep every stack/wave/visited set/parent map
      - reset(): throw everything away and generate a new maze
      - tick(): one step of Classic then one step of Quantum

    It is independent of any GUI toolkit: the desktop app schedules tick()
    every `tick_ms` milliseconds with root.after(), the metrics runner just
    calls run() in a loop.

    Parameters:
      size (int): Odd maze dimension >= 5
      rng (random.Random): Random source shared by the generator and the
                           classic solver's neighbour shuffle
      tick_ms (int): Period between ticks for whoever schedules them
    """
    def __init__(self, size=MAZE_SIZE, rng=None, tick_ms=TICK_MS):
        self.size = size
        self.rng = rng if rng is not None else random.Random()
        self.tick_ms = tick_ms
        self.status = IDLE
        self.maze = None
        self.classic = None
        self.quantum = None
        self.ticks = 0
        self.seeded = False
        self.reset()

    def reset(self, size=None):
        """Discards all traversal state and generates a new maze.

        Both solvers come back idle: empty visited sets, zero steps, not
        finished. They are seeded again on the next start().
        """
        size = self.size if size is None else size
        # Generate before touching state so a bad size leaves the old race intact
        maze = Maze(size, size, rng=self.rng)
        self.size = size
        self._new_race(maze)
        logger.info("New %dx%d maze, start %s goal %s", maze.width, maze.height, maze.start, maze.goal)

    @classmethod
    def from_maze(cls, maze, rng=None, tick_ms=TICK_MS):
        """Builds a driver around an existing maze (e.g. a Maze.from_rows layout)."""
        sim = cls.__new__(cls)
        sim.size = maze.width
        sim.rng = rng if rng is not None else random.Random()
        sim.tick_ms = tick_ms
        sim._new_race(maze)
        return sim

    def _new_race(self, maze):
        """Installs `maze` with fresh idle solvers and zeroed counters."""
        self.maze = maze
        self.classic = ClassicSolver(rng=self.rng)
        self.quantum = QuantumSolver()
        self.status = IDLE
        self.ticks = 0
        self.seeded = False

    @property
    def is_finished(self):
        return self.classic.is_finished and self.quantum.is_finished

    @property
    def is_running(self):
        return self.status == RUNNING

    @property
    def is_paused(self):
        return self.status == PAUSED

    def start(self):
        """Starts a fresh race or resumes a paused one. Returns True if now running."""
        if self.status == RUNNING:
            return True
        if self.is_finished:
            logger.info("Race already finished; reset for a new maze")
            return False

        if self.status == PAUSED:
            logger.info("Resuming at tick %d", self.ticks)
        else:
            if not self.seeded:
                self.classic.seed(self.maze.start, self.maze.goal)
                self.quantum.seed(self.maze.start, self.maze.goal)
                self.seeded = True
            logger.info("Starting race from %s to %s", self.maze.start, self.maze.goal)
        self.status = RUNNING
        return True

    def pause(self):
        if self.status != RUNNING:
            return
        self.status = PAUSED
        logger.info("Paused at tick %d", self.ticks)

    def tick(self):
        """Advances both solvers by one step. Returns True if the tick did anything.

        Classic and Quantum use disjoint workspaces and only read the maze, so
        neither observes the other's progress within a tick. When both have
        finished the driver goes back to idle and further ticks are no-ops.
        """
        if self.status != RUNNING:
            return False

        self.classic.step(self.maze)
        self.quantum.step(self.maze)
        self.ticks += 1

        if self.is_finished:
            self.status = IDLE
            logger.info("Both solvers finished after %d ticks (classic %d steps, quantum %d steps)",
                        self.ticks, self.classic.steps, self.quantum.steps)
        return True

    def run(self, max_ticks=None):
        """Ticks headlessly until both solvers finish or max_ticks is spent.

        Defaults to a budget of one tick per cell, which is enough for both
        solvers on any perfect maze. Returns the number of ticks taken.
        """
        if max_ticks is None:
            max_ticks = self.maze.width * self.maze.height
        self.start()
        taken = 0
        while self.status == RUNNING and taken < max_ticks:
            self.tick()
            taken += 1
        if not self.is_finished:
            logger.warning("Stopped after %d ticks without both solvers finishing", taken)
        return taken

    def snapshots(self):
        """Immutable (classic, quantum) snapshots for rendering."""
        return self.classic.snapshot(), self.quantum.snapshot()

    def winner(self):
        """Name of the solver that finished in fewer steps, 'Tie', or None while racing."""
        if not self.is_finished:
            return None
        if self.classic.steps == self.quantum.steps:
            return 'Tie'
        return self.classic.name if self.classic.steps < self.quantum.steps else self.quantum.name
