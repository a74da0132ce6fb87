import argparse
import collections
import logging
import random

from maze_race.config import MIN_MAZE_SIZE, START_POS

logger = logging.getLogger(__name__)

# --- Cell categories ---
WALL = 'wall'
PATH = 'path'
START = 'start'
END = 'end'

CELL_KINDS = (WALL, PATH, START, END)

# Text layout symbols used by Maze.from_rows / Maze.render_text
SYMBOLS = {WALL: '#', PATH: '.', START: 'S', END: 'E'}
KINDS_BY_SYMBOL = {symbol: kind for kind, symbol in SYMBOLS.items()}

# (dx, dy) for a single move, in N/E/S/W order
STEP_DIRECTIONS = [(0, -1), (1, 0), (0, 1), (-1, 0)]
# (dx, dy) for a carving jump on the 2-step lattice, in N/E/S/W order
LATTICE_DIRECTIONS = [(0, -2), (2, 0), (0, 2), (-2, 0)]

Cell = collections.namedtuple('Cell', ['x', 'y', 'kind'])


class MazeError(ValueError):
    """Raised for maze dimensions or layouts that cannot describe a valid maze."""


def _check_dimension(name, value):
    if not isinstance(value, int) or isinstance(value, bool):
        raise MazeError(f"{name} must be an integer, got {value!r}")
    if value < MIN_MAZE_SIZE:
        raise MazeError(f"{name} must be at least {MIN_MAZE_SIZE}, got {value}")
    if value % 2 == 0:
        raise MazeError(f"{name} must be odd, got {value}")


def odd_size(value):
    """argparse type for a maze dimension."""
    try:
        size = int(value)
        _check_dimension('size', size)
    except (ValueError, MazeError) as e:
        raise argparse.ArgumentTypeError(str(e))
    return size


class Maze:
    """
    Generates and stores a perfect maze as a grid of wall/path cells.

    Maze Representation:
      - self.grid is a list of rows (row-major, self.grid[y][x]) of Cell tuples.
      - Every cell starts as a wall; generation carves passages on a 2-step
        lattice so odd coordinates become rooms and the cells between two
        rooms become doorways. The outer border always stays wall.
      - Start is fixed at (1, 1) and the goal at (width - 2, height - 2).

    Coordinates: (x, y) where x is the column and y is the row. Origin (0, 0)
    is top-left. The (x, y) tuple doubles as the coordinate key used by the
    solvers' visited sets and parent maps.

    The grid is read-only once generation is done; both solvers share it.
    """
    def __init__(self, width, height=None, rng=None):
        """
        Parameters:
          width (int): Number of columns, odd and >= 5
          height (int): Number of rows, odd and >= 5 (defaults to width)
          rng: Random source with a shuffle(list) method. Defaults to a fresh
               random.Random(); tests pass a seeded or scripted one.
        """
        if height is None:
            height = width
        _check_dimension('width', width)
        _check_dimension('height', height)

        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self._kinds = [[WALL] * width for _ in range(height)]
        self._generate_dfs()
        self._mark_endpoints()
        self.grid = self._build_grid()
        logger.debug("Generated %dx%d maze with %d open cells",
                     width, height, len(self.open_cells()))

    @classmethod
    def from_rows(cls, rows):
        """Builds a maze from a fixed text layout instead of carving one.

        Each row is a string: '#' wall, '.' path, 'S' start, 'E' end. Exactly
        one start and one end are required. Dimensions are not required to be
        odd here, so hand-drawn corridors can be used for demos and tests.
        """
        rows = [row.strip() for row in rows if row.strip()]
        if not rows:
            raise MazeError("layout has no rows")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise MazeError("layout rows must all have the same length")

        maze = cls.__new__(cls)
        maze.width = width
        maze.height = len(rows)
        maze.rng = random.Random()
        maze._kinds = []
        starts, ends = [], []
        for y, row in enumerate(rows):
            kinds = []
            for x, symbol in enumerate(row):
                if symbol not in KINDS_BY_SYMBOL:
                    raise MazeError(f"unknown layout symbol {symbol!r} at ({x}, {y})")
                kind = KINDS_BY_SYMBOL[symbol]
                if kind == START:
                    starts.append((x, y))
                elif kind == END:
                    ends.append((x, y))
                kinds.append(kind)
            maze._kinds.append(kinds)
        if len(starts) != 1 or len(ends) != 1:
            raise MazeError("layout needs exactly one 'S' and one 'E'")
        maze._start = starts[0]
        maze._goal = ends[0]
        maze.grid = maze._build_grid()
        return maze

    def _generate_dfs(self):
        """Carves a perfect maze using randomized depth-first backtracking.

        High-level overview:
          - Start at (1, 1), mark it as path and push it on the stack.
          - Peek at the top of the stack, shuffle the four lattice directions
            and carve towards the first neighbour two cells away that is inside
            the border and still a wall. Carving opens the neighbour and the
            wall cell between the two.
          - When no neighbour qualifies, pop (backtrack).
          - Every lattice room gets carved exactly once from a single parent,
            so the open cells form a spanning tree: one simple path between
            any two open cells.
        """
        start_x, start_y = START_POS
        self._kinds[start_y][start_x] = PATH
        stack = [START_POS]

        while stack:
            # Peek, don't pop yet: the current cell may have more neighbours
            current_x, current_y = stack[-1]
            directions = list(LATTICE_DIRECTIONS)
            self.rng.shuffle(directions)

            carved = False
            for dx, dy in directions:
                nx, ny = current_x + dx, current_y + dy
                if 0 < nx < self.width - 1 and 0 < ny < self.height - 1 and self._kinds[ny][nx] == WALL:
                    self._kinds[ny][nx] = PATH
                    # Knock down the wall between current cell and neighbour
                    self._kinds[current_y + dy // 2][current_x + dx // 2] = PATH
                    stack.append((nx, ny))
                    carved = True
                    break

            if not carved:
                stack.pop()  # Backtrack

    def _mark_endpoints(self):
        self._start = START_POS
        self._goal = (self.width - 2, self.height - 2)
        self._kinds[self._start[1]][self._start[0]] = START
        self._kinds[self._goal[1]][self._goal[0]] = END

    def _build_grid(self):
        return [[Cell(x, y, kind) for x, kind in enumerate(row)] for y, row in enumerate(self._kinds)]

    # --- Queries ---
    @property
    def start(self):
        return self._start

    @property
    def goal(self):
        return self._goal

    def cell(self, x, y):
        return self.grid[y][x]

    def kind(self, x, y):
        return self._kinds[y][x]

    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def is_open(self, x, y):
        """True for any in-bounds cell that is not a wall (path, start or end)."""
        return self.in_bounds(x, y) and self._kinds[y][x] != WALL

    def open_neighbors(self, x, y, directions=STEP_DIRECTIONS):
        """Open cells one step away, in the order of `directions`."""
        neighbors = []
        for dx, dy in directions:
            nx, ny = x + dx, y + dy
            if self.is_open(nx, ny):
                neighbors.append((nx, ny))
        return neighbors

    def open_cells(self):
        return [(x, y) for y in range(self.height) for x in range(self.width) if self._kinds[y][x] != WALL]

    def render_text(self):
        """Returns the maze in the same text form accepted by from_rows."""
        return "\n".join("".join(SYMBOLS[kind] for kind in row) for row in self._kinds)

    def __repr__(self):
        return f"Maze(width={self.width}, height={self.height}, start={self.start}, goal={self.goal})"
