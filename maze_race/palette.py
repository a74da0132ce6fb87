import collections

from maze_race.config import (
    CLASSIC_FRONTIER_COLOR,
    CLASSIC_VISITED_COLOR,
    DEFAULT_CELL_COLOR,
    FINAL_PATH_COLOR,
    GOAL_COLOR,
    QUANTUM_FRONTIER_COLOR,
    QUANTUM_VISITED_COLOR,
    START_COLOR,
    WALL_COLOR,
)
from maze_race.maze import END, START, WALL
from maze_race.solvers import CLASSIC, QUANTUM

Theme = collections.namedtuple('Theme', ['visited', 'frontier', 'path'])

THEMES = {
    CLASSIC: Theme(visited=CLASSIC_VISITED_COLOR, frontier=CLASSIC_FRONTIER_COLOR, path=FINAL_PATH_COLOR),
    QUANTUM: Theme(visited=QUANTUM_VISITED_COLOR, frontier=QUANTUM_FRONTIER_COLOR, path=FINAL_PATH_COLOR),
}


class SnapshotView:
    """Set-based lookups over a solver snapshot so each cell costs O(1) to color."""
    def __init__(self, snapshot):
        self.snapshot = snapshot
        self.visited = snapshot.visited
        self.frontier = set(snapshot.frontier)
        self.path = set(snapshot.path)


def cell_color(cell, view, theme):
    """Fill color for one cell.

    Fixed categories win first (wall, start, end); open cells then follow
    path > frontier > visited > default precedence.
    """
    if cell.kind == WALL:
        return WALL_COLOR
    if cell.kind == START:
        return START_COLOR
    if cell.kind == END:
        return GOAL_COLOR
    key = (cell.x, cell.y)
    if key in view.path:
        return theme.path
    if key in view.frontier:
        return theme.frontier
    if key in view.visited:
        return theme.visited
    return DEFAULT_CELL_COLOR


def grid_colors(maze, snapshot, theme=None):
    """Row-major list of fill colors for the whole maze."""
    if theme is None:
        theme = THEMES.get(snapshot.name, THEMES[QUANTUM])
    view = SnapshotView(snapshot)
    return [[cell_color(cell, view, theme) for cell in row] for row in maze.grid]
