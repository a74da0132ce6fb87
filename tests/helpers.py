"""Shared helpers for the test suite: scripted random sources and a reference BFS."""

import collections


class FixedOrder:
    """Random source whose shuffle keeps the N/E/S/W order untouched."""
    def shuffle(self, items):
        pass


class ReversedOrder:
    """Random source whose shuffle reverses the direction list."""
    def shuffle(self, items):
        items.reverse()


def reference_distances(maze, origin=None):
    """Plain BFS over open cells, returns {cell: distance from origin}."""
    origin = origin or maze.start
    distances = {origin: 0}
    queue = collections.deque([origin])
    while queue:
        x, y = queue.popleft()
        for dx, dy in ((0, -1), (1, 0), (0, 1), (-1, 0)):
            nxt = (x + dx, y + dy)
            if maze.is_open(*nxt) and nxt not in distances:
                distances[nxt] = distances[(x, y)] + 1
                queue.append(nxt)
    return distances


def open_edges(maze):
    """Undirected edges between orthogonally adjacent open cells."""
    edges = []
    for x, y in maze.open_cells():
        if maze.is_open(x + 1, y):
            edges.append(((x, y), (x + 1, y)))
        if maze.is_open(x, y + 1):
            edges.append(((x, y), (x, y + 1)))
    return edges


def assert_valid_path(maze, path):
    assert path[0] == maze.start
    assert path[-1] == maze.goal
    assert len(set(path)) == len(path)
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        assert abs(ax - bx) + abs(ay - by) == 1
    for x, y in path:
        assert maze.is_open(x, y)


CORRIDOR = [
    "#######",
    "#S...E#",
    "#######",
]

LOOP = [
    "#####",
    "#S..#",
    "#.#.#",
    "#..E#",
    "#####",
]

BLOCKED = [
    "#######",
    "#S.#.E#",
    "#######",
]
