# src/voxel_nav/util.py
"""
Path utilities.

Pure functions over coordinate sequences; only smoothen_path needs a grid
(for line-of-sight checks). Inputs are never mutated and every function
returns a new list of (x, y, z) tuples.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, List, Optional, Sequence

from .node import Coord, Node

if TYPE_CHECKING:
    from .grid import VoxelGrid

Path = List[Coord]


def _coord(point: Sequence[int]) -> Coord:
    return (int(point[0]), int(point[1]), int(point[2]))


def backtrace(node: Node) -> Path:
    """
    Follow parent links from `node` back to the root.

    Returns coordinates oldest-first, including both ends.
    """
    path: Path = [node.coord]
    current: Optional[Node] = node.parent
    while current is not None:
        path.append(current.coord)
        current = current.parent
    path.reverse()
    return path


def bi_backtrace(node_a: Node, node_b: Node) -> Path:
    """
    Join two search frontiers that met at node_a / node_b.

    backtrace(node_a) followed by backtrace(node_b) reversed.
    """
    path_a = backtrace(node_a)
    path_b = backtrace(node_b)
    path_b.reverse()
    return path_a + path_b


def path_length(path: Sequence[Sequence[int]]) -> float:
    """Sum of Euclidean segment lengths."""
    total = 0.0
    for a, b in zip(path, path[1:]):
        total += math.dist(a, b)
    return total


def interpolate(x0: int, y0: int, z0: int, x1: int, y1: int, z1: int) -> Path:
    """
    All lattice points on the segment (x0, y0, z0) → (x1, y1, z1).

    3D Bresenham: the axis with the largest delta advances every step, the
    other two advance when their error term crosses zero. Both endpoints are
    included; consecutive points differ by at most one unit per axis.
    """
    dx, dy, dz = abs(x1 - x0), abs(y1 - y0), abs(z1 - z0)
    sx = 1 if x1 > x0 else -1
    sy = 1 if y1 > y0 else -1
    sz = 1 if z1 > z0 else -1

    line: Path = [(x0, y0, z0)]

    if dx >= dy and dx >= dz:
        err_1 = 2 * dy - dx
        err_2 = 2 * dz - dx
        while x0 != x1:
            x0 += sx
            if err_1 >= 0:
                y0 += sy
                err_1 -= 2 * dx
            if err_2 >= 0:
                z0 += sz
                err_2 -= 2 * dx
            err_1 += 2 * dy
            err_2 += 2 * dz
            line.append((x0, y0, z0))
    elif dy >= dx and dy >= dz:
        err_1 = 2 * dx - dy
        err_2 = 2 * dz - dy
        while y0 != y1:
            y0 += sy
            if err_1 >= 0:
                x0 += sx
                err_1 -= 2 * dy
            if err_2 >= 0:
                z0 += sz
                err_2 -= 2 * dy
            err_1 += 2 * dx
            err_2 += 2 * dz
            line.append((x0, y0, z0))
    else:
        err_1 = 2 * dy - dz
        err_2 = 2 * dx - dz
        while z0 != z1:
            z0 += sz
            if err_1 >= 0:
                y0 += sy
                err_1 -= 2 * dz
            if err_2 >= 0:
                x0 += sx
                err_2 -= 2 * dz
            err_1 += 2 * dy
            err_2 += 2 * dx
            line.append((x0, y0, z0))

    return line


def expand_path(path: Sequence[Sequence[int]]) -> Path:
    """
    Interpolate every segment of a sparse path.

    Shared endpoints are emitted once. Paths with fewer than 2 points
    expand to [].
    """
    if len(path) < 2:
        return []

    expanded: Path = []
    for a, b in zip(path, path[1:]):
        segment = interpolate(a[0], a[1], a[2], b[0], b[1], b[2])
        expanded.extend(segment[:-1])
    expanded.append(_coord(path[-1]))
    return expanded


def smoothen_path(grid: "VoxelGrid", path: Sequence[Sequence[int]]) -> Path:
    """
    Greedy line-of-sight smoothing in a single forward pass.

    Keeps an anchor and the last path point visible from it in a straight,
    fully walkable line. When a point is not visible, the last visible point
    becomes the new anchor. The path end is always the final point.
    """
    if len(path) < 3:
        return [_coord(p) for p in path]

    anchor = _coord(path[0])
    last_visible = _coord(path[1])
    smoothed: Path = [anchor]

    for point in path[2:]:
        point = _coord(point)
        line = interpolate(*anchor, *point)
        blocked = any(not grid.is_walkable_at(*cell) for cell in line[1:])
        if blocked:
            smoothed.append(last_visible)
            anchor = last_visible
        # consecutive path points are always mutually reachable
        last_visible = point

    smoothed.append(_coord(path[-1]))
    return smoothed


def _unit(a: Coord, b: Coord) -> tuple:
    dx, dy, dz = b[0] - a[0], b[1] - a[1], b[2] - a[2]
    norm = math.sqrt(dx * dx + dy * dy + dz * dz)
    return (dx / norm, dy / norm, dz / norm)


def _same_direction(u: tuple, v: tuple) -> bool:
    return all(math.isclose(a, b, abs_tol=1e-9) for a, b in zip(u, v))


def compress_path(path: Sequence[Sequence[int]]) -> Path:
    """
    Drop interior points that continue the previous segment's direction.

    The point before each direction change is kept, as are both ends.
    Paths shorter than 3 points are returned unchanged.
    """
    points = [_coord(p) for p in path]
    if len(points) < 3:
        return points

    # zero-length segments have no direction
    deduped: Path = [points[0]]
    for point in points[1:]:
        if point != deduped[-1]:
            deduped.append(point)
    if len(deduped) < 3:
        return deduped

    compressed: Path = [deduped[0]]
    direction = _unit(deduped[0], deduped[1])
    for prev, point in zip(deduped[1:], deduped[2:]):
        next_direction = _unit(prev, point)
        if not _same_direction(direction, next_direction):
            compressed.append(prev)
        direction = next_direction
    compressed.append(deduped[-1])
    return compressed
