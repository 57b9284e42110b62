# Jump Point Search over VoxelGrid
# src/voxel_nav/finder.py
"""
Jump Point Search over a VoxelGrid.

- A*-style best-first search on f = g + h with a pluggable heuristic
  (Manhattan by default).
- Straight-line "jumps" skip cells that cannot be decision points; only
  jump points enter the open list.
- Neighbor pruning and forced-neighbor detection use the direction tables
  in voxel_nav.moves, so they follow the same move model as the grid,
  across the layer below, the same layer and the layer above.
- A node keeps every direction it was reached along and is expanded for
  each of them, so pruning never hides a cell that is reachable.
- Optional max_steps guard to bound huge searches.

The finder owns all search state for a run (node table, open list). Every
call starts from a fresh table, so one finder can be reused, and the grid
is never written to.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .errors import InvalidCoordinateError
from .grid import VoxelGrid
from .heuristics import HeuristicFn, euclidean, get_heuristic, manhattan
from .moves import (
    MOVES,
    covered_moves,
    direction_of,
    forced_candidates,
    is_diagonal,
    is_legal_move,
    pruning_routes,
    reverse,
    route_exists,
)
from .node import Coord, Node, NodeTable
from .util import backtrace, expand_path

if TYPE_CHECKING:
    from env.schema import NavProfile

log = logging.getLogger(__name__)


@dataclass
class PathfindingResult:
    """Structured result for a pathfinding attempt."""

    path: List[Coord]
    success: bool
    reason: str | None = None
    # sparse path: start, the jump points taken, end
    jump_points: List[Coord] = field(default_factory=list)
    expanded_nodes: int = 0


class JumpPointFinder:
    """
    Path finder using Jump Point Search.

    Parameters:
        heuristic:
            h(dx, dy, dz) over absolute per-axis deltas.
        track_jump_recursion:
            mark every cell visited by a jump ray as `tested` in the run's
            node table (debugging aid, see `nodes`).
        max_steps:
            optional cap on the number of nodes popped from the open list.
    """

    def __init__(
        self,
        heuristic: HeuristicFn = manhattan,
        track_jump_recursion: bool = False,
        max_steps: Optional[int] = None,
    ) -> None:
        self.heuristic = heuristic
        self.track_jump_recursion = track_jump_recursion
        self.max_steps = max_steps

        # per-run state
        self.grid: Optional[VoxelGrid] = None
        self.nodes = NodeTable()
        self.start_node: Optional[Node] = None
        self.end_node: Optional[Node] = None
        self.open_list: List[Tuple[float, int, Node]] = []
        self._sequence = itertools.count()
        self._walkable_cache: Dict[Coord, bool] = {}

    @classmethod
    def from_profile(cls, profile: "NavProfile") -> "JumpPointFinder":
        """Build a finder from a loaded NavProfile."""
        return cls(
            heuristic=get_heuristic(profile.heuristic),
            track_jump_recursion=profile.track_jump_recursion,
            max_steps=profile.max_steps,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def find_path(
        self,
        start_x: int,
        start_y: int,
        start_z: int,
        end_x: int,
        end_y: int,
        end_z: int,
        grid: VoxelGrid,
    ) -> List[Coord]:
        """
        Find a path from start to end on `grid`.

        Returns the expanded path (every cell, start and end included), or
        [] when no path exists. Raises InvalidCoordinateError when start or
        end is outside the grid or not walkable.
        """
        return self.search(start_x, start_y, start_z, end_x, end_y, end_z, grid).path

    def search(
        self,
        start_x: int,
        start_y: int,
        start_z: int,
        end_x: int,
        end_y: int,
        end_z: int,
        grid: VoxelGrid,
    ) -> PathfindingResult:
        """
        Run the search and return a PathfindingResult with:
          - path: expanded path, empty if not success
          - success: bool
          - reason: None, "no_path_found" or "max_steps_exhausted"
          - jump_points: the sparse path before expansion
          - expanded_nodes: how many expansions ran (a node reached along
            several directions may be expanded more than once)
        """
        start = (start_x, start_y, start_z)
        end = (end_x, end_y, end_z)
        _validate_endpoint(grid, start, "start")
        _validate_endpoint(grid, end, "end")

        self._reset(grid)
        start_node = self.start_node = self.nodes.get(*start)
        end_node = self.end_node = self.nodes.get(*end)

        log.debug("JPS search %s -> %s", start, end)

        start_node.g = 0.0
        start_node.f = 0.0
        self._push(start_node)
        start_node.opened = True

        expanded = 0
        while True:
            node = self._pop()
            if node is None:
                break

            if self.max_steps is not None and expanded >= self.max_steps:
                log.debug("JPS gave up after %d expansions (max_steps)", expanded)
                return PathfindingResult(
                    path=[],
                    success=False,
                    reason="max_steps_exhausted",
                    expanded_nodes=expanded,
                )

            node.closed = True
            expanded += 1

            if node is end_node:
                jump_points = backtrace(end_node)
                # a single point (start == end) has no segments to expand
                path = expand_path(jump_points) if len(jump_points) > 1 else jump_points
                log.debug(
                    "JPS found path: %d jump points, %d cells, %d expansions",
                    len(jump_points),
                    len(path),
                    expanded,
                )
                return PathfindingResult(
                    path=path,
                    success=True,
                    jump_points=jump_points,
                    expanded_nodes=expanded,
                )

            self._identify_successors(node)

        log.debug("JPS found no path %s -> %s after %d expansions", start, end, expanded)
        return PathfindingResult(
            path=[],
            success=False,
            reason="no_path_found",
            expanded_nodes=expanded,
        )

    # ------------------------------------------------------------------
    # Search internals
    # ------------------------------------------------------------------

    def _reset(self, grid: VoxelGrid) -> None:
        self.grid = grid
        self.nodes = NodeTable()
        self.open_list = []
        self._sequence = itertools.count()
        self._walkable_cache = {}

    def _walkable(self, x: int, y: int, z: int) -> bool:
        key = (x, y, z)
        cached = self._walkable_cache.get(key)
        if cached is None:
            cached = self.grid.is_walkable_at(x, y, z)
            self._walkable_cache[key] = cached
        return cached

    def _push(self, node: Node) -> None:
        heapq.heappush(self.open_list, (node.f, next(self._sequence), node))

    def _pop(self) -> Optional[Node]:
        """
        Pop the open node with the smallest f.

        Improved nodes are pushed again instead of re-keyed in place, so
        entries with an outdated f are skipped. A closed node is only
        returned again while it has unexpanded arrival directions.
        """
        while self.open_list:
            f, _, node = heapq.heappop(self.open_list)
            if f != node.f:
                continue
            if node.closed and not node.arrivals:
                continue
            return node
        return None

    def _identify_successors(self, node: Node) -> None:
        """
        Jump from `node` toward each pruned neighbor and open or improve
        every jump point found.

        Pruning depends on the direction a jump point was reached along, so
        every arrival direction is recorded on the node. A closed node
        reached along a direction it was never expanded for is queued
        again for that direction; its g and parent stay as they are.
        """
        end = self.end_node
        x, y, z = node.x, node.y, node.z

        directions = sorted(node.arrivals)
        node.expanded_from.update(directions)
        node.arrivals.clear()

        for nx, ny, nz in self._find_neighbors(node, directions):
            jump_point = self._jump(nx, ny, nz, x, y, z)
            if jump_point is None:
                continue

            jx, jy, jz = jump_point
            jump_node = self.nodes.get(jx, jy, jz)
            if jump_node is self.start_node:
                # the start is expanded toward every neighbor
                continue

            direction = direction_of(jx - x, jy - y, jz - z)
            if jump_node.closed:
                self._requeue(jump_node, direction)
                continue
            jump_node.arrivals.add(direction)

            # the jump point may be many cells away
            d = euclidean(abs(jx - x), abs(jy - y), abs(jz - z))
            ng = node.g + d

            if not jump_node.opened or ng < jump_node.g:
                jump_node.g = ng
                if jump_node.h is None:
                    jump_node.h = self.heuristic(
                        abs(jx - end.x), abs(jy - end.y), abs(jz - end.z)
                    )
                jump_node.f = jump_node.g + jump_node.h
                jump_node.parent = node

                self._push(jump_node)
                jump_node.opened = True

    def _requeue(self, node: Node, direction: Tuple[int, int, int]) -> None:
        if direction in node.expanded_from or direction in node.arrivals:
            return
        node.arrivals.add(direction)
        if len(node.arrivals) == 1:
            self._push(node)

    def _jump(self, x: int, y: int, z: int, px: int, py: int, pz: int) -> Optional[Coord]:
        """
        Walk from (px, py, pz) through (x, y, z) in a straight line until a
        jump point is found.

        Returns the jump point's coordinate, or None if the ray dead-ends.
        Straight runs are walked iteratively; a diagonal ray scans its two
        straight components at every step.
        """
        direction = direction_of(x - px, y - py, z - pz)
        dx, dy, dz = direction
        diagonal = is_diagonal(direction)
        components = covered_moves(direction)[1:]
        end = self.end_node

        while True:
            if not self._walkable(x, y, z):
                return None

            if self.track_jump_recursion:
                self.nodes.get(x, y, z).tested = True

            if x == end.x and y == end.y and z == end.z:
                return (x, y, z)

            if self._has_forced_neighbor(x, y, z, direction):
                return (x, y, z)

            if diagonal:
                for cx, cy, cz in components:
                    if self._jump(x + cx, y + cy, z + cz, x, y, z) is not None:
                        return (x, y, z)

            if not is_legal_move(self._walkable, x, y, z, direction):
                return None
            x, y, z = x + dx, y + dy, z + dz

    def _has_forced_neighbor(self, x: int, y: int, z: int, direction: Tuple[int, int, int]) -> bool:
        """
        True if (x, y, z), reached along `direction`, has a neighbor that the
        ray itself does not cover and that no route around the cell reaches
        as cheaply.
        """
        walkable = self._walkable
        previous = (x - direction[0], y - direction[1], z - direction[2])
        for move, routes in forced_candidates(direction):
            if not is_legal_move(walkable, x, y, z, move):
                continue
            if not route_exists(walkable, previous, routes):
                return True
        return False

    def _find_neighbors(self, node: Node, directions: List[Tuple[int, int, int]]) -> List[Coord]:
        """
        Candidate cells to jump toward from `node`.

        The start node tries every neighbor. Otherwise each arrival
        direction prunes the set down to natural continuations plus forced
        neighbors, and the result is the union over `directions`.
        """
        x, y, z = node.x, node.y, node.z

        if node is self.start_node:
            return [
                n.coord
                for n in self.grid.get_neighbors(node, allow_diagonal=True)
            ]

        walkable = self._walkable
        neighbors: List[Coord] = []
        for move in MOVES:
            if not is_legal_move(walkable, x, y, z, move):
                continue
            for direction in directions:
                if move == reverse(direction):
                    continue
                previous = (x - direction[0], y - direction[1], z - direction[2])
                if not route_exists(walkable, previous, pruning_routes(direction, move)):
                    neighbors.append((x + move[0], y + move[1], z + move[2]))
                    break
        return neighbors


def _validate_endpoint(grid: VoxelGrid, coord: Coord, role: str) -> None:
    if not grid.in_bounds(*coord):
        raise InvalidCoordinateError(coord, role, "outside grid bounds")
    if not grid.is_walkable_at(*coord):
        raise InvalidCoordinateError(coord, role, "not walkable")
