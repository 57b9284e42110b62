# src/voxel_nav/moves.py
"""
Move model shared by the grid-facing parts of the jump point finder.

A move is a unit step (dx, dy, dz) with (dx, dy) != (0, 0) and dz in
(-1, 0, 1): the eight planar directions, each landing on the layer below,
the same layer or the layer above. Pure vertical steps are not moves; under
the support rule two vertically adjacent cells are never both walkable.

Legality mirrors VoxelGrid.get_neighbors: the target must be walkable, and
a diagonal is gated by its two flanking axis cells on the target layer.

The direction tables below generalize 2D jump point pruning to this move
set. For an arrival direction d at cell c (predecessor p = c - d), a
neighbor c + e is pruned when some other route from p reaches it without
passing through c at strictly lower cost. Equal-cost routes prune only when
d is straight and the route starts with a planar diagonal move, so of two
equally cheap routes exactly one is ever kept ("diagonal first"). Only
routes of one or two moves are considered. On a single flat layer this
reproduces the classic 2D forced-neighbor rules exactly.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, Tuple

Move = Tuple[int, int, int]
Route = Tuple[Move, ...]
WalkableFn = Callable[[int, int, int], bool]

MOVES: Tuple[Move, ...] = tuple(
    (dx, dy, dz)
    for dz in (-1, 0, 1)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if (dx, dy) != (0, 0)
)

_MOVE_SET = frozenset(MOVES)

# Float slack for cost comparisons (sums of sqrt(2)/sqrt(3) terms).
_EPS = 1e-9


def move_cost(move: Move) -> float:
    dx, dy, dz = move
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def is_diagonal(move: Move) -> bool:
    """True for moves that change both x and y."""
    return move[0] != 0 and move[1] != 0


def reverse(move: Move) -> Move:
    return (-move[0], -move[1], -move[2])


def direction_of(dx: int, dy: int, dz: int) -> Move:
    """Normalize each component of a delta to -1 / 0 / 1."""
    return (
        (dx > 0) - (dx < 0),
        (dy > 0) - (dy < 0),
        (dz > 0) - (dz < 0),
    )


def is_legal_move(
    walkable: WalkableFn,
    x: int,
    y: int,
    z: int,
    move: Move,
    dont_cross_corners: bool = False,
) -> bool:
    """Can an agent standing at (x, y, z) take `move` in one step?"""
    dx, dy, dz = move
    nz = z + dz
    if not walkable(x + dx, y + dy, nz):
        return False
    if dx == 0 or dy == 0:
        return True
    left = walkable(x + dx, y, nz)
    right = walkable(x, y + dy, nz)
    if dont_cross_corners:
        return left and right
    return left or right


def covered_moves(direction: Move) -> Tuple[Move, ...]:
    """
    Moves a jump along `direction` explores on its own.

    Straight directions only continue; diagonal directions continue and
    also scan their two straight components.
    """
    return _COVERED[direction]


def pruning_routes(direction: Move, move: Move) -> Tuple[Route, ...]:
    """
    Alternative routes from the predecessor p = c - direction to c + move
    that avoid c and are no more expensive than going through c.

    Each route is a sequence of moves starting at p.
    """
    return _ROUTES[(direction, move)]


def forced_candidates(direction: Move) -> Tuple[Tuple[Move, Tuple[Route, ...]], ...]:
    """(move, routes) pairs that make a cell a jump point when legal and unpruned."""
    return _FORCED[direction]


def route_exists(
    walkable: WalkableFn,
    start: Tuple[int, int, int],
    routes: Tuple[Route, ...],
) -> bool:
    """True if any of `routes` can be walked from `start`."""
    for route in routes:
        x, y, z = start
        for move in route:
            if not is_legal_move(walkable, x, y, z, move):
                break
            x, y, z = x + move[0], y + move[1], z + move[2]
        else:
            return True
    return False


# ---------------------------------------------------------------------------
# Direction tables (built once at import)
# ---------------------------------------------------------------------------


def _components(direction: Move) -> Tuple[Move, ...]:
    dx, dy, dz = direction
    if dx != 0 and dy != 0:
        return (direction, (dx, 0, dz), (0, dy, dz))
    return (direction,)


def _routes_for(direction: Move, move: Move) -> Tuple[Route, ...]:
    via = move_cost(direction) + move_cost(move)
    ties_prune = not is_diagonal(direction)

    def prunes(cost: float, first: Move) -> bool:
        if cost < via - _EPS:
            return True
        # equal cost: only a diagonal-first route beats a straight arrival
        return ties_prune and is_diagonal(first) and cost <= via + _EPS

    # offset from the predecessor p to the neighbor c + move
    target = (
        direction[0] + move[0],
        direction[1] + move[1],
        direction[2] + move[2],
    )

    routes = []
    if target in _MOVE_SET and prunes(move_cost(target), target):
        routes.append(((target,), move_cost(target)))

    for first in MOVES:
        if first == direction:
            continue  # would pass through c
        second = (target[0] - first[0], target[1] - first[1], target[2] - first[2])
        if second not in _MOVE_SET:
            continue
        cost = move_cost(first) + move_cost(second)
        if prunes(cost, first):
            routes.append(((first, second), cost))

    routes.sort(key=lambda item: item[1])
    return tuple(route for route, _ in routes)


_COVERED: Dict[Move, Tuple[Move, ...]] = {d: _components(d) for d in MOVES}

_ROUTES: Dict[Tuple[Move, Move], Tuple[Route, ...]] = {
    (d, e): _routes_for(d, e)
    for d in MOVES
    for e in MOVES
    if e != reverse(d)
}

_FORCED: Dict[Move, Tuple[Tuple[Move, Tuple[Route, ...]], ...]] = {
    d: tuple(
        (e, _ROUTES[(d, e)])
        for e in MOVES
        if e != reverse(d) and e not in _COVERED[d]
    )
    for d in MOVES
}
