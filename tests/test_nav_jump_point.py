# tests/test_nav_jump_point.py
"""
Unit tests for JumpPointFinder.

Synthetic worlds are built from SolidSet occupancy sources. Walls are two
voxels high so the agent cannot climb onto them from the ground layer.
"""

from __future__ import annotations

import random
from collections import deque

import pytest

from voxel_nav import InvalidCoordinateError, JumpPointFinder, VoxelGrid
from voxel_nav.heuristics import euclidean
from voxel_nav.moves import MOVES, is_legal_move
from voxel_nav.occupancy import SolidSet
from voxel_nav.util import path_length


def wall_grid(width: int, height: int, walls) -> VoxelGrid:
    """Flat ground at z = 0 with two-high walls at the given (x, y)."""
    solids = SolidSet()
    for x, y in walls:
        solids.add_column(x, y, 0, 1)
    return VoxelGrid(width, height, 2, occupancy=solids)


def assert_traversable(grid: VoxelGrid, path) -> None:
    """Every cell walkable, every step at most one unit per axis."""
    for cell in path:
        assert grid.is_walkable_at(*cell), f"{cell} is not walkable"
    for a, b in zip(path, path[1:]):
        assert a != b
        assert all(abs(p - q) <= 1 for p, q in zip(a, b)), f"gap between {a} and {b}"


def test_open_floor_diagonal() -> None:
    grid = VoxelGrid.empty(10, 10, 1)
    finder = JumpPointFinder()

    path = finder.find_path(0, 0, 0, 9, 9, 0, grid)

    assert path == [(i, i, 0) for i in range(10)]


def test_open_floor_straight() -> None:
    grid = VoxelGrid.empty(8, 3, 1)
    finder = JumpPointFinder()

    path = finder.find_path(0, 1, 0, 7, 1, 0, grid)

    assert path[0] == (0, 1, 0)
    assert path[-1] == (7, 1, 0)
    assert len(path) == 8
    assert_traversable(grid, path)


def test_find_path_around_wall() -> None:
    # wall at x = 3 for y in 0..5, gap at y = 6
    grid = wall_grid(7, 7, [(3, y) for y in range(6)])
    finder = JumpPointFinder()

    path = finder.find_path(0, 0, 0, 6, 0, 0, grid)

    assert path[0] == (0, 0, 0)
    assert path[-1] == (6, 0, 0)
    assert_traversable(grid, path)
    assert (3, 6, 0) in path


def test_find_path_through_corridor_with_turns() -> None:
    # S-shaped corridor
    walls = [(2, y) for y in range(0, 4)] + [(5, y) for y in range(1, 5)]
    grid = wall_grid(8, 5, walls)
    finder = JumpPointFinder()

    path = finder.find_path(0, 0, 0, 7, 0, 0, grid)

    assert path[0] == (0, 0, 0)
    assert path[-1] == (7, 0, 0)
    assert_traversable(grid, path)
    for x, y, _ in path:
        assert (x, y) not in walls


def test_climbs_onto_a_step() -> None:
    # one-high step covering x >= 3; the agent walks up onto it
    solids = SolidSet()
    for x in (3, 4):
        for y in range(3):
            solids.add(x, y, 0)
    grid = VoxelGrid(5, 3, 3, occupancy=solids)
    finder = JumpPointFinder()

    path = finder.find_path(0, 1, 0, 4, 1, 1, grid)

    assert path[0] == (0, 1, 0)
    assert path[-1] == (4, 1, 1)
    assert_traversable(grid, path)


def test_walks_down_from_a_ledge() -> None:
    solids = SolidSet()
    for x in (0, 1):
        for y in range(3):
            solids.add(x, y, 0)
    grid = VoxelGrid(6, 3, 3, occupancy=solids)
    finder = JumpPointFinder()

    path = finder.find_path(0, 0, 1, 5, 2, 0, grid)

    assert path[0] == (0, 0, 1)
    assert path[-1] == (5, 2, 0)
    assert_traversable(grid, path)


def test_start_equals_end() -> None:
    grid = VoxelGrid.empty(3, 3, 1)
    finder = JumpPointFinder()

    assert finder.find_path(1, 1, 0, 1, 1, 0, grid) == [(1, 1, 0)]


def test_no_path_returns_empty_list() -> None:
    # every cell except the two endpoints is unwalkable
    walls = [(x, y) for x in range(5) for y in range(3) if (x, y) not in ((0, 1), (4, 1))]
    grid = wall_grid(5, 3, walls)
    finder = JumpPointFinder()

    result = finder.search(0, 1, 0, 4, 1, 0, grid)

    assert result.path == []
    assert not result.success
    assert result.reason == "no_path_found"


def test_wall_without_gap_blocks_path() -> None:
    grid = wall_grid(5, 4, [(2, y) for y in range(4)])
    finder = JumpPointFinder()

    assert finder.find_path(0, 0, 0, 4, 3, 0, grid) == []


def test_max_steps_exhaustion() -> None:
    grid = wall_grid(7, 7, [(3, y) for y in range(6)])
    finder = JumpPointFinder(max_steps=1)

    result = finder.search(0, 0, 0, 6, 0, 0, grid)

    assert not result.success
    assert result.reason == "max_steps_exhausted"
    assert result.path == []


def test_invalid_start_outside_grid() -> None:
    grid = VoxelGrid.empty(3, 3, 1)
    finder = JumpPointFinder()

    with pytest.raises(InvalidCoordinateError) as excinfo:
        finder.find_path(-1, 0, 0, 2, 2, 0, grid)

    assert excinfo.value.role == "start"
    assert isinstance(excinfo.value, ValueError)


def test_invalid_end_not_walkable() -> None:
    grid = wall_grid(3, 3, [(2, 2)])
    finder = JumpPointFinder()

    with pytest.raises(InvalidCoordinateError) as excinfo:
        finder.find_path(0, 0, 0, 2, 2, 0, grid)

    assert excinfo.value.role == "end"
    assert excinfo.value.coord == (2, 2, 0)


def test_finder_is_reusable_across_runs() -> None:
    grid = wall_grid(7, 7, [(3, y) for y in range(6)])
    finder = JumpPointFinder()

    first = finder.find_path(0, 0, 0, 6, 0, 0, grid)
    second = finder.find_path(0, 0, 0, 6, 0, 0, grid)
    reverse = finder.find_path(6, 0, 0, 0, 0, 0, grid)

    assert first == second
    assert reverse[0] == (6, 0, 0)
    assert reverse[-1] == (0, 0, 0)


def test_jump_points_are_sparse() -> None:
    grid = wall_grid(7, 7, [(3, y) for y in range(6)])
    finder = JumpPointFinder()

    result = finder.search(0, 0, 0, 6, 0, 0, grid)

    assert result.success
    assert result.jump_points[0] == (0, 0, 0)
    assert result.jump_points[-1] == (6, 0, 0)
    assert len(result.jump_points) < len(result.path)
    assert path_length(result.jump_points) == pytest.approx(path_length(result.path))


def test_track_jump_recursion_marks_tested_cells() -> None:
    grid = VoxelGrid.empty(5, 5, 1)
    finder = JumpPointFinder(track_jump_recursion=True)

    finder.find_path(0, 0, 0, 4, 4, 0, grid)
    tested = finder.nodes.tested()

    assert (4, 4, 0) in tested
    assert all(grid.is_walkable_at(*c) for c in tested)


def test_euclidean_heuristic_finds_straight_line() -> None:
    grid = VoxelGrid.empty(6, 6, 1)
    finder = JumpPointFinder(heuristic=euclidean)

    path = finder.find_path(0, 0, 0, 5, 5, 0, grid)

    assert path_length(path) == pytest.approx(5 * 2 ** 0.5)


def test_max_steps_does_not_mask_an_exhausted_search() -> None:
    # left half is sealed off; running out of work is "no path", even when
    # the cap is hit on the same expansion
    grid = wall_grid(6, 5, [(3, y) for y in range(5)] + [(1, 2)])
    finder = JumpPointFinder()
    unbounded = finder.search(0, 0, 0, 5, 4, 0, grid)

    bounded = JumpPointFinder(max_steps=unbounded.expanded_nodes).search(0, 0, 0, 5, 4, 0, grid)

    assert unbounded.reason == "no_path_found"
    assert bounded.reason == "no_path_found"


def test_climbs_diagonally_onto_a_block_in_a_corner() -> None:
    # both ways up to (1, 1, 1) cost the same; one of them must survive pruning
    grid = VoxelGrid(2, 2, 2, occupancy=SolidSet([(1, 1, 0)]))
    finder = JumpPointFinder()

    result = finder.search(0, 0, 0, 1, 1, 1, grid)

    assert result.success
    assert result.jump_points == [(0, 0, 0), (1, 0, 0), (1, 1, 1)]
    assert_traversable(grid, result.path)


def reachable_from(grid: VoxelGrid, start) -> set:
    """Plain breadth-first flood over the same move model."""
    seen = {start}
    queue = deque([start])
    while queue:
        x, y, z = queue.popleft()
        for move in MOVES:
            if not is_legal_move(grid.is_walkable_at, x, y, z, move):
                continue
            cell = (x + move[0], y + move[1], z + move[2])
            if cell not in seen:
                seen.add(cell)
                queue.append(cell)
    return seen


def random_grid(rng: random.Random) -> VoxelGrid:
    width, height, depth = rng.randint(2, 7), rng.randint(2, 7), rng.randint(2, 4)
    solids = SolidSet(
        (x, y, z)
        for z in range(depth)
        for y in range(height)
        for x in range(width)
        if rng.random() < 0.35
    )
    return VoxelGrid(width, height, depth, occupancy=solids)


@pytest.mark.parametrize("seed", range(20))
def test_finds_a_path_whenever_one_exists(seed: int) -> None:
    rng = random.Random(seed)
    finder = JumpPointFinder()

    for _ in range(40):
        grid = random_grid(rng)
        cells = [
            (x, y, z)
            for z in range(grid.depth)
            for y in range(grid.height)
            for x in range(grid.width)
            if grid.is_walkable_at(x, y, z)
        ]
        if len(cells) < 2:
            continue
        start, end = rng.sample(cells, 2)

        path = finder.find_path(*start, *end, grid)

        assert bool(path) == (end in reachable_from(grid, start)), (start, end)
        if path:
            assert path[0] == start
            assert path[-1] == end
            for a, b in zip(path, path[1:]):
                move = tuple(q - p for p, q in zip(a, b))
                assert move in MOVES
                assert is_legal_move(grid.is_walkable_at, *a, move)
