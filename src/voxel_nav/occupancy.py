# src/voxel_nav/occupancy.py
"""
Occupancy sources for VoxelGrid.

An occupancy source is any callable `occupancy(x, y, z) -> value`. The grid
only ever asks one question of the value: is this voxel empty?

This module provides:
- is_empty_voxel: the "air-like" rule shared by every source
- empty_occupancy: everything is air (only the ground layer is standable)
- VoxelArray: dense nested lists indexed voxels[z][y][x]
- SolidSet: sparse set of solid coordinates

It does NOT decide walkability; the support rule lives in VoxelGrid.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence, Tuple

# Signature for an occupancy lookup:
#   occupancy(x, y, z) -> value   (0 / air-like means passable)
OccupancyFn = Callable[[int, int, int], Any]


def is_empty_voxel(value: Any) -> bool:
    """
    Decide if a voxel value is "air".

    Handles the common encodings:

        - None, False, 0   → air
        - {} or []         → air
        - mapping with id/name "air" or "minecraft:air" → air

    Anything else is treated as solid.
    """
    if value is None or value is False:
        return True

    if isinstance(value, (int, float)) and value == 0:
        return True

    if value == {} or value == []:
        return True

    if isinstance(value, dict):
        vid = value.get("id") or value.get("name")
        if isinstance(vid, str) and vid.lower() in ("minecraft:air", "air"):
            return True

    return False


def empty_occupancy(x: int, y: int, z: int) -> int:
    """Occupancy source with no solid voxels at all."""
    return 0


class VoxelArray:
    """
    Dense occupancy source over nested lists indexed voxels[z][y][x].

    Rows may be ragged; anything outside the stored data reads as air.
    """

    def __init__(self, voxels: Sequence[Sequence[Sequence[Any]]]) -> None:
        self.voxels = voxels

    @property
    def shape(self) -> Tuple[int, int, int]:
        """(width, height, depth) covering every stored voxel."""
        depth = len(self.voxels)
        height = max((len(layer) for layer in self.voxels), default=0)
        width = max(
            (len(row) for layer in self.voxels for row in layer),
            default=0,
        )
        return width, height, depth

    def __call__(self, x: int, y: int, z: int) -> Any:
        if x < 0 or y < 0 or z < 0:
            return 0
        try:
            return self.voxels[z][y][x]
        except IndexError:
            return 0


class SolidSet:
    """Sparse occupancy source: the listed coordinates are solid (value 1)."""

    def __init__(self, solids: Iterable[Tuple[int, int, int]] = ()) -> None:
        self.solids = {tuple(c) for c in solids}

    def add(self, x: int, y: int, z: int) -> None:
        self.solids.add((x, y, z))

    def add_column(self, x: int, y: int, z_min: int, z_max: int) -> None:
        """Mark (x, y, z_min..z_max) inclusive as solid."""
        for z in range(z_min, z_max + 1):
            self.solids.add((x, y, z))

    def __call__(self, x: int, y: int, z: int) -> int:
        return 1 if (x, y, z) in self.solids else 0
