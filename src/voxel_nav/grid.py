# navigation grid abstraction over a voxel occupancy source
# src/voxel_nav/grid.py
"""
VoxelGrid: walkability and neighbor queries over a voxel occupancy source.

This module does not know what the voxels mean. It only:
- Applies the support rule (an agent stands on solid ground).
- Enumerates one-step neighbors for the search.

The occupancy source is read-only for the lifetime of a search.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, List, Sequence

from .node import Node
from .occupancy import OccupancyFn, VoxelArray, empty_occupancy, is_empty_voxel

# Axis offsets on the x-y plane, in order: N, E, S, W
_AXIS_OFFSETS = ((0, -1), (1, 0), (0, 1), (-1, 0))

# Diagonal offsets, in order: NW, NE, SE, SW.
# Diagonal i is flanked by axis offsets (i + 3) % 4 and i.
_DIAGONAL_OFFSETS = ((-1, -1), (1, -1), (1, 1), (-1, 1))

# Layers considered by get_neighbors, relative to the node's z.
_LAYER_OFFSETS = (-1, 0, 1)


@dataclass
class VoxelGrid:
    """
    Navigation grid of `width` x `height` x `depth` voxels.

    z is the vertical axis; z = 0 is the ground layer.

    Responsibilities:
    - Provide walkability tests (is_walkable_at).
    - Provide neighbor nodes for pathfinding (get_neighbors).

    It does NOT:
    - Own any search state.
    - Copy or mutate the occupancy source.
    """

    width: int
    height: int
    depth: int
    occupancy: OccupancyFn = empty_occupancy

    def __post_init__(self) -> None:
        for name in ("width", "height", "depth"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"VoxelGrid.{name} must be a non-negative int, got {value!r}")

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_voxels(cls, voxels: Sequence[Sequence[Sequence[Any]]]) -> "VoxelGrid":
        """Build a grid from nested lists indexed voxels[z][y][x]."""
        source = VoxelArray(voxels)
        width, height, depth = source.shape
        return cls(width=width, height=height, depth=depth, occupancy=source)

    @classmethod
    def empty(cls, width: int, height: int, depth: int = 1) -> "VoxelGrid":
        """All-air grid: only the ground layer is walkable."""
        return cls(width=width, height=height, depth=depth)

    # ------------------------------------------------------------------
    # Core queries
    # ------------------------------------------------------------------

    def in_bounds(self, x: int, y: int, z: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height and 0 <= z < self.depth

    def is_empty_at(self, x: int, y: int, z: int) -> bool:
        """True if the voxel at (x, y, z) is air according to the source."""
        return is_empty_voxel(self.occupancy(x, y, z))

    def is_walkable_at(self, x: int, y: int, z: int) -> bool:
        """
        Determine if an agent can stand at (x, y, z).

        Rule:
        - (x, y, z) is inside the grid and empty.
        - The voxel below is solid, or z is the ground layer.
        """
        if not self.in_bounds(x, y, z):
            return False
        if not self.is_empty_at(x, y, z):
            return False
        if z == 0:
            return True
        return not self.is_empty_at(x, y, z - 1)

    def get_node_at(self, x: int, y: int, z: int) -> Node:
        """
        Materialize a Node for (x, y, z).

        This does not imply walkability; check is_walkable_at separately.
        """
        return Node(x, y, z)

    def get_neighbors(
        self,
        node: Node,
        allow_diagonal: bool = False,
        dont_cross_corners: bool = False,
    ) -> List[Node]:
        """
        Return walkable cells one step away from `node`.

        For each layer z-1, z, z+1:
          - the four axis directions (N, E, S, W) if walkable,
          - with allow_diagonal, the four diagonals (NW, NE, SE, SW), each
            gated by its two flanking axis cells on that same layer:
            both walkable with dont_cross_corners, either one otherwise.

             axis          diagonal
          +---+---+---+  +---+---+---+
          |   | 0 |   |  | 0 |   | 1 |
          +---+---+---+  +---+---+---+
          | 3 |   | 1 |  |   |   |   |
          +---+---+---+  +---+---+---+
          |   | 2 |   |  | 3 |   | 2 |
          +---+---+---+  +---+---+---+
        """
        x, y, z = node.x, node.y, node.z
        neighbors: List[Node] = []

        for cz in _LAYER_OFFSETS:
            nz = z + cz
            open_axes: List[bool] = []

            for dx, dy in _AXIS_OFFSETS:
                walkable = self.is_walkable_at(x + dx, y + dy, nz)
                open_axes.append(walkable)
                if walkable:
                    neighbors.append(self.get_node_at(x + dx, y + dy, nz))

            if not allow_diagonal:
                continue

            for i, (dx, dy) in enumerate(_DIAGONAL_OFFSETS):
                left, right = open_axes[(i + 3) % 4], open_axes[i]
                if dont_cross_corners:
                    gate = left and right
                else:
                    gate = left or right
                if gate and self.is_walkable_at(x + dx, y + dy, nz):
                    neighbors.append(self.get_node_at(x + dx, y + dy, nz))

        return neighbors

    def clone(self) -> "VoxelGrid":
        """
        Return an independent handle over the same occupancy source.

        The source itself is shared, not copied.
        """
        return replace(self)
