# src/voxel_nav/node.py
"""
Search nodes and the per-run node table.

A coordinate is the durable identity of a cell; a Node is the search
bookkeeping attached to that coordinate for one run. The finder owns one
NodeTable per find_path call, so bookkeeping never leaks between runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Set, Tuple

# (x, y, z) integer coordinates
Coord = Tuple[int, int, int]


@dataclass(eq=False)
class Node:
    """One grid cell plus transient search state."""

    x: int
    y: int
    z: int

    g: float = 0.0
    # None until the heuristic has been computed once for this run.
    h: Optional[float] = None
    f: float = 0.0

    opened: bool = False
    closed: bool = False
    # Set by the finder when track_jump_recursion is enabled.
    tested: bool = False

    parent: Optional["Node"] = field(default=None, repr=False)

    # Directions the node was reached along as a jump point: those still
    # waiting for expansion, and those already expanded.
    arrivals: Set[Coord] = field(default_factory=set, repr=False)
    expanded_from: Set[Coord] = field(default_factory=set, repr=False)

    @property
    def coord(self) -> Coord:
        return (self.x, self.y, self.z)


class NodeTable:
    """
    Coordinate-keyed Node storage for a single search run.

    get() always hands out the same Node for the same coordinate, which keeps
    the "one search state per coordinate" invariant.
    """

    def __init__(self) -> None:
        self._nodes: Dict[Coord, Node] = {}

    def get(self, x: int, y: int, z: int) -> Node:
        key = (x, y, z)
        node = self._nodes.get(key)
        if node is None:
            node = Node(x, y, z)
            self._nodes[key] = node
        return node

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def tested(self) -> list[Coord]:
        """Coordinates visited by jump rays (only populated when tracking)."""
        return [node.coord for node in self._nodes.values() if node.tested]
