# src/voxel_nav/planner.py
"""
Route planning: jump point search plus path post-processing.

plan_route() is the one-call entry point for callers that just want
waypoints. It:
- builds a JumpPointFinder from a NavProfile,
- runs the search,
- smoothens and/or compresses the expanded path as the profile says.

It does NOT execute movement; that is the caller's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from env.schema import NavProfile

from .finder import JumpPointFinder
from .grid import VoxelGrid
from .node import Coord
from .util import compress_path, path_length, smoothen_path

log = logging.getLogger(__name__)


@dataclass
class RouteResult:
    """Outcome of plan_route()."""

    success: bool
    # expanded cell-by-cell path from the finder
    path: List[Coord] = field(default_factory=list)
    # post-processed waypoints (equal to path when no post-processing runs)
    waypoints: List[Coord] = field(default_factory=list)
    reason: str | None = None
    length: float = 0.0
    expanded_nodes: int = 0

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "reason": self.reason,
            "path": [list(p) for p in self.path],
            "waypoints": [list(p) for p in self.waypoints],
            "length": self.length,
            "expanded_nodes": self.expanded_nodes,
        }


def plan_route(
    grid: VoxelGrid,
    start: Coord,
    end: Coord,
    profile: Optional[NavProfile] = None,
) -> RouteResult:
    """
    Plan a route from start to end.

    Raises InvalidCoordinateError for unusable endpoints; an unreachable
    goal is an unsuccessful RouteResult, not an exception.
    """
    profile = profile or NavProfile()
    finder = JumpPointFinder.from_profile(profile)

    result = finder.search(*start, *end, grid)
    if not result.success:
        log.info("No route %s -> %s (%s)", start, end, result.reason)
        return RouteResult(
            success=False,
            reason=result.reason,
            expanded_nodes=result.expanded_nodes,
        )

    waypoints = list(result.path)
    if profile.smoothen:
        waypoints = smoothen_path(grid, waypoints)
    if profile.compress:
        waypoints = compress_path(waypoints)

    route = RouteResult(
        success=True,
        path=result.path,
        waypoints=waypoints,
        length=path_length(waypoints),
        expanded_nodes=result.expanded_nodes,
    )
    log.info(
        "Route %s -> %s: %d cells, %d waypoints, length %.2f",
        start,
        end,
        len(route.path),
        len(route.waypoints),
        route.length,
    )
    return route
