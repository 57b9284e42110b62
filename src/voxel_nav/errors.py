# src/voxel_nav/errors.py
"""
Exception types for voxel_nav.

Only caller mistakes are exceptions here. "No path exists" is a normal
search outcome and is reported as an empty path / unsuccessful
PathfindingResult instead.
"""

from __future__ import annotations

from typing import Tuple


class NavError(Exception):
    """Base class for navigation errors."""


class InvalidCoordinateError(NavError, ValueError):
    """
    Raised when a search endpoint cannot be used as a search state.

    Attributes:
        coord:  the offending (x, y, z) coordinate
        role:   "start" or "end"
        reason: short description ("outside grid bounds", "not walkable")
    """

    def __init__(self, coord: Tuple[int, int, int], role: str, reason: str) -> None:
        self.coord = tuple(coord)
        self.role = role
        self.reason = reason
        super().__init__(f"Invalid {role} coordinate {self.coord}: {reason}")
