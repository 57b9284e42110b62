# src/voxel_nav/heuristics.py
"""
Distance estimators for the finder.

Every heuristic takes the absolute per-axis deltas (dx, dy, dz) and returns
an estimate of the remaining cost. Only euclidean is admissible for the
Euclidean move costs used by the finder; manhattan is the default because
it drives the search toward the goal more aggressively.
"""

from __future__ import annotations

import math
from typing import Callable, Dict

HeuristicFn = Callable[[int, int, int], float]


def manhattan(dx: int, dy: int, dz: int) -> float:
    """Sum of absolute differences."""
    return dx + dy + dz


def euclidean(dx: int, dy: int, dz: int) -> float:
    """Straight-line distance."""
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def chebyshev(dx: int, dy: int, dz: int) -> float:
    return max(dx, dy, dz)


HEURISTICS: Dict[str, HeuristicFn] = {
    "manhattan": manhattan,
    "euclidean": euclidean,
    "chebyshev": chebyshev,
}


def get_heuristic(name: str) -> HeuristicFn:
    """Look up a heuristic by name; raises ValueError for unknown names."""
    try:
        return HEURISTICS[name]
    except KeyError:
        known = ", ".join(sorted(HEURISTICS))
        raise ValueError(f"Unknown heuristic '{name}' (expected one of: {known})") from None
