# NavProfile dataclass
# src/env/schema.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class NavProfile:
    """Resolved navigation settings for one named profile."""
    name: str = "default"
    heuristic: str = "manhattan"        # "manhattan", "euclidean" or "chebyshev"
    track_jump_recursion: bool = False  # mark cells visited by jump rays
    max_steps: Optional[int] = None     # cap on open-list pops; None = unbounded
    smoothen: bool = False              # line-of-sight smoothing of the route
    compress: bool = True               # drop collinear waypoints
    log_level: str = "INFO"
