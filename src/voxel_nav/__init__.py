# src/voxel_nav/__init__.py
"""
voxel_nav: jump point search over layered voxel grids.

Provides:
- VoxelGrid: walkability queries with a "stand on solid ground" rule
- JumpPointFinder: 3D jump point search (find_path / search)
- Path utilities: backtrace, bi_backtrace, path_length, interpolate,
  expand_path, smoothen_path, compress_path
- plan_route: search plus configured smoothing/compression
"""

from __future__ import annotations

from .errors import InvalidCoordinateError, NavError
from .finder import JumpPointFinder, PathfindingResult
from .grid import VoxelGrid
from .heuristics import chebyshev, euclidean, get_heuristic, manhattan
from .node import Coord, Node, NodeTable
from .occupancy import OccupancyFn, SolidSet, VoxelArray, is_empty_voxel
from .planner import RouteResult, plan_route
from .util import (
    backtrace,
    bi_backtrace,
    compress_path,
    expand_path,
    interpolate,
    path_length,
    smoothen_path,
)

__all__ = [
    "Coord",
    "InvalidCoordinateError",
    "JumpPointFinder",
    "NavError",
    "Node",
    "NodeTable",
    "OccupancyFn",
    "PathfindingResult",
    "RouteResult",
    "SolidSet",
    "VoxelArray",
    "VoxelGrid",
    "backtrace",
    "bi_backtrace",
    "chebyshev",
    "compress_path",
    "euclidean",
    "expand_path",
    "get_heuristic",
    "interpolate",
    "is_empty_voxel",
    "manhattan",
    "path_length",
    "plan_route",
    "smoothen_path",
]
