# src/cli/find_path.py
"""
Command-line route planner.

    python -m cli.find_path world.yaml --start 0 0 0 --end 9 9 0 [--render]

The world file is YAML with a `voxels` key holding nested lists indexed
voxels[z][y][x] (0 = air). The route is printed to stdout as JSON;
--render draws every layer to stderr with rich.

Exit status: 0 route found, 1 no route, 2 invalid input.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import yaml
from rich.console import Console
from rich.table import Table
from rich.text import Text

from env.loader import load_nav_profile
from voxel_nav.errors import InvalidCoordinateError
from voxel_nav.grid import VoxelGrid
from voxel_nav.logging_config import configure_logging
from voxel_nav.node import Coord
from voxel_nav.planner import RouteResult, plan_route

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_ROUTE = 1
EXIT_INVALID = 2


def load_world(path: Path) -> VoxelGrid:
    """Build a VoxelGrid from a YAML world file."""
    with Path(path).open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict) or "voxels" not in data:
        raise ValueError(f"World file {path} must be a mapping with a 'voxels' key.")
    voxels = data["voxels"]
    if not isinstance(voxels, list) or not all(isinstance(layer, list) for layer in voxels):
        raise ValueError(f"'voxels' in {path} must be a list of layers ([z][y][x]).")
    return VoxelGrid.from_voxels(voxels)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_route(grid: VoxelGrid, route: RouteResult, console: Console) -> None:
    """
    Draw each z-layer as a table of cells:

        #  solid     .  walkable    (blank) unsupported air
        *  path      o  waypoint
    """
    on_path = set(route.path)
    waypoints = set(route.waypoints)

    for z in range(grid.depth):
        table = Table(title=f"z = {z}", show_header=False, show_lines=False, box=None)
        for _ in range(grid.width):
            table.add_column(justify="center", width=1)

        for y in range(grid.height):
            cells: List[Text] = []
            for x in range(grid.width):
                coord = (x, y, z)
                if coord in waypoints:
                    cells.append(Text("o", style="bold green"))
                elif coord in on_path:
                    cells.append(Text("*", style="green"))
                elif not grid.is_empty_at(x, y, z):
                    cells.append(Text("#", style="dim"))
                elif grid.is_walkable_at(x, y, z):
                    cells.append(Text("."))
                else:
                    cells.append(Text(" "))
            table.add_row(*cells)

        console.print(table)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plan a route through a voxel world with jump point search."
    )
    parser.add_argument("world", type=Path, help="YAML world file with a 'voxels' key")
    parser.add_argument("--start", nargs=3, type=int, required=True, metavar=("X", "Y", "Z"))
    parser.add_argument("--end", nargs=3, type=int, required=True, metavar=("X", "Y", "Z"))
    parser.add_argument("--profile", default=None, help="Profile name from nav.yaml")
    parser.add_argument("--config", type=Path, default=None, help="Alternative nav.yaml")
    parser.add_argument("--render", action="store_true", help="Draw the route with rich")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _report_invalid(exc: Exception) -> int:
    # KeyError wraps its message in quotes
    message = exc.args[0] if isinstance(exc, KeyError) and exc.args else str(exc)
    log.error("%s", message)
    print(json.dumps({"success": False, "error": message}))
    return EXIT_INVALID


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        profile = load_nav_profile(args.profile, path=args.config)
        grid = load_world(args.world)
    except (FileNotFoundError, KeyError, ValueError, yaml.YAMLError) as exc:
        return _report_invalid(exc)

    configure_logging("DEBUG" if args.verbose else profile.log_level)

    start: Coord = tuple(args.start)  # type: ignore[assignment]
    end: Coord = tuple(args.end)  # type: ignore[assignment]

    try:
        route = plan_route(grid, start, end, profile)
    except InvalidCoordinateError as exc:
        return _report_invalid(exc)

    print(json.dumps(route.to_dict(), indent=2, sort_keys=True))

    if args.render:
        render_route(grid, route, Console(stderr=True))

    return EXIT_OK if route.success else EXIT_NO_ROUTE


if __name__ == "__main__":
    sys.exit(main())
