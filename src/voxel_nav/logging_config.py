# src/voxel_nav/logging_config.py
"""
Logging setup for the route planner's entry points.

Finder and planner modules only create loggers. cli.find_path calls
configure_logging() with the active nav.yaml profile's `log_level` (or
DEBUG for -v). Records go to stderr because stdout carries the JSON
route report.
"""

from __future__ import annotations

import logging
import sys


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Attach a stderr handler to the root logger, or only adjust the level
    when a host application already installed handlers.

    Args:
        level: logging level as int (logging.DEBUG) or a profile name
            such as "debug" or "INFO"
    """
    root = logging.getLogger()

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    # Don't duplicate handlers if someone already configured logging.
    if root.handlers:
        root.setLevel(level)
        return

    handler = logging.StreamHandler(stream=sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(level)
