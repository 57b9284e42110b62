# src/env/__init__.py
"""Configuration profiles for voxel_nav (config/nav.yaml)."""

from __future__ import annotations

from .loader import load_nav_profile
from .schema import NavProfile

__all__ = ["NavProfile", "load_nav_profile"]
