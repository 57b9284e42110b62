# src/env/loader.py
"""
Navigation profile loader.

Reads config/nav.yaml:

    profile: default          # active profile name
    profiles:
      default:
        heuristic: manhattan
        max_steps: null
        ...

and resolves one profile into a NavProfile. Unknown keys are rejected so
typos in the YAML don't silently fall back to defaults.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from voxel_nav.heuristics import HEURISTICS

from .schema import NavProfile

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG = CONFIG_ROOT / "nav.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_PROFILE_KEYS = {f.name for f in fields(NavProfile)} - {"name"}

log = logging.getLogger(__name__)


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from `path`."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _select_profile(cfg: Dict[str, Any], name: Optional[str]) -> Tuple[str, Dict[str, Any]]:
    """Return (profile_name, profile_mapping)."""
    profile_name = name or cfg.get("profile")
    if not profile_name:
        raise ValueError("nav.yaml must define a 'profile' key.")
    profiles = cfg.get("profiles")
    if not isinstance(profiles, dict):
        raise ValueError("nav.yaml must define a 'profiles' mapping.")
    if profile_name not in profiles:
        raise KeyError(f"Profile '{profile_name}' not found in nav.yaml profiles.")
    raw = profiles[profile_name] or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Profile '{profile_name}' must be a mapping, got {type(raw)}")
    return profile_name, raw


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_nav_profile(name: Optional[str] = None, path: Optional[Path] = None) -> NavProfile:
    """
    Main entry point: return the NavProfile called `name`.

    `name` defaults to the file's `profile` key; `path` defaults to
    config/nav.yaml at the project root.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG
    cfg = _load_yaml(config_path)
    profile_name, raw = _select_profile(cfg, name)

    unknown = set(raw) - _PROFILE_KEYS
    if unknown:
        raise ValueError(
            f"Unknown keys in profile '{profile_name}': {', '.join(sorted(unknown))}"
        )

    profile = NavProfile(name=profile_name, **raw)
    _validate_profile(profile)
    log.debug("Loaded nav profile %s from %s", profile_name, config_path)
    return profile


def _validate_profile(profile: NavProfile) -> None:
    """Minimal sanity checks for a profile."""
    if profile.heuristic not in HEURISTICS:
        raise ValueError(f"Invalid heuristic: {profile.heuristic}")

    if profile.max_steps is not None:
        if isinstance(profile.max_steps, bool) or not isinstance(profile.max_steps, int):
            raise ValueError(f"max_steps must be an int or null, got {profile.max_steps!r}")
        if profile.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {profile.max_steps}")

    for flag in ("track_jump_recursion", "smoothen", "compress"):
        if not isinstance(getattr(profile, flag), bool):
            raise ValueError(f"{flag} must be true or false")

    if str(profile.log_level).upper() not in _LOG_LEVELS:
        raise ValueError(f"Invalid log_level: {profile.log_level}")
