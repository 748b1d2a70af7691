"""YAML-based styles for the worklist editor.

Loads styles from default_theme.yaml and optionally merges
user-level overrides from {config_dir}/theme.yaml. The result is an
explicit ``Theme`` value handed to the layout and panels.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

THEME_FILE = "theme.yaml"
_DEFAULT_THEME = Path(__file__).parent / "default_theme.yaml"


@dataclass(frozen=True)
class Theme:
    """Rich style strings for every styled region of the UI."""

    # list panel
    title: str = "bold #ffffff on #5f87ff"
    item: str = ""
    cursor_item: str = "#d75fd7"
    selected_glyph: str = "#04b575"
    status_bar: str = "#777777"
    pagination: str = "#4e4e4e"
    # editor panel
    repo_name: str = "#5f87ff"
    label: str = "bold"
    placeholder: str = "#777777"
    caret: str = "reverse"
    # frame
    focused_border: str = "#5f87ff"
    blurred_border: str = ""
    help: str = "#777777"


# ── Internal helpers ──────────────────────────────────────────────

def _load_yaml(path: Path) -> dict:
    """Load a YAML file and return a dict (empty dict on error)."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        logger.warning("Failed to load theme file %s", path, exc_info=True)
        return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (returns a new dict)."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _build(data: dict) -> Theme:
    """Flatten the list/editor/frame sections onto Theme fields."""
    known = {f.name for f in fields(Theme)}
    values: dict[str, str] = {}
    for section in ("list", "editor", "frame"):
        entries = data.get(section, {})
        if not isinstance(entries, dict):
            continue
        for key, val in entries.items():
            if key in known and val is not None:
                values[key] = str(val)
            elif key not in known:
                logger.debug("Ignoring unknown theme key %s.%s", section, key)
    return Theme(**values)


# ── Public API ────────────────────────────────────────────────────

def init_theme(config_dir: Path) -> Path:
    """Copy default_theme.yaml → {config_dir}/theme.yaml.

    Raises FileExistsError if the destination already exists.
    """
    dest = config_dir / THEME_FILE
    if dest.exists():
        raise FileExistsError(str(dest))
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(_DEFAULT_THEME, dest)
    return dest


def load_theme(config_dir: Path | None = None) -> Theme:
    """Load the default theme and optionally merge user overrides.

    1. Load ``default_theme.yaml`` bundled with the package.
    2. If *config_dir* is given and ``{config_dir}/theme.yaml``
       exists, deep-merge it on top of the defaults.
    3. Return the merged styles as a ``Theme``.
    """
    data = _load_yaml(_DEFAULT_THEME)

    if config_dir is not None:
        override_path = config_dir / THEME_FILE
        if override_path.is_file():
            override = _load_yaml(override_path)
            if override:
                data = _deep_merge(data, override)

    return _build(data)
