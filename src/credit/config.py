"""User configuration management using tomlkit."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError

from credit.models import ProjectConfig

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "CREDIT_CONFIG_DIR"
CONFIG_FILE = "config.toml"
LOG_FILE = "credit.log"


def get_config_dir() -> Path:
    """Directory holding config.toml, theme.yaml and the log file."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "credit"


def _get_config_path(config_dir: Path) -> Path:
    return config_dir / CONFIG_FILE


def _positive_int(value: object, default: int) -> int:
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def load_config(config_dir: Path) -> ProjectConfig:
    """Load configuration from {config_dir}/config.toml (defaults if absent)."""
    config_path = _get_config_path(config_dir)
    config = ProjectConfig()

    if not config_path.exists():
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        doc = tomlkit.parse(content)
    except (OSError, TOMLKitError):
        logger.warning("Unreadable config %s, using defaults", config_path, exc_info=True)
        return config

    # [github]
    github_section = doc.get("github", {})
    config.api_url = str(github_section.get("api_url", config.api_url))
    config.token_env = str(github_section.get("token_env", config.token_env))

    # [export]
    export_section = doc.get("export", {})
    config.output = str(export_section.get("output", config.output))

    # [search]
    search_section = doc.get("search", {})
    config.days = _positive_int(search_section.get("days"), config.days)

    # [layout]
    layout_section = doc.get("layout", {})
    config.list_weight = _positive_int(layout_section.get("list_weight"), config.list_weight)
    config.editor_weight = _positive_int(
        layout_section.get("editor_weight"), config.editor_weight
    )

    return config


def save_config(config_dir: Path, config: ProjectConfig) -> Path:
    """Save configuration to {config_dir}/config.toml."""
    config_path = _get_config_path(config_dir)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    doc = tomlkit.document()
    doc.add(tomlkit.comment("credit configuration"))

    github_table = tomlkit.table()
    github_table.add("api_url", config.api_url)
    github_table.add("token_env", config.token_env)
    doc.add("github", github_table)

    export_table = tomlkit.table()
    export_table.add("output", config.output)
    doc.add("export", export_table)

    search_table = tomlkit.table()
    search_table.add("days", config.days)
    doc.add("search", search_table)

    layout_table = tomlkit.table()
    layout_table.add("list_weight", config.list_weight)
    layout_table.add("editor_weight", config.editor_weight)
    doc.add("layout", layout_table)

    config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")
    return config_path
