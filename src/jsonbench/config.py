"""
Configuration for jsonbench.

All ceilings and tunables in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/jsonbench/config.toml) if exists
3. Environment variables (JSONBENCH_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_TREE_NODES = 1000
MAX_RECURSION_DEPTH = 50
MAX_PATH_LENGTH = 500
MAX_PATH_INDEX = 10000
MAX_RESULT_CHARS = 100_000
MAX_INPUT_SIZE = 10 * 1024 * 1024  # 10 MiB, caller-side admission cap
OFFLOAD_THRESHOLD = 1024 * 1024  # 1 MiB, above this decoding goes to the worker


@dataclass
class LimitsConfig:
    """Traversal, query and validation ceilings."""
    max_nodes: int = MAX_TREE_NODES
    max_depth: int = MAX_RECURSION_DEPTH
    max_path_length: int = MAX_PATH_LENGTH
    max_index: int = MAX_PATH_INDEX
    max_result_chars: int = MAX_RESULT_CHARS


@dataclass
class IOConfig:
    """Input admission and decode routing."""
    max_input_size: int = MAX_INPUT_SIZE
    offload_threshold: int = OFFLOAD_THRESHOLD


@dataclass
class ExportConfig:
    """Converter output settings."""
    indent: int = 2
    xml_root: str = "root"
    xml_item: str = "item"
    csv_delimiter: str = ","


@dataclass
class Config:
    """Root config with all settings."""
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    io: IOConfig = field(default_factory=IOConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "jsonbench" / "config.toml"
    return Path.home() / ".config" / "jsonbench" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            logger.warning("Ignoring config file %s: %s", path, e)
            config = Config()

    # env var overrides
    config = _apply_env(config)

    return config


# section -> {key: converter}
_SCHEMA: dict[str, dict[str, type]] = {
    "limits": {
        "max_nodes": int,
        "max_depth": int,
        "max_path_length": int,
        "max_index": int,
        "max_result_chars": int,
    },
    "io": {
        "max_input_size": int,
        "offload_threshold": int,
    },
    "export": {
        "indent": int,
        "xml_root": str,
        "xml_item": str,
        "csv_delimiter": str,
    },
}


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config. Unknown sections and keys are ignored."""
    for section, keys in _SCHEMA.items():
        if section not in data:
            continue
        values = data[section]
        target = getattr(config, section)
        for key, conv in keys.items():
            if key in values:
                setattr(target, key, conv(values[key]))
    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str, type]] = {
        "JSONBENCH_MAX_NODES": ("limits", "max_nodes", int),
        "JSONBENCH_MAX_DEPTH": ("limits", "max_depth", int),
        "JSONBENCH_MAX_PATH_LENGTH": ("limits", "max_path_length", int),
        "JSONBENCH_MAX_INDEX": ("limits", "max_index", int),
        "JSONBENCH_MAX_RESULT_CHARS": ("limits", "max_result_chars", int),
        "JSONBENCH_MAX_INPUT_SIZE": ("io", "max_input_size", int),
        "JSONBENCH_OFFLOAD_THRESHOLD": ("io", "offload_threshold", int),
        "JSONBENCH_INDENT": ("export", "indent", int),
        "JSONBENCH_XML_ROOT": ("export", "xml_root", str),
        "JSONBENCH_XML_ITEM": ("export", "xml_item", str),
        "JSONBENCH_CSV_DELIMITER": ("export", "csv_delimiter", str),
    }

    for env_key, (section, attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            with contextlib.suppress(ValueError):
                setattr(getattr(config, section), attr, conv(val))

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached instance so the next get_config() reloads."""
    global _config
    _config = None
