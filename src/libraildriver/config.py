"""
Configuration for locating the RailDriver DLL.

Settings come from a YAML file or from environment variables::

    library_path: C:/Games/RailWorks/plugins/RailDriver64.dll   # optional
    plugins_dir: C:/Games/RailWorks/plugins                     # optional
    log_level: DEBUG                                            # optional

An explicit ``library_path`` wins; otherwise the DLL matching the
interpreter's architecture is picked from ``plugins_dir`` (or the default
Steam RailWorks plugins folder).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import yaml

from .constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_PLUGINS_DIR,
    ENV_DLL_PATH,
    ENV_LOG_LEVEL,
    ENV_PLUGINS_DIR,
)
from .exceptions import ConfigError
from .native import locate_library

logger = logging.getLogger(__name__)

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_KNOWN_KEYS = {"library_path", "plugins_dir", "log_level"}


@dataclass(frozen=True)
class RailDriverConfig:
    """Where to find the DLL and how chatty to be."""

    library_path: Path | None = None
    plugins_dir: Path | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RailDriverConfig:
        """Build a config from ``RAILDRIVER_DLL``, ``RAILWORKS_PLUGINS`` and
        ``RAILDRIVER_LOG_LEVEL``.  Unset or empty variables keep defaults.
        """
        env = os.environ if environ is None else environ
        library_path = env.get(ENV_DLL_PATH) or None
        plugins_dir = env.get(ENV_PLUGINS_DIR) or None
        log_level = _parse_log_level(env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL)
        return cls(
            library_path=Path(library_path) if library_path else None,
            plugins_dir=Path(plugins_dir) if plugins_dir else None,
            log_level=log_level,
        )

    def resolve_library(self) -> Path:
        """Return the DLL path this config points at.

        Raises:
            LibraryError: If no suitable DLL exists in the plugins folder.
        """
        if self.library_path is not None:
            return self.library_path
        return locate_library(self.plugins_dir or DEFAULT_PLUGINS_DIR)


def load_config(path: str | Path) -> RailDriverConfig:
    """Load and validate a configuration from a YAML file.

    Args:
        path: Path to the YAML config file.

    Returns:
        A validated :class:`RailDriverConfig`.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ConfigError: If the config is malformed or contains invalid values.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Cannot parse {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    unknown = set(raw) - _KNOWN_KEYS
    if unknown:
        logger.warning("Ignoring unknown config keys in %s: %s", path, sorted(unknown))

    return RailDriverConfig(
        library_path=_optional_path(raw, "library_path"),
        plugins_dir=_optional_path(raw, "plugins_dir"),
        log_level=_parse_log_level(raw.get("log_level", DEFAULT_LOG_LEVEL)),
    )


def _optional_path(raw: dict, key: str) -> Path | None:
    val = raw.get(key)
    if val is None:
        return None
    if not isinstance(val, str) or not val:
        raise ConfigError(f"'{key}' must be a non-empty string, got {val!r}")
    return Path(val)


def _parse_log_level(val: object) -> str:
    if not isinstance(val, str) or val.upper() not in _VALID_LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {list(_VALID_LOG_LEVELS)}, got {val!r}")
    return val.upper()
