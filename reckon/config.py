"""Configuration support for the reckon interpreter and CLI."""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError

CONFIG_FILENAMES = ("reckon.toml", "reckon.json")

ENV_MAX_DEPTH = "RECKON_MAX_DEPTH"
ENV_DECIMAL_PLACES = "RECKON_DECIMAL_PLACES"
ENV_RATES_FILE = "RECKON_RATES_FILE"
ENV_PLACEHOLDER = "RECKON_PLACEHOLDER"
ENV_STRICT_UNITS = "RECKON_STRICT_UNITS"
ENV_CONFIG_FILE = "RECKON_CONFIG"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ReckonConfig:
    """Resolved interpreter settings."""

    # Maximum nesting of parentheses and unary signs accepted by the parser
    max_depth: int = 64
    decimal_places: int = 2
    rates_file: Optional[Path] = None
    # Shown by front ends in place of a result when evaluation fails
    placeholder: str = "Nope"
    # Refuse conversions between units of different families
    strict_units: bool = False

    def with_overrides(self, **changes: Any) -> "ReckonConfig":
        values = {key: value for key, value in changes.items() if value is not None}
        return _validated(replace(self, **values))


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        if path.suffix == ".toml":
            data = _read_toml_config(path)
        else:
            data = _read_json_config(path)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a table of settings")
    section = data.get("reckon", data)
    if not isinstance(section, dict):
        raise ConfigError(f"The 'reckon' section of {path} must be a table")
    return section


def _as_int(name: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _as_bool(name: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}", hint="Use true or false")


def _validated(config: ReckonConfig) -> ReckonConfig:
    if config.max_depth < 1:
        raise ConfigError("max_depth must be at least 1", hint="The default is 64")
    if not 0 <= config.decimal_places <= 15:
        raise ConfigError("decimal_places must be between 0 and 15")
    return config


def _apply_settings(
    config: ReckonConfig,
    settings: Mapping[str, Any],
    base_dir: Optional[Path] = None,
) -> ReckonConfig:
    changes: Dict[str, Any] = {}
    if settings.get("max_depth") is not None:
        changes["max_depth"] = _as_int("max_depth", settings["max_depth"])
    if settings.get("decimal_places") is not None:
        changes["decimal_places"] = _as_int("decimal_places", settings["decimal_places"])
    if settings.get("rates_file"):
        rates_file = Path(str(settings["rates_file"]))
        if base_dir is not None and not rates_file.is_absolute():
            rates_file = base_dir / rates_file
        changes["rates_file"] = rates_file
    if settings.get("placeholder") is not None:
        changes["placeholder"] = str(settings["placeholder"])
    if settings.get("strict_units") is not None:
        changes["strict_units"] = _as_bool("strict_units", settings["strict_units"])
    return replace(config, **changes)


def _discover_config_file(start: Path) -> Optional[Path]:
    for filename in CONFIG_FILENAMES:
        candidate = start / filename
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    *,
    search_dir: Optional[Path] = None,
) -> ReckonConfig:
    """
    Resolve configuration from a file and environment overrides.

    Args:
        path: Explicit config file. When omitted, ``RECKON_CONFIG`` is used,
            then ``reckon.toml`` or ``reckon.json`` in ``search_dir``.
        env: Environment mapping, defaults to ``os.environ``.
        search_dir: Directory searched for a config file, defaults to the
            current working directory.

    Raises:
        ConfigError: If the file or an override is invalid.
    """
    environ = os.environ if env is None else env
    config = ReckonConfig()

    config_path = path
    if config_path is None and environ.get(ENV_CONFIG_FILE):
        config_path = Path(environ[ENV_CONFIG_FILE])
    if config_path is None:
        config_path = _discover_config_file(search_dir or Path.cwd())
    elif not config_path.is_file():
        raise ConfigError(f"Config file {config_path} does not exist")

    if config_path is not None:
        settings = _read_config_file(config_path)
        config = _apply_settings(config, settings, base_dir=config_path.parent)

    overrides = {
        "max_depth": environ.get(ENV_MAX_DEPTH),
        "decimal_places": environ.get(ENV_DECIMAL_PLACES),
        "rates_file": environ.get(ENV_RATES_FILE),
        "placeholder": environ.get(ENV_PLACEHOLDER),
        "strict_units": environ.get(ENV_STRICT_UNITS),
    }
    config = _apply_settings(config, overrides)
    return _validated(config)


@lru_cache(maxsize=1)
def get_config() -> ReckonConfig:
    """Return the process-wide configuration, loading it on first use."""
    return load_config()


__all__ = [
    "ReckonConfig",
    "load_config",
    "get_config",
    "CONFIG_FILENAMES",
    "ENV_MAX_DEPTH",
    "ENV_DECIMAL_PLACES",
    "ENV_RATES_FILE",
    "ENV_PLACEHOLDER",
    "ENV_STRICT_UNITS",
    "ENV_CONFIG_FILE",
]
