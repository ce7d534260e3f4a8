"""Load and merge configuration from .leakgate.toml and env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from leakgate.config.schema import (
    OUTPUT_FORMATS,
    EntropyConfig,
    LeakGateConfig,
    OutputConfig,
    PatternsConfig,
    ScanConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".leakgate.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: LeakGateConfig) -> None:
    """Apply LEAKGATE_* environment variable overrides."""
    if val := os.environ.get("LEAKGATE_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("LEAKGATE_WORKERS"):
        try:
            cfg.scan.workers = max(1, int(val))
        except ValueError:
            logger.warning("Ignoring invalid LEAKGATE_WORKERS=%r", val)
    if val := os.environ.get("LEAKGATE_TIMEOUT"):
        try:
            cfg.scan.timeout_seconds = max(0.0, float(val))
        except ValueError:
            logger.warning("Ignoring invalid LEAKGATE_TIMEOUT=%r", val)
    if val := os.environ.get("LEAKGATE_EXCLUDE_PATHS"):
        sep = ":" if os.name != "nt" else ";"
        cfg.patterns.exclude_paths.extend(p.strip() for p in val.split(sep) if p.strip())


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table, got {type(raw).__name__}")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _check_number(section: str, key: str, value: Any, *, minimum: float, integer: bool = True) -> None:
    kinds = (int,) if integer else (int, float)
    # bool is an int subclass; `workers = true` is still a mistake
    if isinstance(value, bool) or not isinstance(value, kinds):
        expected = "an integer" if integer else "a number"
        raise ConfigError(f"[{section}] {key} must be {expected}, got {value!r}")
    if value < minimum:
        raise ConfigError(f"[{section}] {key} must be >= {minimum}, got {value!r}")


def _check_bool(section: str, key: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise ConfigError(f"[{section}] {key} must be true or false, got {value!r}")


def _validate(cfg: LeakGateConfig) -> None:
    """Reject values of the wrong type or range before anything uses them."""
    _check_number("scan", "workers", cfg.scan.workers, minimum=1)
    _check_number("scan", "timeout_seconds", cfg.scan.timeout_seconds, minimum=0, integer=False)
    _check_number("scan", "snippet_length", cfg.scan.snippet_length, minimum=0)
    _check_number("entropy", "min_length", cfg.entropy.min_length, minimum=0)
    _check_number("entropy", "threshold", cfg.entropy.threshold, minimum=0)
    _check_bool("output", "show_summary", cfg.output.show_summary)
    _check_bool("patterns", "use_defaults", cfg.patterns.use_defaults)


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> LeakGateConfig:
    """Load, validate, and return a LeakGateConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = LeakGateConfig()
    else:
        logger.debug("Loading config from %s", config_path)
        raw = _parse_toml(config_path)
        cfg = LeakGateConfig(
            version=raw.get("version", "1.0"),
            scan=_build_section(raw, ScanConfig, "scan"),
            entropy=_build_section(raw, EntropyConfig, "entropy"),
            output=_build_section(raw, OutputConfig, "output"),
            patterns=_build_section(raw, PatternsConfig, "patterns"),
        )

    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Invalid output format: {cfg.output.format!r}")
    _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
