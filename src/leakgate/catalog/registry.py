"""Pattern catalog — merges built-in, config, and custom pattern packs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from leakgate.catalog.models import (
    AllowlistPattern,
    ConfidenceClass,
    ExcludePathRule,
    PatternError,
    SecretPattern,
)
from leakgate.config.schema import LeakGateConfig

logger = logging.getLogger(__name__)

CUSTOM_PATTERNS_DIR = ".leakgate-patterns"


@dataclass(frozen=True)
class PatternCatalog:
    """Read-only set of patterns used for one scan.

    Every entry is already compiled, so a catalog that exists is a catalog
    that is safe to scan with.
    """

    secret_patterns: Tuple[SecretPattern, ...] = ()
    allowlist: Tuple[AllowlistPattern, ...] = ()
    exclude_paths: Tuple[ExcludePathRule, ...] = ()

    @classmethod
    def default(cls) -> "PatternCatalog":
        from leakgate.catalog.builtin import (
            BUILTIN_ALLOWLIST,
            BUILTIN_EXCLUDE_PATHS,
            BUILTIN_SECRET_PATTERNS,
        )

        return cls(
            secret_patterns=BUILTIN_SECRET_PATTERNS,
            allowlist=BUILTIN_ALLOWLIST,
            exclude_paths=BUILTIN_EXCLUDE_PATHS,
        )

    def extend(
        self,
        secret_patterns: Iterable[SecretPattern] = (),
        allowlist: Iterable[AllowlistPattern] = (),
        exclude_paths: Iterable[ExcludePathRule] = (),
    ) -> "PatternCatalog":
        """Return a new catalog with entries appended after the existing ones."""
        return PatternCatalog(
            secret_patterns=self.secret_patterns + tuple(secret_patterns),
            allowlist=self.allowlist + tuple(allowlist),
            exclude_paths=self.exclude_paths + tuple(exclude_paths),
        )

    def get(self, pattern_id: str) -> Optional[SecretPattern]:
        for p in self.secret_patterns:
            if p.id == pattern_id:
                return p
        return None


# ---- entry parsing ----


def secret_pattern_from_dict(entry: Mapping[str, Any], source: str) -> SecretPattern:
    """Build a SecretPattern from a TOML/YAML mapping."""
    if not isinstance(entry, Mapping):
        raise PatternError(f"{source}: secret pattern entries must be tables, got {entry!r}")
    if "pattern" not in entry:
        raise PatternError(f"{source}: secret pattern {entry.get('id', '?')} has no 'pattern'")
    pattern_id = str(entry.get("id", entry["pattern"]))
    confidence = str(entry.get("confidence", ConfidenceClass.ENTROPY_GATED.value)).lower()
    try:
        conf = ConfidenceClass(confidence)
    except ValueError:
        raise PatternError(
            f"{source}: secret pattern {pattern_id} has unknown confidence {confidence!r}"
        ) from None
    return SecretPattern(
        id=pattern_id,
        category=str(entry.get("category", pattern_id)),
        pattern=str(entry["pattern"]),
        confidence=conf,
    )


def _string_list(value: Any, key: str, source: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise PatternError(f"{source}: '{key}' must be a list of strings")
    return value


def _entries_from_mapping(
    data: Mapping[str, Any], source: str
) -> Tuple[List[SecretPattern], List[AllowlistPattern], List[ExcludePathRule]]:
    raw_secrets = data.get("secret") or []
    if not isinstance(raw_secrets, list):
        raw_secrets = [raw_secrets]
    secrets = [secret_pattern_from_dict(e, source) for e in raw_secrets]
    allow = [AllowlistPattern(p) for p in _string_list(data.get("allowlist"), "allowlist", source)]
    exclude = [
        ExcludePathRule(p)
        for p in _string_list(data.get("exclude_paths"), "exclude_paths", source)
    ]
    return secrets, allow, exclude


# ---- custom pattern packs ----


def load_pattern_pack(path: Path) -> Tuple[List[SecretPattern], List[AllowlistPattern], List[ExcludePathRule]]:
    """Load one YAML pattern pack."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise PatternError(f"Failed to load pattern pack {path}: {exc}") from exc
    if data is None:
        return [], [], []
    if not isinstance(data, dict):
        raise PatternError(f"{path}: pattern pack must be a mapping")
    return _entries_from_mapping(data, str(path))


def load_pattern_packs(directory: Path) -> Tuple[List[SecretPattern], List[AllowlistPattern], List[ExcludePathRule]]:
    """Load every ``*.yaml`` / ``*.yml`` pack in *directory*, sorted by name."""
    secrets: List[SecretPattern] = []
    allow: List[AllowlistPattern] = []
    exclude: List[ExcludePathRule] = []
    if not directory.is_dir():
        return secrets, allow, exclude
    for path in sorted(directory.iterdir()):
        if path.suffix not in (".yaml", ".yml"):
            continue
        s, a, e = load_pattern_pack(path)
        logger.debug(
            "Loaded %d secret, %d allowlist, %d exclude entries from %s",
            len(s), len(a), len(e), path,
        )
        secrets.extend(s)
        allow.extend(a)
        exclude.extend(e)
    return secrets, allow, exclude


def build_catalog(config: LeakGateConfig, repo_root: Optional[Path] = None) -> PatternCatalog:
    """Create the catalog for a scan: built-ins, then config, then pattern packs.

    Raises PatternError on the first entry that does not compile.
    """
    catalog = PatternCatalog.default() if config.patterns.use_defaults else PatternCatalog()

    cfg_data: Dict[str, Any] = {
        "secret": config.patterns.secret,
        "allowlist": config.patterns.allowlist,
        "exclude_paths": config.patterns.exclude_paths,
    }
    catalog = catalog.extend(*_entries_from_mapping(cfg_data, "config"))

    if repo_root is not None:
        catalog = catalog.extend(*load_pattern_packs(repo_root / CUSTOM_PATTERNS_DIR))

    logger.info(
        "Catalog ready: %d secret patterns, %d allowlist, %d exclude rules",
        len(catalog.secret_patterns),
        len(catalog.allowlist),
        len(catalog.exclude_paths),
    )
    return catalog
