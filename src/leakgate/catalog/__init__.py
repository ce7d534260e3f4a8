"""Pattern catalog — models, built-in patterns, loading."""

from leakgate.catalog.models import (
    AllowlistPattern,
    ConfidenceClass,
    ExcludePathRule,
    PatternError,
    SecretPattern,
)
from leakgate.catalog.registry import PatternCatalog, build_catalog

__all__ = [
    "AllowlistPattern",
    "ConfidenceClass",
    "ExcludePathRule",
    "PatternCatalog",
    "PatternError",
    "SecretPattern",
    "build_catalog",
]
