"""Starter .leakgate.toml template written by ``leakgate init``."""

DEFAULT_TOML = """\
# leakgate configuration
version = "1.0"

[scan]
workers = 1               # >1 scans files on a thread pool (report order is unchanged)
timeout_seconds = 0       # wall-clock budget per run; exceeding it fails the commit. 0 = off
snippet_length = 100      # characters of the offending line shown in reports

[entropy]
min_length = 16           # matches shorter than this score 0
threshold = 8             # distinct characters needed to report an entropy-gated match

[output]
format = "terminal"       # terminal | json
show_summary = true

[patterns]
use_defaults = true       # false = start from an empty catalog
# Lines matching any allowlist regex (case-insensitive) are never reported.
# allowlist = ["dummy_[a-z]+_key", "fixtures/"]
# Paths matching any exclude regex are never read.
# exclude_paths = ["^vendor/", "\\\\.min\\\\.js$"]

# [[patterns.secret]]
# id = "INTERNAL_TOKEN"
# category = "Internal service token"
# pattern = "itk_[A-Za-z0-9]{32}"
# confidence = "always_high"   # always_high | entropy_gated
"""
