"""leakgate — stop leaked credentials at commit time."""

__version__ = "0.3.0"
