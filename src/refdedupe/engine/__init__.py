"""Duplicate detection engine.

This package provides the detection entry points together with their
configuration, result types and the host-side run lock.
"""

from refdedupe.engine.config import (
    ConfigError,
    DetectionConfig,
    DetectionResult,
    SkippedRecord,
    load_config,
)
from refdedupe.engine.detector import detect_duplicates, run_detection
from refdedupe.engine.run_lock import AlreadyRunningError, RunLock

__all__ = [
    "DetectionConfig",
    "DetectionResult",
    "SkippedRecord",
    "ConfigError",
    "load_config",
    "run_detection",
    "detect_duplicates",
    "RunLock",
    "AlreadyRunningError",
]
