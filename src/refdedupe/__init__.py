"""Duplicate detection for bibliographic reference collections.

This package provides:
- Data models (refdedupe.models): raw, normalized and pair types
- Normalization (refdedupe.normalize): field normalization
- Scoring (refdedupe.scoring): similarity primitives and weighted scoring
- Engine (refdedupe.engine): exhaustive pairwise detection
- Parsing (refdedupe.parse): Zotero JSON and RIS record sources
- Actions (refdedupe.actions): tagging, trashing and review
- Audit (refdedupe.audit): JSONL event logging
- CLI (refdedupe.cli): command-line interface
- Public API (refdedupe.api): high-level convenience functions
"""

__version__ = "0.3.0"
__license__ = "MIT"

from refdedupe.api import ParseError, find_duplicates, load_items, write_report
from refdedupe.engine import DetectionConfig, DetectionResult, detect_duplicates
from refdedupe.models import BibItem, DuplicatePair, NormalizedRecord
from refdedupe.normalize import normalize_record

__all__ = [
    "__version__",
    "__license__",
    "BibItem",
    "NormalizedRecord",
    "DuplicatePair",
    "DetectionConfig",
    "DetectionResult",
    "detect_duplicates",
    "find_duplicates",
    "load_items",
    "normalize_record",
    "write_report",
    "ParseError",
]
