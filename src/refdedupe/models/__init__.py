"""Shared data types for refdedupe.

This package contains the record protocol, the normalized record, the
dict-backed item used by record sources, and the duplicate pair type.
"""

from refdedupe.models.items import NON_REGULAR_ITEM_TYPES, BibItem
from refdedupe.models.pairs import DuplicatePair, MatchKind
from refdedupe.models.records import Creator, NormalizedRecord, RawRecord

__all__ = [
    # Raw records
    "RawRecord",
    "Creator",
    "BibItem",
    "NON_REGULAR_ITEM_TYPES",
    # Normalized records
    "NormalizedRecord",
    # Results
    "DuplicatePair",
    "MatchKind",
]
