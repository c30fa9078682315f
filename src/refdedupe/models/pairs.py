"""Duplicate candidate pair model."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from refdedupe.models.records import NormalizedRecord

__all__ = ["MatchKind", "DuplicatePair"]


class MatchKind(StrEnum):
    """How a duplicate pair was found.

    Attributes
    ----------
    URL : str
        Exact normalized URL match (fast path).
    DOI : str
        Exact normalized DOI match (fast path).
    SIMILARITY : str
        Weighted similarity at or above the threshold.
    """

    URL = "url"
    DOI = "doi"
    SIMILARITY = "similarity"


@dataclass(frozen=True, slots=True)
class DuplicatePair:
    """Likely-duplicate pair of records.

    Attributes
    ----------
    record_a : NormalizedRecord
        Record earlier in input order.
    record_b : NormalizedRecord
        Record later in input order.
    similarity : float
        Similarity score (0.0-1.0); 1.0 for exact identifier matches.
    reason : str
        Human-readable explanation, e.g. 'Exact DOI match: 10.1000/xyz'.
    match_kind : MatchKind
        Which path produced the pair.
    """

    record_a: NormalizedRecord
    record_b: NormalizedRecord
    similarity: float
    reason: str
    match_kind: MatchKind

    @property
    def types_differ(self) -> bool:
        return self.record_a.item_type != self.record_b.item_type

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id_a": self.record_a.id,
            "id_b": self.record_b.id,
            "similarity": self.similarity,
            "reason": self.reason,
            "match_kind": str(self.match_kind),
            "record_a": self.record_a.to_dict(),
            "record_b": self.record_b.to_dict(),
        }
