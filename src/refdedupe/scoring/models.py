"""Data models for pairwise scoring."""

from dataclasses import asdict, dataclass
from typing import Any

__all__ = ["ScoringOptions", "FieldComparison"]


@dataclass(frozen=True, slots=True)
class ScoringOptions:
    """Switches that change how fields are compared.

    Attributes
    ----------
    use_fuzzy_title : bool
        Blend edit similarity into title comparison.
    require_same_type : bool
        Veto pairs whose item types differ.
    """

    use_fuzzy_title: bool = True
    require_same_type: bool = False


@dataclass(frozen=True, slots=True)
class FieldComparison:
    """Comparison result for a single weighted field.

    Attributes
    ----------
    field : str
        Field name (e.g., 'doi', 'title').
    similarity : float
        Field similarity (0.0-1.0).
    weight : float
        Weight the field carries in the composite score.
    """

    field: str
    similarity: float
    weight: float

    @property
    def contribution(self) -> float:
        return self.similarity * self.weight

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
