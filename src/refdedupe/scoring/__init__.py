"""Pairwise similarity scoring.

This module implements the similarity primitives, the title blend, the
field weighting model and the weighted composite scorer.
"""

from refdedupe.scoring.comparators import FIELD_CONFIGS, FieldConfig
from refdedupe.scoring.models import FieldComparison, ScoringOptions
from refdedupe.scoring.score_pairs import compare_fields, score_pair
from refdedupe.scoring.similarity import (
    edit_distance,
    edit_similarity,
    jaccard_similarity,
    title_similarity,
    token_set_similarity,
)
from refdedupe.scoring.weights import (
    DEFAULT_WEIGHTS,
    FIELD_NAMES,
    active_fields,
    canonical_field_name,
    normalize_weights,
)

__all__ = [
    # Primitives
    "jaccard_similarity",
    "token_set_similarity",
    "edit_distance",
    "edit_similarity",
    "title_similarity",
    # Weights
    "FIELD_NAMES",
    "DEFAULT_WEIGHTS",
    "canonical_field_name",
    "normalize_weights",
    "active_fields",
    # Comparators
    "FieldConfig",
    "FIELD_CONFIGS",
    "ScoringOptions",
    "FieldComparison",
    # Scoring
    "compare_fields",
    "score_pair",
]
