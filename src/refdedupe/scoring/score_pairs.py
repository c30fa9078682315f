"""Weighted pairwise scoring.

The composite score of two normalized records is the weighted mean of the
per-field similarities over fields with positive weight.
"""

from collections.abc import Mapping

from refdedupe.models.records import NormalizedRecord
from refdedupe.scoring.comparators import FIELD_CONFIGS
from refdedupe.scoring.models import FieldComparison, ScoringOptions

__all__ = ["compare_fields", "score_pair"]


def compare_fields(
    record_a: NormalizedRecord,
    record_b: NormalizedRecord,
    weights: Mapping[str, float],
    use_fuzzy_title: bool = True,
    require_same_type: bool = False,
) -> list[FieldComparison]:
    """Compare every positively weighted field of a record pair.

    Parameters
    ----------
    record_a : NormalizedRecord
        First record.
    record_b : NormalizedRecord
        Second record.
    weights : Mapping[str, float]
        Normalized weight vector keyed by field name.
    use_fuzzy_title : bool, optional
        Blend edit similarity into title comparison, by default True.
    require_same_type : bool, optional
        Let the item type take part in scoring, by default False.

    Returns
    -------
    list[FieldComparison]
        Per-field results in priority order. Fields with zero weight, and
        fields whose comparator opts out, are omitted.
    """
    options = ScoringOptions(
        use_fuzzy_title=use_fuzzy_title,
        require_same_type=require_same_type,
    )
    comparisons: list[FieldComparison] = []

    for config in FIELD_CONFIGS:
        weight = weights.get(config.name, 0.0)
        if weight <= 0:
            continue

        similarity = config.compare(record_a, record_b, options)
        if similarity is None:
            continue

        comparisons.append(FieldComparison(field=config.name, similarity=similarity, weight=weight))

    return comparisons


def score_pair(
    record_a: NormalizedRecord,
    record_b: NormalizedRecord,
    weights: Mapping[str, float],
    use_fuzzy_title: bool = True,
    require_same_type: bool = False,
) -> float:
    """Compute the weighted composite similarity of two records.

    Parameters
    ----------
    record_a : NormalizedRecord
        First record.
    record_b : NormalizedRecord
        Second record.
    weights : Mapping[str, float]
        Normalized weight vector keyed by field name.
    use_fuzzy_title : bool, optional
        Blend edit similarity into title comparison, by default True.
    require_same_type : bool, optional
        Return 0.0 for any pair whose item types differ, by default False.

    Returns
    -------
    float
        Similarity in [0, 1]; 0.0 when vetoed or when no field carries
        positive weight.
    """
    if require_same_type and record_a.item_type != record_b.item_type:
        return 0.0

    combined = 0.0
    total_weight = 0.0
    for comparison in compare_fields(
        record_a,
        record_b,
        weights,
        use_fuzzy_title=use_fuzzy_title,
        require_same_type=require_same_type,
    ):
        combined += comparison.contribution
        total_weight += comparison.weight

    return combined / total_weight if total_weight > 0 else 0.0
