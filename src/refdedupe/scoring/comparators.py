"""Field comparators for pairwise scoring.

Each comparator maps a pair of normalized field values to a similarity in
[0, 1]. A comparator may return None to mean the field takes no part in
the composite score for this pair.

All functions are pure and deterministic.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from refdedupe.models.records import NormalizedRecord
from refdedupe.scoring.models import ScoringOptions
from refdedupe.scoring.similarity import title_similarity, token_set_similarity

# Type alias for comparator result
CompareResult = float | None


@dataclass(frozen=True, slots=True)
class FieldConfig:
    """Configuration for a field comparator.

    Attributes
    ----------
    name : str
        Field name (e.g., 'doi', 'title'), matching the weight key.
    extractor : Callable[[NormalizedRecord, NormalizedRecord, ScoringOptions], dict[str, Any]]
        Function to extract comparator arguments from a record pair.
    comparator : Callable[..., CompareResult]
        Comparison function.
    """

    name: str
    extractor: Callable[[NormalizedRecord, NormalizedRecord, ScoringOptions], dict[str, Any]]
    comparator: Callable[..., CompareResult]

    def compare(
        self,
        record_a: NormalizedRecord,
        record_b: NormalizedRecord,
        options: ScoringOptions,
    ) -> CompareResult:
        """Extract fields and run comparison."""
        params = self.extractor(record_a, record_b, options)
        return self.comparator(**params)


def compare_url(url_a: str, url_b: str) -> float:
    """Compare normalized URLs.

    Identical non-empty URLs score 1.0; otherwise the token-set
    similarity of the two strings is used.
    """
    if url_a and url_b and url_a == url_b:
        return 1.0
    return token_set_similarity(url_a, url_b)


def compare_doi(doi_a: str, doi_b: str) -> float:
    """Compare normalized DOIs.

    DOIs are identifiers, so there is no partial credit: identical
    non-empty DOIs score 1.0 and anything else 0.0.
    """
    if doi_a and doi_b and doi_a == doi_b:
        return 1.0
    return 0.0


def compare_title(title_a: str, title_b: str, use_fuzzy: bool) -> float:
    """Compare normalized titles via the length-weighted title blend."""
    return title_similarity(title_a, title_b, use_fuzzy=use_fuzzy)


def compare_date(year_a: str, year_b: str, date_a: str, date_b: str) -> float:
    """Compare dates.

    Parameters
    ----------
    year_a : str
        Extracted year of the first record.
    year_b : str
        Extracted year of the second record.
    date_a : str
        Normalized full date of the first record.
    date_b : str
        Normalized full date of the second record.

    Returns
    -------
    float
        1.0 for the same non-empty year, else the token-set similarity
        of the full dates (partial overlap when years are missing or
        formatted differently).
    """
    if year_a and year_b and year_a == year_b:
        return 1.0
    return token_set_similarity(date_a, date_b)


def compare_text(text_a: str, text_b: str) -> float:
    """Plain token-set similarity of two normalized text fields."""
    return token_set_similarity(text_a, text_b)


def compare_item_type(type_a: str, type_b: str, require_same_type: bool) -> CompareResult:
    """Compare item types.

    The field only takes part when same-type matching is required. Pairs
    with differing types are vetoed before fields are compared, so a
    participating item type always agrees.

    Returns
    -------
    float | None
        None when same-type matching is off, else 1.0 for equal types
        and 0.0 otherwise.
    """
    if not require_same_type:
        return None
    return 1.0 if type_a == type_b else 0.0


# ---------------------------------------------------------------------------
# Field extractors - map NormalizedRecord pairs to comparator arguments
# ---------------------------------------------------------------------------


def _text_extractor(
    attr: str,
) -> Callable[[NormalizedRecord, NormalizedRecord, ScoringOptions], dict[str, Any]]:
    def _extract(a: NormalizedRecord, b: NormalizedRecord, _: ScoringOptions) -> dict[str, Any]:
        return {"text_a": getattr(a, attr), "text_b": getattr(b, attr)}

    return _extract


def _extract_url(a: NormalizedRecord, b: NormalizedRecord, _: ScoringOptions) -> dict[str, Any]:
    return {"url_a": a.url, "url_b": b.url}


def _extract_doi(a: NormalizedRecord, b: NormalizedRecord, _: ScoringOptions) -> dict[str, Any]:
    return {"doi_a": a.doi, "doi_b": b.doi}


def _extract_title(
    a: NormalizedRecord, b: NormalizedRecord, options: ScoringOptions
) -> dict[str, Any]:
    return {"title_a": a.title, "title_b": b.title, "use_fuzzy": options.use_fuzzy_title}


def _extract_date(a: NormalizedRecord, b: NormalizedRecord, _: ScoringOptions) -> dict[str, Any]:
    return {"year_a": a.year, "year_b": b.year, "date_a": a.date, "date_b": b.date}


def _extract_item_type(
    a: NormalizedRecord, b: NormalizedRecord, options: ScoringOptions
) -> dict[str, Any]:
    return {
        "type_a": a.item_type,
        "type_b": b.item_type,
        "require_same_type": options.require_same_type,
    }


# ---------------------------------------------------------------------------
# Field registry - priority order, deterministic iteration
# ---------------------------------------------------------------------------


FIELD_CONFIGS: tuple[FieldConfig, ...] = (
    FieldConfig(name="url", extractor=_extract_url, comparator=compare_url),
    FieldConfig(name="doi", extractor=_extract_doi, comparator=compare_doi),
    FieldConfig(name="title", extractor=_extract_title, comparator=compare_title),
    FieldConfig(name="creators", extractor=_text_extractor("creators"), comparator=compare_text),
    FieldConfig(name="date", extractor=_extract_date, comparator=compare_date),
    FieldConfig(name="publisher", extractor=_text_extractor("publisher"), comparator=compare_text),
    FieldConfig(name="journal", extractor=_text_extractor("journal"), comparator=compare_text),
    FieldConfig(
        name="short_title", extractor=_text_extractor("short_title"), comparator=compare_text
    ),
    FieldConfig(name="place", extractor=_text_extractor("place"), comparator=compare_text),
    FieldConfig(name="isbn", extractor=_text_extractor("isbn"), comparator=compare_text),
    FieldConfig(name="item_type", extractor=_extract_item_type, comparator=compare_item_type),
)
