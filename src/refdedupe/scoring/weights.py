"""Field weighting model.

Weights map scored field names to non-negative numbers. After
``normalize_weights`` they sum to 1; fields with weight 0 are not scored.
"""

from collections.abc import Mapping
from types import MappingProxyType

__all__ = [
    "FIELD_NAMES",
    "DEFAULT_WEIGHTS",
    "canonical_field_name",
    "normalize_weights",
    "active_fields",
]

# Scored fields in priority order
FIELD_NAMES: tuple[str, ...] = (
    "url",
    "doi",
    "title",
    "creators",
    "date",
    "publisher",
    "journal",
    "short_title",
    "place",
    "isbn",
    "item_type",
)

DEFAULT_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "url": 0.25,
        "doi": 0.22,
        "title": 0.20,
        "creators": 0.15,
        "date": 0.10,
        "publisher": 0.04,
        "journal": 0.04,
        "short_title": 0.0,
        "place": 0.0,
        "isbn": 0.0,
        "item_type": 0.0,
    }
)

# Zotero-style spellings accepted in config files and on the command line
_FIELD_ALIASES: dict[str, str] = {
    "URL": "url",
    "DOI": "doi",
    "ISBN": "isbn",
    "shortTitle": "short_title",
    "itemType": "item_type",
    "authors": "creators",
    "year": "date",
}


def canonical_field_name(name: str) -> str:
    """Map a field name or accepted alias to its canonical name.

    Parameters
    ----------
    name : str
        Field name such as 'title', 'DOI' or 'shortTitle'.

    Returns
    -------
    str
        Canonical field name from ``FIELD_NAMES``.

    Raises
    ------
    ValueError
        If the name is not a scored field.
    """
    canonical = _FIELD_ALIASES.get(name, name)
    if canonical not in FIELD_NAMES:
        raise ValueError(
            f"Unknown weight field: {name!r} (expected one of {', '.join(FIELD_NAMES)})"
        )
    return canonical


def normalize_weights(weights: Mapping[str, float]) -> dict[str, float]:
    """Scale weights so they sum to 1.

    Parameters
    ----------
    weights : Mapping[str, float]
        Field name to non-negative weight.

    Returns
    -------
    dict[str, float]
        New mapping divided by the total. If the total is 0 the values are
        returned unchanged, and every score will then be 0.
    """
    total = sum(weights.values())
    if total == 0:
        return dict(weights)
    return {name: value / total for name, value in weights.items()}


def active_fields(weights: Mapping[str, float]) -> list[str]:
    """List fields with positive weight, in priority order."""
    return [name for name in FIELD_NAMES if weights.get(name, 0.0) > 0]
