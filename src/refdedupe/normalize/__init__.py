"""Field normalization for bibliographic records.

All functions are pure and deterministic; missing values normalize to the
empty string.
"""

from ._fields import (
    extract_year,
    normalize_creators,
    normalize_doi,
    normalize_isbn,
    normalize_text,
    normalize_url,
)
from .normalizer import MalformedRecordError, normalize_record

__all__ = [
    "normalize_record",
    "MalformedRecordError",
    "normalize_text",
    "normalize_doi",
    "normalize_isbn",
    "normalize_url",
    "normalize_creators",
    "extract_year",
]
