"""Field-specific normalization functions."""

from .creators import normalize_creators
from .identifiers import normalize_doi, normalize_isbn, normalize_url
from .text import normalize_text
from .year import extract_year

__all__ = [
    "normalize_text",
    "normalize_doi",
    "normalize_isbn",
    "normalize_url",
    "normalize_creators",
    "extract_year",
]
