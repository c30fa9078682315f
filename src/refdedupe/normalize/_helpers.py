"""Compiled regex patterns shared by the field normalizers."""

import re

# Punctuation, bracket and symbol characters replaced by spaces in text fields
PUNCT_RE = re.compile(r"""[.,/#!$%^&*;:{}=\-_`~()\[\]"']""")
WHITESPACE_RE = re.compile(r"\s+")
DOI_RE = re.compile(r"10\.\d{4,}/\S+", re.IGNORECASE)
ISBN_STRIP_RE = re.compile(r"[^0-9Xx]")
URL_SCHEME_RE = re.compile(r"^https?://")
TRAILING_SLASHES_RE = re.compile(r"/+$")
YEAR_RE = re.compile(r"\b(19|20)\d{2}\b")


def as_text(value: object) -> str:
    """Coerce a raw field value to a string; None and empty become ''."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
