"""Year extraction."""

from .._helpers import YEAR_RE, as_text


def extract_year(value: object) -> str:
    """Return the first 19xx/20xx year in a date string, or ''."""
    text = as_text(value)
    if not text:
        return ""
    match = YEAR_RE.search(text)
    return match.group(0) if match else ""
