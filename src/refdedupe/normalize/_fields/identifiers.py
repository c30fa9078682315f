"""Identifier normalization: DOI, ISBN and URL."""

from .._helpers import (
    DOI_RE,
    ISBN_STRIP_RE,
    TRAILING_SLASHES_RE,
    URL_SCHEME_RE,
    as_text,
)


def normalize_doi(value: object) -> str:
    """Extract and lowercase the first DOI found in a field.

    A DOI is ``10.`` followed by at least four digits, a slash, and one or
    more non-whitespace characters. Surrounding text such as ``doi:`` or a
    resolver URL is ignored.

    Parameters
    ----------
    value : object
        Raw DOI field.

    Returns
    -------
    str
        Lowercased DOI, or '' when no DOI pattern is present.
    """
    text = as_text(value)
    if not text:
        return ""
    match = DOI_RE.search(text)
    return match.group(0).lower() if match else ""


def normalize_isbn(value: object) -> str:
    """Keep only ISBN digits and the X check character, uppercased.

    Parameters
    ----------
    value : object
        Raw ISBN field (may contain hyphens, spaces or several ISBNs).

    Returns
    -------
    str
        Compact ISBN string, or ''.
    """
    text = as_text(value)
    if not text:
        return ""
    return ISBN_STRIP_RE.sub("", text).upper()


def normalize_url(value: object) -> str:
    """Strip the http(s) scheme and trailing slashes, then lowercase.

    Parameters
    ----------
    value : object
        Raw URL field.

    Returns
    -------
    str
        Comparable URL, or ''.
    """
    text = as_text(value)
    if not text:
        return ""
    text = URL_SCHEME_RE.sub("", text)
    text = TRAILING_SLASHES_RE.sub("", text)
    return text.lower()
