"""Free-text field normalization."""

from .._helpers import PUNCT_RE, WHITESPACE_RE, as_text


def normalize_text(value: object) -> str:
    """Normalize a free-text field for token comparison.

    Punctuation, brackets and symbols become spaces, whitespace runs
    collapse to one space, and the result is lowercased and trimmed.

    Parameters
    ----------
    value : object
        Raw field value. Non-strings are stringified.

    Returns
    -------
    str
        Normalized text, or '' for missing input.

    Examples
    --------
    >>> normalize_text("Deep Learning.")
    'deep learning'
    >>> normalize_text("  Nature  (London) ")
    'nature london'
    """
    text = as_text(value)
    if not text:
        return ""
    text = PUNCT_RE.sub(" ", text)
    text = WHITESPACE_RE.sub(" ", text)
    return text.lower().strip()
