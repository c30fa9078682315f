"""String similarity primitives.

Pure, deterministic functions used by the field comparators:

- token-set overlap (Jaccard index over whitespace tokens)
- Levenshtein edit distance and its normalized similarity
- the length-weighted title blend of both
"""

__all__ = [
    "jaccard_similarity",
    "token_set_similarity",
    "edit_distance",
    "edit_similarity",
    "title_similarity",
]

# Average title length at which the edit-distance share reaches zero
TITLE_EDIT_WEIGHT_HORIZON = 100.0


def jaccard_similarity(set_a: set[str], set_b: set[str]) -> float:
    """Calculate Jaccard similarity between two sets.

    Parameters
    ----------
    set_a : set[str]
        First set.
    set_b : set[str]
        Second set.

    Returns
    -------
    float
        Jaccard similarity (0.0-1.0).

    Notes
    -----
    Jaccard = |A ∩ B| / |A ∪ B|

    When both sets are empty the result is 1.0: two missing values are
    treated as agreement.
    """
    if not set_a and not set_b:
        return 1.0
    if not set_a or not set_b:
        return 0.0

    return len(set_a & set_b) / len(set_a | set_b)


def token_set_similarity(a: str, b: str) -> float:
    """Jaccard index over the whitespace-delimited tokens of two strings.

    Duplicate tokens collapse and token order is irrelevant.

    Parameters
    ----------
    a : str
        First string.
    b : str
        Second string.

    Returns
    -------
    float
        1.0 if both are empty, 0.0 if exactly one is, else
        |intersection| / |union|.

    Examples
    --------
    >>> token_set_similarity("deep learning", "learning deep")
    1.0
    >>> token_set_similarity("a b", "b c")
    0.3333333333333333
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return jaccard_similarity(set(a.split()), set(b.split()))


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit-cost insert, delete and substitute.

    Only two rows of the dynamic-programming table are kept, each sized
    to the shorter string.

    Parameters
    ----------
    a : str
        First string.
    b : str
        Second string.

    Returns
    -------
    int
        Minimum number of edits turning *a* into *b*.

    Examples
    --------
    >>> edit_distance("kitten", "sitting")
    3
    """
    if not a:
        return len(b) if b else 0
    if not b:
        return len(a)

    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            )
        previous = current

    return previous[-1]


def edit_similarity(a: str, b: str) -> float:
    """Normalized edit similarity: ``1 - distance / max(len(a), len(b))``.

    Returns 1.0 when both strings are empty and 0.0 when exactly one is.
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1.0 - edit_distance(a, b) / max(len(a), len(b))


def title_similarity(title_a: str, title_b: str, use_fuzzy: bool = True) -> float:
    """Blend token-set and edit similarity by average title length.

    Short titles lean on character-level edit similarity (typos,
    abbreviations); long titles lean on word-set overlap (reordering,
    partial matches). The edit share is ``max(0, 1 - avg_len / 100)``.

    Parameters
    ----------
    title_a : str
        First normalized title.
    title_b : str
        Second normalized title.
    use_fuzzy : bool, optional
        If False, return plain token-set similarity, by default True.

    Returns
    -------
    float
        Title similarity (0.0-1.0).
    """
    token_sim = token_set_similarity(title_a, title_b)
    if not use_fuzzy:
        return token_sim

    avg_len = (len(title_a) + len(title_b)) / 2
    edit_weight = max(0.0, 1.0 - avg_len / TITLE_EDIT_WEIGHT_HORIZON)
    return token_sim * (1.0 - edit_weight) + edit_similarity(title_a, title_b) * edit_weight
