"""Creator list normalization."""

from collections.abc import Iterable

from refdedupe.models.records import Creator


def normalize_creators(creators: Iterable[Creator] | None) -> str:
    """Collapse a creator list into one order-independent string.

    Each creator becomes ``"<first> <last-or-name>"`` lowercased and
    trimmed; empty names are dropped and the rest sorted before joining,
    so creator order never affects comparison.

    Parameters
    ----------
    creators : Iterable[Creator] | None
        Creators of a record.

    Returns
    -------
    str
        Space-joined sorted names, or '' for no creators.
    """
    if not creators:
        return ""
    names = []
    for creator in creators:
        name = f"{creator.first_name or ''} {creator.last_name or creator.name or ''}"
        name = name.lower().strip()
        if name:
            names.append(name)
    return " ".join(sorted(names))
