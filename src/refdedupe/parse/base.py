"""Shared pieces of the record sources: result type, decoding, sniffing."""

import re
from typing import NamedTuple

from refdedupe.models import BibItem

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "ParseResult",
    "detect_encoding",
    "normalize_line_endings",
    "sniff_format",
]

# Fallback when the content itself does not reveal the format
SUPPORTED_EXTENSIONS: dict[str, str] = {
    ".json": "zotero_json",
    ".ris": "ris",
}

_UTF8_BOM = b"\xef\xbb\xbf"
_RIS_START_RE = re.compile(r"^TY  - ", re.MULTILINE)
_SNIFF_LINES = 100


class ParseResult(NamedTuple):
    """Items read from one source, plus what went wrong on the way.

    Unpacks as ``items, warnings, errors = parse_ris(...)``.

    Attributes
    ----------
    items : list[BibItem]
        Items in file order, before filtering.
    warnings : list[str]
        Recoverable oddities (stray lines, unknown item types).
    errors : list[str]
        Entries that could not be turned into items.
    """

    items: list[BibItem]
    warnings: list[str]
    errors: list[str]


def detect_encoding(file_bytes: bytes) -> str:
    """Pick a codec for an export file.

    A UTF-8 BOM wins; otherwise UTF-8 if the bytes decode cleanly, and
    latin-1 (which decodes anything) as the last resort.
    """
    if file_bytes.startswith(_UTF8_BOM):
        return "utf-8-sig"
    try:
        file_bytes.decode("utf-8")
    except UnicodeDecodeError:
        return "latin-1"
    return "utf-8"


def normalize_line_endings(content: str) -> str:
    """Turn CRLF and lone CR into LF."""
    return content.replace("\r\n", "\n").replace("\r", "\n")


def sniff_format(content: str) -> str:
    """Guess the source format from decoded content.

    Parameters
    ----------
    content : str
        Decoded file content with LF line endings.

    Returns
    -------
    str
        'zotero_json' when the content opens with a JSON array or object,
        'ris' when a ``TY  - `` line appears in the first 100 lines,
        'unknown' otherwise.
    """
    if content.lstrip().startswith(("[", "{")):
        return "zotero_json"

    head = "\n".join(content.split("\n", _SNIFF_LINES)[:_SNIFF_LINES])
    if _RIS_START_RE.search(head):
        return "ris"

    return "unknown"
