"""Record source ingestion: read, sniff, parse, filter."""

from dataclasses import dataclass
from pathlib import Path

from refdedupe.models import BibItem
from refdedupe.parse.base import (
    SUPPORTED_EXTENSIONS,
    detect_encoding,
    normalize_line_endings,
    sniff_format,
)
from refdedupe.parse.ris import parse_ris
from refdedupe.parse.zotero_json import parse_zotero_json

__all__ = ["ParseError", "IngestionResult", "ingest_file", "load_items"]


class ParseError(Exception):
    """Raised when a record source cannot be read or, in strict mode, is dirty."""


@dataclass(frozen=True)
class IngestionResult:
    """Immutable result of ingesting a single file.

    Attributes
    ----------
    items : tuple[BibItem, ...]
        Regular, non-trashed items with distinct ids, in file order. These
        are the items compared for duplicates.
    format_detected : str
        Format detected (zotero_json|ris).
    encoding_used : str
        Encoding used to decode the file.
    items_parsed : int
        Entries read from the file before filtering.
    non_regular_dropped : int
        Attachments, notes and annotations left out.
    trashed_dropped : int
        Items flagged as deleted (in the trash) left out.
    duplicate_ids_dropped : int
        Entries left out because an earlier entry had the same id.
    warnings : tuple[str, ...]
        Warning messages.
    errors : tuple[str, ...]
        Error messages.
    all_items : tuple[BibItem, ...]
        Every entry with a distinct id, in file order, including notes,
        attachments and trashed items. ``items`` is a subset of these
        same objects; write the collection back from this one.
    """

    items: tuple[BibItem, ...]
    format_detected: str
    encoding_used: str
    items_parsed: int
    non_regular_dropped: int = 0
    trashed_dropped: int = 0
    duplicate_ids_dropped: int = 0
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    all_items: tuple[BibItem, ...] = ()


def _filter_items(
    items: list[BibItem],
) -> tuple[list[BibItem], list[BibItem], int, int, int, list[str]]:
    distinct: list[BibItem] = []
    kept: list[BibItem] = []
    seen: set[str] = set()
    non_regular = 0
    trashed = 0
    warnings: list[str] = []

    for item in items:
        if item.id in seen:
            warnings.append(f"Duplicate item id {item.id!r}; keeping the first occurrence")
            continue
        seen.add(item.id)
        distinct.append(item)

        if not item.is_regular_item():
            non_regular += 1
        elif item.deleted:
            trashed += 1
        else:
            kept.append(item)

    return distinct, kept, non_regular, trashed, len(warnings), warnings


def ingest_file(file_path: str | Path) -> IngestionResult:
    """Read and parse a record source.

    Parameters
    ----------
    file_path : str | Path
        Zotero JSON export or RIS file.

    Returns
    -------
    IngestionResult
        Filtered items plus parse diagnostics.

    Raises
    ------
    ParseError
        If the file cannot be read or its format is not recognized.
    """
    path = Path(file_path)
    try:
        file_bytes = path.read_bytes()
    except OSError as e:
        raise ParseError(f"Failed to read file {path}: {e}") from e

    encoding = detect_encoding(file_bytes)
    content = normalize_line_endings(file_bytes.decode(encoding))

    format_name = sniff_format(content)
    if format_name == "unknown":
        format_name = SUPPORTED_EXTENSIONS.get(path.suffix.lower(), "unknown")

    if format_name == "zotero_json":
        parsed = parse_zotero_json(path, content)
    elif format_name == "ris":
        parsed = parse_ris(path, content.split("\n"))
    else:
        supported = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        raise ParseError(f"Unrecognized format: {path.name} (supported: {supported})")

    distinct, items, non_regular, trashed, duplicates, filter_warnings = _filter_items(
        parsed.items
    )

    return IngestionResult(
        items=tuple(items),
        format_detected=format_name,
        encoding_used=encoding,
        items_parsed=len(parsed.items),
        non_regular_dropped=non_regular,
        trashed_dropped=trashed,
        duplicate_ids_dropped=duplicates,
        warnings=tuple(parsed.warnings + filter_warnings),
        errors=tuple(parsed.errors),
        all_items=tuple(distinct),
    )


def load_items(file_path: str | Path, strict: bool = False) -> list[BibItem]:
    """Load regular, non-trashed items with distinct ids from a record source.

    Parameters
    ----------
    file_path : str | Path
        Zotero JSON export or RIS file.
    strict : bool, optional
        Raise on any parse error instead of skipping the bad entries
        (default: False).

    Returns
    -------
    list[BibItem]
        Items in file order.

    Raises
    ------
    ParseError
        If the file cannot be read, has an unknown format, or (strict mode)
        contains entries that could not be parsed.
    """
    result = ingest_file(file_path)
    if strict and result.errors:
        raise ParseError(f"{Path(file_path).name}: {'; '.join(result.errors)}")
    return list(result.items)
