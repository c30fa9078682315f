"""Zotero JSON export parser.

Accepts a list of Zotero API objects (``{"key": ..., "data": {...}}``), a
list of flat item data dicts, or either wrapped as ``{"items": [...]}``.
"""

import json
from collections.abc import Mapping
from pathlib import Path

from refdedupe.models import BibItem
from refdedupe.parse.base import ParseResult

__all__ = ["parse_zotero_json"]


def parse_zotero_json(file_path: Path, content: str) -> ParseResult:
    """Parse Zotero JSON content into items.

    Parameters
    ----------
    file_path : Path
        Source path, used in messages.
    content : str
        Decoded file content.

    Returns
    -------
    ParseResult
        Items, warnings, and errors. Entries that are not objects or lack a
        key are reported as errors and left out.
    """
    items: list[BibItem] = []
    warnings: list[str] = []
    errors: list[str] = []

    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        return ParseResult(items, warnings, [f"{file_path.name}: invalid JSON: {e}"])

    if isinstance(payload, Mapping):
        payload = payload.get("items")
    if not isinstance(payload, list):
        errors.append(f"{file_path.name}: expected a list of items")
        return ParseResult(items, warnings, errors)

    for index, entry in enumerate(payload):
        if not isinstance(entry, Mapping):
            errors.append(f"Entry {index}: expected an object, got {type(entry).__name__}")
            continue
        try:
            items.append(BibItem.from_api(entry))
        except ValueError as e:
            errors.append(f"Entry {index}: {e}")

    return ParseResult(items, warnings, errors)
