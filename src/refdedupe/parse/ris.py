"""RIS format parser.

RIS format: Two-letter tags, "TY  - " starts record, "ER  - " ends it.
Reference: https://refdb.sourceforge.net/manual-0.9.6/sect1-ris-format.html

Tags are mapped onto Zotero field names so RIS items compare the same way
as items exported from a Zotero library.
"""

import re
from pathlib import Path
from typing import Any

from refdedupe.models import BibItem
from refdedupe.parse.base import ParseResult

__all__ = ["RIS_FIELD_TAGS", "RIS_ITEM_TYPES", "parse_ris", "ris_tag_for_type"]

TAG_PATTERN = re.compile(r"^([A-Z][A-Z0-9])  - ?(.*)$")

# First tag listed wins when a record carries several spellings
RIS_FIELD_TAGS: dict[str, tuple[str, ...]] = {
    "title": ("TI", "T1"),
    "shortTitle": ("ST",),
    "date": ("PY", "Y1", "DA"),
    "publisher": ("PB",),
    "place": ("CY",),
    "publicationTitle": ("T2", "JO", "JF"),
    "journalAbbreviation": ("J2", "JA"),
    "DOI": ("DO",),
    "ISBN": ("SN",),
    "url": ("UR",),
}

CREATOR_TAGS: dict[str, str] = {
    "AU": "author",
    "A1": "author",
    "A2": "editor",
    "ED": "editor",
}

RIS_ITEM_TYPES: dict[str, str] = {
    "JOUR": "journalArticle",
    "BOOK": "book",
    "CHAP": "bookSection",
    "CONF": "conferencePaper",
    "CPAPER": "conferencePaper",
    "THES": "thesis",
    "RPRT": "report",
    "ELEC": "webpage",
    "WEB": "webpage",
}

DEFAULT_ITEM_TYPE = "document"

_TYPE_TAGS: dict[str, str] = {
    "journalArticle": "JOUR",
    "book": "BOOK",
    "bookSection": "CHAP",
    "conferencePaper": "CONF",
    "thesis": "THES",
    "report": "RPRT",
    "webpage": "ELEC",
}


def ris_tag_for_type(item_type: str) -> str:
    """Return the RIS ``TY`` value for a Zotero item type ('GEN' if unknown)."""
    return _TYPE_TAGS.get(item_type, "GEN")


def parse_ris(file_path: Path, lines: list[str]) -> ParseResult:
    """Parse RIS lines into items.

    Parameters
    ----------
    file_path : Path
        Path to the RIS file, used for generated keys and messages.
    lines : list[str]
        File content as decoded lines.

    Returns
    -------
    ParseResult
        Items, warnings, and errors.

    Notes
    -----
    Records without an ``ID`` tag get the key ``<file name>:<index>``.
    Indented lines continue the value of the previous tag.
    """
    warnings: list[str] = []
    errors: list[str] = []
    items: list[BibItem] = []

    current_tags: list[tuple[str, str]] = []
    in_record = False

    def flush() -> None:
        item = _build_item(current_tags, file_path, len(items))
        items.append(item)

    for line_num, line in enumerate(lines, start=1):
        match = TAG_PATTERN.match(line)

        if match:
            tag, value = match.groups()
            value = value.strip()

            if tag == "TY":
                if in_record:
                    warnings.append(
                        f"Line {line_num}: Found TY without closing ER for previous record"
                    )
                    flush()
                in_record = True
                current_tags = [(tag, value)]

            elif tag == "ER":
                if not in_record:
                    warnings.append(f"Line {line_num}: Found ER without opening TY")
                else:
                    flush()
                    in_record = False
                    current_tags = []

            elif in_record:
                current_tags.append((tag, value))

        elif in_record:
            if line and line[0].isspace() and current_tags:
                tag, value = current_tags[-1]
                current_tags[-1] = (tag, f"{value} {line.strip()}".strip())
            elif line.strip():
                warnings.append(f"Line {line_num}: Unrecognized line in record: {line[:50]}")

    if in_record and current_tags:
        warnings.append("End of file reached without closing ER tag")
        flush()

    return ParseResult(items, warnings, errors)


def _split_name(value: str) -> dict[str, str]:
    if "," in value:
        last, first = value.split(",", 1)
        return {"lastName": last.strip(), "firstName": first.strip()}
    return {"name": value.strip()}


def _build_item(
    tags: list[tuple[str, str]],
    file_path: Path,
    record_index: int,
) -> BibItem:
    values: dict[str, list[str]] = {}
    for tag, value in tags:
        if value:
            values.setdefault(tag, []).append(value)

    type_tag = (values.get("TY") or [""])[0].upper()
    data: dict[str, Any] = {
        "itemType": RIS_ITEM_TYPES.get(type_tag, DEFAULT_ITEM_TYPE),
        "creators": [],
        "tags": [],
    }

    for field_name, field_tags in RIS_FIELD_TAGS.items():
        for tag in field_tags:
            if tag in values:
                data[field_name] = values[tag][0]
                break

    for tag, value in tags:
        if not value:
            continue
        if tag in CREATOR_TAGS:
            data["creators"].append({"creatorType": CREATOR_TAGS[tag], **_split_name(value)})
        elif tag == "KW":
            data["tags"].append({"tag": value})

    key = (values.get("ID") or [f"{file_path.name}:{record_index}"])[0]
    return BibItem(data, key=key)
