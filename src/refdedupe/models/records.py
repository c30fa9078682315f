"""Record data models for refdedupe.

Raw records are owned by the host collection; the engine only reads them
through the narrow ``RawRecord`` protocol and keeps a back-reference for
later action dispatch. ``NormalizedRecord`` is the canonical comparable
projection consumed by scoring.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "Creator",
    "RawRecord",
    "NormalizedRecord",
]


@dataclass(frozen=True)
class Creator:
    """Creator (author, editor, ...) of a bibliographic record.

    Attributes
    ----------
    first_name : str
        Given name(s). Empty for single-field names.
    last_name : str
        Family name. Empty for single-field names.
    name : str
        Single-field name (institutions, display names).
    creator_type : str
        Role, e.g. 'author' or 'editor'.
    """

    first_name: str = ""
    last_name: str = ""
    name: str = ""
    creator_type: str = "author"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Creator":
        """Build a creator from a Zotero creator object.

        Parameters
        ----------
        data : Mapping[str, Any]
            Mapping with ``firstName``/``lastName`` or ``name`` keys.

        Returns
        -------
        Creator
            Parsed creator.
        """
        return cls(
            first_name=data.get("firstName") or "",
            last_name=data.get("lastName") or "",
            name=data.get("name") or "",
            creator_type=data.get("creatorType") or "author",
        )

    def to_dict(self) -> dict[str, str]:
        """Convert to a Zotero creator object."""
        if self.name and not (self.first_name or self.last_name):
            return {"creatorType": self.creator_type, "name": self.name}
        return {
            "creatorType": self.creator_type,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }


@runtime_checkable
class RawRecord(Protocol):
    """Read-only view of a host record that the engine depends on.

    Attributes
    ----------
    id : str
        Unique identifier within the collection.
    item_type : str
        Host item type (e.g. 'journalArticle', 'webpage').
    """

    id: str
    item_type: str

    def get_field(self, name: str) -> str | None:
        """Return the raw value of field *name*, or None when absent."""
        ...

    def get_creators(self) -> Sequence[Creator]:
        """Return the record's creators in their stored order."""
        ...

    def is_regular_item(self) -> bool:
        """Return False for attachments, notes and other child items."""
        ...


@dataclass(frozen=True)
class NormalizedRecord:
    """Canonical comparable form of a raw record.

    All text fields are normalized strings; missing source fields are
    empty strings, never None.

    Attributes
    ----------
    id : str
        Identifier of the source record.
    title : str
        Normalized title.
    short_title : str
        Normalized short title.
    date : str
        Normalized date string.
    publisher : str
        Normalized publisher.
    place : str
        Normalized place of publication.
    journal : str
        Normalized publication title, or journal abbreviation as fallback.
    doi : str
        Lowercased DOI extracted from the DOI field.
    isbn : str
        ISBN digits (and X) only.
    url : str
        URL without scheme and trailing slashes, lowercased.
    item_type : str
        Lowercased item type.
    creators : str
        Sorted, space-joined creator names.
    year : str
        First 19xx/20xx year found in the date, or empty.
    source : RawRecord | None
        Back-reference to the raw record, for tagging/trashing.
    """

    id: str
    title: str = ""
    short_title: str = ""
    date: str = ""
    publisher: str = ""
    place: str = ""
    journal: str = ""
    doi: str = ""
    isbn: str = ""
    url: str = ""
    item_type: str = ""
    creators: str = ""
    year: str = ""
    source: RawRecord | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization (without source)."""
        return {
            "id": self.id,
            "title": self.title,
            "short_title": self.short_title,
            "date": self.date,
            "publisher": self.publisher,
            "place": self.place,
            "journal": self.journal,
            "doi": self.doi,
            "isbn": self.isbn,
            "url": self.url,
            "item_type": self.item_type,
            "creators": self.creators,
            "year": self.year,
        }
