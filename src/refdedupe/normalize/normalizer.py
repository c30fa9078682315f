"""Deterministic normalization of raw records.

This module turns a host record into a ``NormalizedRecord``. The function
is pure: it only reads the record's current field values and keeps a
back-reference to it for later action dispatch.
"""

from refdedupe.models.records import NormalizedRecord, RawRecord

from ._fields import (
    extract_year,
    normalize_creators,
    normalize_doi,
    normalize_isbn,
    normalize_text,
    normalize_url,
)

__all__ = ["MalformedRecordError", "normalize_record"]


class MalformedRecordError(Exception):
    """Raised when a record cannot be read or normalized.

    Parameters
    ----------
    record_id : str | None
        Identifier of the offending record, if it could be read.
    message : str
        Description of the failure.
    """

    def __init__(self, record_id: str | None, message: str) -> None:
        super().__init__(f"{record_id or '<unknown>'}: {message}")
        self.record_id = record_id


def normalize_record(raw: RawRecord) -> NormalizedRecord:
    """Normalize every comparable field of a raw record.

    Parameters
    ----------
    raw : RawRecord
        Host record exposing ``get_field``, ``get_creators``, ``id`` and
        ``item_type``.

    Returns
    -------
    NormalizedRecord
        Canonical comparable form with a back-reference to *raw*.

    Raises
    ------
    MalformedRecordError
        If any field access fails or returns an unusable value.

    Notes
    -----
    The journal falls back to ``journalAbbreviation`` when
    ``publicationTitle`` is empty.
    """
    record_id: str | None = None
    try:
        record_id = str(raw.id)
        date = raw.get_field("date")
        return NormalizedRecord(
            id=record_id,
            title=normalize_text(raw.get_field("title")),
            short_title=normalize_text(raw.get_field("shortTitle")),
            date=normalize_text(date),
            publisher=normalize_text(raw.get_field("publisher")),
            place=normalize_text(raw.get_field("place")),
            journal=normalize_text(
                raw.get_field("publicationTitle") or raw.get_field("journalAbbreviation")
            ),
            doi=normalize_doi(raw.get_field("DOI")),
            isbn=normalize_isbn(raw.get_field("ISBN")),
            url=normalize_url(raw.get_field("url")),
            item_type=(raw.item_type or "").lower().strip(),
            creators=normalize_creators(raw.get_creators()),
            year=extract_year(date),
            source=raw,
        )
    except Exception as e:
        raise MalformedRecordError(record_id, f"{type(e).__name__}: {e}") from e
