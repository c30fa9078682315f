"""Record sources.

Reads Zotero JSON exports and RIS files into ``BibItem`` records.
"""

from refdedupe.parse.base import SUPPORTED_EXTENSIONS, ParseResult, sniff_format
from refdedupe.parse.ingestion import IngestionResult, ParseError, ingest_file, load_items
from refdedupe.parse.ris import parse_ris
from refdedupe.parse.zotero_json import parse_zotero_json

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "ParseResult",
    "ParseError",
    "IngestionResult",
    "sniff_format",
    "parse_ris",
    "parse_zotero_json",
    "ingest_file",
    "load_items",
]
