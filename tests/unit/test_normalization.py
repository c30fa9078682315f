"""Tests for field and record normalization."""

from collections.abc import Callable

import pytest

from refdedupe.models import BibItem, Creator, NormalizedRecord
from refdedupe.normalize import (
    MalformedRecordError,
    extract_year,
    normalize_creators,
    normalize_doi,
    normalize_isbn,
    normalize_record,
    normalize_text,
    normalize_url,
)

# ========== Text ==========


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Deep Learning.", "deep learning"),
        ("  Nature  (London) ", "nature london"),
        ("A/B-testing: a [survey]", "a b testing a survey"),
        ('"Quoted" title\'s', "quoted title s"),
        ("tabs\tand\nnewlines", "tabs and newlines"),
        ("", ""),
        (None, ""),
        (2015, "2015"),
    ],
)
def test_normalize_text(raw: object, expected: str) -> None:
    """Test punctuation stripping, whitespace collapsing, lowercasing."""
    assert normalize_text(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    ["Deep Learning.", "  Mixed   CASE, punctuation!  ", "Über-Graph {theory}", ""],
)
def test_normalize_text_is_idempotent(raw: str) -> None:
    """Test normalizing twice equals normalizing once."""
    once = normalize_text(raw)
    assert normalize_text(once) == once


@pytest.mark.unit
def test_normalize_text_keeps_characters_outside_punctuation_set() -> None:
    """Test characters not in the punctuation set survive."""
    assert normalize_text("C++ & Python?") == "c++ python?"


# ========== Identifiers ==========


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("10.1000/XYZ", "10.1000/xyz"),
        ("https://doi.org/10.1038/NATURE14539", "10.1038/nature14539"),
        ("doi: 10.1002/j.1538-7305.1948.tb01338.x", "10.1002/j.1538-7305.1948.tb01338.x"),
        ("10.123/too-short-registrant", ""),
        ("not a doi", ""),
        (None, ""),
    ],
)
def test_normalize_doi(raw: str | None, expected: str) -> None:
    """Test DOI extraction and lowercasing."""
    assert normalize_doi(raw) == expected


@pytest.mark.unit
def test_normalize_doi_takes_first_match() -> None:
    """Test only the first DOI in a field is used."""
    assert normalize_doi("10.1000/a 10.1000/b") == "10.1000/a"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("978-0-201-89683-1", "9780201896831"),
        ("0-8044-2957-x", "080442957X"),
        ("ISBN 0 19 853453 1", "0198534531"),
        ("", ""),
    ],
)
def test_normalize_isbn(raw: str, expected: str) -> None:
    """Test ISBN reduction to digits and X."""
    assert normalize_isbn(raw) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("https://Example.org/Paper/", "example.org/paper"),
        ("http://example.org/paper", "example.org/paper"),
        ("example.org/paper///", "example.org/paper"),
        ("ftp://example.org/file", "ftp://example.org/file"),
        (None, ""),
    ],
)
def test_normalize_url(raw: str | None, expected: str) -> None:
    """Test scheme and trailing slash removal."""
    assert normalize_url(raw) == expected


@pytest.mark.unit
def test_normalize_url_scheme_match_is_case_sensitive() -> None:
    """Test an upper-case scheme is kept (and lowercased) rather than stripped."""
    assert normalize_url("HTTPS://example.org") == "https://example.org"


# ========== Creators and year ==========


@pytest.mark.unit
def test_normalize_creators_is_order_independent() -> None:
    """Test creator order does not change the normalized string."""
    a = [
        Creator(first_name="Yann", last_name="LeCun"),
        Creator(first_name="Geoffrey", last_name="Hinton"),
    ]

    assert normalize_creators(a) == normalize_creators(list(reversed(a)))
    assert normalize_creators(a) == "geoffrey hinton yann lecun"


@pytest.mark.unit
def test_normalize_creators_single_field_and_empty_names() -> None:
    """Test single-field names are used and blank creators dropped."""
    creators = [Creator(name="World Health Organization"), Creator(), Creator(last_name="Knuth")]

    assert normalize_creators(creators) == "knuth world health organization"
    assert normalize_creators([]) == ""
    assert normalize_creators(None) == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2015-05-28", "2015"),
        ("May 1999", "1999"),
        ("circa 1850", ""),
        ("12015", ""),
        ("1948/2001", "1948"),
        (None, ""),
    ],
)
def test_extract_year(raw: str | None, expected: str) -> None:
    """Test first 19xx/20xx year extraction."""
    assert extract_year(raw) == expected


# ========== Record ==========


@pytest.mark.unit
def test_normalize_record_fields(make_item: Callable[..., BibItem]) -> None:
    """Test every field is normalized and the source is kept."""
    item = make_item(
        "K1",
        item_type="journalArticle",
        title="Deep Learning.",
        shortTitle="Deep learning",
        date="2015-05-28",
        publisher="Springer-Nature",
        place="London",
        publicationTitle="Nature",
        DOI="https://doi.org/10.1038/NATURE14539",
        ISBN="978-0-201-89683-1",
        url="https://www.nature.com/articles/nature14539/",
        creators=[("Yann", "LeCun"), ("Geoffrey", "Hinton")],
    )

    record = normalize_record(item)

    assert record == NormalizedRecord(
        id="K1",
        title="deep learning",
        short_title="deep learning",
        date="2015 05 28",
        publisher="springer nature",
        place="london",
        journal="nature",
        doi="10.1038/nature14539",
        isbn="9780201896831",
        url="www.nature.com/articles/nature14539",
        item_type="journalarticle",
        creators="geoffrey hinton yann lecun",
        year="2015",
    )
    assert record.source is item


@pytest.mark.unit
def test_normalize_record_journal_abbreviation_fallback(
    make_item: Callable[..., BibItem],
) -> None:
    """Test the abbreviation is used only when the publication title is empty."""
    assert normalize_record(make_item(journalAbbreviation="Nat.")).journal == "nat"
    assert (
        normalize_record(make_item(publicationTitle="Nature", journalAbbreviation="Nat.")).journal
        == "nature"
    )


@pytest.mark.unit
def test_normalize_record_missing_fields_are_empty(make_item: Callable[..., BibItem]) -> None:
    """Test absent fields normalize to empty strings."""
    record = normalize_record(make_item("K2", item_type=""))

    assert record.title == ""
    assert record.doi == ""
    assert record.creators == ""
    assert record.item_type == ""


@pytest.mark.unit
def test_normalize_record_is_deterministic(make_item: Callable[..., BibItem]) -> None:
    """Test repeated normalization yields equal records."""
    item = make_item(title="Same Input", date="2020")

    assert normalize_record(item) == normalize_record(item)


class _BrokenRecord:
    id = "BROKEN"
    item_type = "book"

    def get_field(self, name: str) -> str | None:
        raise RuntimeError("database locked")

    def get_creators(self) -> list[Creator]:
        return []

    def is_regular_item(self) -> bool:
        return True


@pytest.mark.unit
def test_normalize_record_wraps_read_errors() -> None:
    """Test a failing field read becomes MalformedRecordError with the id."""
    with pytest.raises(MalformedRecordError) as exc_info:
        normalize_record(_BrokenRecord())

    assert exc_info.value.record_id == "BROKEN"
    assert "database locked" in str(exc_info.value)
