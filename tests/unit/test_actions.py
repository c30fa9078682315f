"""Tests for the item library and duplicate actions."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from refdedupe.actions import (
    ItemLibrary,
    ReviewAction,
    format_item_as_ris,
    format_record_info,
    review_pairs,
    summarize_pairs,
    tag_all_pairs,
)
from refdedupe.audit import AuditLogger
from refdedupe.engine import detect_duplicates
from refdedupe.models import BibItem, DuplicatePair, MatchKind, NormalizedRecord
from refdedupe.parse import load_items


@pytest.fixture
def items(make_item: Callable[..., BibItem]) -> list[BibItem]:
    """Four items forming three exact-URL pairs around A."""
    return [
        make_item("A", title="Deep Learning", url="example.org/dl"),
        make_item("B", title="Deep learning.", url="example.org/dl"),
        make_item("C", title="Deep Learning (preprint)", url="example.org/dl"),
        make_item("D", title="Unrelated", url="example.org/other"),
    ]


def _pair(a: str, b: str, similarity: float = 0.9, title: str = "t") -> DuplicatePair:
    return DuplicatePair(
        record_a=NormalizedRecord(id=a, title=f"{title} {a}"),
        record_b=NormalizedRecord(id=b, title=f"{title} {b}"),
        similarity=similarity,
        reason=f"Similarity: {similarity * 100:.1f}%",
        match_kind=MatchKind.SIMILARITY,
    )


# ========== Library ==========


@pytest.mark.unit
def test_library_rejects_repeated_ids(make_item: Callable[..., BibItem]) -> None:
    """Test a library cannot hold two items with one id."""
    with pytest.raises(ValueError, match="Duplicate item id"):
        ItemLibrary([make_item("A"), make_item("A")])


@pytest.mark.unit
def test_library_tag_and_trash(items: list[BibItem]) -> None:
    """Test tagging is idempotent and trashing flags the item."""
    library = ItemLibrary(items)

    assert library.add_tag("A", "dup")
    assert not library.add_tag(items[0], "dup")
    library.trash("B")

    assert items[0].tags == ["dup"]
    assert items[1].deleted
    assert [i.id for i in library.active_items] == ["A", "C", "D"]
    assert library.modified == {"A", "B"}


@pytest.mark.unit
def test_library_unknown_item(items: list[BibItem]) -> None:
    """Test acting on an item outside the library raises KeyError."""
    library = ItemLibrary(items)

    with pytest.raises(KeyError, match="ZZZ"):
        library.trash("ZZZ")


@pytest.mark.unit
def test_library_save_json_keeps_trashed_items(items: list[BibItem], tmp_path: Path) -> None:
    """Test JSON output keeps trashed items flagged as deleted."""
    library = ItemLibrary(items)
    library.trash("B")
    library.add_tag("A", "dup")

    out = tmp_path / "out" / "library.json"
    library.save(out)

    saved = json.loads(out.read_text(encoding="utf-8"))
    assert [entry["key"] for entry in saved] == ["A", "B", "C", "D"]
    assert saved[1]["data"]["deleted"] is True
    assert saved[0]["data"]["tags"] == [{"tag": "dup"}]

    # Trashed items stay in the file but are not loaded for detection
    assert [i.id for i in load_items(out)] == ["A", "C", "D"]


@pytest.mark.unit
def test_library_save_ris_omits_trashed_items(items: list[BibItem], tmp_path: Path) -> None:
    """Test RIS output leaves trashed items out and writes tags as KW."""
    library = ItemLibrary(items)
    library.trash("B")
    library.add_tag("A", "dup")

    out = tmp_path / "library.ris"
    library.save(out)

    reloaded = load_items(out)
    assert [i.id for i in reloaded] == ["A", "C", "D"]
    assert reloaded[0].tags == ["dup"]
    assert reloaded[0].get_field("url") == "example.org/dl"


@pytest.mark.unit
def test_format_item_as_ris(make_item: Callable[..., BibItem]) -> None:
    """Test RIS rendering of a book with creators and identifiers."""
    item = make_item(
        "K1",
        item_type="book",
        title="The Art of Computer Programming",
        creators=[("Donald", "Knuth"), "ACM"],
        date="1968",
        publisher="Addison-Wesley",
        ISBN="978-0-201-89683-1",
    )

    assert format_item_as_ris(item).split("\r\n") == [
        "TY  - BOOK",
        "TI  - The Art of Computer Programming",
        "AU  - Knuth, Donald",
        "AU  - ACM",
        "PY  - 1968",
        "PB  - Addison-Wesley",
        "SN  - 978-0-201-89683-1",
        "ID  - K1",
        "ER  -",
    ]


# ========== Batch tagging ==========


@pytest.mark.unit
def test_tag_all_pairs_tags_each_item_once(items: list[BibItem]) -> None:
    """Test every item in any pair gets the tag exactly once."""
    library = ItemLibrary(items)
    pairs = detect_duplicates(items)

    result = tag_all_pairs(pairs, library, tag="duplicate-check-1")

    assert result.pairs == 3
    assert result.items_tagged == 3
    assert [i.tags for i in items] == [["duplicate-check-1"]] * 3 + [[]]


@pytest.mark.unit
def test_tag_all_pairs_default_tag(items: list[BibItem]) -> None:
    """Test the default tag name carries a millisecond timestamp."""
    library = ItemLibrary(items)

    result = tag_all_pairs(detect_duplicates(items), library)

    prefix, _, stamp = result.tag.rpartition("-")
    assert prefix == "duplicate-check"
    assert stamp.isdigit()


# ========== Review ==========


@pytest.mark.unit
def test_review_pairs_applies_actions(items: list[BibItem]) -> None:
    """Test each review action and the session counters."""
    library = ItemLibrary(items)
    pairs = detect_duplicates(items)
    assert [(p.record_a.id, p.record_b.id) for p in pairs] == [("A", "B"), ("A", "C"), ("B", "C")]

    decisions = iter([ReviewAction.TAG_BOTH, ReviewAction.TRASH_SECOND, ReviewAction.SKIP])
    seen: list[tuple[int, int]] = []

    def decide(position: int, total: int, pair: DuplicatePair) -> ReviewAction:
        seen.append((position, total))
        return next(decisions)

    summary = review_pairs(pairs, library, decide, tag="duplicate-pair-1")

    assert seen == [(1, 3), (2, 3), (3, 3)]
    assert summary.pairs_reviewed == 3
    assert summary.items_tagged == 2
    assert summary.items_trashed == 1
    assert summary.pairs_skipped == 1
    assert not summary.stopped
    assert items[0].tags == ["duplicate-pair-1"]
    assert items[1].tags == ["duplicate-pair-1"]
    assert items[2].deleted


@pytest.mark.unit
def test_review_pairs_stop(items: list[BibItem]) -> None:
    """Test STOP ends the session; the stopped pair counts as reviewed."""
    library = ItemLibrary(items)
    pairs = detect_duplicates(items)
    decisions = iter([ReviewAction.TRASH_FIRST, ReviewAction.STOP])

    summary = review_pairs(pairs, library, lambda *_: next(decisions))

    assert summary.stopped
    assert summary.pairs_reviewed == 2
    assert summary.items_trashed == 1
    assert items[0].deleted
    assert summary.tag.startswith("duplicate-pair-")


@pytest.mark.unit
def test_review_pairs_accepts_menu_strings(items: list[BibItem]) -> None:
    """Test plain menu choices are accepted as actions."""
    library = ItemLibrary(items)

    summary = review_pairs(detect_duplicates(items), library, lambda *_: "5")

    assert summary.stopped
    assert summary.pairs_reviewed == 1


@pytest.mark.unit
def test_review_pairs_counts_action_errors(items: list[BibItem]) -> None:
    """Test a failing action is recorded and the review continues."""
    library = ItemLibrary(items[:2])
    pairs = [_pair("A", "B"), _pair("A", "ZZZ")]

    summary = review_pairs(pairs, library, lambda *_: ReviewAction.TRASH_SECOND)

    assert summary.pairs_reviewed == 2
    assert summary.items_trashed == 1
    assert len(summary.errors) == 1
    assert "ZZZ" in summary.errors[0]


@pytest.mark.unit
def test_review_pairs_logs_decisions(items: list[BibItem], tmp_path: Path) -> None:
    """Test each decision and each failed action is logged."""
    library = ItemLibrary(items[:2])
    pairs = [_pair("A", "B"), _pair("A", "ZZZ")]
    log_path = tmp_path / "events.jsonl"

    with AuditLogger("run-1", log_path) as logger:
        review_pairs(pairs, library, lambda *_: ReviewAction.TRASH_SECOND, logger=logger)

    with log_path.open() as f:
        events = [json.loads(line) for line in f]

    assert [(e["event"], e["rid"]) for e in events] == [
        ("review_action", "A"),
        ("review_action", "A"),
        ("error", None),
    ]
    assert events[0]["data"] == {"position": 1, "action": "TRASH_SECOND", "rid_b": "B"}
    assert all(e["stage"] == "review" for e in events)


# ========== Summaries ==========


@pytest.mark.unit
def test_summarize_pairs_limit() -> None:
    """Test only the first pairs are listed and the rest counted."""
    pairs = [_pair(f"A{i}", f"B{i}") for i in range(53)]

    text = summarize_pairs(pairs)

    assert text.startswith("=== DUPLICATE SUMMARY ===")
    assert "Pair 50: Similarity: 90.0%" in text
    assert "Pair 51:" not in text
    assert text.endswith("... and 3 more pairs")


@pytest.mark.unit
def test_summarize_pairs_lists_titles() -> None:
    """Test each pair shows its reason and both titles."""
    text = summarize_pairs([_pair("A", "B", title="deep learning")], limit=5)

    assert text.splitlines()[2:] == [
        "Pair 1: Similarity: 90.0%",
        "  Item 1: deep learning A",
        "  Item 2: deep learning B",
    ]


@pytest.mark.unit
def test_format_record_info_field_order() -> None:
    """Test non-empty fields are listed in display order."""
    record = NormalizedRecord(
        id="K1",
        item_type="journalarticle",
        doi="10.1038/nature14539",
        title="deep learning",
        creators="geoffrey hinton",
        year="2015",
        journal="nature",
    )

    assert format_record_info(record).splitlines() == [
        "Type: journalarticle",
        "DOI: 10.1038/nature14539",
        "Title: deep learning",
        "Authors: geoffrey hinton",
        "Year: 2015",
        "Publication: nature",
    ]
