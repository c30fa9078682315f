"""End-to-end tests: load, detect, act, save, reload."""

from pathlib import Path

import pytest

from refdedupe import DetectionConfig, find_duplicates, load_items
from refdedupe.actions import ItemLibrary, ReviewAction, review_pairs, tag_all_pairs
from refdedupe.audit import AuditLogger
from refdedupe.models import DuplicatePair, MatchKind


@pytest.mark.integration
def test_zotero_export_default_run(fixtures_dir: Path, tmp_path: Path) -> None:
    """Test the synthetic export yields its two planted duplicates."""
    log_path = tmp_path / "events.jsonl"

    with AuditLogger("it-run", log_path) as logger:
        result = find_duplicates(fixtures_dir / "library.json", logger=logger)

    assert result.records_in == 7
    assert result.comparisons_total == 21
    assert result.comparisons_done == 21
    assert not result.cancelled
    assert [(p.record_a.id, p.record_b.id, p.match_kind) for p in result.pairs] == [
        ("AAAA1111", "BBBB2222", MatchKind.DOI),
        ("CCCC3333", "DDDD4444", MatchKind.URL),
    ]
    assert result.pairs[0].reason == "Exact DOI match: 10.1038/nature14539"
    assert log_path.read_text(encoding="utf-8").count('"event":"progress"') == 11


@pytest.mark.integration
def test_near_miss_pair_depends_on_threshold(fixtures_dir: Path) -> None:
    """Test the two Knuth editions fall just under the default threshold."""
    items = load_items(fixtures_dir / "library.json")

    default_ids = {(p.record_a.id, p.record_b.id) for p in find_duplicates(items).pairs}
    lowered = find_duplicates(items, DetectionConfig(threshold=0.5))
    lowered_ids = {(p.record_a.id, p.record_b.id) for p in lowered.pairs}

    assert ("EEEE5555", "FFFF6666") not in default_ids
    assert ("EEEE5555", "FFFF6666") in lowered_ids
    knuth = next(p for p in lowered.pairs if p.record_a.id == "EEEE5555")
    assert 0.5 <= knuth.similarity < 0.6


@pytest.mark.integration
def test_same_type_requirement_keeps_exact_matches(fixtures_dir: Path) -> None:
    """Test requiring the same type still reports identifier matches."""
    result = find_duplicates(
        fixtures_dir / "library.json", DetectionConfig(require_same_type=True)
    )

    assert len(result.pairs) == 2
    assert result.pairs[1].reason.endswith("(types differ: webpage vs preprint)")


@pytest.mark.integration
def test_review_then_rerun(fixtures_dir: Path, tmp_path: Path) -> None:
    """Test trashing during review removes the pair from a later run."""
    items = load_items(fixtures_dir / "library.json")
    library = ItemLibrary(items)
    result = find_duplicates(items)

    def decide(position: int, total: int, pair: DuplicatePair) -> ReviewAction:
        return ReviewAction.TRASH_SECOND if position == 1 else ReviewAction.SKIP

    summary = review_pairs(result.pairs, library, decide)
    assert summary.items_trashed == 1
    assert summary.pairs_skipped == 1

    out = tmp_path / "reviewed.json"
    library.save(out)

    rerun = find_duplicates(out)
    assert rerun.records_in == 6
    assert [(p.record_a.id, p.record_b.id) for p in rerun.pairs] == [("CCCC3333", "DDDD4444")]


@pytest.mark.integration
def test_ris_round_trip_with_tags(fixtures_dir: Path, tmp_path: Path) -> None:
    """Test tagging an RIS library and reloading the written file."""
    items = load_items(fixtures_dir / "sample.ris")
    library = ItemLibrary(items)
    result = find_duplicates(items)

    tagged = tag_all_pairs(result.pairs, library, tag="dup-check")
    out = tmp_path / "tagged.ris"
    library.save(out)

    reloaded = load_items(out)
    assert tagged.items_tagged == 2
    assert [i.id for i in reloaded] == ["ris-1", "sample.ris:1", "ris-3"]
    assert reloaded[0].tags == ["review", "dup-check"]
    assert reloaded[1].tags == ["dup-check"]
    assert reloaded[2].tags == []
    assert [(p.record_a.id, p.record_b.id) for p in find_duplicates(reloaded).pairs] == [
        ("ris-1", "sample.ris:1")
    ]
