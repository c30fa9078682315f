"""Acting on duplicate candidates: batch tagging, pair review, summaries."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from refdedupe.actions.library import ItemLibrary
from refdedupe.audit.logger import AuditLogger
from refdedupe.models import DuplicatePair, NormalizedRecord
from refdedupe.utils import get_epoch_millis

__all__ = [
    "SUMMARY_LIMIT",
    "ReviewAction",
    "ReviewSummary",
    "TagResult",
    "format_record_info",
    "review_pairs",
    "summarize_pairs",
    "tag_all_pairs",
]

SUMMARY_LIMIT = 50


class ReviewAction(StrEnum):
    """Decision taken for one reviewed pair.

    Values are the menu choices shown to the user.
    """

    TAG_BOTH = "1"
    TRASH_SECOND = "2"
    TRASH_FIRST = "3"
    SKIP = "4"
    STOP = "5"


ReviewDecider = Callable[[int, int, DuplicatePair], ReviewAction]


@dataclass
class ReviewSummary:
    """Counters for a review session.

    Attributes
    ----------
    pairs_reviewed : int
        Pairs presented, including the one on which the user stopped.
    items_tagged : int
        Tag operations applied (two per tagged pair).
    items_trashed : int
        Items moved to the trash.
    pairs_skipped : int
        Pairs left unchanged.
    errors : list[str]
        Messages for pairs whose action failed.
    stopped : bool
        Whether the user stopped before the last pair.
    tag : str
        Tag used for pairs tagged during the session.
    """

    pairs_reviewed: int = 0
    items_tagged: int = 0
    items_trashed: int = 0
    pairs_skipped: int = 0
    errors: list[str] = field(default_factory=list)
    stopped: bool = False
    tag: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "pairs_reviewed": self.pairs_reviewed,
            "items_tagged": self.items_tagged,
            "items_trashed": self.items_trashed,
            "pairs_skipped": self.pairs_skipped,
            "errors": list(self.errors),
            "stopped": self.stopped,
            "tag": self.tag,
        }


@dataclass(frozen=True)
class TagResult:
    """Outcome of batch tagging.

    Attributes
    ----------
    tag : str
        Tag applied.
    items_tagged : int
        Distinct items tagged.
    pairs : int
        Pairs covered.
    """

    tag: str
    items_tagged: int
    pairs: int


def tag_all_pairs(
    pairs: Sequence[DuplicatePair],
    library: ItemLibrary,
    tag: str | None = None,
) -> TagResult:
    """Tag every item that appears in any pair, once.

    Parameters
    ----------
    pairs : Sequence[DuplicatePair]
        Duplicate candidates.
    library : ItemLibrary
        Library holding the items.
    tag : str | None, optional
        Tag to apply. Defaults to ``duplicate-check-<epoch ms>``.

    Returns
    -------
    TagResult
        Tag used and counts.
    """
    if tag is None:
        tag = f"duplicate-check-{get_epoch_millis()}"

    tagged: set[str] = set()
    for pair in pairs:
        for record in (pair.record_a, pair.record_b):
            if record.id not in tagged:
                library.add_tag(record, tag)
                tagged.add(record.id)

    return TagResult(tag=tag, items_tagged=len(tagged), pairs=len(pairs))


def review_pairs(
    pairs: Sequence[DuplicatePair],
    library: ItemLibrary,
    decide: ReviewDecider,
    tag: str | None = None,
    logger: AuditLogger | None = None,
) -> ReviewSummary:
    """Walk through pairs and apply the action chosen for each.

    Parameters
    ----------
    pairs : Sequence[DuplicatePair]
        Duplicate candidates, usually ranked.
    library : ItemLibrary
        Library holding the items.
    decide : ReviewDecider
        Called as ``decide(position, total, pair)`` with a 1-based position;
        returns the action to take.
    tag : str | None, optional
        Tag for ``TAG_BOTH``. Defaults to ``duplicate-pair-<epoch ms>``.
    logger : AuditLogger | None, optional
        Receives a ``review_action`` event per decision and an ``error``
        event for each failed action.

    Returns
    -------
    ReviewSummary
        Session counters. A failed action is recorded in ``errors`` and the
        review moves on to the next pair.
    """
    summary = ReviewSummary(tag=tag or f"duplicate-pair-{get_epoch_millis()}")
    total = len(pairs)

    for position, pair in enumerate(pairs, start=1):
        summary.pairs_reviewed += 1
        action = ReviewAction(decide(position, total, pair))
        if logger:
            logger.review_action(position, action.name, pair.record_a.id, pair.record_b.id)

        if action is ReviewAction.STOP:
            summary.stopped = True
            break

        try:
            if action is ReviewAction.TAG_BOTH:
                library.add_tag(pair.record_a, summary.tag)
                library.add_tag(pair.record_b, summary.tag)
                summary.items_tagged += 2
            elif action is ReviewAction.TRASH_SECOND:
                library.trash(pair.record_b)
                summary.items_trashed += 1
            elif action is ReviewAction.TRASH_FIRST:
                library.trash(pair.record_a)
                summary.items_trashed += 1
            else:
                summary.pairs_skipped += 1
        except KeyError as e:
            message = f"Pair {position} ({pair.record_a.id}, {pair.record_b.id}): {e}"
            summary.errors.append(message)
            if logger:
                logger.error(type(e).__name__, message, stage="review")

    return summary


def format_record_info(record: NormalizedRecord) -> str:
    """Describe a normalized record, one non-empty field per line."""
    parts = []
    for label, value in (
        ("Type", record.item_type),
        ("URL", record.url),
        ("DOI", record.doi),
        ("Title", record.title),
        ("Authors", record.creators),
        ("Year", record.year),
        ("Publisher", record.publisher),
        ("Publication", record.journal),
    ):
        if value:
            parts.append(f"{label}: {value}")
    return "\n".join(parts)


def summarize_pairs(pairs: Sequence[DuplicatePair], limit: int = SUMMARY_LIMIT) -> str:
    """Render the first *limit* pairs as console text.

    Parameters
    ----------
    pairs : Sequence[DuplicatePair]
        Ranked duplicate candidates.
    limit : int, optional
        Maximum pairs listed (default: 50).

    Returns
    -------
    str
        Summary text; a trailing line counts the pairs not listed.
    """
    lines = ["=== DUPLICATE SUMMARY ===", ""]
    for index, pair in enumerate(pairs[:limit], start=1):
        lines.append(f"Pair {index}: {pair.reason}")
        lines.append(f"  Item 1: {pair.record_a.title}")
        lines.append(f"  Item 2: {pair.record_b.title}")
        lines.append("")

    if len(pairs) > limit:
        lines.append(f"... and {len(pairs) - limit} more pairs")

    return "\n".join(lines).rstrip("\n")
