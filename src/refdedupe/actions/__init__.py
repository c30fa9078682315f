"""Actions applied to duplicate candidates.

The library object owns tag and trash state; the review helpers drive it
from a ranked list of pairs.
"""

from refdedupe.actions.library import ItemLibrary
from refdedupe.actions.review import (
    SUMMARY_LIMIT,
    ReviewAction,
    ReviewSummary,
    TagResult,
    format_record_info,
    review_pairs,
    summarize_pairs,
    tag_all_pairs,
)
from refdedupe.actions.ris_writer import format_item_as_ris, write_ris

__all__ = [
    "ItemLibrary",
    "ReviewAction",
    "ReviewSummary",
    "TagResult",
    "SUMMARY_LIMIT",
    "tag_all_pairs",
    "review_pairs",
    "summarize_pairs",
    "format_record_info",
    "format_item_as_ris",
    "write_ris",
]
