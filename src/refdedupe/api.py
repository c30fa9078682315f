"""Public API for finding duplicate references.

This module provides the high-level entry points:
- Loading items from Zotero JSON exports and RIS files
- Running duplicate detection on a file or an item list
- Exporting detection results to a JSON report
"""

import json
from collections.abc import Iterable
from pathlib import Path

from refdedupe.audit.helpers import get_package_version
from refdedupe.audit.logger import AuditLogger
from refdedupe.engine import DetectionConfig, DetectionResult, RunLock, run_detection
from refdedupe.engine.detector import ProgressSink, StopCheck
from refdedupe.models import RawRecord
from refdedupe.parse.ingestion import ParseError, load_items
from refdedupe.scoring import compare_fields

__all__ = [
    "load_items",
    "find_duplicates",
    "write_report",
    "ParseError",
]


def find_duplicates(
    source: str | Path | Iterable[RawRecord],
    config: DetectionConfig | None = None,
    *,
    progress: ProgressSink | None = None,
    should_stop: StopCheck | None = None,
    logger: AuditLogger | None = None,
    lock: RunLock | None = None,
) -> DetectionResult:
    """Find duplicate candidates in a file or a record collection.

    Parameters
    ----------
    source : str | Path | Iterable[RawRecord]
        Path to a Zotero JSON or RIS file, or records already loaded.
    config : DetectionConfig | None, optional
        Detection settings. If None, uses defaults.
    progress : ProgressSink | None, optional
        Progress callback receiving percentages.
    should_stop : StopCheck | None, optional
        Cancellation check polled between pairs.
    logger : AuditLogger | None, optional
        Audit logger.
    lock : RunLock | None, optional
        Held for the duration of the run.

    Returns
    -------
    DetectionResult
        Ranked duplicate candidates and run counters.

    Raises
    ------
    FileNotFoundError
        If *source* is a path that does not exist.
    ParseError
        If *source* is a file that cannot be parsed.
    AlreadyRunningError
        If *lock* is already held.

    Examples
    --------
    Find duplicates in a Zotero export:

        >>> from refdedupe import find_duplicates
        >>> result = find_duplicates("library.json")
        >>> for pair in result.pairs:
        ...     print(pair.reason)

    Use a stricter threshold:

        >>> from refdedupe import DetectionConfig
        >>> result = find_duplicates("refs.ris", DetectionConfig(threshold=0.85))
    """
    records: Iterable[RawRecord]
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {source}")
        records = load_items(path)
    else:
        records = source

    if lock is None:
        return run_detection(
            records, config, progress=progress, should_stop=should_stop, logger=logger
        )

    with lock:
        return run_detection(
            records, config, progress=progress, should_stop=should_stop, logger=logger
        )


def write_report(
    result: DetectionResult,
    path: str | Path,
    config: DetectionConfig | None = None,
) -> None:
    """Write a detection result to a JSON report.

    Parameters
    ----------
    result : DetectionResult
        Result to export.
    path : str | Path
        Output file path.
    config : DetectionConfig | None, optional
        Settings used for the run, recorded under ``config``. When given,
        each pair also gets its per-field breakdown under ``fields``.

    Notes
    -----
    The installed package version is recorded under ``refdedupe_version``.
    """
    report = result.to_dict()
    report["refdedupe_version"] = get_package_version()
    if config is not None:
        report["config"] = config.to_dict()
        for pair, entry in zip(result.pairs, report["pairs"], strict=True):
            entry["fields"] = [
                comparison.to_dict()
                for comparison in compare_fields(
                    pair.record_a,
                    pair.record_b,
                    config.weights or {},
                    use_fuzzy_title=config.use_fuzzy_title,
                    require_same_type=config.require_same_type,
                )
            ]

    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        json.dump(report, f, ensure_ascii=False, indent=2)
        f.write("\n")
