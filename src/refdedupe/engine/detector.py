"""Exhaustive pairwise duplicate detection.

A run moves through three stages:

    normalize  - every raw record is normalized once; records that fail
                 are reported and excluded
    compare    - every unordered pair (i, j), i < j, is checked in input
                 order: exact URL/DOI fast path first, then the weighted
                 score against the threshold
    rank       - candidates are stably sorted by similarity, descending

The detector holds no state between runs. Each pair is evaluated from the
immutable normalized records alone.
"""

import time
import traceback
from collections.abc import Callable, Iterable

from refdedupe.audit.logger import AuditLogger
from refdedupe.engine.config import DetectionConfig, DetectionResult, SkippedRecord
from refdedupe.models import DuplicatePair, MatchKind, NormalizedRecord, RawRecord
from refdedupe.normalize import MalformedRecordError, normalize_record
from refdedupe.scoring import score_pair

__all__ = [
    "ProgressSink",
    "StopCheck",
    "check_exact_match",
    "evaluate_pair",
    "normalize_records",
    "run_detection",
    "detect_duplicates",
]

ProgressSink = Callable[[int], None]
StopCheck = Callable[[], bool]

STAGE_NORMALIZE = "normalize"
STAGE_COMPARE = "compare"
STAGE_RANK = "rank"


# ---------------------------------------------------------------------------
# Pair evaluation
# ---------------------------------------------------------------------------


def check_exact_match(
    record_a: NormalizedRecord,
    record_b: NormalizedRecord,
) -> tuple[MatchKind, str] | None:
    """Check for an exact identifier match, URL before DOI.

    Returns
    -------
    tuple[MatchKind, str] | None
        Matching identifier kind and value, or None.
    """
    if record_a.url and record_b.url and record_a.url == record_b.url:
        return MatchKind.URL, record_a.url
    if record_a.doi and record_b.doi and record_a.doi == record_b.doi:
        return MatchKind.DOI, record_a.doi
    return None


def _type_note(record_a: NormalizedRecord, record_b: NormalizedRecord) -> str:
    if record_a.item_type == record_b.item_type:
        return ""
    return f" (types differ: {record_a.item_type} vs {record_b.item_type})"


def evaluate_pair(
    record_a: NormalizedRecord,
    record_b: NormalizedRecord,
    config: DetectionConfig,
) -> DuplicatePair | None:
    """Decide whether two records are a duplicate candidate.

    Parameters
    ----------
    record_a : NormalizedRecord
        Record earlier in input order.
    record_b : NormalizedRecord
        Record later in input order.
    config : DetectionConfig
        Detection settings.

    Returns
    -------
    DuplicatePair | None
        The candidate pair, or None if the pair does not qualify.

    Notes
    -----
    The exact-match fast path ignores ``require_same_type``: identical
    identifiers are reported across item types, with a note in the reason.
    """
    if config.use_exact_match:
        exact = check_exact_match(record_a, record_b)
        if exact is not None:
            kind, value = exact
            return DuplicatePair(
                record_a=record_a,
                record_b=record_b,
                similarity=1.0,
                reason=f"Exact {kind.name} match: {value}{_type_note(record_a, record_b)}",
                match_kind=kind,
            )

    similarity = score_pair(
        record_a,
        record_b,
        config.weights or {},
        use_fuzzy_title=config.use_fuzzy_title,
        require_same_type=config.require_same_type,
    )
    if similarity < config.threshold:
        return None

    return DuplicatePair(
        record_a=record_a,
        record_b=record_b,
        similarity=similarity,
        reason=f"Similarity: {similarity * 100:.1f}%{_type_note(record_a, record_b)}",
        match_kind=MatchKind.SIMILARITY,
    )


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


def normalize_records(
    records: Iterable[RawRecord],
    logger: AuditLogger | None = None,
) -> tuple[list[NormalizedRecord], list[SkippedRecord]]:
    """Normalize records, skipping those that cannot be read.

    Parameters
    ----------
    records : Iterable[RawRecord]
        Raw records in input order.
    logger : AuditLogger | None, optional
        Audit logger; each skipped record emits a ``record_skipped`` event.

    Returns
    -------
    tuple[list[NormalizedRecord], list[SkippedRecord]]
        Normalized records (input order preserved) and skipped records.
    """
    normalized: list[NormalizedRecord] = []
    skipped: list[SkippedRecord] = []

    for raw in records:
        try:
            normalized.append(normalize_record(raw))
        except MalformedRecordError as e:
            skipped.append(SkippedRecord(record_id=e.record_id, message=str(e)))
            if logger:
                logger.record_skipped(e.record_id, str(e), stage=STAGE_NORMALIZE)

    return normalized, skipped


class _ProgressReporter:
    """Emit progress at each crossed 10% boundary of the comparisons."""

    def __init__(
        self,
        total: int,
        sink: ProgressSink | None,
        logger: AuditLogger | None,
    ) -> None:
        self.total = total
        self.sink = sink
        self.logger = logger
        self._last_decile = -1

    def update(self, done: int) -> None:
        target = 10 if self.total == 0 else done * 10 // self.total
        if target <= self._last_decile:
            return

        if self.total == 0:
            # Nothing to compare: start and finish only
            steps = [d for d in (0, 10) if d > self._last_decile]
        else:
            steps = list(range(self._last_decile + 1, target + 1))

        self._last_decile = target
        for decile in steps:
            self._emit(decile * 10, done)

    def _emit(self, percent: int, done: int) -> None:
        if self.logger:
            self.logger.progress(percent, done, self.total)
        if self.sink is None:
            return
        try:
            self.sink(percent)
        except Exception as e:
            # Reporting only; a broken sink must not abort the run
            if self.logger:
                self.logger.error(type(e).__name__, f"progress sink failed: {e}")


def _stop_requested(should_stop: StopCheck | None, logger: AuditLogger | None) -> bool:
    if should_stop is None:
        return False
    try:
        return bool(should_stop())
    except Exception as e:
        # A stop check that cannot answer ends the run with what was found
        if logger:
            logger.error(
                type(e).__name__,
                f"stop check failed: {e}",
                traceback=traceback.format_exc(),
            )
        return True


def _log_pair_failure(
    logger: AuditLogger | None,
    rid_a: str,
    rid_b: str,
    error: Exception,
) -> None:
    if logger is None:
        return
    try:
        logger.pair_failed(
            rid_a,
            rid_b,
            type(error).__name__,
            str(error),
            traceback=traceback.format_exc(),
        )
    except (OSError, ValueError):
        # Log file closed or unwritable; the failure is still counted
        pass


def run_detection(
    records: Iterable[RawRecord],
    config: DetectionConfig | None = None,
    *,
    progress: ProgressSink | None = None,
    should_stop: StopCheck | None = None,
    logger: AuditLogger | None = None,
) -> DetectionResult:
    """Run duplicate detection over a record set.

    Parameters
    ----------
    records : Iterable[RawRecord]
        Finite, ordered record sequence without repeated ids.
    config : DetectionConfig | None, optional
        Detection settings. If None, uses defaults.
    progress : ProgressSink | None, optional
        Called with 0, 10, ..., 100 as comparisons advance.
    should_stop : StopCheck | None, optional
        Polled between pairs; returning True stops the run and keeps the
        candidates collected so far. A check that raises is logged and
        treated as a stop.
    logger : AuditLogger | None, optional
        Audit logger for stage, progress and error events.

    Returns
    -------
    DetectionResult
        Ranked candidates plus run counters.

    Examples
    --------
    >>> from refdedupe.engine import DetectionConfig, run_detection
    >>> result = run_detection(items, DetectionConfig(threshold=0.8))
    >>> for pair in result.pairs:
    ...     print(pair.reason, pair.record_a.id, pair.record_b.id)
    """
    if config is None:
        config = DetectionConfig()

    records = list(records)

    # Normalizing
    started = time.perf_counter()
    if logger:
        logger.stage_started(STAGE_NORMALIZE, expected_records=len(records))

    normalized, skipped = normalize_records(records, logger)

    if logger:
        logger.stage_finished(
            STAGE_NORMALIZE,
            time.perf_counter() - started,
            counters={
                "records_in": len(records),
                "records_normalized": len(normalized),
                "records_skipped": len(skipped),
            },
        )

    # Comparing
    n = len(normalized)
    total = n * (n - 1) // 2
    started = time.perf_counter()
    if logger:
        logger.stage_started(STAGE_COMPARE, expected_records=n)

    reporter = _ProgressReporter(total, progress, logger)
    reporter.update(0)

    pairs: list[DuplicatePair] = []
    done = 0
    failed = 0
    cancelled = False

    for i in range(n):
        record_a = normalized[i]
        for j in range(i + 1, n):
            if _stop_requested(should_stop, logger):
                cancelled = True
                break

            record_b = normalized[j]
            done += 1

            try:
                pair = evaluate_pair(record_a, record_b, config)
            except Exception as e:
                failed += 1
                pair = None
                _log_pair_failure(logger, record_a.id, record_b.id, e)

            if pair is not None:
                pairs.append(pair)

            reporter.update(done)

        if cancelled:
            break

    if not cancelled:
        reporter.update(done)

    if logger:
        logger.stage_finished(
            STAGE_COMPARE,
            time.perf_counter() - started,
            counters={
                "comparisons_total": total,
                "comparisons_done": done,
                "pairs_found": len(pairs),
                "pairs_failed": failed,
            },
        )
        if cancelled:
            logger.run_cancelled(done)

    # Ranking; sort is stable, so ties keep encounter order
    started = time.perf_counter()
    if logger:
        logger.stage_started(STAGE_RANK, expected_records=len(pairs))

    pairs.sort(key=lambda p: p.similarity, reverse=True)

    if logger:
        logger.stage_finished(STAGE_RANK, time.perf_counter() - started)

    return DetectionResult(
        pairs=pairs,
        records_in=len(records),
        records_compared=n,
        skipped=skipped,
        comparisons_total=total,
        comparisons_done=done,
        pairs_failed=failed,
        cancelled=cancelled,
    )


def detect_duplicates(
    records: Iterable[RawRecord],
    config: DetectionConfig | None = None,
    *,
    progress: ProgressSink | None = None,
    should_stop: StopCheck | None = None,
    logger: AuditLogger | None = None,
) -> list[DuplicatePair]:
    """Return duplicate candidates sorted by similarity, descending.

    Thin wrapper over ``run_detection`` for callers that only need the
    ranked pairs. See ``run_detection`` for parameters.
    """
    return run_detection(
        records,
        config,
        progress=progress,
        should_stop=should_stop,
        logger=logger,
    ).pairs
