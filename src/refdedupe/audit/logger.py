"""JSONL event log for detection runs.

A run writes one JSON object per line: run start/finish, stage
boundaries with counters, progress checkpoints, skipped records, pairs
that failed to score and review decisions. The detector and review
driver take the logger as an optional argument and stay silent without
one.
"""

from pathlib import Path
from typing import Any

from refdedupe.audit.models import LogEvent
from refdedupe.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """Append-only JSONL logger for one detection run.

    The file is opened on construction and every event is flushed as it
    is written, so a crashed run still leaves a readable log.

    Attributes
    ----------
    run_id : str
        Identifier stamped on every event.
    log_path : Path
        JSONL file; parent directories are created.
    current_stage : str | None
        Stage attached to events that do not name one.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        self.run_id = run_id
        self.log_path = Path(log_path)
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Flush and close the log file. Safe to call twice."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        rid: str | None = None,
    ) -> None:
        """Write one event.

        Parameters
        ----------
        event_type : str
            Event name.
        data : dict[str, Any] | None, optional
            Payload; empty if None.
        level : str, optional
            'DEBUG', 'INFO', 'WARN' or 'ERROR' (default: 'INFO').
        stage : str | None, optional
            Stage name; falls back to ``current_stage``.
        rid : str | None, optional
            Record id for record-level events.

        Raises
        ------
        ValueError
            If *level* is not a known log level.
        """
        entry = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data or {},
            stage=stage if stage is not None else self.current_stage,
            rid=rid,
        )
        self._file.write(entry.to_json() + "\n")
        self._file.flush()

    # ----- run and stage boundaries -----

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Record the command line and detection settings of a run."""
        self.event("run_started", data={"command": command, "parameters": parameters})

    def run_finished(
        self,
        status: str,
        duration_seconds: float,
        records_processed: int | None = None,
    ) -> None:
        """Record how a run ended.

        Parameters
        ----------
        status : str
            'success', 'failed' or 'cancelled'.
        duration_seconds : float
            Wall time of the run.
        records_processed : int | None, optional
            Records that took part in comparison.
        """
        data: dict[str, Any] = {"status": status, "duration_seconds": duration_seconds}
        if records_processed is not None:
            data["records_processed"] = records_processed
        self.event("run_finished", data=data, stage=None)

    def stage_started(self, stage: str, expected_records: int | None = None) -> None:
        """Enter *stage*; later events default to it."""
        self.current_stage = stage
        data = {} if expected_records is None else {"expected_records": expected_records}
        self.event("stage_started", data=data, stage=stage)

    def stage_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Leave *stage*, recording its duration and counters."""
        data: dict[str, Any] = {"duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters
        self.event("stage_finished", data=data, stage=stage)
        self.current_stage = None

    # ----- detection events -----

    def record_skipped(self, rid: str | None, message: str, stage: str | None = None) -> None:
        """Note a record that could not be normalized and was left out."""
        self.event("record_skipped", data={"message": message}, level="WARN", stage=stage, rid=rid)

    def progress(self, percent: int, done: int, total: int) -> None:
        """Record a comparison progress checkpoint."""
        self.event("progress", data={"percent": percent, "done": done, "total": total})

    def pair_failed(
        self,
        rid_a: str,
        rid_b: str,
        exception_class: str,
        message: str,
        traceback: str | None = None,
    ) -> None:
        """Note a pair whose scoring raised; the run continues without it.

        The first record's id goes in ``rid``, the second in the payload.
        """
        data: dict[str, Any] = {
            "rid_b": rid_b,
            "exception_class": exception_class,
            "message": message,
        }
        if traceback is not None:
            data["traceback"] = traceback
        self.event("pair_failed", data=data, level="ERROR", rid=rid_a)

    def run_cancelled(self, comparisons_done: int) -> None:
        """Note that the host stopped the run between pairs."""
        self.event("run_cancelled", data={"comparisons_done": comparisons_done}, level="WARN")

    def review_action(self, position: int, action: str, rid_a: str, rid_b: str) -> None:
        """Record the decision taken for one reviewed pair."""
        self.event(
            "review_action",
            data={"position": position, "action": action, "rid_b": rid_b},
            stage="review",
            rid=rid_a,
        )

    def error(
        self,
        exception_class: str,
        message: str,
        stage: str | None = None,
        rid: str | None = None,
        traceback: str | None = None,
    ) -> None:
        """Record an error outside pair scoring.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        stage : str | None, optional
            Stage where it happened.
        rid : str | None, optional
            Record id, if the error concerns one record.
        traceback : str | None, optional
            Formatted stack trace.
        """
        data: dict[str, Any] = {"exception_class": exception_class, "message": message}
        if traceback is not None:
            data["traceback"] = traceback
        self.event("error", data=data, stage=stage, rid=rid, level="ERROR")
