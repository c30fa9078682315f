"""Event record written by the audit logger."""

import json
from dataclasses import asdict, dataclass, field
from typing import Any

__all__ = ["LogEvent", "LOG_LEVELS"]

LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


@dataclass(frozen=True, slots=True)
class LogEvent:
    """One line of a detection run's JSONL log.

    Attributes
    ----------
    ts : str
        UTC timestamp, ISO8601 with microseconds.
    run_id : str
        Run the event belongs to.
    level : str
        One of ``LOG_LEVELS``.
    event : str
        Event name, e.g. 'pair_failed' or 'progress'.
    data : dict[str, Any]
        Event payload.
    stage : str | None
        Detection stage ('normalize', 'compare', 'rank', 'review'), if any.
    rid : str | None
        Record id when the event concerns one record.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any] = field(default_factory=dict)
    stage: str | None = None
    rid: str | None = None

    def __post_init__(self) -> None:
        if self.level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.level!r}")

    def to_json(self) -> str:
        """Serialize as a compact single-line JSON object."""
        return json.dumps(asdict(self), ensure_ascii=False, separators=(",", ":"))
