"""UTC clock readings used for log events, run ids and tag names."""

from datetime import UTC, datetime

__all__ = ["get_iso_timestamp", "get_epoch_millis"]


def get_iso_timestamp() -> str:
    """Current UTC time as ISO8601 with microseconds and a 'Z' suffix.

    Examples
    --------
    >>> get_iso_timestamp()  # doctest: +SKIP
    '2026-02-03T12:34:56.123456Z'
    """
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def get_epoch_millis() -> int:
    """Current UTC time in whole milliseconds since the epoch.

    Duplicate tags are named ``duplicate-check-<millis>`` and
    ``duplicate-pair-<millis>``, so two runs a millisecond apart get
    distinct tags.
    """
    return int(datetime.now(UTC).timestamp() * 1000)
