"""Audit logging for refdedupe runs.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: structured event record
"""

from refdedupe.audit.helpers import generate_run_id, get_package_version
from refdedupe.audit.logger import AuditLogger
from refdedupe.audit.models import LOG_LEVELS, LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "LOG_LEVELS",
    "generate_run_id",
    "get_package_version",
]
