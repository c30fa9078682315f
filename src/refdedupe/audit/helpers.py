"""Run identity helpers for audit logs and reports."""

import importlib.metadata
import secrets

from refdedupe.utils import get_iso_timestamp

__all__ = ["generate_run_id", "get_package_version"]


def generate_run_id() -> str:
    """Return a run id of the form ``<ISO8601 UTC>__<8 hex chars>``."""
    return f"{get_iso_timestamp()}__{secrets.token_hex(4)}"


def get_package_version() -> str:
    """Installed refdedupe version, or the source tree's when not installed."""
    try:
        return importlib.metadata.version("refdedupe")
    except importlib.metadata.PackageNotFoundError:
        from refdedupe import __version__

        return __version__
