"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from refdedupe.models import BibItem  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "synthetic"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the synthetic library fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def make_item() -> Callable[..., BibItem]:
    """Factory for Zotero-style items with minimal boilerplate.

    Field keyword arguments use Zotero names (``title``, ``DOI``, ``url``,
    ``publicationTitle``...). Creators are given as ``(first, last)``
    tuples, or as plain strings for single-field names.
    """

    def _factory(
        key: str = "ITEM0001",
        *,
        item_type: str = "journalArticle",
        creators: list[tuple[str, str] | str] | None = None,
        tags: list[str] | None = None,
        **fields: Any,
    ) -> BibItem:
        data: dict[str, Any] = {"key": key, "itemType": item_type, **fields}
        if creators:
            data["creators"] = [
                {"creatorType": "author", "name": c}
                if isinstance(c, str)
                else {"creatorType": "author", "firstName": c[0], "lastName": c[1]}
                for c in creators
            ]
        if tags:
            data["tags"] = [{"tag": t} for t in tags]
        return BibItem(data)

    return _factory
