"""Dict-backed bibliographic item.

``BibItem`` wraps a Zotero-style item ``data`` dictionary and satisfies the
``RawRecord`` protocol. It is what the record sources produce and what the
action layer mutates (tags, trash flag).
"""

from collections.abc import Mapping
from typing import Any

from refdedupe.models.records import Creator

__all__ = ["BibItem", "NON_REGULAR_ITEM_TYPES"]

NON_REGULAR_ITEM_TYPES = frozenset({"attachment", "note", "annotation"})


class BibItem:
    """Bibliographic item backed by a Zotero-style field dictionary.

    Parameters
    ----------
    data : Mapping[str, Any]
        Item data: ``key``, ``itemType``, field values, ``creators``,
        ``tags`` and optionally ``deleted``.
    key : str | None, optional
        Explicit identifier. Falls back to ``data["key"]``.

    Raises
    ------
    ValueError
        If no identifier is available.
    """

    def __init__(self, data: Mapping[str, Any], key: str | None = None) -> None:
        self._data: dict[str, Any] = dict(data)
        item_key = key or self._data.get("key")
        if not item_key:
            raise ValueError("BibItem requires a key")
        self._data["key"] = str(item_key)

    @classmethod
    def from_api(cls, obj: Mapping[str, Any]) -> "BibItem":
        """Build an item from a Zotero API object or a flat data dict.

        Parameters
        ----------
        obj : Mapping[str, Any]
            Either ``{"key": ..., "data": {...}}`` or the data dict itself.

        Returns
        -------
        BibItem
            Wrapped item.
        """
        data = obj.get("data")
        if isinstance(data, Mapping):
            return cls(data, key=obj.get("key") or data.get("key"))
        return cls(obj)

    @property
    def id(self) -> str:
        return self._data["key"]

    @property
    def item_type(self) -> str:
        return self._data.get("itemType") or ""

    @property
    def tags(self) -> list[str]:
        """Tag names attached to the item, in stored order."""
        names: list[str] = []
        for tag in self._data.get("tags") or []:
            name = tag.get("tag") if isinstance(tag, Mapping) else tag
            if name:
                names.append(str(name))
        return names

    @property
    def deleted(self) -> bool:
        return bool(self._data.get("deleted"))

    def get_field(self, name: str) -> str | None:
        value = self._data.get(name)
        if value is None or value == "":
            return None
        return value

    def get_creators(self) -> list[Creator]:
        return [Creator.from_dict(c) for c in self._data.get("creators") or []]

    def is_regular_item(self) -> bool:
        return self.item_type not in NON_REGULAR_ITEM_TYPES

    def add_tag(self, tag: str) -> bool:
        """Attach *tag* unless already present.

        Returns
        -------
        bool
            True if the tag was added.
        """
        if tag in self.tags:
            return False
        self._data.setdefault("tags", []).append({"tag": tag})
        return True

    def mark_deleted(self) -> None:
        """Flag the item as moved to the trash."""
        self._data["deleted"] = True

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of the item data."""
        return dict(self._data)

    def __repr__(self) -> str:
        return f"BibItem(key={self.id!r}, itemType={self.item_type!r})"
