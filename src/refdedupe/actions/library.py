"""Mutable item collection that duplicate actions are applied to."""

import json
from collections.abc import Iterable
from pathlib import Path

from refdedupe.actions.ris_writer import write_ris
from refdedupe.models import BibItem, NormalizedRecord

__all__ = ["ItemLibrary"]


class ItemLibrary:
    """In-memory library of items with tag and trash actions.

    Items keep their input order. Trashing flags an item as deleted rather
    than removing it, mirroring the Zotero trash.

    Parameters
    ----------
    items : Iterable[BibItem]
        Library items. Ids must be distinct.

    Raises
    ------
    ValueError
        If two items share an id.
    """

    def __init__(self, items: Iterable[BibItem]) -> None:
        self._items: dict[str, BibItem] = {}
        for item in items:
            if item.id in self._items:
                raise ValueError(f"Duplicate item id in library: {item.id!r}")
            self._items[item.id] = item
        self.modified: set[str] = set()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    @property
    def items(self) -> list[BibItem]:
        return list(self._items.values())

    @property
    def active_items(self) -> list[BibItem]:
        """Items not in the trash."""
        return [item for item in self._items.values() if not item.deleted]

    def resolve(self, item: BibItem | NormalizedRecord | str) -> BibItem:
        """Return the library item for an item, a normalized record, or an id.

        Raises
        ------
        KeyError
            If the item is not part of this library.
        """
        item_id = item if isinstance(item, str) else item.id
        try:
            return self._items[item_id]
        except KeyError:
            raise KeyError(f"Item not in library: {item_id!r}") from None

    def add_tag(self, item: BibItem | NormalizedRecord | str, tag: str) -> bool:
        """Tag an item.

        Returns
        -------
        bool
            True if the tag was not already present.
        """
        target = self.resolve(item)
        added = target.add_tag(tag)
        if added:
            self.modified.add(target.id)
        return added

    def trash(self, item: BibItem | NormalizedRecord | str) -> None:
        """Move an item to the trash."""
        target = self.resolve(item)
        target.mark_deleted()
        self.modified.add(target.id)

    def save(self, output_path: str | Path) -> None:
        """Write the library to a Zotero JSON or RIS file.

        The format follows the file extension: ``.ris`` writes RIS and leaves
        trashed items out; anything else writes a JSON list of API objects
        with trashed items flagged ``deleted``.

        Parameters
        ----------
        output_path : str | Path
            Destination file.
        """
        path = Path(output_path)
        if path.suffix.lower() == ".ris":
            write_ris(self.active_items, path)
            return

        path.parent.mkdir(parents=True, exist_ok=True)
        payload = [{"key": item.id, "data": item.to_dict()} for item in self._items.values()]
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
            f.write("\n")
