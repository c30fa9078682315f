"""RIS format writer for library items."""

from pathlib import Path

from refdedupe.models import BibItem
from refdedupe.parse.ris import RIS_FIELD_TAGS, ris_tag_for_type

__all__ = ["format_item_as_ris", "write_ris"]

_CREATOR_TAG = {"author": "AU", "editor": "A2"}


def format_item_as_ris(item: BibItem) -> str:
    """Format an item as a single RIS record.

    Parameters
    ----------
    item : BibItem
        Item to format.

    Returns
    -------
    str
        RIS-formatted record string, without a trailing line ending.
    """
    lines = [f"TY  - {ris_tag_for_type(item.item_type)}"]

    title = item.get_field("title")
    if title:
        lines.append(f"TI  - {title}")

    for creator in item.get_creators():
        tag = _CREATOR_TAG.get(creator.creator_type, "AU")
        if creator.last_name:
            name = (
                f"{creator.last_name}, {creator.first_name}"
                if creator.first_name
                else creator.last_name
            )
            lines.append(f"{tag}  - {name}")
        elif creator.name:
            lines.append(f"{tag}  - {creator.name}")

    for field_name, tags in RIS_FIELD_TAGS.items():
        if field_name == "title":
            continue
        value = item.get_field(field_name)
        if value:
            lines.append(f"{tags[0]}  - {value}")

    for tag in item.tags:
        lines.append(f"KW  - {tag}")

    lines.append(f"ID  - {item.id}")
    lines.append("ER  -")
    return "\r\n".join(lines)


def write_ris(items: list[BibItem], output_path: Path, line_ending: str = "\r\n") -> None:
    """Write items to an RIS file, separated by a blank line.

    Parameters
    ----------
    items : list[BibItem]
        Items to write.
    output_path : Path
        Output file path.
    line_ending : str, optional
        Line ending to use between records, by default "\\r\\n".
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", encoding="utf-8", newline="") as f:
        for i, item in enumerate(items):
            f.write(format_item_as_ris(item))
            if i < len(items) - 1:
                f.write(line_ending)
                f.write(line_ending)
        if items:
            f.write(line_ending)
