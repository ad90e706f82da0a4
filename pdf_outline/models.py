from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Union

from .errors import OutlineFormatError


@dataclass(frozen=True)
class WholePage:
    """Fit the entire page in view."""
    page_index: int

    def to_record(self) -> int:
        return self.page_index


@dataclass(frozen=True)
class ExactPosition:
    """A point on the page, as fractions of that page's width and height."""
    page_index: int
    x_fraction: float
    y_fraction: float

    def to_record(self) -> List[Any]:
        return [self.page_index, self.x_fraction, self.y_fraction]


PageDestination = Union[WholePage, ExactPosition]


@dataclass
class OutlineLeaf:
    """Bookmark without nested entries."""
    title: str
    destination: PageDestination
    italic: bool = False
    bold: bool = False

    def to_record(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "to": self.destination.to_record(),
            "italic": self.italic,
            "bold": self.bold,
        }


@dataclass
class OutlineBranch:
    """Bookmark with nested entries; the destination is optional."""
    title: str
    children: List["OutlineNode"] = field(default_factory=list)
    destination: Optional[PageDestination] = None
    is_expanded: bool = False
    italic: bool = False
    bold: bool = False

    def to_record(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "to": self.destination.to_record() if self.destination is not None else None,
            "italic": self.italic,
            "bold": self.bold,
            "open": self.is_expanded,
            "children": [c.to_record() for c in self.children],
        }


OutlineNode = Union[OutlineLeaf, OutlineBranch]


def destination_from_record(value: Any) -> Optional[PageDestination]:
    """
    Parse the ``to`` field of a record.

    Accepts a page index (whole page), a ``[page, x, y]`` triple (exact position)
    or ``None``.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise OutlineFormatError(f"Invalid destination: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise OutlineFormatError(f"Negative page index: {value}")
        return WholePage(value)
    if isinstance(value, (list, tuple)) and len(value) == 3:
        page, x, y = value
        if not isinstance(page, int) or isinstance(page, bool) or page < 0:
            raise OutlineFormatError(f"Invalid page index in destination: {value!r}")
        try:
            return ExactPosition(page, float(x), float(y))
        except (TypeError, ValueError) as exc:
            raise OutlineFormatError(f"Invalid position in destination: {value!r}") from exc
    raise OutlineFormatError(f"Invalid destination: {value!r}")


def node_from_record(record: Dict[str, Any]) -> OutlineNode:
    """Build a node from a plain dict (the JSON shape produced by ``to_record``)."""
    if not isinstance(record, dict) or "title" not in record:
        raise OutlineFormatError(f"Outline record needs a title: {record!r}")

    title = str(record["title"])
    destination = destination_from_record(record.get("to"))
    italic = bool(record.get("italic", False))
    bold = bool(record.get("bold", False))

    if "children" in record:
        children = forest_from_records(record["children"] or [])
        return OutlineBranch(
            title=title,
            children=children,
            destination=destination,
            is_expanded=bool(record.get("open", False)),
            italic=italic,
            bold=bold,
        )

    if destination is None:
        raise OutlineFormatError(f"Leaf bookmark {title!r} has no destination")
    return OutlineLeaf(title=title, destination=destination, italic=italic, bold=bold)


def forest_from_records(records: List[Dict[str, Any]]) -> List[OutlineNode]:
    if not isinstance(records, list):
        raise OutlineFormatError("Outline must be a list of records")
    return [node_from_record(r) for r in records]


def forest_to_records(forest: List[OutlineNode]) -> List[Dict[str, Any]]:
    return [n.to_record() for n in forest]
