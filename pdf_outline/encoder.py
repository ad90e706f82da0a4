from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence
import logging

from .destinations import DestinationRecord, resolve_destination
from .models import OutlineBranch, OutlineNode
from .pdf_graph import PdfGraph, pdf_ref, pdf_string
from .tree import flatten, opening_count

logger = logging.getLogger(__name__)

ITALIC = 1
BOLD = 2


@dataclass
class OutlineObject:
    """One outline item dictionary as written to the document."""
    ref: int
    title: str
    parent: int
    prev: Optional[int] = None
    next: Optional[int] = None
    first: Optional[int] = None
    last: Optional[int] = None
    count: Optional[int] = None
    dest: Optional[DestinationRecord] = None
    flags: int = 0

    def to_pdf(self) -> str:
        parts = [f"/Title {pdf_string(self.title)}", f"/Parent {pdf_ref(self.parent)}"]
        if self.prev is not None:
            parts.append(f"/Prev {pdf_ref(self.prev)}")
        if self.next is not None:
            parts.append(f"/Next {pdf_ref(self.next)}")
        if self.first is not None:
            parts.append(f"/First {pdf_ref(self.first)}")
            parts.append(f"/Last {pdf_ref(self.last)}")
            parts.append(f"/Count {self.count}")
        if self.dest is not None:
            parts.append(f"/Dest {self.dest.to_pdf()}")
        parts.append(f"/F {self.flags}")
        return "<<" + " ".join(parts) + ">>"


@dataclass
class OutlineRoot:
    """The /Outlines dictionary the catalog points at."""
    ref: int
    count: int
    first: Optional[int] = None
    last: Optional[int] = None

    def to_pdf(self) -> str:
        parts = ["/Type /Outlines"]
        if self.first is not None:
            parts.append(f"/First {pdf_ref(self.first)}")
            parts.append(f"/Last {pdf_ref(self.last)}")
        parts.append(f"/Count {self.count}")
        return "<<" + " ".join(parts) + ">>"


@dataclass
class EncodedOutline:
    root: OutlineRoot
    objects: List[OutlineObject] = field(default_factory=list)  # pre-order, one per node

    def by_title(self, title: str) -> OutlineObject:
        for obj in self.objects:
            if obj.title == title:
                return obj
        raise KeyError(title)


def style_flags(node: OutlineNode) -> int:
    return (ITALIC if node.italic else 0) | (BOLD if node.bold else 0)


class _OutlineWriter:
    def __init__(self, graph: PdfGraph, refs: Iterator[int]):
        self.graph = graph
        self.refs = refs
        self.page_refs = graph.page_refs()
        self.written: Dict[int, OutlineObject] = {}

    def build(self, siblings: Sequence[OutlineNode], parent: int) -> List[int]:
        """
        Write one sibling list and everything below it, returning the siblings' refs.

        Refs are drawn in pre-order, the same order ``flatten`` allocated them in.
        """
        built = []
        for node in siblings:
            ref = next(self.refs)
            child_refs: List[int] = []
            if isinstance(node, OutlineBranch) and node.children:
                child_refs = self.build(node.children, ref)
            built.append((node, ref, child_refs))

        last = len(built) - 1
        for i, (node, ref, child_refs) in enumerate(built):
            obj = OutlineObject(
                ref=ref,
                title=node.title,
                parent=parent,
                prev=built[i - 1][1] if i > 0 else None,
                next=built[i + 1][1] if i < last else None,
                flags=style_flags(node),
            )
            if node.destination is not None:
                obj.dest = resolve_destination(node.destination, self.page_refs, self.graph.page_size)
            if child_refs:
                sign = 1 if node.is_expanded else -1
                obj.first = child_refs[0]
                obj.last = child_refs[-1]
                obj.count = opening_count(node.children) * sign

            self.graph.assign(ref, obj.to_pdf())
            self.written[ref] = obj

        return [ref for _, ref, _ in built]


def encode_outline(graph: PdfGraph, forest: Sequence[OutlineNode]) -> EncodedOutline:
    """
    Write ``forest`` as the document outline, replacing whatever the catalog
    pointed at before. Old outline objects are left in place, unreferenced.
    """
    root_ref = graph.new_ref()
    refs = [graph.new_ref() for _ in flatten(forest)]

    writer = _OutlineWriter(graph, iter(refs))
    top_refs = writer.build(forest, root_ref)

    root = OutlineRoot(ref=root_ref, count=opening_count(forest))
    if top_refs:
        root.first = top_refs[0]
        root.last = top_refs[-1]
    graph.assign(root_ref, root.to_pdf())

    previous = graph.outline_root()
    graph.set_outline_root(root_ref)
    logger.debug(
        "Wrote %d outline items under root xref %d (replaced %s)",
        len(refs),
        root_ref,
        previous,
    )

    return EncodedOutline(root=root, objects=[writer.written[r] for r in refs])
