from __future__ import annotations

from typing import Dict, List, Optional
import logging

from .destinations import page_index_map
from .encoder import BOLD, ITALIC
from .models import OutlineBranch, OutlineLeaf, OutlineNode, PageDestination, WholePage
from .pdf_graph import PdfGraph, parse_ref

logger = logging.getLogger(__name__)


def _decode_destination(graph: PdfGraph, xref: int, page_index: Dict[int, int]) -> Optional[PageDestination]:
    # Only explicit array destinations are followed; actions (URI, GoTo, ...)
    # and named destinations give no destination.
    kind, value = graph.get(xref, "Dest")
    if kind != "array":
        return None
    page_ref = parse_ref(value.lstrip("[ "))
    if page_ref is None or page_ref not in page_index:
        logger.debug("Outline item %d points at an unknown page (%s)", xref, value)
        return None
    return WholePage(page_index[page_ref])


def _decode_title(graph: PdfGraph, xref: int) -> str:
    kind, value = graph.get(xref, "Title")
    return value if kind == "string" else ""


def _decode_siblings(graph: PdfGraph, current: Optional[int], page_index: Dict[int, int]) -> List[OutlineNode]:
    """
    Follow a /Next chain from ``current``. The chain is assumed acyclic.
    """
    nodes: List[OutlineNode] = []

    while current is not None:
        destination = _decode_destination(graph, current, page_index)
        flags = graph.get_int(current, "F")
        italic = bool(flags & ITALIC)
        bold = bool(flags & BOLD)
        title = _decode_title(graph, current)

        first = graph.get_ref(current, "First")
        children = _decode_siblings(graph, first, page_index) if first is not None else []

        if children or destination is None:
            # expansion state is not read back: decoded branches start collapsed
            nodes.append(
                OutlineBranch(
                    title=title,
                    children=children,
                    destination=destination,
                    is_expanded=False,
                    italic=italic,
                    bold=bold,
                )
            )
        else:
            nodes.append(OutlineLeaf(title=title, destination=destination, italic=italic, bold=bold))

        current = graph.get_ref(current, "Next")

    return nodes


def decode_outline(graph: PdfGraph) -> List[OutlineNode]:
    """
    Read the document outline back into a forest. A document without
    /Outlines gives an empty list.
    """
    root = graph.outline_root()
    if root is None:
        return []

    page_index = page_index_map(graph.page_refs())
    forest = _decode_siblings(graph, graph.get_ref(root, "First"), page_index)
    logger.debug("Read %d top-level outline items from root xref %d", len(forest), root)
    return forest
