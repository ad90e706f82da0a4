from __future__ import annotations

from typing import List, Optional, Sequence
import logging

from .decoder import decode_outline
from .encoder import EncodedOutline, encode_outline
from .models import ExactPosition, OutlineBranch, OutlineLeaf, OutlineNode, PageDestination, WholePage
from .pdf_graph import PdfGraph

logger = logging.getLogger(__name__)


def offset_destination(destination: Optional[PageDestination], offset: int) -> Optional[PageDestination]:
    if destination is None:
        return None
    if isinstance(destination, WholePage):
        return WholePage(destination.page_index + offset)
    return ExactPosition(destination.page_index + offset, destination.x_fraction, destination.y_fraction)


def offset_forest(forest: Sequence[OutlineNode], offset: int) -> List[OutlineNode]:
    """
    Copy of ``forest`` with every destination page index shifted by ``offset``.

    ``offset`` is the page count of the target before the source pages were
    appended; it is not range checked.
    """
    result: List[OutlineNode] = []
    for node in forest:
        if isinstance(node, OutlineBranch):
            result.append(
                OutlineBranch(
                    title=node.title,
                    children=offset_forest(node.children, offset),
                    destination=offset_destination(node.destination, offset),
                    is_expanded=node.is_expanded,
                    italic=node.italic,
                    bold=node.bold,
                )
            )
        else:
            result.append(
                OutlineLeaf(
                    title=node.title,
                    destination=offset_destination(node.destination, offset),
                    italic=node.italic,
                    bold=node.bold,
                )
            )
    return result


def merge_outlines(target: PdfGraph, source_forest: Sequence[OutlineNode], offset: int) -> EncodedOutline:
    """
    Append ``source_forest`` (shifted by ``offset``) after the target's own
    outline and re-encode the combined forest.
    """
    combined = decode_outline(target) + offset_forest(source_forest, offset)
    return encode_outline(target, combined)


def merge_pdfs(target: PdfGraph, *sources: PdfGraph) -> EncodedOutline:
    """
    Append every page of each source to ``target`` and carry their outlines over.
    """
    if not sources:
        raise ValueError("merge_pdfs needs at least one source document")

    encoded = None
    for source in sources:
        offset = target.page_count
        target.doc.insert_pdf(source.doc)
        logger.info("Appended %d pages at offset %d", source.page_count, offset)
        encoded = merge_outlines(target, decode_outline(source), offset)
    return encoded
