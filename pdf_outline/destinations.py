from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import logging

from .models import ExactPosition, PageDestination, WholePage
from .pdf_graph import pdf_number, pdf_ref

logger = logging.getLogger(__name__)

PageSize = Callable[[int], Tuple[float, float]]


@dataclass(frozen=True)
class DestinationRecord:
    """
    An explicit PDF destination: ``[page /Fit]`` or ``[page /XYZ left top null]``.
    """
    page_ref: int
    kind: str
    left: Optional[float] = None
    top: Optional[float] = None

    def to_pdf(self) -> str:
        if self.kind == "Fit":
            return f"[{pdf_ref(self.page_ref)} /Fit]"
        return f"[{pdf_ref(self.page_ref)} /XYZ {pdf_number(self.left)} {pdf_number(self.top)} null]"


def resolve_destination(
    destination: PageDestination,
    page_refs: Sequence[int],
    page_size: PageSize,
) -> Optional[DestinationRecord]:
    """
    Turn a page-relative destination into an absolute one.

    ``page_size`` is asked for every exact position; pages may differ in size.
    Returns None when the page index is outside the page table.
    """
    index = destination.page_index
    if not 0 <= index < len(page_refs):
        logger.warning(
            "Destination page %d out of range (document has %d pages); omitted",
            index,
            len(page_refs),
        )
        return None

    if isinstance(destination, WholePage):
        return DestinationRecord(page_ref=page_refs[index], kind="Fit")

    if isinstance(destination, ExactPosition):
        width, height = page_size(index)
        return DestinationRecord(
            page_ref=page_refs[index],
            kind="XYZ",
            left=width * destination.x_fraction,
            top=height * destination.y_fraction,
        )

    raise TypeError(f"Unsupported destination: {destination!r}")


def page_index_map(page_refs: List[int]) -> Dict[int, int]:
    """page xref -> page index; the first page wins if an xref repeats."""
    index: Dict[int, int] = {}
    for i, ref in enumerate(page_refs):
        index.setdefault(ref, i)
    return index
