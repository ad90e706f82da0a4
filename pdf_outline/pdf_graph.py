from __future__ import annotations

from typing import List, Optional, Tuple
import re

import fitz  # PyMuPDF


_REF_RE = re.compile(r"^\s*(\d+)\s+(\d+)\s+R\b")


def pdf_ref(xref: int) -> str:
    return f"{xref} 0 R"


def pdf_number(value: float) -> str:
    """PDF numbers may not use exponent notation."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")


def pdf_string(text: str) -> str:
    # literal string, or UTF-16BE hex when the text is not plain ASCII
    return fitz.get_pdf_str(text)


def parse_ref(value: str) -> Optional[int]:
    """'12 0 R' -> 12"""
    m = _REF_RE.match(value or "")
    return int(m.group(1)) if m else None


class PdfGraph:
    """
    The object-graph view of a PyMuPDF document that the outline codec needs:
    page references, xref allocation, object read/write and the catalog's
    /Outlines entry.

    A graph has one owner at a time; nothing here is locked.
    """

    def __init__(self, doc: fitz.Document):
        if not doc.is_pdf:
            raise ValueError("Outlines can only be written to PDF documents")
        self.doc = doc

    @classmethod
    def open(cls, pdf_path: str) -> "PdfGraph":
        return cls(fitz.open(pdf_path))

    @property
    def page_count(self) -> int:
        return self.doc.page_count

    def page_refs(self) -> List[int]:
        """Page xrefs, in display order (0-index pages)."""
        return [self.doc.load_page(i).xref for i in range(self.doc.page_count)]

    def page_size(self, page_index: int) -> Tuple[float, float]:
        box = self.doc.load_page(page_index).mediabox
        return box.width, box.height

    def new_ref(self) -> int:
        return self.doc.get_new_xref()

    def assign(self, xref: int, source: str) -> None:
        """Replace the body of object ``xref`` with PDF dictionary source."""
        self.doc.update_object(xref, source)

    def get(self, xref: int, key: str) -> Tuple[str, str]:
        """
        (type, value) of ``key`` in object ``xref``, as PyMuPDF reports it.
        A missing key gives ("null", "null").
        """
        return self.doc.xref_get_key(xref, key)

    def get_ref(self, xref: int, key: str) -> Optional[int]:
        kind, value = self.get(xref, key)
        if kind != "xref":
            return None
        return parse_ref(value)

    def get_int(self, xref: int, key: str, default: int = 0) -> int:
        kind, value = self.get(xref, key)
        if kind == "int":
            return int(value)
        if kind == "float":
            return int(float(value))
        return default

    def outline_root(self) -> Optional[int]:
        return self.get_ref(self.doc.pdf_catalog(), "Outlines")

    def set_outline_root(self, xref: int) -> None:
        self.doc.xref_set_key(self.doc.pdf_catalog(), "Outlines", pdf_ref(xref))

    def save(self, out_path: str) -> None:
        # no garbage collection: replaced outline objects stay in the file
        self.doc.save(out_path)

    def close(self) -> None:
        self.doc.close()
