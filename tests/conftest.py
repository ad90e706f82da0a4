"""
Pytest configuration and global fixtures.
"""
import sys
from pathlib import Path

import fitz  # PyMuPDF
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pdf_outline.models import OutlineBranch, OutlineLeaf, WholePage, ExactPosition
from pdf_outline.pdf_graph import PdfGraph


def make_doc(n_pages=5, sizes=None):
    """New in-memory PDF; ``sizes`` is a list of (width, height) per page."""
    doc = fitz.open()
    sizes = sizes or [(612, 792)] * n_pages
    for width, height in sizes:
        doc.new_page(width=width, height=height)
    return doc


def reopen(doc):
    """Round-trip through bytes so MuPDF re-reads the outline."""
    return fitz.open("pdf", doc.tobytes())


@pytest.fixture
def graph():
    """Five letter-size pages, no outline."""
    g = PdfGraph(make_doc(5))
    yield g
    g.close()


@pytest.fixture
def mixed_graph():
    """Pages of different sizes."""
    g = PdfGraph(make_doc(sizes=[(612, 792), (300, 400), (842, 595)]))
    yield g
    g.close()


@pytest.fixture
def sample_forest():
    """A, B (expanded) > B1."""
    return [
        OutlineLeaf(title="A", destination=WholePage(0)),
        OutlineBranch(
            title="B",
            destination=WholePage(1),
            children=[OutlineLeaf(title="B1", destination=WholePage(2))],
            is_expanded=True,
        ),
    ]


@pytest.fixture
def deep_forest():
    """Depth 4, mixed expanded/collapsed branches and styles."""
    return [
        OutlineLeaf(title="Cover", destination=WholePage(0), bold=True),
        OutlineBranch(
            title="Part 1",
            destination=WholePage(1),
            is_expanded=True,
            italic=True,
            children=[
                OutlineBranch(
                    title="Chapter 1",
                    destination=ExactPosition(1, 0.0, 1.0),
                    is_expanded=False,
                    children=[
                        OutlineLeaf(title="1.1", destination=WholePage(2)),
                        OutlineBranch(
                            title="1.2",
                            destination=WholePage(2),
                            is_expanded=True,
                            children=[OutlineLeaf(title="1.2.1", destination=WholePage(3), bold=True, italic=True)],
                        ),
                    ],
                ),
                OutlineBranch(
                    title="Chapter 2",
                    is_expanded=True,
                    children=[
                        OutlineLeaf(title="2.1", destination=ExactPosition(3, 0.5, 0.5)),
                        OutlineLeaf(title="2.2", destination=WholePage(4)),
                    ],
                ),
            ],
        ),
        OutlineBranch(title="Empty part", children=[]),
    ]


@pytest.fixture
def pdf_file(tmp_path):
    """A 4-page PDF on disk with no outline."""
    path = tmp_path / "plain.pdf"
    doc = make_doc(4)
    doc.save(str(path))
    doc.close()
    return path
