from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Dict, Any, Sequence

import pandas as pd

from .config import get_settings
from .decoder import decode_outline
from .encoder import EncodedOutline, encode_outline
from .export import write_outline_csv, write_outline_json, write_outline_md
from .merge import merge_pdfs
from .models import ExactPosition, OutlineBranch, OutlineNode
from .pdf_graph import PdfGraph
from .tree import iter_depth, tree_to_markdown


@dataclass
class OutlineResult:
    pdf_path: str
    page_count: int
    forest: List[OutlineNode]
    outline_md: str

    def frame(self) -> pd.DataFrame:
        rows: List[Dict[str, Any]] = []
        for depth, node in iter_depth(self.forest):
            dest = node.destination
            is_branch = isinstance(node, OutlineBranch)
            rows.append(
                {
                    "depth": depth,
                    "title": node.title,
                    "kind": "branch" if is_branch else "leaf",
                    "page_index": dest.page_index if dest is not None else None,
                    "x_fraction": dest.x_fraction if isinstance(dest, ExactPosition) else None,
                    "y_fraction": dest.y_fraction if isinstance(dest, ExactPosition) else None,
                    "bold": node.bold,
                    "italic": node.italic,
                    "n_children": len(node.children) if is_branch else 0,
                    "expanded": node.is_expanded if is_branch else None,
                }
            )
        frame = pd.DataFrame(rows)
        if not frame.empty:
            frame["page_index"] = frame["page_index"].astype("Int64")
        return frame

    def export(self, out_dir: str) -> None:
        settings = get_settings()
        out = Path(out_dir)
        out.mkdir(parents=True, exist_ok=True)

        write_outline_json(str(out), self.forest, indent=settings.json_indent)
        write_outline_md(str(out), self.outline_md)
        write_outline_csv(str(out), self.frame())


def _check_exists(pdf_path: str) -> None:
    if not Path(pdf_path).exists():
        raise FileNotFoundError(f"PDF not found: {pdf_path}")


def _check_distinct(out_path: str, inputs: Sequence[str]) -> None:
    out = Path(out_path).resolve()
    if any(Path(p).resolve() == out for p in inputs):
        raise ValueError(f"Output path must differ from the inputs: {out_path}")


def read_outline(pdf_path: str) -> OutlineResult:
    _check_exists(pdf_path)
    graph = PdfGraph.open(pdf_path)
    try:
        forest = decode_outline(graph)
        return OutlineResult(
            pdf_path=pdf_path,
            page_count=graph.page_count,
            forest=forest,
            outline_md=tree_to_markdown(forest, indent=get_settings().markdown_indent),
        )
    finally:
        graph.close()


def write_outline(pdf_path: str, forest: Sequence[OutlineNode], out_path: str) -> EncodedOutline:
    """
    Save a copy of ``pdf_path`` at ``out_path`` whose outline is ``forest``.
    """
    _check_exists(pdf_path)
    _check_distinct(out_path, [pdf_path])
    graph = PdfGraph.open(pdf_path)
    try:
        encoded = encode_outline(graph, forest)
        graph.save(out_path)
        return encoded
    finally:
        graph.close()


def merge_files(pdf_paths: Sequence[str], out_path: str) -> EncodedOutline:
    """
    Concatenate ``pdf_paths`` in order into ``out_path``, keeping every outline.
    """
    if len(pdf_paths) < 2:
        raise ValueError("Need at least two PDFs to merge")
    for p in pdf_paths:
        _check_exists(p)
    _check_distinct(out_path, pdf_paths)

    target = PdfGraph.open(pdf_paths[0])
    sources = [PdfGraph.open(p) for p in pdf_paths[1:]]
    try:
        encoded = merge_pdfs(target, *sources)
        target.save(out_path)
        return encoded
    finally:
        for g in sources:
            g.close()
        target.close()
