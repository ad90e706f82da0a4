from __future__ import annotations

import os
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .api import merge_files, read_outline, write_outline
from .config import get_settings
from .errors import OutlineError
from .export import read_outline_json
from .log import configure_logging
from .models import OutlineBranch, OutlineNode
from .tree import iter_depth, opening_count

app = typer.Typer(add_completion=False)
console = Console()


def _summarize_outline(forest: List[OutlineNode], max_rows: int = 30) -> None:
    t = Table(title="Outline entries (preview)")
    t.add_column("Depth", justify="right")
    t.add_column("Title")
    t.add_column("Page", justify="right")
    t.add_column("Style")

    rows = list(iter_depth(forest))
    for depth, node in rows[:max_rows]:
        page = str(node.destination.page_index + 1) if node.destination is not None else "-"
        style = ("B" if node.bold else "") + ("I" if node.italic else "")
        title = f'{"  " * depth}{escape(node.title)}'
        if isinstance(node, OutlineBranch) and node.children:
            title += f" [dim]({len(node.children)})[/dim]"
        t.add_row(str(depth), title, page, style)
    if len(rows) > max_rows:
        t.add_row("…", f"(+{len(rows) - max_rows} more)", "…", "")
    console.print(t)


def _require_pdf(pdf_path: str) -> None:
    if not os.path.exists(pdf_path):
        raise typer.BadParameter(f"PDF not found: {pdf_path}")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
):
    """
    Read, write and merge PDF outlines (bookmarks).
    """
    configure_logging(log_level or get_settings().log_level)


@app.command()
def show(
    pdf_path: str = typer.Argument(..., help="Path to a PDF"),
    markdown: bool = typer.Option(False, "--markdown", help="Print the outline as markdown"),
):
    """
    Print the outline of a PDF.
    """
    _require_pdf(pdf_path)
    result = read_outline(pdf_path)

    if not result.forest:
        console.print("[yellow]No outline found.[/yellow]")
        raise typer.Exit(code=0)

    if markdown:
        console.print(result.outline_md, markup=False)
    else:
        _summarize_outline(result.forest)
    console.print(f"[bold]{len(result.forest)}[/bold] top-level entries, {result.page_count} pages.")


@app.command()
def export(
    pdf_path: str = typer.Argument(..., help="Path to a PDF"),
    out: Optional[str] = typer.Option(None, "--out", help="Output directory"),
):
    """
    Export the outline as outline.json, outline.md and outline.csv.
    """
    _require_pdf(pdf_path)
    out_dir = out or get_settings().default_out_dir
    result = read_outline(pdf_path)
    result.export(out_dir)
    console.print(f"[green]Done.[/green] {len(result.frame())} entries written to: {out_dir}")


@app.command("set")
def set_outline(
    pdf_path: str = typer.Argument(..., help="PDF to take pages from"),
    outline_json: str = typer.Argument(..., help="Outline as a JSON list of records"),
    out: str = typer.Option(..., "--out", help="Where to save the new PDF"),
):
    """
    Replace the outline of a PDF with one loaded from JSON.
    """
    _require_pdf(pdf_path)
    if not os.path.exists(outline_json):
        raise typer.BadParameter(f"Outline file not found: {outline_json}")

    try:
        forest = read_outline_json(outline_json)
        encoded = write_outline(pdf_path, forest, out)
    except (OutlineError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=2)

    console.print(
        f"[green]Wrote[/green] {len(encoded.objects)} entries "
        f"({opening_count(forest)} visible) to: {out}"
    )


@app.command()
def merge(
    pdf_paths: List[str] = typer.Argument(..., help="PDFs to concatenate, in order"),
    out: str = typer.Option(..., "--out", help="Where to save the merged PDF"),
):
    """
    Concatenate PDFs and keep every outline, shifted to the new page numbers.
    """
    for p in pdf_paths:
        _require_pdf(p)

    try:
        encoded = merge_files(pdf_paths, out)
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=2)

    console.print(f"[green]Merged[/green] {len(pdf_paths)} files, {len(encoded.objects)} outline entries: {out}")


if __name__ == "__main__":
    app()
