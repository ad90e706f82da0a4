# Demo: merge two PDFs and show the combined outline
# Run from repo root:
#   python notebooks/01_demo_merge.py data/pdfs/a.pdf data/pdfs/b.pdf

import sys
from pathlib import Path

from pdf_outline.api import merge_files, read_outline

if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python notebooks/01_demo_merge.py first.pdf second.pdf [more.pdf ...]")
        raise SystemExit(1)

    out = Path("outputs/demo/merged.pdf")
    out.parent.mkdir(parents=True, exist_ok=True)
    merge_files(sys.argv[1:], str(out))

    result = read_outline(str(out))
    print(result.outline_md)
    print(f"{result.page_count} pages written to: {out}")
