from __future__ import annotations

from typing import List
import os
import json

import pandas as pd

from .errors import OutlineFormatError
from .models import OutlineNode, forest_from_records, forest_to_records


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def write_outline_json(out_dir: str, forest: List[OutlineNode], indent: int = 2) -> str:
    ensure_dir(out_dir)
    p = os.path.join(out_dir, "outline.json")
    with open(p, "w", encoding="utf-8") as f:
        json.dump(forest_to_records(forest), f, ensure_ascii=False, indent=indent)
    return p


def write_outline_md(out_dir: str, outline_md: str) -> str:
    ensure_dir(out_dir)
    p = os.path.join(out_dir, "outline.md")
    with open(p, "w", encoding="utf-8") as f:
        f.write(outline_md)
    return p


def write_outline_csv(out_dir: str, frame: pd.DataFrame) -> str:
    ensure_dir(out_dir)
    p = os.path.join(out_dir, "outline.csv")
    frame.to_csv(p, index=False)
    return p


def read_outline_json(path: str) -> List[OutlineNode]:
    """
    Load a forest from a JSON list of records:
    {"title", "to": page | [page, x, y] | null, "italic", "bold", "children", "open"}
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            records = json.load(f)
        except json.JSONDecodeError as exc:
            raise OutlineFormatError(f"{path}: not valid JSON ({exc})") from exc
    return forest_from_records(records)
