from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from .models import OutlineBranch, OutlineNode, WholePage


def walk(forest: Sequence[OutlineNode], visit: Callable[[OutlineNode], Optional[bool]]) -> None:
    """
    Depth-first, pre-order traversal, siblings in order.

    If ``visit`` returns ``False`` the children of that node are skipped;
    later siblings are still visited.
    """
    for node in forest:
        ret = visit(node)
        if isinstance(node, OutlineBranch) and ret is not False:
            walk(node.children, visit)


def flatten(forest: Sequence[OutlineNode]) -> List[OutlineNode]:
    """Every node in pre-order."""
    result: List[OutlineNode] = []

    def collect(node: OutlineNode) -> None:
        result.append(node)

    walk(forest, collect)
    return result


def opening_count(forest: Sequence[OutlineNode]) -> int:
    """
    Number of entries visible when ``forest`` is shown.

    Each node counts 1; an expanded branch adds the opening count of its
    children, a collapsed one adds nothing.
    """
    count = 0

    def visit(node: OutlineNode) -> bool:
        nonlocal count
        count += 1
        return not (isinstance(node, OutlineBranch) and not node.is_expanded)

    walk(forest, visit)
    return count


def iter_depth(forest: Sequence[OutlineNode], depth: int = 0) -> Iterator[Tuple[int, OutlineNode]]:
    """Yield (depth, node) in pre-order, top level at depth 0."""
    for node in forest:
        yield depth, node
        if isinstance(node, OutlineBranch):
            yield from iter_depth(node.children, depth + 1)


def _describe_destination(node: OutlineNode) -> str:
    dest = node.destination
    if dest is None:
        return "no destination"
    if isinstance(dest, WholePage):
        return f"p. {dest.page_index + 1}"
    return f"p. {dest.page_index + 1} @ ({dest.x_fraction:.2f}, {dest.y_fraction:.2f})"


def tree_to_markdown(forest: Sequence[OutlineNode], indent: int = 2) -> str:
    """
    Pretty markdown outline (page numbers shown 1-indexed).
    """
    lines: List[str] = []
    for depth, node in iter_depth(forest):
        title = node.title
        if node.bold:
            title = f"**{title}**"
        if node.italic:
            title = f"*{title}*"
        lines.append(f'{" " * (indent * depth)}- {title}  ({_describe_destination(node)})')
    return "\n".join(lines).strip() + "\n" if lines else ""
