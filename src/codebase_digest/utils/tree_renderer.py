"""Text rendering of FileNode trees."""

from typing import Sequence

from ..core.models import FileNode
from .formatting import format_size

DIR_MARKER = "📁"
FILE_MARKER = "☰"


def build_tree_view(nodes: Sequence[FileNode], indent: str = "") -> str:
    """
    Render nodes as an indented tree diagram, one line per node.

    Args:
        nodes: Nodes of the current level, in display order.
        indent: Prefix carried down from the parent levels.

    Returns:
        The rendered tree, every line terminated by a newline.
    """
    lines = []
    for index, node in enumerate(nodes):
        is_last = index == len(nodes) - 1
        connector = "└──" if is_last else "├──"
        marker = DIR_MARKER if node.is_dir else FILE_MARKER
        size = "" if node.is_dir else f" {format_size(node.size)}"
        lines.append(f"{indent}{connector} {marker} {node.name}{size}\n")

        if node.is_dir:
            extension = "    " if is_last else "│   "
            lines.append(build_tree_view(node.children, indent + extension))
    return "".join(lines)
