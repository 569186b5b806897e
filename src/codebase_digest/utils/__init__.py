"""Utility modules for codebase-digest."""

from .file_filter import FileFilter
from .encodings import EncodingDetector
from .formatting import format_size
from .path_utils import PathUtils
from .tree_builder import FileTreeBuilder
from .tree_renderer import build_tree_view

__all__ = [
    "FileFilter",
    "EncodingDetector",
    "format_size",
    "PathUtils",
    "FileTreeBuilder",
    "build_tree_view",
]
