"""
Context assembly for codebase-digest.

Walks a crawled FileNode tree depth-first, reads each file and concatenates
the contents into delimited blocks. Reading is strictly sequential so the
memory guard sees usage grow node by node and can abort early.
"""

import logging
from typing import List, Optional, Sequence

from tqdm import tqdm

from ..utils.encodings import EncodingDetector
from ..utils.formatting import format_size
from .exceptions import NoRelevantFilesError
from .memory import MemoryGuard
from .models import AnalysisRun, FileNode

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 20


class ContextAssembler:
    """Turns a FileNode tree into one context string."""

    def __init__(
        self,
        memory_guard: MemoryGuard,
        encoding_detector: Optional[EncodingDetector] = None,
        show_progress: bool = False,
    ):
        self.memory_guard = memory_guard
        self.encoding_detector = encoding_detector or EncodingDetector()
        self.show_progress = show_progress

    def count_total_files(self, nodes: Sequence[FileNode]) -> int:
        """Count leaf (file) nodes, regardless of whether they can be read."""
        return sum(
            self.count_total_files(node.children) if node.is_dir else 1
            for node in nodes
        )

    @staticmethod
    def format_block(node: FileNode, content: str) -> str:
        """Format one file as a context block."""
        return f"File: {node.path} ({format_size(node.size)})\n\n{content.strip()}\n\n{SEPARATOR}\n"

    def process_file_tree(
        self,
        nodes: Sequence[FileNode],
        sink: List[str],
        run: AnalysisRun,
        progress: Optional[tqdm] = None,
    ) -> None:
        """
        Append a block for every readable file below nodes to sink.

        Read failures are logged and recorded on run; the memory guard is
        checked after every node and its error propagates.
        """
        for node in nodes:
            if node.is_dir:
                self.process_file_tree(node.children, sink, run, progress)
            else:
                try:
                    content = self.encoding_detector.read_text(node.path)
                except (OSError, UnicodeDecodeError) as e:
                    logger.warning(f"Error reading file {node.path}: {e}")
                    run.errors.append(f"{node.path}: {e}")
                else:
                    sink.append(self.format_block(node, content))
                    run.processed_files += 1
                if progress is not None:
                    progress.update(1)
            self.memory_guard.check()

    def gather_context(self, nodes: Sequence[FileNode], run: AnalysisRun) -> str:
        """
        Assemble the context for a tree.

        Raises:
            NoRelevantFilesError: If no file could be appended.
            MemoryLimitExceededError: If the memory guard trips.
        """
        run.total_files = self.count_total_files(nodes)
        context: List[str] = []

        with self.memory_guard.tracking(), tqdm(
            total=run.total_files,
            desc="Reading files",
            unit="file",
            disable=not self.show_progress,
            leave=False,
        ) as progress:
            self.process_file_tree(nodes, context, run, progress)

        if not context:
            raise NoRelevantFilesError()
        return "\n".join(context)
