"""FileNode tree building from the filesystem."""

import asyncio
import logging
import os
import stat
from typing import Optional, Tuple

from ..core.models import AnalyzerConfig, CrawlResult, FileNode
from .file_filter import FileFilter

logger = logging.getLogger(__name__)


class FileTreeBuilder:
    """
    Crawls a directory into a pruned FileNode tree.

    Entries of one directory are stat'ed and recursed into concurrently;
    results keep the order os.listdir returned them in. Directories that end
    up without surviving children are dropped from the tree.
    """

    def __init__(self, config: AnalyzerConfig, file_filter: Optional[FileFilter] = None):
        self.config = config
        self.file_filter = file_filter or FileFilter(config)

    async def crawl(self) -> CrawlResult:
        """Crawl the configured root directory."""
        return await self.gather_files(self.config.directory)

    async def gather_files(self, directory: str) -> CrawlResult:
        """
        Build the tree below a directory.

        Args:
            directory: Directory to crawl.

        Returns:
            CrawlResult with the top-level nodes, the summed size of every
            relevant file found and the soft errors hit on the way.
        """
        result = CrawlResult(tree=())
        result.tree = await self._gather(directory, result)
        return result

    async def _gather(self, directory: str, result: CrawlResult) -> Tuple[FileNode, ...]:
        try:
            items = await asyncio.to_thread(os.listdir, directory)
        except OSError as e:
            logger.warning(f"Error gathering files in directory {directory}: {e}")
            result.errors.append(f"{directory}: {e}")
            return ()

        nodes = await asyncio.gather(
            *(self._build_node(directory, item, result) for item in items)
        )
        return tuple(node for node in nodes if node is not None)

    async def _build_node(self, directory: str, item: str, result: CrawlResult) -> Optional[FileNode]:
        full_path = os.path.join(directory, item)
        if self.file_filter.should_ignore(full_path):
            logger.debug(f"Ignoring {full_path}")
            return None

        try:
            st = await asyncio.to_thread(os.stat, full_path)
        except OSError as e:
            logger.warning(f"Error reading {full_path}: {e}")
            result.errors.append(f"{full_path}: {e}")
            return None

        if stat.S_ISDIR(st.st_mode):
            children = await self._gather(full_path, result)
            if not children:
                return None
            return FileNode(
                name=item,
                path=full_path,
                size=sum(child.size for child in children),
                is_dir=True,
                children=children,
            )

        if await asyncio.to_thread(self.file_filter.is_relevant_file, full_path):
            result.total_size += st.st_size
            return FileNode(name=item, path=full_path, size=st.st_size, is_dir=False)

        if logger.isEnabledFor(logging.DEBUG):
            reason = await asyncio.to_thread(self.file_filter.get_excluded_reason, full_path)
            logger.debug(f"Skipping {full_path}: {reason}")
        return None

