"""Main codebase analyzer orchestrator."""

import asyncio
import logging
from typing import Optional, Protocol

from ..utils.file_filter import FileFilter
from ..utils.tree_builder import FileTreeBuilder
from ..utils.tree_renderer import build_tree_view
from .assembler import ContextAssembler
from .memory import MemoryGuard, MemoryProbe
from .models import AnalysisOutput, AnalysisRun, AnalyzerConfig, FileStats
from .tokenizer import TokenCounter
from .truncator import ContextTruncator

logger = logging.getLogger(__name__)


class TokenCounting(Protocol):
    def count(self, text: str) -> int: ...


class CodebaseAnalyzer:
    """
    Analyzer producing a bounded context, tree view and statistics for a directory.

    Counters live in a fresh AnalysisRun per call, so one instance can serve
    several analyze() calls, concurrent ones included.
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        token_counter: Optional[TokenCounting] = None,
        memory_probe: Optional[MemoryProbe] = None,
    ):
        """
        Initialize analyzer.

        Args:
            config: Analysis settings; defaults to AnalyzerConfig().
            token_counter: Object with count(text) -> int. Defaults to a
                tiktoken-backed TokenCounter for config.token_encoding.
            memory_probe: Callable returning heap usage in bytes, for the
                memory guard.
        """
        self.config = config or AnalyzerConfig()
        self.file_filter = FileFilter(self.config)
        self.tree_builder = FileTreeBuilder(self.config, self.file_filter)
        self.memory_guard = MemoryGuard(self.config.memory_limit_mb, memory_probe)
        self.assembler = ContextAssembler(self.memory_guard, show_progress=self.config.show_progress)
        self.truncator = ContextTruncator(self.config.max_tokens)
        self.token_counter = token_counter or TokenCounter(self.config.token_encoding)

    async def analyze(self) -> AnalysisOutput:
        """
        Analyze the configured directory.

        Returns:
            AnalysisOutput with context, token count, tree view and file stats.

        Raises:
            NoRelevantFilesError: If no relevant, readable file was found.
            MemoryLimitExceededError: If assembly passes the memory ceiling.
        """
        run = AnalysisRun()
        try:
            crawl = await self.tree_builder.crawl()
            run.total_size = crawl.total_size
            run.errors.extend(crawl.errors)

            context = await asyncio.to_thread(self.assembler.gather_context, crawl.tree, run)
            truncated_context = self.truncator.truncate(context)
            token_count = self.token_counter.count(truncated_context)
            tree_view = build_tree_view(crawl.tree)

            return AnalysisOutput(
                context=truncated_context,
                token_count=token_count,
                tree_view=tree_view,
                files=FileStats(
                    total_size=run.total_size,
                    total_count=run.total_files,
                    processed_count=run.processed_files,
                ),
                errors=tuple(run.errors),
            )
        except Exception as e:
            logger.error(f"Error generating summary: {e}")
            raise

    def analyze_sync(self) -> AnalysisOutput:
        """Run analyze() to completion from synchronous code."""
        return asyncio.run(self.analyze())
