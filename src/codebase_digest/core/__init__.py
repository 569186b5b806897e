"""Core components for codebase-digest."""

from .exceptions import (
    CodebaseDigestError,
    ConfigurationError,
    MemoryLimitExceededError,
    NoRelevantFilesError,
)
from .models import AnalyzerConfig, FileNode, FileStats, AnalysisOutput, CrawlResult, AnalysisRun
from .memory import MemoryGuard
from .tokenizer import TokenCounter
from .truncator import ContextTruncator

__all__ = [
    "CodebaseDigestError",
    "ConfigurationError",
    "MemoryLimitExceededError",
    "NoRelevantFilesError",
    "AnalyzerConfig",
    "FileNode",
    "FileStats",
    "AnalysisOutput",
    "CrawlResult",
    "AnalysisRun",
    "MemoryGuard",
    "TokenCounter",
    "ContextTruncator",
]
