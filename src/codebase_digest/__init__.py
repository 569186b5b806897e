"""codebase-digest: bounded, LLM-ready context from a source tree."""

from .core import (
    AnalysisOutput,
    AnalyzerConfig,
    CodebaseDigestError,
    ConfigurationError,
    FileNode,
    FileStats,
    MemoryLimitExceededError,
    NoRelevantFilesError,
    TokenCounter,
)
from .core.analyzer import CodebaseAnalyzer

__version__ = "0.1.0"

__all__ = [
    "AnalysisOutput",
    "AnalyzerConfig",
    "CodebaseAnalyzer",
    "CodebaseDigestError",
    "ConfigurationError",
    "FileNode",
    "FileStats",
    "MemoryLimitExceededError",
    "NoRelevantFilesError",
    "TokenCounter",
]
