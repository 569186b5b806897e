"""
Core data models for codebase-digest.

This module contains the fundamental data structures used throughout
the application for configuration, file representation, and analysis results.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

ENV_PREFIX = "CODEBASE_DIGEST_"

DEFAULT_RELEVANT_EXTENSIONS: Tuple[str, ...] = (
    ".js", ".ts", ".jsx", ".tsx", ".json",
    ".java", ".kt", ".swift",
    ".c", ".cpp", ".h",
    ".go", ".py", ".rb", ".php",
    ".html", ".css", ".scss", ".less",
)

DEFAULT_IGNORE_PATTERNS: Tuple[str, ...] = (
    "node_modules", "vendor", "dist", "build", "public",
    "android", "fastlane", "ios", "tmp", "package.lock.json",
)


@dataclass(frozen=True)
class AnalyzerConfig:
    """
    Configuration settings for a codebase analysis.

    Ignore patterns are regular expressions searched (unanchored) in both
    the root-relative path and the base name, so a plain ``"dist"`` also
    ignores ``"redistribute.py"``. Escape metacharacters for literal matching.
    """

    directory: str = "."
    relevant_extensions: Tuple[str, ...] = DEFAULT_RELEVANT_EXTENSIONS
    max_file_size: int = 100_000
    max_tokens: int = 100_000
    ignore_patterns: Tuple[str, ...] = DEFAULT_IGNORE_PATTERNS
    ignore_files_with_no_extension: bool = True
    memory_limit_mb: float = 64
    token_encoding: str = "o200k_base"
    show_progress: bool = False

    def __post_init__(self):
        if self.directory is None or self.directory.strip() == "":
            raise ConfigurationError("directory must not be empty.")

        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "directory", os.path.abspath(self.directory))
        object.__setattr__(self, "relevant_extensions", tuple(self.relevant_extensions))
        object.__setattr__(self, "ignore_patterns", tuple(self.ignore_patterns))

        if self.max_file_size < 0:
            raise ConfigurationError("max_file_size must not be negative.")
        for name in ("max_tokens", "memory_limit_mb"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive.")

        for pattern in self.ignore_patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ConfigurationError(f"Invalid ignore pattern {pattern!r}: {e}") from e

    @classmethod
    def from_env(cls, **overrides: Any) -> "AnalyzerConfig":
        """
        Build a configuration from CODEBASE_DIGEST_* environment variables.

        Keyword overrides take precedence over the environment; anything
        left unset falls back to the dataclass defaults.
        """
        values: Dict[str, Any] = {}

        directory = os.getenv(f"{ENV_PREFIX}DIRECTORY")
        if directory:
            values["directory"] = directory

        extensions = _env_list("EXTENSIONS")
        if extensions:
            values["relevant_extensions"] = tuple(extensions)

        patterns = _env_list("IGNORE_PATTERNS")
        if patterns:
            values["ignore_patterns"] = tuple(patterns)

        for key, name in (
            ("MAX_FILE_SIZE", "max_file_size"),
            ("MAX_TOKENS", "max_tokens"),
            ("MEMORY_LIMIT_MB", "memory_limit_mb"),
        ):
            number = _env_int(key)
            if number is not None:
                values[name] = number

        include_extensionless = os.getenv(f"{ENV_PREFIX}INCLUDE_EXTENSIONLESS")
        if include_extensionless is not None:
            values["ignore_files_with_no_extension"] = include_extensionless.strip().lower() not in {
                "1", "true", "yes", "on"
            }

        encoding = os.getenv(f"{ENV_PREFIX}TOKEN_ENCODING")
        if encoding:
            values["token_encoding"] = encoding

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _env_list(key: str) -> List[str]:
    raw = os.getenv(f"{ENV_PREFIX}{key}", "")
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_int(key: str) -> Optional[int]:
    raw = os.getenv(f"{ENV_PREFIX}{key}")
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{ENV_PREFIX}{key} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class FileNode:
    """Represents a file or directory discovered during a crawl."""

    name: str
    path: str
    size: int
    is_dir: bool
    children: Tuple["FileNode", ...] = ()

    def is_file(self) -> bool:
        """Check if this node represents a file."""
        return not self.is_dir

    def is_directory(self) -> bool:
        """Check if this node represents a directory."""
        return self.is_dir


@dataclass(frozen=True)
class FileStats:
    """File statistics reported with an analysis."""

    total_size: int
    total_count: int
    processed_count: int


@dataclass
class CrawlResult:
    """Tree produced by a crawl together with the size of its relevant files."""

    tree: Tuple[FileNode, ...]
    total_size: int = 0
    errors: List[str] = field(default_factory=list)


@dataclass
class AnalysisRun:
    """Mutable counters scoped to a single analyze() call."""

    total_size: int = 0
    total_files: int = 0
    processed_files: int = 0
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisOutput:
    """Result of a codebase analysis."""

    context: str
    token_count: int
    tree_view: str
    files: FileStats
    errors: Tuple[str, ...] = ()

    def has_errors(self) -> bool:
        """Check if any soft errors occurred during analysis."""
        return len(self.errors) > 0

    def get_error_summary(self) -> str:
        """Get a summary of all errors."""
        if not self.errors:
            return "No errors encountered."
        return f"{len(self.errors)} errors encountered:\n" + "\n".join(f"- {e}" for e in self.errors)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the public output record shape."""
        return {
            "context": self.context,
            "tokenCount": self.token_count,
            "treeView": self.tree_view,
            "files": {
                "totalSize": self.files.total_size,
                "totalCount": self.files.total_count,
                "processedCount": self.files.processed_count,
            },
            "errors": list(self.errors),
        }
