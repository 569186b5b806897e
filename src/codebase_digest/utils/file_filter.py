"""
File filtering utilities for codebase-digest.

This module decides which paths are ignored outright and which files are
relevant enough to be read into the context.
"""

import logging
import os
import re
import stat
from typing import List, Optional

from ..core.models import AnalyzerConfig
from .path_utils import PathUtils

logger = logging.getLogger(__name__)


class FileFilter:
    """Handles ignore and relevance checks for paths under the analysis root."""

    def __init__(self, config: AnalyzerConfig):
        self.config = config
        self.patterns: List[re.Pattern] = [re.compile(p) for p in config.ignore_patterns]

    def should_ignore(self, file_path: str) -> bool:
        """
        Check if a path should be ignored.

        Args:
            file_path: Path to a file or directory.

        Returns:
            True if the root-relative path is hidden, or if any ignore
            pattern is found in the relative path or the base name.
        """
        relative_path = PathUtils.relative_to_root(self.config.directory, file_path)
        if PathUtils.is_hidden(relative_path):
            return True

        base_name = os.path.basename(file_path)
        return any(
            pattern.search(relative_path) or pattern.search(base_name)
            for pattern in self.patterns
        )

    def has_extension(self, file_path: str) -> bool:
        """Check if the final path component has an extension."""
        return PathUtils.has_extension(file_path)

    def is_relevant_file(self, file_path: str) -> bool:
        """
        Check if a file should be read into the context.

        Args:
            file_path: Path to the file.

        Returns:
            True for a regular file within the size limit whose path ends
            with one of the relevant extensions. Stat failures count as
            not relevant.
        """
        if self.config.ignore_files_with_no_extension and not self.has_extension(file_path):
            return False

        try:
            st = os.stat(file_path)
        except OSError as e:
            logger.warning(f"Error checking relevance of file {file_path}: {e}")
            return False

        if not stat.S_ISREG(st.st_mode):
            return False
        return st.st_size <= self.config.max_file_size and self._matches_extension(file_path)

    def get_excluded_reason(self, file_path: str) -> Optional[str]:
        """
        Get the reason why a path would be excluded.

        Args:
            file_path: Path to the file.

        Returns:
            Reason string if the path would be excluded, None otherwise.
        """
        relative_path = PathUtils.relative_to_root(self.config.directory, file_path)
        if PathUtils.is_hidden(relative_path):
            return "Hidden path"
        if self.should_ignore(file_path):
            return "Matches ignore pattern"
        if self.config.ignore_files_with_no_extension and not self.has_extension(file_path):
            return "No extension"

        try:
            st = os.stat(file_path)
        except OSError:
            return "Stat failed"

        if not stat.S_ISREG(st.st_mode):
            return "Not a regular file"
        if st.st_size > self.config.max_file_size:
            return "File too large"
        if not self._matches_extension(file_path):
            return "Irrelevant extension"
        return None

    def _matches_extension(self, file_path: str) -> bool:
        return any(file_path.endswith(ext) for ext in self.config.relevant_extensions)
