"""Path helpers shared by the filter and the crawler."""

import os


class PathUtils:
    """Utilities for consistent path handling relative to an analysis root."""

    @staticmethod
    def relative_to_root(root: str, path: str) -> str:
        """
        Express path relative to root.

        Args:
            root: Absolute root directory of the analysis
            path: Path to express (absolute or relative to the CWD)

        Returns:
            Root-relative path using the platform separator
        """
        return os.path.relpath(os.path.abspath(path), root)

    @staticmethod
    def is_hidden(relative_path: str) -> bool:
        """A root-relative path is hidden when it starts with a dot."""
        return relative_path.startswith(".")

    @staticmethod
    def has_extension(path: str) -> bool:
        """
        Check whether the final path component carries an extension.

        A leading dot does not count, so ``.gitignore`` has none.
        """
        _, ext = os.path.splitext(os.path.basename(path))
        return ext != ""
