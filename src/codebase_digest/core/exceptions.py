"""Exception hierarchy for codebase-digest."""


class CodebaseDigestError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ConfigurationError(CodebaseDigestError, ValueError):
    """Raised when an AnalyzerConfig is invalid."""
    pass


class MemoryLimitExceededError(CodebaseDigestError):
    """Raised when heap usage passes the configured ceiling during assembly."""

    def __init__(self, used_mb: float, limit_mb: float):
        self.used_mb = used_mb
        self.limit_mb = limit_mb
        super().__init__("Your codebase is too large to process. Please try again with a smaller one.")


class NoRelevantFilesError(CodebaseDigestError):
    """Raised when no relevant, readable files were found."""

    def __init__(self, message: str = "No relevant files found."):
        super().__init__(message)
