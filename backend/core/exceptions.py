# core/exceptions.py - CUSTOM EXCEPTIONS
from typing import Any, Dict, Optional


class DeezlException(Exception):
    """Base exception for all custom exceptions"""

    def __init__(
        self,
        message: str = "An error occurred",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(DeezlException):
    """Validation error"""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict] = None):
        super().__init__(message, status_code=400, details=details)


# ============================================================================
# EXTRACTION FAILURES
# ============================================================================

class ExtractionError(DeezlException):
    """The extractor could not produce a result. Never cached."""

    def __init__(self, message: str = "Extraction failed", details: Optional[Dict] = None):
        super().__init__(message, status_code=500, details=details)


class ExtractorExitError(ExtractionError):
    """The extractor ran and exited with a non-zero code"""

    def __init__(self, exit_code: int, stderr: str = "", binary: str = "yt-dlp"):
        self.exit_code = exit_code
        self.stderr = stderr

        summary = _last_line(stderr)
        message = f"{binary} failed with code {exit_code}"
        if summary:
            message += f": {summary}"

        super().__init__(message, details={"exitCode": exit_code})


class ExtractorSpawnError(ExtractionError):
    """The extractor process could not be started"""

    def __init__(self, reason: str, binary: str = "yt-dlp"):
        self.reason = reason
        super().__init__(f"Failed to start {binary}: {reason}")


class ExtractorParseError(ExtractionError):
    """The extractor succeeded but its output was not a metadata document"""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to parse metadata: {reason}")


class ExtractorTimeoutError(ExtractionError):
    """The extractor did not finish before the deadline and was killed"""

    def __init__(self, timeout: float, binary: str = "yt-dlp"):
        self.timeout = timeout
        super().__init__(f"{binary} timed out after {timeout:g}s", details={"timeout": timeout})


def _last_line(text: str, limit: int = 300) -> str:
    lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
    if not lines:
        return ""
    return lines[-1][:limit]
