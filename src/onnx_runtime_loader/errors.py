"""Error handling for the ONNX Runtime loader."""
import logging
from typing import Any, Dict, Optional


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None
) -> None:
    """Log an error with context."""
    logger = logger or logging.getLogger(__name__)

    error_info = {
        "error_type": error.__class__.__name__,
        "error_message": str(error)
    }
    if context:
        error_info["context"] = context
    if isinstance(error, OnnxRuntimeLoaderError):
        error_info["details"] = error.details

    logger.error("Runtime loader error occurred", extra={"data": error_info})


class OnnxRuntimeLoaderError(Exception):
    """Base error class for the runtime loader."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(OnnxRuntimeLoaderError):
    """Invalid runtime configuration."""


class PlatformMismatchError(ConfigurationError):
    """Configured library does not match the current platform."""
    def __init__(self, library_path: str, expected_suffix: str):
        super().__init__(
            "specified library invalid for current platform",
            details={"library_path": library_path, "expected_suffix": expected_suffix}
        )


class LibraryNotFoundError(ConfigurationError):
    """Configured library path does not exist."""
    def __init__(self, library_path: str):
        super().__init__(
            f"specified library path does not exist: {library_path}",
            details={"library_path": library_path}
        )


class UnsupportedPlatformError(OnnxRuntimeLoaderError):
    """No runtime build exists for this operating system and architecture."""
    def __init__(self, os_name: str, arch: str):
        super().__init__(
            f"Unsupported platform: {os_name}/{arch}",
            details={"os": os_name, "arch": arch}
        )


class DownloadError(OnnxRuntimeLoaderError):
    """Runtime archive download failed."""
    def __init__(self, message: str, url: str, status: Optional[int] = None):
        details: Dict[str, Any] = {"url": url}
        if status is not None:
            details["status"] = status
        super().__init__(message, details=details)
        self.status = status


class DownloadCancelledError(DownloadError):
    """Runtime archive download exceeded its deadline."""
    def __init__(self, url: str, timeout: Optional[float]):
        super().__init__(f"Download of {url} cancelled after {timeout}s", url)
        self.details["timeout"] = timeout


class ArchiveError(OnnxRuntimeLoaderError):
    """Runtime archive is malformed or of an unknown kind."""


class ArchiveEntryNotFoundError(ArchiveError):
    """Archive holds no entry for the requested file."""
    def __init__(self, target_file: str, archive_path: str):
        super().__init__(
            f"file {target_file} not found in archive",
            details={"target_file": target_file, "archive": archive_path}
        )


class CacheError(OnnxRuntimeLoaderError):
    """Filesystem failure while managing the runtime cache."""


class RuntimeStateError(OnnxRuntimeLoaderError):
    """Runtime used outside its initialize/close lifecycle."""
