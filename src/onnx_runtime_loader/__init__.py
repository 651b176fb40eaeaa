"""ONNX Runtime loader package."""

from onnx_runtime_loader.types import (
    HostOS,
    HostArch,
    RuntimeDescriptor,
    RuntimeConfig,
    CachePaths
)
from onnx_runtime_loader.config import (
    build_config,
    with_base_url,
    with_version,
    with_cache_path,
    with_library_path,
    with_gpu
)
from onnx_runtime_loader.binaries import ensure_runtime, format_url, get_platform_info
from onnx_runtime_loader.runtime import Runtime, RuntimeState
from onnx_runtime_loader.errors import (
    OnnxRuntimeLoaderError,
    ConfigurationError,
    PlatformMismatchError,
    LibraryNotFoundError,
    UnsupportedPlatformError,
    DownloadError,
    DownloadCancelledError,
    ArchiveError,
    ArchiveEntryNotFoundError,
    CacheError,
    RuntimeStateError
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "HostOS",
    "HostArch",
    "RuntimeDescriptor",
    "RuntimeConfig",
    "CachePaths",

    # Configuration
    "build_config",
    "with_base_url",
    "with_version",
    "with_cache_path",
    "with_library_path",
    "with_gpu",

    # Acquisition
    "ensure_runtime",
    "format_url",
    "get_platform_info",

    # Session
    "Runtime",
    "RuntimeState",

    # Error types
    "OnnxRuntimeLoaderError",
    "ConfigurationError",
    "PlatformMismatchError",
    "LibraryNotFoundError",
    "UnsupportedPlatformError",
    "DownloadError",
    "DownloadCancelledError",
    "ArchiveError",
    "ArchiveEntryNotFoundError",
    "CacheError",
    "RuntimeStateError"
]
