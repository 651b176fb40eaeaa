"""Runtime library acquisition."""
from pathlib import Path
from typing import Optional

from onnx_runtime_loader.binaries.binary_info import format_url
from onnx_runtime_loader.binaries.cache import (
    ensure_runtime_dir,
    get_cache_paths,
    get_cached_library,
    remove_archive,
)
from onnx_runtime_loader.binaries.platforms import get_platform_info
from onnx_runtime_loader.errors import (
    ArchiveEntryNotFoundError,
    ArchiveError,
    CacheError,
    LibraryNotFoundError,
    PlatformMismatchError,
)
from onnx_runtime_loader.logging import get_logger
from onnx_runtime_loader.types import RuntimeConfig, RuntimeDescriptor
from onnx_runtime_loader.utils.fetching import download_url, extract_file
from onnx_runtime_loader.utils.fs import remove_quietly

logger = get_logger(__name__)


def check_library_path(library_path: Path, descriptor: RuntimeDescriptor) -> Path:
    """Validate a user supplied library against the current platform."""
    if library_path.suffix != descriptor.library_suffix:
        raise PlatformMismatchError(str(library_path), descriptor.library_suffix)
    if not library_path.exists():
        raise LibraryNotFoundError(str(library_path))
    return library_path


async def fetch_runtime(
    config: RuntimeConfig,
    descriptor: RuntimeDescriptor,
    timeout: Optional[float] = None
) -> Path:
    """Download and unpack the runtime library into the cache."""
    url = format_url(config.base_url, descriptor)
    paths = get_cache_paths(config.cache_path, descriptor, url)

    ensure_runtime_dir(paths)

    cached = get_cached_library(paths)
    if cached:
        return cached

    if paths.archive.exists():
        logger.info({
            "event": "using_existing_archive",
            "archive": str(paths.archive)
        })
    else:
        await download_url(url, paths.archive, tmp_path=paths.download, timeout=timeout)

    try:
        extract_file(paths.archive, paths.library, descriptor.library_name)
    except ArchiveEntryNotFoundError:
        raise
    except ArchiveError:
        # Unreadable archive would fail every later call too
        remove_quietly(paths.archive)
        raise
    except OSError as e:
        raise CacheError(
            f"failed to extract runtime: {e}",
            details={"archive": str(paths.archive), "library": str(paths.library)}
        ) from e

    remove_archive(paths)

    logger.info({
        "event": "runtime_ready",
        "version": descriptor.version,
        "path": str(paths.library)
    })
    return paths.library


async def ensure_runtime(
    config: RuntimeConfig,
    descriptor: Optional[RuntimeDescriptor] = None,
    timeout: Optional[float] = None
) -> Path:
    """Return a local path to a usable runtime library.

    Args:
        config: Runtime configuration
        descriptor: Release to acquire, defaults to the one for this host
        timeout: Deadline in seconds for the archive download

    Returns:
        Path to the runtime library

    Raises:
        OnnxRuntimeLoaderError: If the library cannot be obtained
    """
    if descriptor is None:
        descriptor = get_platform_info(config.version, config.gpu)

    if config.library_path is not None:
        return check_library_path(config.library_path, descriptor)

    return await fetch_runtime(config, descriptor, timeout=timeout)
