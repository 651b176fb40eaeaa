"""Runtime cache management."""
import os
from pathlib import Path
from typing import Optional

from onnx_runtime_loader.constants import RUNTIME_DIR_NAME
from onnx_runtime_loader.errors import CacheError
from onnx_runtime_loader.logging import get_logger
from onnx_runtime_loader.types import CachePaths, RuntimeDescriptor
from onnx_runtime_loader.utils.fetching import get_download_path

logger = get_logger(__name__)


def get_cache_paths(cache_path: Path, descriptor: RuntimeDescriptor, url: str) -> CachePaths:
    """Derive the cache locations for a runtime release."""
    runtime_dir = Path(cache_path) / RUNTIME_DIR_NAME
    archive = runtime_dir / Path(url).name
    return CachePaths(
        runtime_dir=runtime_dir,
        library=runtime_dir / descriptor.library_name,
        archive=archive,
        download=get_download_path(archive),
    )


def ensure_runtime_dir(paths: CachePaths) -> None:
    try:
        paths.runtime_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CacheError(
            f"Failed to create cache directory {paths.runtime_dir}: {e}",
            details={"path": str(paths.runtime_dir)}
        ) from e


def get_cached_library(paths: CachePaths) -> Optional[Path]:
    """Get cached library path if it exists."""
    if paths.library.exists():
        logger.info({
            "event": "runtime_cache_hit",
            "path": str(paths.library)
        })
        return paths.library
    return None


def remove_archive(paths: CachePaths) -> None:
    """Delete the downloaded archive once the library is extracted."""
    try:
        os.remove(paths.archive)
    except OSError as e:
        raise CacheError(
            f"failed to remove archive: {e}",
            details={"archive": str(paths.archive)}
        ) from e

    logger.debug({
        "event": "archive_removed",
        "archive": str(paths.archive)
    })
