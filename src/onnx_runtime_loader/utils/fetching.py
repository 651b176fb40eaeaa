import asyncio
import gzip
import os
import tarfile
import zipfile
import zlib
from pathlib import Path
from typing import Callable, Dict, Optional

import aiohttp

from onnx_runtime_loader.constants import CHUNK_SIZE, DOWNLOAD_SUFFIX, HTTP_OK
from onnx_runtime_loader.errors import (
    ArchiveEntryNotFoundError,
    ArchiveError,
    CacheError,
    DownloadCancelledError,
    DownloadError,
)
from onnx_runtime_loader.logging import get_logger
from onnx_runtime_loader.utils.fs import remove_quietly, write_atomic

logger = get_logger(__name__)

MALFORMED_ARCHIVE_ERRORS = (
    zipfile.BadZipFile,
    tarfile.TarError,
    gzip.BadGzipFile,
    zlib.error,
    EOFError,
)


def get_download_path(dest: Path) -> Path:
    """Sibling file an in-flight download of dest is written to."""
    return dest.with_name(dest.name + DOWNLOAD_SUFFIX)


async def download_url(
    url: str,
    dest: Path,
    tmp_path: Optional[Path] = None,
    timeout: Optional[float] = None
) -> Path:
    """Download url to dest, going through a sibling .download file.

    dest is only created by the final rename, so it never holds a partial body.
    """
    tmp_path = tmp_path or get_download_path(dest)
    client_timeout = aiohttp.ClientTimeout(total=timeout)

    logger.info({
        "event": "download_started",
        "url": url,
        "destination": str(dest)
    })

    try:
        async with aiohttp.ClientSession(timeout=client_timeout) as session:
            async with session.get(url) as response:
                if response.status != HTTP_OK:
                    raise DownloadError(
                        f"unexpected status code: {response.status}",
                        url,
                        status=response.status,
                    )

                downloaded = 0
                with open(tmp_path, "wb") as f:
                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        f.write(chunk)
                        downloaded += len(chunk)

        os.replace(tmp_path, dest)

    except asyncio.TimeoutError as e:
        raise DownloadCancelledError(url, timeout) from e
    except aiohttp.ClientError as e:
        raise DownloadError(f"failed to download file: {e}", url) from e
    except OSError as e:
        raise CacheError(
            f"failed to save file: {e}",
            details={"url": url, "destination": str(dest)}
        ) from e
    finally:
        remove_quietly(tmp_path)

    logger.info({
        "event": "download_complete",
        "url": url,
        "size": downloaded
    })
    return dest


def extract_from_zip(archive_path: Path, dest: Path, target_file: str) -> Path:
    """Extract the first entry whose name ends with target_file."""
    try:
        with zipfile.ZipFile(archive_path) as archive:
            for info in archive.infolist():
                if info.is_dir() or not info.filename.endswith(target_file):
                    continue
                with archive.open(info) as source:
                    write_atomic(source, dest)
                logger.info({
                    "event": "runtime_extracted",
                    "archive": str(archive_path),
                    "entry": info.filename,
                    "extracted_to": str(dest)
                })
                return dest
    except MALFORMED_ARCHIVE_ERRORS as e:
        raise ArchiveError(
            f"Failed to read zip archive {archive_path.name}: {e}",
            details={"archive": str(archive_path)}
        ) from e

    raise ArchiveEntryNotFoundError(target_file, str(archive_path))


def extract_from_tar_gz(archive_path: Path, dest: Path, target_file: str) -> Path:
    """Extract the first entry whose name ends with target_file."""
    try:
        with tarfile.open(archive_path, "r:gz") as archive:
            for member in archive:
                if not member.isfile() or not member.name.endswith(target_file):
                    continue
                source = archive.extractfile(member)
                with source:
                    write_atomic(source, dest)
                logger.info({
                    "event": "runtime_extracted",
                    "archive": str(archive_path),
                    "entry": member.name,
                    "extracted_to": str(dest)
                })
                return dest
    except MALFORMED_ARCHIVE_ERRORS as e:
        raise ArchiveError(
            f"Failed to read tar.gz archive {archive_path.name}: {e}",
            details={"archive": str(archive_path)}
        ) from e

    raise ArchiveEntryNotFoundError(target_file, str(archive_path))


ARCHIVE_HANDLERS: Dict[str, Callable[[Path, Path, str], Path]] = {
    ".zip": extract_from_zip,
    ".tgz": extract_from_tar_gz,
}


def extract_file(archive_path: Path, dest: Path, target_file: str) -> Path:
    """Pull a single file out of an archive, picking the reader by suffix."""
    handler = ARCHIVE_HANDLERS.get(archive_path.suffix, extract_from_tar_gz)

    logger.debug({
        "event": "extract_file",
        "archive": str(archive_path),
        "target": target_file,
        "handler": handler.__name__
    })

    return handler(archive_path, dest, target_file)
