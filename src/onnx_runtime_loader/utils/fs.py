import os
import shutil
import tempfile
from contextlib import suppress
from pathlib import Path
from typing import BinaryIO

from onnx_runtime_loader.constants import CHUNK_SIZE
from onnx_runtime_loader.logging import get_logger

logger = get_logger(__name__)


def remove_quietly(path: Path) -> None:
    """Best-effort removal; a missing or locked file is left alone."""
    with suppress(OSError):
        os.remove(path)


def write_atomic(source: BinaryIO, dest: Path, mode: int = 0o755) -> Path:
    """Stream source into dest through a sibling temp file and a single rename.

    Readers only ever see dest absent or complete.
    """
    fd, tmp_name = tempfile.mkstemp(
        dir=dest.parent, prefix=f".{dest.name}.", suffix=".extract"
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            shutil.copyfileobj(source, f, CHUNK_SIZE)
        if os.name != "nt":
            tmp_path.chmod(mode)
        os.replace(tmp_path, dest)
    except BaseException:
        remove_quietly(tmp_path)
        raise

    logger.debug({
        "event": "file_written",
        "destination": str(dest)
    })
    return dest
