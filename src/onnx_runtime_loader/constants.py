"""Runtime release specifications and cache layout constants."""
import os
from pathlib import Path

# Release host
DEFAULT_BASE_URL = "https://github.com/microsoft/onnxruntime/releases/download"
DEFAULT_VERSION = "1.20.0"
RELEASE_NAME = "onnxruntime"
GPU_TAG = "gpu"

# Cache layout
CACHE_DIR_NAME = ".onnx_cache"
DEFAULT_CACHE_PATH = Path(os.path.expanduser("~")) / CACHE_DIR_NAME
RUNTIME_DIR_NAME = "runtime"
DOWNLOAD_SUFFIX = ".download"

# Transfer
CHUNK_SIZE = 8192
HTTP_OK = 200

ARCHIVE_FORMATS = {
    "win": "zip",
    "osx": "tgz",
    "linux": "tgz",
}
