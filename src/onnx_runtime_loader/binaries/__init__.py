"""Runtime library resolution and acquisition."""
from onnx_runtime_loader.binaries.fetcher import (
    ensure_runtime,
    fetch_runtime,
    check_library_path
)
from onnx_runtime_loader.binaries.platforms import (
    detect_host,
    get_platform_info,
    resolve_descriptor
)
from onnx_runtime_loader.binaries.binary_info import format_url

__all__ = [
    "ensure_runtime",
    "fetch_runtime",
    "check_library_path",
    "detect_host",
    "get_platform_info",
    "resolve_descriptor",
    "format_url"
]
