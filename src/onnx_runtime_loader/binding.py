"""
Native library binding.

Loads the downloaded ONNX Runtime shared library with ctypes and exposes the
handful of entry points needed to bracket its use.
"""

import ctypes
from pathlib import Path
from typing import Callable, Optional

from onnx_runtime_loader.errors import RuntimeStateError


class OrtApiBase(ctypes.Structure):
    """Mirror of the C ``OrtApiBase`` struct returned by ``OrtGetApiBase``."""

    _fields_ = [
        ("GetApi", ctypes.CFUNCTYPE(ctypes.c_void_p, ctypes.c_uint32)),
        ("GetVersionString", ctypes.CFUNCTYPE(ctypes.c_char_p)),
    ]


def api_version(version: str) -> int:
    """C API revision shipped with a runtime release (1.20.x exposes API 20)."""
    try:
        return int(version.split(".")[1])
    except (IndexError, ValueError) as e:
        raise ValueError(f"Cannot derive API version from {version!r}") from e


class NativeLibrary:
    """
    Handle on a loaded runtime library.

    Args:
        path: Filesystem path of the shared library
        loader: Callable opening the library, ``ctypes.CDLL`` by default

    Raises:
        OSError: If the library cannot be loaded
    """

    def __init__(self, path: Path, loader: Callable[[str], ctypes.CDLL] = ctypes.CDLL):
        self.path = Path(path)
        self._lib: Optional[ctypes.CDLL] = loader(str(self.path))

        get_api_base = self._lib.OrtGetApiBase
        get_api_base.argtypes = []
        get_api_base.restype = ctypes.POINTER(OrtApiBase)
        self._api_base: Optional[OrtApiBase] = get_api_base().contents
        self._api: Optional[int] = None

    def _require_open(self) -> OrtApiBase:
        if self._api_base is None:
            raise RuntimeStateError(
                "Native library already closed", details={"path": str(self.path)}
            )
        return self._api_base

    def initialize(self, version: int) -> None:
        """Acquire the versioned C API table."""
        api = self._require_open().GetApi(version)
        if not api:
            raise OSError(
                f"{self.path.name} does not provide ONNX Runtime API version {version}"
            )
        self._api = api

    def version(self) -> str:
        return self._require_open().GetVersionString().decode("utf-8")

    def close(self) -> None:
        self._api = None
        self._api_base = None
        self._lib = None
