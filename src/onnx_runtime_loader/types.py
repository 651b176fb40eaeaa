"""Core type definitions"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from onnx_runtime_loader.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_CACHE_PATH,
    DEFAULT_VERSION,
)


class HostOS(Enum):
    WINDOWS = "windows"
    DARWIN = "darwin"
    LINUX = "linux"


class HostArch(Enum):
    AMD64 = "amd64"
    ARM64 = "arm64"
    X86 = "386"


@dataclass(frozen=True)
class RuntimeDescriptor:
    """Platform-specific view of one runtime release"""
    os: str
    arch: str
    version: str
    gpu: bool
    library_name: str

    @property
    def library_suffix(self) -> str:
        return Path(self.library_name).suffix


@dataclass(frozen=True)
class RuntimeConfig:
    """Runtime acquisition settings"""
    base_url: str = DEFAULT_BASE_URL
    version: str = DEFAULT_VERSION
    cache_path: Path = DEFAULT_CACHE_PATH
    library_path: Optional[Path] = None
    gpu: bool = False


@dataclass(frozen=True)
class CachePaths:
    """Filesystem locations used while acquiring a runtime"""
    runtime_dir: Path
    library: Path
    archive: Path
    download: Path
