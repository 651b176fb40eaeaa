"""Platform detection and mapping."""
import platform
from typing import Dict, NamedTuple, Optional, Tuple

from onnx_runtime_loader.errors import UnsupportedPlatformError
from onnx_runtime_loader.types import HostArch, HostOS, RuntimeDescriptor


class PlatformMapping(NamedTuple):
    """Platform-specific values."""
    tag: str
    library_template: str


PLATFORM_MAPPINGS: Dict[HostOS, PlatformMapping] = {
    HostOS.WINDOWS: PlatformMapping(
        tag="win",
        library_template="onnxruntime.dll"
    ),
    HostOS.DARWIN: PlatformMapping(
        tag="osx",
        library_template="libonnxruntime.{version}.dylib"
    ),
    HostOS.LINUX: PlatformMapping(
        tag="linux",
        library_template="libonnxruntime.so.{version}"
    ),
}

# Architecture tags per OS tag; a missing entry means no release exists
ARCH_MAPPINGS: Dict[Tuple[HostArch, str], str] = {
    (HostArch.AMD64, "win"): "x64",
    (HostArch.AMD64, "linux"): "x64",
    (HostArch.AMD64, "osx"): "x86_64",
    (HostArch.ARM64, "win"): "arm64",
    (HostArch.ARM64, "osx"): "arm64",
    (HostArch.ARM64, "linux"): "aarch64",
    (HostArch.X86, "win"): "x86",
}

SYSTEM_ALIASES = {
    "windows": HostOS.WINDOWS,
    "darwin": HostOS.DARWIN,
}

MACHINE_ALIASES = {
    "amd64": HostArch.AMD64,
    "x86_64": HostArch.AMD64,
    "x64": HostArch.AMD64,
    "arm64": HostArch.ARM64,
    "aarch64": HostArch.ARM64,
    "armv8": HostArch.ARM64,
    "386": HostArch.X86,
    "i386": HostArch.X86,
    "i686": HostArch.X86,
    "x86": HostArch.X86,
}


def normalize_os(system: str) -> HostOS:
    """Map a platform.system() style name onto HostOS, defaulting to linux."""
    return SYSTEM_ALIASES.get(system.lower(), HostOS.LINUX)


def normalize_arch(machine: str) -> HostArch:
    """Map a platform.machine() style name onto HostArch."""
    arch = MACHINE_ALIASES.get(machine.lower())
    if arch is None:
        raise UnsupportedPlatformError(platform.system(), machine)
    return arch


def detect_host() -> Tuple[HostOS, HostArch]:
    """Get the operating system and architecture of the running process."""
    return normalize_os(platform.system()), normalize_arch(platform.machine())


def resolve_descriptor(
    host_os: HostOS,
    arch: HostArch,
    version: str,
    gpu: bool = False
) -> RuntimeDescriptor:
    """Resolve the runtime release matching a host platform."""
    mapping = PLATFORM_MAPPINGS[host_os]

    arch_tag = ARCH_MAPPINGS.get((arch, mapping.tag))
    if arch_tag is None:
        raise UnsupportedPlatformError(host_os.value, arch.value)

    return RuntimeDescriptor(
        os=mapping.tag,
        arch=arch_tag,
        version=version,
        gpu=gpu,
        library_name=mapping.library_template.format(version=version)
    )


def get_platform_info(version: str, gpu: bool = False, host: Optional[Tuple[HostOS, HostArch]] = None) -> RuntimeDescriptor:
    """Get the runtime descriptor for the current (or given) host."""
    host_os, arch = host or detect_host()
    return resolve_descriptor(host_os, arch, version, gpu)
