"""Release download naming."""

from onnx_runtime_loader.constants import ARCHIVE_FORMATS, GPU_TAG, RELEASE_NAME
from onnx_runtime_loader.types import RuntimeDescriptor

URL_TEMPLATE = "{base_url}/v{version}/{archive_name}"

GPU_PLATFORMS = {("win", "x64"), ("linux", "x64")}


def has_gpu_build(descriptor: RuntimeDescriptor) -> bool:
    """GPU builds are only published for x64 Windows and Linux."""
    return descriptor.gpu and (descriptor.os, descriptor.arch) in GPU_PLATFORMS


def archive_name(descriptor: RuntimeDescriptor) -> str:
    """Build the release archive file name for a descriptor."""
    parts = [RELEASE_NAME, descriptor.os, descriptor.arch]
    if has_gpu_build(descriptor):
        parts.append(GPU_TAG)
    parts.append(descriptor.version)
    return f"{'-'.join(parts)}.{ARCHIVE_FORMATS[descriptor.os]}"


def format_url(base_url: str, descriptor: RuntimeDescriptor) -> str:
    """Format the download URL of the release archive."""
    return URL_TEMPLATE.format(
        base_url=base_url.rstrip("/"),
        version=descriptor.version,
        archive_name=archive_name(descriptor),
    )
