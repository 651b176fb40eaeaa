"""Tests for platform resolution."""

import pytest

from onnx_runtime_loader.binaries import platforms
from onnx_runtime_loader.binaries.platforms import (
    detect_host,
    get_platform_info,
    normalize_arch,
    normalize_os,
    resolve_descriptor,
)
from onnx_runtime_loader.errors import UnsupportedPlatformError
from onnx_runtime_loader.types import HostArch, HostOS


@pytest.mark.parametrize(
    "host_os,arch,os_tag,arch_tag",
    [
        (HostOS.WINDOWS, HostArch.AMD64, "win", "x64"),
        (HostOS.WINDOWS, HostArch.ARM64, "win", "arm64"),
        (HostOS.WINDOWS, HostArch.X86, "win", "x86"),
        (HostOS.DARWIN, HostArch.AMD64, "osx", "x86_64"),
        (HostOS.DARWIN, HostArch.ARM64, "osx", "arm64"),
        (HostOS.LINUX, HostArch.AMD64, "linux", "x64"),
        (HostOS.LINUX, HostArch.ARM64, "linux", "aarch64"),
    ],
)
def test_resolve_descriptor_tags(host_os, arch, os_tag, arch_tag):
    """Test OS and architecture tags for every supported host"""
    descriptor = resolve_descriptor(host_os, arch, "1.20.0")
    assert descriptor.os == os_tag
    assert descriptor.arch == arch_tag
    assert descriptor.version == "1.20.0"
    assert descriptor.gpu is False


@pytest.mark.parametrize(
    "host_os,library_name,suffix",
    [
        (HostOS.WINDOWS, "onnxruntime.dll", ".dll"),
        (HostOS.DARWIN, "libonnxruntime.1.19.2.dylib", ".dylib"),
        (HostOS.LINUX, "libonnxruntime.so.1.19.2", ".2"),
    ],
)
def test_library_names(host_os, library_name, suffix):
    descriptor = resolve_descriptor(host_os, HostArch.ARM64, "1.19.2")
    assert descriptor.library_name == library_name
    assert descriptor.library_suffix == suffix


@pytest.mark.parametrize("host_os", [HostOS.DARWIN, HostOS.LINUX])
def test_32bit_outside_windows_unsupported(host_os):
    with pytest.raises(UnsupportedPlatformError) as exc_info:
        resolve_descriptor(host_os, HostArch.X86, "1.20.0")
    assert exc_info.value.details["arch"] == "386"


def test_gpu_flag_carried():
    descriptor = resolve_descriptor(HostOS.LINUX, HostArch.AMD64, "1.20.0", gpu=True)
    assert descriptor.gpu is True


@pytest.mark.parametrize(
    "system,expected",
    [
        ("Windows", HostOS.WINDOWS),
        ("Darwin", HostOS.DARWIN),
        ("Linux", HostOS.LINUX),
        ("FreeBSD", HostOS.LINUX),
        ("", HostOS.LINUX),
    ],
)
def test_normalize_os_defaults_to_linux(system, expected):
    assert normalize_os(system) == expected


@pytest.mark.parametrize(
    "machine,expected",
    [
        ("AMD64", HostArch.AMD64),
        ("x86_64", HostArch.AMD64),
        ("arm64", HostArch.ARM64),
        ("aarch64", HostArch.ARM64),
        ("i686", HostArch.X86),
    ],
)
def test_normalize_arch(machine, expected):
    assert normalize_arch(machine) == expected


def test_normalize_arch_unknown():
    with pytest.raises(UnsupportedPlatformError, match="riscv64"):
        normalize_arch("riscv64")


def test_detect_host(monkeypatch):
    monkeypatch.setattr(platforms.platform, "system", lambda: "Darwin")
    monkeypatch.setattr(platforms.platform, "machine", lambda: "arm64")
    assert detect_host() == (HostOS.DARWIN, HostArch.ARM64)


def test_get_platform_info_explicit_host():
    descriptor = get_platform_info("1.20.0", gpu=True, host=(HostOS.WINDOWS, HostArch.AMD64))
    assert descriptor.os == "win"
    assert descriptor.library_name == "onnxruntime.dll"
    assert descriptor.gpu is True
