"""Runtime configuration options."""
from dataclasses import replace
from pathlib import Path
from typing import Callable, Union

from onnx_runtime_loader.types import RuntimeConfig

Option = Callable[[RuntimeConfig], RuntimeConfig]


def with_base_url(url: str) -> Option:
    """Set the base URL runtime archives are downloaded from."""
    return lambda config: replace(config, base_url=url)


def with_version(version: str) -> Option:
    """Set the runtime version."""
    return lambda config: replace(config, version=version)


def with_cache_path(path: Union[str, Path]) -> Option:
    """Set the cache directory."""
    return lambda config: replace(config, cache_path=Path(path))


def with_library_path(path: Union[str, Path, None]) -> Option:
    """Use an existing runtime library instead of downloading one."""
    library_path = Path(path) if path else None
    return lambda config: replace(config, library_path=library_path)


def with_gpu(enabled: bool) -> Option:
    """Request the GPU build of the runtime."""
    return lambda config: replace(config, gpu=enabled)


def build_config(*options: Option) -> RuntimeConfig:
    """Apply options, in order, on top of the default configuration."""
    config = RuntimeConfig()
    for option in options:
        config = option(config)
    return config
