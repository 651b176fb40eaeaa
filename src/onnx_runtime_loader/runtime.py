"""ONNX Runtime session management."""

from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from onnx_runtime_loader.binaries import ensure_runtime, format_url, get_platform_info
from onnx_runtime_loader.binding import NativeLibrary, api_version
from onnx_runtime_loader.config import Option, build_config
from onnx_runtime_loader.errors import OnnxRuntimeLoaderError, RuntimeStateError, log_error
from onnx_runtime_loader.logging import get_logger
from onnx_runtime_loader.types import RuntimeConfig, RuntimeDescriptor

logger = get_logger(__name__)

RuntimeState = Enum('RuntimeState', ['NEW', 'INITIALIZED', 'CLOSED'])

BindingFactory = Callable[[Path], NativeLibrary]


class Runtime:
    """ONNX Runtime initialization and configuration.

    A runtime is initialized exactly once and closed exactly once. Use
    ``Runtime.create`` or ``async with Runtime(config)`` to get one.
    """

    def __init__(self, config: Optional[RuntimeConfig] = None, binding_factory: BindingFactory = NativeLibrary):
        self.config = config or RuntimeConfig()
        self._binding_factory = binding_factory
        self._library: Optional[NativeLibrary] = None
        self._library_path: Optional[Path] = None
        self._state = RuntimeState.NEW

    @classmethod
    async def create(
        cls,
        *options: Option,
        timeout: Optional[float] = None,
        binding_factory: BindingFactory = NativeLibrary
    ) -> "Runtime":
        """Build the configuration, acquire the library and initialize it."""
        runtime = cls(build_config(*options), binding_factory=binding_factory)
        await runtime.initialize(timeout=timeout)
        return runtime

    @property
    def state(self) -> RuntimeState:
        return self._state

    @property
    def library_path(self) -> Optional[Path]:
        return self._library_path

    def info(self) -> RuntimeDescriptor:
        """Runtime release for the current host."""
        return get_platform_info(self.config.version, self.config.gpu)

    def url(self, info: Optional[RuntimeDescriptor] = None) -> str:
        """Download URL of the runtime archive."""
        return format_url(self.config.base_url, info or self.info())

    async def ensure_runtime(self, timeout: Optional[float] = None) -> Path:
        return await ensure_runtime(self.config, self.info(), timeout=timeout)

    async def initialize(self, timeout: Optional[float] = None) -> None:
        if self._state is not RuntimeState.NEW:
            raise RuntimeStateError(
                f"Runtime cannot be initialized from state {self._state.name}",
                details={"state": self._state.name}
            )

        try:
            library_path = await self.ensure_runtime(timeout=timeout)
        except OnnxRuntimeLoaderError as e:
            log_error(e, context={
                "version": self.config.version,
                "cache_path": str(self.config.cache_path)
            })
            raise

        library = self._binding_factory(library_path)
        try:
            library.initialize(api_version(self.config.version))
        except BaseException:
            library.close()
            raise

        self._library = library
        self._library_path = library_path
        self._state = RuntimeState.INITIALIZED

        logger.info({
            "event": "runtime_initialized",
            "version": self.config.version,
            "path": str(library_path)
        })

    def _require_initialized(self) -> NativeLibrary:
        if self._state is not RuntimeState.INITIALIZED or self._library is None:
            raise RuntimeStateError(
                f"Runtime is not initialized (state {self._state.name})",
                details={"state": self._state.name}
            )
        return self._library

    def version(self) -> str:
        """Version reported by the loaded native library."""
        return self._require_initialized().version()

    def close(self) -> None:
        """Release the native environment."""
        library = self._require_initialized()
        try:
            library.close()
        finally:
            self._library = None
            self._state = RuntimeState.CLOSED

        logger.info({
            "event": "runtime_closed",
            "path": str(self._library_path)
        })

    async def __aenter__(self) -> "Runtime":
        if self._state is RuntimeState.NEW:
            await self.initialize()
        self._require_initialized()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._state is RuntimeState.INITIALIZED:
            self.close()
