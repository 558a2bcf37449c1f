"""Resource manager facade and its process-wide instance."""

import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence, Union

import yaml

from skel.core.configs import ResourceManagerConfig
from skel.core.loggings import LOGGER, format_log_data, setup_logger

from .component_cache import (
    ComponentDescriptor,
    ComponentResourceCache,
    ComponentResourceEntry,
    ComponentResources,
)
from .interfaces import FailureReporter, InjectionSink, ModuleLoader, ResourceReader
from .presenter_factory import PresenterFactory, PresenterResult
from .reporters import LoggingFailureReporter
from .sinks import MemoryInjectionSink
from .style_registry import StyleResourceRegistry
from .transports import FileResourceTransport


class ResourceManager:
    """One object wiring the style registry, component cache and presenter factory.

    Each manager owns its own maps, so independent managers never share
    counts or cached components.

    Example:
        manager = ResourceManager.from_yaml("skel.yaml")

        resources = await manager.load_component(
            ComponentDescriptor(name="card", type="widgets", presenter_class_name="CardPresenter")
        )
        result = manager.initialise_presenter("card", component, invalidate)
        if result.ok:
            presenter = result.presenter

        await manager.unload_component("card")
    """

    def __init__(
        self,
        sink: InjectionSink,
        reader: ResourceReader,
        module_loader: ModuleLoader,
        reporter: Optional[FailureReporter] = None,
        config: Optional[ResourceManagerConfig] = None,
    ):
        self.config = config or ResourceManagerConfig()
        self.style_counts: Dict[str, int] = {}
        self.components: Dict[str, ComponentResourceEntry] = {}

        self.styles = StyleResourceRegistry(sink, ref_counts=self.style_counts)
        self.cache = ComponentResourceCache(
            self.styles,
            reader=reader,
            module_loader=module_loader,
            config=self.config,
            components=self.components,
        )
        self.presenters = PresenterFactory(reporter or LoggingFailureReporter())

    # ========================================================================
    # Factory Methods
    # ========================================================================

    @classmethod
    def from_config(cls, config: ResourceManagerConfig) -> 'ResourceManager':
        """Create a manager with the file transport, memory sink and logging reporter."""
        setup_logger(config.log, replace=True)
        transport = FileResourceTransport(config.base_dir)
        return cls(
            sink=MemoryInjectionSink(),
            reader=transport,
            module_loader=transport,
            reporter=LoggingFailureReporter(),
            config=config,
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'ResourceManager':
        return cls.from_config(ResourceManagerConfig.from_yaml_file(path))

    # ========================================================================
    # Styles
    # ========================================================================

    async def load_style_sheet(
        self,
        identifier: Optional[str] = None,
        content: Optional[str] = None,
        url: Optional[str] = None,
    ) -> Optional[str]:
        return await self.styles.acquire(identifier, content=content, url=url)

    async def load_style_sheets(self, contents: Sequence[str], identifier: str) -> str:
        return await self.styles.batch_acquire(contents, identifier)

    async def unload_style_sheets(self, identifier: str) -> None:
        await self.styles.release(identifier)

    # ========================================================================
    # Components
    # ========================================================================

    async def load_component(self, descriptor: Union[ComponentDescriptor, Dict[str, Any]]) -> ComponentResources:
        if not isinstance(descriptor, ComponentDescriptor):
            descriptor = ComponentDescriptor.model_validate(descriptor)
        return await self.cache.load(descriptor)

    async def unload_component(self, name: str) -> None:
        await self.cache.unload(name)

    def register_presenter(self, name: str, presenter_class: type) -> None:
        self.cache.register_presenter(name, presenter_class)

    def initialise_presenter(
        self,
        name: str,
        component: Any,
        invalidate: Callable[..., Any],
    ) -> PresenterResult:
        """Build the presenter of component `name`; never raises.

        An unknown component is treated like a component without presenter.
        """
        entry = self.cache.get_entry(name) or ComponentResourceEntry(name=name)
        return self.presenters.create(entry, component, invalidate)


# ============================================================================
# Process-wide instance
# ============================================================================

_GLOBAL_MANAGER: Optional[ResourceManager] = None


def _find_config_path() -> Optional[Path]:
    """Locate the manager config.

    Tries, in order:
    1. SKEL_CONFIG environment variable
    2. ./skel.yaml (current directory)
    """
    env_config = os.getenv('SKEL_CONFIG')
    if env_config and Path(env_config).exists():
        return Path(env_config)
    if Path('skel.yaml').exists():
        return Path('skel.yaml')
    return None


def get_manager() -> ResourceManager:
    """Get the process-wide ResourceManager, creating it on first use.

    Raises:
        RuntimeError: If the configuration file cannot be loaded
    """
    global _GLOBAL_MANAGER

    if _GLOBAL_MANAGER is None:
        config_path = _find_config_path()
        try:
            if config_path:
                _GLOBAL_MANAGER = ResourceManager.from_yaml(config_path)
            else:
                _GLOBAL_MANAGER = ResourceManager.from_config(ResourceManagerConfig())
        except (OSError, ValueError, yaml.YAMLError) as e:
            LOGGER.error("Cannot initialize global resource manager: %s", format_log_data(str(e)))
            raise RuntimeError(f"Failed to initialize global ResourceManager: {e}") from e

    return _GLOBAL_MANAGER


def set_global_manager(manager: Optional[ResourceManager]) -> None:
    """Replace the process-wide manager (None resets it)."""
    global _GLOBAL_MANAGER
    _GLOBAL_MANAGER = manager
