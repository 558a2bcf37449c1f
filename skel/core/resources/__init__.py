"""Reference-counted, load-deduplicating resource registries.

Basic usage:
    from skel.core.resources import ComponentDescriptor, get_manager

    manager = get_manager()
    resources = await manager.load_component(
        ComponentDescriptor(name="card", type="widgets")
    )

Building the pieces by hand:
    styles = StyleResourceRegistry(MemoryInjectionSink())
    cache = ComponentResourceCache(styles, reader=transport, module_loader=transport)
    presenters = PresenterFactory(LoggingFailureReporter())
"""

from .errors import (
    ResourceError,
    InvalidArgument,
    LoadFailure,
    InjectionFailure,
    PresenterConstructionFailure,
)
from .interfaces import (
    InjectionSink,
    ResourceReader,
    ModuleLoader,
    FailureReporter,
)
from .style_registry import StyleResourceRegistry
from .component_cache import (
    LoadState,
    ComponentDescriptor,
    ComponentResources,
    ComponentResourceEntry,
    ComponentResourceCache,
)
from .presenter_factory import (
    PresenterFactory,
    PresenterFailure,
    PresenterResult,
)
from .sinks import MemoryInjectionSink
from .transports import FileResourceTransport
from .reporters import LoggingFailureReporter
from .resource_manager import (
    ResourceManager,
    get_manager,
    set_global_manager,
)

__all__ = [
    # Errors
    "ResourceError",
    "InvalidArgument",
    "LoadFailure",
    "InjectionFailure",
    "PresenterConstructionFailure",
    # Collaborator interfaces
    "InjectionSink",
    "ResourceReader",
    "ModuleLoader",
    "FailureReporter",
    # Registries
    "StyleResourceRegistry",
    "LoadState",
    "ComponentDescriptor",
    "ComponentResources",
    "ComponentResourceEntry",
    "ComponentResourceCache",
    "PresenterFactory",
    "PresenterFailure",
    "PresenterResult",
    # Default collaborators
    "MemoryInjectionSink",
    "FileResourceTransport",
    "LoggingFailureReporter",
    # Facade
    "ResourceManager",
    "get_manager",
    "set_global_manager",
]
