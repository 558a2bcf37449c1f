"""
Skel Core - component resource registry

Loads UI component resources on demand, shares in-flight loads between
concurrent callers, and reference-counts injected style resources.

Example:
    ```python
    from skel.core import ResourceManager, ComponentDescriptor

    manager = ResourceManager.from_yaml("skel.yaml")
    resources = await manager.load_component(
        ComponentDescriptor(name="card", type="widgets", presenter_class_name="CardPresenter")
    )
    ```
"""

from skel.core.loggings import LOGGER
from skel.core.configs import ResourceManagerConfig
from skel.core.resources import (
    ResourceManager,
    get_manager,
    set_global_manager,
    StyleResourceRegistry,
    ComponentResourceCache,
    ComponentDescriptor,
    ComponentResources,
    LoadState,
    PresenterFactory,
    PresenterResult,
    ResourceError,
    InvalidArgument,
    LoadFailure,
    InjectionFailure,
)

__version__ = "0.1.0"

__all__ = [
    "LOGGER",
    "ResourceManagerConfig",
    "ResourceManager",
    "get_manager",
    "set_global_manager",
    "StyleResourceRegistry",
    "ComponentResourceCache",
    "ComponentDescriptor",
    "ComponentResources",
    "LoadState",
    "PresenterFactory",
    "PresenterResult",
    "ResourceError",
    "InvalidArgument",
    "LoadFailure",
    "InjectionFailure",
]
