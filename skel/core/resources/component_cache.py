"""Per-component cache with in-flight load deduplication."""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from skel.core.configs import ResourceManagerConfig
from skel.core.loggings import LOGGER, format_log_data

from .errors import InjectionFailure, LoadFailure
from .interfaces import ModuleLoader, ResourceReader
from .style_registry import StyleResourceRegistry


class LoadState(str, Enum):
    """Lifecycle of a component entry. Only ever moves forward."""
    NOT_STARTED = "not_started"
    LOADING = "loading"
    FULFILLED = "fulfilled"


def presenter_display_name(presenter_class: Callable[..., Any]) -> str:
    """Name of a presenter for messages. Partials and callable objects have no `__name__`."""
    return getattr(presenter_class, "__name__", None) or repr(presenter_class)


class ComponentDescriptor(BaseModel):
    """What a caller knows about a component it wants loaded.

    Args:
        name: Unique component name
        type: Component kind, used to derive resource paths
        loaded_template: Markup already at hand; skips the markup read
        loaded_styles: Style texts already at hand; skips the style read
        presenter_class_name: Export to take from the component's module
    """

    name: str
    type: str
    loaded_template: Optional[str] = None
    loaded_styles: Optional[List[str]] = None
    presenter_class_name: Optional[str] = None


class ComponentResources(BaseModel):
    """Resolved markup and style texts of a component."""

    markup: str
    style_resources: List[str]


@dataclass
class ComponentResourceEntry:
    """Cached state of one component."""
    name: str
    markup: str = ""
    style_resources: List[str] = field(default_factory=list)
    presenter_class: Optional[Callable[..., Any]] = None
    load_state: LoadState = LoadState.NOT_STARTED
    pending_load: Optional["asyncio.Future[ComponentResources]"] = None

    @property
    def resources(self) -> ComponentResources:
        return ComponentResources(markup=self.markup, style_resources=list(self.style_resources))


class ComponentResourceCache:
    """Loads component resources once and counts every consumer's styles.

    Two mechanisms are composed here. The first load of a name starts a single
    task that later callers await instead of starting their own, so the
    transport is read once per component. Every `load` call, including those
    that joined late or hit the cache, also takes one ownership of the
    component's style key in the `StyleResourceRegistry`, so the styles stay
    injected until every consumer has called `unload`.

    A failed load propagates `LoadFailure` to every waiter and drops the
    entry, so the next `load` of that name starts over.

    Example:
        cache = ComponentResourceCache(styles, reader=transport, module_loader=transport)
        resources = await cache.load(ComponentDescriptor(name="card", type="widgets"))
        ...
        await cache.unload("card")
    """

    def __init__(
        self,
        styles: StyleResourceRegistry,
        reader: ResourceReader,
        module_loader: ModuleLoader,
        config: Optional[ResourceManagerConfig] = None,
        components: Optional[Dict[str, ComponentResourceEntry]] = None,
    ):
        """Initialize the cache.

        Args:
            styles: Registry that counts the components' style ownership
            reader: Transport for markup and style text
            module_loader: Transport for presenter modules
            config: Path layout (default: ResourceManagerConfig())
            components: Map to keep entries in; a private one is created when omitted
        """
        self._styles = styles
        self._reader = reader
        self._module_loader = module_loader
        self._config = config or ResourceManagerConfig()
        self._components = components if components is not None else {}

    # ========================================================================
    # Public API
    # ========================================================================

    async def load(self, descriptor: ComponentDescriptor) -> ComponentResources:
        """Resolve a component's resources and count this caller as an owner.

        Raises:
            LoadFailure: If any step of the load fails. This includes a failed
                re-injection when a caller joins a load or hits the cache after
                every other owner released the styles (stage "styles").
        """
        name = descriptor.name
        entry = self._components.get(name)

        if entry is None or entry.load_state is LoadState.NOT_STARTED:
            # Commit the entry before the first await so concurrent callers join it
            entry = ComponentResourceEntry(name=name, load_state=LoadState.LOADING)
            self._components[name] = entry
            entry.pending_load = asyncio.create_task(self._load_sequence(descriptor, entry))
            LOGGER.debug("Loading component [key]%s[/key]", format_log_data(name))
            return await asyncio.shield(entry.pending_load)

        if entry.load_state is LoadState.LOADING:
            resources = await asyncio.shield(entry.pending_load)
            await self._acquire_styles(name, resources.style_resources)
            return resources

        await self._acquire_styles(name, entry.style_resources)
        return entry.resources

    async def unload(self, name: str) -> None:
        """Drop one consumer's ownership of the component's styles."""
        await self._styles.release(name)

    def register_presenter(self, name: str, presenter_class: Callable[..., Any]) -> None:
        """Attach the presenter class of a cached component.

        Raises:
            KeyError: If the component has no entry
            TypeError: If `presenter_class` is not callable
            ValueError: If a different class is already registered
        """
        entry = self._components.get(name)
        if entry is None:
            raise KeyError(f"Component '{name}' not found in cache")

        if not callable(presenter_class):
            raise TypeError(f"Presenter for '{name}' must be callable, got {type(presenter_class).__name__}")

        if entry.presenter_class is not None and entry.presenter_class is not presenter_class:
            raise ValueError(
                f"Component '{name}' already has presenter "
                f"{presenter_display_name(entry.presenter_class)}"
            )

        presenter_name = presenter_display_name(presenter_class)
        entry.presenter_class = presenter_class
        LOGGER.debug(
            "Registered presenter %s for [key]%s[/key]",
            format_log_data(presenter_name), format_log_data(name),
        )

    def get_entry(self, name: str) -> Optional[ComponentResourceEntry]:
        return self._components.get(name)

    def load_state(self, name: str) -> LoadState:
        entry = self._components.get(name)
        return entry.load_state if entry else LoadState.NOT_STARTED

    def __contains__(self, name: str) -> bool:
        return name in self._components

    # ========================================================================
    # Load Sequence
    # ========================================================================

    async def _acquire_styles(self, name: str, style_resources: List[str]) -> None:
        """Take one ownership of an already loaded component's styles.

        Injection only happens here when no owner is left, and a failure then
        leaves the fulfilled entry in place for the next caller to retry.
        """
        try:
            await self._styles.batch_acquire(style_resources, name)
        except InjectionFailure as e:
            LOGGER.error(
                "Re-injecting styles of [key]%s[/key] failed: %s",
                format_log_data(name), format_log_data(str(e)),
            )
            raise LoadFailure(name, "styles", e) from e

    async def _load_sequence(
        self,
        descriptor: ComponentDescriptor,
        entry: ComponentResourceEntry,
    ) -> ComponentResources:
        name, component_type = descriptor.name, descriptor.type
        stage = "markup"
        styles_acquired = False

        try:
            markup = descriptor.loaded_template
            if markup is None:
                markup = await self._reader.read_resource(self._config.markup_path(component_type, name))
            entry.markup = markup

            stage = "styles"
            styles = descriptor.loaded_styles
            if styles is None:
                styles = [await self._reader.read_resource(self._config.style_path(component_type, name))]
            entry.style_resources = list(styles)
            await self._styles.batch_acquire(entry.style_resources, name)
            styles_acquired = True

            if descriptor.presenter_class_name:
                stage = "module"
                exports = await self._module_loader.load_module(self._config.module_path(component_type, name))
                presenter_class = exports.get(descriptor.presenter_class_name)
                if presenter_class is None:
                    raise LookupError(f"module has no export '{descriptor.presenter_class_name}'")
                self.register_presenter(name, presenter_class)

        except Exception as e:
            if self._components.get(name) is entry:
                del self._components[name]
            if styles_acquired:
                await self._styles.release(name)
            LOGGER.error(
                "Loading [key]%s[/key] failed at %s: %s",
                format_log_data(name), stage, format_log_data(str(e)),
            )
            raise LoadFailure(name, stage, e) from e

        entry.load_state = LoadState.FULFILLED
        LOGGER.info(
            "Loaded component [key]%s[/key] (%d style resource(s))",
            format_log_data(name), len(entry.style_resources),
        )
        return entry.resources
