"""Errors raised by the resource registries."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .presenter_factory import PresenterFailure


class ResourceError(Exception):
    """Base class for resource registry errors."""


class InvalidArgument(ResourceError, ValueError):
    """A style acquire was called without exactly one source (content or url)."""


class LoadFailure(ResourceError):
    """A component load sequence failed.

    Attributes:
        name: Component name
        stage: Sub-step that failed ('markup', 'styles' or 'module')
    """

    def __init__(self, name: str, stage: str, cause: BaseException):
        self.name = name
        self.stage = stage
        super().__init__(f"Failed to load {stage} for component '{name}': {cause}")


class InjectionFailure(ResourceError):
    """The injection sink raised while injecting a style resource."""

    def __init__(self, key: str, cause: BaseException):
        self.key = key
        super().__init__(f"Failed to inject the style resource '{key}': {cause}")


class PresenterConstructionFailure(ResourceError):
    """Raised only by `PresenterResult.unwrap()` on a failed construction."""

    def __init__(self, failure: "PresenterFailure"):
        self.failure = failure
        super().__init__(f"{failure.stage}: {failure.context}: {failure.cause}")
