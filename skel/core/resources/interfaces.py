"""Interfaces of the collaborators the registries depend on.

The registries only talk to these; concrete implementations live in
`sinks` and `transports`, or are supplied by the application.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional


class InjectionSink(ABC):
    """Surface that makes a style resource observably active.

    Example:
        class DomSink(InjectionSink):
            async def inject(self, content, identifier, url=None):
                ...  # append a <style> or <link> element to the document head
                return element.outer_html

            async def remove(self, identifier):
                ...  # drop every element carrying the identifier
    """

    @abstractmethod
    async def inject(self, content: Optional[str], identifier: str, url: Optional[str] = None) -> str:
        """Inject inline style `content`, or a link to `url`, tagged with `identifier`.

        Returns:
            A representation of the injected artifact (e.g. its markup)
        """
        pass

    @abstractmethod
    async def remove(self, identifier: str) -> None:
        """Remove every artifact injected under `identifier`."""
        pass


class ResourceReader(ABC):
    """Transport for markup and style text."""

    @abstractmethod
    async def read_resource(self, path: str) -> str:
        """Return the text stored at `path`.

        Raises:
            Any exception on a missing or unreadable resource
        """
        pass


class ModuleLoader(ABC):
    """Transport for behavior code."""

    @abstractmethod
    async def load_module(self, path: str) -> Mapping[str, Any]:
        """Load the module at `path` and return its exported names."""
        pass


class FailureReporter(ABC):
    """Error surface for recoverable per-instance failures. Must not raise."""

    @abstractmethod
    def report_failure(self, stage: str, context: str, cause: str) -> None:
        pass
