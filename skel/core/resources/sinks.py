"""In-memory injection sink."""

from collections import defaultdict
from html import escape
from typing import Dict, List, Optional

from skel.core.loggings import LOGGER, format_log_data

from .interfaces import InjectionSink


class MemoryInjectionSink(InjectionSink):
    """Keeps injected style elements in memory, grouped by identifier.

    Stands in for a document head: each inject appends a rendered
    `<style>` (inline content) or `<link rel="stylesheet">` (url) element,
    and remove drops every element for the identifier.
    """

    def __init__(self):
        self._elements: Dict[str, List[str]] = defaultdict(list)

    async def inject(self, content: Optional[str], identifier: str, url: Optional[str] = None) -> str:
        css_class = escape(identifier, quote=True)
        if url is not None:
            element = f'<link rel="stylesheet" href="{escape(url, quote=True)}" class="{css_class}">'
        else:
            element = f'<style class="{css_class}">{content}</style>'

        self._elements[identifier].append(element)
        return element

    async def remove(self, identifier: str) -> None:
        removed = self._elements.pop(identifier, [])
        LOGGER.debug("Removed %d element(s) for [key]%s[/key]", len(removed), format_log_data(identifier))

    def elements(self, identifier: Optional[str] = None) -> List[str]:
        """Injected elements for one identifier, or all of them grouped by identifier."""
        if identifier is not None:
            return list(self._elements.get(identifier, []))
        return [element for elements in self._elements.values() for element in elements]

    def render(self) -> str:
        return "".join(self.elements())
