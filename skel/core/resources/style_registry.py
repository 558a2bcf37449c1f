"""Reference-counted registry of injected style resources."""

import asyncio
from typing import Dict, List, Optional, Sequence, Tuple

from skel.core.loggings import LOGGER, format_log_data

from .errors import InjectionFailure, InvalidArgument
from .interfaces import InjectionSink


class StyleResourceRegistry:
    """Tracks how many owners depend on each style key.

    The first acquire of a key injects through the sink; later acquires only
    count. The artifact is removed when the last owner releases. One key may
    stand for several style texts (see `batch_acquire`); counts are kept per
    key, never per text.

    The count is updated before the first await of every operation, so two
    interleaved acquires of the same key can never both see themselves as
    the first owner.

    Example:
        registry = StyleResourceRegistry(MemoryInjectionSink())

        await registry.acquire("theme", content="body{color:red}")  # injects
        await registry.acquire("theme", content="body{color:red}")  # -> None
        await registry.release("theme")
        registry.ref_count("theme")  # 1
    """

    def __init__(self, sink: InjectionSink, ref_counts: Optional[Dict[str, int]] = None):
        """Initialize the registry.

        Args:
            sink: Surface that injects and removes style artifacts
            ref_counts: Map to keep counts in; a private one is created when omitted
        """
        self._sink = sink
        self._ref_counts = ref_counts if ref_counts is not None else {}

    # ========================================================================
    # Acquire / Release
    # ========================================================================

    async def acquire(
        self,
        key: Optional[str] = None,
        content: Optional[str] = None,
        url: Optional[str] = None,
    ) -> Optional[str]:
        """Take one ownership of a style resource.

        Args:
            key: Identifier to count under; defaults to `url`
            content: Inline style text
            url: Location of an external stylesheet

        Returns:
            The sink's representation when this call injected the resource.
            None when the key was already held: the existing artifact stays in
            place and its representation is not handed out again.

        Raises:
            InvalidArgument: If not exactly one of content/url is given, or
                inline content comes without a key
            InjectionFailure: If the sink fails on first injection
        """
        if (content is None) == (url is None):
            raise InvalidArgument("Either a URL or style content must be provided, not both.")

        key = key or url
        if not key:
            raise InvalidArgument("Inline style content needs a key to be counted under.")

        if not self._claim(key):
            return None

        representations = await self._inject(key, [(content, url)])
        return representations[0]

    async def batch_acquire(self, contents: Sequence[str], key: str) -> str:
        """Take one ownership of `key` covering all `contents`.

        On the first claim every text is injected concurrently and the
        representations are joined in input order. A repeat claim returns "".

        Raises:
            InvalidArgument: If `key` is empty or any item is None
            InjectionFailure: If the sink fails on first injection
        """
        if not key:
            raise InvalidArgument("A key is required to acquire style resources.")
        if any(content is None for content in contents):
            raise InvalidArgument(f"Style content for '{key}' must not be None.")

        if not self._claim(key):
            return ""

        representations = await self._inject(key, [(content, None) for content in contents])
        return "".join(representations)

    async def release(self, key: str) -> None:
        """Drop one ownership of `key`; remove the artifact when none remain.

        Releasing a key that is not tracked does nothing.
        """
        ref_count = self._ref_counts.get(key)
        if ref_count is None:
            return

        ref_count -= 1
        if ref_count > 0:
            self._ref_counts[key] = ref_count
            LOGGER.debug("Released [key]%s[/key] (refs=%d)", format_log_data(key), ref_count)
            return

        del self._ref_counts[key]
        await self._sink.remove(key)
        LOGGER.info("[remove]Removed[/remove] style resource [key]%s[/key]", format_log_data(key))

    # ========================================================================
    # Internals
    # ========================================================================

    def _claim(self, key: str) -> bool:
        """Count one more owner. True when the caller is the first one."""
        ref_count = self._ref_counts.get(key, 0)
        self._ref_counts[key] = ref_count + 1
        if ref_count:
            LOGGER.debug("Acquired [key]%s[/key] (refs=%d)", format_log_data(key), ref_count + 1)
        return ref_count == 0

    async def _inject(self, key: str, sources: List[Tuple[Optional[str], Optional[str]]]) -> List[str]:
        """Inject every `(content, url)` source under `key` concurrently.

        On any failure the whole entry for `key` is dropped, not decremented.
        That includes claims taken by callers who joined while the injection
        was in flight; their later `release` is a no-op. Parts that did land
        are removed through the sink, so the next acquire starts clean.

        Raises:
            InjectionFailure: Wrapping the first sink error
        """
        results = await asyncio.gather(
            *[self._sink.inject(content, key, url=url) for content, url in sources],
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, BaseException)]
        if errors:
            # Roll back so the next acquire injects again
            self._ref_counts.pop(key, None)
            if len(errors) < len(results):
                await self._sink.remove(key)
            LOGGER.error("Injection of [key]%s[/key] failed: %s", format_log_data(key), format_log_data(str(errors[0])))
            raise InjectionFailure(key, errors[0]) from errors[0]

        LOGGER.info(
            "[inject]Injected[/inject] style resource [key]%s[/key] (%d part(s))",
            format_log_data(key), len(results),
        )
        return list(results)

    # ========================================================================
    # Inspection
    # ========================================================================

    def ref_count(self, key: str) -> int:
        """Current owner count of `key` (0 when not tracked)."""
        return self._ref_counts.get(key, 0)

    def keys(self) -> List[str]:
        return list(self._ref_counts.keys())

    def __contains__(self, key: str) -> bool:
        return key in self._ref_counts

    def __len__(self) -> int:
        return len(self._ref_counts)
