"""Tests for ComponentResourceCache load deduplication and style ownership."""

import asyncio
import functools

import pytest

from skel.core.configs import ResourceManagerConfig
from skel.core.resources import (
    ComponentDescriptor,
    ComponentResourceCache,
    ComponentResources,
    InjectionFailure,
    LoadFailure,
    LoadState,
)

from tests.conftest import CARD_DIR, CARD_MARKUP, CARD_STYLE


class CardPresenter:
    def __init__(self, component, invalidate):
        self.component = component
        self.invalidate = invalidate


def card(**kwargs) -> ComponentDescriptor:
    return ComponentDescriptor(name="card", type="widgets", **kwargs)


# ============================================================================
# Tests: First Load
# ============================================================================

class TestFirstLoad:
    """Test the load sequence of a new component."""

    @pytest.mark.asyncio
    async def test_reads_markup_and_style(self, cache, transport, styles):
        resources = await cache.load(card())

        assert resources == ComponentResources(markup=CARD_MARKUP, style_resources=[CARD_STYLE])
        assert transport.reads == [f"{CARD_DIR}/card.html", f"{CARD_DIR}/card.css"]
        assert cache.load_state("card") is LoadState.FULFILLED
        assert styles.ref_count("card") == 1

    @pytest.mark.asyncio
    async def test_precomputed_resources_skip_transport(self, cache, transport, sink):
        resources = await cache.load(card(loaded_template="<p></p>", loaded_styles=["a{}", "b{}"]))

        assert resources.markup == "<p></p>"
        assert resources.style_resources == ["a{}", "b{}"]
        assert transport.reads == []
        assert [content for content, _, _ in sink.injected] == ["a{}", "b{}"]

    @pytest.mark.asyncio
    async def test_paths_follow_config(self, styles, transport):
        config = ResourceManagerConfig(components_root_dir="ui")
        transport.files["ui/widgets/card/card.html"] = "<b></b>"
        cache = ComponentResourceCache(styles, reader=transport, module_loader=transport, config=config)

        resources = await cache.load(card(loaded_styles=[]))

        assert resources.markup == "<b></b>"
        assert transport.reads == ["ui/widgets/card/card.html"]

    @pytest.mark.asyncio
    async def test_loads_presenter_class(self, cache, transport):
        transport.modules[f"{CARD_DIR}/card.py"] = {"CardPresenter": CardPresenter}

        await cache.load(card(presenter_class_name="CardPresenter"))

        assert transport.module_loads == [f"{CARD_DIR}/card.py"]
        assert cache.get_entry("card").presenter_class is CardPresenter

    @pytest.mark.asyncio
    async def test_no_module_load_without_presenter_name(self, cache, transport):
        await cache.load(card())

        assert transport.module_loads == []
        assert cache.get_entry("card").presenter_class is None


# ============================================================================
# Tests: Deduplication
# ============================================================================

class TestDeduplication:
    """Test concurrent and repeated loads of one component."""

    @pytest.mark.asyncio
    async def test_concurrent_loads_read_once(self, cache, transport, styles):
        """Five concurrent loads share one read and count five owners."""
        results = await asyncio.gather(*[cache.load(card()) for _ in range(5)])

        assert transport.reads.count(f"{CARD_DIR}/card.html") == 1
        assert transport.reads.count(f"{CARD_DIR}/card.css") == 1
        assert all(result == results[0] for result in results)
        assert styles.ref_count("card") == 5

    @pytest.mark.asyncio
    async def test_second_load_while_loading(self, cache, transport, styles):
        """A load issued while the first is in flight waits for the same result."""
        transport.gate = asyncio.Event()

        first = asyncio.create_task(cache.load(card(loaded_styles=["a{}"])))
        await asyncio.sleep(0)
        assert cache.load_state("card") is LoadState.LOADING

        second = asyncio.create_task(cache.load(card(loaded_styles=["a{}"])))
        await asyncio.sleep(0)
        transport.gate.set()

        first_result, second_result = await asyncio.gather(first, second)

        assert first_result == second_result
        assert first_result.style_resources == ["a{}"]
        assert styles.ref_count("card") == 2
        assert transport.reads == [f"{CARD_DIR}/card.html"]

    @pytest.mark.asyncio
    async def test_fulfilled_load_uses_cache(self, cache, transport, styles, sink):
        first = await cache.load(card())
        second = await cache.load(card())

        assert second == first
        assert len(transport.reads) == 2
        assert len(sink.injected) == 1
        assert styles.ref_count("card") == 2

    @pytest.mark.asyncio
    async def test_unload_releases_one_owner(self, cache, styles, sink):
        await cache.load(card())
        await cache.load(card())

        await cache.unload("card")
        assert styles.ref_count("card") == 1
        assert sink.removed == []

        await cache.unload("card")
        assert "card" not in styles
        assert sink.removed == ["card"]

    @pytest.mark.asyncio
    async def test_styles_reinjected_after_full_unload(self, cache, transport, sink):
        await cache.load(card())
        await cache.unload("card")
        await cache.load(card())

        assert len(sink.injected) == 2
        assert len(transport.reads) == 2


# ============================================================================
# Tests: Load Failure
# ============================================================================

class TestLoadFailure:
    """Test failure propagation and retry."""

    @pytest.mark.asyncio
    async def test_module_failure_leaves_entry_unfulfilled(self, cache, styles):
        with pytest.raises(LoadFailure) as exc_info:
            await cache.load(card(presenter_class_name="CardPresenter"))

        assert exc_info.value.name == "card"
        assert exc_info.value.stage == "module"
        assert isinstance(exc_info.value.__cause__, ImportError)
        assert cache.load_state("card") is LoadState.NOT_STARTED
        assert "card" not in cache
        assert "card" not in styles

    @pytest.mark.asyncio
    async def test_retry_after_failure(self, cache, transport):
        with pytest.raises(LoadFailure):
            await cache.load(card(presenter_class_name="CardPresenter"))

        transport.modules[f"{CARD_DIR}/card.py"] = {"CardPresenter": CardPresenter}
        resources = await cache.load(card(presenter_class_name="CardPresenter"))

        assert resources.markup == CARD_MARKUP
        assert transport.reads.count(f"{CARD_DIR}/card.html") == 2
        assert cache.load_state("card") is LoadState.FULFILLED

    @pytest.mark.asyncio
    async def test_missing_export(self, cache, transport):
        transport.modules[f"{CARD_DIR}/card.py"] = {"OtherPresenter": CardPresenter}

        with pytest.raises(LoadFailure) as exc_info:
            await cache.load(card(presenter_class_name="CardPresenter"))

        assert exc_info.value.stage == "module"

    @pytest.mark.asyncio
    async def test_markup_failure(self, cache, transport, styles):
        del transport.files[f"{CARD_DIR}/card.html"]

        with pytest.raises(LoadFailure) as exc_info:
            await cache.load(card())

        assert exc_info.value.stage == "markup"
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert len(styles) == 0

    @pytest.mark.asyncio
    async def test_injection_failure_during_load(self, cache, sink, styles):
        sink.fail_on.add("bad{}")

        with pytest.raises(LoadFailure) as exc_info:
            await cache.load(card(loaded_styles=["bad{}"]))

        assert exc_info.value.stage == "styles"
        assert isinstance(exc_info.value.__cause__, InjectionFailure)
        assert "card" not in styles

    @pytest.mark.asyncio
    async def test_failure_reaches_every_waiter(self, cache, styles):
        results = await asyncio.gather(
            *[cache.load(card(presenter_class_name="CardPresenter")) for _ in range(3)],
            return_exceptions=True,
        )

        assert all(isinstance(result, LoadFailure) for result in results)
        assert "card" not in styles

    @pytest.mark.asyncio
    async def test_reinjection_failure_on_cached_load(self, cache, sink, styles):
        await cache.load(card(loaded_styles=["a{}"]))
        await cache.unload("card")
        sink.fail_on.add("a{}")

        with pytest.raises(LoadFailure) as exc_info:
            await cache.load(card(loaded_styles=["a{}"]))

        assert exc_info.value.stage == "styles"
        assert isinstance(exc_info.value.__cause__, InjectionFailure)
        assert cache.load_state("card") is LoadState.FULFILLED
        assert "card" not in styles

        sink.fail_on.clear()
        await cache.load(card(loaded_styles=["a{}"]))
        assert styles.ref_count("card") == 1


# ============================================================================
# Tests: Presenter Registration
# ============================================================================

class TestRegisterPresenter:
    """Test manual presenter registration."""

    def test_unknown_component_raises(self, cache):
        with pytest.raises(KeyError):
            cache.register_presenter("missing", CardPresenter)

    @pytest.mark.asyncio
    async def test_register_on_loaded_component(self, cache):
        await cache.load(card())
        cache.register_presenter("card", CardPresenter)

        assert cache.get_entry("card").presenter_class is CardPresenter

    @pytest.mark.asyncio
    async def test_same_class_is_idempotent(self, cache):
        await cache.load(card())
        cache.register_presenter("card", CardPresenter)
        cache.register_presenter("card", CardPresenter)

        assert cache.get_entry("card").presenter_class is CardPresenter

    @pytest.mark.asyncio
    async def test_different_class_raises(self, cache):
        class OtherPresenter:
            pass

        await cache.load(card())
        cache.register_presenter("card", CardPresenter)

        with pytest.raises(ValueError, match="already has presenter"):
            cache.register_presenter("card", OtherPresenter)

    @pytest.mark.asyncio
    async def test_non_callable_raises(self, cache):
        await cache.load(card())

        with pytest.raises(TypeError):
            cache.register_presenter("card", "CardPresenter")

    @pytest.mark.asyncio
    async def test_register_partial(self, cache):
        presenter = functools.partial(CardPresenter)
        await cache.load(card())

        cache.register_presenter("card", presenter)

        assert cache.get_entry("card").presenter_class is presenter

    @pytest.mark.asyncio
    async def test_partial_conflict_message(self, cache):
        await cache.load(card())
        cache.register_presenter("card", functools.partial(CardPresenter))

        with pytest.raises(ValueError, match="CardPresenter"):
            cache.register_presenter("card", CardPresenter)

    @pytest.mark.asyncio
    async def test_partial_export_loaded_from_module(self, cache, transport):
        presenter = functools.partial(CardPresenter)
        transport.modules[f"{CARD_DIR}/card.py"] = {"CardPresenter": presenter}

        await cache.load(card(presenter_class_name="CardPresenter"))

        assert cache.get_entry("card").presenter_class is presenter
        assert cache.load_state("card") is LoadState.FULFILLED
