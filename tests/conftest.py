"""Shared fixtures and fakes for the test suite."""

import asyncio
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pytest

from skel.core.resources import (
    ComponentResourceCache,
    FailureReporter,
    InjectionSink,
    ModuleLoader,
    PresenterFactory,
    ResourceReader,
    StyleResourceRegistry,
)


# ============================================================
# Fake Collaborators
# ============================================================

class RecordingSink(InjectionSink):
    """Sink that records calls and yields to the loop on every inject."""

    def __init__(self):
        self.injected: List[Tuple[Optional[str], str, Optional[str]]] = []
        self.removed: List[str] = []
        self.fail_on: set = set()

    async def inject(self, content, identifier, url=None):
        await asyncio.sleep(0)
        if content in self.fail_on or url in self.fail_on:
            raise RuntimeError("sink unavailable")
        self.injected.append((content, identifier, url))
        return f"<{identifier}:{content if url is None else url}>"

    async def remove(self, identifier):
        self.removed.append(identifier)


class FakeTransport(ResourceReader, ModuleLoader):
    """In-memory transport counting every read.

    Each read suspends at least once; when `gate` is set the reads also
    wait for it, so tests can hold a load in flight.
    """

    def __init__(self, files: Dict[str, str], modules: Optional[Dict[str, Mapping[str, Any]]] = None):
        self.files = dict(files)
        self.modules = dict(modules or {})
        self.reads: List[str] = []
        self.module_loads: List[str] = []
        self.gate: Optional[asyncio.Event] = None

    async def read_resource(self, path):
        self.reads.append(path)
        await asyncio.sleep(0)
        if self.gate is not None:
            await self.gate.wait()
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    async def load_module(self, path):
        self.module_loads.append(path)
        await asyncio.sleep(0)
        if path not in self.modules:
            raise ImportError(f"No module at {path}")
        return self.modules[path]


class RecordingReporter(FailureReporter):
    def __init__(self):
        self.failures: List[Tuple[str, str, str]] = []

    def report_failure(self, stage, context, cause):
        self.failures.append((stage, context, cause))


CARD_DIR = "web-components/widgets/card"
CARD_MARKUP = '<div class="card">{{title}}</div>'
CARD_STYLE = ".card{padding:4px}"


# ============================================================
# Fixtures
# ============================================================

@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def transport():
    return FakeTransport({
        f"{CARD_DIR}/card.html": CARD_MARKUP,
        f"{CARD_DIR}/card.css": CARD_STYLE,
    })


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def styles(sink):
    return StyleResourceRegistry(sink)


@pytest.fixture
def cache(styles, transport):
    return ComponentResourceCache(styles, reader=transport, module_loader=transport)


@pytest.fixture
def presenters(reporter):
    return PresenterFactory(reporter)
