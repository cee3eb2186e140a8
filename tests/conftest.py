"""
Shared test fixtures for the auto-link test suite.
"""
import pytest

from autolink.models.inventory_io import InventoryPage
from autolink.session.editor import TextBufferSurface


# ==========================================================================
# Name universe
# ==========================================================================

@pytest.fixture
def city_names():
    return {"Paris", "Paris Commune", "Lyon", "New York", "New York City"}


@pytest.fixture
def namespaced_names():
    return {"Category:Paris", "File:Lyon.png", "Template:Infobox"}


# ==========================================================================
# Wiki text
# ==========================================================================

@pytest.fixture
def wiki_text():
    return (
        "'''Paris''' is the capital of France. See [[Lyon]] and "
        "{{Infobox city|name=Paris}}.\n"
        "<ref>Paris Commune, 1871</ref> Also https://example.org/Paris and "
        "__NOTOC__ <br/> The Paris Commune ruled Paris.\n"
    )


# ==========================================================================
# Inventory providers
# ==========================================================================

class PagedProvider:
    """Serves pre-built pages keyed by cursor and counts requests."""

    def __init__(self, pages):
        self.pages = pages
        self.calls = 0
        self.cursors = []

    async def fetch_page(self, cursor=None):
        self.calls += 1
        self.cursors.append(cursor)
        return self.pages[cursor]


class EndlessProvider:
    """Always returns another cursor."""

    def __init__(self):
        self.calls = 0

    async def fetch_page(self, cursor=None):
        self.calls += 1
        return InventoryPage(names=[f"Page {self.calls}"], next_cursor=f"c{self.calls}")


class FailingProvider:
    """First page succeeds, every later page raises."""

    def __init__(self, exc=None):
        self.calls = 0
        self.exc = exc or ConnectionError("network down")

    async def fetch_page(self, cursor=None):
        self.calls += 1
        if self.calls == 1:
            return InventoryPage(names=["Paris", "Lyon"], next_cursor="more")
        raise self.exc


@pytest.fixture
def paged_provider():
    return PagedProvider({
        None: InventoryPage(names=["Paris", "Lyon"], next_cursor="M"),
        "M": InventoryPage(names=["Marseille", "Paris"], next_cursor="T"),
        "T": InventoryPage(names=["Toulouse"], next_cursor=None),
    })


@pytest.fixture
def endless_provider():
    return EndlessProvider()


@pytest.fixture
def failing_provider():
    return FailingProvider()


# ==========================================================================
# Redis stub
# ==========================================================================

class InMemoryRedis:
    """Minimal in-memory Redis stub (no server required)."""

    def __init__(self):
        self._store: dict = {}
        self.ttls: dict = {}

    def set(self, key: str, value: str, ex=None, **kwargs) -> None:  # noqa: ARG002
        self._store[key] = value
        self.ttls[key] = ex

    def get(self, key: str):
        return self._store.get(key)

    def delete(self, *keys: str) -> int:
        deleted = 0
        for k in keys:
            if k in self._store:
                del self._store[k]
                deleted += 1
        return deleted


class BrokenRedis:
    """Every call raises, like a Redis server that went away."""

    def set(self, *args, **kwargs):
        raise ConnectionError("redis down")

    def get(self, *args, **kwargs):
        raise ConnectionError("redis down")

    def delete(self, *args, **kwargs):
        raise ConnectionError("redis down")


@pytest.fixture
def redis_stub():
    return InMemoryRedis()


@pytest.fixture
def broken_redis():
    return BrokenRedis()


# ==========================================================================
# Editor surface
# ==========================================================================

@pytest.fixture
def buffer_surface():
    return TextBufferSurface("Visit [[Paris]] and Lyon today.")
