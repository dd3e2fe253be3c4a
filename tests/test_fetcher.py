from __future__ import annotations

import os
import time

import pytest
import requests

from clibsearch.fetcher import (
    CacheSource,
    NetworkSource,
    RegistryFetcher,
    fetch_registry,
)
from clibsearch.utils.cache import CacheStore
from clibsearch.utils.errors import FetchError
from clibsearch.utils.markdown import parse_packages

REGISTRY_URL = "https://github.com/clibs/clib/wiki/Packages"
RAW_URL = "https://raw.githubusercontent.com/wiki/clibs/clib/Packages.md"

FRESH_MD = "## Tools\n- [foo/bar](http://x) - a widget\n"
CACHED_MD = "## Tools\n- [cached/pkg](http://cached) - from cache\n"


class _FakeResponse:
    def __init__(self, *, text: str = "", status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code < 400:
            return
        error = requests.HTTPError(f"{self.status_code} error")
        error.response = self  # type: ignore[assignment]
        raise error


class _FakeSession:
    def __init__(self, response: _FakeResponse | Exception) -> None:
        self.response = response
        self.headers: dict[str, str] = {}
        self.calls: list[str] = []
        self.closed = False

    def get(self, url: str, **_: object) -> _FakeResponse:
        self.calls.append(url)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    def close(self) -> None:
        self.closed = True


class _FakeSource:
    def __init__(self, data: str | None) -> None:
        self.data = data
        self.calls = 0

    def fetch(self) -> str | None:
        self.calls += 1
        return self.data


def _expire(store: CacheStore) -> None:
    old = time.time() - store.ttl - 60
    os.utime(store.path, (old, old))


def test_network_source_returns_body_and_sets_user_agent() -> None:
    session = _FakeSession(_FakeResponse(text=FRESH_MD))
    source = NetworkSource(RAW_URL, session=session)  # type: ignore[arg-type]

    assert source.fetch() == FRESH_MD
    assert session.calls == [RAW_URL]
    assert session.headers["User-Agent"].startswith("clib-search/")


@pytest.mark.parametrize(
    "response",
    [
        _FakeResponse(status_code=404),
        _FakeResponse(text=""),
        requests.ConnectionError("connection refused"),
    ],
)
def test_network_failures_raise_fetch_error(response) -> None:
    source = NetworkSource(RAW_URL, session=_FakeSession(response))  # type: ignore[arg-type]
    with pytest.raises(FetchError):
        source.fetch()


def test_valid_cache_skips_network(tmp_path) -> None:
    store = CacheStore(tmp_path)
    store.write_cache(CACHED_MD)
    network = _FakeSource(FRESH_MD)

    fetcher = RegistryFetcher(network, parse_packages, cache=CacheSource(store))
    registry = fetcher.fetch()

    assert network.calls == 0
    assert [p.repo for p in registry.iterator()] == ["cached/pkg"]


def test_expired_cache_fetches_and_overwrites(tmp_path) -> None:
    store = CacheStore(tmp_path)
    store.write_cache(CACHED_MD)
    _expire(store)
    network = _FakeSource(FRESH_MD)

    fetcher = RegistryFetcher(network, parse_packages, cache=CacheSource(store))
    registry = fetcher.fetch()

    assert network.calls == 1
    assert [p.repo for p in registry.iterator()] == ["foo/bar"]
    assert store.read_cache() == FRESH_MD


def test_skip_cache_still_writes(tmp_path) -> None:
    store = CacheStore(tmp_path)
    store.write_cache(CACHED_MD)
    network = _FakeSource(FRESH_MD)

    fetcher = RegistryFetcher(network, parse_packages, cache=CacheSource(store))
    fetcher.fetch(use_cache=False)

    assert network.calls == 1
    assert store.read_cache() == FRESH_MD


def test_fetch_without_cache() -> None:
    network = _FakeSource(FRESH_MD)
    registry = RegistryFetcher(network, parse_packages).fetch()
    assert len(registry) == 1


def test_source_without_data_is_a_fetch_error() -> None:
    with pytest.raises(FetchError):
        RegistryFetcher(_FakeSource(None), parse_packages).fetch()


def test_fetch_error_leaves_cache_untouched(tmp_path) -> None:
    store = CacheStore(tmp_path)
    store.write_cache(CACHED_MD)
    _expire(store)
    session = _FakeSession(requests.ConnectionError("down"))

    with pytest.raises(FetchError):
        fetch_registry(REGISTRY_URL, True, store=store, session=session)  # type: ignore[arg-type]

    assert store.path.read_text(encoding="utf-8") == CACHED_MD


def test_fetch_registry_resolves_backend_url(tmp_path) -> None:
    session = _FakeSession(_FakeResponse(text=FRESH_MD))
    store = CacheStore(tmp_path, key=REGISTRY_URL)

    registry = fetch_registry(REGISTRY_URL, True, store=store, session=session)  # type: ignore[arg-type]

    assert session.calls == [RAW_URL]
    assert len(registry) == 1
    assert store.read_cache() == FRESH_MD


def test_fetch_registry_closes_the_session_it_creates(monkeypatch, tmp_path) -> None:
    session = _FakeSession(_FakeResponse(text=FRESH_MD))
    monkeypatch.setattr(requests, "Session", lambda: session)

    fetch_registry(REGISTRY_URL, False, store=CacheStore(tmp_path))

    assert session.closed


def test_fetch_registry_closes_session_after_failure(monkeypatch, tmp_path) -> None:
    session = _FakeSession(requests.ConnectionError("down"))
    monkeypatch.setattr(requests, "Session", lambda: session)

    with pytest.raises(FetchError):
        fetch_registry(REGISTRY_URL, False, store=CacheStore(tmp_path))

    assert session.closed


def test_caller_session_is_left_open(tmp_path) -> None:
    session = _FakeSession(_FakeResponse(text=FRESH_MD))

    fetch_registry(REGISTRY_URL, False, store=CacheStore(tmp_path), session=session)  # type: ignore[arg-type]

    assert not session.closed
