# clibsearch/fetcher.py

import logging
from typing import Protocol

import requests

from clibsearch import __version__
from clibsearch.backends import get_backend
from clibsearch.config import REGISTRY_URL
from clibsearch.models import Registry
from clibsearch.utils.cache import CacheStore
from clibsearch.utils.errors import FetchError

logger = logging.getLogger(__name__)

USER_AGENT = f"clib-search/{__version__} (+https://github.com/clibs/clib)"


class RegistrySource(Protocol):
    """Something that can hand back the raw registry payload, or None."""

    def fetch(self) -> str | None: ...


class NetworkSource:
    """Single-shot HTTP GET of the registry page. No retries."""

    def __init__(self, url: str, session: requests.Session | None = None,
                 timeout: float | None = None):
        self.url = url
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout
        self.session.headers.setdefault("User-Agent", USER_AGENT)

    def fetch(self) -> str:
        logger.debug("fetching registry from %s", self.url)
        try:
            r = self.session.get(self.url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"failed to fetch {self.url}: {e}") from e
        if not r.text:
            raise FetchError(f"empty response from {self.url}")
        return r.text

    def close(self) -> None:
        if self._owns_session:
            self.session.close()


class CacheSource:
    def __init__(self, store: CacheStore):
        self.store = store

    def fetch(self) -> str | None:
        return self.store.read_cache()

    def save(self, data: str) -> None:
        self.store.write_cache(data)


class RegistryFetcher:
    """
    Reads the registry from the cache when allowed and fresh,
    otherwise from the network, refreshing the cache on success.
    """

    def __init__(self, network: RegistrySource, parse, cache: CacheSource | None = None):
        self.network = network
        self.cache = cache
        self.parse = parse

    def fetch_raw(self, use_cache: bool = True) -> str:
        if use_cache and self.cache is not None:
            data = self.cache.fetch()
            if data:
                return data

        data = self.network.fetch()
        if not data:
            raise FetchError("registry source returned no data")
        if self.cache is not None:
            self.cache.save(data)
        return data

    def fetch(self, use_cache: bool = True) -> Registry:
        data = self.fetch_raw(use_cache)
        pkgs = self.parse(data)
        logger.debug("found %d packages", len(pkgs))
        return Registry(pkgs)


def fetch_registry(source_url: str = REGISTRY_URL, caching_enabled: bool = True, *,
                   store: CacheStore | None = None,
                   session: requests.Session | None = None) -> Registry:
    """
    Fetch and parse the registry at `source_url`.

    `caching_enabled` controls reading the cache; a successful network
    fetch is written back either way. Raises FetchError when the
    registry cannot be retrieved.
    """
    backend = get_backend(source_url)
    if store is None:
        store = CacheStore(key=source_url)
    network = NetworkSource(backend.source_url(source_url), session=session)
    fetcher = RegistryFetcher(network, parse=backend.parse, cache=CacheSource(store))
    try:
        return fetcher.fetch(use_cache=caching_enabled)
    finally:
        network.close()
