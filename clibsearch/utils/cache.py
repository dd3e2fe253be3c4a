import hashlib
import logging
import os
import time
from pathlib import Path

from clibsearch.config import CACHE_TTL, REGISTRY_URL
from clibsearch.utils.errors import CacheReadError, CacheWriteError
from clibsearch.utils.osdetect import cache_home

logger = logging.getLogger(__name__)


class CacheStore:
    """
    On-disk copy of the last fetched registry payload.

    One file per registry, named after a hash of the registry URL. Freshness
    is the file's mtime against the TTL; stale files are ignored, never removed.
    """

    def __init__(self, directory=None, key: str = REGISTRY_URL, ttl: int = CACHE_TTL):
        if ttl < 0:
            raise ValueError("ttl must be >= 0")
        self.directory = Path(directory) if directory else cache_home()
        self.key = key
        self.ttl = ttl

    @property
    def path(self) -> Path:
        digest = hashlib.sha1(self.key.encode("utf-8")).hexdigest()[:16]
        return self.directory / f"search-{digest}.cache"

    def age(self) -> float | None:
        try:
            mtime = self.path.stat().st_mtime
        except OSError:
            return None
        return time.time() - mtime

    def has_valid_cache(self) -> bool:
        age = self.age()
        if age is None:
            logger.debug("cache miss %s (not found)", self.path)
            return False
        if age > self.ttl:
            logger.debug("cache expired %s (age %.0fs > %ss)", self.path, age, self.ttl)
            return False
        return True

    def read_cache(self) -> str | None:
        if not self.has_valid_cache():
            return None
        try:
            data = self._load()
        except CacheReadError as e:
            logger.debug("cache read failed: %s", e)
            return None
        if not data:
            logger.debug("cache miss %s (empty)", self.path)
            return None
        logger.debug("cache hit %s (%d bytes)", self.path, len(data))
        return data

    def write_cache(self, data: str) -> None:
        try:
            self._store(data)
        except CacheWriteError as e:
            logger.debug("cache write failed: %s", e)
            return
        logger.debug("wrote cache %s (%d bytes)", self.path, len(data))

    def _load(self) -> str:
        try:
            return self.path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CacheReadError(f"{self.path}: {e}") from e

    def _store(self, data: str) -> None:
        # write-then-rename so a reader never sees a half-written payload
        target = self.path
        temp = target.with_suffix(target.suffix + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            temp.write_bytes(data.encode("utf-8"))
            os.replace(temp, target)
        except (OSError, UnicodeEncodeError) as e:
            try:
                if temp.exists():
                    temp.unlink()
            except OSError as cleanup_error:
                logger.debug("could not remove %s: %s", temp, cleanup_error)
            raise CacheWriteError(f"{target}: {e}") from e
