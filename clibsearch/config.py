# clibsearch/config.py

import os
from dataclasses import dataclass

REGISTRY_URL = "https://github.com/clibs/clib/wiki/Packages"
REGISTRY_ENV = "CLIB_SEARCH_REGISTRY"

# cached registry payloads are reused for one day
CACHE_TTL = 1 * 24 * 60 * 60
CACHE_DIR_NAME = "clib-search"
CACHE_DIR_ENV = "CLIB_SEARCH_CACHE_DIR"

DEBUG_ENV = "DEBUG"
DEBUG_NAMESPACE = "clib-search"


@dataclass(frozen=True)
class Options:
    """
    Process-wide toggles decided once at startup.
    `terms` are already case-folded.
    """
    terms: tuple[str, ...] = ()
    color: bool = True
    cache: bool = True
    json: bool = False
    verbose: bool = False
    registry_url: str = REGISTRY_URL


def registry_from_env() -> str:
    return os.environ.get(REGISTRY_ENV) or REGISTRY_URL


def debug_from_env() -> bool:
    value = os.environ.get(DEBUG_ENV, "")
    names = [n.strip() for n in value.replace(",", " ").split()]
    return "*" in names or DEBUG_NAMESPACE in names
