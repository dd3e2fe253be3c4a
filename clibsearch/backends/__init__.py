import importlib
import pkgutil
from urllib.parse import urlparse

from clibsearch.utils.errors import UnsupportedRegistryError

BACKENDS = {}
for _, modname, _ in pkgutil.iter_modules(__path__):
    mod = importlib.import_module(f"clibsearch.backends.{modname}")
    BACKENDS[mod.name] = mod


def get_backend(url):
    """Pick the registry backend that knows how to fetch `url`."""
    host = (urlparse(url).hostname or "").lower()
    for mod in BACKENDS.values():
        if mod.handles(host):
            return mod
    raise UnsupportedRegistryError(f"no registry backend for {url!r}")
