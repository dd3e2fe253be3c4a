import functools
import logging
import sys

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger("clibsearch")
stderr = Console(stderr=True)


class SearchError(Exception):
    """Base class for clib-search failures."""


class FetchError(SearchError):
    """The registry could not be retrieved from its remote source."""


class UnsupportedRegistryError(SearchError):
    """No backend knows how to fetch the given registry URL."""


class CacheReadError(SearchError):
    pass


class CacheWriteError(SearchError):
    pass


class DecodeError(SearchError):
    """A single catalog entry could not be decoded."""


def handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except Exception as e:
            logger.debug(f"{func.__name__} ▶ {e}", exc_info=True)
            stderr.print(f"[bold red]error:[/] {escape(str(e))}", highlight=False)
            sys.exit(1)

    return wrapper
