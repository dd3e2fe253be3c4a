# clibsearch/backends/github.py

from urllib.parse import urlparse

from clibsearch.utils.errors import UnsupportedRegistryError
from clibsearch.utils.markdown import parse_packages

name = "github"

RAW_HOST = "raw.githubusercontent.com"
RAW_WIKI = "https://" + RAW_HOST + "/wiki/{owner}/{repo}/{page}.md"


def handles(host: str) -> bool:
    return host in ("github.com", "www.github.com", RAW_HOST)


def source_url(url: str) -> str:
    """
    Map a wiki page URL to its raw markdown:
    https://github.com/clibs/clib/wiki/Packages
      -> https://raw.githubusercontent.com/wiki/clibs/clib/Packages.md
    """
    parsed = urlparse(url)
    if parsed.hostname == RAW_HOST:
        return url
    parts = [p for p in parsed.path.split("/") if p]
    if len(parts) < 3 or parts[2] != "wiki":
        raise UnsupportedRegistryError(f"not a GitHub wiki page: {url}")
    page = parts[3] if len(parts) > 3 else "Home"
    return RAW_WIKI.format(owner=parts[0], repo=parts[1], page=page)


def parse(payload: str):
    return parse_packages(payload)
