# clibsearch/search.py

import logging

from clibsearch.config import Options
from clibsearch.fetcher import fetch_registry
from clibsearch.matcher import matches
from clibsearch.render import get_renderer
from clibsearch.utils.errors import handle_errors

logger = logging.getLogger("clibsearch")


def run(options: Options, fetch=fetch_registry, renderer=None) -> int:
    """
    Fetch the registry, filter it by `options.terms` and render the matches.
    Returns the number of matching packages.
    """
    registry = fetch(options.registry_url, options.cache)
    renderer = renderer or get_renderer(options)

    with registry.iterator() as it:
        for pkg in it:
            if matches(options.terms, pkg):
                renderer.add(pkg)
            else:
                logger.debug("skipped package %s", pkg.repo)

    renderer.finish()
    return renderer.count


@handle_errors
def search(options: Options) -> int:
    return run(options)
