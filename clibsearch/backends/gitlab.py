# clibsearch/backends/gitlab.py

import json
import logging
from urllib.parse import quote, urlparse

from clibsearch.utils.errors import UnsupportedRegistryError
from clibsearch.utils.markdown import parse_packages

name = "gitlab"
logger = logging.getLogger(__name__)

WIKI_MARKER = "/-/wikis/"


def handles(host: str) -> bool:
    return "gitlab" in host


def source_url(url: str) -> str:
    """
    Wiki pages are read through the REST API, which wraps the markdown in JSON:
    https://gitlab.com/group/project/-/wikis/Packages
      -> https://gitlab.com/api/v4/projects/group%2Fproject/wikis/Packages
    """
    parsed = urlparse(url)
    project, sep, page = parsed.path.strip("/").partition(WIKI_MARKER.strip("/"))
    project = project.strip("/")
    page = page.strip("/")
    if not sep or not project or not page:
        raise UnsupportedRegistryError(f"not a GitLab wiki page: {url}")
    return (
        f"{parsed.scheme}://{parsed.netloc}/api/v4/projects/"
        f"{quote(project, safe='')}/wikis/{quote(page, safe='')}"
    )


def parse(payload: str):
    try:
        data = json.loads(payload)
    except ValueError as e:
        logger.debug("GitLab wiki payload is not JSON: %s", e)
        return []
    content = data.get("content") if isinstance(data, dict) else None
    if not isinstance(content, str):
        logger.debug("GitLab wiki payload has no content field")
        return []
    return parse_packages(content)
