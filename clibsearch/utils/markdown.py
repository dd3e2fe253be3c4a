"""
Parser for the wiki "Packages" page.

    ## Category
    - [owner/name](https://github.com/owner/name) - what it does
"""

import logging
import re

from clibsearch.models import PackageEntry
from clibsearch.utils.errors import DecodeError

logger = logging.getLogger(__name__)

RE_CATEGORY = re.compile(r"^\s{0,3}#{2,}\s*(.*?)\s*#*\s*$")
RE_BULLET = re.compile(r"^\s{0,3}[-*+]\s+")
RE_PACKAGE = re.compile(
    r"^\s{0,3}[-*+]\s+\[(?P<repo>[^\]]*)\]\((?P<href>[^)\s]*)\)"
    r"(?:\s*[-:–—]\s*(?P<desc>.*))?\s*$"
)


def parse_package(line: str, category: str = "") -> PackageEntry:
    m = RE_PACKAGE.match(line)
    if not m:
        raise DecodeError(f"not a package line: {line.strip()!r}")
    fields = {k: (v or "").strip() for k, v in m.groupdict().items()}
    if not fields["repo"] or not fields["href"]:
        raise DecodeError(f"empty repo or url: {line.strip()!r}")
    return PackageEntry.from_mapping({
        "repo": fields["repo"],
        "href": fields["href"],
        "description": fields["desc"],
        "category": category,
    })


def parse_packages(text: str) -> list[PackageEntry]:
    pkgs = []
    category = ""
    for lineno, line in enumerate(text.splitlines(), 1):
        heading = RE_CATEGORY.match(line)
        if heading:
            category = heading.group(1)
            continue
        if not RE_BULLET.match(line):
            continue
        try:
            pkgs.append(parse_package(line, category))
        except DecodeError as e:
            logger.debug("skipping line %d: %s", lineno, e)
    return pkgs
