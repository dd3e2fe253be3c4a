# clibsearch/matcher.py

import logging
from typing import Iterable, Sequence

from clibsearch.models import PackageEntry

logger = logging.getLogger(__name__)


def normalize_terms(args: Iterable[str]) -> tuple[str, ...]:
    """Case-fold query terms once, up front. Empty strings are kept out."""
    return tuple(a.casefold() for a in args if a)


def parse_name(repo: str | None) -> str | None:
    """
    Short name of a repo id: "owner/name@1.2.0" -> "name".
    Returns None when nothing usable is left.
    """
    if not repo:
        return None
    name = repo.split("@", 1)[0]
    name = name.rsplit("/", 1)[-1]
    return name or None


def _fields(pkg: PackageEntry):
    yield parse_name(pkg.repo)
    yield pkg.description
    yield pkg.repo
    yield pkg.href


def matches(terms: Sequence[str], pkg: PackageEntry) -> bool:
    """
    True if any term is a case-insensitive substring of the short name,
    description, repo or href (checked in that order).
    No terms means everything matches.
    """
    if not terms:
        return True

    for value in _fields(pkg):
        if value is None:
            continue
        value = value.casefold()
        if any(t in value for t in terms):
            return True
    return False
