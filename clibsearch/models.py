# clibsearch/models.py

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping

from clibsearch.utils.errors import DecodeError

FIELDS = ("repo", "href", "description", "category")


@dataclass(frozen=True)
class PackageEntry:
    """One catalog record. All four fields are strings, possibly empty."""
    repo: str
    href: str
    description: str = ""
    category: str = ""

    def __post_init__(self):
        for field in FIELDS:
            value = getattr(self, field)
            if not isinstance(value, str):
                raise DecodeError(f"{field} must be a string, got {type(value).__name__}")

    @classmethod
    def from_mapping(cls, data: Mapping) -> "PackageEntry":
        missing = [f for f in ("repo", "href") if data.get(f) is None]
        if missing:
            raise DecodeError(f"missing field(s): {', '.join(missing)}")
        return cls(
            repo=data["repo"],
            href=data["href"],
            description=data.get("description") or "",
            category=data.get("category") or "",
        )

    def to_dict(self) -> dict:
        return {f: getattr(self, f) for f in FIELDS}


class Registry:
    """
    Ordered, immutable sequence of catalog entries produced by one fetch.
    Consumers walk it through `iterator()`; no re-sorting happens here.
    """

    def __init__(self, entries: Iterable[PackageEntry] = ()):
        self._entries = tuple(entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"Registry({len(self._entries)} packages)"

    def iterator(self) -> "RegistryIterator":
        return RegistryIterator(self)


class RegistryIterator(Iterator[PackageEntry]):
    """
    Forward-only cursor over a Registry.

    `next_entry()` returns None once exhausted, and keeps returning None.
    The standard iterator protocol is supported as well.
    """

    def __init__(self, registry: Registry):
        self._registry = registry
        self._pos = 0

    def next_entry(self) -> PackageEntry | None:
        if self._registry is None:
            return None
        entries = self._registry._entries
        if self._pos >= len(entries):
            return None
        entry = entries[self._pos]
        self._pos += 1
        return entry

    def __next__(self) -> PackageEntry:
        entry = self.next_entry()
        if entry is None:
            raise StopIteration
        return entry

    def close(self) -> None:
        # drops the cursor only; the registry belongs to whoever fetched it
        self._registry = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
