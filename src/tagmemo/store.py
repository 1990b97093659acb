"""Per-instance cache stores."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field
from typing import Any

from tagmemo.tags import TagVersionRegistry
from tagmemo.types import Tag, TagVersion

logger = logging.getLogger(__name__)

MISSING: Any = object()

_slot_ids = itertools.count()


@dataclass(slots=True)
class CacheStore:
    """Cached results of one computation for one instance."""

    entries: dict[Hashable, Any] = field(default_factory=dict)
    timestamps: dict[Hashable, int] = field(default_factory=dict)  # Unix ms
    tag_versions: dict[Tag, TagVersion] | None = None
    owner_id: int = 0  # id() of the instance the store was created for

    def __len__(self) -> int:
        return len(self.entries)

    def __reduce__(self) -> tuple[Any, ...]:
        # Copies and pickles of the owner start with an empty store
        return (CacheStore, ())

    def clear(self) -> None:
        self.entries.clear()
        self.timestamps.clear()

    def refresh_tags(self, tags: Iterable[Tag], registry: TagVersionRegistry) -> bool:
        """Drop every entry if any tag moved on since the last check.

        Returns True when the store was stale. The observed versions are
        re-captured afterwards, so the next call sees a fresh store.
        """
        tags = tuple(tags)
        observed = self.tag_versions or {}
        if all(observed.get(tag) == registry.version_of(tag) for tag in tags):
            return False
        self.clear()
        self.tag_versions = registry.versions_for(tags)
        return True

    def lookup(self, key: Hashable, now: int, ttl: int = 0) -> Any:
        """Return the value for ``key``, or MISSING if absent or expired."""
        if ttl > 0:
            stored_at = self.timestamps.get(key)
            if stored_at is None or now - stored_at > ttl:
                return MISSING
        return self.entries.get(key, MISSING)

    def put(self, key: Hashable, value: Any, now: int) -> None:
        self.entries[key] = value
        self.timestamps[key] = now


def make_slot_name(fn: Callable[..., Any]) -> str:
    """Private attribute name unique to one memoized computation."""
    name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", "fn")
    return f"__tagmemo_{name}_{next(_slot_ids)}"


def get_or_create_store(
    instance: Any,
    slot: str,
    tags: tuple[Tag, ...] | None,
    registry: TagVersionRegistry,
) -> CacheStore:
    """Return the store held in ``instance`` under ``slot``, creating it.

    The store is written straight into the instance ``__dict__``, which
    bypasses ``__setattr__`` and so also works on frozen dataclasses. A
    store owned by another instance (left behind by a shallow copy) is
    replaced, never shared.
    """
    try:
        namespace = vars(instance)
    except TypeError:
        raise TypeError(
            f"Cannot memoize on {type(instance).__name__} instances: "
            "they have no __dict__ to hold the cache"
        ) from None

    store = namespace.get(slot)
    # A store carried over by copy.copy still belongs to the original
    if store is None or store.owner_id != id(instance):
        versions = registry.versions_for(tags) if tags is not None else None
        store = namespace[slot] = CacheStore(
            tag_versions=versions, owner_id=id(instance)
        )
        logger.debug("Created cache store %s on %s", slot, type(instance).__name__)
    return store
