"""The @memoize decorator - per-instance caching with TTL and tags.

Provides:
- @memoize / @memoize(expiring=..., hash_function=..., tags=[...])
- @memoize_expiring(expiring, hash_function=None)

Works on instance methods, ``async def`` methods and properties.
"""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Callable, Iterable
from functools import wraps
from typing import Any, TypeVar

from tagmemo.duration import parse_duration
from tagmemo.keys import derive_key
from tagmemo.store import MISSING, get_or_create_store, make_slot_name
from tagmemo.tags import TagVersionRegistry, default_registry, validate_tags
from tagmemo.types import Duration, HashFunction, MemoizeOptions, Tag

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _now_ms() -> int:
    return int(time.time() * 1000)


def _wrap(fn: Callable[..., Any], options: MemoizeOptions) -> Callable[..., Any]:
    """Wrap ``fn`` so its results are cached per receiver."""
    slot = make_slot_name(fn)
    registry = options.registry if options.registry is not None else default_registry
    tags = options.tags
    ttl = options.expiring_ms

    def prepare(instance: Any, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        store = get_or_create_store(instance, slot, tags, registry)
        if tags is not None and store.refresh_tags(tags, registry):
            logger.debug("Cleared %s: a tag in %s was invalidated", slot, tags)
        key = derive_key(
            instance, args, kwargs, hash_function=options.hash_function
        )
        return store, key, store.lookup(key, _now_ms(), ttl)

    if inspect.iscoroutinefunction(fn):

        @wraps(fn)
        async def async_wrapper(instance: Any, *args: Any, **kwargs: Any) -> Any:
            store, key, value = prepare(instance, args, kwargs)
            if value is not MISSING:
                return value
            logger.debug("Cache miss for %s[%r]", slot, key)
            value = await fn(instance, *args, **kwargs)
            store.put(key, value, _now_ms())
            return value

        return async_wrapper

    @wraps(fn)
    def wrapper(instance: Any, *args: Any, **kwargs: Any) -> Any:
        store, key, value = prepare(instance, args, kwargs)
        if value is not MISSING:
            return value
        logger.debug("Cache miss for %s[%r]", slot, key)
        value = fn(instance, *args, **kwargs)
        store.put(key, value, _now_ms())
        return value

    return wrapper


def _apply(target: Any, options: MemoizeOptions) -> Any:
    if isinstance(target, property):
        if target.fget is None:
            raise TypeError("Cannot memoize a property without a getter")
        return target.getter(_wrap(target.fget, options))
    if isinstance(target, (staticmethod, classmethod)) or not callable(target):
        raise TypeError(
            "Only put @memoize on a method or a property, "
            f"got {type(target).__name__}"
        )
    return _wrap(target, options)


def memoize(
    target: F | bool | None = None,
    /,
    *,
    expiring: Duration | None = None,
    hash_function: HashFunction = None,
    tags: Iterable[Tag] | None = None,
    registry: TagVersionRegistry | None = None,
) -> Any:
    """Cache a method's results on each instance it is called on.

    Usage:
        class Repo:
            @memoize
            def head(self) -> str: ...

            @memoize(expiring="5m", tags=["users"])
            def user(self, id: str) -> User: ...

            @memoize(True)  # same as hash_function=True
            def search(self, term: str, page: int) -> list[Hit]: ...

        invalidate(["users"])  # every Repo().user cache is now stale

    Args:
        expiring: Maximum age of an entry ("30s" or milliseconds). Zero,
            negative or None means entries never expire.
        hash_function: True joins all arguments as strings with "!";
            a callable ``(self, *args, **kwargs) -> key`` picks the key
            itself. By default the first argument is the key.
        tags: Names whose invalidation clears this cache wholesale
        registry: Registry the tags live in (default: process-wide)
    """
    if target is True:
        # @memoize(True) is shorthand for @memoize(hash_function=True)
        target, hash_function = None, True
    if not (
        hash_function is None
        or isinstance(hash_function, bool)
        or callable(hash_function)
    ):
        raise TypeError(
            f"hash_function must be True or callable, got {hash_function!r}"
        )
    resolved_tags = validate_tags(tags) if tags is not None else None
    options = MemoizeOptions(
        expiring_ms=parse_duration(expiring),
        hash_function=hash_function,
        tags=resolved_tags,
        registry=registry,
    )

    if target is not None:
        return _apply(target, options)

    def decorator(fn: F) -> F:
        return _apply(fn, options)

    return decorator


def memoize_expiring(
    expiring: Duration, hash_function: HashFunction = None
) -> Callable[[F], F]:
    """Shorthand for ``memoize(expiring=..., hash_function=...)``."""
    return memoize(expiring=expiring, hash_function=hash_function)
