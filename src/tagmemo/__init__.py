"""tagmemo - Per-instance memoization with TTL and tag invalidation."""

# Duration parsing
from tagmemo.duration import parse_duration

# Key derivation
from tagmemo.keys import KEY_SEPARATOR, derive_key

# Decorators
from tagmemo.engine import memoize, memoize_expiring

# Stores
from tagmemo.store import CacheStore

# Tag invalidation
from tagmemo.tags import TagVersionRegistry, default_registry, invalidate

# Core types
from tagmemo.types import (
    Duration,
    HashFunction,
    MemoizeOptions,
    Tag,
    TagVersion,
)

__version__ = "0.1.0"

__all__ = [
    "KEY_SEPARATOR",
    "CacheStore",
    "Duration",
    "HashFunction",
    "MemoizeOptions",
    "Tag",
    "TagVersion",
    "TagVersionRegistry",
    "default_registry",
    "derive_key",
    "invalidate",
    "memoize",
    "memoize_expiring",
    "parse_duration",
]
