"""Core types for tagmemo."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NewType

if TYPE_CHECKING:
    from tagmemo.tags import TagVersionRegistry

# Tags are plain strings; the alias documents intent at call sites
Tag = str

# Opaque generation marker. Only equality is ever used on it.
TagVersion = NewType("TagVersion", int)

# Duration type alias
Duration = str | int  # "30s", "5m", "2h", "1d" or milliseconds

# True -> stringify-and-join, callable -> custom, None/False -> default
HashFunction = bool | Callable[..., Any] | None


@dataclass(frozen=True, slots=True)
class MemoizeOptions:
    """Configuration captured when a computation is memoized."""

    expiring_ms: int = 0
    hash_function: HashFunction = None
    tags: tuple[Tag, ...] | None = None
    registry: TagVersionRegistry | None = None
