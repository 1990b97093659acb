"""Tag version registry and invalidation."""

import itertools
import logging
from collections.abc import Iterable

from tagmemo.types import Tag, TagVersion

logger = logging.getLogger(__name__)

# Shared across registries so a token is never reused, even between domains
_tokens = itertools.count(1)


def _mint() -> TagVersion:
    return TagVersion(next(_tokens))


def validate_tags(tags: Iterable[Tag]) -> tuple[Tag, ...]:
    """Normalize a tags argument to a tuple of strings."""
    if isinstance(tags, str):
        raise TypeError(f"tags must be a list of strings, not a string: {tags!r}")
    result = tuple(tags)
    for tag in result:
        if not isinstance(tag, str):
            raise TypeError(f"Expected tag to be str, got {type(tag).__name__}")
    return result


class TagVersionRegistry:
    """Current version token per tag.

    A tag gets a token the first time any cache observes it. Rotating the
    token (``invalidate``) makes every cache holding the old one stale.
    Entries are never removed.
    """

    def __init__(self) -> None:
        self._versions: dict[Tag, TagVersion] = {}

    def __contains__(self, tag: object) -> bool:
        return tag in self._versions

    def __len__(self) -> int:
        return len(self._versions)

    def version_of(self, tag: Tag) -> TagVersion:
        """Return the current token for ``tag``, minting one if unseen."""
        version = self._versions.get(tag)
        if version is None:
            version = self._versions[tag] = _mint()
        return version

    def versions_for(self, tags: Iterable[Tag]) -> dict[Tag, TagVersion]:
        """Snapshot the current tokens for ``tags``."""
        return {tag: self.version_of(tag) for tag in tags}

    def invalidate(self, tags: Iterable[Tag]) -> None:
        """Rotate the token of every known tag in ``tags``.

        Tags no cache has observed yet are ignored.
        """
        for tag in validate_tags(tags):
            if tag in self._versions:
                self._versions[tag] = _mint()
                logger.debug("Rotated version of tag %r", tag)


default_registry = TagVersionRegistry()


def invalidate(tags: Iterable[Tag]) -> None:
    """Mark every cache observing any of ``tags`` as stale.

    Usage:
        invalidate(["users"])
    """
    default_registry.invalidate(tags)
