"""Cache key derivation."""

from collections.abc import Hashable, Mapping
from typing import Any

from tagmemo.types import HashFunction

KEY_SEPARATOR = "!"


class _InstanceKey:
    """Key used for zero-argument calls: stands for the receiver itself.

    Every store belongs to exactly one instance, so a single marker is
    enough and the instance never has to be hashable.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "<instance>"


INSTANCE_KEY = _InstanceKey()


def join_args(args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> str:
    """Stringify every argument and join with ``KEY_SEPARATOR``.

    Distinct arguments with the same string form collide: ``(1, "2")`` and
    ``("1", 2)`` both give ``"1!2"``.
    """
    parts = [str(arg) for arg in args]
    parts.extend(f"{name}={value}" for name, value in kwargs.items())
    return KEY_SEPARATOR.join(parts)


def derive_key(
    instance: Any,
    args: tuple[Any, ...],
    kwargs: Mapping[str, Any],
    *,
    hash_function: HashFunction = None,
) -> Hashable:
    """Compute the lookup key for one call.

    Args:
        instance: The receiver the computation is bound to
        args: Positional arguments, excluding the receiver
        kwargs: Keyword arguments
        hash_function: ``True`` to join all arguments, a callable invoked
            as ``hash_function(instance, *args, **kwargs)``, or None

    Returns:
        The key under which the result is stored
    """
    if hash_function is True:
        return join_args(args, kwargs)
    if hash_function:
        return hash_function(instance, *args, **kwargs)
    if args:
        return args[0]
    if kwargs:
        return next(iter(kwargs.values()))
    return INSTANCE_KEY
