"""Duration parsing utilities."""

import re

from tagmemo.types import Duration

_DURATION_PATTERN = re.compile(r"^(\d+)(ms|s|m|h|d)$")
_UNITS: dict[str, int] = {
    "ms": 1,
    "s": 1000,
    "m": 60_000,
    "h": 3_600_000,
    "d": 86_400_000,
}


def parse_duration(duration: Duration | None) -> int:
    """Parse a duration to milliseconds.

    Integers pass through (negative values included, callers treat anything
    not positive as "never expires"). ``None`` means no duration and yields 0.
    """
    if duration is None:
        return 0
    if isinstance(duration, bool):
        raise TypeError(f"Invalid duration: {duration!r}")
    if isinstance(duration, int):
        return duration
    if not isinstance(duration, str):
        raise TypeError(f"Invalid duration: {duration!r}")

    match = _DURATION_PATTERN.match(duration.strip())
    if not match:
        raise ValueError(f"Invalid duration: {duration!r}")

    value, unit = match.groups()
    return int(value) * _UNITS[unit]
