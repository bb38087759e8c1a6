"""Go-style duration strings ("1h2m3.5s", "300ms") to and from seconds."""

import re

from retrier.core.errors import RetrierError

_NANOS_PER_UNIT: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class InvalidDurationError(RetrierError, ValueError):
    """Raised when a duration string cannot be parsed."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f'Failed to parse duration: invalid duration "{value}"')


def parse_duration(value: str) -> float:
    """Parse a duration such as ``"1h30m"``, ``"1.5s"`` or ``"0"`` into seconds.

    A sequence of decimal numbers each followed by a unit is accepted, the
    same grammar as Go's ``time.ParseDuration``. Negative durations are
    rejected since nothing in a retry policy can be negative.

    Raises:
        InvalidDurationError: if *value* is empty, negative, or malformed.
    """
    text = value.strip()
    if text in ("0", "+0"):
        return 0.0
    if text.startswith("+"):
        text = text[1:]
    if not text:
        raise InvalidDurationError(value)

    total_nanos = 0.0
    position = 0
    while position < len(text):
        match = _COMPONENT.match(text, position)
        if match is None:
            raise InvalidDurationError(value)
        number, unit = match.groups()
        total_nanos += float(number) * _NANOS_PER_UNIT[unit]
        position = match.end()
    return total_nanos / 1_000_000_000


def format_duration(seconds: float) -> str:
    """Render *seconds* the way Go prints a ``time.Duration``.

    >>> format_duration(0)
    '0s'
    >>> format_duration(0.0015)
    '1.5ms'
    >>> format_duration(3723.5)
    '1h2m3.5s'
    """
    nanos = round(seconds * 1_000_000_000)
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)

    if nanos < 1_000_000_000:
        if nanos < 1_000:
            return f"{sign}{nanos}ns"
        if nanos < 1_000_000:
            return f"{sign}{_decimal(nanos, 3)}µs"
        return f"{sign}{_decimal(nanos, 6)}ms"

    seconds_part = _decimal(nanos % (60 * 1_000_000_000), 9) + "s"
    total_minutes = nanos // (60 * 1_000_000_000)
    if total_minutes == 0:
        return f"{sign}{seconds_part}"
    hours, minutes = divmod(total_minutes, 60)
    if hours == 0:
        return f"{sign}{minutes}m{seconds_part}"
    return f"{sign}{hours}h{minutes}m{seconds_part}"


def round_duration(seconds: float, multiple: float) -> float:
    """Round *seconds* to the nearest *multiple*, halfway values away from zero."""
    nanos = round(seconds * 1_000_000_000)
    step = round(multiple * 1_000_000_000)
    if step <= 0:
        return seconds
    quotient, remainder = divmod(abs(nanos), step)
    if remainder * 2 >= step:
        quotient += 1
    rounded = quotient * step
    return (rounded if nanos >= 0 else -rounded) / 1_000_000_000


def _decimal(value: int, digits: int) -> str:
    whole, fraction = divmod(value, 10**digits)
    fraction_text = f"{fraction:0{digits}d}".rstrip("0")
    if fraction_text:
        return f"{whole}.{fraction_text}"
    return str(whole)
