"""${NAME} references inside policy-file values, resolved from os.environ."""

import os
import re
from collections.abc import Callable, Iterator
from typing import TypeAlias

_REFERENCE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

RawValue: TypeAlias = str | int | float | bool | None | list["RawValue"] | dict[str, "RawValue"]


def collect_missing_vars(data: RawValue) -> list[str]:
    """Unset names referenced anywhere in *data*, in first-seen order."""
    missing: dict[str, None] = {}
    for text in _strings(data):
        for name in _REFERENCE.findall(text):
            if name not in os.environ:
                missing.setdefault(name)
    return list(missing)


def interpolate(data: RawValue) -> RawValue:
    """Resolve every reference; a value that is one lone reference may become a number.

    Every referenced name must be set; check with `collect_missing_vars` first.
    """
    return _map_strings(data, _resolve)


def _strings(data: RawValue) -> Iterator[str]:
    if isinstance(data, str):
        yield data
    elif isinstance(data, list):
        for item in data:
            yield from _strings(item)
    elif isinstance(data, dict):
        for value in data.values():
            yield from _strings(value)


def _map_strings(data: RawValue, convert: Callable[[str], RawValue]) -> RawValue:
    if isinstance(data, str):
        return convert(data)
    if isinstance(data, list):
        return [_map_strings(item, convert) for item in data]
    if isinstance(data, dict):
        return {key: _map_strings(value, convert) for key, value in data.items()}
    return data


def _resolve(text: str) -> RawValue:
    lone = _REFERENCE.fullmatch(text)
    if lone is not None:
        # "max: ${RETRIES}" should validate as an int, not the string "3".
        return _coerce(os.environ[lone.group(1)])
    return _REFERENCE.sub(lambda m: os.environ[m.group(1)], text)


def _coerce(text: str) -> RawValue:
    for convert in (int, float):
        try:
            return convert(text)
        except ValueError:
            continue
    return text
