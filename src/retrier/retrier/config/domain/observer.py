"""ConfigObserver — events raised while loading and checking a retry policy."""

from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(self, path: str, fields: list[str]) -> None: ...

    def config_long_delay_warning(self, delay_seconds: float, timeout_seconds: float) -> None: ...
