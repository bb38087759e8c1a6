"""Structlog implementation of the ConfigObserver port."""

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, path: str, fields: list[str]) -> None:
        self._log.info("config.loaded", path=path, fields=fields)

    def config_long_delay_warning(self, delay_seconds: float, timeout_seconds: float) -> None:
        self._log.warning(
            "config.long_delay_warning",
            delay_seconds=delay_seconds,
            timeout_seconds=timeout_seconds,
            message="Delay is not shorter than the overall timeout; no attempt can run",
        )
