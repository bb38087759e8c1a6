"""YAML policy-file loader producing PolicySettings for the CLI to merge under its flags."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from retrier.config.domain.observer import ConfigObserver
from retrier.config.domain.settings import PolicySettings
from retrier.config.infrastructure.env_interpolation import collect_missing_vars, interpolate
from retrier.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)


class YamlConfigLoader:
    """Reads a retry policy file; only keys present in the file end up set."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> PolicySettings:
        """
        Read *path* into PolicySettings after ${ENV_VAR} substitution.

        An empty file is valid and yields settings with no fields set.

        Raises:
            ConfigLoadError: if the file does not exist or cannot be read.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if the YAML is malformed, is not a mapping, has
                unknown keys, or holds out-of-range values.
        """
        raw = _parse_yaml(path=path)
        _check_missing_env_vars(raw=raw)
        settings = _build_settings(raw=interpolate(raw))
        self._observer.config_loaded(
            path=str(path),
            fields=sorted(settings.model_fields_set),
        )
        return settings


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigValidationError(reason=f"invalid YAML: {exc}") from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigValidationError(
            reason=f"expected a mapping at the top level, got {type(raw).__name__}"
        )
    return raw


def _check_missing_env_vars(raw: Any) -> None:
    """Raise MissingEnvVarsError if any ${ENV_VAR} references in raw are unset."""
    missing = collect_missing_vars(raw)
    if missing:
        raise MissingEnvVarsError(missing)


def _build_settings(raw: Any) -> PolicySettings:
    try:
        return PolicySettings.model_validate(raw)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigValidationError(reason=problems) from exc
