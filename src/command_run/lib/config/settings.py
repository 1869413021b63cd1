"""Announcement policy loader (TOML file plus environment overrides)."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import cast

from command_run.lib.command import LogTo

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AnnounceConfig:
    """Where and whether commands are announced before and after running."""

    log_command: bool = True
    log_to: LogTo = LogTo.STDOUT
    log_output_on_error: bool = False


_ENV_OVERRIDE_MAP: dict[str, str] = {
    "COMMAND_RUN_LOG_COMMAND": "log_command",
    "COMMAND_RUN_LOG_TO": "log_to",
    "COMMAND_RUN_LOG_OUTPUT_ON_ERROR": "log_output_on_error",
}

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})
_CONFIG_SECTION = "announce"


def _coerce_log_to(*, raw_value: object, source: str) -> LogTo:
    if not isinstance(raw_value, str):
        raise ValueError(
            f"Invalid value for '{source}': expected str, got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    normalized = raw_value.strip().lower()
    try:
        return LogTo(normalized)
    except ValueError as error:
        raise ValueError(
            f"Invalid value for '{source}': expected one of "
            f"{sorted(item.value for item in LogTo)}, got {raw_value!r}."
        ) from error


def _coerce_file_value(*, field_name: str, raw_value: object, source: str) -> object:
    if field_name == "log_to":
        return _coerce_log_to(raw_value=raw_value, source=source)
    if not isinstance(raw_value, bool):
        raise ValueError(
            f"Invalid value for '{source}': expected bool, got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    return raw_value


def _coerce_env_value(*, field_name: str, raw_value: str, env_name: str) -> object:
    if field_name == "log_to":
        return _coerce_log_to(raw_value=raw_value, source=env_name)
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(
        f"Invalid environment override '{env_name}': expected bool, got {raw_value!r}."
    )


def _default_values() -> dict[str, object]:
    defaults = AnnounceConfig()
    return {field.name: getattr(defaults, field.name) for field in fields(AnnounceConfig)}


def _apply_toml_payload(
    *,
    values: dict[str, object],
    payload: dict[str, object],
    path: Path,
) -> None:
    for key, raw_value in payload.items():
        if key != _CONFIG_SECTION:
            logger.warning("Ignoring unknown command-run config key '%s'.", key)
            continue
        if not isinstance(raw_value, dict):
            raise ValueError(f"Invalid value for '{key}' in '{path}': expected table.")
        for section_key, section_value in cast("dict[str, object]", raw_value).items():
            if section_key not in values:
                logger.warning(
                    "Ignoring unknown command-run config key '%s.%s'.",
                    key,
                    section_key,
                )
                continue
            values[section_key] = _coerce_file_value(
                field_name=section_key,
                raw_value=section_value,
                source=f"{key}.{section_key}",
            )


def _apply_env_overrides(values: dict[str, object], environ: Mapping[str, str]) -> None:
    for env_name, field_name in _ENV_OVERRIDE_MAP.items():
        raw_value = environ.get(env_name)
        if raw_value is None:
            continue
        values[field_name] = _coerce_env_value(
            field_name=field_name,
            raw_value=raw_value,
            env_name=env_name,
        )


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AnnounceConfig:
    """Load the ``[announce]`` table from ``path`` and apply env overrides.

    A missing file is not an error. Environment variables win over the file.
    """

    values = _default_values()
    if path is not None and path.is_file():
        payload_obj = tomllib.loads(path.read_text(encoding="utf-8"))
        payload = cast("dict[str, object]", payload_obj)
        _apply_toml_payload(values=values, payload=payload, path=path)

    _apply_env_overrides(values, os.environ if environ is None else environ)
    return AnnounceConfig(
        log_command=cast("bool", values["log_command"]),
        log_to=cast("LogTo", values["log_to"]),
        log_output_on_error=cast("bool", values["log_output_on_error"]),
    )
