"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``USECASE_*`` prefix
  3. TOML file    — ``usecase.toml`` discovered via walk-up
  4. Code defaults
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from usecase.config.discovery import find_config


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``usecase.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class UseCaseSettings(BaseSettings):
    """Runtime settings for the usecase CLI and logging.

    Attributes:
        verbose: DEBUG logging for ``usecase`` loggers and execution telemetry.
        log_json: Structured JSON log lines on stderr.
        json_output: Render outcomes as JSON.
        telemetry: Collect span timings into ``Outcome.meta`` without
            turning on debug logging.
        config_path: The TOML file the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "USECASE_",
        "extra": "ignore",
    }

    verbose: bool = False
    log_json: bool = False
    json_output: bool = False
    telemetry: bool = False
    config_path: Path | None = None

    @property
    def telemetry_enabled(self) -> bool:
        return self.telemetry or self.verbose

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> UseCaseSettings:
        """Construct settings from a CLI invocation.

        Uses *config_path* when given, else discovers ``usecase.toml`` by
        walking up from *start*. CLI flags that are False are dropped so
        they don't mask env vars or TOML values.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        overrides = {k: v for k, v in cli_flags.items() if v}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
