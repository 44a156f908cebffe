"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``MTACTL_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``mtactl.toml`` found by walking up from the cwd,
     or named by ``MTACTL_CONFIG`` / ``--config``
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import os
import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from mtactl.config.models import ManifestConfig, MutationConfig

CONFIG_FILENAME = "mtactl.toml"
CONFIG_ENV_VAR = "MTACTL_CONFIG"

# TOML path chosen by from_cli(), read back by settings_customise_sources().
_toml_path: ContextVar[Path | None] = ContextVar("mtactl_toml_path", default=None)


def find_config(start: Path | None = None) -> Path | None:
    """Locate the config file for an invocation started in *start*.

    ``MTACTL_CONFIG`` wins when set (and is ignored if it names no file);
    otherwise the nearest ``mtactl.toml`` in *start* or an ancestor.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings sections from a TOML file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is not None and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class MtaSettings(BaseSettings):
    """Settings for one mtactl invocation, frozen after construction.

    Attributes:
        config_path: The TOML file that was loaded, if any.
        mutation: Pipeline policy (default fingerprint check, lock name).
        manifest: Manifest defaults (path used when ``--path`` is omitted).
    """

    model_config = {
        "frozen": True,
        "env_prefix": "MTACTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    mutation: MutationConfig = Field(default_factory=MutationConfig)
    manifest: ManifestConfig = Field(default_factory=ManifestConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _toml_path.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> MtaSettings:
        """Build settings for a CLI invocation.

        An explicit *config_path* that names no file is ignored, the same as
        an unset one would be after discovery fails.
        """
        toml_path: Path | None
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(start)

        token = _toml_path.set(toml_path)
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _toml_path.reset(token)

    def resolve_manifest(self, path: str | None) -> Path:
        """Return *path*, or the configured default manifest path."""
        return Path(path) if path else Path(self.manifest.default_path)
