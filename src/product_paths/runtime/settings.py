# SPDX-License-Identifier: MIT
"""Centralised configuration for the ``product-paths`` tooling.

This module exposes :class:`Settings`, a ``pydantic-settings`` model populated
from ``PRODUCT_PATHS_*`` environment variables and, when present, a ``.env``
file in the working directory. Library calls never read settings implicitly
except for the build provenance default location; the command-line interface
uses them to decide which product to describe and how chatty to be.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from product_paths.constants import DEFAULT_PRODUCT_NAME, ENV_PREFIX

LogLevel = Literal["fatal", "error", "warn", "notice", "info", "debug", "trace"]


class Settings(BaseSettings):
    """Runtime configuration sourced from the environment."""

    product_base: str = Field(
        DEFAULT_PRODUCT_NAME, description="Base segment of the product name."
    )
    product_extensions: list[str] = Field(
        default_factory=list,
        description="Extension segments appended to the base, in order.",
    )
    product_version: str | None = Field(
        None, description="Explicit product version; package metadata otherwise."
    )
    product_package: str | None = Field(
        None, description="Distribution whose installed version is reported."
    )
    build_info_path: Path | None = Field(
        None, description="JSON file holding build provenance, if any."
    )
    log_level: LogLevel = Field("warn", description="Logging verbosity level.")
    logfire_token: str | None = Field(
        None, description="Logfire authentication token, if available.", repr=False
    )

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")


def load_settings() -> Settings:
    """Load and validate settings from the environment.

    A ``.env`` file in the working directory is loaded automatically when
    present; real environment variables take precedence over it.

    Returns:
        Settings: Validated configuration.

    Raises:
        RuntimeError: If any configured value is invalid.
    """
    env_file_path = Path(".env")
    env_file = env_file_path if env_file_path.exists() else None
    try:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(map(str, error['loc']))}: {error['msg']}"
            for error in exc.errors()
        )
        raise RuntimeError(f"Invalid configuration: {details}") from exc


__all__ = ["LogLevel", "Settings", "load_settings"]
