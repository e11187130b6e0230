# SPDX-License-Identifier: MIT
"""Helpers for enabling Pydantic Logfire output."""

from __future__ import annotations

import os

import logfire

from product_paths.constants import ENV_PREFIX
from product_paths.runtime.settings import LogLevel


def _mask_token(value: str | None) -> str | None:
    """Return a masked representation of ``value`` for safe logging."""

    if not value:
        return None
    return f"{value[:4]}..."


def init_logfire(
    token: str | None = None,
    min_log_level: LogLevel = "warn",
    *,
    service_name: str = "product-paths",
    service_version: str | None = None,
) -> None:
    """Configure Logfire console output and optional remote export.

    Args:
        token: Optional Logfire API token. If omitted,
            ``PRODUCT_PATHS_LOGFIRE_TOKEN`` from the environment is used.
            Missing tokens keep telemetry local.
        min_log_level: Minimum level for console output.
        service_name: Service name attached to every span, typically the
            rendered product name.
        service_version: Version attached to every span.
    """

    key = token or os.getenv(f"{ENV_PREFIX}LOGFIRE_TOKEN")
    logfire.debug("Configuring logfire", token=_mask_token(key))
    logfire.configure(
        token=key,
        send_to_logfire="if-token-present",
        service_name=service_name,
        service_version=service_version,
        console=logfire.ConsoleOptions(
            min_log_level=min_log_level,
            show_project_link=False,
        ),
    )
