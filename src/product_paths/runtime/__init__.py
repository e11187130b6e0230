# SPDX-License-Identifier: MIT
"""Runtime package exposing the product registry and settings."""

from .registry import GLOBAL_REGISTRY, GlobalRegistry, current, register
from .settings import Settings, load_settings

__all__ = [
    "GLOBAL_REGISTRY",
    "GlobalRegistry",
    "Settings",
    "current",
    "load_settings",
    "register",
]
