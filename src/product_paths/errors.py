# SPDX-License-Identifier: MIT
"""Exception hierarchy for product identity and path resolution.

Two families exist. :class:`AlreadyRegisteredError` is recoverable and is
normally logged and ignored by callers. Subclasses of
:class:`HostEnvironmentError` describe a broken host (missing platform
directory mapping, unwritable filesystem, clock before the epoch) and are
never worth retrying.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - for type checkers only
    from product_paths.paths import DirectoryKind


class ProductPathsError(Exception):
    """Base class for all errors raised by ``product_paths``."""


class AlreadyRegisteredError(ProductPathsError):
    """Raised when a product identifier is registered a second time."""

    def __init__(self, current: str) -> None:
        super().__init__(f"Product name has already been set to '{current}'")
        self.current = current


class HostEnvironmentError(ProductPathsError, RuntimeError):
    """Non-retryable failure caused by the host environment."""


class UnresolvablePlatformPathError(HostEnvironmentError):
    """The platform cannot supply a base directory for the requested kind."""

    def __init__(self, kind: "DirectoryKind", label: str) -> None:
        super().__init__(f"Cannot find {label} for this platform")
        self.kind = kind


class DirectoryCreationError(HostEnvironmentError):
    """A directory could not be created or is occupied by something else."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to create directory {path}: {reason}")
        self.path = path


class ClockBeforeEpochError(HostEnvironmentError):
    """The system clock reports a time before 1970-01-01T00:00:00Z."""


class BuildInfoError(ProductPathsError):
    """Build provenance could not be loaded or collected."""


__all__ = [
    "AlreadyRegisteredError",
    "BuildInfoError",
    "ClockBeforeEpochError",
    "DirectoryCreationError",
    "HostEnvironmentError",
    "ProductPathsError",
    "UnresolvablePlatformPathError",
]
