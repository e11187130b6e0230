# SPDX-License-Identifier: MIT
"""Application directories and file paths namespaced by product name.

Every directory returned here lives under a platform base directory (as
reported by a *directory provider*) followed by the rendered name of the
active product, and is created on demand::

    config_path("database")
    # Linux:   ~/.local/share/{product}/configs/database.toml
    # macOS:   ~/Library/Application Support/{product}/configs/database.toml
    # Windows: C:\\Users\\{user}\\AppData\\Local\\{product}\\configs\\database.toml

The active product is the identifier given to :class:`PathResolver`, else the
one registered in :mod:`product_paths.runtime.registry`, else
:data:`~product_paths.constants.DEFAULT_PRODUCT_NAME`.

Failures here indicate a broken host (no platform mapping for a directory
kind, an unwritable filesystem, a clock set before 1970) and surface as
:class:`~product_paths.errors.HostEnvironmentError` subclasses.
"""

from __future__ import annotations

import os
import sys
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Mapping

import logfire
import platformdirs

from .constants import CONFIGS_DIRNAME, DEFAULT_PRODUCT_NAME, LOGS_DIRNAME
from .errors import (
    ClockBeforeEpochError,
    DirectoryCreationError,
    UnresolvablePlatformPathError,
)
from .product import ProductIdentifier
from .runtime import registry
from .utils import ErrorHandler, LoggingErrorHandler


class DirectoryKind(str, Enum):
    """Logical categories of per-user storage locations."""

    AUDIO = "audio"
    CACHE = "cache"
    CONFIG = "config"
    CONFIG_LOCAL = "config-local"
    DATA = "data"
    DATA_LOCAL = "data-local"
    DESKTOP = "desktop"
    DOCUMENTS = "documents"
    DOWNLOADS = "downloads"
    EXECUTABLES = "executables"
    FONTS = "fonts"
    HOME = "home"
    PICTURES = "pictures"
    PREFERENCES = "preferences"
    PUBLIC = "public"
    RUNTIME = "runtime"
    STATE = "state"
    TEMPLATES = "templates"
    VIDEOS = "videos"


DirectoryProvider = Callable[[DirectoryKind], Path | None]
Clock = Callable[[], float]


def _executable_dir() -> Path | None:
    if sys.platform in ("win32", "darwin"):
        return None
    bin_home = os.environ.get("XDG_BIN_HOME")
    return Path(bin_home) if bin_home else Path.home() / ".local" / "bin"


def _font_dir() -> Path | None:
    if sys.platform == "win32":
        return None
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Fonts"
    return platformdirs.user_data_path() / "fonts"


def _preference_dir() -> Path | None:
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Preferences"
    return platformdirs.user_config_path(roaming=True)


def _public_dir() -> Path | None:
    if sys.platform == "win32":
        public = os.environ.get("PUBLIC")
        return Path(public) if public else None
    return Path.home() / "Public"


def _template_dir() -> Path | None:
    if sys.platform == "darwin":
        return None
    if sys.platform == "win32":
        roaming = platformdirs.user_config_path(roaming=True)
        return roaming / "Microsoft" / "Windows" / "Templates"
    return Path.home() / "Templates"


# kind -> (base directory lookup, label used in error messages)
_PLATFORM_DIRECTORIES: Mapping[
    DirectoryKind, tuple[Callable[[], Path | None], str]
] = {
    DirectoryKind.AUDIO: (platformdirs.user_music_path, "audio directory"),
    DirectoryKind.CACHE: (platformdirs.user_cache_path, "cache directory"),
    DirectoryKind.CONFIG: (
        lambda: platformdirs.user_config_path(roaming=True),
        "config directory",
    ),
    DirectoryKind.CONFIG_LOCAL: (
        platformdirs.user_config_path,
        "local config directory",
    ),
    DirectoryKind.DATA: (
        lambda: platformdirs.user_data_path(roaming=True),
        "data directory",
    ),
    DirectoryKind.DATA_LOCAL: (platformdirs.user_data_path, "local data directory"),
    DirectoryKind.DESKTOP: (platformdirs.user_desktop_path, "desktop directory"),
    DirectoryKind.DOCUMENTS: (
        platformdirs.user_documents_path,
        "document directory",
    ),
    DirectoryKind.DOWNLOADS: (
        platformdirs.user_downloads_path,
        "download directory",
    ),
    DirectoryKind.EXECUTABLES: (_executable_dir, "executable directory"),
    DirectoryKind.FONTS: (_font_dir, "font directory"),
    DirectoryKind.HOME: (Path.home, "home directory"),
    DirectoryKind.PICTURES: (platformdirs.user_pictures_path, "picture directory"),
    DirectoryKind.PREFERENCES: (_preference_dir, "preference directory"),
    DirectoryKind.PUBLIC: (_public_dir, "public directory"),
    DirectoryKind.RUNTIME: (platformdirs.user_runtime_path, "runtime directory"),
    DirectoryKind.STATE: (platformdirs.user_state_path, "state directory"),
    DirectoryKind.TEMPLATES: (_template_dir, "template directory"),
    DirectoryKind.VIDEOS: (platformdirs.user_videos_path, "video directory"),
}


def directory_label(kind: DirectoryKind) -> str:
    """Return the human-readable label for ``kind``."""
    return _PLATFORM_DIRECTORIES[kind][1]


def platform_directory(kind: DirectoryKind) -> Path | None:
    """Return the current user's base directory for ``kind``.

    ``None`` is returned when the platform has no such directory or the home
    directory cannot be determined.
    """
    lookup, label = _PLATFORM_DIRECTORIES[kind]
    try:
        base = lookup()
    except (KeyError, RuntimeError) as exc:
        logfire.debug("Platform lookup failed", kind=kind.value, error=str(exc))
        return None
    if base is None:
        logfire.debug("Platform has no directory", label=label)
        return None
    return Path(base)


def ensure_directory(path: Path, error_handler: ErrorHandler | None = None) -> Path:
    """Create ``path`` and any missing parents, returning ``path``.

    A directory that already exists, or that another thread or process creates
    concurrently, is accepted as-is.

    Raises:
        DirectoryCreationError: If ``path`` exists but is not a directory, or
            it cannot be created.
    """
    handler = error_handler or LoggingErrorHandler()
    if path.is_dir():
        return path
    try:
        path.mkdir(parents=True, exist_ok=True)
    except FileExistsError as exc:
        # exist_ok only covers directories
        handler.handle(f"Path is not a directory: {path}", exc)
        raise DirectoryCreationError(
            path, "path exists and is not a directory"
        ) from exc
    except OSError as exc:
        handler.handle(f"Failed to create directory {path}", exc)
        raise DirectoryCreationError(path, str(exc)) from exc
    logfire.debug("Created directory", path=str(path))
    return path


def epoch_seconds(clock: Clock = time.time) -> int:
    """Return the whole seconds elapsed since the Unix epoch.

    Raises:
        ClockBeforeEpochError: If ``clock`` reports a time before the epoch.
    """
    now = clock()
    if now < 0:
        raise ClockBeforeEpochError(f"System clock reports {now}s before the epoch")
    return int(now)


class PathResolver:
    """Derive product-namespaced directories and files.

    Args:
        product: Identifier naming the namespace. When ``None`` the globally
            registered product is used, falling back to the default name.
        provider: Directory provider mapping a kind to a base path.
        clock: Source of the current Unix time for log file names.
        error_handler: Receives IO failures before they are raised.
    """

    def __init__(
        self,
        product: ProductIdentifier | None = None,
        *,
        provider: DirectoryProvider = platform_directory,
        clock: Clock = time.time,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        self._product = product
        self._provider = provider
        self._clock = clock
        self._error_handler = error_handler or LoggingErrorHandler()

    @property
    def product(self) -> ProductIdentifier | None:
        """Return the explicit product, else the registered one."""
        if self._product is not None:
            return self._product
        return registry.current()

    def namespace(self) -> str:
        """Return the directory segment appended to every base path."""
        product = self.product
        return product.render_name() if product is not None else DEFAULT_PRODUCT_NAME

    def base_directory(self, kind: DirectoryKind | str) -> Path:
        """Return the provider's base path for ``kind`` without creating it.

        Raises:
            UnresolvablePlatformPathError: If the provider has no path.
        """
        kind = DirectoryKind(kind)
        base = self._provider(kind)
        if base is None:
            label = directory_label(kind)
            self._error_handler.handle(f"Cannot find {label}")
            raise UnresolvablePlatformPathError(kind, label)
        return Path(base)

    def application_directory(self, kind: DirectoryKind | str) -> Path:
        """Return ``<base for kind>/<product name>``, creating it if needed."""
        kind = DirectoryKind(kind)
        with logfire.span("paths.application_directory", kind=kind.value):
            path = ensure_directory(
                self.base_directory(kind) / self.namespace(), self._error_handler
            )
            logfire.debug("Resolved application directory", path=str(path))
            return path

    def configs_root(self) -> Path:
        """Return the directory holding per-module configuration files."""
        with logfire.span("paths.configs_root"):
            root = self.application_directory(DirectoryKind.DATA_LOCAL)
            return ensure_directory(root / CONFIGS_DIRNAME, self._error_handler)

    def config_path(self, module: str) -> Path:
        """Return the TOML configuration file path for ``module``.

        ``module`` is used verbatim as the file stem; the file itself is not
        created.
        """
        path = self.configs_root() / f"{module}.toml"
        logfire.debug("Resolved config path", module=module, path=str(path))
        return path

    def logs_root(self) -> Path:
        """Return the directory holding log files."""
        with logfire.span("paths.logs_root"):
            root = self.application_directory(DirectoryKind.DATA_LOCAL)
            return ensure_directory(root / LOGS_DIRNAME, self._error_handler)

    def log_path(self) -> Path:
        """Return a new ``log_<epoch>.json`` path inside :meth:`logs_root`."""
        path = self.logs_root() / f"log_{epoch_seconds(self._clock)}.json"
        logfire.debug("Resolved log path", path=str(path))
        return path

    def unresolvable_kinds(
        self, kinds: Iterable[DirectoryKind] = tuple(DirectoryKind)
    ) -> list[DirectoryKind]:
        """Return the kinds the provider cannot map, without creating anything."""
        missing = []
        for kind in kinds:
            try:
                self.base_directory(kind)
            except UnresolvablePlatformPathError:
                missing.append(kind)
        return missing


def application_directory(kind: DirectoryKind | str) -> Path:
    """Return the active product's directory for ``kind``."""
    return PathResolver().application_directory(kind)


def configs_root() -> Path:
    """Return the active product's configuration directory."""
    return PathResolver().configs_root()


def config_path(module: str) -> Path:
    """Return the active product's configuration file for ``module``."""
    return PathResolver().config_path(module)


def logs_root() -> Path:
    """Return the active product's log directory."""
    return PathResolver().logs_root()


def log_path() -> Path:
    """Return a new timestamped log file path for the active product."""
    return PathResolver().log_path()


__all__ = [
    "DirectoryKind",
    "DirectoryProvider",
    "PathResolver",
    "application_directory",
    "config_path",
    "configs_root",
    "directory_label",
    "ensure_directory",
    "epoch_seconds",
    "log_path",
    "logs_root",
    "platform_directory",
]
