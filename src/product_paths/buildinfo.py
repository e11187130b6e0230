# SPDX-License-Identifier: MIT
"""Load, collect and persist build provenance records.

A release pipeline calls :func:`collect_build_info` in the source checkout and
stores the result with :func:`write_build_info`; the running application later
reads it back with :func:`load_build_info` (usually through
:func:`product_paths.product.declare_product`). A missing file is normal for
development checkouts and yields ``None``.
"""

from __future__ import annotations

import os
import platform
import socket
import subprocess
from pathlib import Path

import logfire
from pydantic import ValidationError

from .errors import BuildInfoError
from .models import AgentInfo, BuildProvenance, GitInfo, OsInfo
from .runtime.settings import load_settings
from .utils import ErrorHandler, LoggingErrorHandler

BUILD_INFO_FILENAME = "build_info.json"

_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def human_bytes(size: int) -> str:
    """Return ``size`` in decimal units with two decimals, e.g. ``25.77 GB``."""
    value = float(size)
    for unit in _UNITS[:-1]:
        text = f"{value:.2f}"
        # compare the rounded text so 999.999 KB becomes 1.00 MB
        if float(text) < 1000:
            return f"{text} {unit}"
        value /= 1000
    return f"{value:.2f} {_UNITS[-1]}"


def default_build_info_path() -> Path:
    """Return the configured build info location, else ``./build_info.json``."""
    configured = load_settings().build_info_path
    return configured if configured is not None else Path(BUILD_INFO_FILENAME)


def load_build_info(
    path: Path | None = None,
    *,
    optional: bool = True,
    error_handler: ErrorHandler | None = None,
) -> BuildProvenance | None:
    """Return the build provenance stored at ``path``.

    Args:
        path: JSON file to read; defaults to :func:`default_build_info_path`.
        optional: Return ``None`` instead of failing when the file is missing.
        error_handler: Receives read and validation failures.

    Raises:
        BuildInfoError: If the file is missing and not ``optional``, cannot be
            read, or does not match the :class:`BuildProvenance` schema.
    """
    handler = error_handler or LoggingErrorHandler()
    target = path if path is not None else default_build_info_path()
    with logfire.span("buildinfo.load", path=str(target)):
        if not target.exists():
            if optional:
                logfire.debug("No build info present", path=str(target))
                return None
            handler.handle(f"Build info not found: {target}")
            raise BuildInfoError(f"Build info file not found: {target}")
        try:
            raw = target.read_text(encoding="utf-8")
            return BuildProvenance.model_validate_json(raw)
        except (OSError, ValidationError) as exc:
            handler.handle(f"Error reading build info {target}", exc)
            raise BuildInfoError(f"Failed to load build info: {exc}") from exc


def write_build_info(
    info: BuildProvenance,
    path: Path,
    *,
    error_handler: ErrorHandler | None = None,
) -> Path:
    """Serialise ``info`` as indented JSON at ``path`` and return ``path``.

    Raises:
        BuildInfoError: If the file or its parent directories cannot be written.
    """
    handler = error_handler or LoggingErrorHandler()
    with logfire.span("buildinfo.write", path=str(path)):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(info.model_dump_json(indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            handler.handle(f"Error writing build info {path}", exc)
            raise BuildInfoError(f"Failed to write build info: {exc}") from exc
        return path


def _git(repo: Path, *args: str) -> str | None:
    """Return stripped stdout of ``git args`` or ``None`` when it fails."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=repo,
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        logfire.debug("git command failed", args=list(args), error=str(exc))
        return None
    return result.stdout.strip()


def collect_git_info(repo_dir: Path | str = ".") -> GitInfo:
    """Return the version-control state of the checkout at ``repo_dir``.

    Raises:
        BuildInfoError: If ``repo_dir`` is not a git checkout with a commit.
    """
    repo = Path(repo_dir)
    commit_hash = _git(repo, "rev-parse", "HEAD")
    short_hash = _git(repo, "rev-parse", "--short", "HEAD")
    if not commit_hash or not short_hash:
        raise BuildInfoError(f"Not a git checkout with commits: {repo}")
    branch = _git(repo, "rev-parse", "--abbrev-ref", "HEAD")
    status = _git(repo, "status", "--porcelain")
    tags = _git(repo, "tag", "--points-at", "HEAD") or ""
    count = _git(repo, "rev-list", "--count", "HEAD")
    return GitInfo(
        branch=branch if branch and branch != "HEAD" else None,
        commit_hash=commit_hash,
        commit_short_hash=short_hash,
        dirty=bool(status),
        commit_message=_git(repo, "log", "-1", "--format=%B") or None,
        author_name=_git(repo, "log", "-1", "--format=%an") or None,
        author_email=_git(repo, "log", "-1", "--format=%ae") or None,
        tags=tuple(tag for tag in tags.splitlines() if tag),
        remote_url=_git(repo, "remote", "get-url", "origin") or None,
        commit_count=int(count) if count and count.isdigit() else None,
    )


def _os_long_version() -> str:
    system = platform.system()
    if system == "Darwin":
        release = platform.mac_ver()[0]
        return f"macOS {release}" if release else "macOS"
    if system == "Windows":
        release, version, *_ = platform.win32_ver()
        return f"Windows {release} ({version})" if release else "Windows"
    try:
        return platform.freedesktop_os_release().get("PRETTY_NAME", system)
    except OSError:
        return f"{system} {platform.release()}".strip()


def _total_memory() -> int | None:
    try:
        return os.sysconf("SC_PAGE_SIZE") * os.sysconf("SC_PHYS_PAGES")
    except (AttributeError, ValueError, OSError):
        return None


def collect_agent_info() -> AgentInfo:
    """Return a description of the machine running the build."""
    memory = _total_memory()
    return AgentInfo(
        hostname=socket.gethostname(),
        os=OsInfo(
            name=platform.system(),
            version=platform.release(),
            long_version=_os_long_version(),
            architecture=platform.machine(),
        ),
        ncpus=os.cpu_count() or 0,
        memory=human_bytes(memory) if memory and memory > 0 else "",
    )


def collect_build_info(
    repo_dir: Path | str = ".", *, version: str | None = None
) -> BuildProvenance:
    """Collect provenance for the checkout at ``repo_dir`` on this machine.

    Args:
        repo_dir: Root of the git checkout being built.
        version: Package version to record alongside the provenance.

    Raises:
        BuildInfoError: If ``repo_dir`` is not a usable git checkout.
    """
    with logfire.span("buildinfo.collect", repo=str(repo_dir)):
        info = BuildProvenance(
            version=version,
            git=collect_git_info(repo_dir),
            agent=collect_agent_info(),
        )
        logfire.info(
            "Collected build info",
            commit=info.git.commit_short_hash,
            dirty=info.git.dirty,
        )
        return info


__all__ = [
    "BUILD_INFO_FILENAME",
    "collect_agent_info",
    "collect_build_info",
    "collect_git_info",
    "default_build_info_path",
    "human_bytes",
    "load_build_info",
    "write_build_info",
]
