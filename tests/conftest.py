# SPDX-License-Identifier: MIT
"""Test configuration for product-paths.

Every test runs in its own working directory with a fresh global registry and
without ``PRODUCT_PATHS_*`` variables leaking in from the developer's shell.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import logfire
import pytest

from product_paths.models import AgentInfo, BuildProvenance, GitInfo, OsInfo
from product_paths.paths import DirectoryKind
from product_paths.product import ProductIdentifier
from product_paths.runtime import registry


@pytest.fixture(scope="session", autouse=True)
def _quiet_logfire():
    """Keep telemetry local and off the console."""
    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path):
    """Start each test from an empty directory and a clean environment."""
    for name in list(os.environ):
        if name.startswith("PRODUCT_PATHS_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def fresh_registry(monkeypatch) -> registry.GlobalRegistry:
    """Replace the process-wide registry with an empty one for the test."""
    cell = registry.GlobalRegistry()
    monkeypatch.setattr(registry, "GLOBAL_REGISTRY", cell)
    return cell


@pytest.fixture()
def platform_root(tmp_path) -> Path:
    """Directory standing in for the user's platform directories."""
    root = tmp_path / "platform"
    root.mkdir()
    return root


@pytest.fixture()
def fake_provider(platform_root) -> Callable[[DirectoryKind], Path | None]:
    """Directory provider mapping every kind below :func:`platform_root`."""

    def provider(kind: DirectoryKind) -> Path | None:
        return platform_root / kind.value

    return provider


@pytest.fixture()
def build() -> BuildProvenance:
    """Representative build provenance record."""
    return BuildProvenance(
        version="1.2.3",
        git=GitInfo(
            branch="main",
            commit_hash="7d712abc048a1e0e8f3f4c5d6b7a8c9d0e1f2a3b",
            commit_short_hash="7d712ab",
            dirty=True,
            commit_message="  fix: login bug\n",
            author_name="Charlie Thomson",
            author_email="charlie@thmsn.dev",
            tags=("v1.2.3", "latest"),
            remote_url="git@github.com:thmsn/app.git",
            commit_count=42,
        ),
        agent=AgentInfo(
            hostname="build-01.local",
            os=OsInfo(
                name="Darwin",
                version="25.0.0",
                long_version="macOS 26.0",
                architecture="arm64",
            ),
            ncpus=14,
            memory="25.77 GB",
        ),
    )


@pytest.fixture()
def product() -> ProductIdentifier:
    """Plain product without build provenance."""
    return ProductIdentifier.new("dev.thmsn.app", "0.1.0")
