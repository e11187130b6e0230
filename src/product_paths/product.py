# SPDX-License-Identifier: MIT
"""Hierarchical product identifier.

A :class:`ProductIdentifier` names an application as a reverse-DNS style base
plus zero or more extension segments, e.g. ``dev.thmsn.myapp`` extended with
``worker`` renders as ``dev.thmsn.myapp.worker``. The rendered name doubles as
the on-disk namespace segment used by :mod:`product_paths.paths` and as the
``{NAME}`` placeholder of :mod:`product_paths.descriptor`.

Identifiers are immutable; :meth:`ProductIdentifier.with_extension` returns a
new instance so specialised identifiers can be derived from a shared base::

    BASE = declare_product("dev.thmsn.myapp", package="myapp")
    WORKER = BASE.with_extension("worker")
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as distribution_version
from pathlib import Path

import logfire
from pydantic import BaseModel, ConfigDict, Field

from .models import BuildProvenance

FALLBACK_VERSION = "0.0.0"


class ProductIdentifier(BaseModel):
    """Dotted product name with version and optional build provenance."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    base: str = Field(..., description="Root segment, e.g. 'dev.thmsn.myapp'.")
    extensions: tuple[str, ...] = Field(
        (), description="Segments appended after the base, in append order."
    )
    version: str = Field(..., description="Fallback version string.")
    build: BuildProvenance | None = Field(
        None, description="Build provenance recorded for this product."
    )

    @classmethod
    def new(
        cls, base: str, version: str, build: BuildProvenance | None = None
    ) -> "ProductIdentifier":
        """Return an identifier for ``base`` without extensions."""
        return cls(base=str(base), version=str(version), build=build)

    def with_extension(self, extension: str) -> "ProductIdentifier":
        """Return a copy of this identifier with ``extension`` appended."""
        return self.model_copy(
            update={"extensions": (*self.extensions, str(extension))}
        )

    def render_name(self) -> str:
        """Return ``base`` followed by each extension, dot separated."""
        return ".".join((self.base, *self.extensions))

    def resolved_version(self) -> str:
        """Return the build version when recorded, else :attr:`version`."""
        if self.build is not None and self.build.version is not None:
            return self.build.version
        return self.version

    def describe(self, fmt: str) -> str:
        """Render the descriptor template ``fmt`` for this identifier."""
        from .descriptor import render

        return render(fmt, self)

    def set_global(self) -> None:
        """Register this identifier as the process-wide product.

        Raises:
            AlreadyRegisteredError: If a product was registered before.
        """
        from .runtime.registry import register

        register(self)

    @staticmethod
    def get_global() -> "ProductIdentifier | None":
        """Return the process-wide product, or ``None`` when unset."""
        from .runtime.registry import current

        return current()

    def __str__(self) -> str:
        return self.render_name()


def _package_version(package: str) -> str:
    try:
        return distribution_version(package)
    except PackageNotFoundError:
        logfire.debug("Distribution not installed", package=package)
        return FALLBACK_VERSION


def declare_product(
    base: str,
    *,
    package: str | None = None,
    version: str | None = None,
    build_info: Path | str | None = None,
) -> ProductIdentifier:
    """Declare the base identifier of an application.

    The version is taken from ``version`` when given, otherwise from the
    installed metadata of distribution ``package``. Build provenance is read
    from ``build_info`` (or the configured default location) when such a file
    exists; its absence is not an error.

    Args:
        base: Reverse-DNS style root segment.
        package: Distribution whose installed version should be reported.
        version: Explicit version overriding ``package`` metadata.
        build_info: Optional path to a build provenance JSON file.

    Returns:
        The declared :class:`ProductIdentifier`.

    Raises:
        BuildInfoError: If a build provenance file exists but is invalid.
    """
    from .buildinfo import load_build_info

    if version is None:
        version = _package_version(package) if package else FALLBACK_VERSION
    build = load_build_info(Path(build_info) if build_info else None, optional=True)
    return ProductIdentifier.new(base, version, build)


__all__ = ["FALLBACK_VERSION", "ProductIdentifier", "declare_product"]
