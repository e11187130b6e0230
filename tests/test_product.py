# SPDX-License-Identifier: MIT
"""Tests for the hierarchical product identifier."""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from product_paths.buildinfo import write_build_info
from product_paths.product import FALLBACK_VERSION, ProductIdentifier, declare_product

segments = st.text(min_size=1, max_size=12)


def test_new_has_no_extensions() -> None:
    product = ProductIdentifier.new("dev.thmsn.app", "0.1.0")
    assert product.extensions == ()
    assert product.render_name() == "dev.thmsn.app"
    assert str(product) == "dev.thmsn.app"


def test_with_extension_chains_in_order() -> None:
    base = ProductIdentifier.new("dev.thmsn.ext", "0.1.0")
    app = base.with_extension("app")
    twice = app.with_extension("another_ext")
    assert app.render_name() == "dev.thmsn.ext.app"
    assert twice.render_name() == "dev.thmsn.ext.app.another_ext"


def test_with_extension_leaves_receiver_untouched() -> None:
    base = ProductIdentifier.new("dev.thmsn.ext", "0.1.0")
    first = base.with_extension("first")
    second = base.with_extension("second")
    assert base.extensions == ()
    assert first.extensions == ("first",)
    assert second.extensions == ("second",)


def test_identifier_is_frozen() -> None:
    product = ProductIdentifier.new("dev.thmsn.app", "0.1.0")
    with pytest.raises(ValidationError):
        product.base = "other"  # type: ignore[misc]


@given(base=segments, extensions=st.lists(segments, max_size=5))
def test_render_name_joins_segments(base: str, extensions: list[str]) -> None:
    """The rendered name is the base followed by each extension."""
    product = ProductIdentifier.new(base, "1.0")
    for extension in extensions:
        product = product.with_extension(extension)
    assert product.render_name() == ".".join([base, *extensions])


def test_resolved_version_prefers_build(build) -> None:
    product = ProductIdentifier.new("dev.thmsn.app", "0.1.0", build)
    assert product.resolved_version() == "1.2.3"


def test_resolved_version_falls_back_without_build_version(build) -> None:
    unversioned = build.model_copy(update={"version": None})
    assert ProductIdentifier.new("a", "0.1.0", unversioned).resolved_version() == "0.1.0"
    assert ProductIdentifier.new("a", "0.1.0").resolved_version() == "0.1.0"


def test_describe_delegates_to_renderer(product) -> None:
    assert product.describe("{NAME}@{VERSION}") == "dev.thmsn.app@0.1.0"


def test_set_global_registers_product(product) -> None:
    assert ProductIdentifier.get_global() is None
    product.set_global()
    assert ProductIdentifier.get_global() == product


def test_declare_product_uses_explicit_version() -> None:
    product = declare_product("dev.thmsn.app", version="2.0.0")
    assert product.version == "2.0.0"
    assert product.build is None


def test_declare_product_unknown_package_falls_back() -> None:
    product = declare_product("dev.thmsn.app", package="surely-not-installed-xyz")
    assert product.version == FALLBACK_VERSION


def test_declare_product_reads_installed_metadata() -> None:
    product = declare_product("dev.thmsn.app", package="pydantic")
    assert product.version not in ("", FALLBACK_VERSION)


def test_declare_product_loads_build_info(tmp_path, build) -> None:
    path = write_build_info(build, tmp_path / "build_info.json")
    product = declare_product("dev.thmsn.app", version="0.1.0", build_info=path)
    assert product.build == build
    assert product.resolved_version() == "1.2.3"


def test_declare_product_picks_up_default_build_file(build) -> None:
    write_build_info(build, Path("build_info.json"))
    product = declare_product("dev.thmsn.app", version="0.1.0")
    assert product.build is not None
    assert product.build.git.commit_short_hash == "7d712ab"
