# SPDX-License-Identifier: MIT
"""Tests for descriptor template rendering."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from product_paths import descriptor
from product_paths.descriptor import render
from product_paths.models import AgentInfo, BuildProvenance, GitInfo, OsInfo
from product_paths.product import ProductIdentifier


def _product_with_message(message: str) -> ProductIdentifier:
    build = BuildProvenance(
        git=GitInfo(commit_hash="abc", commit_short_hash="a", commit_message=message),
        agent=AgentInfo(
            hostname="h",
            os=OsInfo(name="Linux", version="6", long_version="L", architecture="x"),
            ncpus=1,
        ),
    )
    return ProductIdentifier.new("dev.thmsn.app", "0.1.0", build)


def test_short_example(product) -> None:
    assert render("{NAME} v{VERSION}", product) == "dev.thmsn.app v0.1.0"


def test_presets_are_verbatim() -> None:
    assert descriptor.SHORT == "{NAME} v{VERSION}"
    assert descriptor.DEFAULT == "{NAME} v{VERSION} ({GIT_REF}@{GIT_HASH})"
    assert (
        descriptor.DEFAULT_DIRTY
        == "{NAME} v{VERSION} ({GIT_REF}@{GIT_HASH}{GIT_DIRTY_STAR})"
    )
    assert descriptor.LONG == (
        "{NAME} v{VERSION} | {GIT_REF}@{GIT_HASH} | {BUILD_HOST} ({BUILD_OS} {BUILD_OS_VERSION})"
    )
    assert descriptor.FULL == (
        "{NAME} v{VERSION} | {GIT_REF}@{GIT_HASH} {GIT_DIRTY} | {GIT_AUTHOR} | "
        "{BUILD_HOST} ({BUILD_OS_LONG} {BUILD_ARCH})"
    )
    assert descriptor.USER_AGENT == "{NAME}/{VERSION} ({BUILD_OS}; {BUILD_ARCH})"
    assert descriptor.GIT_REF_SHORT == "{GIT_REF}@{GIT_HASH}"
    assert len(descriptor.FORMATS) == 7


def test_dirty_star_follows_flag(build) -> None:
    dirty = ProductIdentifier.new("dev.thmsn.app", "0.1.0", build)
    clean_build = build.model_copy(
        update={"git": build.git.model_copy(update={"dirty": False})}
    )
    clean = ProductIdentifier.new("dev.thmsn.app", "0.1.0", clean_build)
    assert render("{GIT_DIRTY_STAR}", dirty) == "*"
    assert render("{GIT_DIRTY_STAR}", clean) == ""
    assert render("{GIT_DIRTY}", dirty) == "dirty"
    assert render("{GIT_DIRTY}", clean) == ""


def test_missing_build_blanks_every_build_key(product) -> None:
    template = " ".join(f"{{{key}}}" for key in descriptor.KEYS)
    rendered = render(template, product)
    assert rendered == "dev.thmsn.app 0.1.0" + " " * (len(descriptor.KEYS) - 2)


def test_every_key_resolved_with_build(build) -> None:
    product = ProductIdentifier.new("dev.thmsn.app", "0.1.0", build).with_extension(
        "cli"
    )
    values = descriptor.resolve_values(product)
    assert values == {
        "NAME": "dev.thmsn.app.cli",
        "VERSION": "1.2.3",
        "GIT_REF": "main",
        "GIT_HASH": "7d712ab",
        "GIT_LONG_HASH": "7d712abc048a1e0e8f3f4c5d6b7a8c9d0e1f2a3b",
        "GIT_DIRTY": "dirty",
        "GIT_DIRTY_STAR": "*",
        "GIT_MESSAGE": "fix: login bug",
        "GIT_AUTHOR": "Charlie Thomson",
        "GIT_EMAIL": "charlie@thmsn.dev",
        "GIT_TAGS": "v1.2.3,latest",
        "GIT_REMOTE": "git@github.com:thmsn/app.git",
        "GIT_COMMIT_COUNT": "42",
        "BUILD_HOST": "build-01.local",
        "BUILD_OS": "Darwin",
        "BUILD_OS_VERSION": "25.0.0",
        "BUILD_OS_LONG": "macOS 26.0",
        "BUILD_ARCH": "arm64",
        "BUILD_CPUS": "14",
        "BUILD_MEM": "25.77 GB",
    }


def test_presets_render_with_build(build) -> None:
    product = ProductIdentifier.new("dev.thmsn.app", "0.1.0", build)
    assert render(descriptor.DEFAULT_DIRTY, product) == "dev.thmsn.app v1.2.3 (main@7d712ab*)"
    assert render(descriptor.USER_AGENT, product) == "dev.thmsn.app/1.2.3 (Darwin; arm64)"
    assert render(descriptor.FULL, product) == (
        "dev.thmsn.app v1.2.3 | main@7d712ab dirty | Charlie Thomson | "
        "build-01.local (macOS 26.0 arm64)"
    )


def test_optional_fields_render_empty(build) -> None:
    sparse = build.model_copy(
        update={
            "git": build.git.model_copy(
                update={"branch": None, "commit_count": None, "tags": ()}
            )
        }
    )
    product = ProductIdentifier.new("dev.thmsn.app", "0.1.0", sparse)
    assert render("[{GIT_REF}|{GIT_COMMIT_COUNT}|{GIT_TAGS}]", product) == "[||]"


def test_unknown_tokens_are_left_alone(product) -> None:
    assert render("{NAME} {UNKNOWN} {name} {{NAME}}", product) == (
        "dev.thmsn.app {UNKNOWN} {name} {dev.thmsn.app}"
    )


def test_values_are_not_expanded_twice() -> None:
    product = _product_with_message("released {NAME} {VERSION}")
    assert render("{GIT_MESSAGE} by {NAME}", product) == (
        "released {NAME} {VERSION} by dev.thmsn.app"
    )


@given(message=st.text(alphabet="{}NAMEVRSIO_ GIT", max_size=40))
def test_message_text_survives_verbatim(message: str) -> None:
    """Whatever a commit message contains is inserted literally."""
    product = _product_with_message(message)
    assert render("{GIT_MESSAGE}", product) == message.strip()


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("short", descriptor.SHORT),
        ("DEFAULT_DIRTY", descriptor.DEFAULT_DIRTY),
        ("user-agent", descriptor.USER_AGENT),
        ("Git_Ref_Short", descriptor.GIT_REF_SHORT),
    ],
)
def test_preset_lookup(name: str, expected: str) -> None:
    assert descriptor.preset(name) == expected


def test_preset_unknown_name() -> None:
    with pytest.raises(KeyError):
        descriptor.preset("verbose")
