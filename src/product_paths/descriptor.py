# SPDX-License-Identifier: MIT
"""Render human-readable product descriptors from ``{KEY}`` templates.

Available keys:

==================== ==================================== ============================
Key                  Source                               Example
==================== ==================================== ============================
``NAME``             Product name (base + extensions)     ``dev.thmsn.myapp``
``VERSION``          Build version, else product version  ``0.1.0``
``GIT_REF``          Branch name                          ``main``
``GIT_HASH``         Short commit hash                    ``7d712ab``
``GIT_LONG_HASH``    Full commit hash                     ``7d712abc048a...``
``GIT_DIRTY``        ``dirty`` with uncommitted changes   ``dirty``
``GIT_DIRTY_STAR``   ``*`` with uncommitted changes       ``*``
``GIT_MESSAGE``      Commit message (trimmed)             ``fix: login bug``
``GIT_AUTHOR``       Commit author name                   ``Charlie Thomson``
``GIT_EMAIL``        Commit author email                  ``charlie@thmsn.dev``
``GIT_TAGS``         Comma-separated tags                 ``v0.1.0,latest``
``GIT_REMOTE``       Remote URL                           ``git@github.com:...``
``GIT_COMMIT_COUNT`` Number of commits                    ``42``
``BUILD_HOST``       Build machine hostname               ``build-01.local``
``BUILD_OS``         OS name                              ``Darwin``
``BUILD_OS_VERSION`` OS version                           ``25.0.0``
``BUILD_OS_LONG``    OS long version                      ``macOS 26.0``
``BUILD_ARCH``       CPU architecture                     ``arm64``
``BUILD_CPUS``       Number of CPUs                       ``14``
``BUILD_MEM``        Total memory (human-readable)        ``25.77 GB``
==================== ==================================== ============================

Keys whose data is unavailable (every ``GIT_*``/``BUILD_*`` key when the
product carries no build provenance) render as an empty string. Tokens that
are not listed above are left as-is. Substitution happens in a single pass, so
text produced by one key is never expanded again.
"""

from __future__ import annotations

import re
from typing import Callable, Mapping

from .models import BuildProvenance
from .product import ProductIdentifier

SHORT = "{NAME} v{VERSION}"
DEFAULT = "{NAME} v{VERSION} ({GIT_REF}@{GIT_HASH})"
DEFAULT_DIRTY = "{NAME} v{VERSION} ({GIT_REF}@{GIT_HASH}{GIT_DIRTY_STAR})"
LONG = (
    "{NAME} v{VERSION} | {GIT_REF}@{GIT_HASH}"
    " | {BUILD_HOST} ({BUILD_OS} {BUILD_OS_VERSION})"
)
FULL = (
    "{NAME} v{VERSION} | {GIT_REF}@{GIT_HASH} {GIT_DIRTY} | {GIT_AUTHOR}"
    " | {BUILD_HOST} ({BUILD_OS_LONG} {BUILD_ARCH})"
)
# Suitable as an HTTP User-Agent header value.
USER_AGENT = "{NAME}/{VERSION} ({BUILD_OS}; {BUILD_ARCH})"
GIT_REF_SHORT = "{GIT_REF}@{GIT_HASH}"

FORMATS: Mapping[str, str] = {
    "short": SHORT,
    "default": DEFAULT,
    "default-dirty": DEFAULT_DIRTY,
    "long": LONG,
    "full": FULL,
    "user-agent": USER_AGENT,
    "git-ref-short": GIT_REF_SHORT,
}

_BuildResolver = Callable[[BuildProvenance], str]

_IDENTITY_KEYS: Mapping[str, Callable[[ProductIdentifier], str]] = {
    "NAME": lambda product: product.render_name(),
    "VERSION": lambda product: product.resolved_version(),
}

_BUILD_KEYS: Mapping[str, _BuildResolver] = {
    "GIT_REF": lambda b: b.git.branch or "",
    "GIT_HASH": lambda b: b.git.commit_short_hash,
    "GIT_LONG_HASH": lambda b: b.git.commit_hash,
    "GIT_DIRTY": lambda b: "dirty" if b.git.dirty else "",
    "GIT_DIRTY_STAR": lambda b: "*" if b.git.dirty else "",
    "GIT_MESSAGE": lambda b: (b.git.commit_message or "").strip(),
    "GIT_AUTHOR": lambda b: b.git.author_name or "",
    "GIT_EMAIL": lambda b: b.git.author_email or "",
    "GIT_TAGS": lambda b: ",".join(b.git.tags),
    "GIT_REMOTE": lambda b: b.git.remote_url or "",
    "GIT_COMMIT_COUNT": lambda b: (
        "" if b.git.commit_count is None else str(b.git.commit_count)
    ),
    "BUILD_HOST": lambda b: b.agent.hostname,
    "BUILD_OS": lambda b: b.agent.os.name,
    "BUILD_OS_VERSION": lambda b: b.agent.os.version,
    "BUILD_OS_LONG": lambda b: b.agent.os.long_version,
    "BUILD_ARCH": lambda b: b.agent.os.architecture,
    "BUILD_CPUS": lambda b: str(b.agent.ncpus),
    "BUILD_MEM": lambda b: b.agent.memory,
}

KEYS: tuple[str, ...] = (*_IDENTITY_KEYS, *_BUILD_KEYS)

_PLACEHOLDER = re.compile(r"\{(" + "|".join(map(re.escape, KEYS)) + r")\}")


def resolve_values(product: ProductIdentifier) -> dict[str, str]:
    """Return the substitution value of every known key for ``product``."""
    values = {key: resolver(product) for key, resolver in _IDENTITY_KEYS.items()}
    build = product.build
    for key, build_resolver in _BUILD_KEYS.items():
        values[key] = build_resolver(build) if build is not None else ""
    return values


def render(fmt: str, product: ProductIdentifier) -> str:
    """Replace every ``{KEY}`` placeholder in ``fmt`` with its value.

    Example::

        render("{NAME} v{VERSION} - {GIT_REF}@{GIT_HASH}", product)
        # => "dev.thmsn.myapp v0.1.0 - main@7d712ab"

    Args:
        fmt: Template text; see the module docstring for the available keys.
        product: Identifier supplying the values.

    Returns:
        The rendered descriptor. Rendering never fails.
    """
    values = resolve_values(product)
    return _PLACEHOLDER.sub(lambda match: values[match.group(1)], fmt)


def preset(name: str) -> str:
    """Return the preset template called ``name``.

    Names are matched case-insensitively and ``_`` is accepted in place of
    ``-`` (``DEFAULT_DIRTY`` and ``default-dirty`` are equivalent).

    Raises:
        KeyError: If ``name`` does not match any preset.
    """
    key = name.strip().lower().replace("_", "-")
    try:
        return FORMATS[key]
    except KeyError:
        raise KeyError(
            f"Unknown descriptor format '{name}'; expected one of: "
            + ", ".join(FORMATS)
        ) from None


__all__ = [
    "DEFAULT",
    "DEFAULT_DIRTY",
    "FORMATS",
    "FULL",
    "GIT_REF_SHORT",
    "KEYS",
    "LONG",
    "SHORT",
    "USER_AGENT",
    "preset",
    "render",
    "resolve_values",
]
