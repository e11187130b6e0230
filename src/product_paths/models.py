# SPDX-License-Identifier: MIT
"""Pydantic models describing the optional build provenance record.

A :class:`BuildProvenance` captures the version-control state of the source
tree and the machine that produced the build. It is produced by
:mod:`product_paths.buildinfo` and consumed by the descriptor renderer, which
treats every field as optional display data.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StrictModel(BaseModel):
    """Immutable base model rejecting unknown fields."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class GitInfo(StrictModel):
    """Version-control state of the source tree at build time."""

    branch: str | None = Field(
        None, description="Checked out branch; ``None`` on a detached HEAD."
    )
    commit_hash: str = Field(..., description="Full commit hash.")
    commit_short_hash: str = Field(..., description="Abbreviated commit hash.")
    dirty: bool = Field(False, description="Whether uncommitted changes existed.")
    commit_message: str | None = Field(None, description="Commit message body.")
    author_name: str | None = Field(None, description="Commit author name.")
    author_email: str | None = Field(None, description="Commit author email.")
    tags: tuple[str, ...] = Field((), description="Tags pointing at the commit.")
    remote_url: str | None = Field(None, description="URL of the origin remote.")
    commit_count: int | None = Field(
        None, ge=0, description="Number of commits reachable from HEAD."
    )


class OsInfo(StrictModel):
    """Operating system of the build host."""

    name: str = Field(..., description="OS name, e.g. ``Linux`` or ``Darwin``.")
    version: str = Field(..., description="Kernel or OS release version.")
    long_version: str = Field(..., description="Marketing name and version.")
    architecture: str = Field(..., description="CPU architecture.")


class AgentInfo(StrictModel):
    """Machine that produced the build."""

    hostname: str = Field(..., description="Build host name.")
    os: OsInfo
    ncpus: int = Field(..., ge=0, description="Logical CPU count.")
    memory: str = Field("", description="Human-readable total memory.")


class BuildProvenance(StrictModel):
    """Build metadata attached to a product identifier."""

    version: str | None = Field(
        None, description="Package version recorded when the build ran."
    )
    git: GitInfo
    agent: AgentInfo


__all__ = ["AgentInfo", "BuildProvenance", "GitInfo", "OsInfo", "StrictModel"]
