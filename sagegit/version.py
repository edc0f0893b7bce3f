"""The version string of the running program."""

from __future__ import annotations

import functools
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib import metadata

VERSION = ""
"""Set by release builds; empty otherwise."""

DIST_NAME = "sagegit"
FALLBACK_VERSION = "0.0.0-dev"
_DEVEL = "(devel)"


@dataclass(frozen=True)
class BuildInfo:
    """What the installation says about the build."""

    main_version: str = ""
    settings: Mapping[str, str] = field(default_factory=dict)


def read_build_info() -> BuildInfo | None:
    """Return the installed distribution's version, or ``None`` when not installed."""
    try:
        installed = metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return None
    return BuildInfo(main_version=installed or "")


def determine_version(ldflags_version: str, build_info: BuildInfo | None) -> str:
    """Pick the version: the release one, then the installed one, then a dev label."""
    if ldflags_version:
        return ldflags_version
    if build_info is not None:
        if build_info.main_version and build_info.main_version != _DEVEL:
            return build_info.main_version.removeprefix("v")
        revision = build_info.settings.get("vcs.revision", "")[:7]
        built_at = build_info.settings.get("vcs.time", "")
        if revision and built_at:
            return f"dev-{revision}-{built_at}"
    return FALLBACK_VERSION


@functools.cache
def get() -> str:
    """Return the version string, working it out on the first call only."""
    return determine_version(VERSION, read_build_info())