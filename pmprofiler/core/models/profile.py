"""
Profile models — which package manager is in effect, and how yarn berry behaves.

A ManagerProfile is derived from lockfile content (or, for yarn, from the
installed binary) and is never cached across calls. BerryFeatureFlags are
derived from a yarn profile plus filesystem and .yarnrc.yml checks.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class ManagerKind(StrEnum):
    """Supported JavaScript package managers."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


class ManagerProfile(BaseModel):
    """Package manager identity plus its major version."""

    model_config = ConfigDict(frozen=True)

    kind: ManagerKind
    major_version: int

    @property
    def label(self) -> str:
        """Short label such as ``npm8`` or ``yarn3``."""
        return f"{self.kind.value}{self.major_version}"

    @property
    def is_berry(self) -> bool:
        """Whether this is yarn 2 or later."""
        return self.kind == ManagerKind.YARN and self.major_version >= 2


class BerryFeatureFlags(BaseModel):
    """Sub-behaviours of a yarn berry project."""

    model_config = ConfigDict(frozen=True)

    major_version: int
    zero_install: bool = False
    offline_cache: bool = False
    skip_build: bool = False
    disable_scripts: bool = True
    is_v4_plus: bool = False
