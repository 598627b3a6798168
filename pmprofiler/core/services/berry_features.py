"""
Berry feature resolver — how a yarn 2+ project should be driven.

Lifecycle scripts from untrusted dependency updates must never run.
Disabling scripts is the default posture; it is lifted only when a
zero-install cache (``.pnp.cjs``) is committed and yarn 3+ can be told
to skip the build step entirely.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pmprofiler.core.config.loader import load_yarnrc
from pmprofiler.core.models.profile import BerryFeatureFlags, ManagerKind, ManagerProfile
from pmprofiler.core.models.project import YarnrcConfig

logger = logging.getLogger(__name__)

ZERO_INSTALL_MARKER = ".pnp.cjs"
DEFAULT_CACHE_FOLDER = ".yarn/cache"
NODE_MODULES_LINKER = "node-modules"


def yarn_zero_install(project_root: Path) -> bool:
    """Whether the project commits a Plug'n'Play install manifest."""
    return (project_root / ZERO_INSTALL_MARKER).exists()


def yarn_offline_cache(project_root: Path, yarnrc: YarnrcConfig) -> bool:
    """Whether a populated cache feeds a node-modules linker."""
    cache_dir = project_root / str(yarnrc.fetch("cacheFolder", DEFAULT_CACHE_FOLDER))
    return cache_dir.exists() and yarnrc.fetch("nodeLinker", "") == NODE_MODULES_LINKER


def resolve_berry_features(
    profile: ManagerProfile,
    project_root: Path,
    yarnrc: YarnrcConfig | None = None,
) -> BerryFeatureFlags:
    """Derive berry sub-behaviours from the yarn major and project files.

    Args:
        profile: A yarn profile with major version 2 or later.
        project_root: The yarn project directory.
        yarnrc: Pre-loaded .yarnrc.yml values (loaded on demand if None).

    Raises:
        ValueError: If the profile is not yarn berry.
    """
    if profile.kind != ManagerKind.YARN or not profile.is_berry:
        raise ValueError(f"Berry features need yarn 2 or later, got {profile.label}")

    if yarnrc is None:
        yarnrc = load_yarnrc(project_root)

    major = profile.major_version
    zero_install = yarn_zero_install(project_root)
    offline_cache = yarn_offline_cache(project_root, yarnrc)

    flags = BerryFeatureFlags(
        major_version=major,
        zero_install=zero_install,
        offline_cache=offline_cache,
        skip_build=major >= 3 and (zero_install or offline_cache),
        disable_scripts=major == 2 or not zero_install,
        is_v4_plus=major >= 4,
    )
    logger.debug("Berry features for %s: %s", profile.label, flags)
    return flags


def berry_args(flags: BerryFeatureFlags) -> list[str]:
    """Extra install arguments for the resolved berry features."""
    if flags.major_version == 2:
        return []
    if flags.skip_build:
        return ["--mode=skip-build"]
    # Only when the cache is not managed by the project: update-lockfile
    # leaves stale versions behind in a committed cache
    return ["--mode=update-lockfile"]
