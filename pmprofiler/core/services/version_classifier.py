"""
Version classifier — infer package manager major version from lockfiles.

Each classifier maps lockfile content to a small, fixed set of majors:

    npm   package-lock.json   → 6 | 8
    yarn  yarn.lock           → 1 (classic) | 3 (berry)
    pnpm  pnpm-lock.yaml      → 6 | 8

npm and yarn never fail: absent or unreadable content falls back to a
documented default. pnpm is the exception, since a pnpm lockfile without
a ``lockfileVersion`` header is not a pnpm lockfile at all.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

import yaml

from pmprofiler.core.models.profile import ManagerKind, ManagerProfile

logger = logging.getLogger(__name__)


# ── Lockfile names ──────────────────────────────────────────────

# Checked in order; pnpm and yarn projects sometimes carry a stray
# package-lock.json, so the more specific lockfiles win.
_LOCKFILES: list[tuple[str, ManagerKind]] = [
    ("pnpm-lock.yaml", ManagerKind.PNPM),
    ("yarn.lock", ManagerKind.YARN),
    ("package-lock.json", ManagerKind.NPM),
    ("npm-shrinkwrap.json", ManagerKind.NPM),
]

# Reserved top-level key that only yarn berry lockfiles contain
_BERRY_METADATA_KEY = "__metadata"

_PNPM_VERSION_RE = re.compile(r"^lockfileVersion: ['\"]?(?P<version>\d[\d.]*)", re.MULTILINE)
_PNPM_NUMERIC_PREFIX_RE = re.compile(r"\d+(?:\.\d+)?")

# pnpm 7.x moved to lockfile 5.4; pnpm 8 writes 6.0
_PNPM_V8_MIN_LOCKFILE = 5.4


class LockfileVersionNotFound(LookupError):
    """Raised when a pnpm lockfile has no ``lockfileVersion`` header."""


# ═══════════════════════════════════════════════════════════════════
#  Classifiers
# ═══════════════════════════════════════════════════════════════════


def classify_npm(lockfile_content: str | None) -> ManagerProfile:
    """Classify an npm lockfile as npm 6 or npm 8.

    Missing content is treated optimistically (npm 8); content that is
    present but cannot be read is treated conservatively (npm 6).
    """
    if not lockfile_content:
        return ManagerProfile(kind=ManagerKind.NPM, major_version=8)

    try:
        lockfile_version = json.loads(lockfile_content)["lockfileVersion"]
        major = 8 if lockfile_version >= 2 else 6
    except (ValueError, TypeError, KeyError) as e:
        logger.debug("Unreadable package-lock.json (%s), assuming npm 6", e)
        major = 6

    return ManagerProfile(kind=ManagerKind.NPM, major_version=major)


def classify_yarn_major(lockfile_content: str | None) -> int:
    """Return 3 for a berry yarn.lock, 1 for classic (or unparseable)."""
    if yarn_berry(lockfile_content):
        return 3
    return 1


def yarn_berry(lockfile_content: str | None) -> bool:
    """Whether a yarn.lock was written by yarn 2+."""
    if not lockfile_content:
        return False
    try:
        data = yaml.safe_load(lockfile_content)
    except (yaml.YAMLError, ValueError):
        # Classic yarn.lock is not valid YAML in general; PyYAML raises
        # ValueError for scalars that look like dates but are not
        return False
    return isinstance(data, dict) and _BERRY_METADATA_KEY in data


def pnpm_lockfile_version(lockfile_content: str | None) -> str:
    """Extract the raw ``lockfileVersion`` token from a pnpm lockfile.

    Raises:
        LockfileVersionNotFound: If no header line matches.
    """
    match = _PNPM_VERSION_RE.search(lockfile_content or "")
    if match is None:
        raise LockfileVersionNotFound("No lockfileVersion header in pnpm-lock.yaml")
    return match.group("version")


def classify_pnpm(lockfile_content: str | None) -> ManagerProfile:
    """Classify a pnpm lockfile as pnpm 6 or pnpm 8.

    Raises:
        LockfileVersionNotFound: If the lockfile has no version header.
    """
    raw = pnpm_lockfile_version(lockfile_content)
    # Only major.minor matters; "5.4.1" reads as 5.4
    version = float(_PNPM_NUMERIC_PREFIX_RE.match(raw).group())

    major = 8 if version >= _PNPM_V8_MIN_LOCKFILE else 6
    return ManagerProfile(kind=ManagerKind.PNPM, major_version=major)


def identify_manager(
    lockfile_content: str | None,
    kind: ManagerKind | str,
) -> ManagerProfile:
    """Classify lockfile content for a known package manager kind."""
    try:
        kind = ManagerKind(kind)
    except ValueError as e:
        raise ValueError(f"Unknown package manager: {kind!r}") from e

    if kind == ManagerKind.NPM:
        profile = classify_npm(lockfile_content)
    elif kind == ManagerKind.YARN:
        profile = ManagerProfile(
            kind=ManagerKind.YARN,
            major_version=classify_yarn_major(lockfile_content),
        )
    else:
        profile = classify_pnpm(lockfile_content)

    logger.debug("Identified %s", profile.label)
    return profile


# ═══════════════════════════════════════════════════════════════════
#  Detect
# ═══════════════════════════════════════════════════════════════════


def lockfile_kind(path: Path) -> ManagerKind | None:
    """Package manager that owns a lockfile, judged by its filename."""
    for filename, kind in _LOCKFILES:
        if path.name == filename:
            return kind
    return None


def detect_lockfile(project_root: Path) -> tuple[ManagerKind, Path] | None:
    """Find the lockfile that decides which package manager a project uses."""
    for filename, kind in _LOCKFILES:
        candidate = project_root / filename
        if candidate.is_file():
            return kind, candidate
    return None


def profile_project(project_root: Path) -> ManagerProfile | None:
    """Detect and classify a project's lockfile. None if there is none."""
    found = detect_lockfile(project_root)
    if found is None:
        logger.info("No lockfile found in %s", project_root)
        return None

    kind, path = found
    content = path.read_text(encoding="utf-8")
    return identify_manager(content, kind)
