"""
Failure classifier — map raw subprocess diagnostics to known categories.

Pure pattern matching, no I/O. The configurator decides what to do
with a category; this module only recognises it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class FailureCategory(StrEnum):
    """Recognised failure kinds."""

    MISSING_ENV_VAR = "missing_env_var"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ClassifiedFailure:
    """A failure category plus whatever the pattern captured."""

    category: FailureCategory
    path: str | None = None

    @property
    def recoverable(self) -> bool:
        return self.category == FailureCategory.MISSING_ENV_VAR


def _missing_env_var_re(cwd: Path | str) -> re.Pattern[str]:
    # yarn berry: "Environment variable not found (NPM_TOKEN) in /repo/.yarnrc.yml"
    return re.compile(
        rf"Environment variable not found \((?:[^)]+)\) in {re.escape(str(cwd))}/(?P<path>\S+)"
    )


def classify_failure(message: str, cwd: Path | str) -> ClassifiedFailure:
    """Classify a subprocess error message.

    Args:
        message: The failure's diagnostic text (usually stderr).
        cwd: Directory the command ran in; only files under it are
            considered repairable.
    """
    match = _missing_env_var_re(cwd).search(message or "")
    if match:
        return ClassifiedFailure(FailureCategory.MISSING_ENV_VAR, match.group("path"))
    return ClassifiedFailure(FailureCategory.UNKNOWN)
