"""
Yarn configurator session — safe invocation of yarn berry commands.

Every yarn command must run after the project's yarn config has been
locked down: immutable installs off, scripts off unless a verified
zero-install cache makes them moot, proxies and CA bundle propagated.
``ConfiguratorSession`` owns that sequence. Its ``run_command`` and
``run_commands`` apply it first, unconditionally, so no caller can
skip it.

One session per batch of commands. The yarn major version is queried
once per session and reused for every decision in that batch.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

import semantic_version

from pmprofiler.adapters.base import Adapter
from pmprofiler.core.config.loader import load_yarnrc
from pmprofiler.core.models.action import CommandSpec
from pmprofiler.core.models.profile import BerryFeatureFlags, ManagerKind, ManagerProfile
from pmprofiler.core.models.project import ConfigMutation, EnvironmentSnapshot, YarnrcConfig
from pmprofiler.core.services import berry_features
from pmprofiler.core.services.failure_classifier import classify_failure
from pmprofiler.core.services.shell_ops import SubprocessFailed, run_shell_command

logger = logging.getLogger(__name__)

YARN_VERSION_COMMAND = "yarn --version"

# ${NAME} placeholders; ${NAME-default} carries its own fallback and is left alone
_ENV_PLACEHOLDER_RE = re.compile(r"\$\{[^}-]+\}")

_CommandLike = CommandSpec | str | tuple[str, str | None]


def strip_env_placeholders(path: Path) -> int:
    """Remove unexpanded ``${NAME}`` references from a file in place.

    Returns:
        Number of placeholders removed.
    """
    content = path.read_text(encoding="utf-8")
    cleaned, count = _ENV_PLACEHOLDER_RE.subn("", content)
    path.write_text(cleaned, encoding="utf-8")
    return count


class ConfiguratorSession:
    """Applies yarn berry safety config, then runs yarn commands.

    Args:
        project_root: The yarn project directory (commands run here).
        environment: Captured proxy / CA settings (default: from os.environ).
        adapter: Shell adapter (default: ShellCommandAdapter).
        yarnrc: Pre-loaded .yarnrc.yml values (default: loaded on demand).
    """

    def __init__(
        self,
        project_root: Path | str = ".",
        environment: EnvironmentSnapshot | None = None,
        adapter: Adapter | None = None,
        yarnrc: YarnrcConfig | None = None,
    ):
        self.project_root = Path(project_root).resolve()
        self.environment = environment if environment is not None else EnvironmentSnapshot.capture()
        self._adapter = adapter
        self._yarnrc = yarnrc
        self._major_version: int | None = None

    # ── Shell ───────────────────────────────────────────────────

    def _run(self, command: CommandSpec | str) -> str:
        return run_shell_command(command, cwd=self.project_root, adapter=self._adapter)

    # ── Version ─────────────────────────────────────────────────

    def resolve_yarn_major_version(self) -> int:
        """Major version of the yarn binary in effect for this project.

        If yarn refuses to start because a config file references an
        environment variable that is not set, the placeholders are
        stripped from that file and the query is retried once.

        Raises:
            SubprocessFailed: Any other failure, or a second failure.
        """
        if self._major_version is not None:
            return self._major_version

        retried = False
        while True:
            try:
                output = self._run(YARN_VERSION_COMMAND)
                break
            except SubprocessFailed as e:
                failure = classify_failure(e.message, self.project_root)
                if retried or not failure.recoverable:
                    raise
                target = self.project_root / str(failure.path)
                removed = strip_env_placeholders(target)
                logger.warning(
                    "Removed %d unset env placeholder(s) from %s, retrying",
                    removed, failure.path,
                )
                retried = True

        self._major_version = semantic_version.Version.coerce(output.strip()).major
        logger.debug("yarn major version: %d", self._major_version)
        return self._major_version

    def profile(self) -> ManagerProfile:
        return ManagerProfile(
            kind=ManagerKind.YARN,
            major_version=self.resolve_yarn_major_version(),
        )

    # ── Features ────────────────────────────────────────────────

    @property
    def yarnrc(self) -> YarnrcConfig:
        if self._yarnrc is None:
            self._yarnrc = load_yarnrc(self.project_root)
        return self._yarnrc

    def features(self) -> BerryFeatureFlags:
        """Berry flags for this project, recomputed on every call."""
        return berry_features.resolve_berry_features(
            self.profile(), self.project_root, self.yarnrc,
        )

    def berry_args(self) -> list[str]:
        return berry_features.berry_args(self.features())

    # ── Configuration ───────────────────────────────────────────

    def planned_mutations(self) -> list[ConfigMutation]:
        """The yarn config changes ``prepare`` would apply, in order."""
        flags = self.features()
        env = self.environment
        mutations: list[ConfigMutation] = [
            # Yarn's CI detection turns immutable installs on; updates need them off
            ConfigMutation(key="enableImmutableInstalls", value="false"),
        ]

        # A global cache would be a side effect that confuses later checks
        # when the project already manages its own cache
        if not flags.skip_build:
            mutations.append(ConfigMutation(key="enableGlobalCache", value="true"))

        if flags.disable_scripts:
            mutations.append(ConfigMutation(key="enableScripts", value="false"))

        if env.http_proxy:
            mutations.append(ConfigMutation(key="httpProxy", value=env.http_proxy))
        if env.https_proxy:
            mutations.append(ConfigMutation(key="httpsProxy", value=env.https_proxy))

        if env.extra_ca_certs:
            ca_key = "httpsCaFilePath" if flags.is_v4_plus else "caFilePath"
            mutations.append(ConfigMutation(key=ca_key, value=env.extra_ca_certs))

        return mutations

    def prepare(self) -> list[ConfigMutation]:
        """Apply the safety configuration. Returns what was applied."""
        mutations = self.planned_mutations()
        for mutation in mutations:
            self._run(mutation.command)
        logger.info("Applied %d yarn config setting(s)", len(mutations))
        return mutations

    # ── Commands ────────────────────────────────────────────────

    def run_command(self, command: str, fingerprint: str | None = None) -> str:
        """Prepare, then run a single yarn command and return its output."""
        self.prepare()
        return self._run(CommandSpec(command=command, fingerprint=fingerprint))

    def run_commands(self, commands: Iterable[_CommandLike]) -> list[str]:
        """Prepare, then run commands in order, stopping at the first failure.

        Raises:
            SubprocessFailed: The first failure, unchanged.
        """
        specs = [CommandSpec.coerce(c) for c in commands]
        self.prepare()
        return [self._run(spec) for spec in specs]


def run_package_manager_commands(
    commands: Iterable[_CommandLike],
    project_root: Path | str = ".",
    environment: EnvironmentSnapshot | None = None,
    adapter: Adapter | None = None,
) -> list[str]:
    """Run yarn commands behind a fresh ConfiguratorSession."""
    session = ConfiguratorSession(project_root, environment=environment, adapter=adapter)
    return session.run_commands(commands)
