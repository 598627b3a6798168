"""
Shell operations — run one command, return stdout, raise on failure.

Thin bridge between the receipt-returning adapter layer and services
that want exceptions: a failed Receipt becomes ``SubprocessFailed``
carrying the command's stdout, stderr and exit status.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pmprofiler.adapters.base import Adapter, ExecutionContext
from pmprofiler.adapters.shell.command import ShellCommandAdapter
from pmprofiler.core.models.action import CommandSpec, Receipt

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300


class SubprocessFailed(Exception):
    """Raised when a shell command exits non-zero (or cannot be run)."""

    def __init__(self, message: str, receipt: Receipt):
        super().__init__(message)
        self.message = message
        self.receipt = receipt

    @property
    def command(self) -> str:
        """Display string of the failed command."""
        return self.receipt.command

    @property
    def return_code(self) -> int | None:
        return self.receipt.return_code

    @property
    def stdout(self) -> str:
        return self.receipt.metadata.get("stdout", "")

    @property
    def stderr(self) -> str:
        return self.receipt.metadata.get("stderr", "")


def run_shell_command(
    command: CommandSpec | str,
    fingerprint: str | None = None,
    cwd: Path | str = ".",
    adapter: Adapter | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> str:
    """Run a command through an adapter and return its stdout.

    Args:
        command: Command string or CommandSpec.
        fingerprint: Display string used instead of the command in logs.
            Ignored when ``command`` is already a CommandSpec.
        cwd: Working directory.
        adapter: Adapter to run through (default: ShellCommandAdapter).
        timeout: Timeout in seconds.

    Raises:
        SubprocessFailed: If the command fails.
    """
    spec = command if isinstance(command, CommandSpec) else CommandSpec(
        command=command, fingerprint=fingerprint,
    )
    adapter = adapter or ShellCommandAdapter()
    context = ExecutionContext(command=spec, project_root=str(cwd), timeout=timeout)

    logger.info("Running: %s", spec.display)
    receipt = adapter.execute(context)

    if receipt.failed:
        logger.debug("Command failed: %s (%s)", spec.display, receipt.error)
        raise SubprocessFailed(receipt.error or "Command failed", receipt)

    return receipt.output
