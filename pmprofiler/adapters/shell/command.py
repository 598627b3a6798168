"""
Shell command adapter — execute package-manager commands.

Runs the command through the shell in the project root and captures
its output. Only the command's display string (its fingerprint, when
one is given) is logged or stored on the receipt.
"""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path

from pmprofiler.adapters.base import Adapter, ExecutionContext
from pmprofiler.core.models.action import Receipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute shell commands and capture output."""

    @property
    def name(self) -> str:
        return "shell"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.command.command.strip():
            return False, "Missing command"

        cwd = context.working_dir
        if cwd and not Path(cwd).is_dir():
            return False, f"Working directory does not exist: {cwd}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        spec = context.command
        display = spec.display

        valid, error = self.validate(context)
        if not valid:
            return Receipt.failure(adapter=self.name, command=display, error=error)

        logger.debug("Executing: %s (cwd=%s)", display, context.working_dir)
        start = time.monotonic()

        try:
            result = subprocess.run(
                spec.command,
                shell=True,
                cwd=context.working_dir,
                capture_output=True,
                text=True,
                timeout=context.timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                command=display,
                error=f"Command timed out after {context.timeout}s",
                metadata={"timeout": context.timeout},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                command=display,
                error=f"Command execution error: {e}",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = result.stdout.strip()
        stderr = result.stderr.strip()

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                command=display,
                output=output,
                duration_ms=elapsed_ms,
                metadata={"stderr": stderr},
            )
        # yarn berry reports usage errors on stdout, so both streams go in the error
        combined = "\n".join(part for part in (output, stderr) if part)
        return Receipt.failure(
            adapter=self.name,
            command=display,
            error=combined or f"Command exited with code {result.returncode}",
            return_code=result.returncode,
            duration_ms=elapsed_ms,
            metadata={"stdout": output, "stderr": stderr},
        )
