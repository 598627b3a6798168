"""
CommandSpec and Receipt models — the execution contract.

A CommandSpec is a requested package-manager command. A Receipt is the
result of running it. Adapters take CommandSpecs and hand back Receipts,
never exceptions; the shell service turns a failed Receipt into a typed
``SubprocessFailed`` for callers that want to propagate it.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class CommandSpec(BaseModel):
    """A shell command plus an optional fingerprint.

    The fingerprint is what gets logged and reported in place of the
    command, so credentials or tokens embedded in the command line
    never reach the logs.
    """

    command: str
    fingerprint: str | None = None

    @property
    def display(self) -> str:
        """The string safe to show in logs and receipts."""
        return self.fingerprint or self.command

    @classmethod
    def coerce(cls, value: CommandSpec | str | tuple[str, str | None]) -> CommandSpec:
        """Accept a CommandSpec, a bare command, or a (command, fingerprint) pair."""
        if isinstance(value, CommandSpec):
            return value
        if isinstance(value, str):
            return cls(command=value)
        command, fingerprint = value
        return cls(command=command, fingerprint=fingerprint)


class Receipt(BaseModel):
    """Result of an adapter execution.

    Receipts capture the full outcome of a command. The adapter
    NEVER raises exceptions — failures are captured here.
    """

    adapter: str
    command: str                    # display string, never the raw secret
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None
    return_code: int | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the command succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command failed."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        adapter: str,
        command: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            adapter=adapter,
            command=command,
            status="ok",
            output=output,
            return_code=kwargs.pop("return_code", 0),
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        command: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            adapter=adapter,
            command=command,
            status="failed",
            error=error,
            **kwargs,
        )
