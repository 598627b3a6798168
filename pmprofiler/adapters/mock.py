"""
Mock adapter — scripted test double for shell commands.

Returns success for everything by default. Responses can be queued per
command string; queued responses are consumed in order, after which the
command falls back to the default success.
"""

from __future__ import annotations

from collections import defaultdict, deque

from pmprofiler.adapters.base import Adapter, ExecutionContext
from pmprofiler.core.models.action import Receipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing."""

    def __init__(
        self,
        adapter_name: str = "mock",
        default_output: str = "",
    ):
        self._name = adapter_name
        self._default_output = default_output
        self._responses: dict[str, deque[Receipt]] = defaultdict(deque)
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def commands(self) -> list[str]:
        """Raw command strings, in execution order."""
        return [ctx.command.command for ctx in self._call_log]

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_output(self, command: str, output: str) -> None:
        """Queue a successful response with the given stdout."""
        self._responses[command].append(
            Receipt.success(adapter=self._name, command=command, output=output)
        )

    def set_failure(self, command: str, error: str = "Mock failure", return_code: int = 1) -> None:
        """Queue a failing response for a command; ``error`` doubles as its stderr."""
        self._responses[command].append(
            Receipt.failure(
                adapter=self._name,
                command=command,
                error=error,
                return_code=return_code,
                metadata={"stdout": "", "stderr": error},
            )
        )

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)

        queued = self._responses.get(context.command.command)
        if queued:
            return queued.popleft()

        return Receipt.success(
            adapter=self._name,
            command=context.command.display,
            output=self._default_output,
            metadata={"mock": True},
        )

