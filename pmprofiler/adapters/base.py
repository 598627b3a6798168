"""
Adapter base — the protocol contract between services and the shell.

Services never spawn processes themselves; they hand a CommandSpec to an
adapter and read back a Receipt. Swapping the adapter (e.g. for
``MockAdapter`` in tests) swaps every external side effect at once.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from pmprofiler.core.models.action import CommandSpec, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to run one command."""

    command: CommandSpec
    project_root: str = "."
    timeout: int = 300

    @property
    def working_dir(self) -> str:
        """Resolved working directory for the command."""
        return self.project_root


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform external side effects and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Execute the command and return a receipt.

        MUST never raise exceptions. All failures are captured
        in the Receipt with status='failed'.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
