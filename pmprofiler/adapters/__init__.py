"""Adapters — shell bindings for package-manager commands.

Public re-exports for convenient access.
"""

from pmprofiler.adapters.base import Adapter, ExecutionContext
from pmprofiler.adapters.mock import MockAdapter
from pmprofiler.adapters.shell.command import ShellCommandAdapter

__all__ = [
    "Adapter",
    "ExecutionContext",
    "MockAdapter",
    "ShellCommandAdapter",
]
