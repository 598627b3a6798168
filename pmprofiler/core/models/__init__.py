"""
Domain models — Pydantic types for the profiler.

All models are re-exported here for convenient access:

    from pmprofiler.core.models import ManagerProfile, CommandSpec, Receipt
"""

from pmprofiler.core.models.action import CommandSpec, Receipt
from pmprofiler.core.models.profile import BerryFeatureFlags, ManagerKind, ManagerProfile
from pmprofiler.core.models.project import ConfigMutation, EnvironmentSnapshot, YarnrcConfig

__all__ = [
    # profile.py
    "BerryFeatureFlags",
    # action.py
    "CommandSpec",
    # project.py
    "ConfigMutation",
    "EnvironmentSnapshot",
    "ManagerKind",
    "ManagerProfile",
    "Receipt",
    "YarnrcConfig",
]
