"""
Project-side inputs — .yarnrc.yml values, the captured environment,
and the yarn config mutations derived from them.
"""

from __future__ import annotations

import os
import shlex
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Environment variables the configurator propagates into yarn config
HTTP_PROXY_VAR = "HTTP_PROXY"
HTTPS_PROXY_VAR = "HTTPS_PROXY"
CA_CERTS_VAR = "NODE_EXTRA_CA_CERTS"


class YarnrcConfig(BaseModel):
    """Values read from a project's ``.yarnrc.yml``.

    An absent file is represented by an empty mapping.
    """

    values: dict[str, Any] = Field(default_factory=dict)

    def fetch(self, key: str, default: Any = None) -> Any:
        """Look up a key, falling back to ``default`` when unset."""
        return self.values.get(key, default)


class EnvironmentSnapshot(BaseModel):
    """The subset of the process environment that affects yarn config.

    Captured once and passed in, so decision logic never reads
    ``os.environ`` directly.
    """

    model_config = ConfigDict(frozen=True)

    http_proxy: str | None = None
    https_proxy: str | None = None
    extra_ca_certs: str | None = None

    @classmethod
    def capture(cls, environ: Mapping[str, str] | None = None) -> EnvironmentSnapshot:
        """Snapshot the relevant variables. Empty values count as unset."""
        env = os.environ if environ is None else environ
        return cls(
            http_proxy=env.get(HTTP_PROXY_VAR) or None,
            https_proxy=env.get(HTTPS_PROXY_VAR) or None,
            extra_ca_certs=env.get(CA_CERTS_VAR) or None,
        )


class ConfigMutation(BaseModel):
    """A single ``yarn config set`` applied before running yarn commands."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str

    @property
    def command(self) -> str:
        return f"yarn config set {self.key} {shlex.quote(self.value)}"
