"""
Runtime configuration for FxResolver and the host probe.

Every field is optional; an empty value means "infer it from the machine".
Values can be supplied directly, read from the environment with
ResolverConfig.from_env(), or overridden by CLI flags.

Environment variables
─────────────────────
  FXRESOLVER_SDK_ROOT       explicit SDK directory (contains dotnet.runtimeconfig.json)
  FXRESOLVER_RID            explicit platform identifier, e.g. "win-x64"
  FXRESOLVER_SDKS_DIR       where default SDKs are searched on a desktop host
  FXRESOLVER_TOOLCHAIN_DIR  directory holding FSharp.Core.dll and friends
  FXRESOLVER_RUNTIME_DIR    shared runtime directory to treat as "running"
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

__all__ = ["ResolverConfig", "DEFAULT_SDKS_DIR"]

DEFAULT_SDKS_DIR = r"C:\Program Files\dotnet\sdk"

_ENV_PREFIX = "FXRESOLVER_"


@dataclass(frozen=True)
class ResolverConfig:
    """Explicit overrides for identity inference."""
    sdk_root:      str = ""
    rid:           str = ""
    sdks_dir:      str = DEFAULT_SDKS_DIR
    toolchain_dir: str = ""
    runtime_dir:   str = ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ResolverConfig":
        """Build a config from FXRESOLVER_* variables (unset ones keep defaults)."""
        env = os.environ if environ is None else environ
        return cls(
            sdk_root=env.get(_ENV_PREFIX + "SDK_ROOT", ""),
            rid=env.get(_ENV_PREFIX + "RID", ""),
            sdks_dir=env.get(_ENV_PREFIX + "SDKS_DIR", "") or DEFAULT_SDKS_DIR,
            toolchain_dir=env.get(_ENV_PREFIX + "TOOLCHAIN_DIR", ""),
            runtime_dir=env.get(_ENV_PREFIX + "RUNTIME_DIR", ""),
        )

    def merged(self, **overrides: Optional[str]) -> "ResolverConfig":
        """Return a copy with every non-empty override applied."""
        changes = {k: v for k, v in overrides.items() if v}
        return replace(self, **changes) if changes else self
