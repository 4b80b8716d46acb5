"""Data models for the runtime module."""

from dataclasses import dataclass
from typing import Optional

__all__ = ["RuntimeEnvironment"]


@dataclass(frozen=True)
class RuntimeEnvironment:
    """
    Identity of the runtime references are resolved against.
    Computed once by FxResolver and never recomputed.
    """
    runtime_dir:     str             # existing shared runtime directory
    runtime_version: str             # never empty; defaults to the directory name
    tfm:             str             # e.g. "netcoreapp3.1" or "net472"
    rid:             str             # e.g. "win-x64"
    sdk_root:        Optional[str] = None

    def __str__(self) -> str:
        return f"{self.tfm} {self.rid} ({self.runtime_version} @ {self.runtime_dir})"
