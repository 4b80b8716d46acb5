"""Data models for the host module."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

__all__ = ["OSPlatform", "Architecture", "HostInfo"]


class OSPlatform(str, Enum):
    WINDOWS = "windows"
    OSX     = "osx"
    LINUX   = "linux"
    OTHER   = "other"


class Architecture(str, Enum):
    X64   = "x64"
    X86   = "x86"
    ARM64 = "arm64"
    ARM   = "arm"
    OTHER = "other"


@dataclass
class HostInfo:
    """
    Snapshot of the process/OS signals identity inference depends on.

    Produced by HostProbe.probe() for the current machine, or built by hand
    (tests, embedding hosts) to describe a synthetic environment.
    """
    os_platform:          OSPlatform
    architecture:         Architecture
    is_core_runtime:      bool
    toolchain_dir:        str                   # fallback install location; holds FSharp.Core.dll
    implementation_dir:   Optional[str] = None  # directory of the running core library
    entry_assembly:       Optional[str] = None  # entry binary; its .deps.json is the dependency manifest
    core_library:         Optional[str] = None  # mscorlib.dll / System.Private.CoreLib.dll
    value_tuple_assembly: Optional[str] = None  # location of the loaded System.ValueTuple, if any

    @property
    def is_windows(self) -> bool:
        return self.os_platform == OSPlatform.WINDOWS

    def __str__(self) -> str:
        flavor = "core" if self.is_core_runtime else "desktop"
        return f"{self.os_platform.value}/{self.architecture.value} ({flavor})"
