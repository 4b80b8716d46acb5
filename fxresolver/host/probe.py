"""
HostProbe — process/OS introspection, no .NET process required.

Collects the signals FxResolver infers identity from:
  1. OS platform and process architecture      (platform module)
  2. Shared runtime directory                  (config → DOTNET_ROOT → dotnet on PATH)
  3. Toolchain directory with FSharp.Core.dll  (config → newest <root>/sdk/<ver>/FSharp)
  4. Desktop core library on Windows hosts     (%WINDIR%/Microsoft.NET/Framework*/v4.0.30319)

Every step is a best-effort probe: a missing signal leaves the field empty
and the resolver falls back accordingly.
"""

import logging
import os
import platform
import re
import shutil
from pathlib import Path
from typing import Optional

from fxresolver.config import ResolverConfig
from fxresolver.data import CORE_RUNTIME_PACKAGE_NAME
from .models import Architecture, HostInfo, OSPlatform

__all__ = ["HostProbe", "probe_host"]

logger = logging.getLogger(__name__)

# ── Constants ─────────────────────────────────────────────────────────────────

_OS_MAP = {
    "windows": OSPlatform.WINDOWS,
    "darwin":  OSPlatform.OSX,
    "linux":   OSPlatform.LINUX,
}

_ARCH_MAP = {
    "amd64":   Architecture.X64,
    "x86_64":  Architecture.X64,
    "x64":     Architecture.X64,
    "i386":    Architecture.X86,
    "i486":    Architecture.X86,
    "i586":    Architecture.X86,
    "i686":    Architecture.X86,
    "x86":     Architecture.X86,
    "aarch64": Architecture.ARM64,
    "arm64":   Architecture.ARM64,
}

_ARM_RE     = re.compile(r"^arm", re.IGNORECASE)
_VERSION_RE = re.compile(r"^\d+(\.\d+)*")

_DESKTOP_FRAMEWORK_DIRS = [
    "Microsoft.NET/Framework64/v4.0.30319",
    "Microsoft.NET/Framework/v4.0.30319",
]


class HostProbe:
    """
    Build a HostInfo describing the current machine.

    Usage::

        host = HostProbe(ResolverConfig.from_env()).probe()
        print(host)  # linux/x64 (core)
    """

    def __init__(self, config: Optional[ResolverConfig] = None) -> None:
        self._config = config or ResolverConfig()

    def probe(self) -> HostInfo:
        os_platform = self.map_os(platform.system())
        architecture = self.map_architecture(platform.machine())

        dotnet_root = self._find_dotnet_root()
        implementation_dir = self._find_runtime_dir(dotnet_root)
        is_core = implementation_dir is not None
        core_library: Optional[str] = None

        if is_core:
            corelib = Path(implementation_dir) / "System.Private.CoreLib.dll"
            core_library = str(corelib) if corelib.exists() else None
        elif os_platform == OSPlatform.WINDOWS:
            core_library = self._find_desktop_core_library()
            if core_library:
                implementation_dir = str(Path(core_library).parent)

        toolchain_dir = self._find_toolchain_dir(dotnet_root) or implementation_dir or os.getcwd()
        entry = Path(toolchain_dir) / "fsc.dll"

        info = HostInfo(
            os_platform=os_platform,
            architecture=architecture,
            is_core_runtime=is_core,
            toolchain_dir=toolchain_dir,
            implementation_dir=implementation_dir,
            entry_assembly=str(entry) if entry.exists() else None,
            core_library=core_library,
        )
        logger.debug("Probed host: %s (runtime dir: %s)", info, implementation_dir)
        return info

    # ── Platform mapping ──────────────────────────────────────────────────────

    @staticmethod
    def map_os(system: str) -> OSPlatform:
        """Map platform.system() output to an OSPlatform."""
        return _OS_MAP.get(system.lower(), OSPlatform.OTHER)

    @staticmethod
    def map_architecture(machine: str) -> Architecture:
        """Map platform.machine() output to an Architecture."""
        arch = _ARCH_MAP.get(machine.lower())
        if arch is not None:
            return arch
        if _ARM_RE.match(machine):
            return Architecture.ARM
        return Architecture.OTHER

    # ── Runtime discovery ─────────────────────────────────────────────────────

    def _find_dotnet_root(self) -> Optional[Path]:
        env_root = os.environ.get("DOTNET_ROOT")
        if env_root and Path(env_root).is_dir():
            return Path(env_root)
        dotnet = shutil.which("dotnet")
        if dotnet:
            return Path(dotnet).resolve().parent
        return None

    def _find_runtime_dir(self, dotnet_root: Optional[Path]) -> Optional[str]:
        if self._config.runtime_dir:
            return self._config.runtime_dir
        if dotnet_root is None:
            return None
        newest = self.newest_version_dir(dotnet_root / "shared" / CORE_RUNTIME_PACKAGE_NAME)
        return str(newest) if newest else None

    def _find_toolchain_dir(self, dotnet_root: Optional[Path]) -> Optional[str]:
        if self._config.toolchain_dir:
            return self._config.toolchain_dir
        if dotnet_root is None:
            return None
        sdk = self.newest_version_dir(dotnet_root / "sdk")
        if sdk and (sdk / "FSharp").is_dir():
            return str(sdk / "FSharp")
        return None

    @staticmethod
    def _find_desktop_core_library() -> Optional[str]:
        windir = os.environ.get("WINDIR")
        if not windir:
            return None
        for candidate in _DESKTOP_FRAMEWORK_DIRS:
            mscorlib = Path(windir) / candidate / "mscorlib.dll"
            if mscorlib.exists():
                return str(mscorlib)
        return None

    @staticmethod
    def newest_version_dir(directory: Path) -> Optional[Path]:
        """Return the sub-directory with the highest dotted version name, if any."""
        try:
            entries = [e for e in directory.iterdir() if e.is_dir()]
        except OSError:
            return None

        def key(entry: Path) -> tuple[int, ...]:
            m = _VERSION_RE.match(entry.name)
            return tuple(int(p) for p in m.group(0).split(".")) if m else ()

        versioned = [e for e in entries if key(e)]
        return max(versioned, key=key) if versioned else None


def probe_host(config: Optional[ResolverConfig] = None) -> HostInfo:
    """Convenience wrapper: HostProbe(config).probe()."""
    return HostProbe(config).probe()
