"""PlatformIdentifierResolver — OS + architecture runtime identifier (RID)."""

from typing import Optional

from fxresolver.host.models import Architecture, HostInfo, OSPlatform

__all__ = ["PlatformIdentifierResolver"]

_BASE_RIDS = {
    OSPlatform.WINDOWS: "win",
    OSPlatform.OSX:     "osx",
}
_DEFAULT_BASE_RID = "linux"

_ARCH_SUFFIXES = {
    Architecture.X64:   "-x64",
    Architecture.X86:   "-x86",
    Architecture.ARM64: "-arm64",
}
_DEFAULT_ARCH_SUFFIX = "-arm"


class PlatformIdentifierResolver:
    """
    Compute a RID such as "win-x64" or "linux-arm64".
    See https://docs.microsoft.com/en-us/dotnet/core/rid-catalog
    """

    def __init__(self, host: HostInfo, explicit_rid: Optional[str] = None) -> None:
        self._host = host
        self._explicit_rid = explicit_rid

    def resolve(self) -> str:
        if self._explicit_rid:
            return self._explicit_rid
        base = _BASE_RIDS.get(self._host.os_platform, _DEFAULT_BASE_RID)
        return base + _ARCH_SUFFIXES.get(self._host.architecture, _DEFAULT_ARCH_SUFFIX)
