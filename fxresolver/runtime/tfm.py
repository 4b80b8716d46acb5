"""
TargetFrameworkResolver — infer the target-framework moniker (TFM).

Priority (first signal wins):
  1. SDK root known          → "tfm" field of dotnet.runtimeconfig.json, verbatim
  2. Entry .deps.json        → "netcoreapp" + version of the .NETCoreApp dependency
  3. Core runtime, no deps   → DEFAULT_CORE_MONIKER ("netcoreapp3.1")
  4. Desktop runtime         → core library file version looked up in
                               DESKTOP_VERSION_MONIKERS, else "net48"
"""

import logging
import os
from typing import Callable, Optional

from fxresolver.data import (
    DEFAULT_CORE_MONIKER,
    DEFAULT_DESKTOP_CORE_LIBRARY_VERSION,
    DEFAULT_DESKTOP_MONIKER,
    DEPS_MANIFEST_EXTENSION,
    DESKTOP_VERSION_MONIKERS,
    TFM_PREFIX,
)
from fxresolver.host.models import HostInfo
from fxresolver.metadata import read_file_version
from .locator import read_sdk_manifest_field
from .manifest import extract_deps_framework_version, read_manifest

__all__ = ["TargetFrameworkResolver", "match_desktop_moniker"]

logger = logging.getLogger(__name__)

Version4 = tuple[int, int, int, int]


def match_desktop_moniker(version: Version4) -> str:
    """
    First row of DESKTOP_VERSION_MONIKERS whose thresholds are all <= `version`.

    Each component is compared on its own, so this is not a lexicographic
    version ordering: (4, 8, 100, 0) fails every 4.8 and 4.7 row on build
    and lands on "net462" via the (4, 6, 57, 0) row.
    """
    major, minor, build, revision = version
    for t_major, t_minor, t_build, t_revision, moniker in DESKTOP_VERSION_MONIKERS:
        if (major >= t_major and minor >= t_minor
                and build >= t_build and revision >= t_revision):
            return moniker
    return DEFAULT_DESKTOP_MONIKER


class TargetFrameworkResolver:
    """Resolve the TFM for a host, optionally pinned by an SDK root."""

    def __init__(
        self,
        host: HostInfo,
        file_version_reader: Callable[[str], Optional[Version4]] = read_file_version,
    ) -> None:
        self._host = host
        self._read_file_version = file_version_reader

    def resolve(self, sdk_root: Optional[str] = None) -> str:
        if sdk_root:
            return read_sdk_manifest_field(sdk_root, "tfm")

        tfm = self.try_running_tfm()
        if tfm:
            return tfm
        return self.desktop_tfm()

    def try_running_tfm(self) -> Optional[str]:
        """TFM of the running core runtime, or None on a desktop runtime."""
        version = self._deps_framework_version()
        if version:
            return TFM_PREFIX + version
        if self._host.is_core_runtime:
            logger.debug("No dependency manifest; assuming %s", DEFAULT_CORE_MONIKER)
            return DEFAULT_CORE_MONIKER
        return None

    def desktop_tfm(self) -> str:
        version = self._desktop_core_library_version()
        moniker = match_desktop_moniker(version)
        logger.debug("Desktop core library %s → %s", ".".join(map(str, version)), moniker)
        return moniker

    # ── Probes ────────────────────────────────────────────────────────────────

    def _deps_framework_version(self) -> Optional[str]:
        entry = self._host.entry_assembly
        if not entry:
            return None
        deps_path = os.path.splitext(entry)[0] + DEPS_MANIFEST_EXTENSION
        text = read_manifest(deps_path)
        if text is None:
            return None
        return extract_deps_framework_version(text)

    def _desktop_core_library_version(self) -> Version4:
        if not self._host.core_library:
            return DEFAULT_DESKTOP_CORE_LIBRARY_VERSION
        version = self._read_file_version(self._host.core_library)
        if version is None or len(version) != 4:
            logger.warning("No file version in %s; assuming %s",
                           self._host.core_library, DEFAULT_DESKTOP_MONIKER)
            return DEFAULT_DESKTOP_CORE_LIBRARY_VERSION
        return version
