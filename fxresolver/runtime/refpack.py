"""
ReferencePackLocator — find pre-built reference assemblies for a runtime.

Layout, relative to the shared runtime directory::

    dotnet/shared/Microsoft.NETCore.App/<version>/                  ← runtime_dir
    dotnet/packs/Microsoft.NETCore.App.Ref/<version>/ref/netcoreappN.N/

The runtime and pack share <version>, so the pack always matches the
runtime being resolved against. The highest netcoreapp TFM directory wins.
"""

import logging
import os
from typing import Optional

from fxresolver.data import REFERENCE_PACK_PACKAGE_NAME, TFM_PREFIX

__all__ = ["ReferencePackLocator", "parse_tfm_version"]

logger = logging.getLogger(__name__)


def parse_tfm_version(name: str) -> Optional[float]:
    """
    Decimal version of a "netcoreappN.N" directory name, or None.

    >>> parse_tfm_version("netcoreapp3.1")
    3.1
    """
    if not name.lower().startswith(TFM_PREFIX):
        return None
    suffix = name[len(TFM_PREFIX):]
    # digits and at most one decimal point; no sign, no exponent
    if not suffix or suffix.count(".") > 1 or not suffix.replace(".", "").isdigit():
        return None
    try:
        return float(suffix)
    except ValueError:
        return None


class ReferencePackLocator:
    """Locate the reference pack directory matching a runtime."""

    def __init__(self, runtime_dir: str, runtime_version: str) -> None:
        self._runtime_dir = runtime_dir
        self._runtime_version = runtime_version

    def root(self) -> Optional[str]:
        """packs/Microsoft.NETCore.App.Ref next to the runtime, if it exists."""
        path = os.path.normpath(os.path.join(
            self._runtime_dir, "..", "..", "..", "packs", REFERENCE_PACK_PACKAGE_NAME
        ))
        return path if os.path.isdir(path) else None

    def locate(self) -> Optional[str]:
        """Directory of the highest netcoreapp TFM under <root>/<version>/ref."""
        root = self.root()
        if root is None:
            return None
        ref = os.path.join(root, self._runtime_version, "ref")
        try:
            names = sorted(e.name for e in os.scandir(ref) if e.is_dir())
        except OSError as exc:
            logger.debug("Cannot list reference pack %s: %s", ref, exc)
            return None
        if not names:
            return None
        highest = sorted(names, key=self._sort_key)[-1]
        return os.path.join(ref, highest)

    def contains(self, path: str) -> bool:
        """True if `path` lives somewhere under the reference pack root."""
        root = self.root()
        if root is None:
            return False
        directory = os.path.normcase(os.path.normpath(os.path.dirname(os.path.abspath(path)))).lower()
        root = os.path.normcase(root).lower()
        return directory == root or directory.startswith(root + os.sep)

    @staticmethod
    def _sort_key(name: str) -> tuple[bool, float]:
        # Unparseable names sort below every netcoreapp TFM and tie among themselves.
        version = parse_tfm_version(name)
        return (version is not None, version or 0.0)
