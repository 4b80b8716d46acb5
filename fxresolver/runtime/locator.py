"""
RuntimeLocator — find the shared runtime directory and its version.

Two sources, in order:
  1. An explicit SDK root: its dotnet.runtimeconfig.json names the runtime
     version, and the runtime lives at <sdk>/../../shared/Microsoft.NETCore.App/<ver>
  2. The running implementation directory reported by the host (falling
     back to the toolchain install location); its name is the version
"""

import logging
import os
from typing import Optional

from fxresolver.data import CORE_RUNTIME_PACKAGE_NAME, SDK_MANIFEST_FILE
from fxresolver.exceptions import ManifestError, RuntimeNotFoundError
from fxresolver.host.models import HostInfo
from .manifest import extract_field, read_manifest

__all__ = ["RuntimeLocator", "read_sdk_manifest_field"]

logger = logging.getLogger(__name__)


def read_sdk_manifest_field(sdk_root: str, field: str) -> str:
    """
    Read a mandatory field from <sdk_root>/dotnet.runtimeconfig.json.

    Raises:
        RuntimeNotFoundError: The manifest cannot be read.
        ManifestError: The manifest has no such field.
    """
    manifest_path = os.path.join(sdk_root, SDK_MANIFEST_FILE)
    text = read_manifest(manifest_path)
    if text is None:
        raise RuntimeNotFoundError(f"SDK manifest not found: {manifest_path}")
    value = extract_field(text, field)
    if not value:
        raise ManifestError(f"SDK manifest {manifest_path} has no '{field}' field")
    return value


class RuntimeLocator:
    """Resolve (runtime_dir, runtime_version) for a host."""

    def __init__(self, host: HostInfo) -> None:
        self._host = host

    def locate(self, sdk_root: Optional[str] = None) -> tuple[str, str]:
        """
        Returns:
            (runtime_dir, runtime_version); runtime_dir exists.

        Raises:
            RuntimeNotFoundError: No runtime directory could be established.
        """
        if sdk_root:
            return self._from_sdk(sdk_root)
        return self._from_host()

    def _from_sdk(self, sdk_root: str) -> tuple[str, str]:
        version = read_sdk_manifest_field(sdk_root, "version")
        path = os.path.normpath(os.path.abspath(
            os.path.join(sdk_root, "..", "..", "shared", CORE_RUNTIME_PACKAGE_NAME, version)
        ))
        if not os.path.isdir(path):
            raise RuntimeNotFoundError(f"runtime for sdk '{sdk_root}' not found")
        logger.debug("SDK %s selects runtime %s at %s", sdk_root, version, path)
        return path, version

    def _from_host(self) -> tuple[str, str]:
        path = self._host.implementation_dir
        if not path or not path.strip():
            path = self._host.toolchain_dir
        if not path or not os.path.isdir(path):
            raise RuntimeNotFoundError(f"Runtime directory does not exist: {path!r}")
        path = os.path.normpath(os.path.abspath(path))
        return path, os.path.basename(path)
