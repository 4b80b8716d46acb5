"""
Default reference sets for scripts and files orphaned from a project.

These references are
  (a) part of the environment every script is checked in, and
  (b) the environment for source files with no project context.
"""

import logging
import os
from typing import Optional

from fxresolver.data import (
    DESKTOP_DEFAULT_REFERENCES_HEAD,
    DESKTOP_DEFAULT_REFERENCES_TAIL,
    FSHARP_CORE_LIBRARY_NAME,
    FSI_LIBRARY_NAME,
    VALUE_TUPLE_NAME,
)
from fxresolver.host.models import HostInfo

__all__ = [
    "default_fsharp_core_location",
    "default_fsi_library_location",
    "find_value_tuple_reference",
    "desktop_default_references",
]

logger = logging.getLogger(__name__)

_VALUE_TUPLE_FILE = VALUE_TUPLE_NAME + ".dll"


def default_fsharp_core_location(host: HostInfo) -> str:
    return os.path.join(host.toolchain_dir, FSHARP_CORE_LIBRARY_NAME + ".dll")


def default_fsi_library_location(host: HostInfo) -> str:
    return os.path.join(host.toolchain_dir, FSI_LIBRARY_NAME + ".dll")


def find_value_tuple_reference(
    host: HostInfo, runtime_dir: str, sdk_root: Optional[str]
) -> Optional[str]:
    """
    Locate System.ValueTuple.dll, first match wins:
      1. <runtime_dir>/System.ValueTuple.dll, when resolving for an SDK
      2. the System.ValueTuple assembly the host has loaded
      3. System.ValueTuple.dll shipped next to the toolchain
    Returns None if none exists.
    """
    if sdk_root:
        probe = os.path.join(runtime_dir, _VALUE_TUPLE_FILE)
        if os.path.isfile(probe):
            return probe

    loaded = host.value_tuple_assembly
    if loaded and os.path.basename(loaded).lower().startswith(VALUE_TUPLE_NAME.lower()):
        return loaded

    beside = os.path.join(host.toolchain_dir, _VALUE_TUPLE_FILE)
    if os.path.isfile(beside):
        return beside

    logger.debug("No %s found", _VALUE_TUPLE_FILE)
    return None


def desktop_default_references(
    use_interactive_support_lib: bool, value_tuple: Optional[str]
) -> list[str]:
    """Fixed desktop reference list, with the language libraries spliced in."""
    refs = list(DESKTOP_DEFAULT_REFERENCES_HEAD)
    refs.append(FSHARP_CORE_LIBRARY_NAME)
    if use_interactive_support_lib:
        refs.append(FSI_LIBRARY_NAME)
    # always reference System.ValueTuple in scripts and out-of-project sources
    if value_tuple:
        refs.append(value_tuple)
    refs.extend(DESKTOP_DEFAULT_REFERENCES_TAIL)
    return refs
