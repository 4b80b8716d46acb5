"""
Static configuration data: names, moniker tables and reference lists.

Kept apart from the algorithms so the tables can be updated without
touching any resolution logic.
"""

from .monikers import (
    DEFAULT_CORE_MONIKER,
    DEFAULT_DESKTOP_CORE_LIBRARY_VERSION,
    DEFAULT_DESKTOP_MONIKER,
    DESKTOP_VERSION_MONIKERS,
)
from .names import (
    CORE_LIBRARY_NAME,
    CORE_RUNTIME_PACKAGE_NAME,
    DEFAULT_SDK_RID,
    DEPS_MANIFEST_EXTENSION,
    DEPS_TFM_PREFIX,
    EXCLUDED_ASSEMBLY_NAMES,
    FSHARP_CORE_LIBRARY_NAME,
    FSI_LIBRARY_NAME,
    REFERENCE_PACK_PACKAGE_NAME,
    SDK_MANIFEST_FILE,
    TFM_PREFIX,
    VALUE_TUPLE_NAME,
)
from .reference_sets import (
    DESKTOP_DEFAULT_REFERENCES_HEAD,
    DESKTOP_DEFAULT_REFERENCES_TAIL,
    SYSTEM_ASSEMBLY_NAMES,
)

__all__ = [
    "CORE_LIBRARY_NAME",
    "CORE_RUNTIME_PACKAGE_NAME",
    "DEFAULT_CORE_MONIKER",
    "DEFAULT_DESKTOP_CORE_LIBRARY_VERSION",
    "DEFAULT_DESKTOP_MONIKER",
    "DEFAULT_SDK_RID",
    "DEPS_MANIFEST_EXTENSION",
    "DEPS_TFM_PREFIX",
    "DESKTOP_DEFAULT_REFERENCES_HEAD",
    "DESKTOP_DEFAULT_REFERENCES_TAIL",
    "DESKTOP_VERSION_MONIKERS",
    "EXCLUDED_ASSEMBLY_NAMES",
    "FSHARP_CORE_LIBRARY_NAME",
    "FSI_LIBRARY_NAME",
    "REFERENCE_PACK_PACKAGE_NAME",
    "SDK_MANIFEST_FILE",
    "SYSTEM_ASSEMBLY_NAMES",
    "TFM_PREFIX",
    "VALUE_TUPLE_NAME",
]
