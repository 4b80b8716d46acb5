"""
Reference resolution — turns a runtime identity into compile-time references.
"""

from .defaults import (
    default_fsharp_core_location,
    default_fsi_library_location,
    desktop_default_references,
    find_value_tuple_reference,
)
from .fx_resolver import FxResolver

__all__ = [
    "FxResolver",
    "default_fsharp_core_location",
    "default_fsi_library_location",
    "desktop_default_references",
    "find_value_tuple_reference",
]
