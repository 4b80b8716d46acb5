"""
fxresolver — compile-time reference assemblies for scripts and
project-less source files.

Works out which runtime is active, its target-framework moniker and
platform identifier, then either finds the matching reference pack or
rebuilds an equivalent reference set from the installed runtime's
assembly dependency graph.
"""

from .config import ResolverConfig
from .exceptions import FxResolverError, MetadataReadError, RuntimeNotFoundError
from .resolver import FxResolver

__all__ = [
    "FxResolver",
    "FxResolverError",
    "MetadataReadError",
    "ResolverConfig",
    "RuntimeNotFoundError",
]

__version__ = "0.1.0"
