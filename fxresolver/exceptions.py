"""
Exception hierarchy for fxresolver.
Every error the package raises derives from FxResolverError.
"""

__all__ = [
    "FxResolverError",
    "RuntimeNotFoundError",
    "ManifestError",
    "MetadataReadError",
]


class FxResolverError(Exception):
    """Root exception for all fxresolver errors."""


# ── Runtime identity ──────────────────────────────────────────────────────────

class RuntimeNotFoundError(FxResolverError):
    """Raised when the mandatory runtime directory cannot be located."""


class ManifestError(RuntimeNotFoundError):
    """Raised when an SDK manifest is missing a required field."""


# ── Metadata ──────────────────────────────────────────────────────────────────

class MetadataReadError(FxResolverError):
    """Raised when a binary is not a readable managed module."""
