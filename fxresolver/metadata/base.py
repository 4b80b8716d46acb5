"""Abstract base class for binary metadata readers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

__all__ = ["ModuleMetadata", "MetadataReader"]


@dataclass
class ModuleMetadata:
    """
    What the resolver needs from one opened module.
    Only simple names are kept; version, culture and key are dropped.
    """
    path:                str
    name:                str = ""   # the module's own assembly name, "" if it has no manifest
    assembly_references: list[str] = field(default_factory=list)


class MetadataReader(ABC):
    """
    Opens a binary module and enumerates its outbound assembly references.
    The closure builder depends only on this interface.
    """

    @abstractmethod
    def open(self, path: str, minimal: bool = True) -> ModuleMetadata:
        """
        Read the module at `path`.

        Args:
            path:    Filesystem path of a .dll / .exe.
            minimal: Parse only what is needed for assembly references.

        Returns:
            ModuleMetadata for the module.

        Raises:
            MetadataReadError: Not a managed module, or unreadable/corrupt.
        """
        ...
