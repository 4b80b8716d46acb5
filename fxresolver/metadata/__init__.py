"""
Binary metadata access — the only place that looks inside .dll/.exe files.
"""

from .base import MetadataReader, ModuleMetadata
from .pe_reader import PeImage, PeMetadataReader
from .version_info import read_file_version

__all__ = [
    "MetadataReader",
    "ModuleMetadata",
    "PeImage",
    "PeMetadataReader",
    "read_file_version",
]
