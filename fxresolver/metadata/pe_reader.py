"""
PeMetadataReader — pure-Python reader for managed (ECMA-335) PE modules.

Works cross-platform (no ctypes, no runtime required). Reading a module:
  1. DOS header → PE signature → COFF header → optional header
  2. Data directory 14 (CLR runtime header) → metadata root ("BSJB")
  3. Stream headers → #~ / #- tables stream and #Strings heap
  4. Row sizes of every table before AssemblyRef (0x23), then the
     AssemblyRef rows themselves

Native DLLs, truncated files and anything else that is not a managed
module raise MetadataReadError.
"""

import logging
import struct
from pathlib import Path
from typing import Optional

from fxresolver.exceptions import MetadataReadError
from .base import MetadataReader, ModuleMetadata

__all__ = ["PeImage", "PeMetadataReader"]

logger = logging.getLogger(__name__)

# ── Constants ─────────────────────────────────────────────────────────────────

_PE32_MAGIC      = 0x10B
_PE32_PLUS_MAGIC = 0x20B
_CLR_DIRECTORY   = 14
_METADATA_MAGIC  = 0x424A5342   # "BSJB"

_TABLE_ASSEMBLY      = 0x20
_TABLE_ASSEMBLY_REF  = 0x23

# Coded index kinds: (tag bits, tables). Unused tag slots are omitted since
# only the largest row count matters for the index width.
_CODED: dict[str, tuple[int, tuple[int, ...]]] = {
    "TypeDefOrRef":        (2, (0x02, 0x01, 0x1B)),
    "HasConstant":         (2, (0x04, 0x08, 0x17)),
    "HasCustomAttribute":  (5, (0x06, 0x04, 0x01, 0x02, 0x08, 0x09, 0x0A, 0x00,
                                0x0E, 0x17, 0x14, 0x11, 0x1A, 0x1B, 0x20, 0x23,
                                0x26, 0x27, 0x28, 0x2A, 0x2C, 0x2B)),
    "HasFieldMarshal":     (1, (0x04, 0x08)),
    "HasDeclSecurity":     (2, (0x02, 0x06, 0x20)),
    "MemberRefParent":     (3, (0x02, 0x01, 0x1A, 0x06, 0x1B)),
    "HasSemantics":        (1, (0x14, 0x17)),
    "MethodDefOrRef":      (1, (0x06, 0x0A)),
    "MemberForwarded":     (1, (0x04, 0x06)),
    "CustomAttributeType": (3, (0x06, 0x0A)),
    "ResolutionScope":     (2, (0x00, 0x1A, 0x23, 0x01)),
}

# Column layout of every table up to and including AssemblyRef.
#   int     → fixed width in bytes
#   "s"/"g"/"b" → #Strings / #GUID / #Blob heap index
#   ("t", n) → simple index into table n
#   ("c", kind) → coded index
_SCHEMA: dict[int, tuple] = {
    0x00: (2, "s", "g", "g", "g"),                                  # Module
    0x01: (("c", "ResolutionScope"), "s", "s"),                     # TypeRef
    0x02: (4, "s", "s", ("c", "TypeDefOrRef"), ("t", 0x04), ("t", 0x06)),  # TypeDef
    0x03: (("t", 0x04),),                                           # FieldPtr
    0x04: (2, "s", "b"),                                            # Field
    0x05: (("t", 0x06),),                                           # MethodPtr
    0x06: (4, 2, 2, "s", "b", ("t", 0x08)),                         # MethodDef
    0x07: (("t", 0x08),),                                           # ParamPtr
    0x08: (2, 2, "s"),                                              # Param
    0x09: (("t", 0x02), ("c", "TypeDefOrRef")),                     # InterfaceImpl
    0x0A: (("c", "MemberRefParent"), "s", "b"),                     # MemberRef
    0x0B: (2, ("c", "HasConstant"), "b"),                           # Constant
    0x0C: (("c", "HasCustomAttribute"), ("c", "CustomAttributeType"), "b"),  # CustomAttribute
    0x0D: (("c", "HasFieldMarshal"), "b"),                          # FieldMarshal
    0x0E: (2, ("c", "HasDeclSecurity"), "b"),                       # DeclSecurity
    0x0F: (2, 4, ("t", 0x02)),                                      # ClassLayout
    0x10: (4, ("t", 0x04)),                                         # FieldLayout
    0x11: ("b",),                                                   # StandAloneSig
    0x12: (("t", 0x02), ("t", 0x14)),                               # EventMap
    0x13: (("t", 0x14),),                                           # EventPtr
    0x14: (2, "s", ("c", "TypeDefOrRef")),                          # Event
    0x15: (("t", 0x02), ("t", 0x17)),                               # PropertyMap
    0x16: (("t", 0x17),),                                           # PropertyPtr
    0x17: (2, "s", "b"),                                            # Property
    0x18: (2, ("t", 0x06), ("c", "HasSemantics")),                  # MethodSemantics
    0x19: (("t", 0x02), ("c", "MethodDefOrRef"), ("c", "MethodDefOrRef")),  # MethodImpl
    0x1A: ("s",),                                                   # ModuleRef
    0x1B: ("b",),                                                   # TypeSpec
    0x1C: (2, ("c", "MemberForwarded"), "s", ("t", 0x1A)),          # ImplMap
    0x1D: (4, ("t", 0x04)),                                         # FieldRVA
    0x1E: (4, 4),                                                   # EncLog
    0x1F: (4,),                                                     # EncMap
    0x20: (4, 2, 2, 2, 2, 4, "b", "s", "s"),                        # Assembly
    0x21: (4,),                                                     # AssemblyProcessor
    0x22: (4, 4, 4),                                                # AssemblyOS
    0x23: (2, 2, 2, 2, 4, "b", "s", "s", "b"),                      # AssemblyRef
}


class PeImage:
    """
    Section-aware view over the raw bytes of a PE file.
    Only the pieces needed to reach the CLR metadata are decoded.
    """

    def __init__(self, data: bytes) -> None:
        self.data = data
        try:
            self._parse_headers()
        except (struct.error, IndexError) as exc:
            raise MetadataReadError(f"Truncated PE image: {exc}") from exc

    def _parse_headers(self) -> None:
        data = self.data
        if data[:2] != b"MZ":
            raise MetadataReadError("Missing MZ signature")
        pe_offset = struct.unpack_from("<I", data, 0x3C)[0]
        if data[pe_offset:pe_offset + 4] != b"PE\x00\x00":
            raise MetadataReadError("Missing PE signature")

        coff = pe_offset + 4
        n_sections = struct.unpack_from("<H", data, coff + 2)[0]
        opt_size   = struct.unpack_from("<H", data, coff + 16)[0]
        opt = coff + 20

        magic = struct.unpack_from("<H", data, opt)[0]
        if magic == _PE32_MAGIC:
            n_dirs_at, dirs_at = opt + 92, opt + 96
        elif magic == _PE32_PLUS_MAGIC:
            n_dirs_at, dirs_at = opt + 108, opt + 112
        else:
            raise MetadataReadError(f"Unknown optional header magic 0x{magic:X}")

        n_dirs = struct.unpack_from("<I", data, n_dirs_at)[0]
        if n_dirs <= _CLR_DIRECTORY:
            self.clr_rva = 0
        else:
            self.clr_rva = struct.unpack_from("<I", data, dirs_at + _CLR_DIRECTORY * 8)[0]

        # (virtual address, virtual extent, raw pointer)
        self.sections: list[tuple[int, int, int]] = []
        sec = opt + opt_size
        for i in range(n_sections):
            vsize, va, raw_size, raw_ptr = struct.unpack_from("<IIII", data, sec + i * 40 + 8)
            self.sections.append((va, max(vsize, raw_size), raw_ptr))

    @property
    def is_managed(self) -> bool:
        return self.clr_rva != 0

    def rva_to_offset(self, rva: int) -> int:
        for va, extent, raw_ptr in self.sections:
            if va <= rva < va + extent:
                return rva - va + raw_ptr
        raise MetadataReadError(f"RVA 0x{rva:X} is outside every section")


class _MetadataTables:
    """Decoded #~ stream header plus the heaps needed to read names."""

    def __init__(self, image: PeImage) -> None:
        data = image.data
        cli = image.rva_to_offset(image.clr_rva)
        md_rva = struct.unpack_from("<I", data, cli + 8)[0]
        root = image.rva_to_offset(md_rva)

        if struct.unpack_from("<I", data, root)[0] != _METADATA_MAGIC:
            raise MetadataReadError("Missing metadata signature")

        version_len = struct.unpack_from("<I", data, root + 12)[0]
        pos = root + 16 + version_len
        n_streams = struct.unpack_from("<H", data, pos + 2)[0]
        pos += 4

        streams: dict[str, int] = {}
        for _ in range(n_streams):
            offset = struct.unpack_from("<I", data, pos)[0]
            end = data.index(b"\x00", pos + 8)
            name = data[pos + 8:end].decode("ascii", errors="replace")
            streams[name] = root + offset
            pos += 8 + ((end - (pos + 8) + 1 + 3) & ~3)

        tables_at = streams.get("#~", streams.get("#-"))
        if tables_at is None or "#Strings" not in streams:
            raise MetadataReadError("Metadata has no tables stream")
        self._data = data
        self._strings_at = streams["#Strings"]

        heap_sizes = data[tables_at + 6]
        valid = struct.unpack_from("<Q", data, tables_at + 8)[0]
        pos = tables_at + 24
        self.rows = [0] * 64
        for table in range(64):
            if valid >> table & 1:
                self.rows[table] = struct.unpack_from("<I", data, pos)[0]
                pos += 4
        if heap_sizes & 0x40:
            pos += 4

        self._str_width  = 4 if heap_sizes & 0x01 else 2
        self._guid_width = 4 if heap_sizes & 0x02 else 2
        self._blob_width = 4 if heap_sizes & 0x04 else 2

        # Start offset of each table up to AssemblyRef.
        self.table_at: dict[int, int] = {}
        for table in range(_TABLE_ASSEMBLY_REF + 1):
            self.table_at[table] = pos
            pos += self.rows[table] * self.row_size(table)

    # ── Column widths ─────────────────────────────────────────────────────────

    def _column_width(self, column) -> int:
        if isinstance(column, int):
            return column
        if column == "s":
            return self._str_width
        if column == "g":
            return self._guid_width
        if column == "b":
            return self._blob_width
        kind, target = column
        if kind == "t":
            return 2 if self.rows[target] < 0x10000 else 4
        bits, tables = _CODED[target]
        largest = max(self.rows[t] for t in tables)
        return 2 if largest < (1 << (16 - bits)) else 4

    def row_size(self, table: int) -> int:
        return sum(self._column_width(c) for c in _SCHEMA[table])

    # ── Row access ────────────────────────────────────────────────────────────

    def read_column(self, table: int, row: int, column: int) -> int:
        """Raw integer value of `column` in 0-based `row` of `table`."""
        schema = _SCHEMA[table]
        pos = self.table_at[table] + row * self.row_size(table)
        pos += sum(self._column_width(c) for c in schema[:column])
        width = self._column_width(schema[column])
        fmt = {1: "<B", 2: "<H", 4: "<I"}[width]
        return struct.unpack_from(fmt, self._data, pos)[0]

    def string(self, index: int) -> str:
        start = self._strings_at + index
        end = self._data.index(b"\x00", start)
        return self._data[start:end].decode("utf-8", errors="replace")


class PeMetadataReader(MetadataReader):
    """MetadataReader for on-disk managed PE modules."""

    # Column index of Name in the Assembly / AssemblyRef schemas
    _ASSEMBLY_NAME_COLUMN     = 7
    _ASSEMBLY_REF_NAME_COLUMN = 6

    def open(self, path: str, minimal: bool = True) -> ModuleMetadata:
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise MetadataReadError(f"Cannot read {path}: {exc}") from exc

        image = PeImage(data)
        if not image.is_managed:
            raise MetadataReadError(f"Not a managed module: {path}")

        try:
            tables = _MetadataTables(image)
            references = [
                tables.string(tables.read_column(
                    _TABLE_ASSEMBLY_REF, row, self._ASSEMBLY_REF_NAME_COLUMN))
                for row in range(tables.rows[_TABLE_ASSEMBLY_REF])
            ]
            name = self._assembly_name(tables)
        except (struct.error, IndexError, ValueError) as exc:
            raise MetadataReadError(f"Corrupt metadata in {path}: {exc}") from exc

        logger.debug("Read %s: %d assembly references", path, len(references))
        return ModuleMetadata(path=str(path), name=name or "", assembly_references=references)

    def _assembly_name(self, tables: _MetadataTables) -> Optional[str]:
        if not tables.rows[_TABLE_ASSEMBLY]:
            return None
        return tables.string(tables.read_column(_TABLE_ASSEMBLY, 0, self._ASSEMBLY_NAME_COLUMN))
