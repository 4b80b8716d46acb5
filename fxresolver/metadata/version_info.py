"""File-version extraction from a PE binary's VS_VERSION_INFO resource."""

import struct
from pathlib import Path
from typing import Optional

__all__ = ["read_file_version"]

# VS_FIXEDFILEINFO.dwSignature, little-endian
_FIXED_FILE_INFO_MAGIC = b"\xbd\x04\xef\xfe"


def read_file_version(path: str) -> Optional[tuple[int, int, int, int]]:
    """
    Read the four-part FileVersion (major, minor, build, revision) of a PE file.

    Pure Python: scans for the VS_FIXEDFILEINFO signature instead of walking
    the resource directory. Returns None if the file is unreadable or carries
    no version resource.
    """
    try:
        data = Path(path).read_bytes()
        idx = data.find(_FIXED_FILE_INFO_MAGIC)
        if idx == -1:
            return None
        # dwStrucVersion follows the signature; dwFileVersionMS / LS follow that.
        # Each DWORD packs two WORDs: (high << 16 | low).
        ms, ls = struct.unpack_from("<II", data, idx + 8)
    except (OSError, struct.error):
        return None
    return (ms >> 16) & 0xFFFF, ms & 0xFFFF, (ls >> 16) & 0xFFFF, ls & 0xFFFF
