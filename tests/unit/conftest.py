"""
Shared fixtures: synthetic hosts, runtime layouts and minimal managed PE files.

No real .NET installation is needed: runtime directories are tmp_path
trees and assemblies are hand-built PE32 images carrying just enough
ECMA-335 metadata (Module, Assembly, AssemblyRef tables) to be read.
"""

import struct
from pathlib import Path
from typing import Optional

import pytest

from fxresolver.host.models import Architecture, HostInfo, OSPlatform

_SECTION_RVA = 0x2000
_SECTION_RAW = 0x200
_CLI_HEADER_SIZE = 72


def _pe_image(section: bytes, clr_rva: int, clr_size: int) -> bytes:
    dos = bytearray(0x40)
    dos[0:2] = b"MZ"
    struct.pack_into("<I", dos, 0x3C, 0x40)

    coff = struct.pack("<HHIIIHH", 0x14C, 1, 0, 0, 0, 224, 0x2102)

    opt = bytearray(224)
    struct.pack_into("<H", opt, 0, 0x10B)          # PE32
    struct.pack_into("<I", opt, 92, 16)            # NumberOfRvaAndSizes
    struct.pack_into("<II", opt, 96 + 14 * 8, clr_rva, clr_size)

    section_header = struct.pack(
        "<8sIIIIIIHHI", b".text", len(section), _SECTION_RVA, len(section),
        _SECTION_RAW, 0, 0, 0, 0, 0x60000020,
    )
    headers = bytes(dos) + b"PE\x00\x00" + coff + bytes(opt) + section_header
    return headers + b"\x00" * (_SECTION_RAW - len(headers)) + section


def _pad4(buf: bytearray) -> bytearray:
    while len(buf) % 4:
        buf.append(0)
    return buf


def build_managed_pe(name: Optional[str], references: list[str]) -> bytes:
    """PE32 image of an assembly `name` referencing `references` by simple name."""
    strings = bytearray(b"\x00")

    def intern(value: str) -> int:
        offset = len(strings)
        strings.extend(value.encode("utf-8") + b"\x00")
        return offset

    module_name = intern((name or "module") + ".dll")
    assembly_name = intern(name) if name else 0
    ref_names = [intern(r) for r in references]
    _pad4(strings)

    valid = 1 << 0x00
    rows = [1]
    if name:
        valid |= 1 << 0x20
        rows.append(1)
    if references:
        valid |= 1 << 0x23
        rows.append(len(references))

    tables = bytearray(struct.pack("<IBBBBQQ", 0, 2, 0, 0, 1, valid, 0))
    for count in rows:
        tables += struct.pack("<I", count)
    tables += struct.pack("<HHHHH", 0, module_name, 1, 0, 0)
    if name:
        tables += struct.pack("<IHHHHIHHH", 0x8004, 1, 0, 0, 0, 0, 0, assembly_name, 0)
    for offset in ref_names:
        tables += struct.pack("<HHHHIHHHH", 4, 0, 0, 0, 0, 0, offset, 0, 0)
    _pad4(tables)

    version = b"v4.0.30319\x00\x00"
    header_len = 16 + len(version) + 4 + 12 + 20
    tables_off = header_len
    strings_off = tables_off + len(tables)

    metadata = struct.pack("<IHHII", 0x424A5342, 1, 1, 0, len(version)) + version
    metadata += struct.pack("<HH", 0, 2)
    metadata += struct.pack("<II", tables_off, len(tables)) + b"#~\x00\x00"
    metadata += struct.pack("<II", strings_off, len(strings)) + b"#Strings\x00\x00\x00\x00"
    metadata += bytes(tables) + bytes(strings)

    md_rva = _SECTION_RVA + _CLI_HEADER_SIZE
    cli = struct.pack("<IHHII", _CLI_HEADER_SIZE, 2, 5, md_rva, len(metadata))
    cli += b"\x00" * (_CLI_HEADER_SIZE - len(cli))

    return _pe_image(cli + metadata, _SECTION_RVA, _CLI_HEADER_SIZE)


def build_native_pe() -> bytes:
    """PE32 image with no CLR header (a native DLL)."""
    return _pe_image(b"\x90" * 64, 0, 0)


@pytest.fixture
def make_assembly():
    """Factory: write a managed PE to `path`, return the path."""
    def _make(path: Path, references: tuple[str, ...] = (), name: Optional[str] = "") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        assembly_name = path.stem if name == "" else name
        path.write_bytes(build_managed_pe(assembly_name, list(references)))
        return path
    return _make


@pytest.fixture
def dotnet_root(tmp_path) -> Path:
    """
    Layout of a core runtime install::

        dotnet/shared/Microsoft.NETCore.App/3.1.8/
        dotnet/sdk/3.1.402/FSharp/
    """
    root = tmp_path / "dotnet"
    (root / "shared" / "Microsoft.NETCore.App" / "3.1.8").mkdir(parents=True)
    (root / "sdk" / "3.1.402" / "FSharp").mkdir(parents=True)
    return root


@pytest.fixture
def runtime_dir(dotnet_root) -> Path:
    return dotnet_root / "shared" / "Microsoft.NETCore.App" / "3.1.8"


@pytest.fixture
def toolchain_dir(dotnet_root) -> Path:
    return dotnet_root / "sdk" / "3.1.402" / "FSharp"


@pytest.fixture
def core_host(runtime_dir, toolchain_dir) -> HostInfo:
    return HostInfo(
        os_platform=OSPlatform.LINUX,
        architecture=Architecture.X64,
        is_core_runtime=True,
        toolchain_dir=str(toolchain_dir),
        implementation_dir=str(runtime_dir),
    )


@pytest.fixture
def desktop_host(tmp_path) -> HostInfo:
    framework = tmp_path / "Windows" / "Microsoft.NET" / "Framework64" / "v4.0.30319"
    framework.mkdir(parents=True)
    toolchain = tmp_path / "FSharp"
    toolchain.mkdir()
    return HostInfo(
        os_platform=OSPlatform.WINDOWS,
        architecture=Architecture.X86,
        is_core_runtime=False,
        toolchain_dir=str(toolchain),
        implementation_dir=str(framework),
    )


@pytest.fixture
def make_native():
    """Factory: write a native (non-managed) PE to `path`, return the path."""
    def _make(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_native_pe())
        return path
    return _make
