"""
Unit tests for the metadata module.

Managed PE images are built by conftest.build_managed_pe; the reader must
decode their AssemblyRef rows exactly and reject everything else.
"""

import struct

import pytest

from fxresolver.exceptions import MetadataReadError
from fxresolver.metadata import PeImage, PeMetadataReader, read_file_version


@pytest.fixture
def reader():
    return PeMetadataReader()


# ── Managed modules ───────────────────────────────────────────────────────────

class TestManagedModules:
    def test_reads_assembly_references(self, reader, make_assembly, tmp_path):
        dll = make_assembly(tmp_path / "B.dll", references=("A", "System.Runtime"))

        meta = reader.open(str(dll))

        assert meta.assembly_references == ["A", "System.Runtime"]

    def test_reads_own_assembly_name(self, reader, make_assembly, tmp_path):
        dll = make_assembly(tmp_path / "file.dll", name="Contoso.Lib")

        assert reader.open(str(dll)).name == "Contoso.Lib"

    def test_module_without_references(self, reader, make_assembly, tmp_path):
        dll = make_assembly(tmp_path / "A.dll")

        meta = reader.open(str(dll))

        assert meta.assembly_references == []
        assert meta.path == str(dll)

    def test_netmodule_without_assembly_row(self, reader, make_assembly, tmp_path):
        dll = make_assembly(tmp_path / "part.netmodule", references=("A",), name=None)

        meta = reader.open(str(dll))

        assert meta.name == ""
        assert meta.assembly_references == ["A"]

    def test_pe_image_reports_managed(self, make_assembly, tmp_path):
        dll = make_assembly(tmp_path / "A.dll")

        assert PeImage(dll.read_bytes()).is_managed


# ── Rejected inputs ───────────────────────────────────────────────────────────

class TestRejectedInputs:
    def test_native_dll_raises(self, reader, make_native, tmp_path):
        dll = make_native(tmp_path / "libnative.dll")

        with pytest.raises(MetadataReadError, match="Not a managed module"):
            reader.open(str(dll))

    def test_not_a_pe_file_raises(self, reader, tmp_path):
        junk = tmp_path / "junk.dll"
        junk.write_bytes(b"this is not a PE file")

        with pytest.raises(MetadataReadError):
            reader.open(str(junk))

    def test_truncated_headers_raise(self, reader, tmp_path):
        stub = tmp_path / "stub.dll"
        stub.write_bytes(b"MZ" + b"\x00" * 10)

        with pytest.raises(MetadataReadError):
            reader.open(str(stub))

    def test_truncated_metadata_raises(self, reader, make_assembly, tmp_path):
        dll = make_assembly(tmp_path / "A.dll", references=("B",))
        dll.write_bytes(dll.read_bytes()[:0x200 + 80])

        with pytest.raises(MetadataReadError):
            reader.open(str(dll))

    def test_missing_file_raises(self, reader, tmp_path):
        with pytest.raises(MetadataReadError):
            reader.open(str(tmp_path / "nope.dll"))


# ── File version ──────────────────────────────────────────────────────────────

class TestReadFileVersion:
    def _write(self, path, major, minor, build, revision):
        fixed = b"\xbd\x04\xef\xfe" + struct.pack(
            "<III", 0x00010000, (major << 16) | minor, (build << 16) | revision
        )
        path.write_bytes(b"\x00" * 128 + fixed + b"\x00" * 32)
        return path

    def test_reads_four_part_version(self, tmp_path):
        dll = self._write(tmp_path / "mscorlib.dll", 4, 8, 4084, 0)

        assert read_file_version(str(dll)) == (4, 8, 4084, 0)

    def test_reads_revision(self, tmp_path):
        dll = self._write(tmp_path / "mscorlib.dll", 4, 0, 30319, 34209)

        assert read_file_version(str(dll)) == (4, 0, 30319, 34209)

    def test_no_version_resource_returns_none(self, tmp_path):
        dll = tmp_path / "plain.dll"
        dll.write_bytes(b"MZ" + b"\x00" * 200)

        assert read_file_version(str(dll)) is None

    def test_missing_file_returns_none(self, tmp_path):
        assert read_file_version(str(tmp_path / "missing.dll")) is None
