"""Tests for file system access."""

from typegen.codegen.core.storage import FileSystem, MemoryFileSystem


def test_write_creates_directories(tmp_path):
    file_system = FileSystem()
    path = tmp_path / "a" / "b" / "user.ts"
    file_system.write_text(path, "content\r\n")

    assert path.read_bytes() == b"content\r\n"
    assert file_system.read_text(path) == "content\r\n"


def test_read_missing_file(tmp_path):
    assert FileSystem().read_text(tmp_path / "missing.ts") is None


def test_memory_file_system(tmp_path):
    file_system = MemoryFileSystem({"out/a.ts": "a"})
    file_system.write_text("out/sub/b.ts", "b")

    assert file_system.read_text("out/a.ts") == "a"
    assert file_system.read_text("out/missing.ts") is None

    file_system.clear_directory("out/sub")
    assert file_system.files == {"out/a.ts": "a"}


def test_memory_file_system_read_through(tmp_path):
    existing = tmp_path / "user.ts"
    existing.write_text("on disk", encoding="utf-8")

    file_system = MemoryFileSystem(read_through=True)
    assert file_system.read_text(existing) == "on disk"

    file_system.write_text(existing, "in memory")
    assert file_system.read_text(existing) == "in memory"
    assert existing.read_text(encoding="utf-8") == "on disk"
