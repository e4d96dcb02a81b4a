import pytest

from simplefs.disk import (
    BLOCK_SIZE,
    DIFFERENT,
    DISK_SIZE,
    IDENTICAL,
    MAX_FILES,
    METADATA_SIZE,
    SIZE_MISMATCH,
    DiskFullError,
    FileEntry,
    FileSystemError,
    SimpleFS,
)


@pytest.fixture
def fs(tmp_path):
    disk = SimpleFS(tmp_path / "disk.sim", tmp_path / "fs.log")
    disk.format()
    return disk


def test_format_creates_zeroed_disk(fs):
    raw = fs.path.read_bytes()
    assert len(raw) == DISK_SIZE
    assert raw == bytes(DISK_SIZE)
    assert fs.entries() == []


def test_create_places_files_in_consecutive_blocks(fs):
    fs.create("a")
    fs.create("b")
    starts = [entry.start for entry in fs.entries()]
    assert starts == [METADATA_SIZE, METADATA_SIZE + BLOCK_SIZE]
    assert fs.exists("a")
    assert fs.size("a") == 0


def test_on_disk_layout(fs):
    fs.create("alpha")
    raw = fs.path.read_bytes()
    assert int.from_bytes(raw[:4], "little") == 1
    assert raw[4:9] == b"alpha"
    assert FileEntry.unpack(raw[4:52]).name == "alpha"


def test_entry_pack_round_trip():
    entry = FileEntry("notes", 12, METADATA_SIZE, 1700000000)
    assert FileEntry.unpack(entry.pack()) == entry


def test_create_duplicate_raises(fs):
    fs.create("a")
    with pytest.raises(FileExistsError):
        fs.create("a")


def test_create_beyond_max_files_raises(fs):
    for number in range(MAX_FILES):
        fs.create(f"f{number}")
    with pytest.raises(DiskFullError):
        fs.create("extra")
    assert len(fs.entries()) == MAX_FILES


def test_long_name_is_clipped(fs):
    long_name = "a" * 40
    fs.create(long_name)
    assert fs.entries()[0].name == long_name[:31]
    assert not fs.exists(long_name)


def test_write_read_round_trip(fs):
    fs.create("a")
    fs.write("a", b"hello world")
    assert fs.read("a", 0, 11) == b"hello world"
    assert fs.read("a", 6, 5) == b"world"
    assert fs.size("a") == len(b"hello world")


def test_write_is_capped_at_one_block(fs):
    fs.create("a")
    fs.write("a", b"x" * (BLOCK_SIZE * 2))
    assert fs.size("a") == BLOCK_SIZE


def test_read_out_of_range_raises(fs):
    fs.create("a")
    fs.write("a", "abc")
    with pytest.raises(FileSystemError):
        fs.read("a", 1, 3)


def test_missing_file_raises(fs):
    with pytest.raises(FileNotFoundError):
        fs.read("nope", 0, 1)
    with pytest.raises(FileNotFoundError):
        fs.size("nope")
    assert not fs.exists("nope")


def test_ls_lines(fs):
    fs.create("a")
    fs.write("a", "hello")
    assert fs.ls() == [f"a - {len('hello')} bytes"]


def test_append_adds_and_caps(fs):
    fs.create("a")
    fs.write("a", "foo")
    fs.append("a", "bar")
    assert fs.read("a", 0, fs.size("a")) == b"foobar"
    fs.append("a", "z" * BLOCK_SIZE)
    assert fs.size("a") == BLOCK_SIZE
    assert fs.read("a", 0, 6) == b"foobar"


def test_truncate_only_shrinks(fs):
    fs.create("a")
    fs.write("a", "abcdef")
    fs.truncate("a", 100)
    assert fs.size("a") == len("abcdef")
    fs.truncate("a", 2)
    assert fs.read("a", 0, 2) == b"ab"
    assert fs.size("a") == 2


def test_delete_keeps_other_files(fs):
    fs.create("a")
    fs.create("b")
    fs.write("b", "bee")
    fs.delete("a")
    assert [entry.name for entry in fs.entries()] == ["b"]
    assert fs.read("b", 0, 3) == b"bee"
    with pytest.raises(FileNotFoundError):
        fs.delete("a")


def test_rename_and_mv(fs):
    fs.create("a")
    fs.write("a", "data")
    fs.rename("a", "b")
    assert not fs.exists("a")
    assert fs.read("b", 0, 4) == b"data"
    fs.mv("b", "c")
    assert [entry.name for entry in fs.entries()] == ["c"]


def test_copy_duplicates_data(fs):
    fs.create("a")
    fs.write("a", "payload")
    fs.copy("a", "b")
    assert fs.read("b", 0, fs.size("b")) == b"payload"
    assert fs.entries()[1].start == METADATA_SIZE + BLOCK_SIZE
    with pytest.raises(FileExistsError):
        fs.copy("a", "b")


def test_defragment_moves_data_forward(fs):
    fs.create("a")
    fs.create("b")
    fs.write("a", "x" * 10)
    fs.write("b", "hello")
    fs.delete("a")
    fs.defragment()
    entry = fs.entries()[0]
    assert entry.start == METADATA_SIZE
    assert fs.read("b", 0, 5) == b"hello"


def test_check_integrity_reports_negative_size(fs):
    fs.create("good")
    fs.create("bad")
    assert fs.check_integrity() == []
    fs.truncate("bad", -1)
    assert fs.check_integrity() == ["bad"]


def test_backup_and_restore(fs, tmp_path):
    backup = tmp_path / "backup.sim"
    fs.create("a")
    fs.write("a", "keep")
    fs.backup(backup)
    fs.delete("a")
    fs.restore(backup)
    assert fs.read("a", 0, 4) == b"keep"


def test_restore_missing_backup_keeps_disk(fs, tmp_path):
    fs.create("a")
    with pytest.raises(FileNotFoundError):
        fs.restore(tmp_path / "missing.sim")
    assert fs.exists("a")


def test_cat(fs):
    fs.create("a")
    assert fs.cat("a") == ""
    fs.write("a", "hello")
    assert fs.cat("a") == "hello"


def test_diff(fs):
    for name in ("a", "b", "c", "d"):
        fs.create(name)
    fs.write("a", "same")
    fs.write("b", "same")
    fs.write("c", "diff")
    fs.write("d", "longer")
    assert fs.diff("a", "b") == IDENTICAL
    assert fs.diff("a", "c") == DIFFERENT
    assert fs.diff("a", "d") == SIZE_MISMATCH


def test_log_appends_lines(fs):
    fs.log("hello")
    fs.log("world")
    lines = fs.log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].endswith(": hello")
    assert lines[1].endswith(": world")