"""A single-file simulated disk holding a flat table of small files."""

from __future__ import annotations

import shutil
import struct
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

DISK_NAME = "disk.sim"
LOG_NAME = "fs.log"
DISK_SIZE = 1024 * 1024
METADATA_SIZE = 4096
MAX_FILES = 85
FILENAME_SIZE = 32
BLOCK_SIZE = 512

SIZE_MISMATCH = "Files are different in size."
IDENTICAL = "Files are identical."
DIFFERENT = "Files differ."

_COUNT = struct.Struct("<i")
_ENTRY = struct.Struct(f"<{FILENAME_SIZE}siiq")
_TABLE_SIZE = _ENTRY.size * MAX_FILES
_HEADER_SIZE = _COUNT.size + _TABLE_SIZE


class FileSystemError(Exception):
    """Raised when an operation on the simulated disk cannot be carried out."""


class DiskFullError(FileSystemError):
    """Raised when the file table has no free slot."""


def _clip_name(name: str) -> str:
    return name.encode("utf-8")[: FILENAME_SIZE - 1].decode("utf-8", errors="ignore")


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


@dataclass
class FileEntry:
    """One slot of the on-disk file table."""

    name: str = ""
    size: int = 0
    start: int = 0
    created: int = 0

    @classmethod
    def unpack(cls, raw: bytes) -> FileEntry:
        name, size, start, created = _ENTRY.unpack(raw)
        return cls(name.split(b"\0", 1)[0].decode("utf-8", errors="replace"), size, start, created)

    def pack(self) -> bytes:
        return _ENTRY.pack(
            self.name.encode("utf-8")[: FILENAME_SIZE - 1], self.size, self.start, self.created
        )


@dataclass
class _Table:
    count: int
    slots: list[FileEntry] = field(default_factory=list)

    @property
    def active(self) -> list[FileEntry]:
        return self.slots[: max(0, min(self.count, MAX_FILES))]

    def find(self, name: str) -> int | None:
        for index, entry in enumerate(self.active):
            if entry.name == name:
                return index
        return None

    def require(self, name: str) -> FileEntry:
        index = self.find(name)
        if index is None:
            raise FileNotFoundError(f"no such file: {name}")
        return self.slots[index]

    def add(self, name: str, size: int) -> FileEntry:
        if self.count >= MAX_FILES:
            raise DiskFullError("maximum number of files reached")
        if self.count < 0:
            raise FileSystemError("corrupted file table")
        if self.find(name) is not None:
            raise FileExistsError(f"file already exists: {name}")
        entry = FileEntry(
            name=_clip_name(name),
            size=size,
            start=METADATA_SIZE + self.count * BLOCK_SIZE,
            created=int(time.time()),
        )
        self.slots[self.count] = entry
        self.count += 1
        return entry


class SimpleFS:
    """Flat file system stored inside one disk image file."""

    def __init__(self, path: str | Path = DISK_NAME, log_path: str | Path = LOG_NAME) -> None:
        self.path = Path(path)
        self.log_path = Path(log_path)

    @contextmanager
    def _open(self, writable: bool) -> Iterator[BinaryIO]:
        with open(self.path, "r+b" if writable else "rb") as disk:
            yield disk

    @staticmethod
    def _load(disk: BinaryIO) -> _Table:
        disk.seek(0)
        header = disk.read(_HEADER_SIZE).ljust(_HEADER_SIZE, b"\0")
        (count,) = _COUNT.unpack_from(header)
        slots = [
            FileEntry.unpack(header[offset : offset + _ENTRY.size])
            for offset in range(_COUNT.size, _HEADER_SIZE, _ENTRY.size)
        ]
        return _Table(count, slots)

    @staticmethod
    def _save(disk: BinaryIO, table: _Table, *, with_count: bool = False) -> None:
        if with_count:
            disk.seek(0)
            disk.write(_COUNT.pack(table.count))
        disk.seek(_COUNT.size)
        disk.write(b"".join(entry.pack() for entry in table.slots))

    def _table(self) -> _Table:
        with self._open(writable=False) as disk:
            return self._load(disk)

    def format(self) -> None:
        """Create or wipe the disk image, filling it with zeros."""
        block = bytes(BLOCK_SIZE)
        with open(self.path, "wb") as disk:
            for _ in range(DISK_SIZE // BLOCK_SIZE):
                disk.write(block)

    def entries(self) -> list[FileEntry]:
        """Return the entries of all files, in table order."""
        return self._table().active

    def create(self, filename: str) -> None:
        """Create an empty file."""
        with self._open(writable=True) as disk:
            table = self._load(disk)
            table.add(filename, 0)
            self._save(disk, table, with_count=True)

    def delete(self, filename: str) -> None:
        """Remove a file from the table."""
        with self._open(writable=True) as disk:
            table = self._load(disk)
            index = table.find(filename)
            if index is None:
                raise FileNotFoundError(f"no such file: {filename}")
            count = table.count
            table.slots[index:count] = [*table.slots[index + 1 : count], FileEntry()]
            table.count = count - 1
            self._save(disk, table, with_count=True)

    def write(self, filename: str, data: bytes | str) -> None:
        """Replace a file's contents; at most one block is kept."""
        payload = _as_bytes(data)[:BLOCK_SIZE]
        with self._open(writable=True) as disk:
            table = self._load(disk)
            entry = table.require(filename)
            disk.seek(entry.start)
            disk.write(payload)
            entry.size = len(payload)
            self._save(disk, table)

    def read(self, filename: str, offset: int = 0, size: int | None = None) -> bytes:
        """Read ``size`` bytes from ``offset``; the range must lie inside the file."""
        with self._open(writable=False) as disk:
            table = self._load(disk)
            entry = table.require(filename)
            if size is None:
                size = entry.size - offset
            if offset < 0 or size < 0 or offset + size > entry.size:
                raise FileSystemError("invalid offset or size")
            disk.seek(entry.start + offset)
            return disk.read(size)

    def ls(self) -> list[str]:
        """Return one ``name - size bytes`` line per file."""
        return [f"{entry.name} - {entry.size} bytes" for entry in self.entries()]

    def rename(self, old_name: str, new_name: str) -> None:
        """Give a file a new name."""
        with self._open(writable=True) as disk:
            table = self._load(disk)
            table.require(old_name).name = _clip_name(new_name)
            self._save(disk, table)

    def exists(self, filename: str) -> bool:
        """Tell whether a file of that name exists."""
        return self._table().find(filename) is not None

    def size(self, filename: str) -> int:
        """Return the size of a file in bytes."""
        return self._table().require(filename).size

    def append(self, filename: str, data: bytes | str) -> None:
        """Add data to the end of a file, up to one block in all."""
        payload = _as_bytes(data)
        with self._open(writable=True) as disk:
            table = self._load(disk)
            entry = table.require(filename)
            if entry.size + len(payload) > BLOCK_SIZE:
                payload = payload[: max(0, BLOCK_SIZE - entry.size)]
            if not payload:
                return
            disk.seek(entry.start + entry.size)
            disk.write(payload)
            entry.size += len(payload)
            self._save(disk, table)

    def truncate(self, filename: str, new_size: int) -> None:
        """Shrink a file; a size not below the current one changes nothing."""
        with self._open(writable=True) as disk:
            table = self._load(disk)
            entry = table.require(filename)
            if new_size < entry.size:
                entry.size = new_size
                self._save(disk, table)

    def copy(self, src_filename: str, dest_filename: str) -> None:
        """Copy a file into a new file."""
        with self._open(writable=True) as disk:
            table = self._load(disk)
            source = table.require(src_filename)
            length = max(0, source.size)
            disk.seek(source.start)
            data = disk.read(length).ljust(length, b"\0")
            dest = table.add(dest_filename, source.size)
            disk.seek(dest.start)
            disk.write(data)
            self._save(disk, table, with_count=True)

    def mv(self, old_path: str, new_path: str) -> None:
        """Move a file, which on a flat disk is a rename."""
        self.rename(old_path, new_path)

    def defragment(self) -> None:
        """Pack file data together right after the metadata area."""
        with self._open(writable=True) as disk:
            table = self._load(disk)
            offset = METADATA_SIZE
            for entry in table.active:
                if entry.start != offset:
                    disk.seek(entry.start)
                    data = disk.read(max(0, entry.size))
                    disk.seek(offset)
                    disk.write(data)
                    entry.start = offset
                offset += -(-max(0, entry.size) // BLOCK_SIZE) * BLOCK_SIZE
            self._save(disk, table)

    def check_integrity(self) -> list[str]:
        """Return the names of files whose entries are corrupted."""
        return [
            entry.name
            for entry in self.entries()
            if entry.size < 0 or entry.start < METADATA_SIZE
        ]

    def backup(self, backup_filename: str | Path) -> None:
        """Copy the whole disk image to another file."""
        shutil.copyfile(self.path, backup_filename)

    def restore(self, backup_filename: str | Path) -> None:
        """Replace the disk image with a backup copy."""
        shutil.copyfile(backup_filename, self.path)

    def cat(self, filename: str) -> str:
        """Return a file's contents as text, up to the first NUL byte."""
        size = self.size(filename)
        if size <= 0:
            return ""
        data = self.read(filename, 0, size)
        return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")

    def diff(self, file1: str, file2: str) -> str:
        """Compare two files and describe the outcome."""
        size1 = self.size(file1)
        size2 = self.size(file2)
        if size1 != size2:
            return SIZE_MISMATCH
        if size1 > 0 and self.read(file1, 0, size1) == self.read(file2, 0, size2):
            return IDENTICAL
        return DIFFERENT

    def log(self, message: str) -> None:
        """Append a time-stamped message to the log file."""
        with open(self.log_path, "a", encoding="utf-8") as log_file:
            log_file.write(f"{time.ctime()}: {message}\n")