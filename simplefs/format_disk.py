"""Create a zero-filled disk image."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from simplefs.disk import DISK_NAME, DISK_SIZE

_CHUNK_SIZE = 4096


def format_disk(path: str | Path = DISK_NAME, size: int = DISK_SIZE) -> None:
    """Write zeros to ``path`` in whole chunks until ``size`` bytes are covered."""
    chunk = bytes(_CHUNK_SIZE)
    with open(path, "wb") as disk:
        for _ in range(0, size, _CHUNK_SIZE):
            disk.write(chunk)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a blank disk image.")
    parser.add_argument("path", nargs="?", default=DISK_NAME)
    args = parser.parse_args(argv)
    try:
        format_disk(args.path)
    except OSError:
        print("Failed to create disk file.", file=sys.stderr)
        return 1
    print("Disk formatted successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())