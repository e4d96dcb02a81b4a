"""Interactive, menu-driven front end for the simulated disk."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from typing import TextIO

from simplefs.disk import DISK_NAME, LOG_NAME, DiskFullError, FileSystemError, SimpleFS

_LINE_LIMIT = 1023
_READ_LIMIT = 1024

MENU = (
    "\n---------------- File System ----------------\n"
    "1. Create File\n"
    "2. Delete File\n"
    "3. Write to File\n"
    "4. Read from File\n"
    "5. List Files\n"
    "6. Format Disk\n"
    "7. Rename File\n"
    "8. Check File Existence\n"
    "9. Get File Size\n"
    "10. Append to File\n"
    "11. Truncate File\n"
    "12. Copy File\n"
    "13. Move File\n"
    "14. Defragment Disk\n"
    "15. Check Integrity\n"
    "16. Backup Disk\n"
    "17. Restore Disk\n"
    "18. Display File Content (cat)\n"
    "19. Compare Files (diff)\n"
    "20. Operation Log\n"
    "21. Exit\n"
    "Enter your choice: "
)

EXIT_CHOICE = 21
NO_SUCH_FILE = "Error: File does not exist."


class _Input:
    """Reads whitespace-separated words and whole lines from a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending = ""

    def _fill(self) -> None:
        line = self._stream.readline()
        if not line:
            raise EOFError("end of input")
        self._pending = line

    def word(self) -> str:
        while True:
            stripped = self._pending.lstrip()
            if stripped:
                break
            self._fill()
        parts = stripped.split(None, 1)
        rest = stripped[len(parts[0]):]
        self._pending = rest
        return parts[0]

    def number(self) -> int | None:
        token = self.word()
        try:
            return int(token)
        except ValueError:
            return None

    def skip_char(self) -> None:
        if not self._pending:
            self._fill()
        self._pending = self._pending[1:]

    def line(self) -> str:
        if not self._pending:
            self._fill()
        text, _, rest = self._pending.partition("\n")
        self._pending = rest
        return text.rstrip("\r")[:_LINE_LIMIT]


class Shell:
    """Numbered-menu shell that drives a :class:`SimpleFS`."""

    def __init__(self, fs: SimpleFS, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self.fs = fs
        self.stdout = stdout if stdout is not None else sys.stdout
        self._input = _Input(stdin if stdin is not None else sys.stdin)

    def _say(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _prompt(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _ask_word(self, text: str) -> str:
        self._prompt(text)
        return self._input.word()

    def _ask_line(self, text: str) -> str:
        self._prompt(text)
        self._input.skip_char()
        return self._input.line()

    def _ask_number(self, text: str) -> int | None:
        self._prompt(text)
        return self._input.number()

    def _clear_screen(self) -> None:
        isatty = getattr(self.stdout, "isatty", None)
        if self.stdout is not sys.stdout or not (isatty and isatty()):
            return
        command = ["cmd", "/c", "cls"] if os.name == "nt" else ["clear"]
        try:
            subprocess.run(command, check=False)
        except OSError:
            pass

    def _existing(self, text: str) -> str | None:
        name = self._ask_word(text)
        if not self.fs.exists(name):
            self._say(NO_SUCH_FILE)
            return None
        return name

    def run(self) -> int:
        """Show the menu and handle choices until exit or end of input."""
        while True:
            self._prompt(MENU)
            try:
                choice = self._input.number()
            except EOFError:
                return 0
            self._clear_screen()
            try:
                if not self.dispatch(choice):
                    return 0
            except EOFError:
                return 0
            except (FileSystemError, OSError) as exc:
                self._say(f"Error: {exc}")

    def dispatch(self, choice: int | None) -> bool:
        """Carry out one menu choice; return False when the shell should stop."""
        fs = self.fs
        if choice == 1:
            name = self._ask_word("Enter file name: ")
            try:
                fs.create(name)
            except DiskFullError:
                self._say("Error: Maximum number of files reached.")
            except FileExistsError:
                self._say("Error: File already exists.")
            else:
                self._say("File created successfully.")
        elif choice == 2:
            name = self._existing("Enter file name: ")
            if name is not None:
                fs.delete(name)
                self._say("File deleted.")
        elif choice == 3:
            name = self._existing("Enter file name: ")
            if name is not None:
                fs.write(name, self._ask_line("Enter data: "))
                self._say("Data written to file.")
        elif choice == 4:
            self._read_file()
        elif choice == 5:
            for line in fs.ls():
                self._say(line)
        elif choice == 6:
            fs.format()
            self._say("Disk formatted.")
        elif choice == 7:
            name = self._existing("Enter old file name: ")
            if name is not None:
                fs.rename(name, self._ask_word("Enter new file name: "))
                self._say("File renamed.")
        elif choice == 8:
            name = self._ask_word("Enter file name: ")
            self._say("Exists" if fs.exists(name) else "Does not exist")
        elif choice == 9:
            name = self._existing("Enter file name: ")
            if name is not None:
                self._say(f"Size: {fs.size(name)} bytes")
        elif choice == 10:
            name = self._existing("Enter file name: ")
            if name is not None:
                fs.append(name, self._ask_line("Enter data: "))
                self._say("Data appended to file.")
        elif choice == 11:
            name = self._existing("Enter file name: ")
            if name is not None:
                new_size = self._ask_number("Enter new size: ")
                if new_size is None:
                    self._say("Error: Invalid size.")
                else:
                    fs.truncate(name, new_size)
                    self._say("File truncated.")
        elif choice == 12:
            name = self._existing("Enter source file name: ")
            if name is not None:
                dest = self._ask_word("Enter destination file name: ")
                try:
                    fs.copy(name, dest)
                except (FileExistsError, DiskFullError):
                    pass
                self._say("File copied.")
        elif choice == 13:
            name = self._existing("Enter old path: ")
            if name is not None:
                fs.mv(name, self._ask_word("Enter new path: "))
                self._say("File moved/renamed.")
        elif choice == 14:
            fs.defragment()
            self._say("Disk defragmented.")
        elif choice == 15:
            for name in fs.check_integrity():
                self._say(f"Corrupted file: {name}")
        elif choice == 16:
            target = self._ask_word("Enter backup file name: ")
            try:
                fs.backup(target)
            except OSError:
                print("Failed to open backup file", file=sys.stderr)
            self._say("Backup created (if successful).")
        elif choice == 17:
            source = self._ask_word("Enter backup file name: ")
            try:
                fs.restore(source)
            except OSError:
                print("Failed to open backup file", file=sys.stderr)
            self._say("Disk restored (if backup exists).")
        elif choice == 18:
            name = self._existing("Enter file name: ")
            if name is not None and fs.size(name) > 0:
                self._say(fs.cat(name))
        elif choice == 19:
            first = self._ask_word("Enter first file name: ")
            second = self._ask_word("Enter second file name: ")
            if not fs.exists(first) or not fs.exists(second):
                self._say("Error: One or both files do not exist.")
            else:
                self._say(fs.diff(first, second))
        elif choice == 20:
            fs.log(self._ask_line("Enter log message: "))
            self._say("Log entry added.")
        elif choice == EXIT_CHOICE:
            return False
        else:
            self._say("Invalid choice. Please try again.")
        return True

    def _read_file(self) -> None:
        name = self._existing("Enter file name: ")
        if name is None:
            return
        offset = self._ask_number("Enter offset: ")
        size = self._ask_number("Enter size: ")
        if offset is None or size is None:
            self._say("Error: Invalid offset or size.")
            return
        size = min(size, _READ_LIMIT)
        try:
            data = self.fs.read(name, offset, size)
        except FileSystemError:
            self._say("Error: Invalid offset or size.")
            return
        text = data.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        self._say(f"Data: {text}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Interactive simulated file system.")
    parser.add_argument("--disk", default=DISK_NAME, help="disk image path")
    parser.add_argument("--log", default=LOG_NAME, help="log file path")
    args = parser.parse_args(argv)
    return Shell(SimpleFS(args.disk, args.log), sys.stdin, sys.stdout).run()


if __name__ == "__main__":
    sys.exit(main())