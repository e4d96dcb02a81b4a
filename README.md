# simplefs

simplefs is a small simulated filesystem that lives inside one disk image
file. The default file is `disk.sim`, which is 1 MiB. The image starts with a
file count. A fixed table of up to 85 entries follows it, and each entry
records a name, a size, a start offset and a creation time. File data is
stored in 512-byte blocks after a 4096-byte metadata area. A name can be at
most 31 bytes long, and longer names are cut short.

## Installation

```
pip install .
```

## Preparing a disk image

```
simplefs-format-disk [PATH]
```

This command writes a zero-filled 1 MiB image to `PATH`, or to `disk.sim` when
no path is given. You can also call `simplefs.format_disk.format_disk(path, size)`
from Python.

## Interactive shell

```
simplefs [--disk PATH] [--log PATH]
```

This opens a numbered menu that works on the image given by `--disk`
(default `disk.sim`). Log entries go to the file given by `--log` (default
`fs.log`).

From the menu you can:

- create, delete, write, read, list, rename, append to, truncate, copy and move files
- defragment the image
- check its integrity
- back it up and restore it
- print a file (`cat`)
- compare two files (`diff`)
- add time-stamped lines to the log

Choose `21` to leave the shell; reaching the end of input also ends it.
When output goes to a terminal, the shell clears the screen after each
choice.

The shell is the `simplefs.cli.Shell` class. It can be driven with any text
streams:

```python
import io
from simplefs.cli import Shell
from simplefs.disk import SimpleFS

out = io.StringIO()
Shell(SimpleFS("disk.sim"), io.StringIO("6\n1\nnotes\n5\n21\n"), out).run()
```

## Using it from Python

```python
from simplefs.disk import SimpleFS

fs = SimpleFS("disk.sim", "fs.log")
fs.format()
fs.create("notes")
fs.write("notes", b"hello")
fs.append("notes", " world")           # str is written as UTF-8
print(fs.read("notes", 0, fs.size("notes")))   # b'hello world'
print(fs.read("notes", 6))                      # b'world' (to the end)

for entry in fs.entries():             # FileEntry(name, size, start, created)
    print(entry.name, entry.size)

print(fs.ls())                         # ['notes - 11 bytes']
fs.copy("notes", "notes2")
print(fs.diff("notes", "notes2"))      # 'Files are identical.'
print(fs.cat("notes"))                 # 'hello world'
fs.backup("disk.bak")
fs.restore("disk.bak")
fs.log("checked notes")
```

The other methods are `delete`, `rename`, `mv` (the same as `rename`),
`exists`, `truncate`, `defragment` and `check_integrity`. The
`check_integrity` method returns the names of entries that have a negative
size or a start offset inside the metadata area.

### Errors

- Naming a file that does not exist raises `FileNotFoundError`.
- Creating a file, or copying to a name, that already exists raises
  `FileExistsError`.
- Adding a file when the table already holds 85 entries raises
  `simplefs.disk.DiskFullError`, a subclass of `FileSystemError`.
- Reading a range that does not lie inside the file raises
  `simplefs.disk.FileSystemError`.
- `OSError` is raised when the image file itself cannot be opened.

## Limits

- Each file holds at most one 512-byte block. `write` keeps the first 512
  bytes, and `append` stops when the file reaches that size.
- `truncate` only shrinks a file. A size equal to or larger than the current
  one changes nothing.
- There are no directories: every file sits in one flat table.
- A new file's block is chosen from its position in the table. Deleting a
  file does not move the data of the files after it, so run `defragment` to
  pack the data together again.
- The image cannot be mounted by the operating system. It is only reached
  through `SimpleFS` or the `simplefs` shell.