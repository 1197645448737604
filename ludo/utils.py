"""Small helpers shared by the rest of the package."""

from __future__ import annotations

import os
import sys
from datetime import datetime
from typing import IO, Iterator, Sequence

_CORE_EXTENSIONS = {
    "darwin": ".dylib",
    "linux": ".so",
    "win32": ".dll",
}

_CHUNK_SIZE = 32 * 1024


def index_of_string(element: str, data: Sequence[str]) -> int:
    """Return the index of ``element`` in ``data``, or -1 when absent."""
    try:
        return list(data).index(element)
    except ValueError:
        return -1


def _base_name(path: str) -> str:
    stripped = path.rstrip("/" + os.sep)
    if not stripped:
        return os.sep if path else "."
    return os.path.basename(stripped)


def file_name(path: str) -> str:
    """Return the name of a file without its directory and extension."""
    name = _base_name(path)
    dot = name.rfind(".")
    return name[:dot] if dot >= 0 else name


def dated_name(path: str) -> str:
    """Return the file name of ``path`` with the current date appended."""
    return file_name(path) + "@" + datetime.now().strftime("%Y-%m-%d-%H-%M-%S")


def _walk(directory: str) -> Iterator[str]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError:
        return
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from _walk(entry.path)
        elif not entry.name.startswith("."):
            yield entry.path


def all_files_in(directory: str) -> list[str]:
    """Recursively list the non-hidden files under ``directory``, in lexical order."""
    info = os.lstat(directory)  # raises when the root does not exist
    if not os.path.isdir(directory) or os.path.islink(directory) and not os.path.isdir(directory):
        name = _base_name(directory)
        return [] if name.startswith(".") else [directory]
    del info
    return list(_walk(directory))


def core_ext() -> str:
    """Return the shared library extension of libretro cores on this platform."""
    return _CORE_EXTENSIONS.get(sys.platform, "")


def lines_in_file(stream: IO) -> int:
    """Count the newline characters readable from ``stream``."""
    count = 0
    while True:
        chunk = stream.read(_CHUNK_SIZE)
        if not chunk:
            return count
        count += chunk.count(b"\n" if isinstance(chunk, bytes) else "\n")