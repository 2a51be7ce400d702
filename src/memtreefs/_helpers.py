# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Generic traversal and read helpers for any :class:`~memtreefs.FS`.

The helpers use nothing but ``open`` and the handle methods of the
:mod:`memtreefs._protocol` contract, so they work unchanged against any
filesystem that implements it. Every handle they open is closed before they
return, including when an error propagates.

Example::

    for path, entry in walk(fs):
        if entry.is_file():
            print(path, len(read_file(fs, path)))
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterator
from typing import Final

from ._path import ROOT, SEPARATOR, join_path, split_path
from ._protocol import FS, ReadDirFile
from ._types import DirEntry, FileInfo
from .errors import NotDirectoryError

_READ_CHUNK_SIZE: Final[int] = 64 * 1024


def stat(fsys: FS, name: str) -> FileInfo:
    """Return metadata for ``name``."""
    handle = fsys.open(name)
    try:
        return handle.stat()
    finally:
        handle.close()


def read_file(fsys: FS, name: str) -> bytes:
    """Read the whole content of file ``name``.

    Raises:
        NotExistError: ``name`` does not resolve.
        IsDirectoryError: ``name`` is a directory.
    """
    handle = fsys.open(name)
    try:
        chunks: list[bytes] = []
        while chunk := handle.read(_READ_CHUNK_SIZE):
            chunks.append(chunk)
        return b"".join(chunks)
    finally:
        handle.close()


def read_dir(fsys: FS, name: str) -> list[DirEntry]:
    """Return every entry of directory ``name`` sorted by name.

    Raises:
        NotExistError: ``name`` does not resolve.
        NotDirectoryError: ``name`` is a file.
    """
    handle = fsys.open(name)
    try:
        if not isinstance(handle, ReadDirFile):
            raise NotDirectoryError("readdir", name, "not a directory")
        entries = handle.read_dir(-1)
    finally:
        handle.close()
    entries.sort(key=lambda entry: entry.name)
    return entries


def walk(fsys: FS, root: str = ROOT) -> Iterator[tuple[str, DirEntry]]:
    """Yield ``(path, entry)`` for ``root`` and everything beneath it.

    Traversal is pre-order with children sorted by name, so a directory is
    always yielded before its descendants and every node exactly once.
    Child paths are joined with ``/`` and carry no ``./`` prefix. Depth is
    not limited by the interpreter's recursion limit.
    """
    pending: list[tuple[str, DirEntry]] = [(root, DirEntry(stat(fsys, root)))]
    while pending:
        path, entry = pending.pop()
        yield path, entry
        if entry.is_dir():
            # Reversed so the smallest name is popped first.
            pending.extend(
                (join_path(path, child.name), child)
                for child in reversed(read_dir(fsys, path))
            )


def glob(fsys: FS, pattern: str) -> list[str]:
    """Return the sorted paths matching ``pattern``.

    Matching is per segment with :func:`fnmatch.fnmatchcase`, so ``*`` and
    ``?`` never cross a ``/``.

    Example::

        glob(fs, "src/*/*.py")  # ['src/pkg/__init__.py', 'src/pkg/core.py']
    """
    pattern_parts = pattern.split(SEPARATOR)
    return sorted(
        path
        for path, _ in walk(fsys)
        if path != ROOT and _match_segments(split_path(path), pattern_parts)
    )


def _match_segments(parts: list[str], pattern_parts: list[str]) -> bool:
    if len(parts) != len(pattern_parts):
        return False
    return all(
        fnmatch.fnmatchcase(part, pattern_part)
        for part, pattern_part in zip(parts, pattern_parts, strict=True)
    )


__all__ = [
    "glob",
    "read_dir",
    "read_file",
    "stat",
    "walk",
]
