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

"""Read-oriented filesystem protocols.

These protocols are the whole contract between a filesystem and the generic
helpers in :mod:`memtreefs._helpers`. Any object that satisfies :class:`FS`
can be walked, listed and read without the helpers knowing how it stores
data. ``MemFS`` is the implementation shipped with this package.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ._types import DirEntry, FileInfo


@runtime_checkable
class File(Protocol):
    """An open handle on a file or directory.

    Every method raises ``ClosedError`` once the handle has been closed,
    with one exception: ``read`` on a directory always raises
    ``IsDirectoryError``.
    """

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all remaining when negative).

        Returns ``b""`` once the content is exhausted.
        """
        ...

    def stat(self) -> FileInfo:
        """Return metadata for the node behind this handle."""
        ...

    def close(self) -> None:
        """Close the handle. Closing twice raises ``ClosedError``."""
        ...


@runtime_checkable
class ReadDirFile(File, Protocol):
    """A directory handle that can enumerate its children in batches."""

    def read_dir(self, n: int = -1) -> list[DirEntry]:
        """Return up to ``n`` more entries, or all remaining when ``n <= 0``.

        An empty list (never an exception) signals that enumeration is
        complete.
        """
        ...


@runtime_checkable
class FS(Protocol):
    """A filesystem that can open clean relative paths.

    Example::

        def first_line(fsys: FS, name: str) -> bytes:
            return read_file(fsys, name).split(b"\\n", 1)[0]
    """

    def open(self, name: str) -> File:
        """Open ``name`` for reading.

        Raises:
            InvalidPathError: ``name`` is not a clean relative path.
            NotExistError: ``name`` does not resolve.
        """
        ...


__all__ = [
    "FS",
    "File",
    "ReadDirFile",
]
