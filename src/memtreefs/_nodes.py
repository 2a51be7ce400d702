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

"""Canonical tree nodes and the handles returned by ``MemFS.open``.

The tree holds exactly two kinds of node, :class:`FileNode` and
:class:`DirectoryNode`, combined in the closed :data:`Node` union. Code that
dispatches on a node matches both variants and ends with ``assert_never``.

Handles:

- :class:`FileHandle` reads from a private copy of the file content, so
  later writes to the same path never show through.
- :class:`DirectoryHandle` reads through to the live directory node, and
  keeps its own closed flag and enumeration snapshot.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field, replace
from typing import Self

from ._types import DirEntry, FileInfo
from .errors import ClosedError, IsDirectoryError


@dataclass(slots=True)
class FileNode:
    """Stored copy of a file: its entry plus an immutable payload."""

    entry: DirEntry
    content: bytes

    def open_handle(self, path: str) -> FileHandle:
        """Return a new read handle over a copy of the current content."""
        return FileHandle(
            _path=path,
            _info=self.entry.info(),
            _buffer=io.BytesIO(self.content),
            _size=len(self.content),
        )


def _empty_children() -> dict[str, Node]:
    return {}


@dataclass(slots=True)
class DirectoryNode:
    """Stored directory: its entry plus children keyed by unique name."""

    entry: DirEntry
    children: dict[str, Node] = field(default_factory=_empty_children)

    def open_handle(self, path: str) -> DirectoryHandle:
        """Return an enumeration handle reading through to this node."""
        return DirectoryHandle(_path=path, _node=self)


type Node = FileNode | DirectoryNode


@dataclass(slots=True)
class FileHandle:
    """Open file with a read cursor over a private copy of the bytes."""

    _path: str
    _info: FileInfo
    _buffer: io.BytesIO
    _size: int
    _closed: bool = field(default=False, init=False)

    @property
    def path(self) -> str:
        """Path the handle was opened with."""
        return self._path

    @property
    def closed(self) -> bool:
        """True if the handle has been closed."""
        return self._closed

    def _check_closed(self, op: str) -> None:
        if self._closed:
            raise ClosedError(op, self._path, "file already closed")

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes, or everything remaining when negative.

        Returns ``b""`` when the content is exhausted.
        """
        self._check_closed("read")
        return self._buffer.read(size)

    def readinto(self, buffer: bytearray | memoryview) -> int:
        """Copy the next bytes into ``buffer`` and return how many were copied."""
        self._check_closed("read")
        return self._buffer.readinto(buffer)

    def stat(self) -> FileInfo:
        """Return metadata with the size of this handle's own copy."""
        self._check_closed("stat")
        return replace(self._info, size=self._size)

    def close(self) -> None:
        """Close the handle.

        Raises:
            ClosedError: The handle was already closed.
        """
        self._check_closed("close")
        self._closed = True
        self._buffer.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        if not self._closed:
            self.close()


@dataclass(slots=True)
class DirectoryHandle:
    """Open directory that enumerates the live node in batches.

    The child names are captured on the first ``read_dir`` call. Mutations
    made to the directory after that point are not reflected in the
    remaining batches, except that a replaced child is reported with its
    current entry.
    """

    _path: str
    _node: DirectoryNode
    _names: list[str] | None = field(default=None, init=False)
    _closed: bool = field(default=False, init=False)

    @property
    def path(self) -> str:
        """Path the handle was opened with."""
        return self._path

    @property
    def closed(self) -> bool:
        """True if the handle has been closed."""
        return self._closed

    def _check_closed(self, op: str) -> None:
        if self._closed:
            raise ClosedError(op, self._path, "file already closed")

    def read(self, size: int = -1) -> bytes:
        """Always raises: directories are not byte-readable."""
        del size
        raise IsDirectoryError("read", self._path, "is a directory")

    def readinto(self, buffer: bytearray | memoryview) -> int:
        """Always raises: directories are not byte-readable."""
        del buffer
        raise IsDirectoryError("read", self._path, "is a directory")

    def stat(self) -> FileInfo:
        """Return the directory's metadata."""
        self._check_closed("stat")
        return self._node.entry.info()

    def read_dir(self, n: int = -1) -> list[DirEntry]:
        """Return up to ``n`` more entries, or all remaining when ``n <= 0``.

        Order follows insertion into the directory. An empty list means the
        enumeration is complete.
        """
        self._check_closed("readdir")
        if self._names is None:
            self._names = list(self._node.children)

        count = len(self._names) if n <= 0 else n
        batch, self._names = self._names[:count], self._names[count:]

        children = self._node.children
        return [children[name].entry for name in batch if name in children]

    def close(self) -> None:
        """Close the handle. The directory itself is unaffected.

        Raises:
            ClosedError: The handle was already closed.
        """
        self._check_closed("close")
        self._closed = True

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        if not self._closed:
            self.close()


__all__ = [
    "DirectoryHandle",
    "DirectoryNode",
    "FileHandle",
    "FileNode",
    "Node",
]
