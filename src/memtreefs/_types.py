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

"""Metadata record and directory entry types.

Both types are immutable frozen dataclasses. ``mode`` values use the same
encoding as :func:`os.stat` results, so the helpers in the standard
:mod:`stat` module (``stat.S_ISDIR``, ``stat.filemode``) apply to them.

Constants:

- ``DIR_MODE``: Mode of every directory node (``drw-r--r--``)
- ``FILE_MODE``: Mode of every file node (``-rw-r--r--``)
"""

from __future__ import annotations

import stat as _stat
from dataclasses import dataclass
from datetime import datetime
from typing import Final

DIR_MODE: Final[int] = _stat.S_IFDIR | 0o644
FILE_MODE: Final[int] = _stat.S_IFREG | 0o644


@dataclass(slots=True, frozen=True)
class FileInfo:
    """Metadata for a file or directory.

    Attributes:
        name: Base name of the node (``"."`` for the root).
        size: Payload length in bytes. Always 0 for directories.
        mod_time: UTC time the node was created.
        mode: Type and permission bits in :mod:`stat` encoding.

    Example::

        info = handle.stat()
        if not info.is_dir:
            print(f"{info.name}: {info.size} bytes, {stat.filemode(info.mode)}")
    """

    name: str
    size: int
    mod_time: datetime
    mode: int

    @property
    def is_dir(self) -> bool:
        """True if the mode carries the directory type bit."""
        return _stat.S_ISDIR(self.mode)

    @property
    def type(self) -> int:
        """Type bits of ``mode`` (``stat.S_IFDIR`` or ``stat.S_IFREG``)."""
        return _stat.S_IFMT(self.mode)

    @property
    def perm(self) -> int:
        """Permission bits of ``mode``."""
        return _stat.S_IMODE(self.mode)


@dataclass(slots=True, frozen=True)
class DirEntry:
    """Directory listing entry wrapping the metadata of one node.

    Shaped like :class:`os.DirEntry` so traversal code reads the same against
    either.

    Example::

        for entry in read_dir(fs, "src"):
            if entry.is_file() and entry.name.endswith(".py"):
                print(entry.info().size)
    """

    _info: FileInfo

    @property
    def name(self) -> str:
        """Base name of the node."""
        return self._info.name

    @property
    def type(self) -> int:
        """Type bits of the node's mode."""
        return self._info.type

    def is_dir(self) -> bool:
        """True if the entry is a directory."""
        return self._info.is_dir

    def is_file(self) -> bool:
        """True if the entry is a regular file."""
        return not self._info.is_dir

    def info(self) -> FileInfo:
        """Return the underlying metadata record."""
        return self._info


__all__ = [
    "DIR_MODE",
    "FILE_MODE",
    "DirEntry",
    "FileInfo",
]
