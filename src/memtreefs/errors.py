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

"""Exception hierarchy for :mod:`memtreefs`.

Every failure raised by the filesystem is a :class:`PathError` subclass that
records the operation name and the path it was applied to. Each subclass also
inherits the matching builtin exception, so callers written against the
standard library (``except FileNotFoundError``) keep working.

The taxonomy is closed:

- :class:`InvalidPathError`: malformed path, raised before any work happens.
- :class:`NotExistError`: missing segment, or a file used as a directory.
- :class:`NotDirectoryError`: ``mkdir_all`` ran into an existing file.
- :class:`IsDirectoryError`: byte read attempted on a directory handle.
- :class:`ClosedError`: operation on a handle that was already closed.
"""

from __future__ import annotations


class MemFSError(Exception):
    """Base class for all memtreefs exceptions.

    Catch this to handle any library-specific failure with a single handler
    while letting unrelated exceptions propagate normally.

    Example::

        try:
            fs.write_file("a/b.txt", b"data")
        except MemFSError as e:
            logger.error("Filesystem error: %s", e)
    """


class PathError(MemFSError):
    """Failure of a single operation on a single path.

    Attributes:
        op: Operation that failed (``open``, ``mkdir``, ``write``, ``read``,
            ``stat``, ``close`` or ``readdir``).
        path: Path the operation was applied to.
        detail: Human-readable reason.
    """

    op: str
    path: str
    detail: str

    def __init__(self, op: str, path: str, detail: str) -> None:
        super().__init__(f"{op} {path}: {detail}")
        self.op = op
        self.path = path
        self.detail = detail

    def __reduce__(self) -> tuple[type[PathError], tuple[str, str, str]]:
        return (type(self), (self.op, self.path, self.detail))


class InvalidPathError(PathError, ValueError):
    """Raised when a path does not follow the clean relative path grammar.

    Valid paths are ``"."`` or ``/``-joined non-empty segments, none of which
    is ``.`` or ``..`` or contains a NUL byte. No mutation or traversal happens
    before this is raised.
    """


class NotExistError(PathError, FileNotFoundError):
    """Raised when a path (or one of its parents) does not resolve.

    A file appearing as an intermediate segment is reported the same way:
    it cannot have children, so the lookup simply misses.
    """


class NotDirectoryError(PathError, NotADirectoryError):
    """Raised by ``mkdir_all`` when an existing file blocks a directory.

    Directories created earlier in the same call are kept.
    """


class IsDirectoryError(PathError, IsADirectoryError):
    """Raised when reading bytes from a directory handle."""


class ClosedError(PathError, ValueError):
    """Raised for any operation on a handle after ``close()``."""


__all__ = [
    "ClosedError",
    "InvalidPathError",
    "IsDirectoryError",
    "MemFSError",
    "NotDirectoryError",
    "NotExistError",
    "PathError",
]
