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

"""In-memory hierarchical filesystem.

``MemFS`` owns a single root directory named ``"."``. Every operation starts
at the root and walks child mappings one path segment at a time; there is no
path index and no caching.

Example usage::

    from memtreefs import MemFS, read_file, walk

    fs = MemFS()
    fs.mkdir_all("dir1/dir2")
    fs.write_file("dir1/dir2/f1.txt", b"incinerating-unsubstantial")

    [path for path, _ in walk(fs)]
    # ['.', 'dir1', 'dir1/dir2', 'dir1/dir2/f1.txt']
    read_file(fs, "dir1/dir2/f1.txt")
    # b'incinerating-unsubstantial'

The filesystem is write-once-per-path and read-many: files are replaced
whole by ``write_file`` and nothing is ever removed. No locking is done;
callers sharing an instance across threads must synchronize externally.
"""

from __future__ import annotations

from typing import assert_never

from ._logging import LoggerLike, StructuredLogger, get_logger
from ._nodes import DirectoryHandle, DirectoryNode, FileHandle, FileNode
from ._path import ROOT, base_name, dir_name, join_path, split_path, valid_path
from ._types import DIR_MODE, FILE_MODE, DirEntry, FileInfo
from .clock import SYSTEM_CLOCK, WallClock
from .errors import InvalidPathError, NotDirectoryError, NotExistError

_DEFAULT_LOGGER: StructuredLogger = get_logger(
    __name__, context={"component": "memfs"}
)


class MemFS:
    """Filesystem whose whole tree lives in process memory.

    Args:
        clock: Source of node modification times.
        logger: Optional logger override for mutation events.
    """

    __slots__ = ("_clock", "_logger", "_root")

    def __init__(
        self,
        *,
        clock: WallClock = SYSTEM_CLOCK,
        logger: LoggerLike | None = None,
    ) -> None:
        self._clock = clock
        self._logger = (
            _DEFAULT_LOGGER
            if logger is None
            else get_logger(
                __name__, logger_override=logger, context={"component": "memfs"}
            )
        )
        self._root = self._new_directory(ROOT)

    def open(self, name: str) -> FileHandle | DirectoryHandle:
        """Open ``name`` for reading.

        A file yields a :class:`FileHandle` over a private copy of its bytes.
        A directory (including the root ``"."``) yields a
        :class:`DirectoryHandle` that reads through to the live node.

        Raises:
            InvalidPathError: ``name`` is not a clean relative path.
            NotExistError: A segment is missing, or a file appears before the
                last segment.
        """
        if not valid_path(name):
            raise InvalidPathError("open", name, "invalid argument")

        current = self._root
        parts = split_path(name)
        for index, part in enumerate(parts):
            match current.children.get(part):
                case None:
                    raise NotExistError("open", name, "file does not exist")
                case FileNode() as file_node:
                    if index != len(parts) - 1:
                        raise NotExistError("open", name, "file does not exist")
                    return file_node.open_handle(name)
                case DirectoryNode() as directory:
                    current = directory
                case _ as unreachable:  # pragma: no cover - exhaustiveness sentinel
                    assert_never(unreachable)

        return current.open_handle(name)

    def mkdir_all(self, path: str) -> None:
        """Create directory ``path`` along with any missing parents.

        Existing directories along the way are reused, so calling this for a
        path that already exists does nothing.

        Raises:
            InvalidPathError: ``path`` is not a clean relative path.
            NotDirectoryError: A segment names an existing file. Nothing has
                been created when this is raised.
        """
        if not valid_path(path):
            raise InvalidPathError("mkdir", path, "invalid argument")

        current = self._root
        walked = ROOT
        for part in split_path(path):
            walked = join_path(walked, part)
            match current.children.get(part):
                case None:
                    directory = self._new_directory(part)
                    current.children[part] = directory
                    self._logger.mutation("memfs.mkdir.created", path=walked)
                    current = directory
                case DirectoryNode() as directory:
                    current = directory
                case FileNode():
                    raise NotDirectoryError(
                        "mkdir", walked, f"{part!r} is not a directory"
                    )
                case _ as unreachable:  # pragma: no cover - exhaustiveness sentinel
                    assert_never(unreachable)

    def write_file(self, name: str, data: bytes | bytearray | memoryview) -> None:
        """Store ``data`` as the file ``name``, replacing any existing entry.

        The parent directory must already exist; it is never created here.
        ``data`` is copied, so later changes to a caller-owned buffer are not
        seen. An existing directory with the same name is replaced by the
        new file.

        Raises:
            InvalidPathError: ``name`` is not a clean relative path, or is the
                root itself.
            NotExistError: The parent directory is missing or a parent
                segment is a file.
            TypeError: ``data`` is not a bytes-like object.
        """
        if not valid_path(name) or name == ROOT:
            raise InvalidPathError("write", name, "invalid argument")

        parent = self._get_dir(dir_name(name), op="write", name=name)
        filename = base_name(name)
        content = bytes(memoryview(data))

        if isinstance(parent.children.get(filename), DirectoryNode):
            self._logger.mutation("memfs.write_file.replaced_directory", path=name)

        parent.children[filename] = FileNode(
            entry=DirEntry(
                FileInfo(
                    name=filename,
                    size=len(content),
                    mod_time=self._clock.utcnow(),
                    mode=FILE_MODE,
                )
            ),
            content=content,
        )
        self._logger.mutation("memfs.write_file", path=name, size=len(content))

    def _get_dir(self, path: str, *, op: str, name: str) -> DirectoryNode:
        """Resolve ``path`` to an existing directory without creating anything."""
        current = self._root
        for part in split_path(path):
            match current.children.get(part):
                case None:
                    raise NotExistError(op, name, f"{part!r} does not exist")
                case FileNode():
                    raise NotExistError(op, name, f"{part!r} is not a directory")
                case DirectoryNode() as directory:
                    current = directory
                case _ as unreachable:  # pragma: no cover - exhaustiveness sentinel
                    assert_never(unreachable)
        return current

    def _new_directory(self, name: str) -> DirectoryNode:
        return DirectoryNode(
            entry=DirEntry(
                FileInfo(
                    name=name,
                    size=0,
                    mod_time=self._clock.utcnow(),
                    mode=DIR_MODE,
                )
            )
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self._root.children)})"


__all__ = ["MemFS"]
