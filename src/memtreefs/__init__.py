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

"""In-memory hierarchical filesystem with a read-oriented handle contract.

This package provides ``MemFS``, a tree of directories and files held
entirely in process memory, plus generic helpers that walk and read any
filesystem implementing the ``FS`` protocol.

Example usage::

    from memtreefs import MemFS, read_file, walk

    fs = MemFS()
    fs.mkdir_all("templates/mail")
    fs.write_file("templates/mail/welcome.txt", b"Hello!")

    for path, entry in walk(fs):
        print(path, "dir" if entry.is_dir() else entry.info().size)

    assert read_file(fs, "templates/mail/welcome.txt") == b"Hello!"
"""

from __future__ import annotations

from ._helpers import glob, read_dir, read_file, stat, walk
from ._logging import StructuredLogger, configure_logging, get_logger
from ._memfs import MemFS
from ._nodes import DirectoryHandle, FileHandle
from ._path import valid_path
from ._protocol import FS, File, ReadDirFile
from ._types import DIR_MODE, FILE_MODE, DirEntry, FileInfo
from .errors import (
    ClosedError,
    InvalidPathError,
    IsDirectoryError,
    MemFSError,
    NotDirectoryError,
    NotExistError,
    PathError,
)

__all__ = [
    "DIR_MODE",
    "FILE_MODE",
    "FS",
    "ClosedError",
    "DirEntry",
    "DirectoryHandle",
    "File",
    "FileHandle",
    "FileInfo",
    "InvalidPathError",
    "IsDirectoryError",
    "MemFS",
    "MemFSError",
    "NotDirectoryError",
    "NotExistError",
    "PathError",
    "ReadDirFile",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
    "glob",
    "read_dir",
    "read_file",
    "stat",
    "valid_path",
    "walk",
]
