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

"""Path grammar shared by every filesystem entry point.

A valid path is either the root sentinel ``"."`` or one or more non-empty
segments joined by ``/``. No segment may be ``.`` or ``..`` or contain a NUL
byte, and the path may not start or end with ``/``. Unlike a normalizer, these
functions never rewrite a path: anything outside the grammar is rejected.

Functions:
    valid_path: Report whether a path follows the grammar
    split_path: Split a valid path into segments (root yields none)
    dir_name: Parent of a valid path (``"."`` for top-level names)
    base_name: Last segment of a valid path
    join_path: Join a valid directory path and a child name
"""

from __future__ import annotations

from typing import Final

ROOT: Final[str] = "."
SEPARATOR: Final[str] = "/"


def valid_path(path: str) -> bool:
    """Report whether ``path`` is a clean relative path.

    Examples:
        >>> valid_path(".")
        True
        >>> valid_path("a/b.txt")
        True
        >>> valid_path("/a")
        False
        >>> valid_path("a/../b")
        False
        >>> valid_path("")
        False
    """
    if path == ROOT:
        return True
    if not path:
        return False
    return all(
        segment and segment not in {".", ".."} and "\x00" not in segment
        for segment in path.split(SEPARATOR)
    )


def split_path(path: str) -> list[str]:
    """Split a valid path into its segments.

    Examples:
        >>> split_path("dir1/dir2/f1.txt")
        ['dir1', 'dir2', 'f1.txt']
        >>> split_path(".")
        []
    """
    if path == ROOT:
        return []
    return path.split(SEPARATOR)


def dir_name(path: str) -> str:
    """Return the parent directory of a valid path.

    Examples:
        >>> dir_name("a/b/c.txt")
        'a/b'
        >>> dir_name("c.txt")
        '.'
    """
    head, sep, _ = path.rpartition(SEPARATOR)
    return head if sep else ROOT


def base_name(path: str) -> str:
    """Return the last segment of a valid path.

    Examples:
        >>> base_name("a/b/c.txt")
        'c.txt'
        >>> base_name(".")
        '.'
    """
    return path.rpartition(SEPARATOR)[2]


def join_path(parent: str, name: str) -> str:
    """Join a directory path and a child name without producing ``./`` prefixes.

    Examples:
        >>> join_path(".", "dir1")
        'dir1'
        >>> join_path("dir1", "dir2")
        'dir1/dir2'
    """
    if parent == ROOT:
        return name
    return f"{parent}{SEPARATOR}{name}"


__all__ = [
    "ROOT",
    "SEPARATOR",
    "base_name",
    "dir_name",
    "join_path",
    "split_path",
    "valid_path",
]
