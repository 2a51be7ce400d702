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

"""Tests for the generic walk/read helpers."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

import pytest

from memtreefs import (
    FS,
    DirectoryHandle,
    File,
    FileHandle,
    IsDirectoryError,
    MemFS,
    NotDirectoryError,
    NotExistError,
    glob,
    read_dir,
    read_file,
    stat,
    walk,
)


@dataclass
class _RecordingFS:
    """FS wrapper remembering every handle it hands out."""

    inner: MemFS
    handles: list[FileHandle | DirectoryHandle] = field(default_factory=list)

    def open(self, name: str) -> File:
        handle = self.inner.open(name)
        self.handles.append(handle)
        return handle


class TestScenario:
    """End-to-end usage through the helpers."""

    def test_walk_and_read(self, fs: MemFS) -> None:
        fs.mkdir_all("dir1/dir2")
        fs.write_file("dir1/dir2/f1.txt", b"incinerating-unsubstantial")

        assert [path for path, _ in walk(fs)] == [
            ".",
            "dir1",
            "dir1/dir2",
            "dir1/dir2/f1.txt",
        ]
        assert read_file(fs, "dir1/dir2/f1.txt") == b"incinerating-unsubstantial"

    def test_missing_directory_then_successful_write(self, fs: MemFS) -> None:
        fs.mkdir_all("foo/bar")
        assert [path for path, _ in walk(fs)] == [".", "foo", "foo/bar"]
        assert all(entry.is_dir() for _, entry in walk(fs))

        with pytest.raises(NotExistError):
            fs.write_file("foo/baz/buz.txt", b"buz")
        with pytest.raises(NotExistError):
            read_file(fs, "foo/baz/buz.txt")

        fs.write_file("foo/bar/baz.txt", b"baz")
        assert read_file(fs, "foo/bar/baz.txt") == b"baz"


class TestWalk:
    """Test walk traversal order and coverage."""

    def test_empty_filesystem(self, fs: MemFS) -> None:
        ((path, entry),) = list(walk(fs))
        assert path == "."
        assert entry.is_dir()
        assert entry.name == "."

    def test_children_sorted_and_preorder(self, fs: MemFS) -> None:
        fs.mkdir_all("b/y")
        fs.mkdir_all("a")
        fs.write_file("b/x.txt", b"")
        fs.write_file("c.txt", b"")
        fs.write_file("a/z.txt", b"")

        assert [path for path, _ in walk(fs)] == [
            ".",
            "a",
            "a/z.txt",
            "b",
            "b/x.txt",
            "b/y",
            "c.txt",
        ]

    def test_entries_match_paths(self, fs: MemFS) -> None:
        fs.mkdir_all("d")
        fs.write_file("d/f", b"123")

        entries = dict(walk(fs))

        assert entries["d"].is_dir()
        assert entries["d/f"].is_file()
        assert entries["d/f"].info().size == 3

    def test_subtree_root(self, fs: MemFS) -> None:
        fs.mkdir_all("a/b")
        fs.write_file("a/b/f", b"")
        fs.write_file("other", b"")

        assert [path for path, _ in walk(fs, "a")] == ["a", "a/b", "a/b/f"]

    def test_file_root(self, fs: MemFS) -> None:
        fs.write_file("f", b"")
        assert [path for path, _ in walk(fs, "f")] == ["f"]

    def test_missing_root(self, fs: MemFS) -> None:
        with pytest.raises(NotExistError):
            list(walk(fs, "missing"))

    def test_closes_every_handle(self, fs: MemFS) -> None:
        fs.mkdir_all("a/b")
        fs.write_file("a/f", b"")
        recording = _RecordingFS(fs)

        list(walk(recording))

        assert recording.handles
        assert all(handle.closed for handle in recording.handles)

    def test_tree_deeper_than_recursion_limit(self, fs: MemFS) -> None:
        depth = max(1500, sys.getrecursionlimit() + 100)
        deepest = "/".join(["d"] * depth)
        fs.mkdir_all(deepest)
        fs.write_file(f"{deepest}/f", b"x")

        paths = [path for path, _ in walk(fs)]

        assert len(paths) == depth + 2
        assert paths[1] == "d"
        assert paths[-2] == deepest
        assert paths[-1] == f"{deepest}/f"


class TestReadDir:
    """Test read_dir."""

    def test_sorted_by_name(self, fs: MemFS) -> None:
        for name in ["zeta", "alpha", "mid"]:
            fs.write_file(name, b"")
        assert [entry.name for entry in read_dir(fs, ".")] == ["alpha", "mid", "zeta"]

    def test_file_is_not_a_directory(self, fs: MemFS) -> None:
        fs.write_file("f", b"")
        recording = _RecordingFS(fs)

        with pytest.raises(NotDirectoryError) as excinfo:
            read_dir(recording, "f")

        assert excinfo.value.op == "readdir"
        assert all(handle.closed for handle in recording.handles)

    def test_missing(self, fs: MemFS) -> None:
        with pytest.raises(NotExistError):
            read_dir(fs, "missing")


class TestReadFile:
    """Test read_file."""

    def test_large_file_spans_chunks(self, fs: MemFS) -> None:
        payload = bytes(range(256)) * 1024
        fs.write_file("big.bin", payload)
        assert read_file(fs, "big.bin") == payload

    def test_directory_raises_and_closes(self, fs: MemFS) -> None:
        fs.mkdir_all("d")
        recording = _RecordingFS(fs)

        with pytest.raises(IsDirectoryError):
            read_file(recording, "d")

        assert all(handle.closed for handle in recording.handles)


class TestStat:
    """Test stat helper."""

    def test_file(self, fs: MemFS) -> None:
        fs.write_file("f", b"12")
        assert stat(fs, "f").size == 2

    def test_directory(self, fs: MemFS) -> None:
        fs.mkdir_all("d")
        assert stat(fs, "d").is_dir


class TestGlob:
    """Test glob."""

    @pytest.fixture
    def tree(self, fs: MemFS) -> FS:
        fs.mkdir_all("src/pkg")
        fs.mkdir_all("docs")
        fs.write_file("src/pkg/__init__.py", b"")
        fs.write_file("src/pkg/core.py", b"")
        fs.write_file("src/setup.py", b"")
        fs.write_file("docs/index.md", b"")
        fs.write_file("README.md", b"")
        return fs

    def test_star_stays_within_segment(self, tree: FS) -> None:
        assert glob(tree, "*.py") == []
        assert glob(tree, "src/*.py") == ["src/setup.py"]
        assert glob(tree, "src/*/*.py") == ["src/pkg/__init__.py", "src/pkg/core.py"]

    def test_matches_directories(self, tree: FS) -> None:
        assert glob(tree, "*") == ["README.md", "docs", "src"]

    def test_question_mark_and_classes(self, tree: FS) -> None:
        assert glob(tree, "*/index.m?") == ["docs/index.md"]
        assert glob(tree, "[dR]*") == ["README.md", "docs"]

    def test_literal_pattern(self, tree: FS) -> None:
        assert glob(tree, "src/setup.py") == ["src/setup.py"]
        assert glob(tree, "src/missing.py") == []
