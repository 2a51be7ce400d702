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

"""Tests for the memtreefs exception hierarchy."""

from __future__ import annotations

import pickle

import pytest

from memtreefs.errors import (
    ClosedError,
    InvalidPathError,
    IsDirectoryError,
    MemFSError,
    NotDirectoryError,
    NotExistError,
    PathError,
)


@pytest.mark.parametrize(
    ("error_type", "builtin"),
    [
        (InvalidPathError, ValueError),
        (NotExistError, FileNotFoundError),
        (NotDirectoryError, NotADirectoryError),
        (IsDirectoryError, IsADirectoryError),
        (ClosedError, ValueError),
    ],
)
def test_errors_extend_library_base_and_builtin(
    error_type: type[PathError], builtin: type[Exception]
) -> None:
    error = error_type("open", "a/b", "boom")

    assert isinstance(error, PathError)
    assert isinstance(error, MemFSError)
    assert isinstance(error, builtin)


@pytest.mark.parametrize(
    "error_type",
    [InvalidPathError, NotExistError, NotDirectoryError, IsDirectoryError, ClosedError],
)
def test_message_names_operation_and_path(error_type: type[PathError]) -> None:
    error = error_type("write", "a/b.txt", "'a' does not exist")

    assert str(error) == "write a/b.txt: 'a' does not exist"
    assert error.op == "write"
    assert error.path == "a/b.txt"
    assert error.detail == "'a' does not exist"


def test_errors_survive_pickling() -> None:
    error = NotExistError("open", "missing", "file does not exist")

    restored = pickle.loads(pickle.dumps(error))  # noqa: S301

    assert type(restored) is NotExistError
    assert restored.op == "open"
    assert restored.path == "missing"
    assert str(restored) == str(error)


def test_builtin_handlers_catch_library_errors() -> None:
    with pytest.raises(FileNotFoundError):
        raise NotExistError("open", "missing", "file does not exist")
