"""Test configuration and fixtures for morefiles."""

import errno
from pathlib import Path
from typing import Dict, Optional, Tuple

import pytest

from morefiles.backend import PosixBackend


class FailingBackend(PosixBackend):
    """PosixBackend that fails chosen operations on chosen paths.

    Failures are injected per (operation, path) pair, so the tests do not rely on
    file permissions, which do not stop the root user.
    """

    def __init__(self) -> None:
        self.failures: Dict[Tuple[str, Path], OSError] = {}

    def fail(self, operation: str, path: Path, error: Optional[OSError] = None) -> OSError:
        error = error or PermissionError(errno.EACCES, "Permission denied", str(path))
        self.failures[(operation, Path(path))] = error
        return error

    def _check(self, operation: str, path: Path) -> None:
        error = self.failures.get((operation, Path(path)))
        if error is not None:
            raise error

    def copy_file(self, source: Path, target: Path) -> None:
        self._check("copy_file", source)
        super().copy_file(source, target)

    def copy_directory(self, source: Path, target: Path) -> None:
        self._check("copy_directory", source)
        super().copy_directory(source, target)

    def copy_attributes(self, source: Path, target: Path) -> None:
        self._check("copy_attributes", source)
        super().copy_attributes(source, target)

    def delete_file(self, path: Path) -> None:
        self._check("delete_file", path)
        super().delete_file(path)

    def delete_directory(self, path: Path) -> None:
        self._check("delete_directory", path)
        super().delete_directory(path)


@pytest.fixture
def failing_backend():
    """A backend whose operations can be made to fail for chosen paths."""
    return FailingBackend()


@pytest.fixture
def sample_tree(tmp_path):
    """Create a small tree of 4 files and 4 directories (the root included).

    src/
    ├── a.txt
    ├── b.txt
    ├── empty/
    └── sub/
        ├── c.txt
        └── deeper/
            └── d.txt
    """
    root = tmp_path.resolve() / "src"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "a.txt").write_text("alpha")
    (root / "b.txt").write_text("bravo")
    (root / "sub" / "c.txt").write_text("charlie")
    (root / "sub" / "deeper" / "d.txt").write_text("delta")
    return root
