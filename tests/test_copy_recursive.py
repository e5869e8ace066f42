"""Tests for recursive copy."""

import os
import stat
from unittest.mock import MagicMock

import pytest

from morefiles.backend import PosixBackend
from morefiles.copy_option import CopyOption
from morefiles.exceptions import DestinationExistsError, RecursiveCopyError, UnsupportedConfigurationError
from morefiles.files import copy_recursive
from morefiles.recursion_mode import RecursionMode


def list_tree(root):
    """Return the relative paths of everything below root, directories with a trailing slash."""
    entries = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel = os.path.relpath(dirpath, root)
        prefix = "" if rel == "." else rel + "/"
        entries.extend(prefix + name + "/" for name in dirnames)
        entries.extend(prefix + name for name in filenames)
    return sorted(entries)


EXPECTED_TREE = ["a.txt", "b.txt", "empty/", "sub/", "sub/c.txt", "sub/deeper/", "sub/deeper/d.txt"]


@pytest.mark.parametrize("mode", [RecursionMode.FAIL_FAST, RecursionMode.KEEP_GOING])
def test_copy_tree(sample_tree, mode):
    destination = sample_tree.parent / "dst"
    copy_recursive(sample_tree, destination, mode)

    assert list_tree(destination) == EXPECTED_TREE
    assert (destination / "sub" / "deeper" / "d.txt").read_text() == "delta"
    assert list_tree(sample_tree) == EXPECTED_TREE


def test_copy_single_file(sample_tree):
    destination = sample_tree.parent / "copy.txt"
    copy_recursive(sample_tree / "a.txt", destination, RecursionMode.FAIL_FAST)
    assert destination.read_text() == "alpha"


def test_copy_preserves_attributes(sample_tree):
    os.chmod(sample_tree / "a.txt", 0o640)
    os.utime(sample_tree / "a.txt", (1_000_000_000, 1_000_000_000))
    os.utime(sample_tree / "sub", (1_100_000_000, 1_100_000_000))
    destination = sample_tree.parent / "dst"

    copy_recursive(sample_tree, destination, RecursionMode.FAIL_FAST)

    assert stat.S_IMODE(os.stat(destination / "a.txt").st_mode) == 0o640
    assert os.stat(destination / "a.txt").st_mtime == 1_000_000_000
    # Directory attributes are copied once its entries are in place
    assert os.stat(destination / "sub").st_mtime == 1_100_000_000


def test_copy_read_only_directory(sample_tree):
    """Test that a read-only source directory still receives its entries."""
    os.chmod(sample_tree / "sub", 0o555)
    destination = sample_tree.parent / "dst"
    try:
        copy_recursive(sample_tree, destination, RecursionMode.FAIL_FAST)
        assert (destination / "sub" / "c.txt").read_text() == "charlie"
        assert stat.S_IMODE(os.stat(destination / "sub").st_mode) == 0o555
    finally:
        os.chmod(sample_tree / "sub", 0o755)
        if (destination / "sub").exists():
            os.chmod(destination / "sub", 0o755)


def test_copy_symlinks_as_links(sample_tree):
    try:
        os.symlink("a.txt", sample_tree / "file_link")
        os.symlink("sub", sample_tree / "dir_link")
    except (OSError, NotImplementedError):
        pytest.skip("Symbolic links are not supported")
    destination = sample_tree.parent / "dst"

    copy_recursive(sample_tree, destination, RecursionMode.FAIL_FAST)

    assert os.readlink(destination / "file_link") == "a.txt"
    assert os.readlink(destination / "dir_link") == "sub"
    assert (destination / "dir_link").is_symlink()


def test_fail_fast_aborts_on_first_failure(sample_tree, failing_backend):
    error = failing_backend.fail("copy_file", sample_tree / "b.txt")
    destination = sample_tree.parent / "dst"

    with pytest.raises(PermissionError) as excinfo:
        copy_recursive(sample_tree, destination, RecursionMode.FAIL_FAST, backend=failing_backend)

    assert excinfo.value is error
    # Only what was copied before the failing node is present
    assert list_tree(destination) == ["a.txt"]


def test_keep_going_copies_everything_else(sample_tree, failing_backend):
    failing_backend.fail("copy_file", sample_tree / "b.txt")
    destination = sample_tree.parent / "dst"

    with pytest.raises(RecursiveCopyError) as excinfo:
        copy_recursive(sample_tree, destination, RecursionMode.KEEP_GOING, backend=failing_backend)

    assert excinfo.value.paths == [sample_tree / "b.txt"]
    assert isinstance(excinfo.value.failures[0].error, PermissionError)
    assert excinfo.value.root == sample_tree
    assert list_tree(destination) == [path for path in EXPECTED_TREE if path != "b.txt"]
    assert (destination / "sub" / "c.txt").read_text() == "charlie"


def test_keep_going_skips_directories_that_cannot_be_created(sample_tree, failing_backend):
    failing_backend.fail("copy_directory", sample_tree / "sub")
    destination = sample_tree.parent / "dst"

    with pytest.raises(RecursiveCopyError) as excinfo:
        copy_recursive(sample_tree, destination, RecursionMode.KEEP_GOING, backend=failing_backend)

    # Entries of the failed directory are neither copied nor reported
    assert excinfo.value.paths == [sample_tree / "sub"]
    assert list_tree(destination) == ["a.txt", "b.txt", "empty/"]


def test_keep_going_reports_every_failure_in_encounter_order(sample_tree, failing_backend):
    failing_backend.fail("copy_file", sample_tree / "sub" / "deeper" / "d.txt")
    failing_backend.fail("copy_file", sample_tree / "a.txt")
    failing_backend.fail("copy_attributes", sample_tree / "empty")
    destination = sample_tree.parent / "dst"

    with pytest.raises(RecursiveCopyError) as excinfo:
        copy_recursive(sample_tree, destination, RecursionMode.KEEP_GOING, backend=failing_backend)

    assert excinfo.value.paths == [
        sample_tree / "a.txt",
        sample_tree / "empty",
        sample_tree / "sub" / "deeper" / "d.txt",
    ]
    assert "3 failures during recursive copy" in str(excinfo.value)


def test_destination_exists(sample_tree):
    destination = sample_tree.parent / "dst"
    destination.mkdir()
    (destination / "keep.txt").write_text("untouched")

    with pytest.raises(DestinationExistsError) as excinfo:
        copy_recursive(sample_tree, destination, RecursionMode.KEEP_GOING)

    assert isinstance(excinfo.value, FileExistsError)
    assert list_tree(destination) == ["keep.txt"]


def test_destination_exists_as_dangling_symlink(sample_tree):
    destination = sample_tree.parent / "dst"
    os.symlink(sample_tree.parent / "nowhere", destination)

    with pytest.raises(DestinationExistsError):
        copy_recursive(sample_tree, destination, RecursionMode.FAIL_FAST)


def test_replace_existing_tree(sample_tree):
    destination = sample_tree.parent / "dst"
    (destination / "old" / "nested").mkdir(parents=True)
    (destination / "old" / "nested" / "stale.txt").write_text("stale")

    copy_recursive(sample_tree, destination, RecursionMode.FAIL_FAST, CopyOption.REPLACE_EXISTING)

    # The copy never merges into the previous destination
    assert list_tree(destination) == EXPECTED_TREE


def test_replace_existing_file(sample_tree):
    destination = sample_tree.parent / "dst"
    destination.write_text("previous")

    copy_recursive(sample_tree, destination, RecursionMode.KEEP_GOING, CopyOption.REPLACE_EXISTING)

    assert destination.is_dir()
    assert list_tree(destination) == EXPECTED_TREE


def test_replace_existing_symlink_keeps_its_target(sample_tree):
    target = sample_tree.parent / "elsewhere"
    target.mkdir()
    (target / "precious.txt").write_text("precious")
    destination = sample_tree.parent / "dst"
    os.symlink(target, destination)

    copy_recursive(sample_tree, destination, RecursionMode.FAIL_FAST, CopyOption.REPLACE_EXISTING)

    assert not destination.is_symlink()
    assert (target / "precious.txt").read_text() == "precious"


def test_more_than_one_option_is_rejected_before_any_io(sample_tree):
    backend = MagicMock(spec=PosixBackend)

    with pytest.raises(UnsupportedConfigurationError):
        copy_recursive(
            sample_tree,
            sample_tree.parent / "dst",
            RecursionMode.FAIL_FAST,
            CopyOption.REPLACE_EXISTING,
            CopyOption.REPLACE_EXISTING,
            backend=backend,
        )

    assert backend.method_calls == []
    assert not (sample_tree.parent / "dst").exists()


def test_unknown_option_is_rejected(sample_tree):
    with pytest.raises(UnsupportedConfigurationError):
        copy_recursive(sample_tree, sample_tree.parent / "dst", RecursionMode.FAIL_FAST, "follow_links")


def test_invalid_mode_is_rejected(sample_tree):
    with pytest.raises(TypeError):
        copy_recursive(sample_tree, sample_tree.parent / "dst", None)  # type: ignore[arg-type]


def test_missing_source(tmp_path):
    destination = tmp_path / "dst"
    with pytest.raises(FileNotFoundError):
        copy_recursive(tmp_path / "missing", destination, RecursionMode.KEEP_GOING)
    assert not destination.exists()


@pytest.mark.parametrize("destination", ["sub/copy", "copy", "."])
def test_copy_into_itself_is_rejected(sample_tree, destination):
    with pytest.raises(UnsupportedConfigurationError):
        copy_recursive(sample_tree, sample_tree / destination, RecursionMode.FAIL_FAST, CopyOption.REPLACE_EXISTING)
    assert list_tree(sample_tree) == EXPECTED_TREE


@pytest.mark.parametrize("mode", [RecursionMode.FAIL_FAST, RecursionMode.KEEP_GOING])
@pytest.mark.parametrize("levels", [1, 2])
def test_copy_over_an_ancestor_is_rejected(sample_tree, mode, levels):
    """Test that replacing an ancestor of the source never deletes the source."""
    source = sample_tree / "sub" / "deeper"
    destination = source.parents[levels - 1]

    with pytest.raises(UnsupportedConfigurationError):
        copy_recursive(source, destination, mode, CopyOption.REPLACE_EXISTING)

    assert list_tree(sample_tree) == EXPECTED_TREE


def test_plain_string_mode_is_rejected(sample_tree):
    destination = sample_tree.parent / "dst"
    with pytest.raises(TypeError):
        copy_recursive(sample_tree, destination, "fail_fast")  # type: ignore[arg-type]
    assert not destination.exists()


def test_plain_string_option_is_rejected(sample_tree):
    destination = sample_tree.parent / "dst"
    destination.mkdir()
    with pytest.raises(UnsupportedConfigurationError):
        copy_recursive(sample_tree, destination, RecursionMode.FAIL_FAST, "replace_existing")  # type: ignore[arg-type]
    assert destination.exists()


def test_relative_paths(sample_tree, monkeypatch):
    monkeypatch.chdir(sample_tree.parent)
    copy_recursive("src", "dst", RecursionMode.FAIL_FAST)
    assert list_tree(sample_tree.parent / "dst") == EXPECTED_TREE
