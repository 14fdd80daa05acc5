"""Tests for temp-file discovery and removal."""

from pathlib import Path

import pytest

from dotshell.cleanup import (
    COMMON_PATTERNS,
    DARWIN_PATTERNS,
    cleanup_patterns,
    find_temp_files,
    is_temp_file,
    remove_files,
)


@pytest.fixture
def tree(tmp_path):
    """A small project tree with a mix of temp and regular files."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "nested").mkdir()
    for rel in [
        "notes.txt~",
        "#draft.md#",
        ".#lockfile",
        "src/.main.py.swp",
        "src/nested/.main.py.swo",
        "src/nested/.DS_Store",
        "src/main.py",
        "README.md",
    ]:
        (tmp_path / rel).write_text("x")
    return tmp_path


class TestPatterns:

    def test_linux_has_common_only(self):
        assert cleanup_patterns("linux") == COMMON_PATTERNS

    def test_darwin_adds_finder_files(self):
        patterns = cleanup_patterns("darwin")
        assert set(DARWIN_PATTERNS) <= set(patterns)
        assert set(COMMON_PATTERNS) <= set(patterns)

    def test_matching(self):
        assert is_temp_file("file.txt~", COMMON_PATTERNS)
        assert is_temp_file("#scratch#", COMMON_PATTERNS)
        assert not is_temp_file("file.txt", COMMON_PATTERNS)
        assert not is_temp_file(".DS_Store", COMMON_PATTERNS)
        assert is_temp_file(".DS_Store", cleanup_patterns("darwin"))


class TestFindTempFiles:

    def test_finds_nested_matches(self, tree):
        found = find_temp_files(tree, COMMON_PATTERNS)
        rel = [p.relative_to(tree).as_posix() for p in found]

        assert rel == sorted([
            "#draft.md#",
            ".#lockfile",
            "notes.txt~",
            "src/.main.py.swp",
            "src/nested/.main.py.swo",
        ])

    def test_platform_specific_patterns(self, tree):
        found = find_temp_files(tree, cleanup_patterns("darwin"))
        assert tree / "src" / "nested" / ".DS_Store" in found

    def test_does_not_follow_symlinked_dirs(self, tree, tmp_path_factory):
        outside = tmp_path_factory.mktemp("outside")
        (outside / "keep.txt~").write_text("x")
        (tree / "link").symlink_to(outside, target_is_directory=True)

        found = find_temp_files(tree, COMMON_PATTERNS)
        assert all("link" not in p.parts for p in found)

    def test_not_a_directory(self, tree):
        with pytest.raises(NotADirectoryError):
            find_temp_files(tree / "README.md")


class TestRemoveFiles:

    def test_removes_and_counts(self, tree):
        found = find_temp_files(tree, COMMON_PATTERNS)
        assert remove_files(found) == len(found)
        assert find_temp_files(tree, COMMON_PATTERNS) == []
        assert (tree / "README.md").exists()

    def test_already_deleted_is_skipped(self, tree):
        gone = tree / "notes.txt~"
        gone.unlink()
        assert remove_files([gone, tree / "#draft.md#"]) == 1


class TestUnreadableAndStuckFiles:

    def test_unreadable_subdirectory_is_skipped(self, tree, monkeypatch):
        real_iterdir = Path.iterdir

        def locked_iterdir(self):
            if self.name == "nested":
                raise PermissionError(13, "Permission denied", str(self))
            return real_iterdir(self)

        monkeypatch.setattr(Path, "iterdir", locked_iterdir)
        errors = []

        found = find_temp_files(tree, COMMON_PATTERNS, onerror=errors.append)

        assert tree / "src" / ".main.py.swp" in found
        assert tree / "src" / "nested" / ".main.py.swo" not in found
        assert [e.filename for e in errors] == [str(tree / "src" / "nested")]

    def test_unreadable_root_raises(self, tree, monkeypatch):
        def locked_iterdir(self):
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "iterdir", locked_iterdir)

        with pytest.raises(PermissionError):
            find_temp_files(tree, COMMON_PATTERNS)

    def test_undeletable_file_does_not_stop_the_rest(self, tree, monkeypatch):
        real_unlink = Path.unlink

        def stuck_unlink(self, missing_ok=False):
            if self.name == "#draft.md#":
                raise PermissionError(13, "Permission denied", str(self))
            return real_unlink(self, missing_ok=missing_ok)

        monkeypatch.setattr(Path, "unlink", stuck_unlink)
        found = find_temp_files(tree, COMMON_PATTERNS)
        errors = []

        removed = remove_files(found, onerror=errors.append)

        assert removed == len(found) - 1
        assert len(errors) == 1
        assert (tree / "#draft.md#").exists()
        assert not (tree / "notes.txt~").exists()
