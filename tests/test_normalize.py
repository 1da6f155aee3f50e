"""Tests for path normalization."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from safe_rm.core.normalize import normalize_path, symlink_canonicalize


class TestSymlinkCanonicalize:
    """Tests for symlink_canonicalize function."""

    def test_root(self):
        assert symlink_canonicalize("/") == Path("/")

    def test_parent_of_root(self):
        assert symlink_canonicalize("/..") == Path("/")

    def test_plain_directory(self, temp_dir: Path):
        (temp_dir / "usr" / "bin").mkdir(parents=True)
        assert symlink_canonicalize(temp_dir / "usr" / "bin") == temp_dir / "usr" / "bin"

    def test_trailing_separator_and_dot(self, temp_dir: Path):
        (temp_dir / "usr").mkdir()
        assert symlink_canonicalize(f"{temp_dir}/usr/") == temp_dir / "usr"
        assert symlink_canonicalize(f"{temp_dir}/usr/.") == temp_dir / "usr"

    def test_relative_segments_in_parent(self, temp_dir: Path):
        (temp_dir / "usr" / "bin").mkdir(parents=True)
        (temp_dir / "usr" / "local").mkdir()
        assert (
            symlink_canonicalize(f"{temp_dir}/usr/bin/../bin/sh") == temp_dir / "usr" / "bin" / "sh"
        )
        assert symlink_canonicalize(f"{temp_dir}/usr/bin/./.././local") == temp_dir / "usr" / "local"

    def test_final_parent_component(self, temp_dir: Path):
        (temp_dir / "usr").mkdir()
        assert symlink_canonicalize(f"{temp_dir}/usr/..") == temp_dir

    def test_final_component_not_followed(self, protected_tree: Path):
        link = protected_tree / "unprotected_symlink"
        assert symlink_canonicalize(link) == link

    def test_symlinked_parent_resolved(self, protected_tree: Path):
        assert (
            symlink_canonicalize(protected_tree / "dir_link" / "file1")
            == protected_tree / "dir" / "file1"
        )

    def test_relative_path_is_absolute(self, temp_dir: Path, monkeypatch):
        monkeypatch.chdir(temp_dir)
        result = symlink_canonicalize("some-file")
        assert result is not None
        assert result.is_absolute()
        assert result == temp_dir / "some-file"

    def test_missing_parent(self):
        assert symlink_canonicalize("/non/existent/path/to/file") is None


class TestNormalizePath:
    """Tests for normalize_path function."""

    def test_root(self):
        assert normalize_path("/") == "/"
        assert normalize_path("/../.") == "/"

    def test_existing_directory(self, temp_dir: Path):
        assert normalize_path(str(temp_dir)) == str(temp_dir)
        assert normalize_path(f"{temp_dir}/") == str(temp_dir)

    def test_relative_segments(self, temp_dir: Path):
        (temp_dir / "home").mkdir()
        (temp_dir / "usr").mkdir()
        assert normalize_path(f"{temp_dir}/home/../usr") == str(temp_dir / "usr")

    def test_relative_argument(self, temp_dir: Path, monkeypatch):
        (temp_dir / "file").write_text("")
        monkeypatch.chdir(temp_dir)
        assert normalize_path("file") == str(temp_dir / "file")
        assert normalize_path("./file") == str(temp_dir / "file")

    def test_empty_string_unchanged(self):
        assert normalize_path("") == ""

    def test_missing_path_unchanged(self, temp_dir: Path, monkeypatch):
        monkeypatch.chdir(temp_dir)
        assert normalize_path("foo") == "foo"
        assert normalize_path("/tmp/�/") == "/tmp/�/"

    def test_flag_unchanged(self, temp_dir: Path, monkeypatch):
        monkeypatch.chdir(temp_dir)
        assert normalize_path("--help") == "--help"
        assert normalize_path("-rf") == "-rf"

    def test_embedded_nul_unchanged(self):
        assert normalize_path("/tmp/a\x00b") == "/tmp/a\x00b"

    def test_symlink_keeps_own_identity(self, protected_tree: Path):
        link = protected_tree / "unprotected_symlink"
        assert normalize_path(str(link)) == str(link)
        assert normalize_path(str(link)) != normalize_path(str(protected_tree / "empty"))

    def test_symlink_with_trailing_separator_follows_target(self, protected_tree: Path):
        assert normalize_path(f"{protected_tree}/dir_link/") == str(protected_tree / "dir")

    def test_symlink_via_relative_path(self, protected_tree: Path, monkeypatch):
        monkeypatch.chdir(protected_tree / "dir")
        assert normalize_path("../unprotected_symlink") == str(
            protected_tree / "unprotected_symlink"
        )

    def test_dangling_symlink(self, temp_dir: Path):
        link = temp_dir / "dangling"
        link.symlink_to(temp_dir / "nowhere")
        assert normalize_path(str(link)) == str(link)

    def test_symlink_loop_unchanged(self, temp_dir: Path):
        (temp_dir / "a").symlink_to(temp_dir / "b")
        (temp_dir / "b").symlink_to(temp_dir / "a")
        looped = f"{temp_dir}/a/x"
        assert normalize_path(looped) == looped

    @pytest.mark.parametrize("name", ["empty", "dir", "dir/file1", "unprotected_symlink", "dir_link"])
    def test_idempotent(self, protected_tree: Path, name: str):
        once = normalize_path(os.path.join(str(protected_tree), name))
        assert normalize_path(once) == once
