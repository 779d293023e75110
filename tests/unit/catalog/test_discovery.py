"""Unit tests for catalog file discovery."""

from pathlib import Path

import pytest
from poclean.catalog.discovery import discover_files, discover_many, resolve_root
from poclean.catalog.errors import PathError


class TestResolveRoot:
    """Tests for resolve_root."""

    def test_returns_absolute_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Relative roots are made absolute."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "proj").mkdir()

        assert resolve_root("proj") == tmp_path / "proj"

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing root raises PathError."""
        with pytest.raises(PathError, match="does not exist"):
            resolve_root(tmp_path / "missing")

    def test_root_is_file(self, tmp_path: Path) -> None:
        """A file root raises PathError."""
        target = tmp_path / "file.txt"
        target.write_text("x")

        with pytest.raises(PathError, match="not a directory"):
            resolve_root(target)


class TestDiscoverFiles:
    """Tests for discover_files."""

    def test_finds_nested_matches(self, tmp_path: Path) -> None:
        """Matching files are found at every depth."""
        (tmp_path / "a" / "b").mkdir(parents=True)
        (tmp_path / "top.po").write_text("")
        (tmp_path / "a" / "mid.po").write_text("")
        (tmp_path / "a" / "b" / "deep.po").write_text("")
        (tmp_path / "a" / "other.txt").write_text("")

        found = discover_files(tmp_path, "*.po")

        assert sorted(p.name for p in found) == ["deep.po", "mid.po", "top.po"]
        assert all(p.is_absolute() for p in found)

    def test_directories_never_match(self, tmp_path: Path) -> None:
        """A directory whose name matches the pattern is skipped."""
        (tmp_path / "fake.po").mkdir()
        (tmp_path / "fake.po" / "real.po").write_text("")

        found = discover_files(tmp_path, "*.po")

        assert found == [tmp_path / "fake.po" / "real.po"]

    def test_matches_base_name_only(self, tmp_path: Path) -> None:
        """The pattern is matched against the file name, not the path."""
        (tmp_path / "views.py.d").mkdir()
        (tmp_path / "views.py.d" / "notes.txt").write_text("")

        assert discover_files(tmp_path, "*.py") == []

    def test_traversal_is_lexical(self, tmp_path: Path) -> None:
        """Files are returned in sorted directory-walk order."""
        (tmp_path / "b").mkdir()
        (tmp_path / "z.py").write_text("")
        (tmp_path / "a.py").write_text("")
        (tmp_path / "b" / "c.py").write_text("")

        found = discover_files(tmp_path, "*.py")

        assert found == [tmp_path / "a.py", tmp_path / "z.py", tmp_path / "b" / "c.py"]

    def test_empty_root(self, tmp_path: Path) -> None:
        """An empty directory yields no files."""
        assert discover_files(tmp_path, "*.po") == []

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing root raises PathError."""
        with pytest.raises(PathError):
            discover_files(tmp_path / "nope", "*.po")


class TestDiscoverMany:
    """Tests for discover_many."""

    def test_union_without_duplicates(self, tmp_path: Path) -> None:
        """Overlapping patterns report each file once, in first-seen order."""
        (tmp_path / "a.py").write_text("")
        (tmp_path / "b.html").write_text("")

        found = discover_many(tmp_path, ["*.py", "*.html", "a.*"])

        assert found == [tmp_path / "a.py", tmp_path / "b.html"]
