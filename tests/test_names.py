"""Tests for annotator/names.py: resolving the name option into records."""
from __future__ import annotations

import pytest

from annotator.names import is_comment, load_names, split_records
from models import NameSourceError


class TestSplitRecords:
    def test_unix(self):
        assert split_records("Alice\nBob\n") == ["Alice", "Bob"]

    def test_windows_and_old_mac(self):
        assert split_records("Alice\r\nBob\rCarol") == ["Alice", "Bob", "Carol"]

    def test_blank_lines_kept(self):
        assert split_records("Alice\n\n\nBob") == ["Alice", "", "", "Bob"]


class TestIsComment:
    def test_hash(self):
        assert is_comment("# guests")

    def test_hash_inside(self):
        assert not is_comment("Room #4")

    def test_indented_hash_is_a_name(self):
        assert not is_comment(" # not a comment")


class TestLoadNamesFromFile:
    def test_comments_removed_blanks_kept(self, tmp_path):
        path = tmp_path / "names.txt"
        path.write_text("# skip\nAlice\n\nBob\n", encoding="utf-8")
        assert load_names(str(path)) == ["Alice", "", "Bob"]

    def test_crlf(self, tmp_path):
        path = tmp_path / "names.txt"
        path.write_bytes(b"Alice\r\nBob\r\n")
        assert load_names(str(path)) == ["Alice", "Bob"]

    def test_utf8_bom(self, tmp_path):
        path = tmp_path / "names.txt"
        path.write_bytes("\ufeffAlice\n".encode("utf-8"))
        assert load_names(str(path)) == ["Alice"]

    def test_file_without_extension(self, tmp_path):
        path = tmp_path / "guests"
        path.write_text("Alice\n", encoding="utf-8")
        assert load_names(str(path)) == ["Alice"]

    def test_reads_given_path_not_default(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "names.txt").write_text("Default\n", encoding="utf-8")
        (tmp_path / "other.txt").write_text("Other\n", encoding="utf-8")
        assert load_names("other.txt") == ["Other"]


class TestLoadNamesLiteral:
    def test_literal(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_names("Misaka Mikoto") == ["Misaka Mikoto"]

    def test_literal_with_dot(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_names("Dr. Smith") == ["Dr. Smith"]

    def test_literal_comment(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_names("#nobody") == []


class TestLoadNamesErrors:
    def test_missing_file_with_extension(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(NameSourceError, match="does not exist"):
            load_names("names.txt")

    def test_missing_nested_path(self, tmp_path):
        with pytest.raises(NameSourceError):
            load_names(str(tmp_path / "lists" / "guests"))

    def test_directory(self, tmp_path):
        with pytest.raises(NameSourceError, match="not a regular file"):
            load_names(str(tmp_path))
