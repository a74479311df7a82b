"""Tests for annotator/filenames.py: filename stems and run-wide collisions."""
from __future__ import annotations

import pytest

from annotator.filenames import OutputNamer, derive_base_name, validate_base_name
from models import FilenameCollisionError, FilenameError


class TestDeriveBaseName:
    def test_spaces_removed(self):
        assert derive_base_name("Misaka Mikoto") == "MisakaMikoto"

    def test_all_whitespace_kinds(self):
        assert derive_base_name(" a\tb c \n") == "abc"

    def test_single_ampersand_removed(self):
        assert derive_base_name("A & B") == "AB"

    def test_only_first_ampersand_removed(self):
        assert derive_base_name("A & B & C") == "AB&C"
        assert derive_base_name("&&&") == "&&"

    def test_no_change(self):
        assert derive_base_name("Li") == "Li"

    def test_unicode_kept(self):
        assert derive_base_name("御坂 美琴") == "御坂美琴"


class TestValidateBaseName:
    def test_valid(self):
        assert validate_base_name("MisakaMikoto") == "MisakaMikoto"

    @pytest.mark.parametrize("base", ["", ".", ".."])
    def test_empty_and_dots(self, base):
        with pytest.raises(FilenameError):
            validate_base_name(base)

    @pytest.mark.parametrize("base", ["a/b", "a\\b", "C:x", "what?", "a*b", 'say"hi"', "a|b"])
    def test_reserved_characters(self, base):
        with pytest.raises(FilenameError, match="reserved"):
            validate_base_name(base)


class TestOutputNamer:
    def test_first_claim_is_base(self):
        assert OutputNamer().claim("Jo Hn") == "JoHn"

    def test_suffix_on_collision(self):
        namer = OutputNamer("suffix")
        assert namer.claim("Jo Hn") == "JoHn"
        assert namer.claim("JoHn") == "JoHn-2"
        assert namer.claim("J oHn") == "JoHn-3"

    def test_suffix_case_insensitive(self):
        namer = OutputNamer("suffix")
        namer.claim("Bob")
        assert namer.claim("bob") == "bob-2"

    def test_suffix_skips_taken_suffix(self):
        namer = OutputNamer("suffix")
        assert namer.claim("A-2") == "A-2"
        assert namer.claim("A") == "A"
        assert namer.claim("A") == "A-3"

    def test_error_policy(self):
        namer = OutputNamer("error")
        namer.claim("Jo Hn")
        with pytest.raises(FilenameCollisionError):
            namer.claim("JoHn")

    def test_overwrite_policy(self):
        namer = OutputNamer("overwrite")
        assert namer.claim("Jo Hn") == "JoHn"
        assert namer.claim("JoHn") == "JoHn"

    def test_invalid_label(self):
        with pytest.raises(FilenameError):
            OutputNamer().claim("a/b")

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            OutputNamer("rename")
