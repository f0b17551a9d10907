"""Tests for shared name filters."""

import pytest

from shellkit.core.filters import (
    is_excluded,
    looks_binary,
    normalize_extensions,
    should_skip,
)

pytestmark = pytest.mark.unit


def test_is_excluded_with_globs():
    assert is_excluded("node_modules", ["node_modules"])
    assert is_excluded("shellkit.egg-info", ["*.egg-info"])
    assert not is_excluded("src", ["node_modules", "*.egg-info"])


def test_should_skip_hidden():
    assert should_skip(".git", [])
    assert not should_skip(".git", [], show_hidden=True)
    assert should_skip(".git", [".git"], show_hidden=True)


def test_normalize_extensions():
    assert normalize_extensions(["py", ".TS", " .Md ", ""]) == {".py", ".ts", ".md"}
    assert normalize_extensions([]) is None
    assert normalize_extensions(None) is None
    assert normalize_extensions([""]) is None


def test_looks_binary(tmp_path):
    text = tmp_path / "a.txt"
    text.write_text("plain text ✓")
    blob = tmp_path / "a.bin"
    blob.write_bytes(b"PK\x03\x04\x00\x00")

    assert not looks_binary(text)
    assert looks_binary(blob)
