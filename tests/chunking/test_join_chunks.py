"""Tests for reassembling split files."""

import os

import pytest

from shellkit.chunking import SplitPlan, chunk_file, find_parts, join_chunks
from shellkit.core.errors import InvalidInputError, NotFoundError

pytestmark = pytest.mark.unit


class TestJoinChunks:
    def test_byte_round_trip(self, make_file, tmp_path):
        payload = os.urandom(5000)
        source = make_file("archive.tar", payload)
        dest = tmp_path / "parts"
        dest.mkdir()
        result = chunk_file(source, SplitPlan.from_options(part_count=7), destination=dest)

        joined = join_chunks(result.chunks[3].path, tmp_path / "restored.tar")

        assert joined.parts == result.count
        assert joined.size_bytes == 5000
        assert (tmp_path / "restored.tar").read_bytes() == payload

    def test_char_round_trip_writes_bom_once(self, make_file, tmp_path):
        text = "ünïcödé\r\nline two ✓\n"
        source = make_file("doc.txt", b"\xef\xbb\xbf" + text.encode("utf-8"))
        dest = tmp_path / "parts"
        dest.mkdir()
        result = chunk_file(source, SplitPlan.from_options(char_count=3), destination=dest)
        assert result.count > 1

        join_chunks(result.chunks[0].path, tmp_path / "doc.joined.txt")

        assert (tmp_path / "doc.joined.txt").read_bytes() == source.read_bytes()

    def test_ignores_unrelated_siblings(self, make_file, tmp_path):
        make_file("out/data_size_part0001.bin", b"ab")
        make_file("out/data_size_part0002.bin", b"cd")
        make_file("out/data_part_part0001.bin", b"XX")
        make_file("out/other_size_part0001.bin", b"YY")
        make_file("out/data_size_part0001.txt", b"ZZ")

        parts = find_parts(tmp_path / "out" / "data_size_part0002.bin")

        assert [p.name for p in parts] == ["data_size_part0001.bin", "data_size_part0002.bin"]

    def test_gap_is_rejected_before_writing(self, make_file, tmp_path):
        make_file("data_size_part0001.bin", b"ab")
        make_file("data_size_part0003.bin", b"ef")

        with pytest.raises(InvalidInputError, match="Missing part 2"):
            join_chunks(tmp_path / "data_size_part0001.bin", tmp_path / "data.bin")
        assert not (tmp_path / "data.bin").exists()

    def test_not_a_chunk_name(self, make_file, tmp_path):
        make_file("data.bin", b"ab")

        with pytest.raises(InvalidInputError):
            join_chunks(tmp_path / "data.bin", tmp_path / "out.bin")

    def test_missing_chunk(self, tmp_path):
        with pytest.raises(NotFoundError):
            join_chunks(tmp_path / "data_size_part0001.bin", tmp_path / "out.bin")

    def test_output_cannot_be_a_part(self, make_file, tmp_path):
        first = make_file("data_size_part0001.bin", b"ab")

        with pytest.raises(InvalidInputError, match="overwrite"):
            join_chunks(first, first)
