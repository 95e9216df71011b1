"""
Tests for export helpers
"""
import asyncio
import pytest

from m3u_parser import M3UParser, Channel
from file_utils import export_filename, ensure_unique_filename, export_playlist


class TestExportFilename:
    def test_sanitizes_name(self):
        assert export_filename("My List: 2024!") == "My_List__2024_.m3u"

    def test_txt_format(self):
        assert export_filename("list", "txt") == "list.txt"

    def test_empty_name(self):
        assert export_filename("") == "playlist.m3u"

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            export_filename("list", "pls")


class TestEnsureUniqueFilename:
    def test_adds_counter(self, tmp_path):
        (tmp_path / "a.m3u").write_text("")
        (tmp_path / "a_1.m3u").write_text("")
        assert ensure_unique_filename(str(tmp_path), "a.m3u") == str(tmp_path / "a_2.m3u")


class TestExportPlaylist:
    def test_writes_generated_text(self, tmp_path):
        channels = [Channel(name="A", url="http://a")]
        path = asyncio.run(export_playlist(channels, str(tmp_path / "out"), "Mine"))

        assert path.endswith("Mine.m3u")
        parsed = M3UParser.parse_file(path)
        assert parsed[1:] == channels

    def test_never_overwrites(self, tmp_path):
        first = asyncio.run(export_playlist([], str(tmp_path), "Mine", "txt"))
        second = asyncio.run(export_playlist([], str(tmp_path), "Mine", "txt"))
        assert first != second
