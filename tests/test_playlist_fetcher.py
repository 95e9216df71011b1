"""
Tests for fetching playlists over HTTP
"""
import asyncio
import aiohttp
import pytest
from unittest.mock import MagicMock

from m3u_parser import FormatError
from playlist_fetcher import PlaylistFetcher, FetchError


class FakeResponse:
    def __init__(self, status=200, text=""):
        self.status = status
        self._text = text

    async def text(self, **kwargs):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


def fetcher_with(*responses, retry_count=3):
    fetcher = PlaylistFetcher(retry_count=retry_count, retry_delay=0)
    fetcher.session = MagicMock()
    fetcher.session.get = MagicMock(side_effect=list(responses))
    return fetcher


class TestPlaylistFetcher:
    def test_fetch_playlist(self):
        fetcher = fetcher_with(FakeResponse(text="#EXTM3U\n#EXTINF:-1,A\nhttp://a\n"))
        channels = asyncio.run(fetcher.fetch_playlist("http://list"))
        assert [c.name for c in channels] == ["A"]

        args, kwargs = fetcher.session.get.call_args
        assert args == ("http://list",)
        assert kwargs["headers"]["User-Agent"].startswith("VLC")

    def test_http_error_not_retried(self):
        fetcher = fetcher_with(FakeResponse(status=404))
        with pytest.raises(FetchError, match="HTTP 404"):
            asyncio.run(fetcher.fetch_text("http://list"))
        assert fetcher.session.get.call_count == 1

    def test_network_error_retried(self):
        fetcher = fetcher_with(aiohttp.ClientConnectionError("boom"),
                               FakeResponse(text="#EXTM3U\n"))
        assert asyncio.run(fetcher.fetch_text("http://list")) == "#EXTM3U\n"
        assert fetcher.session.get.call_count == 2

    def test_retries_exhausted(self):
        fetcher = fetcher_with(*[aiohttp.ClientConnectionError("boom")] * 2, retry_count=2)
        with pytest.raises(FetchError):
            asyncio.run(fetcher.fetch_text("http://list"))

    def test_format_error_propagates(self):
        fetcher = fetcher_with(FakeResponse(text="<html>"))
        with pytest.raises(FormatError):
            asyncio.run(fetcher.fetch_playlist("http://list"))

    def test_requires_context_manager(self):
        with pytest.raises(RuntimeError):
            asyncio.run(PlaylistFetcher().fetch_text("http://list"))

    def test_context_manager_closes_session(self):
        async def run():
            async with PlaylistFetcher() as fetcher:
                session = fetcher.session
            return fetcher, session

        fetcher, session = asyncio.run(run())
        assert session.closed
        assert fetcher.session is None
