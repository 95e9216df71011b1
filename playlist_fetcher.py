import aiohttp
import asyncio
import logging
from typing import List, Optional
from m3u_parser import Channel, M3UParser
from config import USER_AGENT, RETRY_COUNT, REQUEST_TIMEOUT, DEFAULT_PLAYLIST_URL

# Setup logging
logging.basicConfig(level=logging.INFO,
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger('playlist_fetcher')


class FetchError(Exception):
    """Raised when a playlist cannot be retrieved."""


class PlaylistFetcher:
    def __init__(self,
                 retry_count: int = RETRY_COUNT,
                 timeout: int = REQUEST_TIMEOUT,
                 retry_delay: float = 2):
        self.retry_count = retry_count
        self.timeout = timeout
        self.retry_delay = retry_delay
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        timeout = aiohttp.ClientTimeout(total=None, connect=self.timeout, sock_read=self.timeout)
        self.session = aiohttp.ClientSession(timeout=timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()
            self.session = None

    async def fetch_text(self, url: str) -> str:
        """Download playlist text, retrying network errors with backoff."""
        if self.session is None:
            raise RuntimeError("PlaylistFetcher must be used as an async context manager")

        headers = {
            'User-Agent': USER_AGENT,
            'Accept': '*/*',
        }
        retries = 0

        while True:
            try:
                async with self.session.get(url, headers=headers, allow_redirects=True) as response:
                    if response.status != 200:
                        # Not retried: the server answered
                        raise FetchError(f"HTTP {response.status}: Failed to fetch playlist")
                    text = await response.text(encoding='utf-8', errors='replace')
                    logger.info(f"Fetched {len(text)} characters from {url}")
                    return text

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.error(f"Playlist fetch error for {url}: {str(e)}")
                retries += 1
                if retries >= self.retry_count:
                    raise FetchError(f"Failed to fetch playlist: {str(e)}") from e
                await asyncio.sleep(self.retry_delay * retries)  # Back off before retrying

    async def fetch_playlist(self, url: str = DEFAULT_PLAYLIST_URL) -> List[Channel]:
        """Fetch and parse a playlist; FormatError propagates unchanged."""
        text = await self.fetch_text(url)
        return M3UParser.parse(text)
