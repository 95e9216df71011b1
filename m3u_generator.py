from typing import Iterable
from m3u_parser import Channel, HEADER
from config import DEFAULT_FALLBACK_LOGO, PROMO_CHANNEL_NAME, PROMO_CHANNEL_URL

# Always exported first, never part of the user's channels
PROMO_CHANNEL = Channel(
    name=PROMO_CHANNEL_NAME,
    url=PROMO_CHANNEL_URL,
    logo=DEFAULT_FALLBACK_LOGO,
    group=PROMO_CHANNEL_NAME,
    id='promo',
)


class M3UGenerator:
    @staticmethod
    def format_entry(channel: Channel) -> str:
        """Format one channel as an #EXTINF line followed by its URL line."""
        entry = '#EXTINF:-1'
        if channel.logo and channel.logo.strip():
            entry += f' tvg-logo="{channel.logo}"'
        if channel.group and channel.group.strip():
            entry += f' group-title="{channel.group}"'
        return f'{entry},{channel.name}\n{channel.url}\n'

    @staticmethod
    def generate(channels: Iterable[Channel]) -> str:
        """Serialize channels, promo entry first.

        Names are written only as the trailing title, so a name containing a
        comma reads back as the text after its last comma. A blank group
        reads back as the default group.
        """
        content = HEADER + '\n'
        content += M3UGenerator.format_entry(PROMO_CHANNEL)

        for channel in channels:
            if not channel.name or not channel.url:
                continue
            content += M3UGenerator.format_entry(channel)

        return content
