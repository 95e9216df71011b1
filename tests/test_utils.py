"""
Tests for helper functions
"""
from m3u_parser import Channel
from utils import filter_channels, format_channel_count


class TestFilterChannels:
    channels = [
        Channel(name="BBC One", url="http://uk/1", group="UK"),
        Channel(name="CNN", url="http://us/cnn", group="News"),
    ]

    def test_matches_name_group_and_url(self):
        assert filter_channels(self.channels, "bbc") == self.channels[:1]
        assert filter_channels(self.channels, "NEWS") == self.channels[1:]
        assert filter_channels(self.channels, "/us/") == self.channels[1:]

    def test_empty_query_returns_all(self):
        assert filter_channels(self.channels, "  ") == self.channels


class TestFormatChannelCount:
    def test_plural(self):
        assert format_channel_count(1) == "1 channel"
        assert format_channel_count(0) == "0 channels"
