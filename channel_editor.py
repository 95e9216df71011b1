"""
Editing boundary between a selection-driven front end and the pure
playlist transformations.

The editor owns the channel sequence being edited and, when attached to a
store playlist, writes every change back to it. Selections are channel ids
rather than positions, so they stay valid across edits.
"""

import logging
from typing import Iterable, List, Optional
from m3u_parser import Channel, M3UParser
from m3u_generator import M3UGenerator
from auto_logo import apply_auto_logos
from bulk_rename import BulkRenameConfig, apply_bulk_rename, ALL
from playlist_store import PlaylistStore
from config import DEFAULT_GROUP

logger = logging.getLogger('channel_editor')


class ConfigError(ValueError):
    """Raised for edits that fail validation."""


def validate_channel(name: str, url: str, logo: str = '', group: str = DEFAULT_GROUP) -> Channel:
    """Build a channel from form input, rejecting empty required fields."""
    name = (name or '').strip()
    url = (url or '').strip()
    if not name:
        raise ConfigError("Channel name is required")
    if not url:
        raise ConfigError("Valid stream URL is required")
    return Channel(name=name, url=url, logo=(logo or '').strip(), group=(group or '').strip() or DEFAULT_GROUP)


def validate_rename_config(config: BulkRenameConfig) -> BulkRenameConfig:
    if config.add_numbering and config.number_start < 1:
        raise ConfigError("Start number must be a positive integer")
    return config


class ChannelEditor:
    def __init__(self, store: Optional[PlaylistStore] = None, channels: Optional[List[Channel]] = None):
        self.store = store
        if channels is None and store is not None and store.current:
            channels = store.current.channels
        self.channels: List[Channel] = list(channels or [])

    def _commit(self, channels: List[Channel]) -> List[Channel]:
        self.channels = channels
        if self.store is not None and self.store.current_id in self.store.playlists:
            self.store.update(self.store.current_id, channels=channels)
        return channels

    def _indices(self, channel_ids: Optional[Iterable[str]]) -> List[int]:
        """Positions of the selected ids; an empty selection means all."""
        if not channel_ids:
            return list(range(len(self.channels)))

        wanted = set(channel_ids)
        indices = [i for i, c in enumerate(self.channels) if c.id in wanted]
        if len(indices) != len(wanted):
            raise ConfigError("Selection refers to unknown channels")
        return indices

    def index_of(self, channel_id: str) -> int:
        for index, channel in enumerate(self.channels):
            if channel.id == channel_id:
                return index
        raise ConfigError(f"Unknown channel id: {channel_id}")

    def load_text(self, text: str) -> List[Channel]:
        """Replace the channels with a parsed playlist.

        The current channels are left untouched when parsing fails.
        """
        channels = M3UParser.parse(text)
        logger.info(f"Loaded {len(channels)} channels")
        return self._commit(channels)

    def export_text(self) -> str:
        return M3UGenerator.generate(self.channels)

    def add_channel(self, name: str, url: str, logo: str = '', group: str = DEFAULT_GROUP) -> Channel:
        channel = validate_channel(name, url, logo, group)
        self._commit(self.channels + [channel])
        return channel

    def update_channel(self, channel_id: str, **changes) -> Channel:
        index = self.index_of(channel_id)
        current = self.channels[index]
        fields = current.to_dict()
        del fields['id']
        fields.update({k: v for k, v in changes.items() if v is not None})
        edited = validate_channel(**fields)
        channel = current.replace(name=edited.name, url=edited.url, logo=edited.logo, group=edited.group)

        channels = list(self.channels)
        channels[index] = channel
        self._commit(channels)
        return channel

    def delete_channel(self, channel_id: str) -> None:
        index = self.index_of(channel_id)
        self._commit(self.channels[:index] + self.channels[index + 1:])

    def auto_logos(self, channel_ids: Optional[Iterable[str]] = None,
                   override_url: Optional[str] = None) -> List[Channel]:
        indices = self._indices(channel_ids)
        return self._commit(apply_auto_logos(self.channels, indices, override_url))

    def bulk_rename(self, config: BulkRenameConfig,
                    channel_ids: Optional[Iterable[str]] = None) -> List[Channel]:
        validate_rename_config(config)
        targets = self._indices(channel_ids) if channel_ids else ALL
        return self._commit(apply_bulk_rename(self.channels, targets, config))
