import os
import json
import time
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Any
from m3u_parser import Channel
from config import DEFAULT_STATE_DIR, STATE_FILENAME, DEFAULT_PLAYLIST_ID

logger = logging.getLogger('playlist_store')


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class Playlist:
    id: str
    name: str
    channels: List[Channel] = field(default_factory=list)
    timestamp: int = field(default_factory=_now_ms)
    is_default: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'channels': [c.to_dict() for c in self.channels],
            'timestamp': self.timestamp,
            'isDefault': self.is_default,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Playlist':
        return cls(
            id=data['id'],
            name=data['name'],
            channels=[Channel.from_dict(c) for c in data.get('channels', [])],
            timestamp=data.get('timestamp', 0),
            is_default=data.get('isDefault', False),
        )


class PlaylistStore:
    """Named playlists persisted as a single JSON document."""

    def __init__(self, state_dir: str = DEFAULT_STATE_DIR):
        """
        Initialize the playlist store.

        Args:
            state_dir: Directory holding the playlists file
        """
        self.state_dir = state_dir
        os.makedirs(state_dir, exist_ok=True)
        self.playlists: Dict[str, Playlist] = {}
        self.current_id: Optional[str] = None
        self._load()

    @property
    def state_path(self) -> str:
        return os.path.join(self.state_dir, STATE_FILENAME)

    def _load(self) -> None:
        if not os.path.exists(self.state_path):
            return

        try:
            with open(self.state_path, 'r', encoding='utf-8') as f:
                state = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.error(f"Failed to load stored playlists: {e}")
            return

        self.playlists = {pid: Playlist.from_dict(p)
                          for pid, p in state.get('playlists', {}).items()}
        last_loaded = state.get('last_loaded')
        if last_loaded in self.playlists:
            self.current_id = last_loaded

    def _save(self) -> None:
        # The fetched default playlist is kept in memory only
        state = {
            'playlists': {pid: p.to_dict() for pid, p in self.playlists.items()
                          if pid != DEFAULT_PLAYLIST_ID},
            'last_loaded': self.current_id if self.current_id != DEFAULT_PLAYLIST_ID else None,
        }
        with open(self.state_path, 'w', encoding='utf-8') as f:
            json.dump(state, f, indent=2)

    @property
    def current(self) -> Optional[Playlist]:
        if self.current_id is None:
            return None
        return self.playlists.get(self.current_id)

    def list_playlists(self) -> List[Playlist]:
        """Stored playlists, most recently updated first."""
        return sorted(self.playlists.values(), key=lambda p: p.timestamp, reverse=True)

    def get(self, playlist_id: str) -> Optional[Playlist]:
        return self.playlists.get(playlist_id)

    def load(self, playlist_id: str) -> Optional[Playlist]:
        """Make a playlist current and remember it as the last loaded one."""
        playlist = self.playlists.get(playlist_id)
        if playlist:
            self.current_id = playlist_id
            self._save()
        return playlist

    def create(self, name: str, channels: List[Channel]) -> Playlist:
        timestamp = _now_ms()
        playlist_id = f"playlist_{timestamp}"
        # Two creates in the same millisecond
        while playlist_id in self.playlists:
            timestamp += 1
            playlist_id = f"playlist_{timestamp}"

        playlist = Playlist(id=playlist_id, name=name, channels=list(channels), timestamp=timestamp)
        self.playlists[playlist_id] = playlist
        self.current_id = playlist_id
        self._save()
        logger.info(f"Created playlist {name!r} with {len(channels)} channels")
        return playlist

    def update(self, playlist_id: str, name: Optional[str] = None,
               channels: Optional[List[Channel]] = None) -> Optional[Playlist]:
        playlist = self.playlists.get(playlist_id)
        if not playlist:
            return None

        if name is not None:
            playlist.name = name
        if channels is not None:
            playlist.channels = list(channels)
        playlist.timestamp = _now_ms()
        self._save()
        return playlist

    def delete(self, playlist_id: str) -> None:
        if self.playlists.pop(playlist_id, None) is None:
            return
        if self.current_id == playlist_id:
            self.current_id = None
        self._save()
        logger.info(f"Deleted playlist {playlist_id}")

    def set_default(self, channels: List[Channel]) -> Playlist:
        """Register a fetched default playlist and make it current."""
        playlist = Playlist(id=DEFAULT_PLAYLIST_ID, name='Default Playlist',
                            channels=list(channels), is_default=True)
        self.playlists[DEFAULT_PLAYLIST_ID] = playlist
        self.current_id = DEFAULT_PLAYLIST_ID
        return playlist

    def save_current(self, channels: List[Channel], name: Optional[str] = None) -> Optional[Playlist]:
        """Save channels into the current playlist, or into a new one.

        The default playlist is never overwritten; saving it creates a copy.
        """
        if not channels:
            return None

        current = self.current
        if current and not current.is_default:
            return self.update(current.id, name=name or current.name, channels=channels)

        name = name or f"Playlist {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"
        return self.create(name, channels)

    def stats(self, channels: List[Channel]) -> Dict[str, int]:
        """Dashboard counts for the store and the channels being edited."""
        return {
            'playlists': len(self.playlists),
            'total_channels': sum(len(p.channels) for p in self.playlists.values()),
            'current_channels': len(channels),
            'groups': len({c.group for c in channels}),
        }
