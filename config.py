"""Constants shared by the playlist tools."""

# Public community logo repository, addressed by channel slug
LOGO_BASE_URL = 'https://raw.githubusercontent.com/iptv-org/tv-logos/master/logos/'

DEFAULT_PLAYLIST_URL = 'https://raw.githubusercontent.com/MRM3UK/New-try/refs/heads/main/playlist4.m3u'
DEFAULT_FALLBACK_LOGO = 'https://pixeldrain.com/api/file/khPX4Kf4/thumbnail'
PROMO_CHANNEL_NAME = 't.me/MR_X_069'
PROMO_CHANNEL_URL = 'https://pixeldrain.com/api/file/khPX4Kf4'

DEFAULT_GROUP = 'General'
DEFAULT_NUMBER_FORMAT = 'S01E##'

DEFAULT_STATE_DIR = '.streamfixer'
STATE_FILENAME = 'playlists.json'
DEFAULT_PLAYLIST_ID = 'default_playlist'

# HTTP
USER_AGENT = 'VLC/3.0.16 LibVLC/3.0.16'
RETRY_COUNT = 3
REQUEST_TIMEOUT = 60
