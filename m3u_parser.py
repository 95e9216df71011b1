import re
import uuid
import logging
from dataclasses import dataclass, field, replace
from typing import List, Dict, Any
from config import DEFAULT_GROUP

logger = logging.getLogger('m3u_parser')

HEADER = '#EXTM3U'
ATTRIBUTE_RE = re.compile(r'([\w-]+)="([^"]*)"')

NAME_KEYS = ('tvg-name', 'channel-name')
LOGO_KEYS = ('tvg-logo', 'logo')
GROUP_KEYS = ('group-title',)


class FormatError(ValueError):
    """Raised when playlist text is not an M3U document."""


@dataclass(frozen=True)
class Channel:
    name: str
    url: str
    logo: str = ''
    group: str = DEFAULT_GROUP
    # Stable handle for selection; not part of equality
    id: str = field(default_factory=lambda: uuid.uuid4().hex, compare=False)

    def replace(self, **changes) -> 'Channel':
        """Return a copy with the given fields changed, keeping the id."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, str]:
        return {'id': self.id, 'name': self.name, 'logo': self.logo, 'group': self.group, 'url': self.url}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Channel':
        fields = {'name': data.get('name', ''),
                  'url': data.get('url', ''),
                  'logo': data.get('logo') or '',
                  'group': data.get('group') or DEFAULT_GROUP}
        # Older files carry no ids; those channels get fresh ones
        if data.get('id'):
            fields['id'] = data['id']
        return cls(**fields)


class M3UParser:
    @staticmethod
    def parse_extinf(line: str) -> Dict[str, str]:
        """Extract name, logo and group from an #EXTINF line.

        Attributes live between the first space and the first comma. A
        name attribute takes precedence over the title after the last comma.
        """
        space = line.find(' ')
        zone = line[space:].split(',')[0].strip() if space != -1 else ''

        name = logo = group = ''
        for key, value in ATTRIBUTE_RE.findall(zone):
            key = key.lower()
            if key in NAME_KEYS:
                name = value
            elif key in LOGO_KEYS:
                logo = value
            elif key in GROUP_KEYS:
                group = value

        comma = line.rfind(',')
        title = line[comma + 1:].strip() if comma != -1 else ''

        return {
            'name': name or title,
            'logo': logo,
            'group': group or DEFAULT_GROUP,
        }

    @staticmethod
    def parse(text: str) -> List[Channel]:
        lines = [line.strip() for line in text.split('\n')]
        lines = [line for line in lines if line]

        if not lines or lines[0] != HEADER:
            raise FormatError('Invalid M3U file format. Must start with #EXTM3U.')

        channels = []
        current: Dict[str, str] = {}

        for line in lines[1:]:
            if line.startswith('#EXTINF'):
                current = M3UParser.parse_extinf(line)
            elif line.startswith('http'):
                if current.get('name'):
                    channels.append(Channel(name=current['name'], url=line,
                                            logo=current['logo'], group=current['group']))
                else:
                    logger.debug(f"Dropping stream URL without #EXTINF metadata: {line}")
                current = {}

        return channels

    @staticmethod
    def parse_file(file_path: str) -> List[Channel]:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                text = f.read()
        except OSError as e:
            logger.error(f"Failed to read M3U file {file_path}: {str(e)}")
            raise

        return M3UParser.parse(text)
