import os
import re
import logging
import aiofiles
from typing import List
from m3u_parser import Channel
from m3u_generator import M3UGenerator

logger = logging.getLogger('file_utils')

EXPORT_FORMATS = ('m3u', 'txt')

def export_filename(playlist_name: str, fmt: str = 'm3u') -> str:
    """Build an export filename from a playlist name."""
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")
    base = re.sub(r'[^a-zA-Z0-9]', '_', playlist_name or '') or 'playlist'
    return f"{base}.{fmt}"

def ensure_unique_filename(output_dir: str, filename: str) -> str:
    """Return a path in output_dir that does not exist yet, numbering the name if taken."""
    name, ext = os.path.splitext(filename)
    final_path = os.path.join(output_dir, filename)

    counter = 1
    while os.path.exists(final_path):
        final_path = os.path.join(output_dir, f"{name}_{counter}{ext}")
        counter += 1

    return final_path

async def export_playlist(channels: List[Channel], output_dir: str,
                          playlist_name: str = 'playlist', fmt: str = 'm3u') -> str:
    """Write generated M3U text to a new file and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    filepath = ensure_unique_filename(output_dir, export_filename(playlist_name, fmt))

    async with aiofiles.open(filepath, 'w', encoding='utf-8') as f:
        await f.write(M3UGenerator.generate(channels))

    logger.info(f"Exported {len(channels)} channels to {filepath}")
    return filepath
