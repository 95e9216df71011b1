import re
from datetime import datetime
from typing import List
from m3u_parser import Channel

def slugify(name: str) -> str:
    """Normalize a channel name into a URL-safe slug"""
    slug = name.lower()
    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'[^\w\-]+', '', slug, flags=re.ASCII)
    slug = re.sub(r'\-\-+', '-', slug)
    return slug.strip('-')

def filter_channels(channels: List[Channel], query: str) -> List[Channel]:
    """Case-insensitive search over channel name, group and url"""
    query = query.strip().lower()
    if not query:
        return list(channels)
    return [c for c in channels
            if query in c.name.lower()
            or query in c.group.lower()
            or query in c.url.lower()]

def format_timestamp(timestamp_ms: int) -> str:
    """Format a playlist timestamp (epoch millis) in human readable format"""
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime('%Y-%m-%d %H:%M')

def format_channel_count(count: int) -> str:
    """Format a channel count for listings"""
    if count == 1:
        return "1 channel"
    return f"{count} channels"
