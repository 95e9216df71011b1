import logging
from typing import Iterable, List, Optional
from m3u_parser import Channel
from utils import slugify
from config import LOGO_BASE_URL

logger = logging.getLogger('auto_logo')


def generate_logo_url(name: str) -> str:
    """Guess a logo URL in the community logo repository from a channel name.

    This is not a lookup: the guessed image may not exist, and whoever
    renders it is expected to fall back to a placeholder.
    """
    base_url = LOGO_BASE_URL.rstrip('/')
    return f"{base_url}/{slugify(name)}.png"


def apply_auto_logos(channels: List[Channel],
                     target_indices: Optional[Iterable[int]] = None,
                     override_url: Optional[str] = None) -> List[Channel]:
    """Fill in missing logos for the targeted channels.

    Without target_indices every channel is targeted. A non-blank
    override_url is used for every filled channel; otherwise each channel
    gets its own generated URL. Existing logos are never replaced.
    """
    targets = set(target_indices) if target_indices is not None else None
    override = override_url.strip() if override_url else ''

    updated = []
    filled = 0
    for index, channel in enumerate(channels):
        if (targets is None or index in targets) and not channel.logo.strip():
            channel = channel.replace(logo=override or generate_logo_url(channel.name))
            filled += 1
        updated.append(channel)

    logger.info(f"Filled {filled} missing logos")
    return updated
