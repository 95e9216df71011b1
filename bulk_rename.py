import re
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Union
from m3u_parser import Channel
from config import DEFAULT_NUMBER_FORMAT

logger = logging.getLogger('bulk_rename')

NUMBER_FIELD_RE = re.compile(r'#+')

ALL = 'all'


class RenameMode(Enum):
    MODIFY = 'modify'
    REPLACE = 'replace'


@dataclass(frozen=True)
class BulkRenameConfig:
    mode: RenameMode = RenameMode.MODIFY
    base_name: str = ''
    prefix: str = ''
    suffix: str = ''
    find_text: str = ''
    replace_text: str = ''
    add_numbering: bool = False
    number_start: int = 1
    number_format: str = DEFAULT_NUMBER_FORMAT
    # Treat find_text as plain text instead of a regular expression
    literal_find: bool = False


def format_number(template: str, counter: int) -> str:
    """Expand the first run of '#' in template into a zero-padded counter.

    "S01E##" with 3 gives "S01E03". A template without '#' gets the
    counter appended as plain digits.
    """
    match = NUMBER_FIELD_RE.search(template)
    if not match:
        return f"{template}{counter}"
    number = str(counter).zfill(len(match.group(0)))
    return template[:match.start()] + number + template[match.end():]


def _modify_name(name: str, config: BulkRenameConfig) -> str:
    if config.find_text:
        pattern = re.escape(config.find_text) if config.literal_find else config.find_text
        # re.error from a bad pattern propagates to the caller
        name = re.sub(pattern, lambda _: config.replace_text, name)
    if config.prefix:
        name = config.prefix + name
    if config.suffix:
        name = name + config.suffix
    return name


def apply_bulk_rename(channels: List[Channel],
                      target_indices: Union[Iterable[int], str],
                      config: BulkRenameConfig) -> List[Channel]:
    """Rename the targeted channels according to config.

    Numbering follows sequence order, not the order of target_indices.
    Pass "all" to target every channel.
    """
    if target_indices == ALL:
        targets = set(range(len(channels)))
    else:
        targets = set(target_indices)

    counter = config.number_start
    renamed = 0
    updated = []

    for index, channel in enumerate(channels):
        if index not in targets:
            updated.append(channel)
            continue

        if config.mode == RenameMode.REPLACE:
            new_name = config.base_name.strip()
            if config.add_numbering:
                number = format_number(config.number_format, counter)
                new_name = f"{new_name} {number}" if new_name else number
                counter += 1
            if not new_name:
                new_name = channel.name
        else:
            new_name = _modify_name(channel.name, config)
            if config.add_numbering:
                new_name = f"{new_name} {format_number(config.number_format, counter)}"
                counter += 1

        if new_name != channel.name:
            renamed += 1
        updated.append(channel.replace(name=new_name))

    logger.info(f"Renamed {renamed} channels in {config.mode.value} mode")
    return updated
