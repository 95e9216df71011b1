import re
import sys
import asyncio
import argparse
import logging
from playlist_store import PlaylistStore
from playlist_fetcher import PlaylistFetcher, FetchError
from channel_editor import ChannelEditor, ConfigError
from bulk_rename import BulkRenameConfig, RenameMode
from m3u_parser import M3UParser, FormatError
from file_utils import export_playlist
from utils import filter_channels, format_timestamp, format_channel_count
from config import DEFAULT_STATE_DIR, DEFAULT_NUMBER_FORMAT, DEFAULT_PLAYLIST_URL

logger = logging.getLogger('main')


async def fetch(url: str):
    async with PlaylistFetcher() as fetcher:
        return await fetcher.fetch_playlist(url)


def cmd_import(store: PlaylistStore, args) -> None:
    if args.source.startswith('http'):
        channels = asyncio.run(fetch(args.source))
    else:
        channels = M3UParser.parse_file(args.source)
    playlist = store.create(args.name or args.source, channels)
    print(f"{playlist.id}: {playlist.name} ({format_channel_count(len(channels))})")


def cmd_default(store: PlaylistStore, args) -> None:
    channels = asyncio.run(fetch(DEFAULT_PLAYLIST_URL))
    playlist = store.set_default(channels)
    store.save_current(channels, args.name)
    print(f"Default playlist loaded ({format_channel_count(len(playlist.channels))})")


def cmd_list(store: PlaylistStore, args) -> None:
    for playlist in store.list_playlists():
        marker = '*' if playlist.id == store.current_id else ' '
        print(f"{marker} {playlist.id}  {playlist.name}  "
              f"{format_channel_count(len(playlist.channels))}  {format_timestamp(playlist.timestamp)}")


def cmd_use(store: PlaylistStore, args) -> None:
    if not store.load(args.playlist_id):
        raise ConfigError(f"No playlist with id {args.playlist_id}")


def cmd_delete(store: PlaylistStore, args) -> None:
    store.delete(args.playlist_id)


def cmd_show(store: PlaylistStore, args) -> None:
    editor = ChannelEditor(store)
    for channel in filter_channels(editor.channels, args.search or ''):
        print(f"{channel.id}  [{channel.group}] {channel.name}  {channel.url}")


def cmd_stats(store: PlaylistStore, args) -> None:
    editor = ChannelEditor(store)
    for key, value in store.stats(editor.channels).items():
        print(f"{key}: {value}")


def cmd_logos(store: PlaylistStore, args) -> None:
    ChannelEditor(store).auto_logos(args.ids, args.url)


def cmd_rename(store: PlaylistStore, args) -> None:
    config = BulkRenameConfig(
        mode=RenameMode(args.mode),
        base_name=args.base_name,
        prefix=args.prefix,
        suffix=args.suffix,
        find_text=args.find,
        replace_text=args.replace,
        add_numbering=args.number,
        number_start=args.start,
        number_format=args.format,
        literal_find=args.literal,
    )
    ChannelEditor(store).bulk_rename(config, args.ids)


def cmd_export(store: PlaylistStore, args) -> None:
    editor = ChannelEditor(store)
    name = store.current.name if store.current else 'playlist'
    path = asyncio.run(export_playlist(editor.channels, args.output, name, args.format))
    print(path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='streamfixer', description='Edit IPTV M3U playlists')
    parser.add_argument('--state-dir', default=DEFAULT_STATE_DIR)
    parser.add_argument('-v', '--verbose', action='store_true')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('import', help='Import a playlist from a file or URL')
    p.add_argument('source')
    p.add_argument('--name')
    p.set_defaults(func=cmd_import)

    p = sub.add_parser('default', help='Fetch the default playlist')
    p.add_argument('--name')
    p.set_defaults(func=cmd_default)

    sub.add_parser('list', help='List stored playlists').set_defaults(func=cmd_list)
    sub.add_parser('stats', help='Show playlist statistics').set_defaults(func=cmd_stats)

    for command, func in (('use', cmd_use), ('delete', cmd_delete)):
        p = sub.add_parser(command)
        p.add_argument('playlist_id')
        p.set_defaults(func=func)

    p = sub.add_parser('show', help='List channels of the current playlist')
    p.add_argument('--search')
    p.set_defaults(func=cmd_show)

    p = sub.add_parser('logos', help='Fill in missing channel logos')
    p.add_argument('--ids', nargs='*')
    p.add_argument('--url', help='Use this logo instead of generated ones')
    p.set_defaults(func=cmd_logos)

    p = sub.add_parser('rename', help='Bulk rename channels')
    p.add_argument('--ids', nargs='*')
    p.add_argument('--mode', choices=[m.value for m in RenameMode], default=RenameMode.MODIFY.value)
    p.add_argument('--base-name', default='')
    p.add_argument('--prefix', default='')
    p.add_argument('--suffix', default='')
    p.add_argument('--find', default='')
    p.add_argument('--replace', default='')
    p.add_argument('--literal', action='store_true', help='Match --find as plain text')
    p.add_argument('--number', action='store_true', help='Add sequential numbering')
    p.add_argument('--start', type=int, default=1)
    p.add_argument('--format', default=DEFAULT_NUMBER_FORMAT)
    p.set_defaults(func=cmd_rename)

    p = sub.add_parser('export', help='Export the current playlist')
    p.add_argument('--format', choices=['m3u', 'txt'], default='m3u')
    p.add_argument('--output', default='.')
    p.set_defaults(func=cmd_export)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    store = PlaylistStore(args.state_dir)
    try:
        args.func(store, args)
    except (FormatError, ConfigError, FetchError, OSError, re.error) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
