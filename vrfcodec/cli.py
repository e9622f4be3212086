"""Command-line interface for vrfcodec."""

import sys
import logging
import argparse
import asyncio
import httpx
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

from vrfcodec import __version__
from vrfcodec.config.loader import load_config, ConfigError
from vrfcodec.config.validator import validate_config, ValidationError
from vrfcodec.codec import encode_token, decode_token, TokenError
from vrfcodec.codec import percent_codec
from vrfcodec.api.client import NineAnimeClient
from vrfcodec.api.error_handler import APIError


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='vrfcodec',
        description='Encode and decode 9anime vrf tokens, and query the site with them',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Token for an id or query
  vrfcodec encode 12345

  # Decode a token from a JSON response
  vrfcodec decode '9/Ga+uM='

  # Decode a token copied out of a URL
  vrfcodec decode --unquote '9%2FGa%2BuM%3D'

  # Search, list episodes, list servers
  vrfcodec search "one piece"
  vrfcodec episodes https://9anime.id/watch/one-piece.ov8
  vrfcodec --dub servers 'https://9anime.id/ajax/server/list/1234?vrf=...'
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        type=Path,
        metavar='PATH',
        help='Path to config.yaml (default: ./config.yaml if present)'
    )

    parser.add_argument(
        '--dub',
        action='store_true',
        help='Prefer dubbed episodes and search filters. Overrides config.'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    encode_parser = subparsers.add_parser('encode', help='Encode text into a vrf token')
    encode_parser.add_argument('text', help='Identifier or search query')

    decode_parser = subparsers.add_parser('decode', help='Decode a vrf token')
    decode_parser.add_argument('token', help='Token to decode')
    decode_parser.add_argument(
        '--unquote',
        action='store_true',
        help='Percent-decode the token first (for tokens taken from a URL)'
    )

    search_parser = subparsers.add_parser('search', help='Search the catalogue')
    search_parser.add_argument('query', help='Search query')

    episodes_parser = subparsers.add_parser('episodes', help='List episodes of a show')
    episodes_parser.add_argument('url', help='Show watch page URL')

    servers_parser = subparsers.add_parser('servers', help='List video servers of an episode')
    servers_parser.add_argument('url', help='Episode server list URL (from "episodes")')

    return parser


def _setup_logging(config: dict) -> None:
    """
    Setup logging configuration from config.

    Args:
        config: Configuration dictionary
    """
    logging_config = config.get('logging', {})

    level_str = (logging_config.get('level') or 'INFO').upper()
    level = getattr(logging, level_str, logging.INFO)

    handlers = []

    if logging_config.get('console', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        handlers.append(console_handler)

    # File handler (if configured)
    log_file = logging_config.get('file')
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
        except (OSError, PermissionError) as e:
            print(f"Error: Could not create log file '{log_file}': {e}", file=sys.stderr)
            sys.exit(1)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )

    # httpx logs every request URL at INFO
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for vrfcodec CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Token commands are offline and need no configuration
    if args.command == 'encode':
        print(encode_token(args.text))
        return 0

    if args.command == 'decode':
        token = percent_codec.decode(args.token) if args.unquote else args.token
        try:
            print(decode_token(token))
        except TokenError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0

    try:
        config = load_config(args.config)
        validate_config(config)
    except (ConfigError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    _setup_logging(config)

    if args.dub:
        config['site']['dub'] = True

    try:
        return asyncio.run(run_command(config, args))
    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        return 130
    except APIError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


async def run_command(config: dict, args: argparse.Namespace) -> int:
    """
    Run a site command (async).

    Args:
        config: Loaded configuration
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    async with httpx.AsyncClient(follow_redirects=True) as http_client:
        site = NineAnimeClient(config, client=http_client)

        if args.command == 'search':
            for show in await site.search(args.query):
                print(f"{show.name}\t{show.link}")

        elif args.command == 'episodes':
            for episode in await site.load_episodes(args.url):
                filler = ' [filler]' if episode.is_filler else ''
                title = f" {episode.title}" if episode.title else ''
                print(f"{episode.number}{title}{filler}\t{episode.link}")

        elif args.command == 'servers':
            for server in await site.load_video_servers(args.url):
                print(f"{server.name}\t{server.url}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
