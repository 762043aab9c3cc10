#!/usr/bin/env python3
"""
Spotify -> Apple Music Resolver - Command Line Interface

Resolves a single Spotify track/album/artist link (or a title/artist pair)
to its Apple Music equivalent using the public iTunes Search API.
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from script_base import ScriptBase, run_script
from apple_music_client import AppleMusicClient
from apple_music_matcher import AppleMusicMatcher
from catalog_types import EntityType, SourceMetadata
from config import load_settings
from spotify_metadata import SpotifyMetadataClient, SpotifyMetadataError, parse_spotify_url


def main(argv=None) -> bool:
    load_dotenv()

    script = ScriptBase(
        name="resolve_link",
        description="Find the Apple Music link for a Spotify track, album or artist",
        epilog="""
Examples:
  # Resolve a Spotify link
  python resolve_link.py https://open.spotify.com/track/4PTG3Z6ehGkBFwjybzWkR8

  # Skip Spotify and search with known metadata
  python resolve_link.py --type track --title "Never Gonna Give You Up" --artist "Rick Astley"

  # Enable debug logging to see every query and rejected candidate
  python resolve_link.py https://open.spotify.com/album/6N9PS4QXF1D0OWPk0Sxtb4 --debug
        """
    )

    script.parser.add_argument('url', nargs='?', help='open.spotify.com link')
    script.parser.add_argument(
        '--type',
        choices=[t.value for t in EntityType],
        help='Entity type when searching without a link'
    )
    script.parser.add_argument('--title', help='Title (or artist name for --type artist)')
    script.parser.add_argument('--artist', help='Artist credit')
    script.add_debug_arg()

    args = script.parse_args(argv)
    settings = load_settings()

    if args.url:
        link = parse_spotify_url(args.url)
        if not link:
            script.logger.error("Invalid Spotify URL. Supported types: track, album, artist.")
            return False
        try:
            meta = SpotifyMetadataClient.from_settings(settings, logger=script.logger).fetch_metadata(link)
        except SpotifyMetadataError as e:
            script.logger.error(f"Failed to fetch metadata from Spotify: {e}")
            return False
    elif args.type and args.title:
        meta = SourceMetadata(
            title=args.title,
            artist=args.artist,
            entity_type=EntityType.from_value(args.type),
        )
    else:
        script.parser.error("give a Spotify URL, or --type and --title")

    script.print_header({"DEBUG": args.debug})
    script.print_section("Source", {
        "Type": meta.entity_type.value,
        "Title": meta.title,
        "Artist": meta.artist or '(unknown)',
    })

    client = AppleMusicClient.from_settings(settings, logger=script.logger)
    matcher = AppleMusicMatcher(client=client, logger=script.logger)
    result = matcher.resolve(meta.entity_type, meta.title, meta.artist)

    apple_music_url = result.url_for(meta.entity_type) if result else None
    if apple_music_url:
        script.print_section("Apple Music", {
            "Title": result.display_title,
            "Artist": result.artist_name,
            "URL": apple_music_url,
        })
    else:
        script.logger.info("No Apple Music match found")

    script.print_summary(matcher.get_stats(), title="RESOLVER SUMMARY")
    return bool(apple_music_url)


if __name__ == "__main__":
    run_script(main)
