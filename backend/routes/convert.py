# routes/convert.py
from flask import Blueprint, current_app, jsonify, redirect, request
import logging

from apple_music_client import AppleMusicClient
from apple_music_matcher import AppleMusicMatcher
from spotify_metadata import SpotifyMetadataClient, SpotifyMetadataError, parse_spotify_url

logger = logging.getLogger(__name__)
convert_bp = Blueprint('convert', __name__)

INVALID_URL_MESSAGE = (
    'Invalid Spotify URL. Supported types: track, album, artist. '
    'Playlists are not supported.'
)
NO_MATCH_MESSAGE = 'No Apple Music match found'


def get_metadata_client():
    """Spotify metadata client for the current request"""
    return SpotifyMetadataClient.from_settings(current_app.config['SETTINGS'])


def get_matcher():
    """Fresh matcher per request so no state is shared between requests"""
    client = AppleMusicClient.from_settings(current_app.config['SETTINGS'])
    return AppleMusicMatcher(client=client)


@convert_bp.route('/convert', methods=['GET'])
def convert():
    """
    Convert a Spotify link to its Apple Music equivalent

    Query params:
        url: open.spotify.com track/album/artist link (required)
        redirect: '0' to get JSON instead of a 302 redirect
    """
    spotify_url = request.args.get('url')
    if not spotify_url:
        return jsonify({'error': 'Missing ?url= parameter'}), 400

    link = parse_spotify_url(spotify_url)
    if not link:
        return jsonify({'error': INVALID_URL_MESSAGE}), 400

    try:
        meta = get_metadata_client().fetch_metadata(link)
    except SpotifyMetadataError as e:
        logger.warning(f"Metadata fetch failed for {link.url}: {e}")
        return jsonify({'error': 'Failed to fetch metadata from Spotify'}), 502

    result = get_matcher().resolve(link.entity_type, meta.title, meta.artist)
    if not result:
        return jsonify({'error': NO_MATCH_MESSAGE}), 404

    apple_music_url = result.url_for(link.entity_type)
    if not apple_music_url:
        logger.warning(f"Match for {link.url} has no {link.entity_type.url_field}")
        return jsonify({'error': NO_MATCH_MESSAGE}), 404

    if request.args.get('redirect') != '0':
        return redirect(apple_music_url, code=302)

    return jsonify({
        'appleMusic': apple_music_url,
        'title': result.display_title or meta.title,
        'artist': result.artist_name or meta.artist,
    })
