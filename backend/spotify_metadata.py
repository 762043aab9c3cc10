"""
Spotify Link Metadata

Turns an open.spotify.com link into the title/artist we search Apple Music with.

- parse_spotify_url(): validates the link and extracts the entity type
- SpotifyMetadataClient: reads Spotify's public oEmbed endpoint, scraping the
  page's og:description for the artist when oEmbed leaves it out

No authentication is needed for either endpoint.
"""

import re
import logging
from dataclasses import dataclass
from typing import Optional

import requests
from bs4 import BeautifulSoup

from catalog_types import EntityType, SourceMetadata
from utils.helpers import safe_strip

logger = logging.getLogger(__name__)


SPOTIFY_URL_RE = re.compile(
    r'^https?://open\.spotify\.com/(track|album|artist|playlist)/\w+'
)
OEMBED_URL = "https://open.spotify.com/oembed"

# og:description looks like "Artist1, Artist2 · Album · Song · 2007"
OG_DESCRIPTION_SEPARATOR = '·'


class SpotifyMetadataError(Exception):
    """Raised when Spotify metadata can't be fetched for a link"""
    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class SpotifyLink:
    """A validated Spotify link, query string removed"""

    entity_type: EntityType
    url: str


def parse_spotify_url(raw: str) -> Optional[SpotifyLink]:
    """
    Parse a Spotify track/album/artist link

    Examples:
        "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC?si=abc"
            -> SpotifyLink(TRACK, "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC")
        "https://open.spotify.com/playlist/37i9dQZF1DX..." -> None

    Returns:
        SpotifyLink, or None for anything unsupported (including playlists)
    """
    if not raw:
        return None

    raw = raw.strip()
    match = SPOTIFY_URL_RE.match(raw)
    if not match or match.group(1) == 'playlist':
        return None

    return SpotifyLink(
        entity_type=EntityType(match.group(1)),
        url=raw.split('?')[0],
    )


def parse_og_description_artist(html: str) -> Optional[str]:
    """Pull the artist credit out of a Spotify page's og:description meta tag"""
    soup = BeautifulSoup(html, 'html.parser')
    tag = soup.find('meta', attrs={'property': 'og:description'})
    if not tag or not tag.get('content'):
        return None

    return safe_strip(tag['content'].split(OG_DESCRIPTION_SEPARATOR)[0])


class SpotifyMetadataClient:
    """
    Fetches title and artist for a Spotify link from public endpoints
    """

    def __init__(self, timeout: float = 15, user_agent: str = 'Mozilla/5.0 (compatible; bot)',
                 session: requests.Session = None, logger: logging.Logger = None):
        """
        Args:
            timeout: Per-request timeout in seconds
            user_agent: User-Agent header (Spotify serves full meta tags to bots)
            session: Optional requests session
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent
        })

    @classmethod
    def from_settings(cls, settings, **kwargs) -> 'SpotifyMetadataClient':
        """Build a client from a config.Settings instance"""
        return cls(timeout=settings.http_timeout, user_agent=settings.http_user_agent, **kwargs)

    def fetch_metadata(self, link: SpotifyLink) -> SourceMetadata:
        """
        Get title and artist for a Spotify link

        Args:
            link: Parsed Spotify link

        Returns:
            SourceMetadata; artist is None if Spotify didn't expose one

        Raises:
            SpotifyMetadataError: If the oEmbed request fails
        """
        try:
            response = self.session.get(OEMBED_URL, params={'url': link.url}, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise SpotifyMetadataError(f"Spotify oEmbed request failed: {e}")

        if not response.ok:
            raise SpotifyMetadataError(
                f"Spotify oEmbed returned {response.status_code}",
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SpotifyMetadataError(f"Spotify oEmbed returned invalid JSON: {e}")

        title = safe_strip(data.get('title')) or ''
        artist = safe_strip(data.get('author_name'))

        if not artist:
            self.logger.debug(f"oEmbed has no author_name for {link.url}, scraping page")
            artist = self.scrape_artist(link.url)

        return SourceMetadata(title=title, artist=artist, entity_type=link.entity_type)

    def scrape_artist(self, url: str) -> Optional[str]:
        """
        Read the artist credit from the Spotify page itself

        Non-fatal: any failure returns None.
        """
        try:
            response = self.session.get(url, timeout=self.timeout, allow_redirects=True)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            self.logger.warning(f"Could not scrape artist from {url}: {e}")
            return None

        artist = parse_og_description_artist(response.text)
        if artist:
            self.logger.debug(f"Scraped artist: {artist}")
        return artist
