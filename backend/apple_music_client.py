"""
Apple Music / iTunes API Client

Handles low-level iTunes API concerns:
- Free-text search (https://itunes.apple.com/search)
- Catalog lookup by artist id (https://itunes.apple.com/lookup)
- Mapping transport failures to empty results

The iTunes Search API is simpler than Spotify - no OAuth required.
All endpoints are public and free to use.

API Documentation: https://developer.apple.com/library/archive/documentation/AudioVideo/Conceptual/iTuneSearchAPI/

No matching logic lives here. Used by AppleMusicMatcher for all API interactions.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from catalog_types import CatalogEntry, EntityType

logger = logging.getLogger(__name__)


DEFAULT_SEARCH_LIMIT = 10
DEFAULT_LOOKUP_LIMIT = 200
DEFAULT_TIMEOUT = 15
DEFAULT_USER_AGENT = 'Mozilla/5.0 (compatible; bot)'


class AppleMusicClient:
    """
    Thin iTunes/Apple Music API client.

    Every public method returns an empty list instead of raising when the
    upstream call fails, so callers only ever deal with "no results".
    """

    BASE_URL = "https://itunes.apple.com"

    def __init__(self, search_limit: int = DEFAULT_SEARCH_LIMIT,
                 lookup_limit: int = DEFAULT_LOOKUP_LIMIT,
                 country: str = None, timeout: float = DEFAULT_TIMEOUT,
                 base_url: str = None, user_agent: str = DEFAULT_USER_AGENT,
                 session: requests.Session = None,
                 logger: logging.Logger = None):
        """
        Initialize Apple Music Client

        Args:
            search_limit: Max results for a free-text search
            lookup_limit: Max results for an artist catalog lookup
            country: Optional storefront code (iTunes defaults to US)
            timeout: Per-request timeout in seconds
            base_url: Override for the iTunes API root
            user_agent: User-Agent header sent with every request
            session: Optional requests session (a new one is created otherwise)
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.search_limit = search_limit
        self.lookup_limit = lookup_limit
        self.country = country
        self.timeout = timeout
        self.base_url = (base_url or self.BASE_URL).rstrip('/')

        # HTTP session for connection reuse
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent
        })

        # Stats tracking
        self.stats = {
            'api_calls': 0,
            'failed_requests': 0,
        }

    @classmethod
    def from_settings(cls, settings, **kwargs) -> 'AppleMusicClient':
        """Build a client from a config.Settings instance"""
        return cls(
            search_limit=settings.itunes_search_limit,
            lookup_limit=settings.itunes_lookup_limit,
            country=settings.itunes_country,
            timeout=settings.http_timeout,
            base_url=settings.itunes_base_url,
            user_agent=settings.http_user_agent,
            **kwargs
        )

    # ========================================================================
    # TRANSPORT
    # ========================================================================

    def _make_api_request(self, path: str, params: Dict) -> Optional[Dict[str, Any]]:
        """
        GET an iTunes endpoint and decode the JSON body

        Args:
            path: Endpoint path ('search' or 'lookup')
            params: Query parameters

        Returns:
            Decoded response dict, or None on any transport/status/decode failure
        """
        url = f"{self.base_url}/{path}"
        if self.country:
            params = dict(params, country=self.country)

        self.stats['api_calls'] += 1
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            self.stats['failed_requests'] += 1
            self.logger.warning(f"iTunes {path} request failed: {e}")
            return None
        except ValueError as e:
            self.stats['failed_requests'] += 1
            self.logger.warning(f"iTunes {path} returned invalid JSON: {e}")
            return None

        if not isinstance(data, dict):
            self.stats['failed_requests'] += 1
            self.logger.warning(f"iTunes {path} returned unexpected payload type: {type(data).__name__}")
            return None

        return data

    def _parse_results(self, data: Optional[Dict[str, Any]]) -> List[CatalogEntry]:
        """Turn a decoded iTunes response into CatalogEntry objects"""
        if not data:
            return []
        return [
            CatalogEntry.from_api(item)
            for item in data.get('results') or []
            if isinstance(item, dict)
        ]

    # ========================================================================
    # API METHODS
    # ========================================================================

    def search(self, term: str, entity_type: EntityType) -> List[CatalogEntry]:
        """
        Free-text search on iTunes/Apple Music

        Args:
            term: Search text
            entity_type: Restricts results to songs, albums or artists

        Returns:
            Entries in iTunes relevance order (empty on failure)
        """
        params = {
            'term': term,
            'entity': entity_type.itunes_entity,
            'limit': self.search_limit,
        }
        self.logger.debug(f"Searching iTunes ({entity_type.itunes_entity}): {term}")

        results = self._parse_results(self._make_api_request('search', params))
        self.logger.debug(f"  {len(results)} result(s)")
        return results

    def list_catalog(self, artist_id: int, entity_type: EntityType) -> List[CatalogEntry]:
        """
        Look up every track or album belonging to an artist

        The lookup endpoint returns the artist record itself alongside the
        catalog; that record is filtered out.

        Args:
            artist_id: iTunes artistId
            entity_type: Which part of the catalog to list

        Returns:
            Catalog entries (empty on failure)
        """
        params = {
            'id': artist_id,
            'entity': entity_type.itunes_entity,
            'limit': self.lookup_limit,
        }
        self.logger.debug(f"Listing iTunes catalog for artist {artist_id} ({entity_type.itunes_entity})")

        results = self._parse_results(self._make_api_request('lookup', params))
        catalog = [entry for entry in results if not entry.is_artist_record]
        self.logger.debug(f"  {len(catalog)} catalog entries")
        return catalog
