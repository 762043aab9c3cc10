"""
Apple Music Matching

Core business logic for resolving Spotify metadata to an Apple Music entry.

This module provides the AppleMusicMatcher class which handles:
- Building search queries from most to least specific
- Validating iTunes results with fuzzy title/artist matching
- Falling back to browsing the artist's full catalog when search fails

The matcher never guesses: if no candidate passes validation the result is
None, even after every query and fallback has been tried.

Used by:
- routes/convert.py (HTTP service)
- scripts/resolve_link.py (CLI interface)
"""

import logging
from typing import Dict, Iterable, List, Optional

from apple_music_client import AppleMusicClient
from catalog_types import CatalogEntry, EntityType
from title_matching import names_match, normalize_title, split_artist_credit

logger = logging.getLogger(__name__)


def select_match(
    candidates: Iterable[CatalogEntry],
    entity_type: EntityType,
    expected_title: str,
    expected_artist: Optional[str] = None,
) -> Optional[CatalogEntry]:
    """
    Pick the first candidate that plausibly is the expected entity.

    Candidates are checked in the order given (iTunes relevance order);
    there is no re-ranking.

    - Artists: the candidate's artist name must match expected_artist, or
      expected_title when no separate artist is known.
    - Tracks/albums: the track or album name must match expected_title. If
      we have an artist and the candidate has one too, the artist names must
      match as well. A title match with a different artist is rejected.

    Returns:
        The matching entry, or None
    """
    for candidate in candidates:
        if entity_type is EntityType.ARTIST:
            if names_match(candidate.artist_name, expected_artist or expected_title):
                return candidate
            continue

        candidate_title = candidate.name_for(entity_type)
        if not names_match(candidate_title, expected_title):
            continue

        if expected_artist and candidate.artist_name \
                and not names_match(candidate.artist_name, expected_artist):
            logger.debug(f"  Rejected '{candidate_title}': artist "
                         f"'{candidate.artist_name}' != '{expected_artist}'")
            continue

        return candidate

    return None


def build_search_queries(
    entity_type: EntityType,
    title: str,
    artist: Optional[str] = None,
) -> List[str]:
    """
    Search queries to try, in order.

    Examples (artist "Main Artist"):
        "Song (feat. X) - Remastered" ->
            ["Song Main Artist", "Song (feat. X) - Remastered Main Artist", "Song"]

    A clean title yields a repeated query; every query is still issued,
    three attempts when an artist is known.

    Returns:
        Non-empty queries
    """
    if entity_type is EntityType.ARTIST:
        queries = [artist or title]
    else:
        cleaned = normalize_title(title) or title
        if artist:
            queries = [
                f"{cleaned} {artist}",   # cleaned title + artist (best)
                f"{title} {artist}",     # raw title + artist
                cleaned,                 # just the cleaned title
            ]
        else:
            queries = [cleaned, title]

    return [query.strip() for query in queries if query and query.strip()]


class AppleMusicMatcher:
    """
    Resolves (entity type, title, artist) to a single Apple Music entry.
    """

    def __init__(self, client: AppleMusicClient = None,
                 logger: logging.Logger = None):
        """
        Initialize Apple Music Matcher

        Args:
            client: iTunes client to use (a default one is created otherwise)
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.client = client or AppleMusicClient(logger=self.logger)

        self.stats = {
            'lookups': 0,
            'queries_tried': 0,
            'search_matches': 0,
            'fallback_attempts': 0,
            'fallback_matches': 0,
            'no_match': 0,
        }

    def resolve(
        self,
        entity_type: EntityType,
        title: str,
        artist: Optional[str] = None,
    ) -> Optional[CatalogEntry]:
        """
        Find the Apple Music entry for a Spotify track, album or artist.

        This is the main entry point for matching.

        Args:
            entity_type: What kind of entity the title describes
            title: Title (or artist name, for artist lookups)
            artist: Artist credit, if known

        Returns:
            Matched CatalogEntry, or None if nothing validated
        """
        self.stats['lookups'] += 1
        title = title or ''
        artist = artist or None

        # "(Intro)" style titles clean down to nothing; match on the raw title then
        expected_title = normalize_title(title) or title

        self.logger.info(f"Resolving {entity_type.value}: {title!r}"
                         + (f" by {artist!r}" if artist else ""))

        result = self._search_with_escalation(entity_type, title, expected_title, artist)

        if not result and artist and entity_type is not EntityType.ARTIST:
            self.logger.debug("  Search exhausted, browsing artist catalog")
            result = self.lookup_via_artist(artist, entity_type, expected_title)

        if result:
            self.logger.info(f"  Matched: {result.artist_name} - {result.display_title}")
        else:
            self.stats['no_match'] += 1
            self.logger.info("  No Apple Music match found")

        return result

    def _search_with_escalation(
        self,
        entity_type: EntityType,
        title: str,
        expected_title: str,
        artist: Optional[str],
    ) -> Optional[CatalogEntry]:
        """Run each search query in turn until one yields a validated match"""
        for query in build_search_queries(entity_type, title, artist):
            self.stats['queries_tried'] += 1
            candidates = self.client.search(query, entity_type)

            result = select_match(candidates, entity_type, expected_title, artist)
            if result:
                self.logger.debug(f"  Query {query!r} matched")
                self.stats['search_matches'] += 1
                return result

            self.logger.debug(f"  Query {query!r}: no valid match in {len(candidates)} result(s)")

        return None

    def lookup_via_artist(
        self,
        artist: str,
        entity_type: EntityType,
        title: str,
    ) -> Optional[CatalogEntry]:
        """
        Find the artist on iTunes, then match the title within their catalog.

        The search API is bad at niche and non-English titles, but the
        lookup API returns an artist's whole catalog.

        Args:
            artist: Artist credit; "A, B" also tries "A" on its own
            entity_type: TRACK or ALBUM
            title: Expected (normalized) title

        Returns:
            Matched CatalogEntry, or None
        """
        for name in split_artist_credit(artist):
            self.stats['fallback_attempts'] += 1

            artists = self.client.search(name, EntityType.ARTIST)
            matched_artist = next(
                (a for a in artists if names_match(a.artist_name, name)),
                None
            )
            if not matched_artist or not matched_artist.artist_id:
                self.logger.debug(f"  No iTunes artist found for {name!r}")
                continue

            self.logger.debug(f"  Artist {name!r} -> iTunes id {matched_artist.artist_id}")
            catalog = self.client.list_catalog(matched_artist.artist_id, entity_type)

            # Artist identity is already established by the catalog itself
            result = select_match(catalog, entity_type, title, None)
            if result:
                self.stats['fallback_matches'] += 1
                return result

        return None

    def get_stats(self) -> Dict[str, int]:
        """Matcher stats merged with the client's transport stats"""
        return {**self.stats, **self.client.stats}
