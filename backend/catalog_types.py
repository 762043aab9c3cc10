"""
Catalog Types

Shared types for the Spotify -> Apple Music resolver:
- EntityType: the closed set of things we can resolve (track, album, artist)
- CatalogEntry: one iTunes search/lookup result
- SourceMetadata: what we know about the Spotify item we were given

Each EntityType member carries its own iTunes field mapping so callers never
look fields up by name themselves.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class EntityType(Enum):
    """Kind of entity being resolved. Values match Spotify URL path segments."""

    TRACK = 'track'
    ALBUM = 'album'
    ARTIST = 'artist'

    @property
    def itunes_entity(self) -> str:
        """iTunes `entity` filter for search and lookup calls"""
        return _ITUNES_ENTITIES[self]

    @property
    def name_field(self) -> str:
        """iTunes result field holding this type's display name"""
        return _NAME_FIELDS[self]

    @property
    def url_field(self) -> str:
        """iTunes result field holding this type's public Apple Music URL"""
        return _URL_FIELDS[self]

    @classmethod
    def from_value(cls, value: str) -> 'EntityType':
        """
        Parse a type name ("track", "Album", ...)

        Raises:
            ValueError: If the value is not one of the three supported types
        """
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            raise ValueError(f"Unsupported entity type: {value!r} (expected track, album or artist)")


_ITUNES_ENTITIES = {
    EntityType.TRACK: 'song',
    EntityType.ALBUM: 'album',
    EntityType.ARTIST: 'musicArtist',
}

_NAME_FIELDS = {
    EntityType.TRACK: 'trackName',
    EntityType.ALBUM: 'collectionName',
    EntityType.ARTIST: 'artistName',
}

_URL_FIELDS = {
    EntityType.TRACK: 'trackViewUrl',
    EntityType.ALBUM: 'collectionViewUrl',
    EntityType.ARTIST: 'artistViewUrl',
}


@dataclass(frozen=True)
class CatalogEntry:
    """
    One track/album/artist record returned by the iTunes API.

    Only the fields the resolver needs are kept. Entries are never mutated,
    only filtered and compared.
    """

    wrapper_type: Optional[str] = None
    artist_id: Optional[int] = None
    artist_name: Optional[str] = None
    track_name: Optional[str] = None
    collection_name: Optional[str] = None
    track_view_url: Optional[str] = None
    collection_view_url: Optional[str] = None
    artist_view_url: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> 'CatalogEntry':
        """Build an entry from a raw iTunes result dict"""
        return cls(
            wrapper_type=item.get('wrapperType'),
            artist_id=item.get('artistId'),
            artist_name=item.get('artistName'),
            track_name=item.get('trackName'),
            collection_name=item.get('collectionName'),
            track_view_url=item.get('trackViewUrl'),
            collection_view_url=item.get('collectionViewUrl'),
            artist_view_url=item.get('artistViewUrl'),
        )

    @property
    def is_artist_record(self) -> bool:
        return self.wrapper_type == 'artist'

    def name_for(self, entity_type: EntityType) -> Optional[str]:
        """Name to compare against the expected title for this entity type"""
        if entity_type is EntityType.TRACK:
            return self.track_name
        if entity_type is EntityType.ALBUM:
            return self.collection_name
        return self.artist_name

    def url_for(self, entity_type: EntityType) -> Optional[str]:
        """Apple Music URL for this entity type, or None if iTunes didn't supply one"""
        if entity_type is EntityType.TRACK:
            return self.track_view_url
        if entity_type is EntityType.ALBUM:
            return self.collection_view_url
        return self.artist_view_url

    @property
    def display_title(self) -> Optional[str]:
        return self.track_name or self.collection_name or self.artist_name


@dataclass(frozen=True)
class SourceMetadata:
    """Title/artist pulled from the source (Spotify) link"""

    title: str
    artist: Optional[str]
    entity_type: EntityType
