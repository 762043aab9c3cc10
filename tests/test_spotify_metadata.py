import pytest
import requests

from catalog_types import EntityType
from fakes import FakeResponse
from spotify_metadata import (
    SpotifyMetadataClient,
    SpotifyMetadataError,
    parse_og_description_artist,
    parse_spotify_url,
)


TRACK_URL = "https://open.spotify.com/track/4PTG3Z6ehGkBFwjybzWkR8"

PAGE_HTML = """
<html><head>
<meta content="PaulK, reezy · Some Album · Song · 2023" property="og:description" />
<meta property="og:title" content="Some Song" />
</head><body></body></html>
"""


@pytest.mark.parametrize(
    "raw, entity_type",
    [
        (TRACK_URL, EntityType.TRACK),
        ("https://open.spotify.com/album/6N9PS4QXF1D0OWPk0Sxtb4", EntityType.ALBUM),
        ("http://open.spotify.com/artist/0gxyHStUsqpMadRV0Di1Qt", EntityType.ARTIST),
    ],
)
def test_parse_spotify_url_supported_types(raw, entity_type):
    link = parse_spotify_url(raw)

    assert link.entity_type is entity_type
    assert link.url == raw


def test_parse_spotify_url_strips_query_string():
    link = parse_spotify_url(TRACK_URL + "?si=abc123")

    assert link.url == TRACK_URL


@pytest.mark.parametrize(
    "raw",
    [
        "https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M",
        "https://music.apple.com/us/album/123",
        "not a url",
        "",
        None,
    ],
)
def test_parse_spotify_url_rejects_unsupported(raw):
    assert parse_spotify_url(raw) is None


def test_parse_og_description_artist():
    assert parse_og_description_artist(PAGE_HTML) == "PaulK, reezy"
    assert parse_og_description_artist("<html><head></head></html>") is None


def _fake_get(monkeypatch, session, responses):
    calls = []

    def fake_get(url, params=None, timeout=None, allow_redirects=True):
        calls.append((url, params))
        response = responses[len(calls) - 1]
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(session, "get", fake_get)
    return calls


def test_fetch_metadata_from_oembed(monkeypatch, session):
    client = SpotifyMetadataClient(session=session)
    calls = _fake_get(monkeypatch, session, [
        FakeResponse(payload={"title": "Never Gonna Give You Up", "author_name": "Rick Astley", "type": "rich"}),
    ])

    meta = client.fetch_metadata(parse_spotify_url(TRACK_URL))

    assert meta.title == "Never Gonna Give You Up"
    assert meta.artist == "Rick Astley"
    assert meta.entity_type is EntityType.TRACK
    assert calls == [("https://open.spotify.com/oembed", {"url": TRACK_URL})]


def test_fetch_metadata_scrapes_artist_when_missing(monkeypatch, session):
    client = SpotifyMetadataClient(session=session)
    calls = _fake_get(monkeypatch, session, [
        FakeResponse(payload={"title": "Some Song", "author_name": ""}),
        FakeResponse(text=PAGE_HTML),
    ])

    meta = client.fetch_metadata(parse_spotify_url(TRACK_URL))

    assert meta.artist == "PaulK, reezy"
    assert calls[1] == (TRACK_URL, None)


def test_scrape_failure_is_not_fatal(monkeypatch, session):
    client = SpotifyMetadataClient(session=session)
    _fake_get(monkeypatch, session, [
        FakeResponse(payload={"title": "Some Song"}),
        requests.exceptions.ConnectionError("down"),
    ])

    meta = client.fetch_metadata(parse_spotify_url(TRACK_URL))

    assert meta.title == "Some Song"
    assert meta.artist is None


def test_fetch_metadata_raises_on_oembed_error(monkeypatch, session):
    client = SpotifyMetadataClient(session=session)
    _fake_get(monkeypatch, session, [FakeResponse(status_code=404)])

    with pytest.raises(SpotifyMetadataError) as excinfo:
        client.fetch_metadata(parse_spotify_url(TRACK_URL))

    assert excinfo.value.status_code == 404


def test_fetch_metadata_raises_on_transport_error(monkeypatch, session):
    client = SpotifyMetadataClient(session=session)
    _fake_get(monkeypatch, session, [requests.exceptions.Timeout("slow")])

    with pytest.raises(SpotifyMetadataError):
        client.fetch_metadata(parse_spotify_url(TRACK_URL))
