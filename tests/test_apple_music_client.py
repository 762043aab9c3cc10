import requests

from apple_music_client import AppleMusicClient
from catalog_types import EntityType
from config import Settings
from fakes import FakeResponse


def _record_get(monkeypatch, session, response):
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append({"url": url, "params": params, "timeout": timeout})
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(session, "get", fake_get)
    return calls


def test_search_sends_term_entity_and_limit(monkeypatch, session):
    client = AppleMusicClient(session=session)
    calls = _record_get(monkeypatch, session, FakeResponse(payload={
        "resultCount": 2,
        "results": [
            {"wrapperType": "track", "trackName": "Yesterday", "artistName": "The Beatles"},
            {"wrapperType": "track", "trackName": "Yesterday", "artistName": "Some Cover Band"},
        ],
    }))

    results = client.search("Yesterday The Beatles", EntityType.TRACK)

    assert [r.artist_name for r in results] == ["The Beatles", "Some Cover Band"]
    assert calls[0]["url"] == "https://itunes.apple.com/search"
    assert calls[0]["params"] == {"term": "Yesterday The Beatles", "entity": "song", "limit": 10}
    assert calls[0]["timeout"] == 15
    assert client.stats["api_calls"] == 1


def test_country_added_when_configured(monkeypatch, session):
    client = AppleMusicClient(country="GB", session=session)
    calls = _record_get(monkeypatch, session, FakeResponse(payload={"results": []}))

    client.search("Adele", EntityType.ARTIST)

    assert calls[0]["params"]["country"] == "GB"
    assert calls[0]["params"]["entity"] == "musicArtist"


def test_search_returns_empty_on_http_error(monkeypatch, session):
    client = AppleMusicClient(session=session)
    _record_get(monkeypatch, session, FakeResponse(status_code=503))

    assert client.search("anything", EntityType.TRACK) == []
    assert client.stats["failed_requests"] == 1


def test_search_returns_empty_on_connection_error(monkeypatch, session):
    client = AppleMusicClient(session=session)
    _record_get(monkeypatch, session, requests.exceptions.ConnectionError("boom"))

    assert client.search("anything", EntityType.ALBUM) == []


def test_search_returns_empty_on_bad_json(monkeypatch, session):
    client = AppleMusicClient(session=session)
    _record_get(monkeypatch, session, FakeResponse(json_error=ValueError("not json")))

    assert client.search("anything", EntityType.TRACK) == []


def test_search_ignores_non_dict_payload(monkeypatch, session):
    client = AppleMusicClient(session=session)
    _record_get(monkeypatch, session, FakeResponse(payload=["unexpected"]))

    assert client.search("anything", EntityType.TRACK) == []


def test_list_catalog_filters_artist_record(monkeypatch, session):
    client = AppleMusicClient(session=session)
    calls = _record_get(monkeypatch, session, FakeResponse(payload={
        "resultCount": 3,
        "results": [
            {"wrapperType": "artist", "artistName": "Main Artist", "artistId": 123},
            {"wrapperType": "track", "trackName": "First", "artistName": "Main Artist"},
            {"wrapperType": "track", "trackName": "Second", "artistName": "Main Artist"},
        ],
    }))

    catalog = client.list_catalog(123, EntityType.TRACK)

    assert [entry.track_name for entry in catalog] == ["First", "Second"]
    assert calls[0]["url"] == "https://itunes.apple.com/lookup"
    assert calls[0]["params"] == {"id": 123, "entity": "song", "limit": 200}


def test_list_catalog_returns_empty_on_failure(monkeypatch, session):
    client = AppleMusicClient(session=session)
    _record_get(monkeypatch, session, requests.exceptions.Timeout("slow"))

    assert client.list_catalog(123, EntityType.ALBUM) == []


def test_from_settings(session):
    settings = Settings(
        itunes_base_url="https://example.test/",
        itunes_country="JP",
        itunes_search_limit=5,
        itunes_lookup_limit=50,
        http_timeout=3.5,
        http_user_agent="resolver-tests",
    )

    client = AppleMusicClient.from_settings(settings, session=session)

    assert client.base_url == "https://example.test"
    assert client.country == "JP"
    assert client.search_limit == 5
    assert client.lookup_limit == 50
    assert client.timeout == 3.5
    assert session.headers["User-Agent"] == "resolver-tests"
