import random

import pytest
import requests

from wraipped import create_app
from wraipped.config import Settings
from wraipped.session_store import InMemorySessionStore
from wraipped.spotify_client import TokenInfo


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=""):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def json(self):
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSpotify:
    def __init__(self, artists=None, fail_exchange=False, fail_artists=False):
        self.artists = artists if artists is not None else ["A", "B", "C"]
        self.fail_exchange = fail_exchange
        self.fail_artists = fail_artists
        self.calls = []

    def get_auth_url(self):
        return "https://accounts.spotify.com/authorize?response_type=code"

    def exchange_code(self, code):
        self.calls.append(("exchange_code", code))
        if self.fail_exchange:
            raise requests.HTTPError("400 Bad Request")
        return TokenInfo("access-123", "refresh-456")

    def get_top_artists(self, access_token):
        self.calls.append(("get_top_artists", access_token))
        if self.fail_artists:
            raise requests.ConnectionError("down")
        return list(self.artists)


class FakeLyrics:
    def __init__(self, lyric="Under neon rain we run", error=None):
        self.lyric = lyric
        self.error = error
        self.calls = []

    def generate(self, artist, instruction):
        self.calls.append((artist, instruction))
        if self.error is not None:
            raise self.error
        return self.lyric


@pytest.fixture
def settings():
    return Settings(
        spotify_client_id="client",
        spotify_client_secret="secret",
        openai_api_key="sk-test",
        secret_key="test-secret",
    )


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def spotify():
    return FakeSpotify()


@pytest.fixture
def lyrics():
    return FakeLyrics()


@pytest.fixture
def app(settings, store, spotify, lyrics):
    app = create_app(settings, store=store, spotify=spotify, lyrics=lyrics, rng=random.Random(7))
    app.testing = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client, store):
    """Attach server-side session data to the test client's cookie."""
    def _login(**data):
        with client.session_transaction() as sess:
            sess["sid"] = "test-sid"
        store.set("test-sid", data)
        return "test-sid"
    return _login
