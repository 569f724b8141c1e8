import base64
import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import requests

from .config import (
    API_BASE_URL,
    AUTHORIZE_URL,
    SCOPE,
    TOKEN_URL,
    TOP_ARTISTS_LIMIT,
    TOP_ARTISTS_TIME_RANGE,
)

log = logging.getLogger(__name__)


class SpotifyError(Exception):
    pass


@dataclass
class TokenInfo:
    access_token: str
    refresh_token: str | None = None

    @classmethod
    def from_json(cls, data):
        if not isinstance(data, dict) or not data.get("access_token"):
            raise SpotifyError("Token response has no access_token.")
        return cls(data["access_token"], data.get("refresh_token"))


def artist_names(data):
    """Map a top-artists payload to names, keeping Spotify's ranking order."""
    if not isinstance(data, dict):
        raise SpotifyError("Top artists response is not an object.")
    items = data.get("items") or []
    if not isinstance(items, list):
        raise SpotifyError("Top artists response has malformed items.")
    return [item["name"] for item in items if isinstance(item, dict) and item.get("name")]


class SpotifyClient:
    def __init__(self, client_id, client_secret, redirect_uri, timeout=None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self.token_url = TOKEN_URL
        self.api_base_url = API_BASE_URL

    def get_auth_url(self):
        auth_params = {
            "response_type": "code",
            "client_id": self.client_id,
            "scope": SCOPE,
            "redirect_uri": self.redirect_uri,
        }
        return f"{AUTHORIZE_URL}?{urlencode(auth_params)}"

    def _basic_auth(self):
        auth_str = f"{self.client_id}:{self.client_secret}"
        return "Basic " + base64.b64encode(auth_str.encode()).decode()

    def exchange_code(self, code):
        """Trade an authorization code for access and refresh tokens."""
        headers = {
            "Authorization": self._basic_auth(),
            "Content-Type": "application/x-www-form-urlencoded",
        }
        payload = {
            "code": code,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }
        response = requests.post(
            self.token_url, headers=headers, data=payload, timeout=self.timeout
        )
        response.raise_for_status()
        return TokenInfo.from_json(response.json())

    def get_top_artists(self, access_token):
        headers = {"Authorization": f"Bearer {access_token}"}
        params = {"time_range": TOP_ARTISTS_TIME_RANGE, "limit": TOP_ARTISTS_LIMIT}
        response = requests.get(
            f"{self.api_base_url}/me/top/artists",
            headers=headers,
            params=params,
            timeout=self.timeout,
        )
        response.raise_for_status()
        names = artist_names(response.json())
        log.debug("Fetched %d top artists", len(names))
        return names
