import os
import secrets
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Spotify endpoints
AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
TOKEN_URL = "https://accounts.spotify.com/api/token"
API_BASE_URL = "https://api.spotify.com/v1"
SCOPE = "user-top-read"
TOP_ARTISTS_TIME_RANGE = "medium_term"
TOP_ARTISTS_LIMIT = 20

# OpenAI chat completions
COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
SYSTEM_PROMPT = "You are a lyric generator in the style of famous artists."
MAX_TOKENS = 50
TEMPERATURE = 0.7

# Game
MAX_OPTIONS = 10
MIN_ARTISTS = 2

DEFAULT_PORT = 7768


@dataclass
class Settings:
    spotify_client_id: str = ""
    spotify_client_secret: str = ""
    redirect_uri: str = f"http://localhost:{DEFAULT_PORT}/callback"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    secret_key: str = field(default_factory=lambda: secrets.token_hex(16))
    port: int = DEFAULT_PORT
    http_timeout: float = 15.0
    session_ttl: float = 4 * 60 * 60
    log_level: str = "INFO"

    @classmethod
    def from_env(cls):
        """Build settings from the environment, loading a .env file first."""
        load_dotenv()
        defaults = cls()
        return cls(
            spotify_client_id=os.getenv("SPOTIFY_CLIENT_ID", ""),
            spotify_client_secret=os.getenv("SPOTIFY_CLIENT_SECRET", ""),
            redirect_uri=os.getenv("SPOTIFY_REDIRECT_URI", defaults.redirect_uri),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL", defaults.openai_model),
            secret_key=os.getenv("SECRET_KEY") or defaults.secret_key,
            port=int(os.getenv("PORT", DEFAULT_PORT)),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", defaults.http_timeout)),
            session_ttl=float(os.getenv("SESSION_TTL", defaults.session_ttl)),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        )

    def missing(self):
        """Names of required secrets that are not set."""
        required = {
            "SPOTIFY_CLIENT_ID": self.spotify_client_id,
            "SPOTIFY_CLIENT_SECRET": self.spotify_client_secret,
            "OPENAI_API_KEY": self.openai_api_key,
        }
        return [name for name, value in required.items() if not value]
