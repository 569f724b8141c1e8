import logging
import random
from types import SimpleNamespace

from flask import Flask

from .config import Settings
from .lyric_generator import LyricGenerator
from .routes import bp
from .session_store import InMemorySessionStore
from .spotify_client import SpotifyClient

log = logging.getLogger(__name__)


def create_app(settings=None, *, store=None, spotify=None, lyrics=None, rng=None):
    """
    Application factory.

    Collaborators default to the real Spotify and OpenAI clients and an
    in-memory session store; tests pass their own.
    """
    settings = settings or Settings.from_env()

    app = Flask(__name__)
    app.secret_key = settings.secret_key

    app.extensions["wraipped"] = SimpleNamespace(
        settings=settings,
        store=store if store is not None else InMemorySessionStore(ttl=settings.session_ttl),
        spotify=spotify or SpotifyClient(
            settings.spotify_client_id,
            settings.spotify_client_secret,
            settings.redirect_uri,
            timeout=settings.http_timeout,
        ),
        lyrics=lyrics or LyricGenerator(
            settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.http_timeout,
        ),
        rng=rng or random.Random(),
    )
    app.register_blueprint(bp)
    return app


def main():
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    for name in settings.missing():
        log.warning("%s is not set", name)

    app = create_app(settings)
    log.info("Server is running on http://localhost:%d", settings.port)
    app.run(host="0.0.0.0", port=settings.port)


if __name__ == '__main__':
    main()
