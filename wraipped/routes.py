import logging
import secrets

import requests
from flask import Blueprint, current_app, jsonify, redirect, request, session, url_for

from .game import GameRound, NotEnoughArtists, check_guess, pick_correct, pick_options
from .lyric_generator import SHORT_LYRIC, TWO_LINES, LyricGenerationError
from .spotify_client import SpotifyError

log = logging.getLogger(__name__)

bp = Blueprint("wraipped", __name__)


def _services():
    return current_app.extensions["wraipped"]


def _session_id(create=False):
    sid = session.get("sid")
    if sid is None and create:
        sid = secrets.token_urlsafe(32)
        session["sid"] = sid
    return sid


def load_session():
    sid = _session_id()
    if sid is None:
        return {}
    return _services().store.get(sid) or {}


def save_session(data):
    _services().store.set(_session_id(create=True), data)


def _json_body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _upstream_detail(error):
    response = getattr(error, "response", None)
    if response is not None:
        return response.text
    return str(error)


# Routes
@bp.route('/')
def index():
    return current_app.send_static_file('index.html')


@bp.route('/login')
def login():
    return redirect(_services().spotify.get_auth_url())


@bp.route('/callback')
def callback():
    if 'error' in request.args:
        log.error("Authorization denied: %s", request.args.get('error'))
        return 'Error during authentication'

    code = request.args.get('code')
    if not code:
        log.error("Callback reached without an authorization code")
        return 'Error during authentication'

    spotify = _services().spotify
    try:
        tokens = spotify.exchange_code(code)
        top_artists = spotify.get_top_artists(tokens.access_token)
    except (requests.RequestException, SpotifyError) as e:
        log.error("Error during authentication or fetching user data: %s", _upstream_detail(e))
        return 'Error during authentication'

    data = load_session()
    data['accessToken'] = tokens.access_token
    data['refreshToken'] = tokens.refresh_token
    data['topArtists'] = top_artists
    data.pop('currentRound', None)
    save_session(data)
    log.info("Session stored with %d top artists", len(top_artists))

    return redirect(url_for('wraipped.game'))


@bp.route('/game')
def game():
    if not load_session().get('topArtists'):
        return redirect(url_for('wraipped.index'))
    return current_app.send_static_file('game.html')


@bp.route('/start-game')
def start_game():
    services = _services()
    data = load_session()

    try:
        options = pick_options(data.get('topArtists'), services.rng)
    except NotEnoughArtists as e:
        return jsonify({"error": str(e)}), 400

    log.debug("Artist pool for game: %s", options)
    correct_artist = pick_correct(options, services.rng)

    try:
        lyric = services.lyrics.generate(correct_artist, SHORT_LYRIC)
    except (requests.RequestException, LyricGenerationError) as e:
        log.error("Error starting game: %s", _upstream_detail(e))
        return jsonify({"error": "Failed to start game."}), 500

    game_round = GameRound(lyric, options, correct_artist)
    data['currentRound'] = game_round.to_dict()
    save_session(data)
    return jsonify(game_round.to_dict())


@bp.route('/api/top-artists')
def top_artists():
    data = load_session()
    access_token = data.get('accessToken')
    if not access_token:
        return jsonify({"error": "No access token. Please log in again."}), 403

    try:
        artists = _services().spotify.get_top_artists(access_token)
    except (requests.RequestException, SpotifyError) as e:
        log.error("Error fetching top artists: %s", _upstream_detail(e))
        return jsonify({"error": "Failed to fetch top artists."}), 500

    data['topArtists'] = artists
    save_session(data)
    return jsonify({"topArtists": artists})


@bp.route('/api/generate-lyric', methods=['POST'])
def generate_lyric():
    artist = _json_body().get('artist')
    if not isinstance(artist, str) or not artist.strip():
        return jsonify({"error": "Missing artist."}), 400

    try:
        lyric = _services().lyrics.generate(artist, TWO_LINES)
    except (requests.RequestException, LyricGenerationError) as e:
        log.error("Error generating lyric: %s", _upstream_detail(e))
        return jsonify({"error": "Failed to generate lyric."}), 500

    return jsonify({"lyric": lyric})


@bp.route('/api/guess', methods=['POST'])
def guess():
    artist = _json_body().get('artist')
    if not isinstance(artist, str) or not artist.strip():
        return jsonify({"error": "Missing artist."}), 400

    data = load_session()
    current_round = data.get('currentRound')
    if not current_round:
        return jsonify({"error": "No game in progress."}), 400

    correct = check_guess(current_round, artist)
    # one guess per round
    data.pop('currentRound')
    save_session(data)
    return jsonify({"correct": correct, "correctArtist": current_round['correctArtist']})


@bp.route('/logout')
def logout():
    sid = _session_id()
    if sid is not None:
        _services().store.destroy(sid)
    session.clear()
    return redirect(url_for('wraipped.index'))
