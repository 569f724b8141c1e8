import random
from dataclasses import dataclass

from .config import MAX_OPTIONS, MIN_ARTISTS


class NotEnoughArtists(Exception):
    pass


@dataclass
class GameRound:
    lyric: str
    options: list[str]
    correct_artist: str

    def to_dict(self):
        return {
            "lyric": self.lyric,
            "options": list(self.options),
            "correctArtist": self.correct_artist,
        }


def pick_options(top_artists, rng=None):
    """Sample up to MAX_OPTIONS artists without replacement."""
    rng = rng or random.Random()
    if not top_artists or len(top_artists) < MIN_ARTISTS:
        raise NotEnoughArtists("Not enough top artists to play the game.")
    size = min(MAX_OPTIONS, len(top_artists))
    return rng.sample(list(top_artists), size)


def pick_correct(options, rng=None):
    rng = rng or random.Random()
    return rng.choice(options)


def check_guess(round_state, guess):
    """Compare a guess with the correct artist kept for the current round."""
    correct_artist = round_state["correctArtist"]
    return guess.strip().casefold() == correct_artist.strip().casefold()
