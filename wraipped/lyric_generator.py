"""
Lyric generation through the OpenAI chat completions endpoint.

Only the first choice's message content is used; anything else in the
reply is ignored.
"""

import logging
from dataclasses import dataclass

import requests

from .config import COMPLETIONS_URL, MAX_TOKENS, SYSTEM_PROMPT, TEMPERATURE

log = logging.getLogger(__name__)

SHORT_LYRIC = "a short lyric"
TWO_LINES = "exactly 2 lines of lyrics"


class LyricGenerationError(Exception):
    pass


@dataclass
class Completion:
    content: str | None

    @classmethod
    def from_json(cls, data):
        """
        Pull the first choice's text out of a completion payload.

        Missing or malformed choices, a missing message or blank text
        all give content=None.
        """
        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return cls(None)
        message = choices[0].get("message")
        if not isinstance(message, dict):
            return cls(None)
        content = message.get("content")
        if not isinstance(content, str) or not content.strip():
            return cls(None)
        return cls(content.strip())


class LyricGenerator:
    def __init__(self, api_key, model="gpt-4o", timeout=None):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.url = COMPLETIONS_URL

    def build_request(self, artist, instruction):
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": f"Write {instruction} in the style of {artist}."},
            ],
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
        }

    def generate(self, artist, instruction=SHORT_LYRIC):
        log.info("Generating lyric for artist: %s", artist)
        response = requests.post(
            self.url,
            json=self.build_request(artist, instruction),
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=self.timeout,
        )
        response.raise_for_status()

        completion = Completion.from_json(response.json())
        if completion.content is None:
            raise LyricGenerationError("Lyric generation failed: No content in response.")

        log.info("Generated lyric: %s", completion.content)
        return completion.content
