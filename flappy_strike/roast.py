"""Death roasts from the Gemini API.

Requests run on a single background worker so the frame loop never waits on
the network. Every future resolves to a string: failures are logged and
replaced by a fixed fallback line.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from google import genai
from google.genai import types

from .config import (
    ROAST_EMPTY_FALLBACK,
    ROAST_FALLBACK,
    ROAST_MAX_OUTPUT_TOKENS,
    ROAST_MAX_WORDS,
    ROAST_MODEL,
    ROAST_TEMPERATURE,
    ROAST_TIMEOUT_MS,
)
from .world import GameWorld

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "The player just died in Flappy Bird with a score of {score}. "
    "Write a very short, funny, and slightly snarky one-sentence roast about their failure. "
    "Keep it under {max_words} words."
)


def tidy_roast(text: Optional[str], max_words: int = ROAST_MAX_WORDS) -> str:
    """First non-empty line, surrounding quotes stripped, capped at max_words."""
    if not text:
        return ""
    lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if not lines:
        return ""
    line = lines[0].strip("\"'“”` ")
    words = line.split()
    if len(words) > max_words:
        line = " ".join(words[:max_words]).rstrip(",;:") + "..."
    return line


class RoastClient:
    """Fire-and-forget roast generator backed by google-genai."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout_ms: int = ROAST_TIMEOUT_MS,
    ) -> None:
        if api_key is None:
            api_key = os.environ.get("GEMINI_API_KEY", "")
        self.api_key = api_key
        self.model = model or os.environ.get("FLAPPY_STRIKE_ROAST_MODEL", ROAST_MODEL)
        self.timeout_ms = timeout_ms
        self._client: Optional[genai.Client] = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="roast")
        if not self.api_key:
            logger.warning("GEMINI_API_KEY not set, roasts will use the fallback line")

    def _ensure_client(self) -> Optional[genai.Client]:
        if self._client is None and self.api_key:
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=self.timeout_ms),
            )
            logger.info("Gemini client connected (model=%s)", self.model)
        return self._client

    def generate(self, score: int) -> str:
        """Blocking roast generation. Never raises."""
        try:
            client = self._ensure_client()
            if client is None:
                return ROAST_FALLBACK
            response = client.models.generate_content(
                model=self.model,
                contents=PROMPT_TEMPLATE.format(score=score, max_words=ROAST_MAX_WORDS),
                config=types.GenerateContentConfig(
                    temperature=ROAST_TEMPERATURE,
                    max_output_tokens=ROAST_MAX_OUTPUT_TOKENS,
                ),
            )
            text = tidy_roast(getattr(response, "text", None))
            if not text:
                logger.warning("Empty roast for score %d", score)
                return ROAST_EMPTY_FALLBACK
            logger.debug("Roast for score %d: %s", score, text)
            return text
        except Exception as e:
            logger.error(f"Roast generation failed: {e}")
            return ROAST_FALLBACK

    def request(self, score: int) -> Future:
        return self._executor.submit(self.generate, score)

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


def sync_roast(world: GameWorld, client: RoastClient) -> None:
    """Dispatch a requested roast and copy a finished one into the world.

    Runs on the frame driver; the worker thread never touches the world.
    """
    slot = world.roast
    if slot.requested_score is not None and slot.future is None:
        slot.future = client.request(slot.requested_score)
        slot.requested_score = None
    if slot.future is not None and slot.future.done():
        future, slot.future = slot.future, None
        slot.pending = False
        if future.cancelled():
            return
        slot.text = future.result()
