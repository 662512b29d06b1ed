"""
Purpose: text-to-speech integration. Read answers and page text aloud in
the user's language.
"""

from __future__ import annotations
import logging
from typing import Optional

from ..interfaces import LLMClient

logger = logging.getLogger(__name__)

MAX_TTS_CHARS = 4096
TTS_MODELS = ("tts-1", "tts-1-hd")
TTS_VOICES = ("alloy", "nova", "shimmer", "echo", "fable", "onyx")
MIN_SPEED = 0.25
MAX_SPEED = 4.0

# nova sounds warmest in English; alloy copes best with the other languages.
LANGUAGE_VOICE_MAP: dict[str, str] = {
    "en": "nova",
    "hi": "alloy",
    "pa": "alloy",
    "bn": "alloy",
    "ur": "alloy",
    "gu": "alloy",
    "ta": "alloy",
}


def voice_for_language(language: Optional[str], voice: Optional[str] = None) -> str:
    if voice in TTS_VOICES:
        return voice
    return LANGUAGE_VOICE_MAP.get(str(language or ""), "alloy")


def clamp_speed(speed: Optional[float]) -> float:
    if speed is None:
        return 1.0
    return max(MIN_SPEED, min(MAX_SPEED, float(speed)))


def tts_bytes(
    text: str,
    llm: LLMClient,
    *,
    language: Optional[str] = "en",
    voice: Optional[str] = None,
    model: str = "tts-1",
    speed: Optional[float] = None,
) -> bytes:
    """
    Return raw MP3 bytes. Empty text gives b""; text over 4096 characters is
    rejected with ValueError.
    """
    safe = (text or "").strip()
    if not safe:
        return b""
    if len(safe) > MAX_TTS_CHARS:
        raise ValueError(f"Text must be {MAX_TTS_CHARS} characters or less")

    model = model if model in TTS_MODELS else "tts-1"
    selected_voice = voice_for_language(language, voice)
    client = getattr(llm, "client", llm)
    logger.debug(
        "Synthesizing %d chars with %s/%s", len(safe), model, selected_voice
    )

    with client.audio.speech.with_streaming_response.create(
        model=model,
        voice=selected_voice,
        input=safe,
        speed=clamp_speed(speed),
    ) as resp:
        return resp.read()
