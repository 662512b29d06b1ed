"""
Purpose: speech-to-text integration. Allow voice-based questions in the chat.
"""

from __future__ import annotations
import io
import base64
import uuid
from typing import Optional

from ..i18n import is_supported_language
from ..interfaces import LLMClient

MAX_AUDIO_BYTES = 25 * 1024 * 1024


def transcribe_wav_bytes(
    wav_bytes: bytes,
    llm: LLMClient,
    *,
    model: str = "whisper-1",
    language: Optional[str] = None,
) -> str:
    """
    Transcribe WAV audio bytes with Whisper. A supported language code is
    passed as a hint; otherwise Whisper detects the language itself.
    """
    if not wav_bytes:
        raise ValueError("Audio file is required")
    if len(wav_bytes) > MAX_AUDIO_BYTES:
        raise ValueError("Audio file must be less than 25MB")

    kwargs = {}
    if is_supported_language(language):
        kwargs["language"] = language

    client = getattr(llm, "client", llm)
    with io.BytesIO(wav_bytes) as buf:
        buf.name = "input.wav"
        resp = client.audio.transcriptions.create(model=model, file=buf, **kwargs)
    return (resp.text or "").strip()


def autoplay_html(mp3_bytes: bytes) -> str:
    """Return an HTML snippet that auto-plays MP3 bytes (hidden)."""
    if not mp3_bytes:
        return ""
    b64 = base64.b64encode(mp3_bytes).decode("ascii")
    el_id = f"tts_{uuid.uuid4().hex}"
    return f"""
    <audio id="{el_id}" autoplay playsinline preload="auto" style="display:none">
      <source src="data:audio/mpeg;base64,{b64}" type="audio/mpeg">
    </audio>
    <script>
      (function() {{
        const a = document.getElementById("{el_id}");
        if (a) {{
          a.play().catch(() => {{}});
        }}
      }})();
    </script>
    """
