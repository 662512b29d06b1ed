"""
Purpose: runtime settings and logging setup.

Settings come from environment variables so the same code runs locally,
in Streamlit Cloud (secrets exported as env vars) and in tests (pass a dict).

Env vars:
- OPENAI_API_KEY        enables the AI assistant, speech and transcription
- OPENAI_MODEL          chat model, default gpt-4o
- RENAL_AID_LOCALES_URL base URL serving /locales/{lng}/{ns}.json; when unset
                        the bundles shipped with the package are used
- RENAL_AID_SESSION_MINUTES  inactivity timeout, default 15
- LOG_LEVEL             default INFO
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

SESSION_DURATION_SECONDS = 15 * 60
WARNING_THRESHOLD_SECONDS = 5 * 60

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"
    tts_model: str = "tts-1"
    stt_model: str = "whisper-1"
    locales_url: Optional[str] = None
    session_duration_seconds: int = SESSION_DURATION_SECONDS
    warning_threshold_seconds: int = WARNING_THRESHOLD_SECONDS
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool((self.openai_api_key or "").strip())


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r", name, raw)
        return default
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the process environment (or the given mapping)."""
    env = os.environ if env is None else env
    minutes = _int_env(env, "RENAL_AID_SESSION_MINUTES", SESSION_DURATION_SECONDS // 60)
    return Settings(
        openai_api_key=(env.get("OPENAI_API_KEY") or "").strip() or None,
        openai_model=(env.get("OPENAI_MODEL") or "").strip() or "gpt-4o",
        tts_model=(env.get("OPENAI_TTS_MODEL") or "").strip() or "tts-1",
        stt_model=(env.get("OPENAI_STT_MODEL") or "").strip() or "whisper-1",
        locales_url=(env.get("RENAL_AID_LOCALES_URL") or "").strip() or None,
        session_duration_seconds=minutes * 60,
        log_level=(env.get("LOG_LEVEL") or "INFO").strip().upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the root logger; safe to call on every rerun."""
    root = logging.getLogger()
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    root.setLevel(numeric)
    if not any(getattr(h, "_renal_aid", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._renal_aid = True
        root.addHandler(handler)
