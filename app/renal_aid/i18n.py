"""
Purpose: translation bundles, language metadata and language switching.

Bundles are JSON files laid out as locales/{lng}/{ns}.json. They are read
from the package by default, or fetched over HTTP when a base URL is
configured (e.g. a CDN that hosts the translators' latest files).

Key responsibilities:
- Language table (names, text direction, font stack).
- Backends: PackageBackend (files shipped with the app) and HttpBackend
  (requests + retry with exponential backoff).
- Translator.t(key, default, **params): dotted key lookup with English
  fallback and {{name}} interpolation.
- change_language_and_wait(): load a language, falling back to English.

Testing: HttpBackend takes an injectable requests.Session and sleep
function, so retries are tested without the network or real waiting.
"""

from __future__ import annotations
import json
import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import requests

from .errors import TranslationLoadError
from .interfaces import TranslationBackend
from .models import SupportedLanguage

logger = logging.getLogger(__name__)

DEFAULT_NS = "common"
FALLBACK_LANGUAGE = SupportedLanguage.EN.value
LANGUAGE_STORAGE_KEY = "lang"
LOAD_PATH = "/locales/{{lng}}/{{ns}}.json"
LOCALES_DIR = Path(__file__).resolve().parent / "locales"

REQUEST_TIMEOUT = 15.0
MAX_RETRIES = 2
BASE_RETRY_DELAY = 0.5

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


@dataclass(frozen=True)
class LanguageConfig:
    code: str
    name: str
    native_name: str
    direction: str
    font_family: str


SUPPORTED_LANGUAGES: dict[str, LanguageConfig] = {
    "en": LanguageConfig(
        "en", "English", "English", "ltr", '"Frutiger", "Arial", sans-serif'
    ),
    "hi": LanguageConfig(
        "hi", "Hindi", "हिन्दी", "ltr", '"Noto Sans Devanagari", "Mangal", sans-serif'
    ),
    "pa": LanguageConfig(
        "pa", "Punjabi", "ਪੰਜਾਬੀ", "ltr", '"Noto Sans Gurmukhi", "Raavi", sans-serif'
    ),
    "bn": LanguageConfig(
        "bn", "Bengali", "বাংলা", "ltr", '"Noto Sans Bengali", "Vrinda", sans-serif'
    ),
    "ur": LanguageConfig(
        "ur",
        "Urdu",
        "اردو",
        "rtl",
        '"Noto Nastaliq Urdu", "Jameel Noori Nastaleeq", sans-serif',
    ),
    "gu": LanguageConfig(
        "gu", "Gujarati", "ગુજરાતી", "ltr", '"Noto Sans Gujarati", "Shruti", sans-serif'
    ),
    "ta": LanguageConfig(
        "ta", "Tamil", "தமிழ்", "ltr", '"Noto Sans Tamil", "Latha", sans-serif'
    ),
}


def is_supported_language(code: Optional[str]) -> bool:
    return bool(code) and code in SUPPORTED_LANGUAGES


def get_language_direction(code: Optional[str]) -> str:
    if is_supported_language(code):
        return SUPPORTED_LANGUAGES[code].direction
    return "ltr"


def get_language_font(code: Optional[str]) -> str:
    if is_supported_language(code):
        return SUPPORTED_LANGUAGES[code].font_family
    return SUPPORTED_LANGUAGES[FALLBACK_LANGUAGE].font_family


def initial_language(saved: Optional[str]) -> str:
    """Saved preference when it is a supported code, else English."""
    if is_supported_language(saved):
        return saved
    return FALLBACK_LANGUAGE


def interpolate(text: str, params: dict[str, Any]) -> str:
    """Replace {{name}} placeholders; unknown names are left as they are."""
    if not params:
        return text

    def _sub(match: re.Match) -> str:
        name = match.group(1)
        return str(params[name]) if name in params else match.group(0)

    return _PLACEHOLDER.sub(_sub, text)


def lookup(bundle: dict, key: str) -> Any:
    """Resolve a dotted key; numeric segments index into lists."""
    node: Any = bundle
    for part in key.split("."):
        if isinstance(node, dict):
            if part not in node:
                return None
            node = node[part]
        elif isinstance(node, list) and part.isdigit():
            idx = int(part)
            if idx >= len(node):
                return None
            node = node[idx]
        else:
            return None
    return node


class PackageBackend:
    """Reads bundles shipped inside the package."""

    def __init__(self, root: Path = LOCALES_DIR):
        self.root = Path(root)

    def load(self, language: str, namespace: str) -> dict:
        path = self.root / language / f"{namespace}.json"
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise TranslationLoadError(language, namespace, str(e)) from e


class HttpBackend:
    """
    Fetches bundles over HTTP with retry and exponential backoff.
    One initial attempt plus MAX_RETRIES retries; delays grow 0.5s, 1s, ...
    """

    def __init__(
        self,
        base_url: str,
        *,
        load_path: str = LOAD_PATH,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
        max_retries: int = MAX_RETRIES,
        base_delay: float = BASE_RETRY_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.load_path = load_path
        self.session = session or requests.Session()
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.sleep = sleep

    def url_for(self, language: str, namespace: str) -> str:
        path = self.load_path.replace("{{lng}}", language).replace("{{ns}}", namespace)
        return f"{self.base_url}{path}"

    def load(self, language: str, namespace: str) -> dict:
        url = self.url_for(language, namespace)
        last_error = ""
        for attempt in range(self.max_retries + 1):
            try:
                resp = self.session.get(url, timeout=self.timeout)
                resp.raise_for_status()
                data = resp.json()
                if not isinstance(data, dict):
                    raise ValueError("translation bundle is not a JSON object")
                return data
            except (requests.exceptions.RequestException, ValueError) as e:
                last_error = str(e)
                if attempt < self.max_retries:
                    delay = self.base_delay * (2**attempt)
                    logger.info(
                        "Translation fetch %s failed (attempt %d), retrying in %.1fs: %s",
                        url,
                        attempt + 1,
                        delay,
                        e,
                    )
                    self.sleep(delay)
        raise TranslationLoadError(language, namespace, last_error)


class Translator:
    """
    Active language plus cached bundles. English is always available as the
    fallback and is read from the packaged files so the UI still renders
    when a remote backend is down.
    """

    def __init__(
        self,
        backend: Optional[TranslationBackend] = None,
        *,
        namespace: str = DEFAULT_NS,
        fallback_backend: Optional[TranslationBackend] = None,
        language: str = FALLBACK_LANGUAGE,
    ):
        self.backend: TranslationBackend = backend or PackageBackend()
        self.fallback_backend: TranslationBackend = fallback_backend or PackageBackend()
        self.namespace = namespace
        self._bundles: dict[str, dict] = {}
        self._fallback: Optional[dict] = None
        self.language = FALLBACK_LANGUAGE
        if language != FALLBACK_LANGUAGE:
            self.change_language_and_wait(language)

    @property
    def direction(self) -> str:
        return get_language_direction(self.language)

    @property
    def font_family(self) -> str:
        return get_language_font(self.language)

    def _fallback_bundle(self) -> dict:
        if self._fallback is None:
            try:
                self._fallback = self.fallback_backend.load(
                    FALLBACK_LANGUAGE, self.namespace
                )
            except TranslationLoadError as e:
                logger.error("English translations unavailable: %s", e)
                self._fallback = {}
        return self._fallback

    def is_loaded(self, language: str) -> bool:
        return language == FALLBACK_LANGUAGE or language in self._bundles

    def change_language_and_wait(self, language: str) -> bool:
        """
        Make `language` active once its bundle is loaded. Returns False (and
        switches to English) when the code is unsupported or loading fails.
        """
        if not is_supported_language(language):
            logger.warning(
                "Language %r is not supported. Falling back to English.", language
            )
            self.language = FALLBACK_LANGUAGE
            return False

        if self.is_loaded(language):
            self.language = language
            return True

        try:
            self._bundles[language] = self.backend.load(language, self.namespace)
        except TranslationLoadError as e:
            logger.warning(
                "Language change to %s failed, reverting to English: %s", language, e
            )
            self.language = FALLBACK_LANGUAGE
            return False

        self.language = language
        logger.info("Loaded %s translations", language)
        return True

    def raw(self, key: str) -> Any:
        """Untranslated node (string, list or dict) with English fallback."""
        value = None
        if self.language != FALLBACK_LANGUAGE:
            value = lookup(self._bundles.get(self.language, {}), key)
        if value is None:
            value = lookup(self._fallback_bundle(), key)
        return value

    def t(self, key: str, default: Optional[str] = None, **params: Any) -> str:
        value = self.raw(key)
        if not isinstance(value, str):
            value = default if default is not None else key
        return interpolate(value, params)

    __call__ = t
