import pytest
import requests

from renal_aid.errors import TranslationLoadError
from renal_aid.i18n import (
    HttpBackend,
    Translator,
    get_language_direction,
    initial_language,
    interpolate,
    is_supported_language,
    lookup,
)


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.exceptions.HTTPError(f"{self.status} error")

    def json(self):
        return self.payload


class FakeHttpSession:
    """Fails `failures` times, then serves `payload`."""

    def __init__(self, payload, failures=0):
        self.payload = payload
        self.failures = failures
        self.urls = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        if len(self.urls) <= self.failures:
            raise requests.exceptions.ConnectionError("network down")
        return FakeResponse(self.payload)


def test_language_table():
    assert is_supported_language("gu")
    assert not is_supported_language("fr")
    assert not is_supported_language(None)
    assert get_language_direction("ur") == "rtl"
    assert get_language_direction("ta") == "ltr"
    assert get_language_direction("xx") == "ltr"


def test_initial_language_uses_saved_choice_when_supported():
    assert initial_language("pa") == "pa"
    assert initial_language("de") == "en"
    assert initial_language(None) == "en"


def test_interpolate_and_lookup():
    assert interpolate("Date: {{date}}", {"date": "01/02/2025"}) == "Date: 01/02/2025"
    assert interpolate("Hi {{name}}", {}) == "Hi {{name}}"
    bundle = {"a": {"b": ["zero", "one"]}}
    assert lookup(bundle, "a.b.1") == "one"
    assert lookup(bundle, "a.b.5") is None
    assert lookup(bundle, "a.c") is None


def test_translator_english_and_fallback():
    t = Translator()
    assert t.t("nav.summary") == "Summary"
    assert t.t("no.such.key") == "no.such.key"
    assert t.t("no.such.key", "Default") == "Default"
    assert t.t("questionnaire.progress", done=2, total=6) == "2 of 6 answered"
    assert t.t("treatments.types.transplant.benefits.1") == "No need for regular dialysis"


def test_translator_partial_language_falls_back_per_key():
    t = Translator(language="ur")
    assert t.language == "ur"
    assert t.direction == "rtl"
    assert t.t("nav.summary") == "خلاصہ"
    assert t.t("compare.title") == "Compare treatments side by side"


def test_http_backend_retries_with_backoff():
    sleeps = []
    session = FakeHttpSession({"nav": {"summary": "सारांश"}}, failures=2)
    backend = HttpBackend("https://cdn.example/", session=session, sleep=sleeps.append)

    data = backend.load("hi", "common")

    assert data == {"nav": {"summary": "सारांश"}}
    assert session.urls == ["https://cdn.example/locales/hi/common.json"] * 3
    assert sleeps == [0.5, 1.0]


def test_http_backend_gives_up_after_max_retries():
    sleeps = []
    session = FakeHttpSession({}, failures=10)
    backend = HttpBackend("https://cdn.example", session=session, sleep=sleeps.append)

    with pytest.raises(TranslationLoadError):
        backend.load("bn", "common")
    assert len(session.urls) == 3
    assert sleeps == [0.5, 1.0]


def test_failed_language_change_reverts_to_english():
    backend = HttpBackend(
        "https://cdn.example",
        session=FakeHttpSession({}, failures=10),
        sleep=lambda s: None,
    )
    t = Translator(backend)
    assert t.change_language_and_wait("gu") is False
    assert t.language == "en"
    assert t.t("nav.journey") == "Your journey"
