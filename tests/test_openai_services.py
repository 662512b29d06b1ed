from types import SimpleNamespace

import httpx
import pytest
from openai import APITimeoutError, AuthenticationError

from renal_aid.models import LLMSettings
from renal_aid.services.llm_openai import (
    EMPTY_REPLY,
    GENERIC_ERROR_MESSAGE,
    NOT_CONFIGURED_MESSAGE,
    RATE_LIMITED_MESSAGE,
    OpenAILLMClient,
    describe_openai_error,
)
from renal_aid.services.speech import clamp_speed, tts_bytes, voice_for_language
from renal_aid.services.voice import autoplay_html, transcribe_wav_bytes

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def completion(text, prompt_tokens=10, completion_tokens=20):
    return SimpleNamespace(
        model="gpt-4o",
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


class FakeCompletions:
    def __init__(self, results):
        self.results = list(results)
        self.kwargs = []

    def create(self, **kwargs):
        self.kwargs.append(kwargs)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def fake_client(results):
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(results)))


def test_chat_maps_reply_and_usage():
    client = fake_client([completion(" Dialysis filters your blood. ")])
    llm = OpenAILLMClient("sk-test", client=client)
    settings = LLMSettings(model="gpt-4o", max_tokens=1000)

    text, meta = llm.chat([{"role": "user", "content": "What is dialysis?"}], settings, system="Be kind")

    assert text == "Dialysis filters your blood."
    assert meta["tokens_in"] == 10
    assert meta["tokens_out"] == 20
    sent = client.chat.completions.kwargs[0]
    assert sent["messages"][0] == {"role": "system", "content": "Be kind"}
    assert sent["max_tokens"] == 1000


def test_empty_completion_gives_apology():
    llm = OpenAILLMClient("sk-test", client=fake_client([completion("")]))
    text, _ = llm.chat([], LLMSettings(model="gpt-4o"))
    assert text == EMPTY_REPLY


def test_timeouts_are_retried():
    sleeps = []
    client = fake_client([APITimeoutError(request=REQUEST), completion("ok")])
    llm = OpenAILLMClient("sk-test", client=client, sleep=sleeps.append)

    text, _ = llm.chat([], LLMSettings(model="gpt-4o"))

    assert text == "ok"
    assert sleeps == [0.5]


def test_bad_key_is_not_retried():
    sleeps = []
    error = AuthenticationError(
        "bad key", response=httpx.Response(401, request=REQUEST), body=None
    )
    llm = OpenAILLMClient("sk-test", client=fake_client([error]), sleep=sleeps.append)

    with pytest.raises(AuthenticationError):
        llm.chat([], LLMSettings(model="gpt-4o"))
    assert sleeps == []
    assert describe_openai_error(error) == NOT_CONFIGURED_MESSAGE


def test_missing_key_is_rejected():
    with pytest.raises(RuntimeError):
        OpenAILLMClient("")


def test_describe_error_by_status():
    class Limited(Exception):
        status_code = 429

    assert describe_openai_error(Limited()) == RATE_LIMITED_MESSAGE
    assert describe_openai_error(ValueError("boom")) == GENERIC_ERROR_MESSAGE


class FakeSpeechResponse:
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def read(self):
        return b"ID3mp3"


class FakeSpeech:
    def __init__(self):
        self.kwargs = None
        self.with_streaming_response = self

    def create(self, **kwargs):
        self.kwargs = kwargs
        return FakeSpeechResponse()


class FakeTranscriptions:
    def __init__(self, text):
        self.text = text
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        return SimpleNamespace(text=self.text)


def audio_llm(transcript=" hello there "):
    audio = SimpleNamespace(speech=FakeSpeech(), transcriptions=FakeTranscriptions(transcript))
    return SimpleNamespace(client=SimpleNamespace(audio=audio))


def test_tts_picks_voice_and_clamps_speed():
    llm = audio_llm()
    assert tts_bytes("Hello", llm, language="ta", speed=9) == b"ID3mp3"
    kwargs = llm.client.audio.speech.kwargs
    assert kwargs["voice"] == "alloy"
    assert kwargs["speed"] == 4.0
    assert kwargs["model"] == "tts-1"


def test_tts_limits():
    llm = audio_llm()
    assert tts_bytes("   ", llm) == b""
    assert llm.client.audio.speech.kwargs is None
    with pytest.raises(ValueError):
        tts_bytes("a" * 4097, llm)


def test_voice_and_speed_helpers():
    assert voice_for_language("en") == "nova"
    assert voice_for_language("ur") == "alloy"
    assert voice_for_language("en", voice="onyx") == "onyx"
    assert voice_for_language("en", voice="robot") == "nova"
    assert clamp_speed(None) == 1.0
    assert clamp_speed(0.1) == 0.25


def test_transcription_passes_supported_language_hint():
    llm = audio_llm()
    assert transcribe_wav_bytes(b"RIFF", llm, language="hi") == "hello there"
    kwargs = llm.client.audio.transcriptions.kwargs
    assert kwargs["language"] == "hi"
    assert kwargs["model"] == "whisper-1"

    transcribe_wav_bytes(b"RIFF", llm, language="fr")
    assert "language" not in llm.client.audio.transcriptions.kwargs


def test_transcription_rejects_bad_audio():
    with pytest.raises(ValueError, match="Audio file is required"):
        transcribe_wav_bytes(b"", audio_llm())
    with pytest.raises(ValueError, match="less than 25MB"):
        transcribe_wav_bytes(b"0" * (25 * 1024 * 1024 + 1), audio_llm())


def test_autoplay_html():
    assert autoplay_html(b"") == ""
    html = autoplay_html(b"ID3")
    assert "data:audio/mpeg;base64,SUQz" in html
    assert "autoplay" in html
