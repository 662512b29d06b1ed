import pytest

from renal_aid.config import Settings
from renal_aid.controller import DecisionAidSessionController
from renal_aid.persistence.session_store import InMemorySessionStore


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeLLM:
    """Records every chat() call and answers with a fixed reply."""

    def __init__(self, reply: str = "Here is some general information."):
        self.reply = reply
        self.calls = []

    def chat(self, messages, settings, system=None):
        self.calls.append({"messages": messages, "settings": settings, "system": system})
        return self.reply, {"model": "fake-model", "tokens_in": 12, "tokens_out": 34}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemorySessionStore(ttl_seconds=15 * 60, clock=clock)


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def controller(clock, store):
    return DecisionAidSessionController(None, store=store, settings=Settings(), clock=clock)
