"""
Abstractions for pluggable services. Inversion of control: the core depends
on interfaces, not concrete services. Enables fakes/mocks and future swaps.

Common protocols:
- LLMClient.chat(messages, settings) -> (reply, meta)
- PromptFactory.build_system(...) -> str & assemble(...) -> list[dict]
- SecurityGuard.validate_chat_input(text)
- TranslationBackend.load(language, namespace) -> dict
- Clock() -> epoch seconds

Testing: Use simple fake implementations to test the controller without network calls.
"""

from __future__ import annotations
from typing import Optional, Protocol
from .models import ChatMessage, LLMSettings, SupportedLanguage


class LLMClient(Protocol):
    def chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        system: Optional[str] = None,
    ) -> tuple[str, dict]: ...


class PromptFactory(Protocol):
    def build_system(
        self,
        *,
        language: SupportedLanguage,
        is_carer: bool = False,
    ) -> str: ...

    def assemble(
        self, *, system: str, history: list[ChatMessage], user_text: str
    ) -> list[dict[str, str]]: ...


class SecurityGuard(Protocol):
    def validate_chat_input(self, text: str) -> str: ...


class TranslationBackend(Protocol):
    def load(self, language: str, namespace: str) -> dict: ...


class Clock(Protocol):
    def __call__(self) -> float: ...
