"""Facade over the prompt modules, used by the session controller."""

from __future__ import annotations

from ..models import ChatMessage, SupportedLanguage
from . import chat as _chat
from .common import assemble as _assemble


class DefaultPromptFactory:
    def build_system(
        self,
        *,
        language: SupportedLanguage,
        is_carer: bool = False,
    ) -> str:
        return _chat.build_chat_system(language=language, is_carer=is_carer)

    def assemble(
        self, *, system: str, history: list[ChatMessage], user_text: str
    ) -> list[dict[str, str]]:
        return _assemble(system=system, history=history, user_text=user_text)
