"""Shared prompt helpers used across prompt modules."""

from __future__ import annotations

from ..i18n import SUPPORTED_LANGUAGES
from ..models import ChatMessage

HISTORY_LIMIT = 10


def language_rules(language) -> str:
    code = getattr(language, "value", language)
    config = SUPPORTED_LANGUAGES.get(code) or SUPPORTED_LANGUAGES["en"]
    if config.code == "en":
        return "The patient is using the English version of the decision aid."
    return (
        f"The patient is using the {config.name} ({config.native_name}) version "
        f"of the decision aid. Reply in {config.name} unless they write to you "
        "in another language."
    )


def carer_rules(is_carer: bool) -> str:
    if not is_carer:
        return ""
    return (
        "The person writing is a carer or family member supporting someone with "
        "kidney disease. Speak about 'the person you support' rather than 'you', "
        "and remember that carers need support too."
    )


def recent_history(history: list[ChatMessage], limit: int = HISTORY_LIMIT) -> list[dict]:
    """The last `limit` messages as role/content dicts."""
    if limit <= 0:
        return []
    return [m.as_prompt() for m in history[-limit:]]


def assemble(*, system: str, history: list[ChatMessage], user_text: str) -> list[dict]:
    return [
        {"role": "system", "content": system},
        *recent_history(history),
        {"role": "user", "content": user_text},
    ]
