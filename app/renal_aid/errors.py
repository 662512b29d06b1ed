"""
Error types raised by the core package.

Input validation problems are plain ValueError (or subclasses of it) so the
UI can show them in a toast, as it does for every other validation failure.
"""

from __future__ import annotations


class DecisionAidError(Exception):
    """Base class for failures that are not simple input validation."""


class TranslationLoadError(DecisionAidError):
    def __init__(self, language: str, namespace: str, reason: str = ""):
        self.language = language
        self.namespace = namespace
        self.reason = reason
        msg = f"Could not load translations for {language}/{namespace}"
        super().__init__(f"{msg}: {reason}" if reason else msg)


class SessionNotFoundError(DecisionAidError):
    """No active session, or the id is unknown to the store."""


class SessionExpiredError(SessionNotFoundError):
    """The session passed its expiry time and was discarded."""


class PIIDetectedError(ValueError):
    """Chat input contains personal identifying information."""

    def __init__(self, message: str, types: list[str]):
        super().__init__(message)
        self.types = list(types)
