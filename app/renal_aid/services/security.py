"""
Purpose: Guardrails for chat input.
Content: early, predictable failures; keep messages within size limits and
stop UK personal identifiers (NHS number, phone, postcode, ...) from being
sent to the assistant.

detect() only reports what it found; validate_chat_input() raises so the
controller can surface the message in a toast. Only the detected types are
logged, never the text.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field

from ..errors import PIIDetectedError

logger = logging.getLogger(__name__)

MAX_MESSAGE_CHARS = 2000

PII_PATTERNS: dict[str, re.Pattern] = {
    # 10 digits, often written XXX XXX XXXX
    "nhsNumber": re.compile(r"\b\d{3}[\s-]?\d{3}[\s-]?\d{4}\b"),
    "ukPhone": re.compile(
        r"\b(?:(?:\+44\s?|0)(?:7\d{3}|\d{4})[\s-]?\d{3}[\s-]?\d{3,4})\b"
    ),
    "ukPostcode": re.compile(r"\b[A-Z]{1,2}\d[A-Z\d]?\s*\d[A-Z]{2}\b", re.I),
    "email": re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"),
    "nationalInsurance": re.compile(
        r"\b[A-CEGHJ-PR-TW-Z]{2}\s?\d{2}\s?\d{2}\s?\d{2}\s?[A-D]\b", re.I
    ),
    "bankAccount": re.compile(r"\b\d{8}\b"),
    "sortCode": re.compile(r"\b\d{2}[-\s]?\d{2}[-\s]?\d{2}\b"),
    "dateOfBirth": re.compile(
        r"\b(?:dob|date of birth|born on)[\s:]*\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b", re.I
    ),
    "streetAddress": re.compile(
        r"\b\d+\s+[A-Za-z]+\s+(?:street|road|lane|avenue|drive|close|way|court|"
        r"place|crescent|terrace|gardens|grove|hill|park|square|mews|row|walk)\b",
        re.I,
    ),
}

# Digit-only patterns that need banking words nearby to count.
CONTEXT_REQUIRED: dict[str, tuple[str, ...]] = {
    "bankAccount": ("account", "bank", "sort code"),
    "sortCode": ("sort", "bank", "account"),
}

SENSITIVE_CONTEXT_TERMS = [
    "my address is",
    "i live at",
    "my phone number is",
    "my mobile is",
    "call me on",
    "my nhs number is",
    "my ni number is",
    "my national insurance",
    "my bank details",
    "my account number",
    "my sort code",
]

TYPE_LABELS: dict[str, str] = {
    "nhsNumber": "NHS number",
    "ukPhone": "phone number",
    "ukPostcode": "postcode",
    "email": "email address",
    "nationalInsurance": "National Insurance number",
    "bankAccount": "bank account number",
    "sortCode": "sort code",
    "dateOfBirth": "date of birth",
    "streetAddress": "street address",
    "sensitiveContext": "personal information",
}

PRIVACY_NOTE = (
    "For your privacy and security, please do not share personal identifying "
    "information in this chat."
)


@dataclass
class PIIDetectionResult:
    detected: bool
    types: list[str] = field(default_factory=list)
    message: str = ""


def build_warning_message(types: list[str]) -> str:
    items: list[str] = []
    for t in types:
        label = TYPE_LABELS.get(t, t)
        if label not in items:
            items.append(label)
    if not items:
        return ""
    if len(items) == 1:
        return f"Your message appears to contain a {items[0]}. {PRIVACY_NOTE}"
    return (
        f"Your message appears to contain {', '.join(items[:-1])} and {items[-1]}. "
        f"{PRIVACY_NOTE}"
    )


class PIIGuard:
    def detect(self, text: str) -> PIIDetectionResult:
        text = text or ""
        lower = text.lower()
        found: list[str] = []

        for kind, pattern in PII_PATTERNS.items():
            if not pattern.search(text):
                continue
            words = CONTEXT_REQUIRED.get(kind)
            if words and not any(w in lower for w in words):
                continue
            found.append(kind)

        if any(term in lower for term in SENSITIVE_CONTEXT_TERMS):
            found.append("sensitiveContext")

        if not found:
            return PIIDetectionResult(detected=False)
        return PIIDetectionResult(
            detected=True, types=found, message=build_warning_message(found)
        )


class DefaultSecurity:
    def __init__(self, pii_guard: PIIGuard | None = None):
        self.pii_guard = pii_guard or PIIGuard()

    def sanitize_for_prompt(self, text: str) -> str:
        return (text or "").replace("\x00", "").strip()

    def validate_user_input(self, text: str) -> None:
        if not (text or "").strip():
            raise ValueError("Message is required")
        if len(text) > MAX_MESSAGE_CHARS:
            raise ValueError(
                f"Message must be {MAX_MESSAGE_CHARS} characters or less"
            )

    def check_pii(self, text: str) -> None:
        result = self.pii_guard.detect(text)
        if result.detected:
            logger.warning("Blocked chat message containing PII types: %s", result.types)
            raise PIIDetectedError(result.message, result.types)

    def validate_chat_input(self, text: str) -> str:
        """Return the cleaned message or raise ValueError / PIIDetectedError."""
        cleaned = self.sanitize_for_prompt(text)
        self.validate_user_input(cleaned)
        self.check_pii(cleaned)
        return cleaned
