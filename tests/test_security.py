import pytest

from renal_aid.errors import PIIDetectedError
from renal_aid.services.security import (
    MAX_MESSAGE_CHARS,
    DefaultSecurity,
    PIIGuard,
    build_warning_message,
)


def test_detects_nhs_number():
    result = PIIGuard().detect("Is 943 476 5919 the right format?")
    assert result.detected
    assert "nhsNumber" in result.types


def test_detects_email_and_postcode():
    result = PIIGuard().detect("Write to jo@example.com, I am near SW1A 1AA")
    assert "email" in result.types
    assert "ukPostcode" in result.types
    assert "postcode and email address" in result.message


def test_bank_numbers_need_banking_context():
    assert not PIIGuard().detect("I waited 12345678 seconds").detected
    result = PIIGuard().detect("my account is 12345678")
    assert "bankAccount" in result.types


def test_sensitive_phrases_are_flagged():
    result = PIIGuard().detect("I live at the end of the village")
    assert result.types == ["sensitiveContext"]


def test_clean_medical_question_passes():
    result = PIIGuard().detect("How long does a dialysis session take?")
    assert not result.detected
    assert result.message == ""


def test_warning_message_wording():
    assert build_warning_message([]) == ""
    assert build_warning_message(["email"]).startswith(
        "Your message appears to contain a email address."
    )


def test_validate_chat_input_cleans_text():
    security = DefaultSecurity()
    assert security.validate_chat_input("  What is CAPD?\x00 ") == "What is CAPD?"


def test_validate_chat_input_rejections():
    security = DefaultSecurity()
    with pytest.raises(ValueError, match="Message is required"):
        security.validate_chat_input("")
    with pytest.raises(ValueError, match="2000 characters or less"):
        security.validate_chat_input("a" * (MAX_MESSAGE_CHARS + 1))
    with pytest.raises(PIIDetectedError) as exc:
        security.validate_chat_input("Email me at sam@example.org")
    assert exc.value.types == ["email"]
