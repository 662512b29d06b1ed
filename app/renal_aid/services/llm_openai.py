"""
Purpose: Thin client wrapper around OpenAI.
One place for auth, retries, model options, response/usage normalization
and turning SDK errors into messages a patient can read.

Testing: Mock SDK calls; assert it maps usage and errors correctly. The
retry sleep is injectable so tests do not wait.
"""

from __future__ import annotations
import logging
import time
from typing import Callable, Optional

from openai import APIError, APIStatusError, APITimeoutError, OpenAI, RateLimitError

from ..models import LLMSettings

logger = logging.getLogger(__name__)

RETRY_DELAYS = [0.5, 1.0, 2.0, 4.0]

EMPTY_REPLY = (
    "I apologize, but I was unable to generate a response. Please try again."
)
RATE_LIMITED_MESSAGE = "Too many requests. Please wait a moment and try again."
NOT_CONFIGURED_MESSAGE = "The AI service is not properly configured."
GENERIC_ERROR_MESSAGE = "Unable to process your message. Please try again."


def describe_openai_error(error: Exception) -> str:
    """User-facing message for a failed OpenAI call."""
    status = getattr(error, "status_code", None)
    if isinstance(error, RateLimitError) or status == 429:
        return RATE_LIMITED_MESSAGE
    if status == 401:
        return NOT_CONFIGURED_MESSAGE
    return GENERIC_ERROR_MESSAGE


class OpenAILLMClient:
    def __init__(
        self,
        api_key: str,
        *,
        client: Optional[OpenAI] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api_key = api_key
        if not self.api_key:
            raise RuntimeError("Missing OPENAI_API_KEY")
        self.sleep = sleep
        if client is not None:
            self.client = client
            return
        try:
            self.client = OpenAI(api_key=self.api_key)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize OpenAI client: {e}") from e

    def _with_retries(self, fn, *args, **kwargs):
        for delay in RETRY_DELAYS:
            try:
                return fn(*args, **kwargs)
            except (RateLimitError, APITimeoutError, APIError) as e:
                # Bad credentials will not fix themselves.
                if isinstance(e, APIStatusError) and e.status_code == 401:
                    raise
                logger.info("OpenAI call failed, retrying in %.1fs: %s", delay, e)
                self.sleep(delay)
        return fn(*args, **kwargs)

    def chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        system: Optional[str] = None,
    ):
        payload = []
        if system:
            payload.append({"role": "system", "content": system})
        payload.extend(messages)

        def call_cc():
            return self.client.chat.completions.create(
                model=settings.model,
                messages=payload,
                temperature=settings.temperature,
                top_p=settings.top_p,
                max_tokens=settings.max_tokens,
            )

        try:
            cc = self._with_retries(call_cc)
        except APIError as e:
            logger.error(
                "OpenAI chat failed (status %s): %s", getattr(e, "status_code", None), e
            )
            raise
        text = (cc.choices[0].message.content or "").strip() if cc.choices else ""
        usage = getattr(cc, "usage", None)
        tokens_in = getattr(usage, "prompt_tokens", 0) if usage else 0
        tokens_out = getattr(usage, "completion_tokens", 0) if usage else 0
        return text or EMPTY_REPLY, {
            "model": cc.model,
            "tokens_in": tokens_in,
            "tokens_out": tokens_out,
            "raw": cc,
        }
