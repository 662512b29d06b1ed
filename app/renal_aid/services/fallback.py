"""
Purpose: canned answers used when no OpenAI key is configured.

FallbackResponder has the same chat() shape as OpenAILLMClient, so the
controller does not care which one it talks to. It looks only at the latest
user message and picks a reply by keyword.
"""

from __future__ import annotations
from typing import Optional

from ..models import LLMSettings

FALLBACK_MODEL = "fallback"

DIALYSIS_REPLY = """Dialysis is a treatment that helps filter waste products and excess fluid from your blood when your kidneys can no longer do this effectively. There are two main types:

**Haemodialysis** - Blood is filtered through a machine, usually done at a dialysis centre 3 times a week for about 4 hours each session. Home haemodialysis is also an option for some patients.

**Peritoneal Dialysis** - Uses the lining of your abdomen to filter blood inside your body. This can be done at home and gives you more flexibility.

Would you like to know more about either of these options? Remember to discuss any treatment decisions with your healthcare team."""

TRANSPLANT_REPLY = """A kidney transplant involves receiving a healthy kidney from either a living or deceased donor. It's often considered the best treatment for kidney failure when suitable, as it can provide a better quality of life compared to dialysis.

**Living donor transplant** - A kidney from a living person, often a family member or friend. These tend to last longer and can be planned in advance.

**Deceased donor transplant** - A kidney from someone who has died. This requires joining a waiting list.

Not everyone is suitable for a transplant, and your healthcare team will assess your individual situation. Would you like to know more about the transplant process?"""

CONSERVATIVE_REPLY = """Conservative management (sometimes called supportive care) is an option for people who choose not to have dialysis or a transplant. This approach focuses on:

- Managing symptoms and maintaining quality of life
- Treating complications of kidney disease
- Providing emotional and practical support
- Planning for the future

This is a valid choice, especially for older people or those with other serious health conditions. Your healthcare team can provide comprehensive supportive care to help you live as well as possible.

Would you like to discuss what conservative management might involve?"""

GREETING_REPLY = """Hello! I'm here to help you learn about kidney disease treatment options and support you in thinking through your choices.

I can provide information about:
- **Dialysis** (haemodialysis and peritoneal dialysis)
- **Kidney transplant** (living and deceased donor)
- **Conservative management**
- **Questions to discuss with your healthcare team**

What would you like to know more about?"""

DEFAULT_REPLY = """Thank you for your question. I'm here to help you understand your kidney treatment options.

The main treatment choices for kidney failure include:
1. **Haemodialysis** - Filtering blood using a machine
2. **Peritoneal dialysis** - Filtering blood using the lining of your abdomen
3. **Kidney transplant** - Receiving a healthy kidney from a donor
4. **Conservative management** - Supportive care without dialysis

Each option has different benefits and considerations depending on your individual situation, lifestyle, and preferences.

Would you like to explore any of these options in more detail? Remember, any decisions about treatment should always be discussed with your healthcare team."""

# First match wins; plain substring checks, so "hi" also matches "this".
KEYWORD_REPLIES: list[tuple[tuple[str, ...], str]] = [
    (("dialysis", "haemodialysis"), DIALYSIS_REPLY),
    (("transplant",), TRANSPLANT_REPLY),
    (("conservative", "supportive care"), CONSERVATIVE_REPLY),
    (("hello", "hi", "help"), GREETING_REPLY),
]


def fallback_response(message: str) -> str:
    lower = (message or "").lower()
    for keywords, reply in KEYWORD_REPLIES:
        if any(k in lower for k in keywords):
            return reply
    return DEFAULT_REPLY


class FallbackResponder:
    def chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        system: Optional[str] = None,
    ):
        last_user = next(
            (m["content"] for m in reversed(messages) if m.get("role") == "user"), ""
        )
        return fallback_response(last_user), {
            "model": FALLBACK_MODEL,
            "tokens_in": 0,
            "tokens_out": 0,
        }
