from renal_aid.models import ChatMessage, ChatRole, SupportedLanguage
from renal_aid.prompts import DefaultPromptFactory
from renal_aid.prompts.common import recent_history
from renal_aid.services.fallback import (
    CONSERVATIVE_REPLY,
    DEFAULT_REPLY,
    DIALYSIS_REPLY,
    GREETING_REPLY,
    TRANSPLANT_REPLY,
    FallbackResponder,
    fallback_response,
)


def test_system_prompt_names_language_and_role():
    prompts = DefaultPromptFactory()
    english = prompts.build_system(language=SupportedLanguage.EN)
    assert "NEVER diagnose" in english
    assert "English version" in english
    assert "carer or family member" not in english

    urdu = prompts.build_system(language=SupportedLanguage.UR, is_carer=True)
    assert "Reply in Urdu" in urdu
    assert "carer or family member" in urdu


def test_assemble_orders_system_history_user():
    history = [
        ChatMessage(role=ChatRole.USER, content="first"),
        ChatMessage(role=ChatRole.ASSISTANT, content="answer"),
    ]
    messages = DefaultPromptFactory().assemble(system="S", history=history, user_text="next")
    assert messages == [
        {"role": "system", "content": "S"},
        {"role": "user", "content": "first"},
        {"role": "assistant", "content": "answer"},
        {"role": "user", "content": "next"},
    ]


def test_recent_history_limit():
    history = [ChatMessage(role=ChatRole.USER, content=str(i)) for i in range(15)]
    assert [m["content"] for m in recent_history(history)] == [str(i) for i in range(5, 15)]
    assert recent_history(history, limit=0) == []


def test_fallback_keyword_replies():
    assert fallback_response("Tell me about haemodialysis") == DIALYSIS_REPLY
    assert fallback_response("Can I get a TRANSPLANT?") == TRANSPLANT_REPLY
    assert fallback_response("What is supportive care?") == CONSERVATIVE_REPLY
    assert fallback_response("hello") == GREETING_REPLY
    assert fallback_response("What about diet?") == DEFAULT_REPLY


def test_fallback_responder_reads_last_user_message():
    messages = [
        {"role": "system", "content": "ignored transplant"},
        {"role": "user", "content": "transplant?"},
        {"role": "assistant", "content": "..."},
        {"role": "user", "content": "and dialysis?"},
    ]
    reply, meta = FallbackResponder().chat(messages, settings=None)
    assert reply == DIALYSIS_REPLY
    assert meta["model"] == "fallback"
