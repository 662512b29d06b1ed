import pytest

from renal_aid.errors import PIIDetectedError, SessionExpiredError, SessionNotFoundError
from renal_aid.models import (
    CarerRelationship,
    ChatMessage,
    ChatRole,
    JourneyStage,
    QuestionnaireAnswer,
    SupportedLanguage,
    TreatmentType,
    UserRole,
    ValueRating,
)
from renal_aid.services.fallback import DIALYSIS_REPLY


def test_create_session_registers_in_store(controller, store, clock):
    session = controller.create_session("hi")
    assert session.language == SupportedLanguage.HI
    assert session.expires_at == clock.now + 15 * 60
    assert store.get(session.id) is session
    assert controller.error is None


def test_end_session_removes_it(controller, store):
    session = controller.create_session()
    controller.end_session()
    assert controller.session is None
    assert store.get(session.id) is None


def test_timer_counts_down_and_warns(controller, clock):
    controller.create_session()
    timer = controller.timer()
    assert timer.formatted == "15:00"
    assert timer.is_warning is False

    clock.advance(601)
    timer = controller.timer()
    assert timer.formatted == "4:59"
    assert timer.is_warning is True


def test_session_expires_after_inactivity(controller, store, clock):
    controller.create_session()
    clock.advance(15 * 60 + 1)
    assert controller.check_expiry() is True
    assert controller.session is None
    assert controller.error == "Your session has expired. Please start again."
    assert store.active_count() == 0


def test_extend_session_resets_countdown(controller, clock):
    controller.create_session()
    clock.advance(14 * 60)
    controller.extend_session()
    clock.advance(10 * 60)
    assert controller.check_expiry() is False
    assert controller.timer().formatted == "5:00"


def test_setters_without_session_do_nothing(controller):
    controller.set_journey_stage(JourneyStage.MONITORING)
    controller.add_value_rating(ValueRating("travel", 4))
    controller.mark_treatment_viewed(TreatmentType.HEMODIALYSIS)
    assert controller.session is None


def test_stage_change_extends_expiry_but_answers_only_touch_activity(controller, clock):
    session = controller.create_session()
    clock.advance(100)
    controller.set_journey_stage("preparing")
    assert session.journey_stage == JourneyStage.PREPARING
    assert session.expires_at == clock.now + 15 * 60

    clock.advance(50)
    controller.add_questionnaire_answer(QuestionnaireAnswer("age-range", "50-65"))
    assert session.last_activity_at == clock.now
    assert session.expires_at == clock.now - 50 + 15 * 60


def test_questionnaire_answer_upsert_keeps_position(controller):
    session = controller.create_session()
    controller.add_questionnaire_answer(QuestionnaireAnswer("age-range", "50-65"))
    controller.add_questionnaire_answer(QuestionnaireAnswer("work-status", "retired"))
    controller.add_questionnaire_answer(QuestionnaireAnswer("age-range", "over-75"))

    assert [a.question_id for a in session.questionnaire_answers] == ["age-range", "work-status"]
    assert session.answer_for("age-range").value == "over-75"


def test_questionnaire_answer_rejects_unknown_option(controller):
    controller.create_session()
    with pytest.raises(ValueError):
        controller.add_questionnaire_answer(QuestionnaireAnswer("age-range", "teenager"))


def test_value_rating_upsert(controller):
    session = controller.create_session()
    controller.add_value_rating(ValueRating("travel", 2))
    controller.add_value_rating(ValueRating("needles", 5))
    controller.add_value_rating(ValueRating("travel", 4))
    assert [(r.statement_id, r.rating) for r in session.value_ratings] == [
        ("travel", 4),
        ("needles", 5),
    ]


def test_mark_treatment_viewed_is_idempotent(controller):
    session = controller.create_session()
    controller.mark_treatment_viewed(TreatmentType.PERITONEAL_DIALYSIS)
    controller.mark_treatment_viewed("kidney-transplant")
    controller.mark_treatment_viewed(TreatmentType.PERITONEAL_DIALYSIS)
    assert session.viewed_treatments == [
        TreatmentType.PERITONEAL_DIALYSIS,
        TreatmentType.KIDNEY_TRANSPLANT,
    ]


def test_relationship_kept_only_for_carers(controller):
    session = controller.create_session()
    controller.set_user_role(UserRole.CARER, "child")
    assert session.carer_relationship == CarerRelationship.CHILD

    controller.set_user_role("patient", "child")
    assert session.user_role == UserRole.PATIENT
    assert session.carer_relationship is None


def test_toggle_goal_and_unknown_goal(controller):
    session = controller.create_session()
    assert controller.toggle_goal("travel-freedom") is True
    assert controller.toggle_goal("fasting") is True
    assert controller.toggle_goal("travel-freedom") is False
    assert session.selected_goals == ["fasting"]

    with pytest.raises(ValueError):
        controller.toggle_goal("skydiving")


def test_set_selected_goals_dedupes(controller):
    session = controller.create_session()
    controller.set_selected_goals(["driving", "sports", "driving"])
    assert session.selected_goals == ["driving", "sports"]


def test_set_language_switches_session_language(controller):
    session = controller.create_session()
    assert controller.set_language("ur") is True
    assert session.language == SupportedLanguage.UR
    assert controller.translator.direction == "rtl"


def test_set_language_unknown_falls_back_to_english(controller):
    controller.create_session("hi")
    assert controller.set_language("fr") is False
    assert controller.session.language == SupportedLanguage.EN


def test_chat_once_with_llm_records_both_messages(controller, fake_llm):
    controller.llm = fake_llm
    session = controller.create_session()

    reply, meta = controller.chat_once("  What is a fistula?  ")

    assert reply == fake_llm.reply
    assert meta["model"] == "fake-model"
    assert [m.role for m in session.chat_history] == [ChatRole.USER, ChatRole.ASSISTANT]
    assert session.chat_history[0].content == "What is a fistula?"
    sent = fake_llm.calls[0]["messages"]
    assert sent[0]["role"] == "system"
    assert sent[-1] == {"role": "user", "content": "What is a fistula?"}
    assert controller.tokens_in == 12
    assert controller.tokens_out == 34
    assert controller.model_used == "fake-model"


def test_chat_once_sends_only_recent_history(controller, fake_llm):
    controller.llm = fake_llm
    session = controller.create_session()
    for i in range(12):
        role = ChatRole.USER if i % 2 == 0 else ChatRole.ASSISTANT
        session.chat_history.append(ChatMessage(role=role, content=f"message {i}"))

    controller.chat_once("And what about diet?")

    sent = fake_llm.calls[0]["messages"]
    assert len(sent) == 12
    assert sent[1]["content"] == "message 2"


def test_chat_once_prompt_mentions_carer(controller, fake_llm):
    controller.llm = fake_llm
    controller.create_session()
    controller.set_user_role("carer", "spouse")
    controller.chat_once("How can I help?")
    assert "carer" in fake_llm.calls[0]["messages"][0]["content"]


def test_chat_once_without_key_uses_fallback(controller):
    session = controller.create_session()
    reply, meta = controller.chat_once("Tell me about dialysis")
    assert reply == DIALYSIS_REPLY
    assert meta["tokens_in"] == 0
    assert controller.model_used == "fallback"
    assert len(session.chat_history) == 2


def test_chat_once_rejects_pii_and_records_nothing(controller, fake_llm):
    controller.llm = fake_llm
    session = controller.create_session()
    with pytest.raises(PIIDetectedError):
        controller.chat_once("My NHS number is 943 476 5919")
    assert session.chat_history == []
    assert fake_llm.calls == []


def test_chat_once_rejects_empty_message(controller):
    controller.create_session()
    with pytest.raises(ValueError, match="Message is required"):
        controller.chat_once("   ")


def test_chat_without_session_raises(controller):
    with pytest.raises(SessionNotFoundError):
        controller.chat_once("hello")


def test_chat_after_expiry_raises_expired(controller, clock):
    controller.create_session()
    clock.advance(16 * 60)
    with pytest.raises(SessionExpiredError):
        controller.chat_once("hello")


def test_voice_features_need_api_key(controller):
    controller.create_session()
    assert controller.speak("   ") == (b"", {"tts_chars": 0, "model": "tts-1"})
    with pytest.raises(RuntimeError):
        controller.speak("Hello")
    with pytest.raises(RuntimeError):
        controller.voice_to_text(b"RIFF....")


def test_summary_snapshot(controller, clock):
    controller.create_session()
    controller.mark_treatment_viewed(TreatmentType.KIDNEY_TRANSPLANT)
    controller.chat_once("hello")
    summary = controller.summary()
    assert summary.generated_at == clock.now
    assert summary.viewed_treatments == [TreatmentType.KIDNEY_TRANSPLANT]
    assert summary.questions_asked == 1
