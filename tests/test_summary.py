from renal_aid.i18n import Translator
from renal_aid.models import (
    ChatMessage,
    ChatRole,
    JourneyStage,
    Session,
    SupportedLanguage,
    TreatmentType,
    ValueRating,
)
from renal_aid.services.decision import custom_question, generate_questions
from renal_aid.services.summary import build_summary, render_summary_markdown


def full_session():
    return Session(
        language=SupportedLanguage.EN,
        created_at=0,
        expires_at=900,
        last_activity_at=0,
        id="abcdef12-3456-7890-abcd-ef1234567890",
        journey_stage=JourneyStage.PREPARING,
        value_ratings=[
            ValueRating("travel", 3),
            ValueRating("longevity", 5),
            ValueRating("needles", 1),
            ValueRating("independence", 5),
            ValueRating("homeTreatment", 4),
            ValueRating("familyBurden", 2),
        ],
        viewed_treatments=[TreatmentType.PERITONEAL_DIALYSIS],
        selected_goals=["travel-freedom", "driving", "sports", "fasting"],
        chat_history=[
            ChatMessage(role=ChatRole.USER, content="q1"),
            ChatMessage(role=ChatRole.ASSISTANT, content="a1"),
            ChatMessage(role=ChatRole.USER, content="q2"),
        ],
    )


def test_build_summary_snapshot():
    summary = build_summary(full_session(), now=42.0)

    assert summary.generated_at == 42.0
    assert [r.statement_id for r in summary.top_values] == [
        "longevity",
        "independence",
        "homeTreatment",
        "travel",
        "familyBurden",
    ]
    assert len(summary.goal_matches) == 3
    assert summary.goal_matches[0]["is_best_match"] is True
    assert set(summary.value_match_scores) == set(TreatmentType)
    assert summary.questions_asked == 2
    assert [q["id"] for q in summary.questions] == ["gen-1", "gen-2", "gen-3", "stage-0", "stage-1"]


def test_build_summary_of_empty_session():
    session = Session(language=SupportedLanguage.EN, created_at=0, expires_at=900, last_activity_at=0)
    summary = build_summary(session, now=1.0)
    assert summary.top_values == []
    assert summary.goal_matches == []
    assert summary.value_match_scores == {}
    assert summary.readiness_score == 0


def test_markdown_uses_chosen_questions():
    session = full_session()
    chosen = [generate_questions(session)[0], custom_question("Can I keep fasting?", now=3.0)]
    markdown = render_summary_markdown(build_summary(session, now=0, questions=chosen), Translator())

    assert markdown.startswith("# Your Kidney Treatment Summary\n")
    assert "Session ID: abcdef12" in markdown
    assert "Preparing for treatment" in markdown
    assert "1. Living as long as possible (Very important)" in markdown
    assert "- Peritoneal dialysis" in markdown
    assert "- [ ] Which treatments are suitable for me, and why?" in markdown
    assert "- [ ] Can I keep fasting?" in markdown
    assert "- [ ] When will I need to start treatment?" not in markdown
    assert markdown.endswith("Printed from the NHS Kidney Treatment Decision Aid\n")


def test_markdown_for_empty_session():
    session = Session(language=SupportedLanguage.EN, created_at=0, expires_at=900, last_activity_at=0)
    markdown = render_summary_markdown(build_summary(session, now=0), Translator())
    assert "Not specified" in markdown
    assert "You have not completed the values exercise yet." in markdown
    assert "You have not explored any treatments yet." in markdown
    assert "How treatments match your values" not in markdown
