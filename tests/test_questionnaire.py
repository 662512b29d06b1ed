import pytest

from renal_aid.data.questionnaire import (
    calculate_progress,
    collect_answers,
    get_question_by_id,
    get_total_questions,
    validate_answer,
)
from renal_aid.data.values import NOT_RATED, ratings_from_form, top_priorities
from renal_aid.models import ValueRating


def test_questions_lookup_and_progress():
    assert get_total_questions() == 6
    assert get_question_by_id("age-range").title_key == "questionnaire.questions.ageRange.title"
    assert get_question_by_id("nope") is None
    assert calculate_progress(0) == 17
    assert calculate_progress(5) == 100


def test_single_choice_validation():
    question = get_question_by_id("work-status")
    assert validate_answer(question, "retired") == "retired"
    with pytest.raises(ValueError):
        validate_answer(question, None)
    with pytest.raises(ValueError):
        validate_answer(question, "astronaut")


def test_multiple_choice_validation():
    required = get_question_by_id("important-factors")
    assert validate_answer(required, ["travel", "travel", "independence"]) == [
        "travel",
        "independence",
    ]
    with pytest.raises(ValueError):
        validate_answer(required, [])

    optional = get_question_by_id("health-concerns")
    assert validate_answer(optional, []) == []
    assert validate_answer(optional, "vision") == ["vision"]


def test_help_text_only_where_defined():
    assert get_question_by_id("important-factors").help_text_key is not None
    assert get_question_by_id("age-range").help_text_key is None


def test_top_priorities_keeps_high_ratings_in_order():
    ratings = [
        ValueRating("travel", 4),
        ValueRating("needles", 5),
        ValueRating("longevity", 3),
        ValueRating("independence", 5),
        ValueRating("homeTreatment", 4),
    ]
    assert [r.statement_id for r in top_priorities(ratings)] == [
        "needles",
        "independence",
        "travel",
    ]


def test_value_rating_range():
    with pytest.raises(ValueError):
        ValueRating("travel", 6)
    with pytest.raises(ValueError):
        ValueRating("travel", True)


def test_collect_answers_reports_blank_required_questions():
    answers, problems = collect_answers(
        {
            "age-range": "65-75",
            "living-situation": None,
            "work-status": "retired",
            "support-available": "yes-regular",
            "important-factors": [],
            "health-concerns": [],
        }
    )
    assert [a.question_id for a in answers] == ["age-range", "work-status", "support-available"]
    assert problems == ["living-situation", "important-factors"]


def test_collect_answers_flags_unknown_options():
    answers, problems = collect_answers({"age-range": "teenager", "health-concerns": ["vision"]})
    assert [a.question_id for a in answers] == ["health-concerns"]
    assert problems == [
        "age-range",
        "living-situation",
        "work-status",
        "support-available",
        "important-factors",
    ]


def test_untouched_value_sliders_record_nothing():
    assert ratings_from_form({"travel": NOT_RATED, "needles": None}) == []
    assert ratings_from_form({"travel": NOT_RATED, "longevity": 5, "needles": 2}) == [
        ValueRating("longevity", 5),
        ValueRating("needles", 2),
    ]
