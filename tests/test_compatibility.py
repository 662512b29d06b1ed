from renal_aid.data.comparison import COMPARE_TREATMENTS, COMPARISON_ROWS
from renal_aid.models import GoalTreatmentType, TreatmentType, ValueCategory, ValueRating
from renal_aid.services.compatibility import (
    calculate_compatibility,
    calculate_value_match_scores,
    compatibility_label_key,
    filter_rows,
    get_discussion_prompts,
    get_top_explanations,
    get_treatment_matches,
    is_row_highlighted,
    match_badge_key,
    recommended_treatment,
    toggle_visible_treatment,
)


def test_compatibility_is_average_fit_as_percent():
    assert calculate_compatibility(["travel-freedom"], GoalTreatmentType.TRANSPLANT_LIVING) == 100
    assert calculate_compatibility(["travel-freedom"], GoalTreatmentType.UNIT_HD) == 20
    assert calculate_compatibility(["travel-freedom", "fasting"], "transplant-living") == 80
    assert calculate_compatibility([], GoalTreatmentType.APD) == 0


def test_treatment_matches_sorted_with_single_best():
    matches = get_treatment_matches(["travel-freedom"])
    assert [m.score for m in matches] == sorted((m.score for m in matches), reverse=True)
    assert matches[0].treatment == GoalTreatmentType.TRANSPLANT_LIVING
    assert [m.is_best_match for m in matches].count(True) == 1
    assert matches[0].is_best_match


def test_no_goals_means_no_best_match():
    matches = get_treatment_matches([])
    assert all(m.score == 0 for m in matches)
    assert not any(m.is_best_match for m in matches)


def test_explanations_split_strengths_and_challenges():
    strengths, challenges = get_top_explanations(["travel-freedom"], GoalTreatmentType.TRANSPLANT_LIVING)
    assert strengths == ["lifeGoals.explanations.travelFreedom.transplant"]
    assert challenges == []

    strengths, challenges = get_top_explanations(["travel-freedom"], GoalTreatmentType.UNIT_HD)
    assert strengths == []
    assert challenges == ["lifeGoals.explanations.travelFreedom.unitHd"]


def test_milestones_have_separate_donor_explanations():
    living, _ = get_top_explanations(["milestones"], GoalTreatmentType.TRANSPLANT_LIVING)
    deceased, _ = get_top_explanations(["milestones"], GoalTreatmentType.TRANSPLANT_DECEASED)
    assert living == ["lifeGoals.explanations.milestones.transplantLiving"]
    assert deceased == ["lifeGoals.explanations.milestones.transplantDeceased"]


def test_explanations_are_capped():
    goals = ["return-to-work", "career-progression", "flexible-hours", "travel-freedom"]
    strengths, _ = get_top_explanations(goals, GoalTreatmentType.TRANSPLANT_LIVING)
    assert len(strengths) == 3
    _, challenges = get_top_explanations(goals, GoalTreatmentType.UNIT_HD)
    assert len(challenges) == 2


def test_compatibility_labels():
    assert compatibility_label_key(80) == "lifeGoals.results.compatibility.high"
    assert compatibility_label_key(60) == "lifeGoals.results.compatibility.good"
    assert compatibility_label_key(40) == "lifeGoals.results.compatibility.moderate"
    assert compatibility_label_key(10) == "lifeGoals.results.compatibility.low"


def test_discussion_prompts_follow_category_order():
    assert get_discussion_prompts(["fasting", "travel-freedom"]) == [
        "lifeGoals.discussion.travel",
        "lifeGoals.discussion.religious",
        "lifeGoals.discussion.general",
    ]
    assert get_discussion_prompts([]) == ["lifeGoals.discussion.general"]


def test_value_match_scores_for_longevity():
    scores = calculate_value_match_scores([ValueRating("longevity", 5)])
    assert scores == {
        TreatmentType.KIDNEY_TRANSPLANT: 100,
        TreatmentType.HEMODIALYSIS: 80,
        TreatmentType.PERITONEAL_DIALYSIS: 80,
        TreatmentType.CONSERVATIVE_CARE: 60,
    }
    assert recommended_treatment(scores) == TreatmentType.KIDNEY_TRANSPLANT


def test_value_match_without_ratings_is_zero():
    assert calculate_value_match_scores([]) == {t: 0 for t in COMPARE_TREATMENTS}
    assert recommended_treatment({t: 0 for t in COMPARE_TREATMENTS}) is None


def test_badges():
    assert match_badge_key(95) == "compare.badges.bestMatch"
    assert match_badge_key(75) == "compare.badges.goodMatch"
    assert match_badge_key(69) is None


def test_row_highlight_needs_high_rating():
    survival = next(r for r in COMPARISON_ROWS if r.id == "survival")
    assert is_row_highlighted(survival, [ValueRating("longevity", 4)])
    assert not is_row_highlighted(survival, [ValueRating("longevity", 3)])
    assert not is_row_highlighted(survival, [ValueRating("travel", 5)])


def test_filter_rows():
    assert len(filter_rows([])) == len(COMPARISON_ROWS)
    assert [r.id for r in filter_rows([ValueCategory.LONGEVITY])] == ["survival"]


def test_toggle_visible_treatment_keeps_one_column():
    visible = toggle_visible_treatment(COMPARE_TREATMENTS, TreatmentType.HEMODIALYSIS)
    assert TreatmentType.HEMODIALYSIS not in visible

    only = [TreatmentType.CONSERVATIVE_CARE]
    assert toggle_visible_treatment(only, TreatmentType.CONSERVATIVE_CARE) == only

    restored = toggle_visible_treatment(visible, TreatmentType.HEMODIALYSIS)
    assert restored == COMPARE_TREATMENTS
