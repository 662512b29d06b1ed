from renal_aid.data.statistics import (
    INCIDENT_DATA,
    OVERALL_ABSOLUTE_NUMBERS,
    AgeGroup,
    EthnicityGroup,
    Modality,
    PrimaryDisease,
)
from renal_aid.models import JourneyStage, QuestionnaireAnswer
from renal_aid.services.statistics import (
    UserProfile,
    build_profile_from_session,
    get_personalized_statistics,
)


def insight_ids(stats):
    return [i.id for i in stats.insights]


def test_empty_profile_uses_overall_figures():
    stats = get_personalized_statistics(UserProfile())
    assert stats.modality_breakdown.as_dict() == {
        "transplant": 60,
        "haemodialysis": 33,
        "peritoneal-dialysis": 7,
    }
    assert stats.data_source == "overall"
    assert stats.personalization_basis_key == "statistics.basis.overall"
    assert stats.is_personalized is False
    assert stats.insights == []
    assert len(stats.quality_of_life) == 4


def test_age_group_replaces_baseline_and_adds_insight():
    stats = get_personalized_statistics(UserProfile(age_group=AgeGroup.AGE_75_PLUS))
    assert stats.modality_breakdown.transplant == 15
    assert stats.data_source == "age"
    assert insight_ids(stats) == ["age-conservative"]

    young = get_personalized_statistics(UserProfile(age_group=AgeGroup.AGE_18_44))
    assert insight_ids(young) == ["age-transplant"]


def test_disease_overrides_age():
    stats = get_personalized_statistics(
        UserProfile(age_group=AgeGroup.AGE_45_64, primary_disease=PrimaryDisease.POLYCYSTIC)
    )
    assert stats.modality_breakdown.transplant == 75
    assert stats.data_source == "disease"
    assert stats.personalization_basis_key == "statistics.basis.disease"


def test_ethnicity_only_used_when_nothing_more_specific():
    alone = get_personalized_statistics(UserProfile(ethnicity=EthnicityGroup.BLACK))
    assert alone.data_source == "ethnicity"
    assert alone.modality_breakdown.transplant == 48

    with_age = get_personalized_statistics(
        UserProfile(age_group=AgeGroup.AGE_65_74, ethnicity=EthnicityGroup.BLACK)
    )
    assert with_age.data_source == "age"
    assert with_age.modality_breakdown.transplant == 45


def test_ethnicity_insight_only_for_large_differences():
    black = get_personalized_statistics(UserProfile(ethnicity=EthnicityGroup.BLACK))
    assert insight_ids(black) == ["ethnicity-transplant"]
    assert black.insights[0].description_key == "statistics.insights.ethnicityTransplant.lowerRate"

    white = get_personalized_statistics(UserProfile(ethnicity=EthnicityGroup.WHITE))
    assert white.insights == []


def test_diabetes_applies_figures_unless_disease_known():
    stats = get_personalized_statistics(
        UserProfile(age_group=AgeGroup.AGE_45_64, diabetes_status=True)
    )
    assert stats.modality_breakdown.transplant == 45
    assert stats.personalization_basis_key == "statistics.basis.diabetes"
    assert "diabetes-context" in insight_ids(stats)

    with_disease = get_personalized_statistics(
        UserProfile(primary_disease=PrimaryDisease.HYPERTENSION, diabetes_status=True)
    )
    assert with_disease.modality_breakdown.transplant == 40
    assert with_disease.personalization_basis_key == "statistics.basis.disease"


def test_living_donor_insight_is_positive():
    stats = get_personalized_statistics(UserProfile(has_living_donor=True))
    assert insight_ids(stats) == ["living-donor"]
    assert stats.insights[0].type == "positive"


def test_profile_from_questionnaire_answers():
    answers = [
        QuestionnaireAnswer("age-range", "over-75"),
        QuestionnaireAnswer("health-concerns", ["diabetes", "vision"]),
    ]
    profile = build_profile_from_session(answers)
    assert profile.age_group == AgeGroup.AGE_75_PLUS
    assert profile.diabetes_status is True
    assert profile.ethnicity is None


def test_profile_waiting_list_without_donor_answer():
    profile = build_profile_from_session([], JourneyStage.TRANSPLANT_WAITING)
    assert profile.has_living_donor is False


def test_absolute_numbers_use_modality_keys():
    assert set(OVERALL_ABSOLUTE_NUMBERS) <= {m.value for m in Modality}
    assert sum(INCIDENT_DATA["breakdown"].values()) == 100
