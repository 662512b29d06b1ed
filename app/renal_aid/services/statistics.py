"""
Purpose: pick the most relevant UK statistics for the user's profile.

Layered rules, applied in order:
1. Overall UK figures are the baseline.
2. Age group, when known, replaces the baseline.
3. Primary disease, when known, replaces the age figures.
4. Ethnicity replaces the baseline only if nothing more specific was found,
   and adds a context insight when its transplant rate differs from the
   overall rate by 5 points or more.
5. Diabetes adds an insight and applies the diabetes figures unless disease
   figures are already in use.
6. A potential living donor adds a positive insight.
7. Ages 75+ and 18-44 add age insights.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..data.statistics import (
    OVERALL_BREAKDOWN,
    QUALITY_OF_LIFE_DATA,
    STATS_BY_AGE,
    STATS_BY_DISEASE,
    STATS_BY_ETHNICITY,
    SURVIVAL_DATA,
    WAITING_LIST_DATA,
    AgeGroup,
    EthnicityGroup,
    ModalityBreakdown,
    PrimaryDisease,
    QualityOfLifeData,
    SurvivalData,
    WaitingListData,
)
from ..models import JourneyStage, QuestionnaireAnswer

logger = logging.getLogger(__name__)

ETHNICITY_INSIGHT_THRESHOLD = 5


@dataclass
class UserProfile:
    age_group: Optional[AgeGroup] = None
    ethnicity: Optional[EthnicityGroup] = None
    primary_disease: Optional[PrimaryDisease] = None
    diabetes_status: Optional[bool] = None
    has_living_donor: Optional[bool] = None


@dataclass
class PersonalizedInsight:
    id: str
    title_key: str
    description_key: str
    type: str
    relevance: str


@dataclass
class PersonalizedStats:
    modality_breakdown: ModalityBreakdown
    data_source: str
    personalization_basis_key: str
    age_group: Optional[AgeGroup]
    is_personalized: bool
    waiting_list: WaitingListData
    quality_of_life: list[QualityOfLifeData]
    survival: list[SurvivalData]
    insights: list[PersonalizedInsight] = field(default_factory=list)


def _insight(insight_id: str, key: str, description: str, kind: str, relevance: str):
    return PersonalizedInsight(
        id=insight_id,
        title_key=f"statistics.insights.{key}.title",
        description_key=f"statistics.insights.{key}.{description}",
        type=kind,
        relevance=relevance,
    )


def get_personalized_statistics(profile: UserProfile) -> PersonalizedStats:
    breakdown = OVERALL_BREAKDOWN
    data_source = "overall"
    basis_key = "statistics.basis.overall"
    insights: list[PersonalizedInsight] = []

    if profile.age_group in STATS_BY_AGE:
        breakdown = STATS_BY_AGE[profile.age_group]
        data_source = "age"
        basis_key = "statistics.basis.ageGroup"

    if profile.primary_disease in STATS_BY_DISEASE:
        breakdown = STATS_BY_DISEASE[profile.primary_disease]
        data_source = "disease"
        basis_key = "statistics.basis.disease"

    if profile.ethnicity in STATS_BY_ETHNICITY:
        ethnicity_stats = STATS_BY_ETHNICITY[profile.ethnicity]
        if data_source == "overall":
            breakdown = ethnicity_stats
            data_source = "ethnicity"
            basis_key = "statistics.basis.ethnicity"

        diff = ethnicity_stats.transplant - OVERALL_BREAKDOWN.transplant
        if abs(diff) >= ETHNICITY_INSIGHT_THRESHOLD:
            insights.append(
                _insight(
                    "ethnicity-transplant",
                    "ethnicityTransplant",
                    "lowerRate" if diff < 0 else "higherRate",
                    "context",
                    "medium",
                )
            )

    if profile.diabetes_status:
        insights.append(
            _insight("diabetes-context", "diabetes", "description", "info", "high")
        )
        if data_source != "disease":
            breakdown = STATS_BY_DISEASE[PrimaryDisease.DIABETES]
            data_source = "disease"
            basis_key = "statistics.basis.diabetes"

    if profile.has_living_donor:
        insights.append(
            _insight("living-donor", "livingDonor", "description", "positive", "high")
        )

    if profile.age_group == AgeGroup.AGE_75_PLUS:
        insights.append(
            _insight("age-conservative", "ageConservative", "description", "context", "medium")
        )
    elif profile.age_group == AgeGroup.AGE_18_44:
        insights.append(
            _insight("age-transplant", "ageTransplant", "description", "positive", "medium")
        )

    return PersonalizedStats(
        modality_breakdown=breakdown,
        data_source=data_source,
        personalization_basis_key=basis_key,
        age_group=profile.age_group,
        is_personalized=data_source != "overall",
        waiting_list=WAITING_LIST_DATA,
        quality_of_life=list(QUALITY_OF_LIFE_DATA),
        survival=list(SURVIVAL_DATA),
        insights=insights,
    )


AGE_MAP: dict[str, AgeGroup] = {
    "18-44": AgeGroup.AGE_18_44,
    "45-64": AgeGroup.AGE_45_64,
    "65-74": AgeGroup.AGE_65_74,
    "75+": AgeGroup.AGE_75_PLUS,
    "young-adult": AgeGroup.AGE_18_44,
    "middle-aged": AgeGroup.AGE_45_64,
    "older-adult": AgeGroup.AGE_65_74,
    "elderly": AgeGroup.AGE_75_PLUS,
}

# Buckets offered by this app's own questionnaire (age-range question).
AGE_RANGE_MAP: dict[str, AgeGroup] = {
    "under-50": AgeGroup.AGE_18_44,
    "50-65": AgeGroup.AGE_45_64,
    "65-75": AgeGroup.AGE_65_74,
    "over-75": AgeGroup.AGE_75_PLUS,
}

ETHNICITY_MAP: dict[str, EthnicityGroup] = {
    "white": EthnicityGroup.WHITE,
    "white-british": EthnicityGroup.WHITE,
    "white-irish": EthnicityGroup.WHITE,
    "white-other": EthnicityGroup.WHITE,
    "south-asian": EthnicityGroup.SOUTH_ASIAN,
    "asian-indian": EthnicityGroup.SOUTH_ASIAN,
    "asian-pakistani": EthnicityGroup.SOUTH_ASIAN,
    "asian-bangladeshi": EthnicityGroup.SOUTH_ASIAN,
    "black": EthnicityGroup.BLACK,
    "black-african": EthnicityGroup.BLACK,
    "black-caribbean": EthnicityGroup.BLACK,
    "mixed": EthnicityGroup.OTHER,
    "other": EthnicityGroup.OTHER,
}

DISEASE_MAP: dict[str, PrimaryDisease] = {
    "diabetes": PrimaryDisease.DIABETES,
    "diabetes-type-1": PrimaryDisease.DIABETES,
    "diabetes-type-2": PrimaryDisease.DIABETES,
    "glomerulonephritis": PrimaryDisease.GLOMERULONEPHRITIS,
    "iga-nephropathy": PrimaryDisease.GLOMERULONEPHRITIS,
    "polycystic": PrimaryDisease.POLYCYSTIC,
    "pkd": PrimaryDisease.POLYCYSTIC,
    "hypertension": PrimaryDisease.HYPERTENSION,
    "renovascular": PrimaryDisease.HYPERTENSION,
}


def _find(answers: list[QuestionnaireAnswer], question_id: str):
    return next((a for a in answers if a.question_id == question_id), None)


def build_profile_from_session(
    answers: Iterable[QuestionnaireAnswer],
    journey_stage: Optional[JourneyStage] = None,
) -> UserProfile:
    """Map questionnaire answers onto the fields the statistics tables use."""
    answers = list(answers)
    profile = UserProfile()

    age = _find(answers, "age-group")
    if age and isinstance(age.value, str):
        profile.age_group = AGE_MAP.get(age.value)
    if profile.age_group is None:
        age_range = _find(answers, "age-range")
        if age_range and isinstance(age_range.value, str):
            profile.age_group = AGE_RANGE_MAP.get(age_range.value)

    ethnicity = _find(answers, "ethnicity")
    if ethnicity and isinstance(ethnicity.value, str):
        profile.ethnicity = ETHNICITY_MAP.get(ethnicity.value)

    disease = _find(answers, "primary-disease")
    if disease and isinstance(disease.value, str):
        profile.primary_disease = DISEASE_MAP.get(disease.value)

    diabetes = _find(answers, "has-diabetes")
    if diabetes is not None:
        profile.diabetes_status = diabetes.value == "yes"

    concerns = _find(answers, "health-concerns")
    if concerns is not None and isinstance(concerns.value, list):
        if "diabetes" in concerns.value:
            profile.diabetes_status = True

    if profile.primary_disease == PrimaryDisease.DIABETES:
        profile.diabetes_status = True

    donor = _find(answers, "living-donor")
    if donor is not None:
        profile.has_living_donor = donor.value == "yes"

    if journey_stage == JourneyStage.TRANSPLANT_WAITING and profile.has_living_donor is None:
        profile.has_living_donor = False

    logger.debug(
        "Statistics profile: age=%s ethnicity=%s disease=%s diabetes=%s",
        profile.age_group,
        profile.ethnicity,
        profile.primary_disease,
        profile.diabetes_status,
    )
    return profile
