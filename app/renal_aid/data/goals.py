"""
Purpose: life goals and how well each treatment sub-type fits them.

Scores run 1 (hard to combine with this treatment) to 5 (fits well) and are
listed in GOAL_TREATMENTS order:
transplant-living, transplant-deceased, home-hd, unit-hd, apd, capd, conservative.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..models import GoalCategory, GoalTreatmentType

GOAL_TREATMENTS: list[GoalTreatmentType] = list(GoalTreatmentType)

# Suffix used in explanation keys; both transplant types share one text by default.
_EXPLANATION_SUFFIX: dict[GoalTreatmentType, str] = {
    GoalTreatmentType.TRANSPLANT_LIVING: "transplant",
    GoalTreatmentType.TRANSPLANT_DECEASED: "transplant",
    GoalTreatmentType.HOME_HD: "homeHd",
    GoalTreatmentType.UNIT_HD: "unitHd",
    GoalTreatmentType.APD: "apd",
    GoalTreatmentType.CAPD: "capd",
    GoalTreatmentType.CONSERVATIVE: "conservative",
}


@dataclass(frozen=True)
class GoalCategoryInfo:
    id: GoalCategory
    icon: str

    @property
    def title_key(self) -> str:
        return f"lifeGoals.categories.{self.id.value}.title"

    @property
    def description_key(self) -> str:
        return f"lifeGoals.categories.{self.id.value}.description"


@dataclass(frozen=True)
class LifeGoal:
    id: str
    category: GoalCategory
    key: str

    @property
    def label_key(self) -> str:
        return f"lifeGoals.goals.{self.key}"


@dataclass(frozen=True)
class GoalCompatibilityScore:
    goal_id: str
    scores: dict[GoalTreatmentType, int]
    explanation_keys: dict[GoalTreatmentType, str]


GOAL_CATEGORIES: list[GoalCategoryInfo] = [
    GoalCategoryInfo(GoalCategory.WORK, "💼"),
    GoalCategoryInfo(GoalCategory.FAMILY, "👨‍👩‍👧"),
    GoalCategoryInfo(GoalCategory.TRAVEL, "✈️"),
    GoalCategoryInfo(GoalCategory.HOBBIES, "🎨"),
    GoalCategoryInfo(GoalCategory.INDEPENDENCE, "🧭"),
    GoalCategoryInfo(GoalCategory.RELIGIOUS, "🕌"),
]

# goal id, category, key, scores
_GOAL_TABLE: list[tuple[str, GoalCategory, str, tuple[int, ...]]] = [
    ("return-to-work", GoalCategory.WORK, "returnToWork", (5, 5, 3, 2, 4, 3, 3)),
    ("career-progression", GoalCategory.WORK, "careerProgression", (5, 5, 3, 2, 4, 3, 2)),
    ("flexible-hours", GoalCategory.WORK, "flexibleHours", (5, 5, 4, 2, 5, 3, 4)),
    ("physical-job", GoalCategory.WORK, "physicalJob", (4, 4, 3, 2, 3, 2, 2)),
    ("childcare", GoalCategory.FAMILY, "childcare", (5, 5, 3, 2, 4, 3, 3)),
    ("family-time", GoalCategory.FAMILY, "familyTime", (5, 5, 3, 2, 4, 3, 4)),
    ("milestones", GoalCategory.FAMILY, "milestones", (5, 4, 3, 2, 4, 3, 3)),
    ("intimacy", GoalCategory.FAMILY, "intimacy", (4, 4, 3, 3, 3, 3, 3)),
    ("travel-freedom", GoalCategory.TRAVEL, "travelFreedom", (5, 5, 2, 1, 3, 3, 3)),
    ("holiday-planning", GoalCategory.TRAVEL, "holidayPlanning", (5, 5, 2, 2, 3, 3, 3)),
    ("spontaneous-trips", GoalCategory.TRAVEL, "spontaneousTrips", (5, 5, 2, 1, 2, 2, 3)),
    ("sports", GoalCategory.HOBBIES, "sports", (4, 4, 3, 2, 3, 2, 2)),
    ("creative-activities", GoalCategory.HOBBIES, "creativeActivities", (5, 5, 4, 3, 4, 4, 4)),
    ("social-activities", GoalCategory.HOBBIES, "socialActivities", (5, 5, 3, 2, 4, 3, 3)),
    ("gardening-outdoors", GoalCategory.HOBBIES, "gardeningOutdoors", (4, 4, 3, 2, 4, 3, 3)),
    ("self-care", GoalCategory.INDEPENDENCE, "selfCare", (5, 5, 4, 3, 4, 4, 3)),
    ("driving", GoalCategory.INDEPENDENCE, "driving", (5, 5, 4, 3, 4, 4, 3)),
    ("living-alone", GoalCategory.INDEPENDENCE, "livingAlone", (5, 5, 3, 4, 4, 4, 3)),
    ("managing-home", GoalCategory.INDEPENDENCE, "managingHome", (5, 5, 3, 2, 4, 3, 3)),
    ("dietary-needs", GoalCategory.RELIGIOUS, "dietaryNeeds", (4, 4, 3, 3, 3, 3, 4)),
    ("prayer-times", GoalCategory.RELIGIOUS, "prayerTimes", (5, 5, 4, 2, 5, 3, 4)),
    ("community-participation", GoalCategory.RELIGIOUS, "communityParticipation", (5, 5, 3, 2, 4, 3, 3)),
    ("fasting", GoalCategory.RELIGIOUS, "fasting", (3, 3, 2, 2, 3, 2, 3)),
]

# Goals whose living and deceased donor transplants have separate explanations.
_SPLIT_TRANSPLANT_EXPLANATIONS = {"milestones"}


def _explanation_keys(key: str) -> dict[GoalTreatmentType, str]:
    keys = {
        t: f"lifeGoals.explanations.{key}.{suffix}"
        for t, suffix in _EXPLANATION_SUFFIX.items()
    }
    if key in _SPLIT_TRANSPLANT_EXPLANATIONS:
        keys[GoalTreatmentType.TRANSPLANT_LIVING] = (
            f"lifeGoals.explanations.{key}.transplantLiving"
        )
        keys[GoalTreatmentType.TRANSPLANT_DECEASED] = (
            f"lifeGoals.explanations.{key}.transplantDeceased"
        )
    return keys


LIFE_GOALS: list[LifeGoal] = [
    LifeGoal(goal_id, category, key) for goal_id, category, key, _ in _GOAL_TABLE
]

COMPATIBILITY_SCORES: list[GoalCompatibilityScore] = [
    GoalCompatibilityScore(
        goal_id=goal_id,
        scores=dict(zip(GOAL_TREATMENTS, scores)),
        explanation_keys=_explanation_keys(key),
    )
    for goal_id, _, key, scores in _GOAL_TABLE
]

TREATMENT_DISPLAY: dict[GoalTreatmentType, dict[str, str]] = {
    t: {
        "label_key": f"lifeGoals.treatments.{name}",
        "short_key": f"lifeGoals.treatments.{name}Short",
    }
    for t, name in [
        (GoalTreatmentType.TRANSPLANT_LIVING, "transplantLiving"),
        (GoalTreatmentType.TRANSPLANT_DECEASED, "transplantDeceased"),
        (GoalTreatmentType.HOME_HD, "homeHd"),
        (GoalTreatmentType.UNIT_HD, "unitHd"),
        (GoalTreatmentType.APD, "apd"),
        (GoalTreatmentType.CAPD, "capd"),
        (GoalTreatmentType.CONSERVATIVE, "conservative"),
    ]
}

GOAL_IDS = frozenset(g.id for g in LIFE_GOALS)


def get_goal_by_id(goal_id: str) -> LifeGoal | None:
    return next((g for g in LIFE_GOALS if g.id == goal_id), None)


def goals_in_category(category: GoalCategory) -> list[LifeGoal]:
    return [g for g in LIFE_GOALS if g.category == category]
