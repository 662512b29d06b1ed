"""
Purpose: detailed side-by-side comparison table.

Each row rates every main treatment on one criterion and lists the value
categories the criterion speaks to, which is how rated value statements get
connected to rows (see VALUE_TO_CATEGORIES).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from ..models import RatingLevel, TreatmentType, ValueCategory

LEVEL_SCORES: dict[RatingLevel, int] = {
    RatingLevel.EXCELLENT: 5,
    RatingLevel.GOOD: 4,
    RatingLevel.MODERATE: 3,
    RatingLevel.VARIES: 3,
    RatingLevel.CHALLENGING: 1,
}
MAX_LEVEL_SCORE = 5

VALUE_TO_CATEGORIES: dict[str, list[ValueCategory]] = {
    "travel": [ValueCategory.FLEXIBILITY],
    "hospitalTime": [ValueCategory.TIME, ValueCategory.COMFORT],
    "needles": [ValueCategory.COMFORT],
    "independence": [ValueCategory.INDEPENDENCE],
    "familyBurden": [ValueCategory.INDEPENDENCE],
    "longevity": [ValueCategory.LONGEVITY],
    "qualityOfLife": [ValueCategory.QUALITY],
    "homeTreatment": [ValueCategory.COMFORT, ValueCategory.INDEPENDENCE],
    "workActivities": [ValueCategory.FLEXIBILITY, ValueCategory.TIME],
    "professionalCare": [ValueCategory.COMFORT],
}

COMPARE_TREATMENTS: list[TreatmentType] = list(TreatmentType)


@dataclass(frozen=True)
class ComparisonCell:
    level: RatingLevel
    text_key: str
    subtext_key: Optional[str] = None


@dataclass(frozen=True)
class ComparisonRow:
    id: str
    criteria: str
    category_id: str
    related_values: list[ValueCategory] = field(default_factory=list)
    values: dict[TreatmentType, ComparisonCell] = field(default_factory=dict)

    @property
    def criteria_key(self) -> str:
        return f"compare.criteria.{self.criteria}"

    @property
    def hint_key(self) -> str:
        return f"compare.criteria.{self.criteria}Hint"

    @property
    def tooltip_key(self) -> str:
        return f"compare.tooltips.{self.criteria}"


@dataclass(frozen=True)
class CompareCategory:
    id: str
    title_key: str


COMPARE_CATEGORIES: list[CompareCategory] = [
    CompareCategory("daily-life", "compare.categories.dailyLife"),
    CompareCategory("practical", "compare.categories.practical"),
    CompareCategory("health", "compare.categories.health"),
]

_E, _G, _M, _C, _V = (
    RatingLevel.EXCELLENT,
    RatingLevel.GOOD,
    RatingLevel.MODERATE,
    RatingLevel.CHALLENGING,
    RatingLevel.VARIES,
)


def _cells(*cells: tuple[RatingLevel, str, str]) -> dict[TreatmentType, ComparisonCell]:
    return {
        t: ComparisonCell(level, f"compare.values.{text}", f"compare.values.{sub}")
        for t, (level, text, sub) in zip(COMPARE_TREATMENTS, cells)
    }


COMPARISON_ROWS: list[ComparisonRow] = [
    ComparisonRow(
        "time-commitment",
        "timeCommitment",
        "daily-life",
        [ValueCategory.TIME, ValueCategory.FLEXIBILITY],
        _cells(
            (_E, "minimalAfterRecovery", "regularCheckupsOnly"),
            (_C, "12to15HrsWeekly", "plusTravelTime"),
            (_G, "dailyExchanges", "canBeDoneOvernight"),
            (_E, "minimal", "clinicVisitsAsNeeded"),
        ),
    ),
    ComparisonRow(
        "location",
        "location",
        "daily-life",
        [ValueCategory.INDEPENDENCE, ValueCategory.COMFORT],
        _cells(
            (_E, "noRestrictions", "afterRecovery"),
            (_C, "hospitalClinic", "dialysisUnit"),
            (_E, "home", "anyCleanSpace"),
            (_E, "home", "noEquipmentNeeded"),
        ),
    ),
    ComparisonRow(
        "travel",
        "travel",
        "daily-life",
        [ValueCategory.FLEXIBILITY, ValueCategory.INDEPENDENCE],
        _cells(
            (_E, "veryFlexible", "takeMedicationsOnly"),
            (_C, "difficult", "mustArrangeHolidayDialysis"),
            (_G, "goodFlexibility", "suppliesCanBeSentAhead"),
            (_G, "goodFlexibility", "noEquipmentNeeded"),
        ),
    ),
    ComparisonRow(
        "diet",
        "diet",
        "daily-life",
        [ValueCategory.QUALITY, ValueCategory.COMFORT],
        _cells(
            (_E, "fewRestrictions", "nearNormalDiet"),
            (_M, "moderateRestrictions", "fluidAndPotassiumLimits"),
            (_G, "lessStrict", "moreFlexibility"),
            (_G, "managedDiet", "tailoredToSymptoms"),
        ),
    ),
    ComparisonRow(
        "surgery",
        "surgery",
        "practical",
        [ValueCategory.COMFORT],
        _cells(
            (_M, "majorSurgery", "transplantOperationRequired"),
            (_M, "minorSurgery", "fistulaOrGraftCreation"),
            (_G, "minorProcedure", "pdCatheterInsertion"),
            (_E, "noneRequired", "noSurgicalProcedures"),
        ),
    ),
    ComparisonRow(
        "support-needed",
        "supportNeeded",
        "practical",
        [ValueCategory.INDEPENDENCE],
        _cells(
            (_M, "initialSupport", "duringRecoveryPeriod"),
            (_E, "noneNeeded", "professionalStaffProvideCare"),
            (_G, "minimal", "canDoIndependently"),
            (_V, "varies", "dependsOnSymptoms"),
        ),
    ),
    ComparisonRow(
        "flexibility",
        "scheduleFlexibility",
        "practical",
        [ValueCategory.FLEXIBILITY, ValueCategory.INDEPENDENCE],
        _cells(
            (_E, "high", "normalDailyLifePossible"),
            (_C, "low", "fixedHospitalSlots"),
            (_E, "high", "chooseYourSchedule"),
            (_E, "high", "noFixedSchedule"),
        ),
    ),
    ComparisonRow(
        "training",
        "trainingRequired",
        "practical",
        [ValueCategory.INDEPENDENCE],
        _cells(
            (_G, "medicationTraining", "learningYourNewRoutine"),
            (_E, "noneRequired", "staffDoEverything"),
            (_M, "oneToTwoWeeksTraining", "learnTheTechnique"),
            (_G, "symptomManagement", "medicationGuidance"),
        ),
    ),
    ComparisonRow(
        "survival",
        "survivalRates",
        "health",
        [ValueCategory.LONGEVITY],
        _cells(
            (_E, "bestOutcomes", "forSuitableCandidates"),
            (_G, "good", "wellEstablishedTreatment"),
            (_G, "good", "similarToHaemodialysis"),
            (_V, "qualityFocused", "comfortOverLongevity"),
        ),
    ),
    ComparisonRow(
        "quality-of-life",
        "qualityOfLife",
        "health",
        [ValueCategory.QUALITY, ValueCategory.COMFORT],
        _cells(
            (_E, "excellent", "nearNormalLifePossible"),
            (_M, "moderate", "treatmentAffectsDailyRoutine"),
            (_G, "good", "moreIndependence"),
            (_G, "focusOnComfort", "symptomManagementPriority"),
        ),
    ),
    ComparisonRow(
        "energy-levels",
        "energyLevels",
        "health",
        [ValueCategory.QUALITY],
        _cells(
            (_E, "oftenExcellent", "energyRestored"),
            (_M, "variable", "fatigueAfterSessions"),
            (_G, "generallyGood", "steadyEnergyLevels"),
            (_V, "varies", "managedWithSupport"),
        ),
    ),
]


def rows_in_category(category_id: str) -> list[ComparisonRow]:
    return [r for r in COMPARISON_ROWS if r.category_id == category_id]
