"""
Purpose: the four kidney treatment options and the quick comparison matrix.

All visible text is stored as translation keys; the UI resolves them through
the Translator so every language shares one table.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ..models import TreatmentType


@dataclass(frozen=True)
class TreatmentInfo:
    id: TreatmentType
    slug: str
    learn_more_url: Optional[str] = None

    @property
    def title_key(self) -> str:
        return f"treatments.types.{self.slug}.title"

    @property
    def short_description_key(self) -> str:
        return f"treatments.types.{self.slug}.shortDescription"

    @property
    def description_key(self) -> str:
        return f"treatments.types.{self.slug}.description"

    @property
    def benefits_keys(self) -> list[str]:
        return [f"treatments.types.{self.slug}.benefits.{i}" for i in range(4)]

    @property
    def considerations_keys(self) -> list[str]:
        return [f"treatments.types.{self.slug}.considerations.{i}" for i in range(4)]


TREATMENTS: list[TreatmentInfo] = [
    TreatmentInfo(
        TreatmentType.KIDNEY_TRANSPLANT,
        "transplant",
        "https://www.nhs.uk/conditions/kidney-transplant/",
    ),
    TreatmentInfo(
        TreatmentType.HEMODIALYSIS,
        "hemodialysis",
        "https://www.nhs.uk/conditions/dialysis/how-it-is-performed/",
    ),
    TreatmentInfo(
        TreatmentType.PERITONEAL_DIALYSIS,
        "peritonealDialysis",
        "https://www.nhs.uk/conditions/dialysis/how-it-is-performed/",
    ),
    TreatmentInfo(
        TreatmentType.CONSERVATIVE_CARE,
        "conservative",
        "https://www.nhs.uk/conditions/kidney-disease/",
    ),
]


def get_treatment_by_id(treatment_id) -> Optional[TreatmentInfo]:
    try:
        wanted = TreatmentType(treatment_id)
    except ValueError:
        return None
    return next((t for t in TREATMENTS if t.id == wanted), None)


def get_all_treatments() -> list[TreatmentInfo]:
    return list(TREATMENTS)


@dataclass(frozen=True)
class ComparisonItem:
    label_key: str
    values: dict[TreatmentType, str]


@dataclass(frozen=True)
class ComparisonCategory:
    id: str
    title_key: str
    items: list[ComparisonItem]


def _values(transplant: str, hd: str, pd: str, conservative: str) -> dict:
    return {
        TreatmentType.KIDNEY_TRANSPLANT: f"comparison.values.{transplant}",
        TreatmentType.HEMODIALYSIS: f"comparison.values.{hd}",
        TreatmentType.PERITONEAL_DIALYSIS: f"comparison.values.{pd}",
        TreatmentType.CONSERVATIVE_CARE: f"comparison.values.{conservative}",
    }


COMPARISON_CATEGORIES: list[ComparisonCategory] = [
    ComparisonCategory(
        "lifestyle",
        "comparison.categories.lifestyle",
        [
            ComparisonItem(
                "comparison.items.scheduleFlexibility",
                _values("high", "low", "medium", "high"),
            ),
            ComparisonItem(
                "comparison.items.travelAbility",
                _values("high", "limited", "medium", "varies"),
            ),
            ComparisonItem(
                "comparison.items.dietRestrictions",
                _values("fewer", "more", "moderate", "moderate"),
            ),
        ],
    ),
    ComparisonCategory(
        "medical",
        "comparison.categories.medical",
        [
            ComparisonItem(
                "comparison.items.hospitalVisits",
                _values("periodic", "threePerWeek", "monthly", "asNeeded"),
            ),
            ComparisonItem(
                "comparison.items.surgeryRequired",
                _values("major", "minor", "minor", "none"),
            ),
            ComparisonItem(
                "comparison.items.medications",
                _values("lifelong", "several", "several", "symptomBased"),
            ),
        ],
    ),
]
