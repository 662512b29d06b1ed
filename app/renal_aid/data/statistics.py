"""
Purpose: UK renal replacement therapy statistics used on the statistics tab.

Figures are population averages taken from the UK Renal Registry 2023 annual
report, NHS Blood and Transplant activity reports and NICE guidance. They are
shown as context, never as a prediction for an individual.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AgeGroup(str, Enum):
    AGE_18_44 = "18-44"
    AGE_45_64 = "45-64"
    AGE_65_74 = "65-74"
    AGE_75_PLUS = "75+"


class EthnicityGroup(str, Enum):
    WHITE = "white"
    SOUTH_ASIAN = "south-asian"
    BLACK = "black"
    OTHER = "other"


class PrimaryDisease(str, Enum):
    DIABETES = "diabetes"
    GLOMERULONEPHRITIS = "glomerulonephritis"
    POLYCYSTIC = "polycystic-kidney-disease"
    HYPERTENSION = "hypertension-renovascular"


class Modality(str, Enum):
    TRANSPLANT = "transplant"
    HAEMODIALYSIS = "haemodialysis"
    PERITONEAL_DIALYSIS = "peritoneal-dialysis"
    CONSERVATIVE = "conservative"


@dataclass(frozen=True)
class ModalityBreakdown:
    transplant: int
    haemodialysis: int
    peritoneal_dialysis: int
    conservative: Optional[int] = None

    def as_dict(self) -> dict[str, int]:
        data = {
            Modality.TRANSPLANT.value: self.transplant,
            Modality.HAEMODIALYSIS.value: self.haemodialysis,
            Modality.PERITONEAL_DIALYSIS.value: self.peritoneal_dialysis,
        }
        if self.conservative is not None:
            data[Modality.CONSERVATIVE.value] = self.conservative
        return data


@dataclass(frozen=True)
class WaitingListData:
    total_on_list: int
    transplants_per_year: int
    median_wait_years: str
    living_donor_per_year: int
    living_donor_percentage: int
    five_year_graft_survival_living: int
    five_year_graft_survival_deceased: int


@dataclass(frozen=True)
class QualityOfLifeData:
    modality: Modality
    overall_score: float
    autonomy_score: float
    treatment_burden: float
    description_key: str


@dataclass(frozen=True)
class SurvivalData:
    modality: Modality
    context_key: str
    five_year_survival: Optional[str] = None
    median_survival: Optional[str] = None


@dataclass(frozen=True)
class DataSource:
    id: str
    year: str

    @property
    def name_key(self) -> str:
        return f"statistics.sources.{self.id}.name"

    @property
    def description_key(self) -> str:
        return f"statistics.sources.{self.id}.description"


TOTAL_PATIENTS_ON_RRT = 71000

OVERALL_BREAKDOWN = ModalityBreakdown(transplant=60, haemodialysis=33, peritoneal_dialysis=7)

OVERALL_ABSOLUTE_NUMBERS = {
    Modality.TRANSPLANT.value: 42600,
    Modality.HAEMODIALYSIS.value: 23400,
    Modality.PERITONEAL_DIALYSIS.value: 5000,
}

INCIDENT_DATA = {
    "new_patients_per_year": 8000,
    "breakdown": {
        "haemodialysis": 70,
        "peritoneal-dialysis": 18,
        "pre-emptive-transplant": 12,
    },
    "conservative_management_rate": "15-20",
}

STATS_BY_AGE: dict[AgeGroup, ModalityBreakdown] = {
    AgeGroup.AGE_18_44: ModalityBreakdown(75, 20, 5),
    AgeGroup.AGE_45_64: ModalityBreakdown(65, 28, 7),
    AgeGroup.AGE_65_74: ModalityBreakdown(45, 47, 8),
    AgeGroup.AGE_75_PLUS: ModalityBreakdown(15, 75, 10),
}

STATS_BY_ETHNICITY: dict[EthnicityGroup, ModalityBreakdown] = {
    EthnicityGroup.WHITE: ModalityBreakdown(62, 31, 7),
    EthnicityGroup.SOUTH_ASIAN: ModalityBreakdown(55, 38, 7),
    EthnicityGroup.BLACK: ModalityBreakdown(48, 45, 7),
    EthnicityGroup.OTHER: ModalityBreakdown(52, 40, 8),
}

STATS_BY_DISEASE: dict[PrimaryDisease, ModalityBreakdown] = {
    PrimaryDisease.DIABETES: ModalityBreakdown(45, 45, 10),
    PrimaryDisease.GLOMERULONEPHRITIS: ModalityBreakdown(70, 23, 7),
    PrimaryDisease.POLYCYSTIC: ModalityBreakdown(75, 20, 5),
    PrimaryDisease.HYPERTENSION: ModalityBreakdown(40, 50, 10),
}

WAITING_LIST_DATA = WaitingListData(
    total_on_list=6500,
    transplants_per_year=3500,
    median_wait_years="2-3",
    living_donor_per_year=1000,
    living_donor_percentage=30,
    five_year_graft_survival_living=90,
    five_year_graft_survival_deceased=85,
)

# Scores out of 10; lower treatment burden is better.
QUALITY_OF_LIFE_DATA: list[QualityOfLifeData] = [
    QualityOfLifeData(Modality.TRANSPLANT, 8.5, 9.0, 2.5, "statistics.qol.transplant"),
    QualityOfLifeData(
        Modality.PERITONEAL_DIALYSIS, 7.0, 7.5, 5.5, "statistics.qol.peritonealDialysis"
    ),
    QualityOfLifeData(Modality.HAEMODIALYSIS, 6.0, 5.0, 7.5, "statistics.qol.haemodialysis"),
    QualityOfLifeData(Modality.CONSERVATIVE, 6.5, 7.0, 3.0, "statistics.qol.conservative"),
]

SURVIVAL_DATA: list[SurvivalData] = [
    SurvivalData(
        Modality.TRANSPLANT,
        "statistics.survival.transplantContext",
        five_year_survival="85-90",
    ),
    SurvivalData(
        Modality.HAEMODIALYSIS, "statistics.survival.hdContext", five_year_survival="40-50"
    ),
    SurvivalData(
        Modality.PERITONEAL_DIALYSIS,
        "statistics.survival.pdContext",
        five_year_survival="40-50",
    ),
    SurvivalData(
        Modality.CONSERVATIVE,
        "statistics.survival.conservativeContext",
        median_survival="12-24 months",
    ),
]

DATA_SOURCES: list[DataSource] = [
    DataSource("ukrr", "2023"),
    DataSource("nhsbt", "2023"),
    DataSource("nice", "2023"),
]
