"""
Purpose: the "what matters to you" statements users rate from 1 to 5.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from ..models import ValueRating

PRIORITY_THRESHOLD = 4


class StatementCategory(str, Enum):
    INDEPENDENCE = "independence"
    HEALTH = "health"
    LIFESTYLE = "lifestyle"
    SOCIAL = "social"
    PRACTICAL = "practical"


@dataclass(frozen=True)
class ValueStatement:
    id: str
    category: StatementCategory

    @property
    def text_key(self) -> str:
        return f"values.statements.{self.id}"


VALUE_STATEMENTS: list[ValueStatement] = [
    ValueStatement("travel", StatementCategory.LIFESTYLE),
    ValueStatement("hospitalTime", StatementCategory.PRACTICAL),
    ValueStatement("needles", StatementCategory.HEALTH),
    ValueStatement("independence", StatementCategory.INDEPENDENCE),
    ValueStatement("familyBurden", StatementCategory.SOCIAL),
    ValueStatement("longevity", StatementCategory.HEALTH),
    ValueStatement("qualityOfLife", StatementCategory.HEALTH),
    ValueStatement("homeTreatment", StatementCategory.PRACTICAL),
    ValueStatement("workActivities", StatementCategory.LIFESTYLE),
    ValueStatement("professionalCare", StatementCategory.PRACTICAL),
]

NOT_RATED = 0
NOT_RATED_LABEL_KEY = "values.ratings.notRated"

RATING_LABEL_KEYS: dict[int, str] = {
    1: "values.ratings.notImportant",
    2: "values.ratings.slightlyImportant",
    3: "values.ratings.moderatelyImportant",
    4: "values.ratings.important",
    5: "values.ratings.veryImportant",
}


def get_statement_by_id(statement_id: str) -> ValueStatement | None:
    return next((s for s in VALUE_STATEMENTS if s.id == statement_id), None)


def top_priorities(ratings: Iterable[ValueRating], limit: int = 3) -> list[ValueRating]:
    """Ratings of 4 or more, highest first; equal ratings keep their order."""
    high = [r for r in ratings if r.rating >= PRIORITY_THRESHOLD]
    return sorted(high, key=lambda r: r.rating, reverse=True)[:limit]


def ratings_from_form(drafts: dict[str, Optional[int]]) -> list[ValueRating]:
    """Ratings the user actually chose; NOT_RATED and None are left out."""
    return [
        ValueRating(statement_id, int(rating))
        for statement_id, rating in drafts.items()
        if rating not in (None, NOT_RATED)
    ]
