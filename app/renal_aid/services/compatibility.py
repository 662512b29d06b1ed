"""
Purpose: scoring that ties the user's goals and values to treatments.

Two independent scores:
- Goal compatibility: average fit (1..5) of the selected life goals with a
  treatment sub-type, as a percentage.
- Value match: comparison-table levels weighted by how strongly the user
  rated the value statements related to each row, as a percentage.

Both are pure functions over the static tables in renal_aid.data.

Testing: plain unit tests; no fakes needed.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..data.comparison import (
    COMPARE_TREATMENTS,
    COMPARISON_ROWS,
    LEVEL_SCORES,
    MAX_LEVEL_SCORE,
    VALUE_TO_CATEGORIES,
    ComparisonRow,
)
from ..data.goals import COMPATIBILITY_SCORES, GOAL_CATEGORIES, GOAL_TREATMENTS, LIFE_GOALS
from ..models import GoalTreatmentType, TreatmentType, ValueCategory, ValueRating

MAX_GOAL_SCORE = 5
STRENGTH_THRESHOLD = 4
CHALLENGE_THRESHOLD = 2
MAX_STRENGTHS = 3
MAX_CHALLENGES = 2
RECOMMENDATION_THRESHOLD = 70
HIGHLIGHT_THRESHOLD = 4


@dataclass
class TreatmentMatch:
    treatment: GoalTreatmentType
    score: int
    strengths: list[str] = field(default_factory=list)
    challenges: list[str] = field(default_factory=list)
    is_best_match: bool = False


def _selected_scores(goal_ids: Iterable[str]):
    selected = set(goal_ids)
    # Table order, not selection order.
    return [cs for cs in COMPATIBILITY_SCORES if cs.goal_id in selected]


def calculate_compatibility(goal_ids: Iterable[str], treatment: GoalTreatmentType) -> int:
    relevant = _selected_scores(goal_ids)
    if not relevant:
        return 0
    treatment = GoalTreatmentType(treatment)
    total = sum(cs.scores[treatment] for cs in relevant)
    return round(total / (len(relevant) * MAX_GOAL_SCORE) * 100)


def get_top_explanations(
    goal_ids: Iterable[str], treatment: GoalTreatmentType
) -> tuple[list[str], list[str]]:
    """(strengths, challenges) explanation keys for the selected goals."""
    treatment = GoalTreatmentType(treatment)
    relevant = _selected_scores(goal_ids)
    strengths = [
        cs.explanation_keys[treatment]
        for cs in relevant
        if cs.scores[treatment] >= STRENGTH_THRESHOLD
    ]
    challenges = [
        cs.explanation_keys[treatment]
        for cs in relevant
        if cs.scores[treatment] <= CHALLENGE_THRESHOLD
    ]
    return strengths[:MAX_STRENGTHS], challenges[:MAX_CHALLENGES]


def get_discussion_prompts(goal_ids: Iterable[str]) -> list[str]:
    """One prompt per goal category touched, in category order, then a general one."""
    selected = set(goal_ids)
    categories = {g.category for g in LIFE_GOALS if g.id in selected}
    prompts = [
        f"lifeGoals.discussion.{c.id.value}" for c in GOAL_CATEGORIES if c.id in categories
    ]
    prompts.append("lifeGoals.discussion.general")
    return prompts


def get_treatment_matches(goal_ids: Iterable[str]) -> list[TreatmentMatch]:
    goal_ids = list(goal_ids)
    matches = []
    for treatment in GOAL_TREATMENTS:
        strengths, challenges = get_top_explanations(goal_ids, treatment)
        matches.append(
            TreatmentMatch(
                treatment=treatment,
                score=calculate_compatibility(goal_ids, treatment),
                strengths=strengths,
                challenges=challenges,
            )
        )
    matches.sort(key=lambda m: m.score, reverse=True)
    if matches and matches[0].score > 0:
        matches[0].is_best_match = True
    return matches


def compatibility_label_key(score: int) -> str:
    if score >= 75:
        return "lifeGoals.results.compatibility.high"
    if score >= 55:
        return "lifeGoals.results.compatibility.good"
    if score >= 35:
        return "lifeGoals.results.compatibility.moderate"
    return "lifeGoals.results.compatibility.low"


def _ratings_map(ratings: Iterable[ValueRating]) -> dict[str, int]:
    return {r.statement_id: r.rating for r in ratings}


def _row_matches(row: ComparisonRow, categories: Iterable[ValueCategory]) -> bool:
    wanted = set(categories)
    return any(v in wanted for v in row.related_values)


def calculate_value_match_scores(
    ratings: Iterable[ValueRating],
) -> dict[TreatmentType, int]:
    """
    Percent match per main treatment. Every (rating, row) pair whose value
    categories overlap adds level_score * rating, out of 5 * rating.
    """
    values = _ratings_map(ratings)
    scores = {t: 0 for t in COMPARE_TREATMENTS}
    if not values:
        return scores

    for treatment in COMPARE_TREATMENTS:
        total = 0
        maximum = 0
        for statement_id, rating in values.items():
            categories = VALUE_TO_CATEGORIES.get(statement_id, [])
            for row in COMPARISON_ROWS:
                if _row_matches(row, categories):
                    total += LEVEL_SCORES[row.values[treatment].level] * rating
                    maximum += MAX_LEVEL_SCORE * rating
        scores[treatment] = round(total / maximum * 100) if maximum else 0
    return scores


def recommended_treatment(scores: dict[TreatmentType, int]) -> Optional[TreatmentType]:
    """Highest scoring treatment at or above 70; ties keep the earlier one."""
    best = None
    best_score = 0
    for treatment, score in scores.items():
        if score > best_score and score >= RECOMMENDATION_THRESHOLD:
            best = treatment
            best_score = score
    return best


def match_badge_key(score: int) -> Optional[str]:
    if score < RECOMMENDATION_THRESHOLD:
        return None
    if score >= 90:
        return "compare.badges.bestMatch"
    return "compare.badges.goodMatch"


def is_row_highlighted(row: ComparisonRow, ratings: Iterable[ValueRating]) -> bool:
    for statement_id, rating in _ratings_map(ratings).items():
        if rating < HIGHLIGHT_THRESHOLD:
            continue
        if _row_matches(row, VALUE_TO_CATEGORIES.get(statement_id, [])):
            return True
    return False


def filter_rows(
    categories: Iterable[ValueCategory], rows: Optional[list[ComparisonRow]] = None
) -> list[ComparisonRow]:
    """Rows relevant to any selected value filter; no filter keeps every row."""
    rows = COMPARISON_ROWS if rows is None else rows
    wanted = set(categories)
    if not wanted:
        return list(rows)
    return [r for r in rows if _row_matches(r, wanted)]


def toggle_visible_treatment(
    visible: Iterable[TreatmentType], treatment: TreatmentType
) -> list[TreatmentType]:
    """Show/hide a comparison column; the last visible column cannot be hidden."""
    current = [t for t in COMPARE_TREATMENTS if t in set(visible)]
    if treatment in current:
        if len(current) > 1:
            current.remove(treatment)
        return current
    wanted = set(current) | {treatment}
    return [t for t in COMPARE_TREATMENTS if t in wanted]
