"""
Purpose: help the user get ready for the conversation with their kidney team.

- generate_questions(session): clinic questions built from the journey stage,
  the treatments looked at and the values rated highly.
- calculate_readiness(session): weighted checklist of how much of the aid
  has been explored, with a level band and an encouragement message key.
- family_prompts(role_id, category): conversation starters for the people
  around the user.

Everything returns translation keys; the UI resolves them.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ..data.family import FAMILY_ROLES, DiscussionPrompt, PromptCategory, get_role
from ..models import JourneyStage, Session, TreatmentType

MAX_VALUE_QUESTIONS = 3
VALUE_QUESTION_THRESHOLD = 4


@dataclass
class GeneratedQuestion:
    id: str
    text_key: str
    category: str
    reason_key: Optional[str] = None
    is_selected: bool = False
    is_custom: bool = False
    text: Optional[str] = None


QUESTION_CATEGORIES = ["general", "treatment", "lifestyle", "support"]

_GENERAL = [
    ("gen-1", "suitability", "general", "everyoneAsks"),
    ("gen-2", "timeline", "general", "planAhead"),
    ("gen-3", "support", "support", "knowYourTeam"),
]

_STAGE: dict[JourneyStage, tuple[str, list[tuple[str, str, str]]]] = {
    JourneyStage.NEWLY_DIAGNOSED: (
        "newlyDiagnosed",
        [("tests", "general", "understandDiagnosis"), ("next", "general", "planAhead")],
    ),
    JourneyStage.MONITORING: (
        "monitoring",
        [("slowDown", "lifestyle", "preserveFunction"), ("frequency", "general", "stayInformed")],
    ),
    JourneyStage.PREPARING: (
        "preparing",
        [("timing", "treatment", "bePrepared"), ("comparison", "treatment", "informedChoice")],
    ),
    JourneyStage.ON_DIALYSIS: (
        "onDialysis",
        [("optimizing", "treatment", "optimizeOutcome"), ("changes", "treatment", "flexibility")],
    ),
    JourneyStage.TRANSPLANT_WAITING: (
        "transplantWaiting",
        [("waitTime", "treatment", "planAhead"), ("preparation", "lifestyle", "optimizeOutcome")],
    ),
    JourneyStage.POST_TRANSPLANT: (
        "postTransplant",
        [("care", "treatment", "maintainHealth"), ("lifestyle", "lifestyle", "qualityOfLife")],
    ),
    JourneyStage.SUPPORTING_SOMEONE: (
        "supporting",
        [("helpHow", "support", "supportEffectively"), ("carerSupport", "support", "lookAfterYourself")],
    ),
}

_TREATMENT: dict[TreatmentType, tuple[str, list[tuple[str, str]]]] = {
    TreatmentType.KIDNEY_TRANSPLANT: (
        "transplant",
        [("eligibility", "treatment"), ("livingDonor", "treatment"), ("recovery", "lifestyle")],
    ),
    TreatmentType.HEMODIALYSIS: (
        "hemodialysis",
        [("schedule", "treatment"), ("home", "lifestyle"), ("access", "treatment")],
    ),
    TreatmentType.PERITONEAL_DIALYSIS: (
        "peritoneal",
        [("suitable", "treatment"), ("training", "treatment"), ("lifestyle", "lifestyle")],
    ),
    TreatmentType.CONSERVATIVE_CARE: (
        "conservative",
        [("symptoms", "treatment"), ("support", "support"), ("planning", "support")],
    ),
}

# Statements without an entry here (needles, professionalCare) add no question.
_VALUE: dict[str, str] = {
    "travel": "lifestyle",
    "hospitalTime": "lifestyle",
    "independence": "lifestyle",
    "familyBurden": "support",
    "longevity": "treatment",
    "qualityOfLife": "lifestyle",
    "homeTreatment": "treatment",
    "workActivities": "lifestyle",
}


def generate_questions(session: Optional[Session]) -> list[GeneratedQuestion]:
    """
    General questions first (pre-selected), then the journey stage's
    questions (pre-selected), then three per viewed treatment in viewing
    order, then one per high-rated value statement.
    """
    questions = [
        GeneratedQuestion(
            id=qid,
            text_key=f"decision.questions.general.{key}",
            category=category,
            reason_key=f"decision.questions.reasons.{reason}",
            is_selected=True,
        )
        for qid, key, category, reason in _GENERAL
    ]
    if session is None:
        return questions

    if session.journey_stage in _STAGE:
        stage_key, items = _STAGE[session.journey_stage]
        for idx, (key, category, reason) in enumerate(items):
            questions.append(
                GeneratedQuestion(
                    id=f"stage-{idx}",
                    text_key=f"decision.questions.stage.{stage_key}.{key}",
                    category=category,
                    reason_key=f"decision.questions.reasons.{reason}",
                    is_selected=True,
                )
            )

    for treatment in session.viewed_treatments:
        if treatment not in _TREATMENT:
            continue
        treatment_key, items = _TREATMENT[treatment]
        for idx, (key, category) in enumerate(items):
            questions.append(
                GeneratedQuestion(
                    id=f"{TreatmentType(treatment).value}-{idx}",
                    text_key=f"decision.questions.treatment.{treatment_key}.{key}",
                    category=category,
                )
            )

    top = [r for r in session.value_ratings if r.rating >= VALUE_QUESTION_THRESHOLD]
    for rating in top[:MAX_VALUE_QUESTIONS]:
        category = _VALUE.get(rating.statement_id)
        if category is None:
            continue
        questions.append(
            GeneratedQuestion(
                id=f"value-{rating.statement_id}",
                text_key=f"decision.questions.values.{rating.statement_id}",
                category=category,
                reason_key="decision.questions.reasons.basedOnValues",
            )
        )
    return questions


def custom_question(text: str, now: float) -> GeneratedQuestion:
    """A question typed by the user; blank text is rejected."""
    text = (text or "").strip()
    if not text:
        raise ValueError("Please type a question first.")
    return GeneratedQuestion(
        id=f"custom-{int(now * 1000)}",
        text_key="",
        category="general",
        is_selected=True,
        is_custom=True,
        text=text,
    )


@dataclass
class ReadinessItem:
    id: str
    key: str
    weight: int
    is_complete: bool

    @property
    def label_key(self) -> str:
        return f"decision.readiness.checklist.{self.key}"

    @property
    def description_key(self) -> str:
        return f"decision.readiness.checklist.{self.key}Desc"


@dataclass
class ReadinessResult:
    score: int
    level: str
    items: list[ReadinessItem]

    @property
    def level_key(self) -> str:
        return f"decision.readiness.level.{self.level}"

    @property
    def encouragement_key(self) -> str:
        return f"decision.readiness.encouragement.{self.level}"


READINESS_LEVELS: list[tuple[str, int, int]] = [
    ("starting", 0, 25),
    ("exploring", 26, 50),
    ("preparing", 51, 75),
    ("ready", 76, 100),
]


def readiness_level(score: int) -> str:
    for name, low, high in READINESS_LEVELS:
        if low <= score <= high:
            return name
    return READINESS_LEVELS[0][0]


def calculate_readiness(session: Optional[Session]) -> ReadinessResult:
    viewed = len(session.viewed_treatments) if session else 0
    rated = len(session.value_ratings) if session else 0
    chatted = bool(session and session.chat_history)
    has_stage = bool(session and session.journey_stage)

    items = [
        ReadinessItem("treatments-explored", "treatmentsExplored", 25, viewed >= 2),
        ReadinessItem("all-treatments", "allTreatments", 15, viewed >= 4),
        ReadinessItem("values-completed", "valuesCompleted", 25, rated >= 5),
        ReadinessItem("comparison-viewed", "comparisonViewed", 15, viewed >= 2),
        ReadinessItem("questions-prepared", "questionsPrepared", 10, chatted),
        ReadinessItem("journey-identified", "journeyIdentified", 10, has_stage),
    ]
    score = sum(i.weight for i in items if i.is_complete)
    return ReadinessResult(score=score, level=readiness_level(score), items=items)


def family_prompts(
    role_id: Optional[str] = None, category: Optional[PromptCategory] = None
) -> list[DiscussionPrompt]:
    """Prompts for one role (or every role), optionally narrowed to a category."""
    if role_id is None:
        roles = FAMILY_ROLES
    else:
        role = get_role(role_id)
        if role is None:
            raise ValueError(f"Unknown family role: {role_id}")
        roles = [role]

    prompts = [p for r in roles for p in r.prompts]
    if category is not None:
        wanted = PromptCategory(category)
        prompts = [p for p in prompts if p.category == wanted]
    return prompts


def group_prompts_by_category(
    prompts: list[DiscussionPrompt],
) -> dict[PromptCategory, list[DiscussionPrompt]]:
    grouped: dict[PromptCategory, list[DiscussionPrompt]] = {}
    for p in prompts:
        grouped.setdefault(p.category, []).append(p)
    return grouped
