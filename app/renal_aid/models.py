"""
Canonical data shapes, shared truth for typing/validation between layers.

Typical contents:
- Session (language, role, journey stage, answers, ratings, viewed treatments,
  chat history, expiry timestamps).
- QuestionnaireAnswer, ValueRating, ChatMessage, JournalEntry: keyed records
  upserted or appended into the session.
- LLMSettings (model, temperature, top_p, max_tokens).
- Enumerations used across the data tables.

Testing: Trivial; mostly types. ValueRating validates its range.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Union
from enum import Enum
import uuid


class SupportedLanguage(str, Enum):
    EN = "en"
    HI = "hi"
    PA = "pa"
    BN = "bn"
    UR = "ur"
    GU = "gu"
    TA = "ta"


class UserRole(str, Enum):
    PATIENT = "patient"
    CARER = "carer"


class CarerRelationship(str, Enum):
    SPOUSE = "spouse"
    CHILD = "child"
    PARENT = "parent"
    SIBLING = "sibling"
    FRIEND = "friend"
    OTHER = "other"


class JourneyStage(str, Enum):
    NEWLY_DIAGNOSED = "newly-diagnosed"
    MONITORING = "monitoring"
    PREPARING = "preparing"
    ON_DIALYSIS = "on-dialysis"
    TRANSPLANT_WAITING = "transplant-waiting"
    POST_TRANSPLANT = "post-transplant"
    SUPPORTING_SOMEONE = "supporting-someone"


class TreatmentType(str, Enum):
    KIDNEY_TRANSPLANT = "kidney-transplant"
    HEMODIALYSIS = "hemodialysis"
    PERITONEAL_DIALYSIS = "peritoneal-dialysis"
    CONSERVATIVE_CARE = "conservative-care"


class GoalTreatmentType(str, Enum):
    TRANSPLANT_LIVING = "transplant-living"
    TRANSPLANT_DECEASED = "transplant-deceased"
    HOME_HD = "home-hd"
    UNIT_HD = "unit-hd"
    APD = "apd"
    CAPD = "capd"
    CONSERVATIVE = "conservative"


class GoalCategory(str, Enum):
    WORK = "work"
    FAMILY = "family"
    TRAVEL = "travel"
    HOBBIES = "hobbies"
    INDEPENDENCE = "independence"
    RELIGIOUS = "religious"


class ValueCategory(str, Enum):
    INDEPENDENCE = "independence"
    FLEXIBILITY = "flexibility"
    TIME = "time"
    COMFORT = "comfort"
    LONGEVITY = "longevity"
    QUALITY = "quality"


class RatingLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    CHALLENGING = "challenging"
    VARIES = "varies"


class JournalCategory(str, Enum):
    THOUGHT = "thought"
    CONCERN = "concern"
    QUESTION = "question"
    POSITIVE = "positive"


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


AnswerValue = Union[str, int, float, list[str]]

MIN_RATING = 1
MAX_RATING = 5


@dataclass
class QuestionnaireAnswer:
    question_id: str
    value: AnswerValue
    timestamp: float = 0.0


@dataclass
class ValueRating:
    statement_id: str
    rating: int

    def __post_init__(self) -> None:
        if isinstance(self.rating, bool) or not isinstance(self.rating, int):
            raise ValueError(f"Rating must be an integer, got {self.rating!r}")
        if not MIN_RATING <= self.rating <= MAX_RATING:
            raise ValueError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}, "
                f"got {self.rating}"
            )


@dataclass
class ChatMessage:
    role: ChatRole
    content: str
    timestamp: float = 0.0
    id: str = field(default_factory=lambda: f"msg_{uuid.uuid4().hex[:12]}")
    quick_replies: list[str] = field(default_factory=list)

    def as_prompt(self) -> dict[str, str]:
        """Role/content dict as expected by chat completion APIs."""
        return {"role": ChatRole(self.role).value, "content": self.content}


@dataclass
class JournalEntry:
    text: str
    category: JournalCategory = JournalCategory.THOUGHT
    treatment: Optional[TreatmentType] = None
    timestamp: float = 0.0
    is_resolved: bool = False
    id: str = field(default_factory=lambda: f"entry_{uuid.uuid4().hex[:12]}")


@dataclass
class Session:
    language: SupportedLanguage
    created_at: float
    expires_at: float
    last_activity_at: float
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    user_role: UserRole = UserRole.PATIENT
    carer_relationship: Optional[CarerRelationship] = None
    journey_stage: Optional[JourneyStage] = None
    questionnaire_answers: list[QuestionnaireAnswer] = field(default_factory=list)
    value_ratings: list[ValueRating] = field(default_factory=list)
    viewed_treatments: list[TreatmentType] = field(default_factory=list)
    selected_goals: list[str] = field(default_factory=list)
    chat_history: list[ChatMessage] = field(default_factory=list)
    journal_entries: list[JournalEntry] = field(default_factory=list)

    def answer_for(self, question_id: str) -> Optional[QuestionnaireAnswer]:
        return next(
            (a for a in self.questionnaire_answers if a.question_id == question_id),
            None,
        )

    def rating_for(self, statement_id: str) -> Optional[int]:
        return next(
            (r.rating for r in self.value_ratings if r.statement_id == statement_id),
            None,
        )


@dataclass
class SessionTimer:
    remaining_seconds: float
    minutes: int
    seconds: int
    is_warning: bool
    formatted: str


@dataclass
class LLMSettings:
    model: str
    temperature: float = 0.7
    top_p: float = 1.0
    max_tokens: int = 1000


@dataclass
class SessionSummary:
    session_id: str
    language: SupportedLanguage
    generated_at: float
    user_role: UserRole = UserRole.PATIENT
    journey_stage: Optional[JourneyStage] = None
    top_values: list[ValueRating] = field(default_factory=list)
    questionnaire_answers: list[QuestionnaireAnswer] = field(default_factory=list)
    viewed_treatments: list[TreatmentType] = field(default_factory=list)
    selected_goals: list[str] = field(default_factory=list)
    goal_matches: list[dict] = field(default_factory=list)
    value_match_scores: dict[TreatmentType, int] = field(default_factory=dict)
    questions: list[dict] = field(default_factory=list)
    journal_entries: list[JournalEntry] = field(default_factory=list)
    readiness_score: int = 0
    questions_asked: int = 0
