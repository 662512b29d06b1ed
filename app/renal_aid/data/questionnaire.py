"""
Purpose: questions for the "about you" questionnaire.

Each option's label key is derived from the question key and the option key,
e.g. questionnaire.questions.ageRange.options.under50.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..models import QuestionnaireAnswer


class QuestionType(str, Enum):
    SINGLE_CHOICE = "single-choice"
    MULTIPLE_CHOICE = "multiple-choice"


@dataclass(frozen=True)
class QuestionOption:
    id: str
    label_key: str

    @property
    def value(self) -> str:
        return self.id


@dataclass(frozen=True)
class Question:
    id: str
    key: str
    type: QuestionType
    required: bool
    options: list[QuestionOption] = field(default_factory=list)
    has_help_text: bool = False

    @property
    def title_key(self) -> str:
        return f"questionnaire.questions.{self.key}.title"

    @property
    def description_key(self) -> str:
        return f"questionnaire.questions.{self.key}.description"

    @property
    def help_text_key(self) -> Optional[str]:
        if not self.has_help_text:
            return None
        return f"questionnaire.questions.{self.key}.helpText"

    def option_values(self) -> list[str]:
        return [o.value for o in self.options]


def _question(qid, key, qtype, required, options, has_help_text=False) -> Question:
    return Question(
        id=qid,
        key=key,
        type=qtype,
        required=required,
        has_help_text=has_help_text,
        options=[
            QuestionOption(oid, f"questionnaire.questions.{key}.options.{okey}")
            for oid, okey in options
        ],
    )


QUESTIONNAIRE_QUESTIONS: list[Question] = [
    _question(
        "age-range",
        "ageRange",
        QuestionType.SINGLE_CHOICE,
        True,
        [
            ("under-50", "under50"),
            ("50-65", "50to65"),
            ("65-75", "65to75"),
            ("over-75", "over75"),
        ],
    ),
    _question(
        "living-situation",
        "livingSituation",
        QuestionType.SINGLE_CHOICE,
        True,
        [
            ("alone", "alone"),
            ("with-partner", "withPartner"),
            ("with-family", "withFamily"),
            ("care-facility", "careFacility"),
        ],
    ),
    _question(
        "work-status",
        "workStatus",
        QuestionType.SINGLE_CHOICE,
        True,
        [
            ("working-full", "workingFull"),
            ("working-part", "workingPart"),
            ("retired", "retired"),
            ("unable", "unable"),
        ],
    ),
    _question(
        "support-available",
        "supportAvailable",
        QuestionType.SINGLE_CHOICE,
        True,
        [
            ("yes-regular", "yesRegular"),
            ("yes-sometimes", "yesSometimes"),
            ("limited", "limited"),
            ("no", "no"),
        ],
    ),
    _question(
        "important-factors",
        "importantFactors",
        QuestionType.MULTIPLE_CHOICE,
        True,
        [
            ("independence", "independence"),
            ("travel", "travel"),
            ("family-time", "familyTime"),
            ("work-life", "workLife"),
            ("minimal-hospital", "minimalHospital"),
            ("best-outcomes", "bestOutcomes"),
        ],
        has_help_text=True,
    ),
    _question(
        "health-concerns",
        "healthConcerns",
        QuestionType.MULTIPLE_CHOICE,
        False,
        [
            ("diabetes", "diabetes"),
            ("heart-disease", "heartDisease"),
            ("mobility", "mobility"),
            ("vision", "vision"),
            ("none", "none"),
        ],
    ),
]


def get_question_by_id(question_id: str) -> Optional[Question]:
    return next((q for q in QUESTIONNAIRE_QUESTIONS if q.id == question_id), None)


def get_total_questions() -> int:
    return len(QUESTIONNAIRE_QUESTIONS)


def calculate_progress(current_index: int) -> int:
    """Percent complete when the user is on question `current_index` (0-based)."""
    return round((current_index + 1) / len(QUESTIONNAIRE_QUESTIONS) * 100)


def validate_answer(question: Question, value) -> str | list[str]:
    """
    Check a raw widget value against the question and return the normalised
    answer. Raises ValueError for missing required answers or unknown options.
    """
    allowed = set(question.option_values())

    if question.type == QuestionType.SINGLE_CHOICE:
        if value is None or value == "":
            raise ValueError("Please choose an answer to continue.")
        if value not in allowed:
            raise ValueError(f"Unknown option {value!r} for {question.id}")
        return value

    values = [value] if isinstance(value, str) else list(value or [])
    if question.required and not values:
        raise ValueError("Please choose at least one answer to continue.")
    unknown = [v for v in values if v not in allowed]
    if unknown:
        raise ValueError(f"Unknown options {unknown!r} for {question.id}")
    return list(dict.fromkeys(values))


def collect_answers(drafts: dict) -> tuple[list[QuestionnaireAnswer], list[str]]:
    """
    Turn the raw form values (question id -> widget value) into answers.

    Blank optional questions are skipped. Blank required questions and unknown
    options are returned as problem ids; the answers that did validate are
    still returned so partial progress can be saved.
    """
    answers: list[QuestionnaireAnswer] = []
    problems: list[str] = []
    for question in QUESTIONNAIRE_QUESTIONS:
        value = drafts.get(question.id)
        if not question.required and value in (None, "", []):
            continue
        try:
            answers.append(QuestionnaireAnswer(question.id, validate_answer(question, value)))
        except ValueError:
            problems.append(question.id)
    return answers, problems
