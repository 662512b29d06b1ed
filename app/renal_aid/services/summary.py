"""
Purpose: the printable / downloadable summary the user takes to clinic.

build_summary() snapshots the session into a SessionSummary (plain data, no
translation). render_summary_markdown() turns that snapshot into Markdown in
the active language.
"""

from __future__ import annotations
import time
from typing import Optional

from ..data.goals import TREATMENT_DISPLAY, get_goal_by_id
from ..data.journey import get_stage_info
from ..data.treatments import get_treatment_by_id
from ..data.values import RATING_LABEL_KEYS, get_statement_by_id
from ..i18n import Translator
from ..models import ChatRole, Session, SessionSummary, TreatmentType
from .compatibility import calculate_value_match_scores, get_treatment_matches
from .decision import GeneratedQuestion, calculate_readiness, generate_questions
from .journal import category_label_key

SUMMARY_TOP_VALUES = 5
SUMMARY_TOP_MATCHES = 3
SHORT_ID_LENGTH = 8


def build_summary(
    session: Session,
    now: Optional[float] = None,
    questions: Optional[list[GeneratedQuestion]] = None,
) -> SessionSummary:
    """
    `questions` is the user's current pick; by default the pre-selected
    generated questions are used.
    """
    now = time.time() if now is None else now
    top_values = sorted(session.value_ratings, key=lambda r: r.rating, reverse=True)

    goal_matches = []
    if session.selected_goals:
        for match in get_treatment_matches(session.selected_goals)[:SUMMARY_TOP_MATCHES]:
            goal_matches.append(
                {
                    "treatment": match.treatment,
                    "score": match.score,
                    "is_best_match": match.is_best_match,
                }
            )

    if questions is None:
        questions = [q for q in generate_questions(session) if q.is_selected]
    question_rows = [
        {"id": q.id, "text_key": q.text_key, "text": q.text, "category": q.category}
        for q in questions
    ]

    return SessionSummary(
        session_id=session.id,
        language=session.language,
        generated_at=now,
        user_role=session.user_role,
        journey_stage=session.journey_stage,
        top_values=top_values[:SUMMARY_TOP_VALUES],
        questionnaire_answers=list(session.questionnaire_answers),
        viewed_treatments=list(session.viewed_treatments),
        selected_goals=list(session.selected_goals),
        goal_matches=goal_matches,
        value_match_scores=calculate_value_match_scores(session.value_ratings)
        if session.value_ratings
        else {},
        questions=question_rows,
        journal_entries=list(session.journal_entries),
        readiness_score=calculate_readiness(session).score,
        questions_asked=sum(1 for m in session.chat_history if m.role == ChatRole.USER),
    )


def _date(ts: float) -> str:
    return time.strftime("%d/%m/%Y", time.localtime(ts))


def render_summary_markdown(summary: SessionSummary, t: Translator) -> str:
    lines: list[str] = [
        f"# {t('summary.printHeader.title', 'Your Kidney Treatment Summary')}",
        "",
        t("summary.printHeader.dateLabel", "Date: {{date}}", date=_date(summary.generated_at)),
        f"{t('summary.sessionId', 'Session ID')}: {summary.session_id[:SHORT_ID_LENGTH]}",
        "",
        f"## {t('summary.sections.journey', 'Your Journey Stage')}",
        "",
    ]
    stage = get_stage_info(summary.journey_stage) if summary.journey_stage else None
    lines.append(t(stage.title_key) if stage else t("summary.notSpecified", "Not specified"))

    lines += ["", f"## {t('summary.sections.priorities', 'Your Priorities')}", ""]
    if summary.top_values:
        for idx, rating in enumerate(summary.top_values, start=1):
            statement = get_statement_by_id(rating.statement_id)
            text = t(statement.text_key) if statement else rating.statement_id
            label = t(RATING_LABEL_KEYS[rating.rating])
            lines.append(f"{idx}. {text} ({label})")
    else:
        lines.append(t("summary.noValues", "You have not completed the values exercise yet."))

    lines += ["", f"## {t('summary.sections.viewed', 'Treatments Explored')}", ""]
    if summary.viewed_treatments:
        for treatment in summary.viewed_treatments:
            info = get_treatment_by_id(treatment)
            lines.append(f"- {t(info.title_key) if info else treatment}")
    else:
        lines.append(t("summary.noTreatments", "You have not explored any treatments yet."))

    if summary.value_match_scores:
        lines += ["", f"## {t('compare.valueMatch.title', 'How treatments match your values')}", ""]
        for treatment, score in summary.value_match_scores.items():
            info = get_treatment_by_id(TreatmentType(treatment))
            lines.append(f"- {t(info.title_key)}: {score}%")

    if summary.selected_goals:
        lines += ["", f"## {t('lifeGoals.title', 'Your Life Goals')}", ""]
        for goal_id in summary.selected_goals:
            goal = get_goal_by_id(goal_id)
            lines.append(f"- {t(goal.label_key) if goal else goal_id}")
        if summary.goal_matches:
            lines += ["", f"### {t('lifeGoals.results.title', 'How treatments fit your goals')}", ""]
            for match in summary.goal_matches:
                label = t(TREATMENT_DISPLAY[match["treatment"]]["label_key"])
                lines.append(f"- {label}: {match['score']}%")

    lines += ["", f"## {t('decision.questions.title', 'Questions for your kidney team')}", ""]
    for q in summary.questions:
        lines.append(f"- [ ] {q.get('text') or t(q['text_key'])}")

    if summary.journal_entries:
        lines += ["", f"## {t('decision.journal.title', 'Decision Journal')}", ""]
        for entry in summary.journal_entries:
            line = f"- **{t(category_label_key(entry.category))}**: {entry.text}"
            if entry.treatment:
                info = get_treatment_by_id(entry.treatment)
                line += f" ({t(info.title_key) if info else entry.treatment})"
            if entry.is_resolved:
                line += f" [{t('decision.journal.stats.resolved', 'resolved')}]"
            lines.append(line)

    lines += [
        "",
        t("decision.readiness.title", "Decision Readiness") + f": {summary.readiness_score}/100",
        "",
        "---",
        t("summary.disclaimer.text", ""),
        t("summary.shareWithTeam.printTip", "Printed from the NHS Kidney Treatment Decision Aid"),
    ]
    return "\n".join(lines).strip() + "\n"
