"""
Purpose: The single orchestration point for a session. Owns the Session, the
inactivity countdown and the assistant turn.
Prevents the UI from knowing how prompts/LLM/services/store work.

Key responsibilities:
- Session lifecycle: create, extend, end, expire (15 minutes of inactivity).
- Keyed upserts into the session (answers, ratings, viewed treatments,
  goals, chat messages) with activity tracking.
- Decision journal: add, resolve and delete entries.
- Language switching through the Translator.
- chat_once(): guardrails, prompt assembly, LLM (or fallback) call.
- speak() / voice_to_text(): TTS and STT in the session language.
- summary(): snapshot for printing or download.

Setters called without a session do nothing. Chat and audio without a
session raise SessionNotFoundError.

Testing: Pure unit tests with fakes: fake LLMClient and a controllable
clock. Verify idempotence, expiry and message assembly.
"""

from __future__ import annotations
import logging
import time
from typing import Iterable, Optional

from .config import Settings, load_settings
from .data.goals import GOAL_IDS
from .data.questionnaire import get_question_by_id, validate_answer
from .errors import SessionExpiredError, SessionNotFoundError
from .i18n import Translator
from .interfaces import Clock, LLMClient, PromptFactory, SecurityGuard
from .models import (
    CarerRelationship,
    ChatMessage,
    ChatRole,
    JournalCategory,
    JournalEntry,
    JourneyStage,
    LLMSettings,
    QuestionnaireAnswer,
    Session,
    SessionSummary,
    SessionTimer,
    SupportedLanguage,
    TreatmentType,
    UserRole,
    ValueRating,
)
from .persistence.session_store import InMemorySessionStore
from .prompts import DefaultPromptFactory
from .services.decision import GeneratedQuestion
from .services.fallback import FallbackResponder
from .services.security import DefaultSecurity
from .services.speech import tts_bytes
from .services.summary import build_summary
from .services.voice import transcribe_wav_bytes

logger = logging.getLogger(__name__)

SESSION_EXPIRED_FALLBACK = "Your session has expired. Please start again."


class DecisionAidSessionController:
    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        *,
        store: Optional[InMemorySessionStore] = None,
        translator: Optional[Translator] = None,
        settings: Optional[Settings] = None,
        clock: Clock = time.time,
    ):
        self.llm: Optional[LLMClient] = llm
        self.fallback: LLMClient = FallbackResponder()
        self.settings = settings or load_settings()
        self.clock = clock
        self.store = store or InMemorySessionStore(
            ttl_seconds=self.settings.session_duration_seconds, clock=clock
        )
        self.translator = translator or Translator()
        self.prompts: PromptFactory = DefaultPromptFactory()
        self.security: SecurityGuard = DefaultSecurity()
        self.session: Optional[Session] = None
        self.error: Optional[str] = None

        self.tokens_in: int = 0
        self.tokens_out: int = 0
        self.model_used: Optional[str] = None

    # LIFECYCLE
    @property
    def duration(self) -> int:
        return self.settings.session_duration_seconds

    def has_ai(self) -> bool:
        """True when a real LLM is configured (otherwise the fallback answers)."""
        return self.llm is not None

    def create_session(self, language: SupportedLanguage | str = SupportedLanguage.EN) -> Session:
        now = self.clock()
        self.session = Session(
            language=SupportedLanguage(language),
            created_at=now,
            expires_at=now + self.duration,
            last_activity_at=now,
        )
        self.store.create(self.session)
        self.error = None
        return self.session

    def end_session(self) -> None:
        if self.session is None:
            return
        logger.info("Session ended: %s", self.session.id)
        self.store.delete(self.session.id)
        self.session = None

    def extend_session(self) -> None:
        if self.session is None:
            return
        now = self.clock()
        self.session.expires_at = now + self.duration
        self.session.last_activity_at = now

    def time_remaining(self) -> Optional[float]:
        if self.session is None:
            return None
        return max(0.0, self.session.expires_at - self.clock())

    def check_expiry(self) -> bool:
        """Discard the session once its time is up. True if it just expired."""
        remaining = self.time_remaining()
        if remaining is None or remaining > 0:
            return False
        logger.info("Session expired: %s", self.session.id)
        self.store.delete(self.session.id)
        self.session = None
        self.error = self.translator.t("session.sessionExpired", SESSION_EXPIRED_FALLBACK)
        return True

    def timer(self) -> Optional[SessionTimer]:
        remaining = self.time_remaining()
        if remaining is None:
            return None
        total = int(remaining)
        minutes, seconds = divmod(total, 60)
        return SessionTimer(
            remaining_seconds=remaining,
            minutes=minutes,
            seconds=seconds,
            is_warning=remaining <= self.settings.warning_threshold_seconds,
            formatted=f"{minutes}:{seconds:02d}",
        )

    def require_session(self) -> Session:
        if self.check_expiry():
            raise SessionExpiredError(self.error)
        if self.session is None:
            raise SessionNotFoundError("No active session")
        return self.session

    def clear_error(self) -> None:
        self.error = None

    # SETTERS
    def _update(self, **changes) -> None:
        """Apply changes that count as activity and extend the expiry."""
        now = self.clock()
        for name, value in changes.items():
            setattr(self.session, name, value)
        self.session.last_activity_at = now
        self.session.expires_at = now + self.duration

    def _bump(self) -> None:
        self.session.last_activity_at = self.clock()

    def set_language(self, language: SupportedLanguage | str) -> bool:
        """Switch the UI language; returns False if it fell back to English."""
        ok = self.translator.change_language_and_wait(str(getattr(language, "value", language)))
        if self.session is not None:
            self._update(language=SupportedLanguage(self.translator.language))
        return ok

    def set_journey_stage(self, stage: JourneyStage | str) -> None:
        if self.session is None:
            return
        self._update(journey_stage=JourneyStage(stage))

    def set_user_role(
        self,
        role: UserRole | str,
        relationship: Optional[CarerRelationship | str] = None,
    ) -> None:
        if self.session is None:
            return
        role = UserRole(role)
        if role == UserRole.CARER and relationship is not None:
            relationship = CarerRelationship(relationship)
        else:
            relationship = None
        self._update(user_role=role, carer_relationship=relationship)

    def add_questionnaire_answer(self, answer: QuestionnaireAnswer) -> None:
        if self.session is None:
            return
        question = get_question_by_id(answer.question_id)
        if question is not None:
            answer.value = validate_answer(question, answer.value)
        if not answer.timestamp:
            answer.timestamp = self.clock()
        answers = self.session.questionnaire_answers
        for idx, existing in enumerate(answers):
            if existing.question_id == answer.question_id:
                answers[idx] = answer
                break
        else:
            answers.append(answer)
        self._bump()

    def add_value_rating(self, rating: ValueRating) -> None:
        if self.session is None:
            return
        ratings = self.session.value_ratings
        for idx, existing in enumerate(ratings):
            if existing.statement_id == rating.statement_id:
                ratings[idx] = rating
                break
        else:
            ratings.append(rating)
        self._bump()

    def mark_treatment_viewed(self, treatment: TreatmentType | str) -> None:
        if self.session is None:
            return
        treatment = TreatmentType(treatment)
        if treatment in self.session.viewed_treatments:
            return
        self.session.viewed_treatments.append(treatment)
        self._bump()

    def _check_goals(self, goal_ids: Iterable[str]) -> list[str]:
        unique: list[str] = []
        for goal_id in goal_ids:
            if goal_id not in GOAL_IDS:
                raise ValueError(f"Unknown life goal: {goal_id}")
            if goal_id not in unique:
                unique.append(goal_id)
        return unique

    def set_selected_goals(self, goal_ids: Iterable[str]) -> None:
        goals = self._check_goals(goal_ids)
        if self.session is None:
            return
        self.session.selected_goals = goals
        self._bump()

    def toggle_goal(self, goal_id: str) -> bool:
        """Select or deselect one goal; returns whether it is now selected."""
        self._check_goals([goal_id])
        if self.session is None:
            return False
        goals = self.session.selected_goals
        if goal_id in goals:
            goals.remove(goal_id)
            selected = False
        else:
            goals.append(goal_id)
            selected = True
        self._bump()
        return selected

    def add_chat_message(self, message: ChatMessage) -> None:
        if self.session is None:
            return
        if not message.timestamp:
            message.timestamp = self.clock()
        self.session.chat_history.append(message)
        self._bump()

    # JOURNAL
    def add_journal_entry(
        self,
        text: str,
        category: JournalCategory | str = JournalCategory.THOUGHT,
        treatment: Optional[TreatmentType | str] = None,
    ) -> Optional[JournalEntry]:
        """
        Record a journal entry at the top of the list. The text goes through
        the same checks as chat input, so PII is rejected with PIIDetectedError.
        """
        if self.session is None:
            return None
        entry = JournalEntry(
            text=self.security.validate_chat_input(text),
            category=JournalCategory(category),
            treatment=TreatmentType(treatment) if treatment else None,
            timestamp=self.clock(),
        )
        self.session.journal_entries.insert(0, entry)
        self._bump()
        return entry

    def _journal_entry(self, entry_id: str) -> JournalEntry:
        for entry in self.session.journal_entries:
            if entry.id == entry_id:
                return entry
        raise ValueError(f"Unknown journal entry: {entry_id}")

    def toggle_journal_resolved(self, entry_id: str) -> bool:
        """Flip the resolved flag; returns the new state."""
        if self.session is None:
            return False
        entry = self._journal_entry(entry_id)
        entry.is_resolved = not entry.is_resolved
        self._bump()
        return entry.is_resolved

    def delete_journal_entry(self, entry_id: str) -> bool:
        if self.session is None:
            return False
        entries = self.session.journal_entries
        remaining = [e for e in entries if e.id != entry_id]
        if len(remaining) == len(entries):
            return False
        self.session.journal_entries = remaining
        self._bump()
        return True

    # ASSISTANT
    def llm_settings(self) -> LLMSettings:
        return LLMSettings(model=self.settings.openai_model, temperature=0.7, max_tokens=1000)

    def chat_once(
        self, user_text: str, *, settings: Optional[LLMSettings] = None
    ) -> tuple[str, dict]:
        """
        One user turn: validate, build the prompt from the last messages,
        ask the LLM (or the fallback), then record both messages.
        Raises ValueError (incl. PIIDetectedError) for rejected input; nothing
        is recorded in that case.
        """
        session = self.require_session()
        user_utt = self.security.validate_chat_input(user_text)

        system_prompt = self.prompts.build_system(
            language=session.language,
            is_carer=session.user_role == UserRole.CARER,
        )
        messages = self.prompts.assemble(
            system=system_prompt, history=session.chat_history, user_text=user_utt
        )

        settings = settings or self.llm_settings()
        client = self.llm if self.llm is not None else self.fallback
        logger.info(
            "Chat request: %d chars, %d history messages",
            len(user_utt),
            len(messages) - 2,
        )
        reply, meta = client.chat(messages, settings)

        self.add_chat_message(ChatMessage(role=ChatRole.USER, content=user_utt))
        self.add_chat_message(ChatMessage(role=ChatRole.ASSISTANT, content=reply))

        self.tokens_in += int(meta.get("tokens_in", 0))
        self.tokens_out += int(meta.get("tokens_out", 0))
        self.model_used = meta.get("model", settings.model)
        logger.info("Chat response: %d chars from %s", len(reply), self.model_used)
        return reply, meta

    def _require_llm(self) -> LLMClient:
        if self.llm is None:
            raise RuntimeError("Voice features need an OpenAI API key")
        return self.llm

    def speak(self, text: str, *, speed: Optional[float] = None) -> tuple[bytes, dict]:
        """MP3 bytes for `text` in the session language, plus meta."""
        session = self.require_session()
        safe = (text or "").strip()
        if not safe:
            return b"", {"tts_chars": 0, "model": self.settings.tts_model}
        audio = tts_bytes(
            safe,
            self._require_llm(),
            language=session.language.value,
            model=self.settings.tts_model,
            speed=speed,
        )
        return audio, {"tts_chars": len(safe), "model": self.settings.tts_model}

    def voice_to_text(self, wav_bytes: bytes) -> str:
        session = self.require_session()
        return transcribe_wav_bytes(
            wav_bytes,
            self._require_llm(),
            model=self.settings.stt_model,
            language=session.language.value,
        )

    # EXPORT
    def summary(self, questions: Optional[list[GeneratedQuestion]] = None) -> SessionSummary:
        return build_summary(self.require_session(), now=self.clock(), questions=questions)
