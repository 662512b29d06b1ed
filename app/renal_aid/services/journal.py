"""
Purpose: the decision journal, a running list of thoughts, concerns,
questions and positives the user writes down while exploring treatments.

Entries live on the Session (newest first); the controller adds, resolves and
deletes them. This module only filters and counts.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional

from ..models import JournalCategory, JournalEntry

CATEGORY_ICONS: dict[JournalCategory, str] = {
    JournalCategory.THOUGHT: "💭",
    JournalCategory.CONCERN: "⚠️",
    JournalCategory.QUESTION: "❓",
    JournalCategory.POSITIVE: "👍",
}


@dataclass(frozen=True)
class JournalStats:
    total: int
    resolved: int
    concerns: int
    questions: int


def category_label_key(category: JournalCategory | str) -> str:
    return f"decision.journal.categories.{JournalCategory(category).value}"


def filter_entries(
    entries: Iterable[JournalEntry],
    category: Optional[JournalCategory | str] = None,
    show_resolved: bool = True,
) -> list[JournalEntry]:
    """`category=None` keeps every category."""
    wanted = JournalCategory(category) if category else None
    return [
        e
        for e in entries
        if (wanted is None or e.category == wanted)
        and (show_resolved or not e.is_resolved)
    ]


def journal_stats(entries: Iterable[JournalEntry]) -> JournalStats:
    """Concerns and questions only count while unresolved."""
    entries = list(entries)
    return JournalStats(
        total=len(entries),
        resolved=sum(1 for e in entries if e.is_resolved),
        concerns=sum(
            1 for e in entries if e.category == JournalCategory.CONCERN and not e.is_resolved
        ),
        questions=sum(
            1 for e in entries if e.category == JournalCategory.QUESTION and not e.is_resolved
        ),
    )
