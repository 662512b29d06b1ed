import pytest

from renal_aid.errors import PIIDetectedError
from renal_aid.i18n import Translator
from renal_aid.models import JournalCategory, JournalEntry, TreatmentType
from renal_aid.services.journal import filter_entries, journal_stats
from renal_aid.services.summary import build_summary, render_summary_markdown


def test_entries_are_added_newest_first(controller, clock):
    controller.create_session("en")
    first = controller.add_journal_entry("  Worried about needles  ", "concern")
    clock.advance(30)
    second = controller.add_journal_entry(
        "Home dialysis sounds good", JournalCategory.POSITIVE, "peritoneal-dialysis"
    )

    entries = controller.session.journal_entries
    assert entries == [second, first]
    assert first.text == "Worried about needles"
    assert first.category == JournalCategory.CONCERN
    assert first.treatment is None
    assert second.treatment == TreatmentType.PERITONEAL_DIALYSIS
    assert second.timestamp == clock.now
    assert controller.session.last_activity_at == clock.now


def test_blank_or_personal_entries_are_rejected(controller):
    controller.create_session("en")
    with pytest.raises(ValueError):
        controller.add_journal_entry("   ")
    with pytest.raises(PIIDetectedError):
        controller.add_journal_entry("Ask about my NHS number 943 476 5919")
    assert controller.session.journal_entries == []


def test_resolve_and_delete(controller):
    controller.create_session("en")
    entry = controller.add_journal_entry("Can I still travel?", "question")

    assert controller.toggle_journal_resolved(entry.id) is True
    assert entry.is_resolved
    assert controller.toggle_journal_resolved(entry.id) is False
    with pytest.raises(ValueError):
        controller.toggle_journal_resolved("entry_missing")

    assert controller.delete_journal_entry(entry.id) is True
    assert controller.delete_journal_entry(entry.id) is False
    assert controller.session.journal_entries == []


def test_journal_is_a_no_op_without_session(controller):
    assert controller.add_journal_entry("hello") is None
    assert controller.toggle_journal_resolved("entry_x") is False
    assert controller.delete_journal_entry("entry_x") is False


def journal():
    return [
        JournalEntry("a", JournalCategory.CONCERN),
        JournalEntry("b", JournalCategory.CONCERN, is_resolved=True),
        JournalEntry("c", JournalCategory.QUESTION),
        JournalEntry("d", JournalCategory.THOUGHT),
    ]


def test_filter_by_category_and_resolved():
    entries = journal()
    assert [e.text for e in filter_entries(entries)] == ["a", "b", "c", "d"]
    assert [e.text for e in filter_entries(entries, "concern")] == ["a", "b"]
    assert [e.text for e in filter_entries(entries, "concern", show_resolved=False)] == ["a"]
    assert filter_entries(entries, JournalCategory.POSITIVE) == []


def test_stats_count_open_concerns_and_questions():
    stats = journal_stats(journal())
    assert (stats.total, stats.resolved, stats.concerns, stats.questions) == (4, 1, 1, 1)


def test_summary_lists_journal_entries(controller):
    session = controller.create_session("en")
    entry = controller.add_journal_entry("Ask about diet", "question", "hemodialysis")
    controller.toggle_journal_resolved(entry.id)

    summary = build_summary(session, now=0)
    markdown = render_summary_markdown(summary, Translator())

    assert summary.journal_entries == [entry]
    assert "## Decision Journal" in markdown
    assert "- **Question**: Ask about diet (Haemodialysis) [resolved]" in markdown
