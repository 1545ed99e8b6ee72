"""Tests for the flashcard study session and AI note context."""

import pytest

from video_notes.editing import add_tag, add_timestamp
from video_notes.models import Flashcard
from video_notes.storage import create_note
from video_notes.study import StudySession, has_content, note_context


def _cards(n: int) -> list[Flashcard]:
    return [Flashcard(question=f"Q{i}", answer=f"A{i}", note_id="n") for i in range(n)]


class TestNoteContext:
    def test_plain_labels(self) -> None:
        note = create_note("abc", "Graphs", "u").model_copy(update={"content": "BFS"})
        note = add_timestamp(note, 10, "Intro")
        note = add_timestamp(note, 20, "DFS")
        note = add_tag(note, "cs")
        assert note_context(note) == (
            "Video: Graphs\nNotes: BFS\nTimestamps: Intro, DFS\nTags: cs"
        )

    def test_bracketed_labels(self) -> None:
        note = add_timestamp(create_note("abc", "Graphs", "u"), 10, "Intro")
        assert "Timestamps: [Intro]" in note_context(note, bracket_labels=True)

    def test_has_content(self) -> None:
        note = create_note("abc", "Graphs", "u")
        assert not has_content(note)
        assert not has_content(note.model_copy(update={"content": "   "}))
        assert has_content(note.model_copy(update={"content": "x"}))
        assert has_content(add_timestamp(note, 1, "a"))


class TestStudySession:
    def test_initial_state(self) -> None:
        session = StudySession(_cards(3))
        assert session.current_card.question == "Q0"
        assert session.progress == pytest.approx(100 / 3)
        assert not session.is_complete

    def test_empty_deck(self) -> None:
        session = StudySession([])
        assert session.current_card is None
        assert session.progress == 0.0
        session.answer(True)
        assert session.correct == 0

    def test_answer_scores_and_advances(self) -> None:
        session = StudySession(_cards(3))
        session.flip()
        session.answer(True)
        session.answer(False)
        assert session.correct == 1
        assert session.incorrect == 1
        assert session.current_index == 2
        assert session.show_answer is False
        assert session.cards[0].mastered is True
        assert session.cards[1].mastered is False
        assert session.cards[0].last_reviewed is not None

    def test_navigation_bounds(self) -> None:
        session = StudySession(_cards(2))
        session.previous()
        assert session.current_index == 0
        session.next()
        session.next()
        assert session.current_index == 1

    def test_complete_after_last_flip(self) -> None:
        session = StudySession(_cards(2))
        session.next()
        assert not session.is_complete
        session.flip()
        assert session.is_complete

    def test_restart(self) -> None:
        session = StudySession(_cards(2))
        session.answer(True)
        session.flip()
        session.restart()
        assert session.current_index == 0
        assert session.correct == 0
        assert session.incorrect == 0
        assert session.show_answer is False
