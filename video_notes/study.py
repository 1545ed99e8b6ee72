"""Flashcard study sessions and the note text sent to the AI."""

from __future__ import annotations

from dataclasses import dataclass

from .models import Flashcard, VideoNote, utcnow


def has_content(note: VideoNote) -> bool:
    """Whether the note has anything to summarize or study."""
    return bool(note.content.strip()) or bool(note.timestamps)


def note_context(note: VideoNote, *, bracket_labels: bool = False) -> str:
    """Plain-text digest of a note for the AI relay.

    Summaries wrap each timestamp label in brackets; flashcards use them bare.
    """
    if bracket_labels:
        labels = ", ".join(f"[{t.label}]" for t in note.timestamps)
    else:
        labels = ", ".join(t.label for t in note.timestamps)
    return (
        f"Video: {note.video_title}\n"
        f"Notes: {note.content}\n"
        f"Timestamps: {labels}\n"
        f"Tags: {', '.join(note.tags)}"
    ).strip()


@dataclass
class StudySession:
    """Walks through a deck of flashcards, keeping score."""

    cards: list[Flashcard]
    current_index: int = 0
    show_answer: bool = False
    correct: int = 0
    incorrect: int = 0

    @property
    def current_card(self) -> Flashcard | None:
        if not self.cards:
            return None
        return self.cards[self.current_index]

    @property
    def progress(self) -> float:
        """Percentage of the deck reached, counting the current card."""
        if not self.cards:
            return 0.0
        return (self.current_index + 1) / len(self.cards) * 100

    @property
    def is_complete(self) -> bool:
        return (
            bool(self.cards)
            and self.current_index == len(self.cards) - 1
            and self.show_answer
        )

    def flip(self) -> None:
        self.show_answer = not self.show_answer

    def answer(self, correct: bool) -> None:
        """Score the current card and move on."""
        card = self.current_card
        if card is None:
            return
        if correct:
            self.correct += 1
        else:
            self.incorrect += 1
        card.mastered = correct
        card.last_reviewed = utcnow()
        self.next()

    def next(self) -> None:
        if self.current_index < len(self.cards) - 1:
            self.current_index += 1
            self.show_answer = False

    def previous(self) -> None:
        if self.current_index > 0:
            self.current_index -= 1
            self.show_answer = False

    def restart(self) -> None:
        self.current_index = 0
        self.show_answer = False
        self.correct = 0
        self.incorrect = 0
