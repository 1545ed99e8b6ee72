"""Tests for timestamp merging and the other note edits."""

import math
import random
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from video_notes.editing import (
    TagExistsError,
    add_tag,
    add_timestamp,
    remove_tag,
    remove_timestamp,
    set_folder,
    update_content,
)
from video_notes.models import VideoNote
from video_notes.storage import create_note

OLD = datetime(2020, 1, 1, tzinfo=UTC)


@pytest.fixture()
def note() -> VideoNote:
    return create_note("abc", "Lecture", "https://youtu.be/abc").model_copy(
        update={"created_at": OLD, "updated_at": OLD}
    )


class TestAddTimestamp:
    def test_appends_and_stamps(self, note: VideoNote) -> None:
        updated = add_timestamp(note, 42.0, "Key idea")
        assert len(updated.timestamps) == 1
        assert updated.timestamps[0].time == 42.0
        assert updated.timestamps[0].label == "Key idea"
        assert updated.updated_at > OLD

    def test_does_not_mutate_input(self, note: VideoNote) -> None:
        add_timestamp(note, 10, "x")
        assert note.timestamps == []
        assert note.updated_at == OLD

    def test_keeps_sorted(self, note: VideoNote) -> None:
        for t in (30, 5, 120, 60):
            note = add_timestamp(note, t, f"at {t}")
        assert [ts.time for ts in note.timestamps] == [5, 30, 60, 120]

    def test_random_order_sorted(self, note: VideoNote) -> None:
        times = [random.uniform(0, 5000) for _ in range(50)]
        for t in times:
            note = add_timestamp(note, t, "x")
        assert len(note.timestamps) == 50
        assert [ts.time for ts in note.timestamps] == sorted(times)

    def test_ties_keep_insertion_order(self, note: VideoNote) -> None:
        note = add_timestamp(note, 10, "first")
        note = add_timestamp(note, 5, "early")
        note = add_timestamp(note, 10, "second")
        assert [ts.label for ts in note.timestamps] == ["early", "first", "second"]

    def test_default_label(self, note: VideoNote) -> None:
        updated = add_timestamp(note, 3725, "")
        assert updated.timestamps[0].label == "Timestamp at 1:02:05"

    def test_note_text(self, note: VideoNote) -> None:
        updated = add_timestamp(note, 1, "x", note_text="remember this")
        assert updated.timestamps[0].note == "remember this"

    def test_unique_ids(self, note: VideoNote) -> None:
        note = add_timestamp(note, 1, "a")
        note = add_timestamp(note, 1, "b")
        assert note.timestamps[0].id != note.timestamps[1].id

    @pytest.mark.parametrize("time", [math.inf, -math.inf, math.nan, -1])
    @pytest.mark.parametrize("label", ["", "end"])
    def test_rejects_unplayable_time(self, note: VideoNote, time: float, label: str) -> None:
        with pytest.raises(ValidationError):
            add_timestamp(note, time, label)


class TestRemoveTimestamp:
    def test_removes(self, note: VideoNote) -> None:
        note = add_timestamp(note, 1, "a")
        note = add_timestamp(note, 2, "b")
        target = note.timestamps[0].id
        updated = remove_timestamp(note, target)
        assert [ts.label for ts in updated.timestamps] == ["b"]
        assert len(note.timestamps) == 2

    def test_unknown_id(self, note: VideoNote) -> None:
        note = add_timestamp(note, 1, "a")
        assert len(remove_timestamp(note, "nope").timestamps) == 1


class TestTags:
    def test_add_preserves_order(self, note: VideoNote) -> None:
        note = add_tag(note, "b")
        note = add_tag(note, "a")
        assert note.tags == ["b", "a"]

    def test_add_strips(self, note: VideoNote) -> None:
        assert add_tag(note, "  math ").tags == ["math"]

    def test_blank_ignored(self, note: VideoNote) -> None:
        assert add_tag(note, "   ") is note

    def test_duplicate_rejected(self, note: VideoNote) -> None:
        note = add_tag(note, "math")
        with pytest.raises(TagExistsError):
            add_tag(note, "math")

    def test_remove(self, note: VideoNote) -> None:
        note = add_tag(add_tag(note, "a"), "b")
        assert remove_tag(note, "a").tags == ["b"]


class TestContentAndFolder:
    def test_update_content(self, note: VideoNote) -> None:
        updated = update_content(note, "new text")
        assert updated.content == "new text"
        assert updated.updated_at > OLD
        assert note.content == ""

    def test_set_folder(self, note: VideoNote) -> None:
        assert set_folder(note, "Physics").folder == "Physics"
        assert set_folder(note, "").folder is None
