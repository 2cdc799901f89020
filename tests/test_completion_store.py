"""Completion record store behaviour, run against every implementation."""

from __future__ import annotations

import uuid

import pytest

from habitflow.models.calendar_day import CalendarDay

DAY = CalendarDay(2024, 3, 20)


@pytest.fixture
def habit_id() -> uuid.UUID:
    return uuid.uuid4()


class TestSetCompletedCount:
    @pytest.mark.parametrize("count", [0, 1, 2, 7])
    def test_non_negative_counts_read_back(self, any_completion_store, habit_id, count):
        any_completion_store.set_completed_count(habit_id, DAY, count)

        record = any_completion_store.get(habit_id, DAY)
        assert record is not None
        assert record.completed_count == count
        assert record.is_completed == (count > 0)

    @pytest.mark.parametrize("count", [-1, -5, -100])
    def test_negative_counts_clamp_to_zero(self, any_completion_store, habit_id, count):
        returned = any_completion_store.set_completed_count(habit_id, DAY, count)

        assert returned.completed_count == 0
        assert returned.is_completed is False
        assert any_completion_store.get(habit_id, DAY).completed_count == 0

    def test_upsert_keeps_one_record_per_habit_and_day(self, any_completion_store, habit_id):
        first = any_completion_store.set_completed_count(habit_id, DAY, 1)
        second = any_completion_store.set_completed_count(habit_id, DAY, 3)

        assert any_completion_store.count() == 1
        assert second.id == first.id
        assert any_completion_store.get(habit_id, DAY).completed_count == 3

    def test_missing_record_reads_as_none(self, any_completion_store, habit_id):
        assert any_completion_store.get(habit_id, DAY) is None
        assert any_completion_store.is_completed(habit_id, DAY) is False

    def test_returned_records_are_detached(self, any_completion_store, habit_id):
        record = any_completion_store.set_completed_count(habit_id, DAY, 2)
        record.set_completed_count(0)

        assert any_completion_store.get(habit_id, DAY).completed_count == 2


class TestToggle:
    def test_toggle_creates_completed_record(self, any_completion_store, habit_id):
        record = any_completion_store.toggle(habit_id, DAY)

        assert record.completed_count == 1
        assert record.is_completed

    def test_toggle_clears_completed_record(self, any_completion_store, habit_id):
        any_completion_store.set_completed_count(habit_id, DAY, 4)

        record = any_completion_store.toggle(habit_id, DAY)

        assert record.completed_count == 0
        assert not record.is_completed
        assert any_completion_store.count() == 1

    @pytest.mark.parametrize("initial", [None, 0, 1, 5])
    def test_toggle_twice_restores_state(self, any_completion_store, habit_id, initial):
        if initial is not None:
            any_completion_store.set_completed_count(habit_id, DAY, initial)
        before = any_completion_store.is_completed(habit_id, DAY)

        any_completion_store.toggle(habit_id, DAY)
        any_completion_store.toggle(habit_id, DAY)

        assert any_completion_store.is_completed(habit_id, DAY) == before


class TestQueries:
    def test_records_for_is_newest_first(self, any_completion_store, habit_id):
        for offset in (3, 0, 5, 1):
            any_completion_store.set_completed_count(habit_id, DAY.add_days(-offset), 1)

        days = [r.day for r in any_completion_store.records_for(habit_id)]

        assert days == [DAY, DAY.add_days(-1), DAY.add_days(-3), DAY.add_days(-5)]

    def test_records_for_is_restartable_and_lazy(self, any_completion_store, habit_id):
        any_completion_store.set_completed_count(habit_id, DAY, 1)
        history = any_completion_store.records_for(habit_id)

        assert len(list(history)) == 1
        assert len(list(history)) == 1

        any_completion_store.set_completed_count(habit_id, DAY.add_days(-1), 1)
        assert [r.day for r in history] == [DAY, DAY.add_days(-1)]

    def test_records_for_only_includes_that_habit(self, any_completion_store, habit_id):
        other = uuid.uuid4()
        any_completion_store.set_completed_count(habit_id, DAY, 1)
        any_completion_store.set_completed_count(other, DAY, 1)

        assert [r.habit_id for r in any_completion_store.records_for(habit_id)] == [habit_id]

    def test_history_completed_filter(self, any_completion_store, habit_id):
        any_completion_store.set_completed_count(habit_id, DAY, 1)
        any_completion_store.set_completed_count(habit_id, DAY.add_days(-1), 0)

        completed = any_completion_store.records_for(habit_id).completed()
        assert [r.day for r in completed] == [DAY]

    def test_records_between_is_inclusive_and_ordered(self, any_completion_store, habit_id):
        for offset in range(10):
            any_completion_store.set_completed_count(habit_id, DAY.add_days(-offset), 1)

        rows = any_completion_store.records_between(habit_id, DAY.add_days(-6), DAY.add_days(-2))

        assert [r.day for r in rows] == [DAY.add_days(-o) for o in (6, 5, 4, 3, 2)]

    def test_records_on_spans_habits(self, any_completion_store, habit_id):
        other = uuid.uuid4()
        any_completion_store.set_completed_count(habit_id, DAY, 1)
        any_completion_store.set_completed_count(other, DAY, 0)
        any_completion_store.set_completed_count(other, DAY.add_days(-1), 1)

        rows = any_completion_store.records_on(DAY)

        assert {r.habit_id for r in rows} == {habit_id, other}

    def test_records_in_range_spans_habits(self, any_completion_store, habit_id):
        other = uuid.uuid4()
        for offset in range(5):
            any_completion_store.set_completed_count(habit_id, DAY.add_days(-offset), 1)
        any_completion_store.set_completed_count(other, DAY.add_days(-1), 1)
        any_completion_store.set_completed_count(other, DAY.add_days(-9), 1)

        rows = any_completion_store.records_in_range(DAY.add_days(-2), DAY)

        assert sorted((r.day, r.habit_id == habit_id) for r in rows) == [
            (DAY.add_days(-2), True),
            (DAY.add_days(-1), False),
            (DAY.add_days(-1), True),
            (DAY, True),
        ]

    def test_delete_for_habit_cascades_only_that_habit(self, any_completion_store, habit_id):
        other = uuid.uuid4()
        for offset in range(3):
            any_completion_store.set_completed_count(habit_id, DAY.add_days(-offset), 1)
        any_completion_store.set_completed_count(other, DAY, 1)

        removed = any_completion_store.delete_for_habit(habit_id)

        assert removed == 3
        assert list(any_completion_store.records_for(habit_id)) == []
        assert any_completion_store.count() == 1
        assert any_completion_store.delete_for_habit(habit_id) == 0
