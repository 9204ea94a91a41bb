"""Tests for the daily food log service."""

import pytest

from diet_manager.domain.errors import (
    InvariantViolation,
    PersistenceError,
    ValidationError,
)
from diet_manager.domain.foods import BASIC, FoodSnapshot
from diet_manager.domain.log import LogEntry, LogState
from diet_manager.services.daily_log import (
    DailyLog,
    RemoveEntryCommand,
    new_entry_id,
)

DAY = "2024-03-01"


def _snapshot(calories: int) -> FoodSnapshot:
    return FoodSnapshot(namespace=BASIC, keywords=("fruit",), calories=calories)


def _state(daily_log: DailyLog) -> dict:
    return {date: list(entries) for date, entries in daily_log.state.days.items()}


def test_add_entry_appends_in_order(daily_log, log_repository) -> None:
    first = daily_log.add_entry(DAY, "Apple", 2, _snapshot(95))
    second = daily_log.add_entry(DAY, "pear", 1, _snapshot(60))

    assert daily_log.view_log(DAY) == [first, second]
    assert first.food_name == "apple"
    assert first.id != second.id
    assert log_repository.stored.days[DAY] == [first, second]


def test_entry_ids_are_unique() -> None:
    assert len({new_entry_id() for _ in range(1000)}) == 1000


@pytest.mark.parametrize("servings", [0, -1, 1.5, True])
def test_add_entry_rejects_bad_servings(daily_log, servings) -> None:
    with pytest.raises(ValidationError):
        daily_log.add_entry(DAY, "apple", servings, _snapshot(95))

    assert not daily_log.can_undo()


@pytest.mark.parametrize("date", ["2024-3-1", "yesterday", "2024-02-30"])
def test_add_entry_rejects_malformed_date(daily_log, date) -> None:
    with pytest.raises(ValidationError):
        daily_log.add_entry(date, "apple", 1, _snapshot(95))


def test_daily_calories_sums_servings(daily_log) -> None:
    daily_log.add_entry(DAY, "apple", 2, _snapshot(95))
    daily_log.add_entry(DAY, "nuts", 1, _snapshot(300))

    assert daily_log.daily_calories(DAY) == 490


def test_unknown_date_is_empty(daily_log) -> None:
    assert daily_log.view_log("1999-01-01") == []
    assert daily_log.daily_calories("1999-01-01") == 0


def test_snapshot_isolates_from_catalog_updates(stocked_catalog, daily_log) -> None:
    daily_log.add_entry(DAY, "apple", 1, stocked_catalog.snapshot("apple"))

    stocked_catalog.add_or_update_basic("apple", ["fruit"], 120)

    assert daily_log.daily_calories(DAY) == 95


def test_logged_details_cannot_be_mutated(stocked_catalog, daily_log) -> None:
    stocked_catalog.add_or_update_composite("trailmix", [], {"oats": 2})
    snapshot = stocked_catalog.snapshot("trailmix")
    entry = daily_log.add_entry(DAY, "trailmix", 1, snapshot)

    with pytest.raises(TypeError):
        entry.details.ingredients["oats"] = 10

    assert daily_log.view_log(DAY)[0].details.ingredients == {"oats": 2}
    assert daily_log.daily_calories(DAY) == 300


def test_remove_then_undo_restores_position(daily_log) -> None:
    entries = [
        daily_log.add_entry(DAY, name, 1, _snapshot(10))
        for name in ("eggs", "toast", "coffee")
    ]

    assert daily_log.remove_entry(DAY, entries[1].id)
    assert daily_log.view_log(DAY) == [entries[0], entries[2]]

    daily_log.undo()

    assert daily_log.view_log(DAY) == entries


def test_remove_missing_entry_is_noop(daily_log, caplog) -> None:
    daily_log.add_entry(DAY, "eggs", 1, _snapshot(10))
    daily_log.commands.clear()

    with caplog.at_level("INFO", logger="diet_manager"):
        assert daily_log.remove_entry(DAY, "missing") is False
        assert daily_log.remove_entry("2001-01-01", "missing") is False

    assert not daily_log.can_undo()
    assert "not found" in caplog.text


def test_undo_add_restores_exact_prior_state(daily_log) -> None:
    daily_log.add_entry(DAY, "eggs", 1, _snapshot(10))
    before = _state(daily_log)

    daily_log.add_entry(DAY, "toast", 1, _snapshot(10))
    daily_log.add_entry("2024-03-02", "toast", 1, _snapshot(10))
    daily_log.undo()
    daily_log.undo()

    assert _state(daily_log) == before
    assert list(daily_log.state.days) == [DAY]


def test_redo_reapplies_same_entry(daily_log) -> None:
    entry = daily_log.add_entry(DAY, "eggs", 1, _snapshot(10))
    daily_log.undo()

    assert daily_log.redo()

    assert daily_log.view_log(DAY) == [entry]


def test_redo_remove_after_undo(daily_log) -> None:
    kept = daily_log.add_entry(DAY, "eggs", 1, _snapshot(10))
    removed = daily_log.add_entry(DAY, "toast", 1, _snapshot(10))
    daily_log.remove_entry(DAY, removed.id)
    daily_log.undo()

    daily_log.redo()

    assert daily_log.view_log(DAY) == [kept]


def test_remove_undo_and_redo_write_through(daily_log, log_repository) -> None:
    kept = daily_log.add_entry(DAY, "eggs", 1, _snapshot(10))
    removed = daily_log.add_entry(DAY, "toast", 1, _snapshot(10))

    daily_log.remove_entry(DAY, removed.id)
    assert log_repository.stored.days == {DAY: [kept]}

    daily_log.undo()
    assert log_repository.stored.days == {DAY: [kept, removed]}

    daily_log.redo()
    assert log_repository.stored.days == {DAY: [kept]}
    assert log_repository.saves == 5


def test_undo_of_add_writes_through(daily_log, log_repository) -> None:
    entry = daily_log.add_entry(DAY, "eggs", 1, _snapshot(10))

    daily_log.undo()
    assert log_repository.stored.days == {}

    daily_log.redo()
    assert log_repository.stored.days == {DAY: [entry]}


def test_failed_restore_leaves_no_empty_day() -> None:
    entry = LogEntry(id="1_a", food_name="eggs", servings=1, details=_snapshot(10))
    command = RemoveEntryCommand(date=DAY, index=2, entry=entry)
    state = LogState()

    with pytest.raises(InvariantViolation):
        command.revert(state)

    assert DAY not in state.days


def test_restore_recreates_missing_day() -> None:
    entry = LogEntry(id="1_a", food_name="eggs", servings=1, details=_snapshot(10))
    state = LogState()

    RemoveEntryCommand(date=DAY, index=0, entry=entry).revert(state)

    assert state.days == {DAY: [entry]}


def test_new_entry_after_undo_clears_redo(daily_log) -> None:
    daily_log.add_entry(DAY, "eggs", 1, _snapshot(10))
    daily_log.undo()
    daily_log.add_entry(DAY, "toast", 1, _snapshot(10))

    assert daily_log.redo() is False
    assert [entry.food_name for entry in daily_log.view_log(DAY)] == ["toast"]


def test_view_log_returns_copy(daily_log) -> None:
    daily_log.add_entry(DAY, "eggs", 1, _snapshot(10))

    daily_log.view_log(DAY).clear()

    assert len(daily_log.view_log(DAY)) == 1


def test_dates_are_sorted(daily_log) -> None:
    daily_log.add_entry("2024-03-02", "eggs", 1, _snapshot(10))
    daily_log.add_entry("2024-03-01", "eggs", 1, _snapshot(10))

    assert daily_log.dates() == ["2024-03-01", "2024-03-02"]


def test_failed_save_marks_log_dirty(daily_log, log_repository) -> None:
    log_repository.fail_saves = True

    daily_log.add_entry(DAY, "eggs", 1, _snapshot(10))

    assert daily_log.dirty
    assert len(daily_log.view_log(DAY)) == 1


def test_close_propagates_persistence_error(daily_log, log_repository) -> None:
    log_repository.fail_saves = True

    with pytest.raises(PersistenceError):
        daily_log.close()


def test_reload_clears_history(daily_log, log_repository) -> None:
    daily_log.add_entry(DAY, "eggs", 1, _snapshot(10))
    log_repository.stored.days.clear()

    daily_log.reload()

    assert daily_log.view_log(DAY) == []
    assert not daily_log.can_undo()
