"""Tests for the combined undo policy."""

from diet_manager.services.history import History

DAY = "2024-03-01"


def test_undo_prefers_daily_log(stocked_catalog, daily_log) -> None:
    history = History(daily_log=daily_log, catalog=stocked_catalog)
    stocked_catalog.add_or_update_basic("pear", ["fruit"], 60)
    daily_log.add_entry(DAY, "pear", 1, stocked_catalog.snapshot("pear"))

    assert history.undo()
    assert daily_log.view_log(DAY) == []
    assert stocked_catalog.get("pear") is not None

    assert history.undo()
    assert stocked_catalog.get("pear") is None

    assert history.undo() is False


def test_redo_prefers_daily_log(stocked_catalog, daily_log) -> None:
    history = History(daily_log=daily_log, catalog=stocked_catalog)
    stocked_catalog.add_or_update_basic("pear", ["fruit"], 60)
    stocked_catalog.undo()
    daily_log.add_entry(DAY, "apple", 1, stocked_catalog.snapshot("apple"))
    daily_log.undo()

    assert history.redo()
    assert len(daily_log.view_log(DAY)) == 1
    assert stocked_catalog.get("pear") is None

    assert history.redo()
    assert stocked_catalog.get("pear") is not None
    assert history.redo() is False
