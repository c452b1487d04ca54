from datetime import datetime, timezone

import pytest

from todo_mcp.store import TaskStore, completion_rate


def _add(store, text, completed=False):
    task = store.new_task(text)
    store.add(task)
    if completed:
        task = store.update(task.id, completed=True)
    return task


def test_new_task_trims_and_stamps(store):
    task = store.new_task("  Buy milk \n")
    assert task.text == "Buy milk"
    assert task.completed is False
    assert task.created_at == task.updated_at
    assert len(task.id) == 36


def test_add_preserves_order_and_rejects_duplicates(store):
    a = _add(store, "a")
    b = _add(store, "b")
    assert [t.id for t in store.all()] == [a.id, b.id]
    with pytest.raises(ValueError):
        store.add(a)


def test_filter_partitions_tasks(store):
    _add(store, "one")
    done = _add(store, "two", completed=True)
    _add(store, "three")
    assert [t.text for t in store.filter("pending")] == ["one", "three"]
    assert [t.id for t in store.filter("completed")] == [done.id]
    assert len(store.filter("all")) == 3
    with pytest.raises(ValueError):
        store.filter("bogus")


def test_update_merges_and_refreshes_timestamp(store):
    task = _add(store, "write report")
    updated = store.update(task.id, completed=True)
    assert updated.id == task.id
    assert updated.text == "write report"
    assert updated.completed is True
    assert updated.updated_at > updated.created_at
    assert store.find_by_id(task.id).completed is True


def test_update_rejects_id_change_and_missing(store):
    task = _add(store, "x")
    with pytest.raises(ValueError):
        store.update(task.id, id="other")
    assert store.update("00000000-0000-0000-0000-000000000000", completed=True) is None


def test_delete_and_clear(store):
    a = _add(store, "a")
    _add(store, "b")
    assert store.delete(a.id).text == "a"
    assert store.delete(a.id) is None
    assert store.count() == 1
    store.clear_all()
    assert store.count() == 0


def test_analytics_totals_add_up(store):
    _add(store, "a")
    _add(store, "b", completed=True)
    _add(store, "c", completed=True)
    stats = store.analytics()
    assert stats == {"total": 3, "completed": 2, "pending": 1}
    assert stats["completed"] + stats["pending"] == stats["total"] == len(store.filter("all"))


def test_to_dict_uses_wire_names(store):
    data = _add(store, "a").to_dict()
    assert set(data) == {"id", "text", "completed", "createdAt", "updatedAt"}
    assert data["createdAt"].endswith("Z")


def test_completion_rate():
    assert completion_rate(0, 0) == "0"
    assert completion_rate(1, 2) == "50.0"
    assert completion_rate(1, 3) == "33.3"


def test_default_store_uses_utc_clock():
    task = TaskStore().new_task("a")
    assert task.created_at.utcoffset().total_seconds() == 0


def test_blank_text_is_refused(store):
    with pytest.raises(ValueError):
        store.new_task(" \t ")


def test_update_survives_clock_stepping_backwards():
    times = iter([datetime(2025, 6, 1, tzinfo=timezone.utc), datetime(2025, 5, 1, tzinfo=timezone.utc)])
    store = TaskStore(clock=lambda: next(times))
    task = store.new_task("a")
    store.add(task)
    updated = store.update(task.id, completed=True)
    assert updated.completed is True
    assert updated.updated_at == updated.created_at
