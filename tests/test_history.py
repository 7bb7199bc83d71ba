import json

import pytest

from netbook.core.errors import PersistenceFailure
from netbook.models import ExecutionResult, HistoryLog
from netbook.storage import (
    HistoryStore,
    add_to_history,
    clear_history,
    export_history_entry,
    export_last_response,
)


def result(status=200, body=None):
    return ExecutionResult(status=status, body=body if body is not None else {"ok": True})


def test_log_evicts_oldest_past_capacity():
    log = HistoryLog(max_entries=3)
    for i in range(5):
        log.add_entry(f"req{i}", result(status=200 + i))

    assert len(log) == 3
    assert [e.request_name for e in log.entries] == ["req2", "req3", "req4"]
    assert log.get_latest().request_name == "req4"


def test_empty_log_has_no_latest():
    assert HistoryLog().get_latest() is None


def test_get_by_request_name_and_recent():
    log = HistoryLog()
    log.add_entry("a", result())
    log.add_entry("b", result())
    log.add_entry("a", result(status=404))

    assert [e.response.status for e in log.get_by_request_name("a")] == [200, 404]
    assert [e.request_name for e in log.get_recent(2)] == ["a", "b"]


def test_find_and_clear():
    log = HistoryLog()
    entry = log.add_entry("a", result())
    assert log.find(entry.id) is entry
    assert log.find("nope") is None
    log.clear()
    assert len(log) == 0


def test_store_round_trip(tmp_path):
    store = HistoryStore(tmp_path / "history.json", max_entries=10)
    add_to_history(store, "Get user", result(body={"id": 1}))
    add_to_history(store, "Failed", ExecutionResult.transport_failure("boom", "detail"))

    loaded = store.load()
    assert [e.request_name for e in loaded.entries] == ["Get user", "Failed"]
    assert loaded.entries[0].response.body == {"id": 1}
    assert loaded.entries[1].response.status == 0
    assert loaded.entries[0].created_at.tzinfo is not None


def test_missing_history_file_is_empty(tmp_path):
    log = HistoryStore(tmp_path / "none.json", max_entries=7).load()
    assert len(log) == 0
    assert log.max_entries == 7


def test_malformed_history_file_raises(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json")
    with pytest.raises(PersistenceFailure):
        HistoryStore(path).load()


def test_clear_history(tmp_path):
    store = HistoryStore(tmp_path / "history.json")
    add_to_history(store, "a", result())
    clear_history(store)
    assert len(store.load()) == 0


def test_export_last_response(tmp_path):
    store = HistoryStore(tmp_path / "history.json")
    out = tmp_path / "last.json"
    assert export_last_response(store, out) is None

    add_to_history(store, "a", result(body={"first": True}))
    add_to_history(store, "b", result(status=201, body={"second": True}))
    assert export_last_response(store, out) == out

    data = json.loads(out.read_text())
    assert data['status'] == 201
    assert data['body'] == {"second": True}


def test_export_history_entry(tmp_path):
    store = HistoryStore(tmp_path / "history.json")
    history = add_to_history(store, "a", result())
    entry_id = history.entries[0].id
    out = tmp_path / "entry.json"

    export_history_entry(store, entry_id, out)
    assert json.loads(out.read_text())['request_name'] == "a"

    with pytest.raises(PersistenceFailure):
        export_history_entry(store, "missing", out)


def test_load_applies_configured_capacity(tmp_path):
    path = tmp_path / "history.json"
    big = HistoryStore(path, max_entries=100)
    log = HistoryLog(max_entries=100)
    for i in range(50):
        log.add_entry(f"req{i}", result())
    big.save(log)

    loaded = HistoryStore(path, max_entries=10).load()

    assert len(loaded) == 10
    assert loaded.max_entries == 10
    assert loaded.entries[0].request_name == "req40"
    assert loaded.get_latest().request_name == "req49"
