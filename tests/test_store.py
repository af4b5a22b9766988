import json

from concierge.core.store import (
    JsonlChatStore,
    JsonlReminderStore,
    MemoryChatStore,
    MemoryReminderStore,
    open_reminder_store,
    open_store,
)
import pytest


def test_memory_store_history_newest_first():
    store = MemoryChatStore()
    store.record_chat("ada", "one", "1")
    store.record_chat("bob", "other", "x")
    store.record_chat("ada", "two", "2")
    assert [r.message for r in store.history("ada")] == ["two", "one"]
    assert [r.message for r in store.history("ada", limit=1)] == ["two"]
    assert store.history("nobody") == []


def test_jsonl_store_appends(tmp_path):
    path = tmp_path / "chats" / "history.jsonl"
    store = JsonlChatStore(path)
    assert store.is_ready()
    store.record_chat("ada", "hi", "hello")
    store.record_chat("ada", "bye", "goodbye")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["user_id"] == "ada"
    assert first["message"] == "hi"
    assert first["response"] == "hello"
    assert "timestamp" in first

    history = JsonlChatStore(path).history("ada")
    assert [r.message for r in history] == ["bye", "hi"]


def test_jsonl_store_skips_corrupt_lines(tmp_path):
    path = tmp_path / "history.jsonl"
    store = JsonlChatStore(path)
    store.record_chat("ada", "hi", "hello")
    with open(path, "a", encoding="utf-8") as f:
        f.write("{not json\n")
    assert len(store.history("ada")) == 1


def test_jsonl_store_not_ready_when_path_unusable(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    store = JsonlChatStore(blocker / "history.jsonl")
    assert not store.is_ready()


def test_open_store():
    assert isinstance(open_store("memory"), MemoryChatStore)
    with pytest.raises(ValueError):
        open_store("jsonl")
    with pytest.raises(ValueError):
        open_store("mongo")


def test_memory_reminders_pending_for_user():
    store = MemoryReminderStore()
    first = store.add_reminder("ada", "call the dentist", "2024-05-01T09:30:00+00:00")
    store.add_reminder("bob", "water plants")
    store.add_reminder("ada", "buy milk")
    assert first.completed is False
    assert first.id
    assert [r.title for r in store.pending("ada")] == ["call the dentist", "buy milk"]
    assert store.pending("nobody") == []


def test_jsonl_reminders_skip_completed(tmp_path):
    path = tmp_path / "reminders.jsonl"
    store = JsonlReminderStore(path)
    assert store.is_ready()
    store.add_reminder("ada", "call the dentist", "2024-05-01T09:30:00+00:00")
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps({"user_id": "ada", "title": "done already", "time": None,
                            "completed": True, "id": "x1"}) + "\n")
        f.write("{broken\n")

    pending = JsonlReminderStore(path).pending("ada")
    assert [r.title for r in pending] == ["call the dentist"]
    assert pending[0].time == "2024-05-01T09:30:00+00:00"


def test_open_reminder_store():
    assert isinstance(open_reminder_store("memory"), MemoryReminderStore)
    with pytest.raises(ValueError):
        open_reminder_store("jsonl")
