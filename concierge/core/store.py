"""
Chat history and reminder stores.

Chat records are append-only: written once per answered query, never updated.
"""

import json
import logging
import threading
import uuid
from dataclasses import dataclass, asdict, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger("store")


@dataclass(frozen=True, slots=True)
class ChatRecord:
    user_id: str
    message: str
    response: str
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def dict(self) -> dict:
        return asdict(self)


class ChatStore:
    def is_ready(self) -> bool:
        raise NotImplementedError

    def record_chat(self, user_id: str, message: str, response: str) -> ChatRecord:
        raise NotImplementedError

    def history(self, user_id: str, limit: int = 50) -> List[ChatRecord]:
        """Most recent records first."""
        raise NotImplementedError


class MemoryChatStore(ChatStore):
    def __init__(self):
        self._records: List[ChatRecord] = []
        self._lock = threading.Lock()

    def is_ready(self) -> bool:
        return True

    def record_chat(self, user_id: str, message: str, response: str) -> ChatRecord:
        record = ChatRecord(user_id=user_id, message=message, response=response)
        with self._lock:
            self._records.append(record)
        return record

    def history(self, user_id: str, limit: int = 50) -> List[ChatRecord]:
        with self._lock:
            mine = [r for r in self._records if r.user_id == user_id]
        return list(reversed(mine))[:max(limit, 0)]


class JsonlChatStore(ChatStore):
    """One JSON object per line; the file is only ever appended to."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._ready = self._prepare()

    def _prepare(self) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch(exist_ok=True)
            return True
        except OSError as e:
            logger.error("Chat store unavailable at %s: %s", self.path, e)
            return False

    def is_ready(self) -> bool:
        return self._ready

    def record_chat(self, user_id: str, message: str, response: str) -> ChatRecord:
        record = ChatRecord(user_id=user_id, message=message, response=response)
        line = json.dumps(record.dict(), ensure_ascii=False)
        with self._lock:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        return record

    def history(self, user_id: str, limit: int = 50) -> List[ChatRecord]:
        records: List[ChatRecord] = []
        with self._lock:
            with open(self.path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        data = json.loads(line)
                    except json.JSONDecodeError:
                        logger.warning("Skipping corrupt chat record in %s", self.path)
                        continue
                    if data.get("user_id") == user_id:
                        records.append(ChatRecord(**data))
        return list(reversed(records))[:max(limit, 0)]


def open_store(kind: str, path: Optional[str] = None) -> ChatStore:
    if kind == "jsonl":
        if not path:
            raise ValueError("CHAT_STORE_PATH is required for the jsonl chat store")
        return JsonlChatStore(path)
    if kind == "memory":
        return MemoryChatStore()
    raise ValueError(f"Unknown chat store: {kind!r}")


@dataclass(frozen=True, slots=True)
class Reminder:
    user_id: str
    title: str
    time: Optional[str] = None   # ISO 8601
    completed: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def dict(self) -> dict:
        return asdict(self)


class ReminderStore:
    def is_ready(self) -> bool:
        raise NotImplementedError

    def add_reminder(self, user_id: str, title: str, time: Optional[str] = None) -> Reminder:
        raise NotImplementedError

    def pending(self, user_id: str) -> List[Reminder]:
        """The user's reminders that are not completed, in creation order."""
        raise NotImplementedError


class MemoryReminderStore(ReminderStore):
    def __init__(self):
        self._reminders: List[Reminder] = []
        self._lock = threading.Lock()

    def is_ready(self) -> bool:
        return True

    def add_reminder(self, user_id: str, title: str, time: Optional[str] = None) -> Reminder:
        reminder = Reminder(user_id=user_id, title=title, time=time)
        with self._lock:
            self._reminders.append(reminder)
        return reminder

    def pending(self, user_id: str) -> List[Reminder]:
        with self._lock:
            return [r for r in self._reminders if r.user_id == user_id and not r.completed]


class JsonlReminderStore(ReminderStore):
    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch(exist_ok=True)
            self._ready = True
        except OSError as e:
            logger.error("Reminder store unavailable at %s: %s", self.path, e)
            self._ready = False

    def is_ready(self) -> bool:
        return self._ready

    def add_reminder(self, user_id: str, title: str, time: Optional[str] = None) -> Reminder:
        reminder = Reminder(user_id=user_id, title=title, time=time)
        with self._lock:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(json.dumps(reminder.dict(), ensure_ascii=False) + "\n")
        return reminder

    def pending(self, user_id: str) -> List[Reminder]:
        found: List[Reminder] = []
        with self._lock:
            with open(self.path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        data = json.loads(line)
                    except json.JSONDecodeError:
                        logger.warning("Skipping corrupt reminder in %s", self.path)
                        continue
                    if data.get("user_id") == user_id and not data.get("completed"):
                        found.append(Reminder(**data))
        return found


def open_reminder_store(kind: str, path: Optional[str] = None) -> ReminderStore:
    if kind == "jsonl":
        if not path:
            raise ValueError("REMINDER_STORE_PATH is required for the jsonl reminder store")
        return JsonlReminderStore(path)
    if kind == "memory":
        return MemoryReminderStore()
    raise ValueError(f"Unknown reminder store: {kind!r}")
