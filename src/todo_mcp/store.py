from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def completion_rate(completed: int, total: int) -> str:
    """Percentage with one decimal, or "0" for an empty collection."""
    if total <= 0:
        return "0"
    return f"{completed / total * 100:.1f}"


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Task:
    id: str
    text: str
    completed: bool
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }


class TaskStore:
    """In-memory, insertion-ordered task collection."""

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._tasks: List[Task] = []
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def new_task(self, text: str) -> Task:
        task_id = str(uuid.uuid4())
        while self.find_by_id(task_id) is not None:
            task_id = str(uuid.uuid4())
        text = text.strip()
        if not text:
            raise ValueError("task text must not be blank")
        now = self.now()
        return Task(id=task_id, text=text, completed=False, created_at=now, updated_at=now)

    def add(self, task: Task) -> None:
        if self.find_by_id(task.id) is not None:
            raise ValueError(f"duplicate task id: {task.id}")
        self._tasks.append(task)

    def find_by_id(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def all(self) -> List[Task]:
        return list(self._tasks)

    def filter(self, status: str = "all") -> List[Task]:
        if status == "pending":
            return [t for t in self._tasks if not t.completed]
        if status == "completed":
            return [t for t in self._tasks if t.completed]
        if status == "all":
            return list(self._tasks)
        raise ValueError(f"unknown filter: {status}")

    def update(self, task_id: str, **changes: Any) -> Optional[Task]:
        if "id" in changes:
            raise ValueError("task id is immutable")
        for index, task in enumerate(self._tasks):
            if task.id != task_id:
                continue
            changes.setdefault("updated_at", self.now())
            updated = replace(task, **changes)
            # a clock stepping backwards must not break updated_at >= created_at
            updated.updated_at = max(updated.updated_at, updated.created_at)
            self._tasks[index] = updated
            return updated
        return None

    def delete(self, task_id: str) -> Optional[Task]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return self._tasks.pop(index)
        return None

    def clear_all(self) -> None:
        self._tasks = []

    def count(self) -> int:
        return len(self._tasks)

    def analytics(self) -> Dict[str, int]:
        completed = sum(1 for t in self._tasks if t.completed)
        return {"total": len(self._tasks), "completed": completed, "pending": len(self._tasks) - completed}
