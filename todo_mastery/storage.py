"""Storage layer for todo-mastery.

This module provides a string key-value store interface, modelled on browser
local storage, with two implementations:
- JsonFileStore: the whole store kept in one JSON file, guarded with
  fcntl-based file locking
- MemoryStore: a dict-backed store for embedding and tests

It also holds the codec for the task list kept under the "todos" key.
"""

import fcntl
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from todo_mastery.config import load_settings
from todo_mastery.models import Category, Priority, Task

logger = logging.getLogger(__name__)

TODOS_KEY = "todos"
THEME_KEY = "theme"


class KeyValueStore(ABC):
    """Abstract base class for string key-value stores."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove key if present."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Delete all data from the store."""
        pass


class MemoryStore(KeyValueStore):
    """In-memory key-value store."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    def clear(self) -> None:
        self.items.clear()


class JsonFileStore(KeyValueStore):
    """JSON file-based key-value store with file locking.

    The file holds a single JSON object mapping keys to string values.
    Every write rewrites the whole file; the last writer wins.

    Attributes:
        file_path: Path to the JSON storage file
    """

    def __init__(self, file_path: Optional[Union[str, Path]] = None):
        """Initialize JsonFileStore with a file path.

        Args:
            file_path: Path to the JSON file. If None, uses the TODO_DB_PATH
                      environment variable or defaults to todos.json
        """
        if file_path is None:
            file_path = load_settings().db_path
        self.file_path = Path(file_path)

    def _read(self) -> Dict[str, str]:
        if not self.file_path.exists():
            return {}

        with open(self.file_path, "r", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_SH)
            try:
                content = f.read().strip()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        if not content:
            return {}

        data = json.loads(content)
        if not isinstance(data, dict):
            raise ValueError(f"Store file {self.file_path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

        # Truncate only once the exclusive lock is held
        with open(self.file_path, "a+", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                f.seek(0)
                f.truncate()
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.flush()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        logger.debug("Wrote %d key(s) to %s", len(data), self.file_path)

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        """Delete the JSON storage file.

        If the file doesn't exist, this method does nothing.
        """
        if self.file_path.exists():
            self.file_path.unlink()


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "done": task.done,
        "priority": task.priority.value,
        "category": task.category.value,
        "createdAt": task.created_at,
        "dueDate": task.due_date,
    }


def task_from_dict(data: Dict[str, Any]) -> Task:
    """Build a Task from its stored form.

    Records written before priorities and categories existed fall back to
    medium and personal.

    Raises:
        KeyError: If id or text is missing
        ValueError: If data is not a JSON object, or priority or category
                    holds an unknown value
    """
    if not isinstance(data, dict):
        raise ValueError(f"Stored task record must be a JSON object, got {data!r}")
    return Task(
        id=int(data["id"]),
        text=data["text"],
        done=bool(data.get("done", False)),
        priority=Priority(data.get("priority") or Priority.MEDIUM.value),
        category=Category(data.get("category") or Category.PERSONAL.value),
        created_at=data.get("createdAt") or "",
        due_date=data.get("dueDate"),
    )


def encode_tasks(tasks: List[Task]) -> str:
    """Serialize the task list to the JSON string kept under "todos"."""
    return json.dumps([task_to_dict(task) for task in tasks], ensure_ascii=False)


def decode_tasks(raw: str) -> List[Task]:
    """Parse the JSON string kept under "todos".

    Raises:
        json.JSONDecodeError: If raw is not valid JSON
        ValueError: If raw is not a string holding a JSON array, or a record
                    is invalid
    """
    if not isinstance(raw, str):
        raise ValueError(f"Stored todos must be a JSON string, got {type(raw).__name__}")
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("Stored todos must be a JSON array")
    return [task_from_dict(item) for item in data]
