"""Core models for todo-mastery.

This module defines the core data structures for the to-do list:
- Task: A dataclass representing a single to-do item
- Priority, Category: Enums used to tag a task
- ViewFilter: Enum selecting which tasks are shown
- Theme: Enum for the persisted light/dark presentation
- Stats: Aggregate counts derived from the task list
- TodoError, TaskNotFoundError: Exceptions raised by the session layer
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Priority(Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Category(Enum):
    """Task categories."""

    PERSONAL = "personal"
    WORK = "work"
    SHOPPING = "shopping"
    HEALTH = "health"
    EDUCATION = "education"


class ViewFilter(Enum):
    """Which tasks the list view shows."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class Theme(Enum):
    """Persisted light/dark presentation."""

    LIGHT = "light"
    DARK = "dark"


def format_created_at(moment: datetime) -> str:
    """Format a creation time the way it is shown next to a task.

    Month, day and hour are not zero-padded: ``1/2/2024, 9:30:00 AM``.
    """
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


@dataclass
class Task:
    """Task model representing a single to-do item.

    Attributes:
        id: Creation timestamp in milliseconds, unique within the list
        text: Trimmed, non-empty task description
        done: Completion flag
        priority: Priority level of the task
        category: Category the task belongs to
        created_at: Display string of the creation time
        due_date: Optional due date, carried through storage but not set
    """

    id: int
    text: str
    done: bool = False
    priority: Priority = Priority.MEDIUM
    category: Category = Category.PERSONAL
    created_at: str = ""
    due_date: Optional[str] = None


@dataclass(frozen=True)
class Stats:
    """Aggregate counts over the whole task list.

    ``progress`` is the rounded completion percentage, or None when the
    list is empty (no progress indicator is shown then).
    """

    total: int
    completed: int
    remaining: int
    progress: Optional[int]


class TodoError(Exception):
    """Base class for todo-mastery errors."""


class TaskNotFoundError(TodoError):
    """Raised when an operation names a task id that is not in the list."""

    def __init__(self, task_id: int):
        super().__init__(f"Task #{task_id} not found.")
        self.task_id = task_id
