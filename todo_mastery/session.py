"""Interactive session state for todo-mastery.

A Session holds the ephemeral state of one interactive run (the pending
input, the selected priority and category, the search string, the active
filter and the task being edited) on top of a TodoRepository that owns
the persisted list.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from todo_mastery import operations
from todo_mastery.models import (
    Category,
    Priority,
    Stats,
    Task,
    TaskNotFoundError,
    Theme,
    ViewFilter,
)
from todo_mastery.repository import TodoRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class View:
    """Derived view of the list for the current session state.

    Attributes:
        tasks: Tasks passing the current search and filter
        stats: Counts over the whole list
        empty_message: Message to show instead of the list, if nothing is visible
    """

    tasks: List[Task]
    stats: Stats
    empty_message: Optional[str]


class Session:
    """Ephemeral UI state layered over a repository."""

    def __init__(self, repository: TodoRepository):
        self.repository = repository
        self.input_text = ""
        self.search = ""
        self.view_filter = ViewFilter.ALL
        self.editing_id: Optional[int] = None
        self.priority = Priority.MEDIUM
        self.category = Category.PERSONAL

    @property
    def editing(self) -> bool:
        return self.editing_id is not None

    def submit(self) -> Optional[Task]:
        """Submit the pending input.

        In edit mode the edited task's text is replaced and edit mode ends;
        otherwise a new task is added with the pending priority and category.
        Blank input does nothing. After a successful submit the input is
        cleared and the priority goes back to medium; the category is kept.

        Returns:
            The created or edited Task, or None if nothing changed
        """
        if not self.input_text.strip():
            logger.info("Ignoring blank input")
            return None

        if self.editing_id is not None:
            task = self.repository.edit(self.editing_id, self.input_text)
            self.editing_id = None
        else:
            task = self.repository.add(self.input_text, self.priority, self.category)

        self.input_text = ""
        self.priority = Priority.MEDIUM
        return task

    def begin_edit(self, task_id: int) -> Task:
        """Load a task into the pending form for editing.

        Raises:
            TaskNotFoundError: If no task has the given id
        """
        task = self.repository.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        self.input_text = task.text
        self.editing_id = task.id
        self.priority = task.priority
        self.category = task.category
        return task

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.input_text = ""
        self.priority = Priority.MEDIUM
        self.category = Category.PERSONAL

    def toggle(self, task_id: int) -> Optional[Task]:
        return self.repository.toggle(task_id)

    def delete(self, task_id: int) -> bool:
        """Delete a task; deleting the task under edit also cancels the edit."""
        deleted = self.repository.delete(task_id)
        if deleted and task_id == self.editing_id:
            self.cancel_edit()
        return deleted

    def toggle_theme(self) -> Theme:
        return self.repository.toggle_theme()

    def view(self) -> View:
        """Recompute the visible tasks, counts and empty-state message."""
        tasks = self.repository.tasks
        visible = operations.filter_tasks(tasks, self.search, self.view_filter)
        return View(
            tasks=visible,
            stats=operations.compute_stats(tasks),
            empty_message=operations.empty_message(tasks, visible),
        )
