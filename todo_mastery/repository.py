"""Todo repository holding the persisted part of the application state.

This module provides TodoRepository, which owns the task list and the theme
choice. It loads both from a KeyValueStore when it is created and writes them
back after every change.
"""

import logging
from typing import List, Optional

from todo_mastery import operations
from todo_mastery.models import Category, Priority, Stats, Task, Theme, ViewFilter
from todo_mastery.storage import (
    THEME_KEY,
    TODOS_KEY,
    JsonFileStore,
    KeyValueStore,
    decode_tasks,
    encode_tasks,
)

logger = logging.getLogger(__name__)


class TodoRepository:
    """Repository for the task list and theme, backed by a key-value store.

    Mutations go through the pure functions in ``operations``; whenever the
    list actually changes the whole collection is written back under the
    "todos" key. The theme is written under "theme" as "dark" or "light".

    Attributes:
        store: Key-value store used for persistence
    """

    def __init__(self, store: Optional[KeyValueStore] = None):
        """Initialize TodoRepository and load saved state.

        Args:
            store: Store implementation to use. If None, uses JsonFileStore
                   with the default file path.

        Raises:
            json.JSONDecodeError: If the stored task list is not valid JSON
            ValueError: If a stored task record is invalid
        """
        self.store = store or JsonFileStore()
        self._tasks: List[Task] = []
        self._theme = Theme.LIGHT
        self.load()

    def load(self) -> None:
        """Reload the task list and theme from the store."""
        saved = self.store.get_item(TODOS_KEY)
        self._tasks = decode_tasks(saved) if saved else []
        self._theme = Theme.DARK if self.store.get_item(THEME_KEY) == Theme.DARK.value else Theme.LIGHT
        logger.debug("Loaded %d task(s), theme %s", len(self._tasks), self._theme.value)

    def _commit(self, tasks: List[Task]) -> None:
        self._tasks = tasks
        self.store.set_item(TODOS_KEY, encode_tasks(tasks))

    @property
    def tasks(self) -> List[Task]:
        """All tasks, newest first."""
        return list(self._tasks)

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def dark_mode(self) -> bool:
        return self._theme == Theme.DARK

    def get(self, task_id: int) -> Optional[Task]:
        """Get a specific task by ID.

        Args:
            task_id: ID of the task to retrieve

        Returns:
            Task object if found, None otherwise
        """
        return operations.find_task(self._tasks, task_id)

    def add(
        self,
        text: str,
        priority: Priority = Priority.MEDIUM,
        category: Category = Category.PERSONAL,
    ) -> Optional[Task]:
        """Create a new task at the head of the list.

        Args:
            text: Task description
            priority: Task priority level (default: MEDIUM)
            category: Task category (default: PERSONAL)

        Returns:
            The created Task, or None if the text was blank
        """
        updated = operations.add_task(self._tasks, text, priority, category)
        if updated is self._tasks:
            return None
        self._commit(updated)
        return updated[0]

    def edit(self, task_id: int, text: str) -> Optional[Task]:
        """Replace the text of an existing task.

        Returns:
            The updated Task, or None if the id is unknown or the text blank
        """
        updated = operations.edit_task(self._tasks, task_id, text)
        if updated is self._tasks:
            return None
        self._commit(updated)
        return operations.find_task(updated, task_id)

    def toggle(self, task_id: int) -> Optional[Task]:
        """Flip a task between done and not done.

        Returns:
            The updated Task, or None if the id is unknown
        """
        if self.get(task_id) is None:
            return None
        self._commit(operations.toggle_task(self._tasks, task_id))
        return self.get(task_id)

    def delete(self, task_id: int) -> bool:
        """Delete a task by ID.

        Returns:
            True if task was deleted, False if task didn't exist
        """
        if self.get(task_id) is None:
            return False
        self._commit(operations.delete_task(self._tasks, task_id))
        return True

    def set_theme(self, theme: Theme) -> None:
        self._theme = theme
        self.store.set_item(THEME_KEY, theme.value)

    def toggle_theme(self) -> Theme:
        """Switch between light and dark and persist the choice."""
        self.set_theme(Theme.LIGHT if self.dark_mode else Theme.DARK)
        return self._theme

    def view(self, search: str = "", view_filter: ViewFilter = ViewFilter.ALL) -> List[Task]:
        """Tasks visible under the given search string and filter."""
        return operations.filter_tasks(self._tasks, search, view_filter)

    def stats(self) -> Stats:
        return operations.compute_stats(self._tasks)
