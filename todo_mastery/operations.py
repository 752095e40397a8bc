"""List operations for todo-mastery.

Every mutator takes the current task list and returns a new list; the
input list is never modified. The derived-view helpers (filtering, counts,
empty-state message) are plain functions over the same list.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import List, Optional

from todo_mastery.models import (
    Category,
    Priority,
    Stats,
    Task,
    ViewFilter,
    format_created_at,
)

logger = logging.getLogger(__name__)

NO_TASKS_MESSAGE = "No tasks yet. Add one above!"
NO_MATCHES_MESSAGE = "No tasks match your search."


def _next_id(tasks: List[Task], moment: datetime) -> int:
    candidate = int(moment.timestamp() * 1000)
    highest = max((task.id for task in tasks), default=None)
    if highest is not None and candidate <= highest:
        candidate = highest + 1
    return candidate


def add_task(
    tasks: List[Task],
    text: str,
    priority: Priority = Priority.MEDIUM,
    category: Category = Category.PERSONAL,
    now: Optional[datetime] = None,
) -> List[Task]:
    """Prepend a new task to the list.

    Args:
        tasks: Current task list
        text: Task description; surrounding whitespace is trimmed
        priority: Priority level for the new task
        category: Category for the new task
        now: Creation time (defaults to the current time)

    Returns:
        A new list with the task at its head, or the unchanged list if the
        text is blank
    """
    text = text.strip()
    if not text:
        logger.info("Ignoring blank task text")
        return tasks

    moment = now or datetime.now()
    task = Task(
        id=_next_id(tasks, moment),
        text=text,
        done=False,
        priority=priority,
        category=category,
        created_at=format_created_at(moment),
        due_date=None,
    )
    logger.debug("Adding task #%d", task.id)
    return [task] + list(tasks)


def edit_task(tasks: List[Task], task_id: int, text: str) -> List[Task]:
    """Overwrite the text of the task with the given id.

    Blank text or an unknown id leave the list unchanged.
    """
    text = text.strip()
    if not text:
        logger.info("Ignoring blank edit for task #%d", task_id)
        return tasks
    if find_task(tasks, task_id) is None:
        return tasks
    return [replace(task, text=text) if task.id == task_id else task for task in tasks]


def toggle_task(tasks: List[Task], task_id: int) -> List[Task]:
    """Flip the completion flag of the task with the given id."""
    return [replace(task, done=not task.done) if task.id == task_id else task for task in tasks]


def delete_task(tasks: List[Task], task_id: int) -> List[Task]:
    """Remove the task with the given id."""
    return [task for task in tasks if task.id != task_id]


def find_task(tasks: List[Task], task_id: int) -> Optional[Task]:
    for task in tasks:
        if task.id == task_id:
            return task
    return None


def _matches_filter(task: Task, view_filter: ViewFilter) -> bool:
    if view_filter == ViewFilter.ACTIVE:
        return not task.done
    if view_filter == ViewFilter.COMPLETED:
        return task.done
    return True


def filter_tasks(
    tasks: List[Task],
    search: str = "",
    view_filter: ViewFilter = ViewFilter.ALL,
) -> List[Task]:
    """Return the tasks visible under the current search and filter.

    A task is visible if its text contains the search string
    (case-insensitive) and it matches the active filter. List order is kept.
    """
    needle = search.lower()
    return [
        task
        for task in tasks
        if needle in task.text.lower() and _matches_filter(task, view_filter)
    ]


def compute_stats(tasks: List[Task]) -> Stats:
    """Count total, completed and remaining tasks.

    Progress rounds halves up, so 1 of 8 done reads as 13%.
    """
    total = len(tasks)
    completed = sum(1 for task in tasks if task.done)
    progress = None
    if total:
        progress = (completed * 200 + total) // (2 * total)
    return Stats(
        total=total,
        completed=completed,
        remaining=total - completed,
        progress=progress,
    )


def empty_message(tasks: List[Task], visible: List[Task]) -> Optional[str]:
    """Pick the empty-state message for the list view.

    Returns None when something is visible. An empty collection and a
    collection whose tasks are all filtered out get different messages.
    """
    if visible:
        return None
    if not tasks:
        return NO_TASKS_MESSAGE
    return NO_MATCHES_MESSAGE
