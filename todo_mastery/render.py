"""Text rendering of tasks, counts and progress for the terminal."""

from typing import List, Optional

from todo_mastery.models import Stats, Task, Theme
from todo_mastery.theme import category_icon, color, priority_style, role, style

TITLE = "Todo Mastery"
TAGLINE = "Organize your life, one task at a time"
BAR_WIDTH = 20


def format_task(task: Task, theme: Theme = Theme.LIGHT) -> str:
    """Render one task as a single line.

    Example: ``[✓] #1704103200000 🛒 Buy milk [high] (shopping, 01/01/2024, 10:00:00 AM)``
    """
    mark = "✓" if task.done else " "
    if task.done:
        text = color(task.text, role(theme, "muted"), style("strike"))
        box = color(f"[{mark}]", role(theme, "done"))
    else:
        text = color(task.text, role(theme, "text"))
        box = f"[{mark}]"
    badge = color(f"[{task.priority.value}]", priority_style(task.priority))
    details = task.category.value
    if task.created_at:
        details = f"{details}, {task.created_at}"
    meta = color(f"({details})", role(theme, "muted"))
    ident = color(f"#{task.id}", role(theme, "accent"), style("bold"))
    return f"{box} {ident} {category_icon(task.category)} {text} {badge} {meta}"


def format_list(tasks: List[Task], message: Optional[str], theme: Theme = Theme.LIGHT) -> List[str]:
    if message:
        return [color(message, role(theme, "muted"))]
    return [format_task(task, theme) for task in tasks]


def progress_bar(percent: int, width: int = BAR_WIDTH) -> str:
    filled = (percent * width) // 100
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def format_stats(stats: Stats, theme: Theme = Theme.LIGHT) -> List[str]:
    """Render the counts block; the progress line only appears when there are tasks."""
    lines = [
        "  ".join(
            [
                "Total Tasks: " + color(str(stats.total), role(theme, "total"), style("bold")),
                "Completed: " + color(str(stats.completed), role(theme, "completed"), style("bold")),
                "Remaining: " + color(str(stats.remaining), role(theme, "remaining"), style("bold")),
            ]
        )
    ]
    if stats.progress is not None:
        bar = color(progress_bar(stats.progress), role(theme, "done"))
        lines.append(f"Progress: {stats.progress}% {bar}")
    return lines


def format_header(theme: Theme = Theme.LIGHT) -> List[str]:
    return [
        color(TITLE, role(theme, "title"), style("bold")),
        color(TAGLINE, role(theme, "muted")),
    ]
