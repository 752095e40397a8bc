"""Command-line interface for todo-mastery.

This module provides the CLI interface for the to-do list using argparse.
It supports the following commands:
- add: Create a new task
- list: List tasks, optionally filtered and searched, with counts
- toggle: Flip a task between done and not done
- edit: Replace the text of a task
- delete: Delete a task
- stats: Show task counts and progress
- theme: Show or change the light/dark theme
- shell: Interactive session with pending input, edit mode, search and filter
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from todo_mastery.config import load_settings
from todo_mastery.logging_setup import setup_logging
from todo_mastery.models import Category, Priority, TaskNotFoundError, Theme, ViewFilter
from todo_mastery.operations import compute_stats, empty_message
from todo_mastery.render import format_header, format_list, format_stats, format_task
from todo_mastery.repository import TodoRepository
from todo_mastery.session import Session
from todo_mastery.storage import JsonFileStore

logger = logging.getLogger(__name__)

PRIORITY_CHOICES = [p.value for p in Priority]
CATEGORY_CHOICES = [c.value for c in Category]
FILTER_CHOICES = [f.value for f in ViewFilter]


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="todo",
        description="Organize your life, one task at a time"
    )
    parser.add_argument("--db", help="Path of the JSON store (default: $TODO_DB_PATH or todos.json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Add command
    add_parser = subparsers.add_parser("add", help="Add a new task")
    add_parser.add_argument("text", help="What needs to be done")
    add_parser.add_argument(
        "--priority",
        choices=PRIORITY_CHOICES,
        default=Priority.MEDIUM.value,
        help="Task priority (default: medium)"
    )
    add_parser.add_argument(
        "--category",
        choices=CATEGORY_CHOICES,
        default=Category.PERSONAL.value,
        help="Task category (default: personal)"
    )

    # List command
    list_parser = subparsers.add_parser("list", help="List tasks")
    list_parser.add_argument(
        "--filter",
        choices=FILTER_CHOICES,
        default=ViewFilter.ALL.value,
        help="Show all, active or completed tasks (default: all)"
    )
    list_parser.add_argument("--search", default="", help="Only show tasks containing this text")

    toggle_parser = subparsers.add_parser("toggle", help="Toggle a task between done and not done")
    toggle_parser.add_argument("id", type=int, help="Task ID")

    edit_parser = subparsers.add_parser("edit", help="Replace the text of a task")
    edit_parser.add_argument("id", type=int, help="Task ID")
    edit_parser.add_argument("text", help="New task text")

    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("id", type=int, help="Task ID")

    subparsers.add_parser("stats", help="Show task counts and progress")

    theme_parser = subparsers.add_parser("theme", help="Show or change the theme")
    theme_parser.add_argument(
        "mode",
        nargs="?",
        choices=[t.value for t in Theme] + ["toggle"],
        help="New theme, or 'toggle' (prints the current theme if omitted)"
    )

    subparsers.add_parser("shell", help="Start an interactive session")

    return parser


def cmd_add(args: argparse.Namespace, repo: TodoRepository) -> int:
    """Handle the 'add' command.

    Args:
        args: Parsed command-line arguments
        repo: TodoRepository instance

    Returns:
        Exit code (0 for success, 1 if the text is blank)
    """
    task = repo.add(args.text, Priority(args.priority), Category(args.category))
    if task is None:
        print("Error: Task text cannot be empty.", file=sys.stderr)
        return 1

    print(f"Task added: #{task.id} {task.text} [{task.priority.value}] ({task.category.value})")
    return 0


def cmd_list(args: argparse.Namespace, repo: TodoRepository) -> int:
    """Handle the 'list' command.

    Prints the visible tasks (or the empty-state message) followed by the
    counts for the whole list.
    """
    tasks = repo.tasks
    visible = repo.view(args.search, ViewFilter(args.filter))

    for line in format_list(visible, empty_message(tasks, visible), repo.theme):
        print(line)
    print()
    for line in format_stats(compute_stats(tasks), repo.theme):
        print(line)

    return 0


def cmd_toggle(args: argparse.Namespace, repo: TodoRepository) -> int:
    """Handle the 'toggle' command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    task = repo.toggle(args.id)

    if task is None:
        print(f"Error: Task #{args.id} not found.", file=sys.stderr)
        return 1

    state = "done" if task.done else "not done"
    print(f"Task #{task.id} marked as {state}: {task.text}")
    return 0


def cmd_edit(args: argparse.Namespace, repo: TodoRepository) -> int:
    """Handle the 'edit' command.

    Args:
        args: Parsed command-line arguments
        repo: TodoRepository instance

    Returns:
        Exit code (0 for success, 1 if the text is blank or the task is missing)
    """
    if not args.text.strip():
        print("Error: Task text cannot be empty.", file=sys.stderr)
        return 1

    task = repo.edit(args.id, args.text)
    if task is None:
        print(f"Error: Task #{args.id} not found.", file=sys.stderr)
        return 1

    print(f"Task #{task.id} updated: {task.text}")
    return 0


def cmd_delete(args: argparse.Namespace, repo: TodoRepository) -> int:
    """Handle the 'delete' command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    deleted = repo.delete(args.id)

    if not deleted:
        print(f"Error: Task #{args.id} not found.", file=sys.stderr)
        return 1

    print(f"Task #{args.id} deleted.")
    return 0


def cmd_stats(args: argparse.Namespace, repo: TodoRepository) -> int:
    """Handle the 'stats' command.

    Returns:
        Exit code (always 0)
    """
    for line in format_stats(repo.stats(), repo.theme):
        print(line)
    return 0


def cmd_theme(args: argparse.Namespace, repo: TodoRepository) -> int:
    """Handle the 'theme' command.

    Sets or toggles the theme when a mode is given, then prints the current one.

    Args:
        args: Parsed command-line arguments
        repo: TodoRepository instance

    Returns:
        Exit code (always 0)
    """
    if args.mode == "toggle":
        repo.toggle_theme()
    elif args.mode:
        repo.set_theme(Theme(args.mode))

    print(f"Theme: {repo.theme.value}")
    return 0


def cmd_shell(args: argparse.Namespace, repo: TodoRepository) -> int:
    """Handle the 'shell' command by running an interactive session.

    Returns:
        Exit code (0 once the session ends)
    """
    Shell(Session(repo)).run()
    return 0


SHELL_HELP = """Commands:
  add <text>          Add a task with the pending priority/category (saves the edit in edit mode)
  priority <p>        Set the pending priority: low, medium, high
  category <c>        Set the pending category: personal, work, shopping, health, education
  search [text]       Only show tasks containing text (no text clears the search)
  filter <f>          Show all, active or completed tasks
  toggle <id>         Toggle a task between done and not done
  edit <id>           Load a task into the form for editing
  cancel              Leave edit mode and reset the form
  rm <id>             Delete a task
  theme               Switch between light and dark
  help                Show this help
  exit                Leave the session"""


def _parse_id(token: str) -> Optional[int]:
    raw = token.lstrip("#").rstrip(".")
    return int(raw) if raw.isdigit() else None


class Shell:
    """Read-eval-print loop driving a Session.

    Every command that changes the list is persisted by the repository as
    it happens, so leaving the loop needs no extra save.
    """

    def __init__(self, session: Session, output: Callable[[str], None] = print):
        self.session = session
        self.output = output

    def prompt(self) -> str:
        session = self.session
        if session.editing:
            return f"edit #{session.editing_id}"
        return f"{session.priority.value}/{session.category.value}"

    def render(self) -> None:
        session = self.session
        theme = session.repository.theme
        view = session.view()
        for line in format_header(theme):
            self.output(line)
        status = f"Filter: {session.view_filter.value}"
        if session.search:
            status += f"  Search: {session.search!r}"
        self.output(status)
        self.output("")
        for line in format_list(view.tasks, view.empty_message, theme):
            self.output(line)
        self.output("")
        for line in format_stats(view.stats, theme):
            self.output(line)

    def run(self, read: Callable[[str], str] = input) -> None:
        """Main loop; redraws the list after each command until 'exit'."""
        try:
            while True:
                self.render()
                line = read(f"\n{self.prompt()}: ")
                if not self.handle(line):
                    break
        except (KeyboardInterrupt, EOFError):
            self.output("")
        self.output("Goodbye.")

    def handle(self, line: str) -> bool:
        """Run one shell command.

        Returns:
            False when the session should end, True otherwise
        """
        line = line.strip()
        if not line:
            return True
        cmd, _, rest = line.partition(" ")
        cmd = cmd.lower()
        rest = rest.strip()

        if cmd in ("exit", "quit"):
            return False
        if cmd == "help":
            self.output(SHELL_HELP)
        elif cmd == "add":
            self._add(rest)
        elif cmd == "priority":
            self._set_choice(rest, Priority, "priority")
        elif cmd == "category":
            self._set_choice(rest, Category, "category")
        elif cmd == "search":
            self.session.search = rest
        elif cmd == "filter":
            self._set_choice(rest, ViewFilter, "view_filter")
        elif cmd == "toggle":
            self._with_id(rest, self._toggle)
        elif cmd == "edit":
            self._with_id(rest, self._edit)
        elif cmd == "cancel":
            self.session.cancel_edit()
        elif cmd in ("rm", "delete"):
            self._with_id(rest, self._delete)
        elif cmd == "theme":
            self.output(f"Theme: {self.session.toggle_theme().value}")
        else:
            self.output("Unknown command. Type 'help' for instructions.")
        return True

    def _add(self, text: str) -> None:
        if text:
            self.session.input_text = text
        editing_id = self.session.editing_id if self.session.input_text.strip() else None
        task = self.session.submit()
        if task is None and editing_id is not None:
            self.output(f"Task #{editing_id} not found.")
        elif task is None:
            self.output("Task text required.")
        else:
            self.output(format_task(task, self.session.repository.theme))

    def _set_choice(self, raw: str, enum_type, attr: str) -> None:
        try:
            value = enum_type(raw.lower())
        except ValueError:
            choices = ", ".join(member.value for member in enum_type)
            self.output(f"Invalid value {raw!r}; choose one of: {choices}")
            return
        setattr(self.session, attr, value)

    def _with_id(self, raw: str, action: Callable[[int], None]) -> None:
        task_id = _parse_id(raw)
        if task_id is None:
            self.output("Invalid id.")
            return
        action(task_id)

    def _toggle(self, task_id: int) -> None:
        if self.session.toggle(task_id) is None:
            self.output(f"Task #{task_id} not found.")

    def _edit(self, task_id: int) -> None:
        try:
            task = self.session.begin_edit(task_id)
        except TaskNotFoundError as exc:
            self.output(str(exc))
            return
        self.output(f"Editing #{task.id}: {task.text}")
        self.output("Type 'add <new text>' to save or 'cancel' to discard.")

    def _delete(self, task_id: int) -> None:
        if self.session.delete(task_id):
            self.output(f"Task #{task_id} deleted.")
        else:
            self.output(f"Task #{task_id} not found.")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:]

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    setup_logging(logging.DEBUG if args.verbose else settings.log_level, settings.log_file)

    if args.command is None:
        parser.print_help()
        return 1

    store = JsonFileStore(args.db) if args.db else None
    try:
        repo = TodoRepository(store)
    except (ValueError, KeyError, OSError) as exc:
        logger.debug("Failed to load stored tasks", exc_info=True)
        print(f"Error: Could not read stored tasks: {exc}", file=sys.stderr)
        return 1

    # Dispatch to command handlers
    commands = {
        "add": cmd_add,
        "list": cmd_list,
        "toggle": cmd_toggle,
        "edit": cmd_edit,
        "delete": cmd_delete,
        "stats": cmd_stats,
        "theme": cmd_theme,
        "shell": cmd_shell,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Error: Unknown command '{args.command}'", file=sys.stderr)
        return 1

    return handler(args, repo)


if __name__ == "__main__":
    sys.exit(main())
