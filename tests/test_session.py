"""Tests for the interactive Session state."""

import pytest

from todo_mastery.models import Category, Priority, TaskNotFoundError, Theme, ViewFilter
from todo_mastery.operations import NO_MATCHES_MESSAGE, NO_TASKS_MESSAGE
from todo_mastery.repository import TodoRepository
from todo_mastery.session import Session
from todo_mastery.storage import MemoryStore


class TestSession:
    """Test suite for Session."""

    @pytest.fixture
    def repo(self):
        return TodoRepository(MemoryStore())

    @pytest.fixture
    def session(self, repo):
        return Session(repo)

    def test_initial_state(self, session):
        assert session.input_text == ""
        assert session.search == ""
        assert session.view_filter == ViewFilter.ALL
        assert session.editing_id is None
        assert session.editing is False
        assert session.priority == Priority.MEDIUM
        assert session.category == Category.PERSONAL

    def test_submit_blank_input_changes_nothing(self, session, repo):
        session.input_text = "   "
        session.priority = Priority.HIGH

        assert session.submit() is None
        assert repo.tasks == []
        assert session.priority == Priority.HIGH

    def test_submit_adds_with_pending_tags(self, session, repo):
        session.input_text = "Buy milk"
        session.priority = Priority.HIGH
        session.category = Category.SHOPPING

        task = session.submit()

        assert repo.tasks[0] == task
        assert task.text == "Buy milk"
        assert task.priority == Priority.HIGH
        assert task.category == Category.SHOPPING
        assert task.done is False

    def test_submit_resets_input_and_priority_but_keeps_category(self, session):
        session.input_text = "Buy milk"
        session.priority = Priority.HIGH
        session.category = Category.SHOPPING

        session.submit()

        assert session.input_text == ""
        assert session.priority == Priority.MEDIUM
        assert session.category == Category.SHOPPING

    def test_begin_edit_loads_form(self, session, repo):
        task = repo.add("Write report", Priority.HIGH, Category.WORK)

        session.begin_edit(task.id)

        assert session.editing_id == task.id
        assert session.input_text == "Write report"
        assert session.priority == Priority.HIGH
        assert session.category == Category.WORK

    def test_begin_edit_unknown_id(self, session):
        with pytest.raises(TaskNotFoundError):
            session.begin_edit(999)

    def test_submit_in_edit_mode_overwrites_text(self, session, repo):
        task = repo.add("Write report", Priority.HIGH, Category.WORK)
        other = repo.add("Other")

        session.begin_edit(task.id)
        session.input_text = "Write final report"
        session.priority = Priority.LOW
        edited = session.submit()

        assert edited.id == task.id
        assert edited.text == "Write final report"
        assert edited.priority == Priority.HIGH
        assert len(repo.tasks) == 2
        assert repo.get(other.id).text == "Other"
        assert session.editing is False
        assert session.input_text == ""

    def test_blank_submit_in_edit_mode_stays_in_edit(self, session, repo):
        task = repo.add("Keep me")
        session.begin_edit(task.id)
        session.input_text = " "

        assert session.submit() is None
        assert session.editing_id == task.id
        assert repo.get(task.id).text == "Keep me"

    def test_cancel_edit_resets_form(self, session, repo):
        task = repo.add("Write report", Priority.HIGH, Category.WORK)
        session.begin_edit(task.id)

        session.cancel_edit()

        assert session.editing_id is None
        assert session.input_text == ""
        assert session.priority == Priority.MEDIUM
        assert session.category == Category.PERSONAL
        assert repo.get(task.id).text == "Write report"

    def test_toggle_twice(self, session, repo):
        task = repo.add("Task")
        session.toggle(task.id)
        session.toggle(task.id)
        assert repo.get(task.id).done is False

    def test_delete_task_under_edit_cancels_edit(self, session, repo):
        task = repo.add("Task")
        session.begin_edit(task.id)

        assert session.delete(task.id) is True
        assert session.editing is False
        assert session.input_text == ""

    def test_delete_other_task_keeps_edit(self, session, repo):
        task = repo.add("Task")
        other = repo.add("Other")
        session.begin_edit(task.id)

        session.delete(other.id)

        assert session.editing_id == task.id

    def test_toggle_theme(self, session, repo):
        assert session.toggle_theme() == Theme.DARK
        assert repo.dark_mode is True

    def test_view_empty_collection(self, session):
        view = session.view()
        assert view.tasks == []
        assert view.empty_message == NO_TASKS_MESSAGE
        assert view.stats.progress is None

    def test_view_completed_filter_without_completed_tasks(self, session, repo):
        repo.add("Open task")
        session.view_filter = ViewFilter.COMPLETED

        view = session.view()

        assert view.tasks == []
        assert view.empty_message == NO_MATCHES_MESSAGE
        assert view.stats.total == 1

    def test_view_search_and_counts(self, session, repo):
        milk = repo.add("Buy milk")
        repo.add("Write report")
        repo.toggle(milk.id)
        session.search = "milk"

        view = session.view()

        assert [t.text for t in view.tasks] == ["Buy milk"]
        assert view.empty_message is None
        assert view.stats.total == 2
        assert view.stats.completed == 1
        assert view.stats.remaining == 1
        assert view.stats.progress == 50
