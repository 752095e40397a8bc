"""Comprehensive tests for TodoRepository."""

import json
import tempfile
from pathlib import Path

import pytest

from todo_mastery.models import Category, Priority, Theme, ViewFilter
from todo_mastery.repository import TodoRepository
from todo_mastery.storage import THEME_KEY, TODOS_KEY, JsonFileStore, MemoryStore


class TestTodoRepository:
    """Test suite for TodoRepository."""

    @pytest.fixture
    def temp_storage(self):
        """Create a temporary storage file for testing."""
        with tempfile.NamedTemporaryFile(mode="w", delete=False, suffix=".json") as f:
            temp_path = f.name
        # Delete the file immediately - we just need the path
        Path(temp_path).unlink()
        yield temp_path
        # Cleanup
        path = Path(temp_path)
        if path.exists():
            path.unlink()

    @pytest.fixture
    def repo(self, temp_storage):
        """Create a TodoRepository with temporary storage."""
        return TodoRepository(JsonFileStore(temp_storage))

    def test_empty_store_loads_empty_list(self, repo):
        assert repo.tasks == []
        assert repo.theme == Theme.LIGHT
        assert repo.dark_mode is False

    def test_add_task(self, repo):
        """Test adding a task with explicit attributes."""
        task = repo.add("Buy milk", Priority.HIGH, Category.SHOPPING)

        assert task is not None
        assert repo.tasks == [task]
        assert task.priority == Priority.HIGH
        assert task.category == Category.SHOPPING
        assert task.done is False

    def test_add_blank_returns_none_and_does_not_write(self, repo, temp_storage):
        assert repo.add("   ") is None
        assert repo.tasks == []
        assert not Path(temp_storage).exists()

    def test_newest_task_first(self, repo):
        first = repo.add("First")
        second = repo.add("Second")
        assert [t.id for t in repo.tasks] == [second.id, first.id]

    def test_tasks_property_returns_copy(self, repo):
        repo.add("Task")
        repo.tasks.clear()
        assert len(repo.tasks) == 1

    def test_get_task(self, repo):
        task = repo.add("Task")
        assert repo.get(task.id) == task
        assert repo.get(999) is None

    def test_edit(self, repo):
        task = repo.add("Original", Priority.LOW)

        updated = repo.edit(task.id, "Updated")

        assert updated.text == "Updated"
        assert updated.priority == Priority.LOW

    def test_edit_unknown_or_blank(self, repo):
        task = repo.add("Original")
        assert repo.edit(999, "New") is None
        assert repo.edit(task.id, "  ") is None
        assert repo.get(task.id).text == "Original"

    def test_toggle(self, repo):
        task = repo.add("Task")

        assert repo.toggle(task.id).done is True
        assert repo.toggle(task.id).done is False

    def test_toggle_unknown(self, repo):
        assert repo.toggle(999) is None

    def test_delete(self, repo):
        task = repo.add("Task")
        assert repo.delete(task.id) is True
        assert repo.get(task.id) is None
        assert repo.delete(task.id) is False

    def test_delete_only_task_zeroes_stats(self, repo):
        task = repo.add("Only")
        repo.toggle(task.id)

        repo.delete(task.id)

        stats = repo.stats()
        assert (stats.total, stats.completed, stats.remaining) == (0, 0, 0)
        assert stats.progress is None

    def test_view(self, repo):
        milk = repo.add("Buy milk")
        repo.add("Write report")
        repo.toggle(milk.id)

        assert repo.view(search="MILK") == [repo.get(milk.id)]
        assert [t.text for t in repo.view(view_filter=ViewFilter.ACTIVE)] == ["Write report"]

    def test_persistence_across_repository_instances(self, temp_storage):
        """Test that data persists across repository instances."""
        repo1 = TodoRepository(JsonFileStore(temp_storage))
        repo1.add("Buy milk", Priority.HIGH, Category.SHOPPING)
        done = repo1.add("Walk the dog")
        repo1.toggle(done.id)
        repo1.set_theme(Theme.DARK)

        repo2 = TodoRepository(JsonFileStore(temp_storage))

        assert repo2.tasks == repo1.tasks
        assert repo2.theme == Theme.DARK

    def test_every_change_is_written(self):
        store = MemoryStore()
        repo = TodoRepository(store)

        task = repo.add("Task")
        assert len(json.loads(store.get_item(TODOS_KEY))) == 1

        repo.toggle(task.id)
        assert json.loads(store.get_item(TODOS_KEY))[0]["done"] is True

        repo.delete(task.id)
        assert store.get_item(TODOS_KEY) == "[]"

    def test_theme_toggle_persists(self):
        store = MemoryStore()
        repo = TodoRepository(store)

        assert repo.toggle_theme() == Theme.DARK
        assert store.get_item(THEME_KEY) == "dark"
        assert repo.toggle_theme() == Theme.LIGHT
        assert store.get_item(THEME_KEY) == "light"

    @pytest.mark.parametrize("stored", [None, "light", "", "DARK", "blue"])
    def test_only_dark_loads_dark(self, stored):
        items = {} if stored is None else {THEME_KEY: stored}
        assert TodoRepository(MemoryStore(items)).theme == Theme.LIGHT

    def test_dark_loads_dark(self):
        assert TodoRepository(MemoryStore({THEME_KEY: "dark"})).dark_mode is True

    def test_malformed_stored_tasks_raise(self):
        with pytest.raises(json.JSONDecodeError):
            TodoRepository(MemoryStore({TODOS_KEY: "not json"}))

    def test_repository_uses_default_storage(self, monkeypatch, tmp_path):
        """Test that repository creates default storage if none provided."""
        monkeypatch.setenv("TODO_DB_PATH", str(tmp_path / "todos.json"))
        repo = TodoRepository()
        assert isinstance(repo.store, JsonFileStore)
        assert repo.store.file_path == tmp_path / "todos.json"

    def test_repository_uses_custom_storage(self):
        store = MemoryStore()
        assert TodoRepository(store).store is store
