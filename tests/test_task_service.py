from typing import List

import pytest

from task_api.models import TaskEntity
from task_api.repositories import InMemoryTaskStore
from task_api.schemas import TaskCreate
from task_api.services import TaskService


class RecordingStore(InMemoryTaskStore):
    """In-memory store that remembers every write it receives."""

    def __init__(self) -> None:
        super().__init__()
        self.saved: List[TaskEntity] = []
        self.deleted: List[TaskEntity] = []

    def save(self, task):
        self.saved.append(task.copy())
        return super().save(task)

    def delete(self, task):
        self.deleted.append(task.copy())
        super().delete(task)


@pytest.fixture()
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture()
def service(store: RecordingStore) -> TaskService:
    return TaskService(store)


def payload(title="Test Task", description="Test Description", completed=False) -> TaskCreate:
    return TaskCreate(title=title, description=description, completed=completed)


def ids(tasks):
    return [t["id"] for t in tasks]


class TestReads:
    def test_get_all_tasks_empty_store(self, service):
        assert service.get_all_tasks() == []

    def test_get_all_tasks_in_creation_order(self, service):
        a = service.create_task(payload(title="A"))
        b = service.create_task(payload(title="B"))
        assert ids(service.get_all_tasks()) == [a["id"], b["id"]]

    def test_get_task_by_id_when_exists(self, service):
        created = service.create_task(payload())
        found = service.get_task_by_id(created["id"])
        assert found is not None
        assert found["title"] == "Test Task"

    def test_get_task_by_id_when_missing_returns_none(self, service):
        assert service.get_task_by_id(99) is None


class TestCreate:
    def test_create_assigns_id_and_defaults(self, service):
        created = service.create_task(TaskCreate(title="Only title"))
        assert isinstance(created["id"], int)
        assert created["description"] is None
        assert created["completed"] is False
        assert created["created_at"] is not None
        assert created["updated_at"] is not None

    def test_round_trip_equals_input_except_id(self, service):
        data = payload(title="Buy milk", description="Get milk", completed=True)
        created = service.create_task(data)
        fetched = service.get_task_by_id(created["id"])
        assert fetched == created
        assert (fetched["title"], fetched["description"], fetched["completed"]) == (
            "Buy milk",
            "Get milk",
            True,
        )

    def test_no_duplicate_detection(self, service):
        first = service.create_task(payload())
        second = service.create_task(payload())
        assert first["id"] != second["id"]
        assert len(service.get_all_tasks()) == 2


class TestUpdate:
    def test_update_replaces_all_mutable_fields(self, service):
        created = service.create_task(payload(title="Initial", description="A", completed=False))
        updated = service.update_task(created["id"], TaskCreate(title="Replaced", completed=True))
        assert updated is not None
        assert updated["id"] == created["id"]
        assert updated["title"] == "Replaced"
        assert updated["description"] is None
        assert updated["completed"] is True
        assert updated["created_at"] == created["created_at"]
        assert service.get_task_by_id(created["id"]) == updated

    def test_update_missing_returns_none_without_write(self, service, store):
        assert service.update_task(424242, payload()) is None
        assert store.saved == []
        assert service.get_all_tasks() == []


class TestDelete:
    def test_delete_existing(self, service):
        created = service.create_task(payload())
        assert service.delete_task(created["id"]) is True
        assert service.get_task_by_id(created["id"]) is None

    def test_delete_missing_leaves_store_unchanged(self, service, store):
        service.create_task(payload())
        before = service.get_all_tasks()
        assert service.delete_task(99) is False
        assert store.deleted == []
        assert service.get_all_tasks() == before


class TestCompletionFilters:
    def test_completed_and_pending_partition_all_tasks(self, service):
        for i in range(6):
            service.create_task(payload(title=f"Task {i}", completed=(i % 2 == 0)))
        completed = service.get_completed_tasks()
        pending = service.get_pending_tasks()

        assert all(t["completed"] for t in completed)
        assert not any(t["completed"] for t in pending)
        assert set(ids(completed)).isdisjoint(ids(pending))
        assert sorted(ids(completed) + ids(pending)) == ids(service.get_all_tasks())

    def test_filters_on_empty_store(self, service):
        assert service.get_completed_tasks() == []
        assert service.get_pending_tasks() == []


class TestSearch:
    def test_search_matches_title_or_description(self, service):
        milk = service.create_task(payload(title="Buy milk", description="Get milk"))
        service.create_task(payload(title="Call mom", description=""))
        assert ids(service.search_tasks("milk")) == [milk["id"]]

    def test_search_is_case_insensitive(self, service):
        a = service.create_task(payload(title="Write REPORT", description=None))
        b = service.create_task(payload(title="Other", description="the report draft"))
        assert ids(service.search_tasks("Report")) == [a["id"], b["id"]]

    def test_empty_keyword_matches_everything(self, service):
        service.create_task(payload(title="One", description=None))
        service.create_task(payload(title="Two", description="x"))
        assert service.search_tasks("") == service.get_all_tasks()

    def test_no_match(self, service):
        service.create_task(payload(title="Buy milk", description="Get milk"))
        assert service.search_tasks("bread") == []


class TestToggle:
    def test_toggle_flips_completed(self, service):
        created = service.create_task(payload(completed=False))
        toggled = service.toggle_task_status(created["id"])
        assert toggled is not None
        assert toggled["completed"] is True
        assert service.get_task_by_id(created["id"])["completed"] is True

    def test_toggle_twice_restores_flag(self, service):
        for flag in (False, True):
            created = service.create_task(payload(completed=flag))
            service.toggle_task_status(created["id"])
            restored = service.toggle_task_status(created["id"])
            assert restored["completed"] is flag

    def test_toggle_keeps_other_fields(self, service):
        created = service.create_task(payload(title="Keep", description="me"))
        toggled = service.toggle_task_status(created["id"])
        assert (toggled["id"], toggled["title"], toggled["description"]) == (created["id"], "Keep", "me")

    def test_toggle_missing_returns_none_without_write(self, service, store):
        assert service.toggle_task_status(7) is None
        assert store.saved == []
