"""Unit tests for the Task entity."""
import pytest

from companion.domain.enums import TaskPriority, TaskStatus
from companion.domain.task import Task
from tests.conftest import make_task


class TestTaskCreation:
    def test_defaults(self):
        t = make_task()
        assert t.status == TaskStatus.TODO
        assert t.priority == TaskPriority.MEDIUM
        assert t.description is None

    def test_priority_case_insensitive(self):
        assert make_task(priority="high").priority == TaskPriority.HIGH

    def test_empty_title_rejected(self):
        with pytest.raises(ValueError):
            Task(title="")

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError, match="Unknown task status"):
            make_task(status="blocked")

    def test_unknown_priority_rejected(self):
        with pytest.raises(ValueError, match="Unknown task priority"):
            make_task(priority="Urgent")


class TestTaskMove:
    def test_move_changes_only_status(self):
        t = make_task(description="100 runs", priority="High", due_date="2024-06-01")
        before = t.to_dict()
        t.move_to("complete")
        after = t.to_dict()
        assert after["status"] == "complete"
        before.pop("status")
        after.pop("status")
        assert before == after

    def test_move_to_unknown_lane_raises(self):
        with pytest.raises(ValueError):
            make_task().move_to("archived")


class TestTaskApplyUpdate:
    def test_partial_update(self):
        t = make_task()
        t.apply_update({"description": "Auto-battle", "priority": "Low"})
        assert t.description == "Auto-battle"
        assert t.priority == TaskPriority.LOW

    def test_invalid_status_leaves_task_untouched(self):
        t = make_task()
        with pytest.raises(ValueError):
            t.apply_update({"title": "Changed", "status": "nope"})
        assert t.title == "Farm Dragon 20"


class TestTaskSerialization:
    def test_to_dict_values(self):
        d = make_task(status="in-progress").to_dict()
        assert d["status"] == "in-progress"
        assert d["priority"] == "Medium"

    def test_from_dict_accepts_due_date_alias(self):
        t = Task.from_dict({"title": "Clan Boss", "dueDate": "2024-07-01"})
        assert t.due_date == "2024-07-01"
        assert t.status == TaskStatus.TODO
