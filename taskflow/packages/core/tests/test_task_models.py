"""Task 模型与更新策略单元测试"""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError
from taskflow.core.models import (
    UPDATE_FIELD_POLICIES,
    Task,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
    UpdatePolicy,
)


class TestTaskModel:
    def test_defaults(self):
        task = Task(id=1, title="Write docs", created_at=datetime(2025, 1, 1, tzinfo=UTC))
        assert task.description == ""
        assert task.status == TaskStatus.PENDING
        assert task.priority == TaskPriority.MEDIUM
        assert task.updated_at is None

    def test_payload_uses_camel_case_and_omits_missing_updated_at(self):
        task = Task(id=7, title="A", created_at=datetime(2025, 1, 1, tzinfo=UTC))
        payload = task.to_payload()
        assert payload["createdAt"].startswith("2025-01-01T00:00:00")
        assert "updatedAt" not in payload
        assert "created_at" not in payload
        assert set(payload) == {"id", "title", "description", "status", "priority", "createdAt"}

    def test_payload_includes_updated_at_once_set(self):
        now = datetime(2025, 1, 1, tzinfo=UTC)
        task = Task(id=1, title="A", created_at=now, updated_at=now)
        assert "updatedAt" in task.to_payload()

    def test_status_and_priority_accept_any_string(self):
        task = Task(
            id=1,
            title="A",
            status="blocked",
            priority="urgent",
            created_at=datetime(2025, 1, 1, tzinfo=UTC),
        )
        assert task.status == "blocked"
        assert task.priority == "urgent"

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            Task(id=1, title="", created_at=datetime(2025, 1, 1, tzinfo=UTC))

    def test_non_positive_id_rejected(self):
        with pytest.raises(ValidationError):
            Task(id=0, title="A", created_at=datetime(2025, 1, 1, tzinfo=UTC))


class TestUpdatePolicies:
    """部分更新的字段策略"""

    def test_policy_table(self):
        assert UPDATE_FIELD_POLICIES == {
            "title": UpdatePolicy.SKIP_EMPTY,
            "description": UpdatePolicy.APPLY_IF_PRESENT,
            "status": UpdatePolicy.SKIP_EMPTY,
            "priority": UpdatePolicy.SKIP_EMPTY,
        }

    def test_omitted_fields_produce_no_changes(self):
        assert TaskUpdate().changes() == {}

    def test_empty_title_status_priority_are_skipped(self):
        update = TaskUpdate(title="", status="", priority="")
        assert update.changes() == {}

    def test_empty_description_is_applied(self):
        update = TaskUpdate(description="")
        assert update.changes() == {"description": ""}

    def test_null_counts_as_not_provided(self):
        update = TaskUpdate.model_validate({"description": None, "title": None})
        assert update.is_present("description") is False
        assert update.changes() == {}

    def test_presence_tracks_input_keys(self):
        update = TaskUpdate.model_validate({"status": "completed"})
        assert update.is_present("status") is True
        assert update.is_present("title") is False
        assert update.changes() == {"status": "completed"}

    def test_unknown_fields_ignored(self):
        update = TaskUpdate.model_validate({"id": 99, "createdAt": "x", "title": "New"})
        assert update.changes() == {"title": "New"}
