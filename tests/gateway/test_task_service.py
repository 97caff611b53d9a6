"""TaskService 测试

测试内容：
1. list_user_tasks 按 updated_at 倒序，不含 message / speed_rating
2. get_current_task 的各种缺省情况
3. update_speed_rating / update_message 守卫读取与字段保持
"""

from datetime import UTC, datetime, timedelta

import pytest
from intendhooks.core.exceptions import StoreQueryError
from intendhooks.core.models import Task, TaskNotFound, User
from intendhooks.gateway.services.task_service import TaskService

_ALL_FIELDS = ["goal_name", "username", "task_name", "color", "updated_at", "message", "speed_rating"]


async def _put_task(store_group, **kwargs) -> Task:
    kwargs.setdefault("goal_name", "G")
    kwargs.setdefault("username", "alice")
    kwargs.setdefault("color", "#fff")
    kwargs.setdefault("updated_at", datetime.now(UTC))
    return await store_group.task_store.upsert_task(Task(**kwargs), _ALL_FIELDS)


class TestListUserTasks:
    async def test_sorted_by_updated_at_desc(self, store_group):
        base = datetime(2026, 3, 1, tzinfo=UTC)
        await _put_task(store_group, task_name="first", updated_at=base)
        await _put_task(store_group, task_name="third", updated_at=base + timedelta(hours=2))
        await _put_task(store_group, task_name="second", updated_at=base + timedelta(hours=1))
        await _put_task(store_group, task_name="other", username="bob", updated_at=base)

        tasks = await TaskService(store_group).list_user_tasks("alice")

        assert [t.task_name for t in tasks] == ["third", "second", "first"]
        assert all(
            a.updated_at > b.updated_at for a, b in zip(tasks, tasks[1:], strict=False)
        )

    async def test_enrichment_fields_not_returned(self, store_group):
        await _put_task(store_group, task_name="t", message="hi", speed_rating=3)

        tasks = await TaskService(store_group).list_user_tasks("alice")

        assert len(tasks) == 1
        assert tasks[0].message is None
        assert tasks[0].speed_rating is None

    async def test_user_without_tasks_is_empty(self, store_group):
        assert await TaskService(store_group).list_user_tasks("nobody") == []

    async def test_query_failure_raises(self, store_group):
        await store_group.conn.close()
        with pytest.raises(StoreQueryError):
            await TaskService(store_group).list_user_tasks("alice")


class TestGetCurrentTask:
    async def test_unknown_user(self, store_group):
        assert await TaskService(store_group).get_current_task("ghost") is None

    async def test_no_current_task(self, store_group):
        await store_group.user_store.upsert_user(
            User(id="alice", current_task_id="", pomodoro_spent=1),
            ["id", "current_task_id", "pomodoro_spent"],
        )
        assert await TaskService(store_group).get_current_task("alice") is None

    async def test_dangling_reference(self, store_group):
        """引用的任务不存在时返回 None，不修复引用"""
        await store_group.user_store.upsert_user(
            User(id="alice", current_task_id="deleted"),
            ["id", "current_task_id"],
        )

        assert await TaskService(store_group).get_current_task("alice") is None
        user = await store_group.user_store.get_user("alice")
        assert user.current_task_id == "deleted"

    async def test_returns_current_task(self, store_group):
        await _put_task(store_group, task_name="Write spec", message="m")
        await store_group.user_store.upsert_user(
            User(id="alice", current_task_id="Write spec"),
            ["id", "current_task_id"],
        )

        task = await TaskService(store_group).get_current_task("alice")

        assert task is not None
        assert task.task_name == "Write spec"
        assert task.message == "m"


class TestUpdateSpeedRating:
    async def test_missing_task_not_found(self, store_group):
        result = await TaskService(store_group).update_speed_rating("abc", 5)
        assert result == TaskNotFound(task_name="abc")
        assert await store_group.task_store.get_task("abc") is None

    async def test_only_rating_and_timestamp_change(self, store_group):
        original = await _put_task(
            store_group,
            task_name="abc",
            message="keep",
            updated_at=datetime(2026, 1, 1, tzinfo=UTC),
        )

        result = await TaskService(store_group).update_speed_rating("abc", 5)

        assert isinstance(result, Task)
        assert result.speed_rating == 5
        assert result.message == "keep"
        assert result.goal_name == original.goal_name
        assert result.username == original.username
        assert result.color == original.color
        assert result.updated_at > original.updated_at


class TestUpdateMessage:
    async def test_missing_task_not_found(self, store_group):
        result = await TaskService(store_group).update_message("alice", "abc", "hi")
        assert isinstance(result, TaskNotFound)

    async def test_only_message_and_timestamp_change(self, store_group):
        await _put_task(store_group, task_name="abc", username="alice", speed_rating=2)

        result = await TaskService(store_group).update_message("mallory", "abc", "hello")

        assert isinstance(result, Task)
        assert result.message == "hello"
        assert result.speed_rating == 2
        assert result.username == "alice"
        assert result.goal_name == "G"
        assert result.color == "#fff"
