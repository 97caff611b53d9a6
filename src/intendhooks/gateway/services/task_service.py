"""TaskService -- 任务查询与更新业务逻辑

- list_user_tasks: 用户任务列表，按 updated_at 倒序
- get_current_task: User.current_task_id -> Task 两步查询
- update_speed_rating / update_message: 守卫读取 + 字段列表写入，
  任务不存在时返回 TaskNotFound
"""

from datetime import UTC, datetime

import structlog
from intendhooks.core.exceptions import StoreError
from intendhooks.core.models import Task, TaskNotFound
from intendhooks.core.store import StoreGroup

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_user_tasks(self, user_id: str) -> list[Task]:
        """查询用户所有任务，结果完整收集后返回"""
        try:
            return [
                task async for task in self._stores.task_store.iter_tasks_for_user(user_id)
            ]
        except StoreError as e:
            log.error("store_query_failed", collection=e.collection, error=str(e.original_error))
            raise

    async def get_current_task(self, user_id: str) -> Task | None:
        """查询用户当前任务

        用户不存在、没有当前任务、或引用的任务已不存在时返回 None。
        """
        try:
            user = await self._stores.user_store.get_user(user_id)
            if user is None or not user.current_task_id:
                return None
            return await self._stores.task_store.get_task(user.current_task_id)
        except StoreError as e:
            log.error("store_read_failed", collection=e.collection, error=str(e.original_error))
            raise

    async def update_speed_rating(
        self,
        task_name: str,
        speed_rating: int,
    ) -> Task | TaskNotFound:
        """更新速度评分，只写 {updated_at, speed_rating}"""
        if not await self._task_exists(task_name):
            return TaskNotFound(task_name=task_name)

        placeholder = Task(
            task_name=task_name,
            updated_at=datetime.now(UTC),
            speed_rating=speed_rating,
        )
        return await self._write_fields(placeholder, ["updated_at", "speed_rating"])

    async def update_message(
        self,
        user_id: str,
        task_name: str,
        message: str,
    ) -> Task | TaskNotFound:
        """更新任务留言，只写 {updated_at, message}

        username 仅随写入对象携带，不在字段列表中。
        """
        if not await self._task_exists(task_name):
            return TaskNotFound(task_name=task_name)

        placeholder = Task(
            username=user_id,
            task_name=task_name,
            updated_at=datetime.now(UTC),
            message=message,
        )
        return await self._write_fields(placeholder, ["updated_at", "message"])

    async def _task_exists(self, task_name: str) -> bool:
        """守卫读取"""
        try:
            task = await self._stores.task_store.get_task(task_name)
        except StoreError as e:
            log.error("store_read_failed", collection=e.collection, error=str(e.original_error))
            raise
        if task is None:
            log.info("task_not_found", task_name=task_name)
            return False
        return True

    async def _write_fields(self, task: Task, fields: list[str]) -> Task:
        try:
            updated = await self._stores.task_store.upsert_task(task, fields)
        except StoreError as e:
            log.error("store_write_failed", collection=e.collection, error=str(e.original_error))
            raise
        log.info("task_fields_updated", task_name=task.task_name, fields=fields)
        return updated
