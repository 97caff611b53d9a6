"""EventService -- webhook 事件处理业务逻辑

process_event 是唯一入口，每个事件至多执行一个 handler：
- TaskChangeEvent -> handle_task_change（先写 Task，再写 User）
- TimerEndEvent   -> handle_timer_end（读 User，再写 User）
- OtherEvent      -> 忽略

两个文档的写入不是原子的：User 写入失败时 Task 已更新，不做回滚。
"""

from datetime import UTC, datetime

import structlog
from intendhooks.core.config import PomodoroPolicy
from intendhooks.core.exceptions import StoreError
from intendhooks.core.models import (
    TASK_CORE_FIELDS,
    Event,
    OtherEvent,
    Task,
    TaskChangeEvent,
    TimerEndEvent,
    UpdateResponse,
    User,
)
from intendhooks.core.store import StoreGroup

log = structlog.get_logger()


class EventService:
    """webhook 事件业务服务"""

    def __init__(
        self,
        store_group: StoreGroup,
        policy: PomodoroPolicy | None = None,
    ) -> None:
        self._stores = store_group
        self._policy = policy or PomodoroPolicy()

    async def process_event(self, event: Event) -> UpdateResponse:
        """按事件类型分发，返回本次实际写入的文档"""
        response = UpdateResponse()

        match event:
            case TaskChangeEvent():
                task, user = await self.handle_task_change(
                    goal_name=event.goal_name,
                    username=event.username,
                    task_text=event.task.text,
                    color=event.colors.color,
                )
                response.task = task
                response.user = user
            case TimerEndEvent():
                response.user = await self.handle_timer_end(event.username)
            case OtherEvent():
                log.info("event_ignored", event_key=event.event_key)

        return response

    async def handle_task_change(
        self,
        goal_name: str,
        username: str,
        task_text: str,
        color: str,
    ) -> tuple[Task, User]:
        """任务切换：写入 Task 文档，并把它设为用户当前任务

        Raises:
            StoreWriteError: 任一写入失败；Task 写入失败时不会尝试写 User
        """
        new_task = Task(
            goal_name=goal_name,
            username=username,
            task_name=task_text,
            color=color,
            updated_at=datetime.now(UTC),
        )
        try:
            task = await self._stores.task_store.upsert_task(new_task, TASK_CORE_FIELDS)
        except StoreError as e:
            log.error("store_write_failed", collection=e.collection, error=str(e.original_error))
            raise

        user_fields = ["id", "current_task_id"]
        if self._policy.reset_on_task_change:
            user_fields.append("pomodoro_spent")
        try:
            user = await self._stores.user_store.upsert_user(
                User(id=username, current_task_id=task_text, pomodoro_spent=0),
                user_fields,
            )
        except StoreError as e:
            log.error(
                "store_write_failed",
                collection=e.collection,
                error=str(e.original_error),
                task_written=task.task_name,
            )
            raise

        log.info("task_change_applied", username=username, task_name=task.task_name)
        return task, user

    async def handle_timer_end(self, username: str) -> User:
        """番茄钟结束：pomodoro_spent 加一

        只写 {id, pomodoro_spent}，current_task_id 保持原值。

        Raises:
            StoreReadError: 读取用户失败
            StoreWriteError: 写入用户失败
        """
        try:
            existing = await self._stores.user_store.get_user(username)
        except StoreError as e:
            log.error("store_read_failed", collection=e.collection, error=str(e.original_error))
            raise

        if existing is None:
            new_count = self._policy.first_pomodoro_count
        else:
            new_count = existing.pomodoro_spent + 1

        try:
            user = await self._stores.user_store.upsert_user(
                User(id=username, current_task_id="", pomodoro_spent=new_count),
                ["id", "pomodoro_spent"],
            )
        except StoreError as e:
            log.error("store_write_failed", collection=e.collection, error=str(e.original_error))
            raise

        log.info("timer_end_applied", username=username, pomodoro_spent=user.pomodoro_spent)
        return user
