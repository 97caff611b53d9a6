"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 实例与服务

Store 实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Depends, Request
from intendhooks.core.config import PomodoroPolicy
from intendhooks.core.store import StoreGroup

from .services.event_service import EventService
from .services.task_service import TaskService


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_pomodoro_policy(request: Request) -> PomodoroPolicy:
    """从 app.state 获取番茄钟计数策略，未配置时使用默认策略"""
    return getattr(request.app.state, "pomodoro_policy", None) or PomodoroPolicy()


def get_event_service(
    store_group: StoreGroup = Depends(get_store_group),
    policy: PomodoroPolicy = Depends(get_pomodoro_policy),
) -> EventService:
    return EventService(store_group, policy)


def get_task_service(store_group: StoreGroup = Depends(get_store_group)) -> TaskService:
    return TaskService(store_group)
