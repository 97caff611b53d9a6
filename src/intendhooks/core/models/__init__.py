"""intendhooks Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import Collection, EventKey
from .event import (
    EVENT_KEY_FIELD,
    EVENT_TYPES,
    Colors,
    Event,
    OtherEvent,
    TaskChangeEvent,
    TaskData,
    TimerEndEvent,
    decode_event,
)
from .response import UpdateResponse
from .task import SPEED_RATING_MAX, SPEED_RATING_MIN, TASK_CORE_FIELDS, Task, TaskNotFound
from .user import User

__all__ = [
    # 枚举
    "EventKey",
    "Collection",
    # Event
    "Event",
    "TaskChangeEvent",
    "TimerEndEvent",
    "OtherEvent",
    "TaskData",
    "Colors",
    "EVENT_KEY_FIELD",
    "EVENT_TYPES",
    "decode_event",
    # 文档
    "Task",
    "TaskNotFound",
    "TASK_CORE_FIELDS",
    "SPEED_RATING_MIN",
    "SPEED_RATING_MAX",
    "User",
    # 响应
    "UpdateResponse",
]
