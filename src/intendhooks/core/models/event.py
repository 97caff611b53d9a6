"""Webhook Event 模型 -- 判别联合（discriminated union）

按 eventKey 字段在固定表中查找变体：
- "nexa.change"             -> TaskChangeEvent
- "timer.pomo.workcomplete" -> TimerEndEvent
- 其余任意字符串            -> OtherEvent（正常解码，下游忽略）

只有 eventKey 缺失/非字符串，或已识别变体的 payload 不合法时才报 MalformedEventError。
字段只按线上名（goalName / nexa / _id）解码，Python 属性名不作为别名接受。
"""

from typing import Any, ClassVar

from pydantic import BaseModel, Field, ValidationError

from ..exceptions import MalformedEventError
from .enums import EventKey

EVENT_KEY_FIELD = "eventKey"


class TaskData(BaseModel):
    """nexa 节点：任务文本与外部 id"""

    text: str = Field(description="任务显示文本，同时作为 Task 文档 id")
    id: str = Field(alias="_id", description="外部应用中的任务 id（未使用）")


class Colors(BaseModel):
    color: str


class TaskChangeEvent(BaseModel):
    """nexa.change -- 用户切换/修改了当前任务"""

    event_key: ClassVar[EventKey] = EventKey.TASK_CHANGE

    goal_name: str = Field(alias="goalName", description="所属目标名")
    username: str
    task: TaskData = Field(alias="nexa")
    colors: Colors


class TimerEndEvent(BaseModel):
    """timer.pomo.workcomplete -- 一个番茄钟工作时段结束"""

    event_key: ClassVar[EventKey] = EventKey.TIMER_END

    username: str


class OtherEvent(BaseModel):
    """未识别的事件，不携带 payload"""

    event_key: str


Event = TaskChangeEvent | TimerEndEvent | OtherEvent

EVENT_TYPES: dict[str, type[TaskChangeEvent] | type[TimerEndEvent]] = {
    EventKey.TASK_CHANGE.value: TaskChangeEvent,
    EventKey.TIMER_END.value: TimerEndEvent,
}


def decode_event(payload: Any) -> Event:
    """将入站 JSON 对象解码为 Event

    Args:
        payload: 已解析的 JSON 值

    Returns:
        TaskChangeEvent / TimerEndEvent / OtherEvent

    Raises:
        MalformedEventError: payload 非对象、eventKey 缺失或非字符串、
            已识别变体的字段缺失或类型错误
    """
    if not isinstance(payload, dict):
        raise MalformedEventError("Event payload must be a JSON object")

    event_key = payload.get(EVENT_KEY_FIELD)
    if not isinstance(event_key, str):
        raise MalformedEventError(
            f"Event payload requires a string '{EVENT_KEY_FIELD}' field"
        )

    event_type = EVENT_TYPES.get(event_key)
    if event_type is None:
        return OtherEvent(event_key=event_key)

    try:
        return event_type.model_validate(payload)
    except ValidationError as e:
        raise MalformedEventError(
            f"Invalid payload for event '{event_key}': {e.error_count()} validation error(s)"
        ) from e
