"""枚举定义 -- webhook 事件判别值与集合名"""

from enum import StrEnum


class EventKey(StrEnum):
    """webhook 事件判别字段 eventKey 的已识别取值"""

    TASK_CHANGE = "nexa.change"
    TIMER_END = "timer.pomo.workcomplete"


class Collection(StrEnum):
    """文档存储中的集合"""

    TASKS = "tasks"
    USERS = "users"
