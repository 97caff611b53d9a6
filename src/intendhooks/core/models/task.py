"""Task Domain Model

tasks 集合以任务文本（task_name）作为文档 id：
task_name 既是内容也是身份，修改任务文本会产生新文档而不是重命名旧文档。
"""

from datetime import datetime

from pydantic import BaseModel, Field

# 列表查询与 TaskChange 写入使用的字段集合（不含 message / speed_rating）
TASK_CORE_FIELDS: tuple[str, ...] = (
    "goal_name",
    "username",
    "task_name",
    "color",
    "updated_at",
)

# speedRating 请求体取值范围（32 位有符号整数）
SPEED_RATING_MIN = -(2**31)
SPEED_RATING_MAX = 2**31 - 1


class Task(BaseModel):
    """Task 文档"""

    goal_name: str = Field(default="", description="所属目标名")
    username: str = Field(default="", description="所属用户")
    task_name: str = Field(description="任务文本，同时是文档 id")
    color: str = Field(default="", description="目标颜色")
    updated_at: datetime = Field(description="最后写入时间（UTC）")
    message: str | None = Field(default=None, description="用户留言")
    speed_rating: int | None = Field(default=None, description="速度评分")


class TaskNotFound(BaseModel):
    """守卫读取未找到任务 -- 作为返回值而不是异常"""

    task_name: str
