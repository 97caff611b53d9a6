"""User Domain Model -- users 集合以 username 作为文档 id"""

from pydantic import BaseModel, Field


class User(BaseModel):
    """User 文档

    current_task_id 为空字符串表示当前没有任务。
    """

    id: str = Field(description="用户名，同时是文档 id")
    current_task_id: str = Field(default="", description="当前任务的 task_name")
    pomodoro_spent: int = Field(default=0, ge=0, description="当前任务已完成的番茄钟数")
