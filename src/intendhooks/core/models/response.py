"""UpdateResponse -- webhook 处理结果

只反映触发事件实际写入的文档，未涉及的部分为 None（序列化为 null）。
"""

from pydantic import BaseModel

from .task import Task
from .user import User


class UpdateResponse(BaseModel):
    task: Task | None = None
    user: User | None = None
