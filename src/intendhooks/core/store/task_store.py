"""TaskStore -- tasks 集合的类型化访问

文档 id 即 task_name。此处只做模型与文档之间的转换，
字段列表语义由底层 DocumentStore 保证。
"""

from collections.abc import AsyncIterator, Sequence

from ..models.enums import Collection
from ..models.task import TASK_CORE_FIELDS, Task
from .protocols import DocumentStore


class TaskStore:
    """tasks 集合"""

    collection = Collection.TASKS.value

    def __init__(self, documents: DocumentStore) -> None:
        self._documents = documents

    async def get_task(self, task_name: str) -> Task | None:
        """根据 task_name 查询任务"""
        doc = await self._documents.get(self.collection, task_name)
        if doc is None:
            return None
        return Task.model_validate(doc)

    async def upsert_task(self, task: Task, fields: Sequence[str]) -> Task:
        """按字段列表写入任务，返回写入后的完整任务"""
        doc = await self._documents.upsert(
            self.collection,
            task.task_name,
            task.model_dump(),
            fields,
        )
        return Task.model_validate(doc)

    async def iter_tasks_for_user(self, username: str) -> AsyncIterator[Task]:
        """按 updated_at 倒序惰性返回用户的任务（不含 message / speed_rating）"""
        async for doc in self._documents.query(
            self.collection,
            where=("username", username),
            order_by="updated_at",
            descending=True,
            fields=TASK_CORE_FIELDS,
        ):
            yield Task.model_validate(doc)
