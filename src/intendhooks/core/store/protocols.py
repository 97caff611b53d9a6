"""Store Protocol 接口定义

DocumentStore 是按集合 + 文档 id 寻址的文档存储网关，
使用 Python Protocol 实现结构化子类型（duck typing），便于替换实现。
"""

from collections.abc import AsyncIterator, Sequence
from typing import Any, Protocol


class DocumentStore(Protocol):
    """文档存储接口

    契约：
    - get: 文档不存在返回 None，不视为错误；失败抛 StoreReadError
    - query: 返回惰性异步序列；打开或迭代失败抛 StoreQueryError
    - upsert: 文档不存在则创建；只写入 fields 列出的字段，
      data 中未列出的字段绝不覆盖已有文档的值；失败抛 StoreWriteError
    """

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """按 id 读取文档"""
        ...

    def query(
        self,
        collection: str,
        *,
        where: tuple[str, Any],
        order_by: str,
        descending: bool = False,
        fields: Sequence[str] | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """等值过滤 + 单字段排序查询，fields 不为 None 时只返回所选字段"""
        ...

    async def upsert(
        self,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        fields: Sequence[str],
    ) -> dict[str, Any]:
        """按字段列表部分写入，返回写入后的完整文档"""
        ...
