"""DocumentStore SQLite 实现

文档以 JSON 文本存储，字段列表写入通过 json_patch 合并：
只有 fields 中列出的字段进入 patch，未列出的字段保持原值。
值为 None 的已列出字段会从文档中移除（读取时即为缺省）。

所有请求共用一个连接：写入、提交、回读在写锁内串行执行，
失败回滚不会波及其他请求尚未提交的写入。
"""

import asyncio
import json
import re
from collections.abc import AsyncIterator, Sequence
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from ..exceptions import StoreQueryError, StoreReadError, StoreWriteError

_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# 连接已关闭时 aiosqlite 抛 ValueError
_DRIVER_ERRORS = (aiosqlite.Error, ValueError)


def _json_path(field: str) -> str:
    if not _FIELD_NAME.match(field):
        raise ValueError(f"Invalid document field name: {field!r}")
    return f"'$.{field}'"


def _encode_value(value: Any) -> Any:
    """JSON 编码扩展：datetime 统一为 UTC 微秒精度 ISO 字符串，保证字典序即时间序"""
    if isinstance(value, datetime):
        return value.astimezone(UTC).isoformat(timespec="microseconds")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _encode(data: dict[str, Any]) -> str:
    return json.dumps(data, default=_encode_value, ensure_ascii=False)


class SqliteDocumentStore:
    """DocumentStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn
        self._write_lock = asyncio.Lock()

    async def _fetch_data(self, collection: str, doc_id: str) -> str | None:
        cursor = await self._conn.execute(
            "SELECT data FROM documents WHERE collection = ? AND doc_id = ?",
            (collection, doc_id),
        )
        row = await cursor.fetchone()
        return None if row is None else row[0]

    async def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """按 id 读取文档，不存在返回 None"""
        try:
            raw = await self._fetch_data(collection, doc_id)
        except _DRIVER_ERRORS as e:
            raise StoreReadError(collection, e) from e
        if raw is None:
            return None
        return json.loads(raw)

    async def query(
        self,
        collection: str,
        *,
        where: tuple[str, Any],
        order_by: str,
        descending: bool = False,
        fields: Sequence[str] | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """等值过滤 + 单字段排序，逐行惰性返回"""
        where_field, where_value = where
        direction = "DESC" if descending else "ASC"
        sql = (
            "SELECT data FROM documents "
            f"WHERE collection = ? AND json_extract(data, {_json_path(where_field)}) = ? "
            f"ORDER BY json_extract(data, {_json_path(order_by)}) {direction}"
        )
        try:
            async with self._conn.execute(sql, (collection, where_value)) as cursor:
                async for row in cursor:
                    doc = json.loads(row[0])
                    if fields is not None:
                        doc = {f: doc[f] for f in fields if f in doc}
                    yield doc
        except _DRIVER_ERRORS as e:
            raise StoreQueryError(collection, e) from e

    async def upsert(
        self,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        fields: Sequence[str],
    ) -> dict[str, Any]:
        """按字段列表部分写入（不存在则创建），返回写入后的完整文档

        Raises:
            KeyError: fields 中的字段不在 data 中
            StoreWriteError: 写入或回读失败
        """
        patch = _encode({field: data[field] for field in fields})
        async with self._write_lock:
            try:
                await self._conn.execute(
                    """
                    INSERT INTO documents (collection, doc_id, data)
                    VALUES (?, ?, json_patch('{}', ?))
                    ON CONFLICT (collection, doc_id)
                    DO UPDATE SET data = json_patch(documents.data, ?)
                    """,
                    (collection, doc_id, patch, patch),
                )
                await self._conn.commit()
                raw = await self._fetch_data(collection, doc_id)
            except aiosqlite.Error as e:
                await self._conn.rollback()
                raise StoreWriteError(collection, e) from e
            except ValueError as e:
                raise StoreWriteError(collection, e) from e

        if raw is None:
            raise StoreWriteError(
                collection, LookupError(f"document '{doc_id}' missing after write")
            )
        return json.loads(raw)
