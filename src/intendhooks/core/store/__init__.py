"""intendhooks Core Store -- SQLite 文档存储实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

from pathlib import Path

import aiosqlite
import structlog

from .document_store import SqliteDocumentStore
from .protocols import DocumentStore
from .sqlite_init import init_db, verify_wal_mode
from .task_store import TaskStore
from .user_store import UserStore

log = structlog.get_logger()


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.documents = SqliteDocumentStore(conn)
        self.task_store = TaskStore(self.documents)
        self.user_store = UserStore(self.documents)


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await init_db(conn)
    if not await verify_wal_mode(conn):
        log.warning("sqlite_wal_disabled", db_path=db_path)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "DocumentStore",
    "SqliteDocumentStore",
    "TaskStore",
    "UserStore",
    "init_db",
]
