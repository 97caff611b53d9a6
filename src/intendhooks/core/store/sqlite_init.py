"""SQLite 数据库初始化

PRAGMA 配置 + documents 表 DDL + 索引创建。
所有集合共用一张表，文档以 JSON 文本存储在 data 列。
"""

import aiosqlite

# documents 表 DDL
_DOCUMENTS_DDL = """
CREATE TABLE IF NOT EXISTS documents (
    collection  TEXT NOT NULL,
    doc_id      TEXT NOT NULL,
    data        TEXT NOT NULL DEFAULT '{}',

    PRIMARY KEY (collection, doc_id)
);
"""

_DOCUMENTS_INDEXES = [
    # tasks 按 username 过滤 + updated_at 倒序
    (
        "CREATE INDEX IF NOT EXISTS idx_documents_username_updated_at ON documents("
        "collection, json_extract(data, '$.username'), json_extract(data, '$.updated_at') DESC);"
    ),
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    await conn.execute(_DOCUMENTS_DDL)

    for idx_sql in _DOCUMENTS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效"""
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
