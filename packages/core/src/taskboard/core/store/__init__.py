"""Taskboard Core Store -- SQLite 持久化实现

提供工厂函数创建 TaskStore 实例。
"""

from pathlib import Path

from .protocols import TaskStore
from .sqlite_init import init_db, verify_wal_mode
from .task_store import SqliteTaskStore, build_order_by_clause, build_where_clause


async def create_task_store(db_path: str | Path, eager: bool = False) -> SqliteTaskStore:
    """创建 TaskStore 实例

    Args:
        db_path: SQLite 数据库文件路径
        eager: True 时立即建立连接并建表，否则在第一次操作时惰性初始化

    Returns:
        SqliteTaskStore 实例
    """
    store = SqliteTaskStore(db_path)
    if eager:
        await store.initialize()
    return store


__all__ = [
    "TaskStore",
    "SqliteTaskStore",
    "create_task_store",
    "build_where_clause",
    "build_order_by_clause",
    "init_db",
    "verify_wal_mode",
]
