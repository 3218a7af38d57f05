"""全局 pytest 配置 -- 临时 SQLite 数据库与 TaskStore fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from taskboard.core.store import SqliteTaskStore


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "test.db"


@pytest_asyncio.fixture
async def task_store(tmp_db_path: Path) -> AsyncGenerator[SqliteTaskStore, None]:
    """提供惰性初始化的 TaskStore，测试结束后关闭"""
    store = SqliteTaskStore(tmp_db_path)
    yield store
    await store.close()
