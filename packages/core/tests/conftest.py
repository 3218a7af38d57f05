"""packages/core 测试配置 -- 核心层 fixture"""

from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio
from taskboard.core.models import CreateTaskCommand, TaskPriority


@pytest_asyncio.fixture
async def core_db(tmp_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """核心层已初始化数据库连接"""
    from taskboard.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_path / "core_test.db"))
    conn.row_factory = aiosqlite.Row
    await init_db(conn)
    yield conn
    await conn.close()


@pytest.fixture
def make_command() -> Callable[..., CreateTaskCommand]:
    """CreateTaskCommand 工厂"""

    def _make(
        title: str = "Write docs",
        description: str = "",
        priority: TaskPriority = TaskPriority.MEDIUM,
    ) -> CreateTaskCommand:
        return CreateTaskCommand(title=title, description=description, priority=priority)

    return _make
