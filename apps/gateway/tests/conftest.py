"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient fixture"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskboard.core.store import SqliteTaskStore


@pytest_asyncio.fixture
async def test_app(tmp_path: Path):
    """创建测试用 FastAPI app，手动设置 lifespan 状态"""
    os.environ["TASKBOARD_DB_PATH"] = str(tmp_path / "sqlite" / "test.db")

    from taskboard.gateway.main import create_app

    app = create_app()

    # 手动初始化 Store（绕过 lifespan）
    task_store = SqliteTaskStore(tmp_path / "sqlite" / "test.db")
    app.state.task_store = task_store

    yield app

    await task_store.close()
    os.environ.pop("TASKBOARD_DB_PATH", None)


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
