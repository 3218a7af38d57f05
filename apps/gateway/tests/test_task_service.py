"""TaskService 测试

覆盖：
1. 各操作委托存储层并返回领域对象
2. TaskNotFoundError / StorageError 原样传播
"""

from pathlib import Path

import pytest
import pytest_asyncio
from taskboard.core.exceptions import StorageError, TaskNotFoundError
from taskboard.core.models import (
    CreateTaskCommand,
    TaskPriority,
    TaskQuery,
    TaskStatus,
    UpdateStatusCommand,
)
from taskboard.core.store import SqliteTaskStore
from taskboard.gateway.services.task_service import TaskService


@pytest_asyncio.fixture
async def service_with_store(tmp_path: Path):
    store = SqliteTaskStore(tmp_path / "test.db")
    service = TaskService(store)

    yield service, store

    await store.close()


class TestTaskService:
    async def test_create_get_update_delete(self, service_with_store):
        service, _ = service_with_store

        task = await service.create_task(
            CreateTaskCommand(title="Write report", priority=TaskPriority.HIGH)
        )
        assert task.status == TaskStatus.PENDING
        assert await service.get_task(task.task_id) == task

        updated = await service.update_task_status(
            UpdateStatusCommand(task_id=task.task_id, completed=True)
        )
        assert updated.status == TaskStatus.COMPLETED

        deleted = await service.delete_task(task.task_id)
        assert deleted == updated

        with pytest.raises(TaskNotFoundError):
            await service.get_task(task.task_id)

    async def test_list_applies_query(self, service_with_store):
        service, _ = service_with_store
        await service.create_task(CreateTaskCommand(title="a", priority=TaskPriority.LOW))
        await service.create_task(CreateTaskCommand(title="b", priority=TaskPriority.HIGH))

        tasks = await service.list_tasks(TaskQuery(priority=TaskPriority.HIGH))
        assert [t.title for t in tasks] == ["b"]

    async def test_update_missing_task_propagates(self, service_with_store):
        service, _ = service_with_store
        with pytest.raises(TaskNotFoundError):
            await service.update_task_status(
                UpdateStatusCommand(task_id="task_1_gone", completed=True)
            )

    async def test_storage_error_propagates(self, tmp_path: Path):
        # 目录路径无法作为数据库打开
        service = TaskService(SqliteTaskStore(tmp_path))
        with pytest.raises(StorageError):
            await service.list_tasks(TaskQuery())
