"""TaskService -- 任务创建/查询/状态更新/删除业务逻辑

每个方法接收已校验的命令，只调用一次存储操作，并记录结果日志。
存储层抛出的 TaskNotFoundError / StorageError 原样向上传播，
由 Gateway 的错误处理器统一转换为 HTTP 响应。
"""

import structlog
from taskboard.core.models import CreateTaskCommand, Task, TaskQuery, UpdateStatusCommand
from taskboard.core.store import TaskStore

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(self, store: TaskStore) -> None:
        self._store = store

    async def create_task(self, command: CreateTaskCommand) -> Task:
        task = await self._store.create_task(command)
        log.info("task_created", task_id=task.task_id, priority=task.priority.value)
        return task

    async def get_task(self, task_id: str) -> Task:
        return await self._store.get_task(task_id)

    async def list_tasks(self, query: TaskQuery) -> list[Task]:
        tasks = await self._store.list_tasks(query)
        log.debug(
            "tasks_listed",
            status=query.status,
            priority=query.priority,
            sort_by=query.sort_by,
            count=len(tasks),
        )
        return tasks

    async def update_task_status(self, command: UpdateStatusCommand) -> Task:
        task = await self._store.update_task_status(command.task_id, command.completed)
        log.info("task_status_updated", task_id=task.task_id, status=task.status.value)
        return task

    async def delete_task(self, task_id: str) -> Task:
        task = await self._store.delete_task(task_id)
        log.info("task_deleted", task_id=task_id)
        return task
