"""Store Protocol 接口定义

定义 TaskStore 的抽象接口，使用 Python Protocol 实现结构化子类型（duck typing）。
Gateway 只依赖此接口，SqliteTaskStore 是默认实现。
"""

from typing import Protocol

from ..models import CreateTaskCommand, Task, TaskQuery


class TaskStore(Protocol):
    """Task 存储接口"""

    async def initialize(self) -> None:
        """建立连接并初始化表结构（幂等）"""
        ...

    async def close(self) -> None:
        """释放连接（未初始化时为空操作）"""
        ...

    async def ping(self) -> None:
        """连通性检查"""
        ...

    async def create_task(self, command: CreateTaskCommand) -> Task:
        """创建任务记录"""
        ...

    async def get_task(self, task_id: str) -> Task:
        """根据 task_id 查询任务，不存在时抛出 TaskNotFoundError"""
        ...

    async def list_tasks(self, query: TaskQuery | None = None) -> list[Task]:
        """查询任务列表，支持按 status / priority 筛选与排序"""
        ...

    async def update_task_status(self, task_id: str, completed: bool) -> Task:
        """更新任务状态，返回更新后的记录"""
        ...

    async def delete_task(self, task_id: str) -> Task:
        """删除任务，返回删除前的记录"""
        ...
