"""依赖注入模块 -- 通过 FastAPI Depends 注入 TaskStore / TaskService

TaskStore 实例通过 app.state 管理，在 lifespan 中创建/关闭。
"""

from fastapi import Depends, Request
from taskboard.core.store import TaskStore

from .services.task_service import TaskService


def get_task_store(request: Request) -> TaskStore:
    """从 app.state 获取 TaskStore 实例"""
    return request.app.state.task_store


def get_task_service(store: TaskStore = Depends(get_task_store)) -> TaskService:
    """为每个请求构造 TaskService"""
    return TaskService(store)
