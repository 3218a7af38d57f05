"""任务路由

GET    /api/tasks               任务列表，支持 status / priority 筛选与 sortBy 排序
GET    /api/tasks/{task_id}     任务详情
POST   /api/tasks               创建任务
PUT    /api/tasks/{task_id}/status  更新完成状态
DELETE /api/tasks/{task_id}     删除任务，返回删除前的记录

请求先经过 taskboard.core.validation 校验，失败时抛出的异常
由 middleware.error_handler 统一转换为错误信封。
"""

import json
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel
from starlette.responses import JSONResponse
from taskboard.core.exceptions import MalformedRequestError
from taskboard.core.validation import (
    validate_create_task,
    validate_status_update,
    validate_task_id,
    validate_task_query,
)

from ..deps import get_task_service
from ..services.task_service import TaskService

router = APIRouter()


class TaskEnvelope(BaseModel):
    """单个任务响应信封"""

    success: bool = True
    data: dict[str, Any]
    message: str


class TaskListEnvelope(BaseModel):
    """任务列表响应信封"""

    success: bool = True
    data: list[dict[str, Any]]
    message: str
    count: int


async def read_json_object(request: Request) -> dict[str, Any]:
    """解析请求体为 JSON 对象

    空请求体视为 {}，交给字段校验报告缺失字段。

    Raises:
        MalformedRequestError: 非法 JSON 或顶层不是对象
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise MalformedRequestError("Request body contains invalid JSON") from e
    if not isinstance(payload, dict):
        raise MalformedRequestError("Request body must be a JSON object")
    return payload


@router.get("/api/tasks", response_model=TaskListEnvelope)
async def list_tasks(
    status: str | None = Query(default=None, description="按状态筛选：pending / completed"),
    priority: str | None = Query(default=None, description="按优先级筛选：low / medium / high"),
    sort_by: str | None = Query(
        default=None,
        alias="sortBy",
        description="排序字段：title / priority / status / createdAt（createdAt 倒序）",
    ),
    service: TaskService = Depends(get_task_service),
):
    """查询任务列表，无匹配时返回空列表"""
    query = validate_task_query(
        {"status": status or "", "priority": priority or "", "sortBy": sort_by or ""}
    )
    tasks = await service.list_tasks(query)

    return TaskListEnvelope(
        data=[t.to_public() for t in tasks],
        message=f"Retrieved {len(tasks)} task(s)",
        count=len(tasks),
    )


@router.get("/api/tasks/{task_id}", response_model=TaskEnvelope)
async def get_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
):
    """按 id 查询任务"""
    validate_task_id(task_id)
    task = await service.get_task(task_id)

    return TaskEnvelope(
        data=task.to_public(),
        message="Task retrieved successfully",
    )


@router.post("/api/tasks", status_code=201, response_model=TaskEnvelope)
async def create_task(
    request: Request,
    service: TaskService = Depends(get_task_service),
):
    """创建任务

    请求体: {"title": str, "description"?: str, "priority"?: "low" | "medium" | "high"}
    """
    payload = await read_json_object(request)
    command = validate_create_task(payload)
    task = await service.create_task(command)

    return JSONResponse(
        status_code=201,
        content=TaskEnvelope(
            data=task.to_public(),
            message="Task created successfully",
        ).model_dump(),
    )


@router.put("/api/tasks/{task_id}/status", response_model=TaskEnvelope)
async def update_task_status(
    task_id: str,
    request: Request,
    service: TaskService = Depends(get_task_service),
):
    """更新任务完成状态

    请求体: {"status": true | false | "pending" | "completed"}
    """
    payload = await read_json_object(request)
    command = validate_status_update(task_id, payload)
    task = await service.update_task_status(command)

    return TaskEnvelope(
        data=task.to_public(),
        message="Task status updated successfully",
    )


@router.delete("/api/tasks/{task_id}", response_model=TaskEnvelope)
async def delete_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
):
    """删除任务，data 为删除前的记录"""
    validate_task_id(task_id)
    task = await service.delete_task(task_id)

    return TaskEnvelope(
        data=task.to_public(),
        message="Task deleted successfully",
    )
