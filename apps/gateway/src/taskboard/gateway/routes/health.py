"""健康检查与服务信息路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，验证 SQLite 连通性（会触发惰性初始化）。
GET /: 服务信息与可用端点列表。
"""

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse
from taskboard.core.config import SERVICE_VERSION
from taskboard.core.models import format_timestamp

log = structlog.get_logger()

router = APIRouter()

ENDPOINTS: dict[str, str] = {
    "GET /health": "Health check",
    "GET /api/tasks": "Get all tasks (with optional filters: status, priority, sortBy)",
    "GET /api/tasks/:id": "Get task by ID",
    "POST /api/tasks": "Create new task",
    "PUT /api/tasks/:id/status": "Update task status",
    "DELETE /api/tasks/:id": "Delete task",
    "GET /docs": "API Documentation",
}


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {
        "success": True,
        "message": "Task Management API is running",
        "timestamp": format_timestamp(datetime.now(UTC)),
        "version": SERVICE_VERSION,
    }


@router.get("/ready")
async def ready(request: Request):
    """Readiness 检查 -- SQLite 可用返回 200，否则 503

    失败原因只写日志，响应中不暴露底层错误信息。
    """
    checks = {}
    all_ok = True

    try:
        await request.app.state.task_store.ping()
        checks["sqlite"] = "ok"
    except Exception as e:
        log.warning("readiness_sqlite_failed", error_type=type(e).__name__, error=str(e))
        checks["sqlite"] = "unavailable"
        all_ok = False

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
        },
    )


@router.get("/")
async def info():
    """服务信息"""
    return {
        "success": True,
        "message": "Welcome to Task Management API",
        "version": SERVICE_VERSION,
        "endpoints": ENDPOINTS,
    }
