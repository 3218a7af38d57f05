"""TraceMiddleware -- 任务级日志上下文

对 /api/tasks/{task_id}[/status] 请求，把格式合法的 task_id
绑定到 structlog contextvars，使同一请求内的日志都携带 task_id。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from taskboard.core.ids import is_valid_task_id

_TASKS_PREFIX = "/api/tasks/"


def extract_task_id(path: str) -> str | None:
    """从路径中提取 task_id，不是任务路径或 id 格式非法时返回 None"""
    if not path.startswith(_TASKS_PREFIX):
        return None
    candidate = path[len(_TASKS_PREFIX):].split("/", 1)[0]
    return candidate if is_valid_task_id(candidate) else None


class TraceMiddleware(BaseHTTPMiddleware):
    """任务级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        task_id = extract_task_id(request.url.path)
        if task_id:
            structlog.contextvars.bind_contextvars(task_id=task_id)

        return await call_next(request)
