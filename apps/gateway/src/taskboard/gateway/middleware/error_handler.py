"""集中错误处理 -- 将内部异常映射为统一的错误信封

错误信封: {"success": false, "error": <类别>, "message": <说明>, "details": [...]}

| 异常                  | 状态码 | error                 |
|-----------------------|--------|-----------------------|
| ValidationError       | 400    | Validation Error      |
| MalformedRequestError | 400    | Bad Request           |
| TaskNotFoundError     | 404    | Not Found             |
| 未知路由 / 方法        | 404    | Not Found             |
| StorageError          | 500    | Storage Error         |
| 其他                  | 500    | Internal Server Error |
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse
from taskboard.core.exceptions import (
    MalformedRequestError,
    StorageError,
    TaskNotFoundError,
    ValidationError,
)

log = structlog.get_logger()


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: list[str] | None = None,
) -> JSONResponse:
    """构造错误信封响应"""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "message": message,
            "details": details or [],
        },
    )


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    await log.ainfo("request_validation_failed", details=exc.details)
    return error_response(400, "Validation Error", exc.message, exc.details)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [str(err.get("msg", "Invalid value")) for err in exc.errors()]
    await log.ainfo("request_validation_failed", details=details)
    return error_response(400, "Validation Error", "Invalid input data", details)


async def handle_malformed_request(request: Request, exc: MalformedRequestError) -> JSONResponse:
    await log.ainfo("malformed_request_body", reason=str(exc))
    return error_response(400, "Bad Request", "Invalid JSON format", [str(exc)])


async def handle_task_not_found(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    await log.ainfo("task_not_found", task_id=exc.task_id)
    return error_response(404, "Not Found", "Task not found", [str(exc)])


async def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
    # 底层原因只写服务端日志
    original = exc.original_error
    await log.aerror(
        "storage_error",
        error=str(exc),
        cause_type=type(original).__name__ if original else None,
        cause=str(original) if original else None,
    )
    return error_response(
        500,
        "Storage Error",
        "Database operation failed",
        ["Unable to access task storage"],
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code in (404, 405):
        return error_response(
            404,
            "Not Found",
            "The requested endpoint does not exist",
            [f"{request.method} {request.url.path} is not a valid endpoint"],
        )
    return error_response(exc.status_code, "HTTP Error", str(exc.detail))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled_error", error_type=type(exc).__name__)
    return error_response(
        500,
        "Internal Server Error",
        "Something went wrong on the server",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """注册全部异常处理器"""
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(MalformedRequestError, handle_malformed_request)
    app.add_exception_handler(TaskNotFoundError, handle_task_not_found)
    app.add_exception_handler(StorageError, handle_storage_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
