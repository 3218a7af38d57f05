"""FastAPI 应用主文件

app 创建 + lifespan 管理：TaskStore 创建/关闭 + 中间件 + 错误处理 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from taskboard.core.config import SERVICE_VERSION, get_db_path
from taskboard.core.store import create_task_store

from .config import GatewayConfig, load_gateway_config
from .middleware.error_handler import register_exception_handlers
from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import health, tasks

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时创建 TaskStore，关闭时释放连接

    默认惰性初始化（第一次请求时建立连接并建表）；
    TASKBOARD_EAGER_DB_INIT=true 时在启动阶段完成初始化，失败则启动失败。
    """
    config: GatewayConfig = app.state.config
    db_path = get_db_path()
    task_store = await create_task_store(db_path, eager=config.eager_db_init)
    app.state.task_store = task_store
    log.info("gateway_started", db_path=db_path, eager_db_init=config.eager_db_init)

    try:
        yield
    finally:
        # 关闭：清理数据库连接
        await task_store.close()
        log.info("gateway_stopped")


def create_app(config: GatewayConfig | None = None) -> FastAPI:
    """创建 FastAPI 应用实例"""
    if config is None:
        config = load_gateway_config()

    app = FastAPI(
        title="Task Management API",
        version=SERVICE_VERSION,
        description="任务管理 REST API：创建、筛选查询、状态更新与删除",
        lifespan=lifespan,
    )
    app.state.config = config

    # 注册中间件（顺序：先 Trace 后 Logging，CORS 在最外层）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.cors_origin],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # 初始化日志
    setup_logging()

    register_exception_handlers(app)

    # 注册路由
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
