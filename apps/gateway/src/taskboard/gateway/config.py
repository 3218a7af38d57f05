"""GatewayConfig -- Gateway 配置加载

从环境变量加载监听地址、CORS 来源等配置。
"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

_TRUE_VALUES = {"1", "true", "yes", "on"}


class GatewayConfig(BaseModel):
    """Gateway 配置 -- 从环境变量加载

    环境变量:
        TASKBOARD_HOST: 监听地址（默认 0.0.0.0）
        TASKBOARD_PORT: 监听端口（默认 3000）
        TASKBOARD_CORS_ORIGIN: 允许的跨域来源（默认 *）
        TASKBOARD_EAGER_DB_INIT: 启动时立即初始化数据库（默认 false，首次请求时初始化）
    """

    host: str = Field(default="0.0.0.0", description="监听地址")
    port: int = Field(default=3000, ge=1, le=65535, description="监听端口")
    cors_origin: str = Field(default="*", description="允许的跨域来源")
    eager_db_init: bool = Field(default=False, description="启动时初始化数据库")


def load_gateway_config() -> GatewayConfig:
    """从环境变量加载 Gateway 配置

    非法的端口值记录 warning 并回退默认值，不阻塞启动。
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKBOARD_HOST"):
        kwargs["host"] = val

    if val := os.environ.get("TASKBOARD_PORT"):
        try:
            port = int(val)
            if not 1 <= port <= 65535:
                raise ValueError(val)
            kwargs["port"] = port
        except ValueError:
            log.warning(
                "invalid_port_config",
                env_var="TASKBOARD_PORT",
                value=val,
                fallback=3000,
            )

    if val := os.environ.get("TASKBOARD_CORS_ORIGIN"):
        kwargs["cors_origin"] = val

    if val := os.environ.get("TASKBOARD_EAGER_DB_INIT"):
        kwargs["eager_db_init"] = val.strip().lower() in _TRUE_VALUES

    return GatewayConfig(**kwargs)
