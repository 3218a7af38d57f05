"""structlog 配置模块

structlog 与标准库 logging 共用一个 ProcessorFormatter，
uvicorn / aiosqlite 等第三方库的日志也以相同格式输出。

环境变量:
    TASKBOARD_LOG_FORMAT: "dev"（默认，可读输出）或 "json"（结构化输出）
    TASKBOARD_LOG_LEVEL: 日志级别（默认 INFO）
"""

import logging
import os

import structlog

LOG_FORMATS = ("dev", "json")

# 请求日志由 LoggingMiddleware 输出，uvicorn 自带的 access 日志会重复；
# aiosqlite 在 DEBUG 级别逐条打印语句
_QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "aiosqlite": logging.INFO,
}


def _resolve_level(name: str) -> tuple[int, bool]:
    level = logging.getLevelNamesMapping().get(name.strip().upper())
    if level is None:
        return logging.INFO, False
    return level, True


def _build_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """初始化 structlog 与标准库 logging

    参数为空时从环境变量读取。可重复调用，每次都替换根 logger 的 handler。
    """
    if log_format is None:
        log_format = os.environ.get("TASKBOARD_LOG_FORMAT", "dev")
    if log_level is None:
        log_level = os.environ.get("TASKBOARD_LOG_LEVEL", "INFO")

    requested_format = log_format
    log_format = log_format.strip().lower()
    format_ok = log_format in LOG_FORMATS
    if not format_ok:
        log_format = "dev"
    level, level_ok = _resolve_level(log_level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_format == "json":
        # 异常栈作为 exception 字段输出
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _build_renderer(log_format),
            ],
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(level, quiet_level))

    log = structlog.get_logger()
    if not format_ok:
        log.warning("invalid_log_format", value=requested_format, fallback="dev")
    if not level_ok:
        log.warning("invalid_log_level", value=log_level, fallback="INFO")
