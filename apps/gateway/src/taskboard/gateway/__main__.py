"""Gateway 启动入口 -- python -m taskboard.gateway

uvicorn 将 SIGINT / SIGTERM 转换为 lifespan shutdown，TaskStore 在此时关闭。
启动或运行期间未捕获的异常记录日志后以退出码 1 结束进程。
"""

import sys

import structlog
import uvicorn

from .config import load_gateway_config
from .middleware.logging_config import setup_logging


def main() -> int:
    setup_logging()
    log = structlog.get_logger()
    config = load_gateway_config()

    log.info("gateway_starting", host=config.host, port=config.port)
    try:
        uvicorn.run(
            "taskboard.gateway.main:app",
            host=config.host,
            port=config.port,
            log_config=None,
        )
    except Exception:
        log.exception("gateway_fatal_error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
