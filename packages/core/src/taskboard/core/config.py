"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径与字段长度限制等可配置常量。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKBOARD_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKBOARD_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskboard.db"),
    )


# 标题最大长度（trim 之后计算）
TITLE_MAX_LENGTH: int = 200

# 描述最大长度
DESCRIPTION_MAX_LENGTH: int = 1000

# 服务版本号（/health 与 / 返回）
SERVICE_VERSION: str = "1.0.0"
