"""Taskboard Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .commands import CreateTaskCommand, TaskQuery, UpdateStatusCommand
from .enums import (
    SortField,
    TaskPriority,
    TaskStatus,
    completed_from_status,
    status_from_completed,
)
from .task import Task, format_timestamp, parse_timestamp, truncate_to_millis

__all__ = [
    # 枚举
    "TaskStatus",
    "TaskPriority",
    "SortField",
    "status_from_completed",
    "completed_from_status",
    # Task
    "Task",
    "format_timestamp",
    "parse_timestamp",
    "truncate_to_millis",
    # 命令
    "CreateTaskCommand",
    "UpdateStatusCommand",
    "TaskQuery",
]
