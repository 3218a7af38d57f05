"""枚举定义

包含 TaskStatus、TaskPriority、SortField 枚举，
以及布尔完成标记与状态之间的映射。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Task 完成状态"""

    PENDING = "pending"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    """Task 优先级"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SortField(StrEnum):
    """列表查询允许的排序字段（值即对外暴露的字段名）"""

    TITLE = "title"
    PRIORITY = "priority"
    STATUS = "status"
    CREATED_AT = "createdAt"


def status_from_completed(completed: bool) -> TaskStatus:
    """将布尔完成标记映射为状态：True -> completed，False -> pending"""
    return TaskStatus.COMPLETED if completed else TaskStatus.PENDING


def completed_from_status(status: TaskStatus) -> bool:
    """status_from_completed 的逆映射"""
    return status == TaskStatus.COMPLETED
