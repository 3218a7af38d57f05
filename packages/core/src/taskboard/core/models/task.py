"""Task Domain Model

tasks 表的唯一实体。id 与 createdAt 在创建时由存储层分配且不可变，
status 只能通过状态更新操作改变。
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from .enums import TaskPriority, TaskStatus


def format_timestamp(value: datetime) -> str:
    """格式化为毫秒精度的 UTC ISO-8601 字符串，如 2023-12-20T10:30:45.123Z"""
    value = value.astimezone(UTC)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """解析 format_timestamp 生成的字符串"""
    return datetime.fromisoformat(value)


def truncate_to_millis(value: datetime) -> datetime:
    """截断到毫秒，保证落盘前后时间戳一致"""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


class Task(BaseModel):
    """Task 数据模型

    Python 侧使用 snake_case 属性，对外 JSON 使用 id / createdAt 字段名。
    """

    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(alias="id", description="唯一标识，task_<毫秒时间戳>_<随机串>")
    title: str = Field(description="任务标题（已清洗）")
    description: str = Field(default="", description="任务描述（已清洗）")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="优先级")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="完成状态")
    created_at: datetime = Field(alias="createdAt", description="创建时间（UTC）")

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return format_timestamp(value)

    def to_public(self) -> dict[str, Any]:
        """对外 JSON 结构：id, title, description, priority, status, createdAt"""
        return self.model_dump(mode="json", by_alias=True)
