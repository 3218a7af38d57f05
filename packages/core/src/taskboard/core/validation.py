"""请求校验层 -- 在访问存储之前检查并清洗入站字段

所有函数无副作用：成功返回强类型命令，失败抛出 ValidationError，
details 中收集本次请求违反的全部规则（不在第一条错误处短路）。
"""

from collections.abc import Mapping
from typing import Any

from .config import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH
from .exceptions import ValidationError
from .ids import is_valid_task_id
from .models import (
    CreateTaskCommand,
    SortField,
    TaskPriority,
    TaskQuery,
    TaskStatus,
    UpdateStatusCommand,
)

_PRIORITY_VALUES = [p.value for p in TaskPriority]
_STATUS_VALUES = [s.value for s in TaskStatus]
_SORT_FIELD_VALUES = [f.value for f in SortField]

TITLE_REQUIRED = "Title is required and must be a non-empty string"
TITLE_TOO_LONG = f"Title must not exceed {TITLE_MAX_LENGTH} characters"
DESCRIPTION_NOT_STRING = "Description must be a string"
DESCRIPTION_TOO_LONG = f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters"
PRIORITY_INVALID = f"Priority must be one of: {', '.join(_PRIORITY_VALUES)}"
TASK_ID_INVALID = "Invalid task ID format"
STATUS_REQUIRED = "Status is required"
STATUS_INVALID = f"Status must be a boolean or one of: {', '.join(_STATUS_VALUES)}"
STATUS_FILTER_INVALID = f"Status filter must be one of: {', '.join(_STATUS_VALUES)}"
PRIORITY_FILTER_INVALID = f"Priority filter must be one of: {', '.join(_PRIORITY_VALUES)}"
SORT_FIELD_INVALID = f"Sort field must be one of: {', '.join(_SORT_FIELD_VALUES)}"


def sanitize_text(value: str) -> str:
    """去掉尖括号并 trim（最小化的 XSS 防护，不是完整的 HTML 清洗）"""
    return value.replace("<", "").replace(">", "").strip()


def validate_create_task(payload: Mapping[str, Any]) -> CreateTaskCommand:
    """校验创建任务请求体

    Args:
        payload: 已解析的 JSON 对象

    Returns:
        CreateTaskCommand（title/description 已清洗）

    Raises:
        ValidationError: 任一规则被违反，details 包含全部违反项
    """
    errors: list[str] = []

    title = payload.get("title")
    if not isinstance(title, str) or not sanitize_text(title):
        errors.append(TITLE_REQUIRED)
    elif len(title.strip()) > TITLE_MAX_LENGTH:
        errors.append(TITLE_TOO_LONG)

    has_description = "description" in payload
    description = payload.get("description")
    if has_description:
        if not isinstance(description, str):
            errors.append(DESCRIPTION_NOT_STRING)
        elif len(description) > DESCRIPTION_MAX_LENGTH:
            errors.append(DESCRIPTION_TOO_LONG)

    has_priority = "priority" in payload
    priority = payload.get("priority")
    if has_priority and not (isinstance(priority, str) and priority in _PRIORITY_VALUES):
        errors.append(PRIORITY_INVALID)

    if errors:
        raise ValidationError(errors)

    return CreateTaskCommand(
        title=sanitize_text(title),
        description=sanitize_text(description) if has_description else "",
        priority=TaskPriority(priority) if has_priority else TaskPriority.MEDIUM,
    )


def decode_status(value: object) -> bool:
    """将 status 输入解码为 completed 布尔值

    接受两种形式：
    - 布尔值：原样返回
    - 字符串 "pending" / "completed"：completed = (value == "completed")

    Raises:
        ValueError: 其他类型或取值
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value in _STATUS_VALUES:
        return value == TaskStatus.COMPLETED
    raise ValueError(STATUS_INVALID)


def validate_status_update(task_id: str, payload: Mapping[str, Any]) -> UpdateStatusCommand:
    """校验状态更新请求（路径 id + 请求体 status）"""
    errors: list[str] = []

    if not is_valid_task_id(task_id):
        errors.append(TASK_ID_INVALID)

    completed: bool | None = None
    status = payload.get("status")
    if status is None:
        errors.append(STATUS_REQUIRED)
    else:
        try:
            completed = decode_status(status)
        except ValueError as e:
            errors.append(str(e))

    if errors:
        raise ValidationError(errors)

    return UpdateStatusCommand(task_id=task_id, completed=completed)


def validate_task_id(task_id: str) -> str:
    """校验仅含 id 的请求（按 id 查询、删除）"""
    if not is_valid_task_id(task_id):
        raise ValidationError(
            ["Task ID must be in the correct format"],
            message=TASK_ID_INVALID,
        )
    return task_id


def validate_task_query(params: Mapping[str, str]) -> TaskQuery:
    """校验列表查询参数 status / priority / sortBy

    空字符串视为未提供。
    """
    errors: list[str] = []

    status = params.get("status") or None
    priority = params.get("priority") or None
    sort_by = params.get("sortBy") or None

    if status is not None and status not in _STATUS_VALUES:
        errors.append(STATUS_FILTER_INVALID)
    if priority is not None and priority not in _PRIORITY_VALUES:
        errors.append(PRIORITY_FILTER_INVALID)
    if sort_by is not None and sort_by not in _SORT_FIELD_VALUES:
        errors.append(SORT_FIELD_INVALID)

    if errors:
        raise ValidationError(errors, message="Invalid query parameters")

    return TaskQuery(
        status=TaskStatus(status) if status else None,
        priority=TaskPriority(priority) if priority else None,
        sort_by=SortField(sort_by) if sort_by else None,
    )
