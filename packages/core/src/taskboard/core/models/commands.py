"""请求命令模型 -- 校验通过后才会构造

每个操作对应一个强类型命令，枚举字段只能取合法值，
因此越过校验边界后不存在非法状态。
"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import SortField, TaskPriority, TaskStatus


class CreateTaskCommand(BaseModel):
    """创建任务命令"""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1, description="已清洗的标题")
    description: str = Field(default="", description="已清洗的描述")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)


class UpdateStatusCommand(BaseModel):
    """状态更新命令 -- status 输入（布尔或字符串）已被解码为 completed"""

    model_config = ConfigDict(frozen=True)

    task_id: str
    completed: bool


class TaskQuery(BaseModel):
    """列表查询条件，所有字段可选"""

    model_config = ConfigDict(frozen=True)

    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    sort_by: SortField | None = None
