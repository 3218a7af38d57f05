"""Taskboard 异常体系

Gateway 的错误处理器按异常类型映射 HTTP 状态码：
ValidationError -> 400，MalformedRequestError -> 400，
TaskNotFoundError -> 404，StorageError -> 500。
"""


class TaskboardError(Exception):
    """Taskboard 基础异常"""


class ValidationError(TaskboardError):
    """请求字段校验失败

    details 列出所有违反的规则，至少一条。
    """

    def __init__(self, details: list[str], message: str = "Invalid input data") -> None:
        """
        Args:
            details: 违反的规则描述列表
            message: 面向客户端的概要信息
        """
        if not details:
            raise ValueError("ValidationError requires at least one detail")
        super().__init__(message)
        self.message = message
        self.details = list(details)


class TaskNotFoundError(TaskboardError):
    """引用的 task id 不存在"""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task with ID {task_id} does not exist")
        self.task_id = task_id


class MalformedRequestError(TaskboardError):
    """请求体无法解析（非法 JSON 或不是 JSON 对象）"""


class StorageError(TaskboardError):
    """存储层失败（连接、初始化或查询）

    原始异常只用于服务端日志，不返回给客户端。
    """

    def __init__(self, message: str, original_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error
