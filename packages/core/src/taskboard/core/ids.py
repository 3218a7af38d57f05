"""Task ID 生成与格式校验

格式：task_<毫秒时间戳>_<9 位小写 base36 随机串>
"""

import re
import secrets
import string
from datetime import UTC, datetime

_BASE36_ALPHABET = string.digits + string.ascii_lowercase
_RANDOM_SUFFIX_LENGTH = 9

TASK_ID_PATTERN = re.compile(r"task_[0-9]+_[a-z0-9]+")


def generate_task_id(now: datetime | None = None) -> str:
    """生成新的 task id

    Args:
        now: 创建时间，默认当前 UTC 时间

    Returns:
        形如 task_1703123456789_abc123def 的 id
    """
    if now is None:
        now = datetime.now(UTC)
    millis = int(now.timestamp() * 1000)
    suffix = "".join(
        secrets.choice(_BASE36_ALPHABET) for _ in range(_RANDOM_SUFFIX_LENGTH)
    )
    return f"task_{millis}_{suffix}"


def is_valid_task_id(value: object) -> bool:
    """判断 value 是否是格式合法的 task id"""
    return isinstance(value, str) and TASK_ID_PATTERN.fullmatch(value) is not None
