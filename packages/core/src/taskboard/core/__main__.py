"""CLI 入口模块 -- python -m taskboard.core <command>

支持的命令：
  init-db   创建数据库文件与 tasks 表
  list      按条件列出任务（JSON lines）
"""

import argparse
import asyncio
import json
import sys

import structlog

from .config import get_db_path
from .exceptions import TaskboardError, ValidationError

USAGE = """用法: python -m taskboard.core <command>
命令:
  init-db                                         创建数据库文件与 tasks 表
  list [--status S] [--priority P] [--sort-by F]  列出任务"""


def main(argv: list[str] | None = None) -> int:
    """CLI 主入口，返回进程退出码"""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(USAGE)
        return 1

    command, rest = args[0], args[1:]

    # 日志写 stderr，stdout 只输出命令结果
    if not structlog.is_configured():
        structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr))

    try:
        if command == "init-db":
            asyncio.run(init_database())
        elif command == "list":
            asyncio.run(list_tasks(_parse_list_args(rest)))
        else:
            print(f"未知命令: {command}")
            print("可用命令: init-db, list")
            return 1
    except ValidationError as e:
        for detail in e.details:
            print(f"参数错误: {detail}", file=sys.stderr)
        return 2
    except TaskboardError as e:
        print(f"执行失败: {e}", file=sys.stderr)
        return 1
    return 0


def _parse_list_args(rest: list[str]) -> dict[str, str]:
    parser = argparse.ArgumentParser(prog="python -m taskboard.core list")
    parser.add_argument("--status", default="")
    parser.add_argument("--priority", default="")
    parser.add_argument("--sort-by", dest="sortBy", default="")
    return vars(parser.parse_args(rest))


async def init_database() -> None:
    """创建数据库与表结构"""
    from .store import create_task_store

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store = await create_task_store(db_path, eager=True)
    await store.close()
    print("初始化完成")


async def list_tasks(params: dict[str, str]) -> None:
    """按查询参数输出任务，每行一个 JSON 对象"""
    from .store import create_task_store
    from .validation import validate_task_query

    query = validate_task_query(params)
    store = await create_task_store(get_db_path())

    try:
        tasks = await store.list_tasks(query)
        for task in tasks:
            print(json.dumps(task.to_public(), ensure_ascii=False))
    finally:
        await store.close()


if __name__ == "__main__":
    sys.exit(main())
