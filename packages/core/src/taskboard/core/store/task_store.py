"""TaskStore SQLite 实现

存储层独占 tasks 表的读写。连接在第一次操作时惰性建立（同时建表），
之后所有操作复用同一个连接，直到 close()。

并发说明：update_task_status 与 delete_task 都是两次往返
（写后读 / 读后写），不在同一事务内。同一 id 上的并发删除与更新
可能表现为较晚的 TaskNotFoundError，这是接受的行为。
"""

import asyncio
import contextlib
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from pathlib import Path

import aiosqlite
import structlog

from ..exceptions import StorageError, TaskNotFoundError
from ..ids import generate_task_id
from ..models import (
    CreateTaskCommand,
    SortField,
    Task,
    TaskQuery,
    TaskStatus,
    format_timestamp,
    parse_timestamp,
    status_from_completed,
    truncate_to_millis,
)
from .sqlite_init import init_db

log = structlog.get_logger()

# 排序子句白名单：只有这里的列名会拼进 SQL，取值全部走参数绑定。
# 末尾的 rowid 保证同值时结果稳定。
_ORDER_BY_CLAUSES: dict[SortField, str] = {
    SortField.CREATED_AT: "createdAt DESC, rowid DESC",
    SortField.TITLE: "title ASC, rowid ASC",
    SortField.PRIORITY: "priority ASC, rowid ASC",
    SortField.STATUS: "status ASC, rowid ASC",
}

# 未指定 sortBy 时按插入顺序
_DEFAULT_ORDER_BY = "rowid ASC"


def build_where_clause(query: TaskQuery) -> tuple[str, list[str]]:
    """构造 WHERE 子句，status / priority 为可选的等值条件，同时存在时取 AND

    Returns:
        (where_clause, params)，无条件时 where_clause 为空字符串
    """
    conditions: list[str] = []
    params: list[str] = []

    if query.status is not None:
        conditions.append("status = ?")
        params.append(query.status.value)

    if query.priority is not None:
        conditions.append("priority = ?")
        params.append(query.priority.value)

    where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""
    return where_clause, params


def build_order_by_clause(sort_by: SortField | None) -> str:
    """构造 ORDER BY 子句"""
    if sort_by is None:
        return f"ORDER BY {_DEFAULT_ORDER_BY}"
    return f"ORDER BY {_ORDER_BY_CLAUSES[sort_by]}"


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现

    由调用方显式构造并在关闭时调用 close()，不存在模块级单例。
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = str(db_path)
        self._conn: aiosqlite.Connection | None = None
        self._init_lock = asyncio.Lock()

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def is_initialized(self) -> bool:
        return self._conn is not None

    async def initialize(self) -> None:
        """建立连接并创建表结构（幂等）

        并发的首次调用共享同一次初始化。失败时抛出 StorageError，
        store 保持未初始化状态，不自动重试。
        """
        if self._conn is not None:
            return

        async with self._init_lock:
            if self._conn is not None:
                return

            try:
                Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
                conn = await aiosqlite.connect(self._db_path)
            except (aiosqlite.Error, OSError) as e:
                log.error("task_store_connect_failed", db_path=self._db_path, error=str(e))
                raise StorageError(f"Failed to connect to database: {e}", e) from e

            try:
                conn.row_factory = aiosqlite.Row
                await init_db(conn)
            except aiosqlite.Error as e:
                await conn.close()
                log.error("task_store_schema_failed", db_path=self._db_path, error=str(e))
                raise StorageError(f"Failed to create table: {e}", e) from e

            self._conn = conn
            log.info("task_store_initialized", db_path=self._db_path)

    async def close(self) -> None:
        """释放连接；从未初始化时为空操作"""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()
        log.info("task_store_closed", db_path=self._db_path)

    async def ping(self) -> None:
        """连通性检查（readiness 使用）"""
        conn = await self._connection()
        async with self._guard("ping", conn):
            cursor = await conn.execute("SELECT 1")
            await cursor.fetchone()

    async def create_task(self, command: CreateTaskCommand) -> Task:
        """创建任务：分配 id / createdAt / status=pending 并落盘"""
        now = truncate_to_millis(datetime.now(UTC))
        task = Task(
            task_id=generate_task_id(now),
            title=command.title,
            description=command.description,
            priority=command.priority,
            status=TaskStatus.PENDING,
            created_at=now,
        )

        conn = await self._connection()
        async with self._guard("create_task", conn, rollback=True):
            await conn.execute(
                """
                INSERT INTO tasks (id, title, description, priority, status, createdAt)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    task.task_id,
                    task.title,
                    task.description,
                    task.priority.value,
                    task.status.value,
                    format_timestamp(task.created_at),
                ),
            )
            await conn.commit()
        return task

    async def get_task(self, task_id: str) -> Task:
        """根据 id 查询任务

        Raises:
            TaskNotFoundError: 不存在
        """
        conn = await self._connection()
        async with self._guard("get_task", conn):
            cursor = await conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
            row = await cursor.fetchone()
        if row is None:
            raise TaskNotFoundError(task_id)
        return self._row_to_task(row)

    async def list_tasks(self, query: TaskQuery | None = None) -> list[Task]:
        """按条件查询任务列表，无匹配时返回空列表"""
        if query is None:
            query = TaskQuery()
        where_clause, params = build_where_clause(query)
        order_by_clause = build_order_by_clause(query.sort_by)
        sql = " ".join(
            part for part in ("SELECT * FROM tasks", where_clause, order_by_clause) if part
        )

        conn = await self._connection()
        async with self._guard("list_tasks", conn):
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def update_task_status(self, task_id: str, completed: bool) -> Task:
        """更新任务状态并返回重新读取的记录

        Raises:
            TaskNotFoundError: 没有行被更新
        """
        status = status_from_completed(completed)
        conn = await self._connection()
        async with self._guard("update_task_status", conn, rollback=True):
            cursor = await conn.execute(
                "UPDATE tasks SET status = ? WHERE id = ?",
                (status.value, task_id),
            )
            changed = cursor.rowcount
            await conn.commit()

        if changed == 0:
            raise TaskNotFoundError(task_id)
        return await self.get_task(task_id)

    async def delete_task(self, task_id: str) -> Task:
        """删除任务，返回删除前读取到的记录

        Raises:
            TaskNotFoundError: 不存在
        """
        task = await self.get_task(task_id)

        conn = await self._connection()
        async with self._guard("delete_task", conn, rollback=True):
            await conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            await conn.commit()
        return task

    async def _connection(self) -> aiosqlite.Connection:
        """返回已初始化的连接（首次调用时触发初始化）"""
        await self.initialize()
        assert self._conn is not None
        return self._conn

    @contextlib.asynccontextmanager
    async def _guard(
        self,
        operation: str,
        conn: aiosqlite.Connection,
        rollback: bool = False,
    ) -> AsyncIterator[None]:
        """将 aiosqlite 异常转换为 StorageError，原始信息只写日志"""
        try:
            yield
        except aiosqlite.Error as e:
            log.error(
                "task_store_operation_failed",
                operation=operation,
                error_type=type(e).__name__,
                error=str(e),
            )
            if rollback:
                with contextlib.suppress(aiosqlite.Error):
                    await conn.rollback()
            raise StorageError(f"Database operation failed: {operation}", e) from e

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            task_id=row["id"],
            title=row["title"],
            description=row["description"] or "",
            priority=row["priority"],
            status=row["status"],
            created_at=parse_timestamp(row["createdAt"]),
        )
