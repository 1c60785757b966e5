"""TaskStore 内存实现

有序列表保存 Task，next_id 计数器只增不减。
所有读写在同一把锁内完成，单次调用内不存在挂起点。
查询返回的是副本，调用方修改不会影响存储内容。
"""

import threading
from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta

import structlog

from ..exceptions import TaskValidationError
from ..models.enums import TaskPriority, TaskStatus
from ..models.task import Task, TaskSummary, TaskUpdate

log = structlog.get_logger()

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class InMemoryTaskStore:
    """TaskStore 的进程内实现"""

    def __init__(
        self,
        seed: Iterable[Task] | None = None,
        clock: Clock | None = None,
    ) -> None:
        """
        Args:
            seed: 预置任务（按给定顺序保存）
            clock: 时间源，默认 datetime.now(UTC)
        """
        self._tasks: list[Task] = [task.model_copy() for task in (seed or [])]
        ids = [task.id for task in self._tasks]
        if len(ids) != len(set(ids)):
            raise ValueError("seed tasks contain duplicate ids")
        self._next_id = max(ids, default=0) + 1
        self._clock = clock or _utc_now
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    @property
    def next_id(self) -> int:
        """下一个将被分配的 id"""
        return self._next_id

    def list_tasks(
        self,
        status: str | None = None,
        priority: str | None = None,
    ) -> list[Task]:
        """查询任务列表，按插入顺序返回

        status / priority 为 None 时不参与过滤，否则要求完全相等（区分大小写）。
        """
        with self._lock:
            return [
                task.model_copy()
                for task in self._tasks
                if (status is None or task.status == status)
                and (priority is None or task.priority == priority)
            ]

    def get_task(self, task_id: int) -> Task | None:
        """根据 id 查询任务"""
        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                return None
            return self._tasks[index].model_copy()

    def create_task(
        self,
        title: str | None,
        description: str | None = None,
        priority: str | None = None,
    ) -> Task:
        """创建任务

        Raises:
            TaskValidationError: title 缺失或为空，此时不修改任何状态
        """
        if not title:
            raise TaskValidationError("Title is required", field="title")

        with self._lock:
            task = Task(
                id=self._next_id,
                title=title,
                description=description or "",
                status=TaskStatus.PENDING.value,
                priority=priority or TaskPriority.MEDIUM.value,
                created_at=self._clock(),
            )
            self._next_id += 1
            self._tasks.append(task)

        log.info("task_created", task_id=task.id, priority=task.priority)
        return task.model_copy()

    def update_task(self, task_id: int, update: TaskUpdate) -> Task | None:
        """部分更新任务

        按 UPDATE_FIELD_POLICIES 写入字段；无论实际改动了哪些字段，
        成功调用都会刷新 updated_at。

        Returns:
            更新后的任务；id 不存在时返回 None
        """
        changes = update.changes()
        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                return None
            current = self._tasks[index]
            changes_with_time = {**changes, "updated_at": self._next_update_time(current)}
            updated = current.model_copy(update=changes_with_time)
            self._tasks[index] = updated

        log.info("task_updated", task_id=task_id, fields=sorted(changes))
        return updated.model_copy()

    def delete_task(self, task_id: int) -> Task | None:
        """删除任务

        Returns:
            被删除的任务；id 不存在时返回 None 且不修改存储
        """
        with self._lock:
            index = self._index_of(task_id)
            if index is None:
                return None
            removed = self._tasks.pop(index)

        log.info("task_deleted", task_id=task_id)
        return removed

    def summary(self) -> TaskSummary:
        """按约定状态统计任务数量"""
        with self._lock:
            statuses = [task.status for task in self._tasks]
        return TaskSummary(
            total=len(statuses),
            completed=statuses.count(TaskStatus.COMPLETED),
            in_progress=statuses.count(TaskStatus.IN_PROGRESS),
            pending=statuses.count(TaskStatus.PENDING),
        )

    def _index_of(self, task_id: int) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _next_update_time(self, task: Task) -> datetime:
        # updated_at 不早于 created_at，且严格晚于上一次 updated_at
        now = self._clock()
        if now < task.created_at:
            now = task.created_at
        if task.updated_at is not None and now <= task.updated_at:
            now = task.updated_at + timedelta(microseconds=1)
        return now
