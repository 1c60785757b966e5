"""Store Protocol 接口定义

使用 Python Protocol 实现结构化子类型（duck typing），
API 层只依赖此接口，不依赖具体存储实现。
"""

from typing import Protocol

from ..models.task import Task, TaskSummary, TaskUpdate


class TaskStore(Protocol):
    """Task 存储接口"""

    def __len__(self) -> int:
        """当前任务数量"""
        ...

    def list_tasks(
        self,
        status: str | None = None,
        priority: str | None = None,
    ) -> list[Task]:
        """查询任务列表，支持按状态/优先级筛选"""
        ...

    def get_task(self, task_id: int) -> Task | None:
        """根据 id 查询任务"""
        ...

    def create_task(
        self,
        title: str | None,
        description: str | None = None,
        priority: str | None = None,
    ) -> Task:
        """创建任务，title 为空时抛出 TaskValidationError"""
        ...

    def update_task(self, task_id: int, update: TaskUpdate) -> Task | None:
        """部分更新任务，不存在时返回 None"""
        ...

    def delete_task(self, task_id: int) -> Task | None:
        """删除任务，不存在时返回 None"""
        ...

    def summary(self) -> TaskSummary:
        """任务计数汇总"""
        ...
