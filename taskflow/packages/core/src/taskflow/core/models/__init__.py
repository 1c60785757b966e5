"""TaskFlow Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import UPDATE_FIELD_POLICIES, TaskPriority, TaskStatus, UpdatePolicy
from .task import Task, TaskCreate, TaskSummary, TaskUpdate

__all__ = [
    # 枚举
    "TaskStatus",
    "TaskPriority",
    # 更新策略
    "UpdatePolicy",
    "UPDATE_FIELD_POLICIES",
    # Task
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskSummary",
]
