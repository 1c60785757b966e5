"""TaskFlow Core Store -- 进程内任务存储

提供工厂函数创建（可选预置演示数据的）Store 实例。
"""

from .protocols import TaskStore
from .seed import build_demo_tasks
from .task_store import InMemoryTaskStore


def create_task_store(seed_demo: bool = True) -> InMemoryTaskStore:
    """创建 TaskStore 实例

    Args:
        seed_demo: 是否预置三条演示任务（id 1-3，下一个 id 为 4）

    Returns:
        InMemoryTaskStore 实例
    """
    seed = build_demo_tasks() if seed_demo else None
    return InMemoryTaskStore(seed=seed)


__all__ = [
    "TaskStore",
    "InMemoryTaskStore",
    "build_demo_tasks",
    "create_task_store",
]
