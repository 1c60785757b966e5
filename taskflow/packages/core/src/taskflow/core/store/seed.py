"""演示数据 -- 服务启动时预置的三条任务"""

from datetime import UTC, datetime

from ..models.enums import TaskPriority, TaskStatus
from ..models.task import Task


def build_demo_tasks(now: datetime | None = None) -> list[Task]:
    """构造演示任务（id 1-3）"""
    created_at = now or datetime.now(UTC)
    return [
        Task(
            id=1,
            title="Setup Docker",
            description="Configure Docker containers",
            status=TaskStatus.COMPLETED.value,
            priority=TaskPriority.HIGH.value,
            created_at=created_at,
        ),
        Task(
            id=2,
            title="Deploy to DigitalOcean",
            description="Deploy application to cloud server",
            status=TaskStatus.IN_PROGRESS.value,
            priority=TaskPriority.HIGH.value,
            created_at=created_at,
        ),
        Task(
            id=3,
            title="Add authentication",
            description="Implement user login and registration",
            status=TaskStatus.PENDING.value,
            priority=TaskPriority.MEDIUM.value,
            created_at=created_at,
        ),
    ]
