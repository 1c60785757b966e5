"""Task Domain Model

Task 是系统唯一的实体，存放在进程内存中，进程退出即丢失。
对外 JSON 使用 camelCase 时间字段（createdAt / updatedAt），
updatedAt 在首次更新前不出现在输出中。
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .enums import UPDATE_FIELD_POLICIES, TaskPriority, TaskStatus, UpdatePolicy


class Task(BaseModel):
    """Task 数据模型"""

    id: int = Field(gt=0, description="自增标识，进程生命周期内不复用")
    title: str = Field(min_length=1, description="任务标题")
    description: str = Field(default="", description="任务描述")
    status: str = Field(default=TaskStatus.PENDING.value, description="状态（开放取值）")
    priority: str = Field(default=TaskPriority.MEDIUM.value, description="优先级（开放取值）")
    created_at: datetime = Field(serialization_alias="createdAt", description="创建时间")
    updated_at: datetime | None = Field(
        default=None,
        serialization_alias="updatedAt",
        description="最近一次更新时间，未更新过为 None",
    )

    def to_payload(self) -> dict[str, Any]:
        """序列化为 API 响应中的 JSON 对象"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskCreate(BaseModel):
    """创建任务的输入

    title 在模型层保持可选，缺失/为空由 Store 统一报 TaskValidationError。
    """

    title: str | None = None
    description: str | None = None
    priority: str | None = None


class TaskUpdate(BaseModel):
    """部分更新的输入

    字段是否"出现"取自 model_fields_set，与字段值分开记录；
    实际写入哪些字段由 UPDATE_FIELD_POLICIES 决定。
    显式的 null 视同未提供。
    """

    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None

    def is_present(self, field_name: str) -> bool:
        """字段是否在输入中出现且不为 null"""
        return field_name in self.model_fields_set and getattr(self, field_name) is not None

    def changes(self) -> dict[str, str]:
        """按字段策略计算需要写入的字段

        Returns:
            字段名 -> 新值，仅包含应当覆盖的字段
        """
        result: dict[str, str] = {}
        for field_name, policy in UPDATE_FIELD_POLICIES.items():
            if not self.is_present(field_name):
                continue
            value = getattr(self, field_name)
            if policy is UpdatePolicy.SKIP_EMPTY and not value:
                continue
            result[field_name] = value
        return result


class TaskSummary(BaseModel):
    """任务计数汇总"""

    total: int = 0
    completed: int = 0
    in_progress: int = 0
    pending: int = 0
