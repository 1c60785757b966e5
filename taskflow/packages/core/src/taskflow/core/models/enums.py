"""枚举定义

TaskStatus / TaskPriority 只列出约定取值，Task 字段本身接受任意字符串。
UpdatePolicy + UPDATE_FIELD_POLICIES 描述部分更新时每个字段的写入规则。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Task 约定状态（不强制）"""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    """Task 约定优先级（不强制）"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class UpdatePolicy(StrEnum):
    """部分更新时单个字段的写入规则"""

    # 字段出现且值非空时才写入；空字符串视同未提供
    SKIP_EMPTY = "skip_empty"
    # 字段出现即写入，空字符串也会覆盖原值
    APPLY_IF_PRESENT = "apply_if_present"


# 可更新字段 -> 写入规则
# description 与其余字段的不对称是既有对外行为，修改前需同步客户端
UPDATE_FIELD_POLICIES: dict[str, UpdatePolicy] = {
    "title": UpdatePolicy.SKIP_EMPTY,
    "description": UpdatePolicy.APPLY_IF_PRESENT,
    "status": UpdatePolicy.SKIP_EMPTY,
    "priority": UpdatePolicy.SKIP_EMPTY,
}
