"""TaskFlow Core 异常体系"""


class TaskFlowError(Exception):
    """Core 包基础异常"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TaskValidationError(TaskFlowError):
    """客户端输入不合法（例如缺少 title）

    由 API 层转换为 400 响应。
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        """
        Args:
            message: 返回给客户端的错误描述
            field: 出错的字段名（可选）
        """
        super().__init__(message)
        self.field = field
