"""TraceMiddleware -- 为单任务操作绑定 task_id

从 /api/tasks/{task_id} 路径中提取 task_id，贯穿该请求的所有日志。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class TraceMiddleware(BaseHTTPMiddleware):
    """任务级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        parts = [part for part in request.url.path.split("/") if part]

        # ["api", "tasks", "<id>"]
        if len(parts) == 3 and parts[:2] == ["api", "tasks"]:
            structlog.contextvars.bind_contextvars(task_id=parts[2])

        return await call_next(request)
