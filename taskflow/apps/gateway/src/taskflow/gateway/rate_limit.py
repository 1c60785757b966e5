"""按客户端 IP 限流（slowapi）

所有客户端共享一个按 IP 计数的应用级额度（默认 15 分钟 100 次），
跨路由累计。/health 不计入额度，部署流程与容器健康检查依赖它始终返回 200。
TASKFLOW_RATE_LIMIT_MAX <= 0 时关闭限流。
"""

import structlog
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


def build_limiter(max_requests: int, window_s: int) -> Limiter:
    """创建按客户端 IP 计数的 Limiter"""
    enabled = max_requests > 0
    return Limiter(
        key_func=get_remote_address,
        application_limits=[f"{max_requests} per {window_s} seconds"] if enabled else [],
        headers_enabled=True,
        enabled=enabled,
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """超限响应：统一信封 + Retry-After

    SlowAPIMiddleware 同步调用该处理器，因此这里不能是协程。
    """
    log.warning("rate_limit_exceeded", client=get_remote_address(request), limit=str(exc.detail))
    response = JSONResponse(
        status_code=429,
        content={"success": False, "message": RATE_LIMIT_MESSAGE},
    )
    # 与 slowapi 默认处理器相同：写入 Retry-After / X-RateLimit-* 头
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)
