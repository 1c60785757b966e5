"""异常处理器注册

- 未匹配路由（404/405）: 404 + 可用路由列表
- 请求体解析失败: 400
- 未捕获异常: 500，仅在 development 模式下返回原始错误信息
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse
from taskflow.core.config import is_development_mode

from .middleware.logging_mw import REQUEST_ID_HEADER
from .middleware.security_mw import apply_security_headers

log = structlog.get_logger()

AVAILABLE_ROUTES: list[str] = ["/", "/api", "/api/tasks", "/health"]

ROUTE_NOT_FOUND_MESSAGE = "Route not found"
INVALID_BODY_MESSAGE = "Invalid request body"
INTERNAL_ERROR_MESSAGE = "Something went wrong!"
REDACTED_ERROR = "Internal server error"


def route_not_found_response() -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={
            "success": False,
            "message": ROUTE_NOT_FOUND_MESSAGE,
            "available_routes": AVAILABLE_ROUTES,
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """框架抛出的 HTTP 异常

    任何方法访问未知路径（含已知路径上的不支持方法）统一视为路由不存在。
    """
    if exc.status_code in (404, 405):
        return route_not_found_response()
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """请求体/参数无法解析为请求模型"""
    log.info("request_validation_failed", error_count=len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": INVALID_BODY_MESSAGE,
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """未捕获异常 -- 非 development 模式下不暴露内部细节

    该响应绕过内层中间件，安全响应头与 X-Request-ID 在此补齐。
    """
    log.error(
        "unhandled_exception",
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    response = JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": INTERNAL_ERROR_MESSAGE,
            "error": str(exc) if is_development_mode() else REDACTED_ERROR,
        },
    )
    request_id = getattr(request.state, "request_id", None)
    if request_id is not None:
        response.headers[REQUEST_ID_HEADER] = request_id
    return apply_security_headers(response)


def register_exception_handlers(app: FastAPI) -> None:
    """注册全部异常处理器"""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
