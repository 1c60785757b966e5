"""FastAPI 应用主文件

app 创建 + lifespan 管理：TaskStore / HealthReporter 初始化 + 中间件 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from taskflow.core.config import (
    APP_VERSION,
    SERVICE_NAME,
    get_cors_origins,
    get_environment,
    get_port,
    get_rate_limit_max,
    get_rate_limit_window_s,
    should_seed_demo_tasks,
)
from taskflow.core.logging_config import setup_logfire, setup_logging
from taskflow.core.store import TaskStore, create_task_store

from .errors import register_exception_handlers
from .middleware.logging_mw import LoggingMiddleware
from .middleware.security_mw import SecurityHeadersMiddleware
from .middleware.trace_mw import TraceMiddleware
from .rate_limit import build_limiter, rate_limit_exceeded_handler
from .routes import health, index, tasks
from .services.health_reporter import HealthReporter

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期：记录启动与优雅关闭"""
    log.info(
        "taskflow_started",
        port=get_port(),
        environment=get_environment(),
        started_at=datetime.now(UTC).isoformat(),
        task_count=len(app.state.task_store),
    )

    yield

    # 内存数据不落盘，关闭时只记录日志
    log.info("taskflow_shutdown", task_count=len(app.state.task_store))


def create_app(task_store: TaskStore | None = None) -> FastAPI:
    """创建 FastAPI 应用实例

    Args:
        task_store: 注入的 TaskStore；缺省时按 TASKFLOW_SEED_DEMO_TASKS 创建内存 Store
    """
    app = FastAPI(
        title=SERVICE_NAME,
        version=APP_VERSION,
        description="Task management API",
        lifespan=lifespan,
    )

    if task_store is None:
        task_store = create_task_store(seed_demo=should_seed_demo_tasks())
    app.state.task_store = task_store
    app.state.health_reporter = HealthReporter(task_store)

    # 限流：/health 不计入额度
    limiter = build_limiter(get_rate_limit_max(), get_rate_limit_window_s())
    limiter.exempt(health.health)
    app.state.limiter = limiter

    # 注册中间件（后注册的在外层）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 初始化日志
    setup_logging()
    setup_logfire(app)

    register_exception_handlers(app)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # 注册路由
    app.include_router(index.router, tags=["index"])
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(health.router, tags=["health"])

    return app
