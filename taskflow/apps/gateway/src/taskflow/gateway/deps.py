"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 与 HealthReporter

实例挂在 app.state 上，由 create_app() 创建，生命周期与进程一致。
"""

from fastapi import Request
from taskflow.core.store import TaskStore

from .services.health_reporter import HealthReporter


def get_task_store(request: Request) -> TaskStore:
    """从 app.state 获取 TaskStore 实例"""
    return request.app.state.task_store


def get_health_reporter(request: Request) -> HealthReporter:
    """从 app.state 获取 HealthReporter 实例"""
    return request.app.state.health_reporter
