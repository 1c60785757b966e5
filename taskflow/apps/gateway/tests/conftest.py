"""apps/gateway 测试配置 -- FastAPI app + httpx AsyncClient fixture"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskflow.core.store import InMemoryTaskStore, build_demo_tasks


@pytest.fixture
def gateway_env(monkeypatch):
    """测试环境变量：关闭 Logfire、限流使用默认值"""
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")
    monkeypatch.delenv("TASKFLOW_ENV", raising=False)
    monkeypatch.delenv("TASKFLOW_RATE_LIMIT_MAX", raising=False)
    monkeypatch.delenv("TASKFLOW_SEED_DEMO_TASKS", raising=False)


@pytest.fixture
def task_store() -> InMemoryTaskStore:
    """预置三条演示任务的 Store"""
    return InMemoryTaskStore(seed=build_demo_tasks())


@pytest_asyncio.fixture
async def app(gateway_env, task_store: InMemoryTaskStore):
    """创建测试用 FastAPI app 实例"""
    from taskflow.gateway.main import create_app

    return create_app(task_store=task_store)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
