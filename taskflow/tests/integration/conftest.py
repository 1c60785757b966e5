"""集成测试共享 fixture"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskflow.core.store import create_task_store
from taskflow.deployer import CommandResult


class ScriptedRunner:
    """不执行真实命令，只记录 argv 的命令执行器"""

    def __init__(self) -> None:
        self.commands: list[str] = []

    async def run(self, argv: list[str], cwd: str | None = None) -> CommandResult:
        self.commands.append(" ".join(argv))
        return CommandResult(returncode=0, stdout="ok")


async def no_sleep(delay: float) -> None:
    return None


@pytest.fixture
def integration_env(monkeypatch):
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")
    monkeypatch.setenv("TASKFLOW_ENV", "production")
    monkeypatch.delenv("TASKFLOW_RATE_LIMIT_MAX", raising=False)


@pytest.fixture
def gateway_app(integration_env):
    from taskflow.gateway.main import create_app

    return create_app(task_store=create_task_store(seed_demo=True))


@pytest_asyncio.fixture
async def client(gateway_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=gateway_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def runner() -> ScriptedRunner:
    return ScriptedRunner()


@pytest.fixture
def sleep():
    return no_sleep
