"""Deployer 包测试 fixtures"""

import pytest
from taskflow.deployer import CommandResult, DeployerConfig, DeployRequest


class FakeRunner:
    """记录调用的假命令执行器

    failures: argv 首两个词 -> 退出码，例如 {("git", "pull"): 1}
    """

    def __init__(self, failures: dict[tuple[str, ...], int] | None = None) -> None:
        self.calls: list[tuple[list[str], str | None]] = []
        self.failures = failures or {}

    async def run(self, argv: list[str], cwd: str | None = None) -> CommandResult:
        self.calls.append((argv, cwd))
        returncode = self.failures.get(tuple(argv[:2]), 0)
        return CommandResult(
            returncode=returncode,
            stdout=f"ran {' '.join(argv)}",
            stderr="boom" if returncode else "",
        )

    @property
    def commands(self) -> list[str]:
        return [" ".join(argv) for argv, _ in self.calls]


class FakeProbe:
    """按预设序列返回健康结果的探测器"""

    def __init__(self, results: list[bool]) -> None:
        self._results = list(results)
        self.urls: list[str] = []

    async def check(self, url: str) -> bool:
        self.urls.append(url)
        return self._results.pop(0) if self._results else False


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def deploy_config() -> DeployerConfig:
    return DeployerConfig(
        workdir="/srv/app",
        branch="main",
        health_url="http://app.local/health",
        startup_delay_s=30,
        health_attempts=5,
        health_interval_s=10,
    )


@pytest.fixture
def deploy_request() -> DeployRequest:
    return DeployRequest(
        ref="refs/heads/main",
        sha="0123456789abcdef0123456789abcdef01234567",
        repository="acme/taskflow",
    )


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_runner():
    """构造 FakeRunner"""
    return FakeRunner


@pytest.fixture
def make_probe():
    """构造 FakeProbe"""
    return FakeProbe
