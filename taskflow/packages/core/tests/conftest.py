"""packages/core 测试配置 -- 核心层 fixture"""

from datetime import UTC, datetime, timedelta

import pytest
from taskflow.core.store import InMemoryTaskStore, build_demo_tasks

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """可手动推进的时间源"""

    def __init__(self, start: datetime = BASE_TIME) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    """固定起点的可推进时钟"""
    return FakeClock()


@pytest.fixture
def empty_store(clock: FakeClock) -> InMemoryTaskStore:
    """无预置数据的 Store"""
    return InMemoryTaskStore(clock=clock)


@pytest.fixture
def seeded_store(clock: FakeClock) -> InMemoryTaskStore:
    """预置三条演示任务的 Store"""
    return InMemoryTaskStore(seed=build_demo_tasks(BASE_TIME), clock=clock)
