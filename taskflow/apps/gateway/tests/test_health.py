"""健康检查测试

测试内容：
1. GET /health 返回 200 + 完整字段
2. 空 Store 时仍返回 200
3. 内存读取失败时降级为空字典，不影响 200
"""

import psutil
from httpx import AsyncClient
from taskflow.core.store import InMemoryTaskStore
from taskflow.gateway.services.health_reporter import HealthReporter


class TestHealthEndpoint:
    async def test_health_returns_200(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "development"
        assert data["version"]
        assert data["timestamp"]
        assert data["uptime"] >= 0
        assert data["tasks"] == {"total": 3, "completed": 1}
        assert data["memory"]["rss"] > 0

    async def test_health_tracks_store(self, client: AsyncClient):
        await client.put("/api/tasks/2", json={"status": "completed"})
        await client.post("/api/tasks", json={"title": "new"})
        data = (await client.get("/health")).json()
        assert data["tasks"] == {"total": 4, "completed": 2}

    async def test_health_with_empty_store(self, client: AsyncClient, task_store: InMemoryTaskStore):
        for task in task_store.list_tasks():
            task_store.delete_task(task.id)
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["tasks"] == {"total": 0, "completed": 0}

    async def test_environment_label(self, client: AsyncClient, monkeypatch):
        monkeypatch.setenv("TASKFLOW_ENV", "production")
        data = (await client.get("/health")).json()
        assert data["environment"] == "production"

    async def test_memory_failure_degrades(self, client: AsyncClient, monkeypatch):
        def broken_process(*args, **kwargs):
            raise psutil.AccessDenied()

        monkeypatch.setattr(psutil, "Process", broken_process)
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["memory"] == {}


class TestHealthReporter:
    def test_uptime_uses_monotonic_clock(self):
        ticks = iter([100.0, 142.5])
        reporter = HealthReporter(InMemoryTaskStore(), monotonic=lambda: next(ticks))
        assert reporter.uptime_s() == 42.5

    def test_snapshot_version(self):
        reporter = HealthReporter(InMemoryTaskStore(), version="9.9.9")
        snapshot = reporter.snapshot()
        assert snapshot["version"] == "9.9.9"
        assert snapshot["tasks"] == {"total": 0, "completed": 0}
