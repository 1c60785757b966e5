"""DeployDispatcher -- 将部署流程作为脱离请求周期的后台任务启动

调用方拿不到取消句柄；任务持有强引用直到结束，避免被垃圾回收。
同一时间只运行一个部署，后到的请求排队等待。
"""

import asyncio

import structlog

from .models import DeployOutcome, DeployRequest
from .procedure import DeployProcedure

log = structlog.get_logger()


class DeployDispatcher:
    """后台部署调度器"""

    def __init__(self, procedure: DeployProcedure) -> None:
        self._procedure = procedure
        self._running: set[asyncio.Task] = set()
        self._serial = asyncio.Lock()

    @property
    def in_flight(self) -> int:
        """尚未结束的部署数量（含排队中）"""
        return len(self._running)

    def dispatch(self, request: DeployRequest) -> asyncio.Task:
        """启动后台部署并立即返回"""
        task = asyncio.create_task(
            self._run_serialized(request),
            name=f"deploy-{request.short_sha or 'manual'}",
        )
        self._running.add(task)
        task.add_done_callback(self._running.discard)
        log.info("deploy_dispatched", sha=request.short_sha, in_flight=self.in_flight)
        return task

    async def wait_idle(self) -> None:
        """等待所有已启动的部署结束"""
        while self._running:
            await asyncio.gather(*list(self._running))

    async def _run_serialized(self, request: DeployRequest) -> DeployOutcome:
        async with self._serial:
            return await self._procedure.run(request)
