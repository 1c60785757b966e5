"""HealthReporter -- 进程与任务存储的汇总状态

供 GET /health 使用。部署脚本与进程守护依赖此接口返回 200 判定服务存活，
因此这里只读取进程内数据，任何单项读取失败都降级为空值而不是抛出异常。
"""

import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import psutil
import structlog
from taskflow.core.config import APP_VERSION, get_environment
from taskflow.core.store import TaskStore

log = structlog.get_logger()


class HealthReporter:
    """健康状态汇总"""

    def __init__(
        self,
        task_store: TaskStore,
        version: str = APP_VERSION,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._task_store = task_store
        self._version = version
        self._monotonic = monotonic
        self._started_at = monotonic()

    def uptime_s(self) -> float:
        """服务启动至今的秒数"""
        return max(0.0, self._monotonic() - self._started_at)

    def memory(self) -> dict[str, Any]:
        """当前进程内存占用，读取失败时返回空字典"""
        try:
            process = psutil.Process()
            info = process.memory_info()
            return {
                "rss": info.rss,
                "vms": info.vms,
                "percent": round(process.memory_percent(), 2),
            }
        except (psutil.Error, OSError) as e:
            log.warning("memory_stats_unavailable", error=str(e))
            return {}

    def snapshot(self) -> dict[str, Any]:
        """生成 /health 响应体"""
        summary = self._task_store.summary()
        return {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "uptime": self.uptime_s(),
            "environment": get_environment(),
            "version": self._version,
            "memory": self.memory(),
            "tasks": {
                "total": summary.total,
                "completed": summary.completed,
            },
        }
