"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
部署流程在重建容器后轮询此接口判定部署是否成功。
"""

from fastapi import APIRouter, Depends

from ..deps import get_health_reporter
from ..services.health_reporter import HealthReporter

router = APIRouter()


@router.get("/health")
async def health(reporter: HealthReporter = Depends(get_health_reporter)):
    """Liveness 检查 -- 永远返回 200 + 进程与任务汇总"""
    return reporter.snapshot()
