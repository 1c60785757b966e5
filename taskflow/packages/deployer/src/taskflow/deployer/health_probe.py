"""部署后健康检查

HealthProbe.check() 单次探测，从不抛出异常；
wait_until_healthy() 在固定次数、固定间隔内重复探测。
"""

import asyncio
from collections.abc import Awaitable, Callable

import httpx
import structlog

from .exceptions import HealthCheckFailedError

log = structlog.get_logger()

# 单次健康检查超时（应快速响应）
HEALTH_CHECK_TIMEOUT_S = 5

Sleep = Callable[[float], Awaitable[None]]


class HealthProbe:
    """HTTP 健康探测"""

    def __init__(
        self,
        timeout_s: float = HEALTH_CHECK_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            timeout_s: 单次请求超时（秒）
            transport: 自定义 httpx transport（测试中使用 MockTransport）
        """
        self._timeout_s = timeout_s
        self._transport = transport

    async def check(self, url: str) -> bool:
        """GET url，返回 2xx 视为健康

        Returns:
            True 如果服务健康，False 如果不可达、超时或返回非 2xx
        """
        try:
            async with httpx.AsyncClient(transport=self._transport) as http_client:
                resp = await http_client.get(url, timeout=self._timeout_s)
                return resp.is_success
        except Exception as e:
            log.debug("health_probe_failed", url=url, error=str(e))
            return False


async def wait_until_healthy(
    probe: HealthProbe,
    url: str,
    attempts: int,
    interval_s: float,
    sleep: Sleep = asyncio.sleep,
) -> int:
    """重复探测直到健康

    最后一次失败后不再等待。

    Returns:
        首次通过时的尝试序号（从 1 开始）

    Raises:
        HealthCheckFailedError: 所有尝试均失败
    """
    for attempt in range(1, attempts + 1):
        if await probe.check(url):
            log.info("health_check_passed", url=url, attempt=attempt)
            return attempt
        log.warning("health_check_attempt_failed", url=url, attempt=attempt, attempts=attempts)
        if attempt < attempts:
            await sleep(interval_s)
    raise HealthCheckFailedError(url, attempts)
