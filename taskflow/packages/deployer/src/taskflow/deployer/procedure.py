"""DeployProcedure -- 固定顺序的重新部署流程

1. source_sync        git pull origin <branch>
2. container_teardown docker compose down
3. image_cleanup      docker image prune -f
4. container_rebuild  docker compose up -d --build
5. 等待 startup_delay_s
6. 轮询 health_url，最多 health_attempts 次
7. 成功：记录 docker compose ps；失败：输出 docker compose logs

任一命令失败即终止本次部署。run() 不抛出异常，结果只写入日志。
"""

import asyncio

import structlog

from .config import DeployerConfig
from .exceptions import DeployStepError, HealthCheckFailedError
from .health_probe import HealthProbe, Sleep, wait_until_healthy
from .models import DeployOutcome, DeployRequest, DeployStep
from .runner import CommandRunner, SubprocessRunner

log = structlog.get_logger()

# 日志中保留的命令输出长度
OUTPUT_LOG_LIMIT = 4000

STATUS_STEP = DeployStep(name="container_status", argv=["docker", "compose", "ps"])
LOGS_STEP = DeployStep(name="container_logs", argv=["docker", "compose", "logs"])


def build_deploy_steps(config: DeployerConfig) -> list[DeployStep]:
    """健康检查之前需要依次执行的命令"""
    return [
        DeployStep(name="source_sync", argv=["git", "pull", "origin", config.branch]),
        DeployStep(name="container_teardown", argv=["docker", "compose", "down"]),
        DeployStep(name="image_cleanup", argv=["docker", "image", "prune", "-f"]),
        DeployStep(name="container_rebuild", argv=["docker", "compose", "up", "-d", "--build"]),
    ]


def _tail(text: str) -> str:
    return text[-OUTPUT_LOG_LIMIT:]


class DeployProcedure:
    """一次完整的重新部署"""

    def __init__(
        self,
        config: DeployerConfig,
        runner: CommandRunner | None = None,
        probe: HealthProbe | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config
        self._runner = runner or SubprocessRunner()
        self._probe = probe or HealthProbe()
        self._sleep = sleep
        self._steps = build_deploy_steps(config)

    async def run(self, request: DeployRequest) -> DeployOutcome:
        """执行部署流程，所有失败只记录日志"""
        deploy_log = log.bind(
            repository=request.repository,
            ref=request.ref,
            sha=request.short_sha,
        )
        deploy_log.info("deploy_started", workdir=self._config.workdir)

        try:
            for step in self._steps:
                await self._run_step(step)

            deploy_log.info("deploy_waiting_for_startup", delay_s=self._config.startup_delay_s)
            await self._sleep(self._config.startup_delay_s)

            await wait_until_healthy(
                self._probe,
                self._config.health_url,
                attempts=self._config.health_attempts,
                interval_s=self._config.health_interval_s,
                sleep=self._sleep,
            )
        except DeployStepError as e:
            deploy_log.error(
                "deploy_failed",
                failed_step=e.step,
                returncode=e.returncode,
                stderr=_tail(e.stderr),
            )
            return DeployOutcome(succeeded=False, failed_step=e.step, error=str(e))
        except HealthCheckFailedError as e:
            await self._report(LOGS_STEP)
            deploy_log.error("deploy_failed", failed_step="health_check", attempts=e.attempts)
            return DeployOutcome(succeeded=False, failed_step="health_check", error=str(e))
        except Exception as e:
            # 后台任务中的异常不能逃逸到事件循环
            deploy_log.exception("deploy_crashed", error_type=type(e).__name__)
            return DeployOutcome(succeeded=False, error=type(e).__name__)

        await self._report(STATUS_STEP)
        deploy_log.info("deploy_succeeded")
        return DeployOutcome(succeeded=True)

    async def _run_step(self, step: DeployStep) -> None:
        log.info("deploy_step_started", step=step.name, argv=step.argv)
        try:
            result = await self._runner.run(step.argv, cwd=self._config.workdir)
        except OSError as e:
            raise DeployStepError(step.name, None, str(e)) from e

        if not result.ok:
            raise DeployStepError(step.name, result.returncode, result.stderr)
        log.info("deploy_step_completed", step=step.name, stdout=_tail(result.stdout))

    async def _report(self, step: DeployStep) -> None:
        """执行诊断命令并输出结果，失败不影响部署结论"""
        try:
            result = await self._runner.run(step.argv, cwd=self._config.workdir)
        except OSError as e:
            log.warning("deploy_report_failed", step=step.name, error=str(e))
            return
        log.info(
            "deploy_report",
            step=step.name,
            returncode=result.returncode,
            output=_tail(result.stdout or result.stderr),
        )
