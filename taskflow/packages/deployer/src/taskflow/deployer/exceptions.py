"""Deployer 异常体系

部署在后台执行，这些异常只在流程内部传递并写入日志，不会返回给调用方。
"""


class DeployError(Exception):
    """Deployer 包基础异常"""


class DeployStepError(DeployError):
    """部署步骤命令执行失败（非零退出码或无法启动）"""

    def __init__(self, step: str, returncode: int | None, stderr: str = "") -> None:
        """
        Args:
            step: 步骤名
            returncode: 进程退出码，命令无法启动时为 None
            stderr: 标准错误输出（截断后保存）
        """
        super().__init__(f"deploy step '{step}' failed with exit code {returncode}")
        self.step = step
        self.returncode = returncode
        self.stderr = stderr


class HealthCheckFailedError(DeployError):
    """重试次数用尽后健康检查仍未通过"""

    def __init__(self, url: str, attempts: int) -> None:
        super().__init__(f"health check {url} did not pass after {attempts} attempts")
        self.url = url
        self.attempts = attempts
