"""部署相关数据模型"""

from pydantic import BaseModel, Field


class DeployRequest(BaseModel):
    """Webhook 请求体（来自代码托管平台或运维手动触发）"""

    ref: str | None = Field(default=None, description="分支引用，如 refs/heads/main")
    sha: str | None = Field(default=None, description="提交 SHA")
    repository: str | None = Field(default=None, description="仓库名")

    @property
    def short_sha(self) -> str | None:
        """SHA 前 8 位"""
        return self.sha[:8] if self.sha else None


class DeployStep(BaseModel):
    """单个部署命令"""

    name: str
    argv: list[str]


class CommandResult(BaseModel):
    """命令执行结果"""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class DeployOutcome(BaseModel):
    """一次部署的最终结果（只用于日志与测试观察）"""

    succeeded: bool
    failed_step: str | None = None
    error: str | None = None
