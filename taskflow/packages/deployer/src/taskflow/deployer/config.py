"""DeployerConfig -- 部署流程配置加载

从环境变量加载配置。部署令牌以 SecretStr 保存，不会出现在日志与 repr 中。
"""

import os

import structlog
from pydantic import BaseModel, Field, SecretStr

log = structlog.get_logger()


class DeployerConfig(BaseModel):
    """部署流程配置

    环境变量:
        TASKFLOW_DEPLOY_TOKEN: Webhook 鉴权令牌（为空时拒绝所有请求）
        TASKFLOW_DEPLOY_WORKDIR: 应用仓库目录（git / docker compose 在此执行）
        TASKFLOW_DEPLOY_BRANCH: 拉取的分支
        TASKFLOW_DEPLOY_HEALTH_URL: 部署后轮询的健康检查地址
        TASKFLOW_DEPLOY_STARTUP_DELAY_S: 容器启动后首次探测前的等待秒数
        TASKFLOW_DEPLOY_HEALTH_ATTEMPTS: 健康检查最大尝试次数
        TASKFLOW_DEPLOY_HEALTH_INTERVAL_S: 两次健康检查之间的间隔秒数
        TASKFLOW_DEPLOY_PORT: Webhook 服务监听端口
    """

    token: SecretStr = Field(default=SecretStr(""), description="Webhook 鉴权令牌")
    workdir: str = Field(default="/var/www/taskflow-app", description="应用仓库目录")
    branch: str = Field(default="main", description="拉取的分支")
    health_url: str = Field(
        default="http://localhost/health",
        description="部署后轮询的健康检查地址",
    )
    startup_delay_s: float = Field(default=30, ge=0, description="首次探测前等待秒数")
    health_attempts: int = Field(default=5, ge=1, description="健康检查最大尝试次数")
    health_interval_s: float = Field(default=10, ge=0, description="健康检查间隔秒数")
    port: int = Field(default=3001, ge=1, le=65535, description="Webhook 监听端口")


_INT_FIELDS: dict[str, str] = {
    "TASKFLOW_DEPLOY_HEALTH_ATTEMPTS": "health_attempts",
    "TASKFLOW_DEPLOY_PORT": "port",
}

_FLOAT_FIELDS: dict[str, str] = {
    "TASKFLOW_DEPLOY_STARTUP_DELAY_S": "startup_delay_s",
    "TASKFLOW_DEPLOY_HEALTH_INTERVAL_S": "health_interval_s",
}


def load_deployer_config() -> DeployerConfig:
    """从环境变量加载部署配置

    数值型环境变量格式错误时记录 warning 并使用默认值，不阻塞启动。

    Returns:
        DeployerConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKFLOW_DEPLOY_TOKEN"):
        kwargs["token"] = SecretStr(val)

    if val := os.environ.get("TASKFLOW_DEPLOY_WORKDIR"):
        kwargs["workdir"] = val

    if val := os.environ.get("TASKFLOW_DEPLOY_BRANCH"):
        kwargs["branch"] = val

    if val := os.environ.get("TASKFLOW_DEPLOY_HEALTH_URL"):
        kwargs["health_url"] = val

    for env_var, field_name in _INT_FIELDS.items():
        if val := os.environ.get(env_var):
            try:
                kwargs[field_name] = int(val)
            except ValueError:
                log.warning("invalid_deploy_config", env_var=env_var, value=val)

    for env_var, field_name in _FLOAT_FIELDS.items():
        if val := os.environ.get(env_var):
            try:
                kwargs[field_name] = float(val)
            except ValueError:
                log.warning("invalid_deploy_config", env_var=env_var, value=val)

    return DeployerConfig(**kwargs)
