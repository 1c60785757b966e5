"""TaskFlow Deployer -- 重新部署流程

packages/deployer 的公开接口导出。
"""

# 配置
from .config import DeployerConfig, load_deployer_config

# 核心组件
from .dispatcher import DeployDispatcher

# 异常
from .exceptions import DeployError, DeployStepError, HealthCheckFailedError
from .health_probe import HealthProbe, wait_until_healthy

# 数据模型
from .models import CommandResult, DeployOutcome, DeployRequest, DeployStep
from .procedure import DeployProcedure, build_deploy_steps
from .runner import CommandRunner, SubprocessRunner

__all__ = [
    "DeployRequest",
    "DeployStep",
    "CommandResult",
    "DeployOutcome",
    "DeployProcedure",
    "DeployDispatcher",
    "build_deploy_steps",
    "HealthProbe",
    "wait_until_healthy",
    "CommandRunner",
    "SubprocessRunner",
    "DeployerConfig",
    "load_deployer_config",
    "DeployError",
    "DeployStepError",
    "HealthCheckFailedError",
]
