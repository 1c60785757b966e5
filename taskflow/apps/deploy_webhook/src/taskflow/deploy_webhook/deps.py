"""依赖注入模块 -- 部署配置与调度器挂在 app.state 上"""

from fastapi import Request
from taskflow.deployer import DeployDispatcher, DeployerConfig


def get_deployer_config(request: Request) -> DeployerConfig:
    """从 app.state 获取 DeployerConfig"""
    return request.app.state.deployer_config


def get_dispatcher(request: Request) -> DeployDispatcher:
    """从 app.state 获取 DeployDispatcher"""
    return request.app.state.dispatcher
