"""Deploy Webhook 应用主文件

独立于任务 API 运行，只负责鉴权并把部署流程交给后台调度器。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from taskflow.core.logging_config import setup_logging
from taskflow.deployer import (
    DeployDispatcher,
    DeployerConfig,
    DeployProcedure,
    load_deployer_config,
)

from .routes import deploy

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期：记录启动参数（不含令牌本身）"""
    config: DeployerConfig = app.state.deployer_config
    log.info(
        "deploy_webhook_started",
        port=config.port,
        workdir=config.workdir,
        token_configured=bool(config.token.get_secret_value()),
    )

    yield

    # 进行中的部署不取消，随进程退出结束
    log.info("deploy_webhook_shutdown", in_flight=app.state.dispatcher.in_flight)


def create_app(
    config: DeployerConfig | None = None,
    dispatcher: DeployDispatcher | None = None,
) -> FastAPI:
    """创建 Deploy Webhook 应用实例

    Args:
        config: 部署配置，缺省时从环境变量加载
        dispatcher: 后台调度器，缺省时基于 config 创建真实部署流程
    """
    config = config or load_deployer_config()
    if dispatcher is None:
        dispatcher = DeployDispatcher(DeployProcedure(config))

    app = FastAPI(
        title="TaskFlow Deploy Webhook",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.deployer_config = config
    app.state.dispatcher = dispatcher

    setup_logging()

    app.include_router(deploy.router, tags=["deploy"])

    return app
