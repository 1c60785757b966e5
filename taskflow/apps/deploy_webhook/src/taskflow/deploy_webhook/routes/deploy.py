"""部署触发路由

POST /deploy: Bearer 令牌鉴权，立即返回 accepted，后台执行部署。
GET  /deploy: 查询参数 token 鉴权的简化入口，行为相同。
GET  /health: Webhook 服务自身的存活检查。

部署结果不会返回给调用方，只能通过日志或目标服务的 /health 观察。
"""

import json
from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Depends, Query, Request
from pydantic import ValidationError
from starlette.responses import JSONResponse
from taskflow.deployer import DeployDispatcher, DeployerConfig, DeployRequest

from ..auth import verify_bearer, verify_shared_secret
from ..deps import get_deployer_config, get_dispatcher

log = structlog.get_logger()

router = APIRouter()

DEPLOY_STARTED_MESSAGE = "Deployment started"


async def _read_deploy_request(request: Request) -> DeployRequest | None:
    """解析请求体；空 body 视为无元数据的手动触发，格式错误返回 None"""
    raw = await request.body()
    if not raw.strip():
        return DeployRequest()
    try:
        return DeployRequest.model_validate(json.loads(raw))
    except (ValueError, ValidationError):
        return None


@router.post("/deploy")
async def deploy(
    request: Request,
    config: DeployerConfig = Depends(get_deployer_config),
    dispatcher: DeployDispatcher = Depends(get_dispatcher),
):
    """接收部署 Webhook"""
    log.info("deploy_webhook_received")

    if not verify_bearer(request.headers.get("authorization"), config.token.get_secret_value()):
        log.warning("deploy_unauthorized", client=request.client.host if request.client else None)
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    deploy_request = await _read_deploy_request(request)
    if deploy_request is None:
        return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})

    log.info(
        "deploy_accepted",
        repository=deploy_request.repository,
        sha=deploy_request.short_sha,
        ref=deploy_request.ref,
    )
    dispatcher.dispatch(deploy_request)

    return {
        "status": "accepted",
        "message": DEPLOY_STARTED_MESSAGE,
        "sha": deploy_request.short_sha,
    }


@router.get("/deploy")
async def deploy_with_token(
    token: str | None = Query(default=None, description="共享密钥"),
    config: DeployerConfig = Depends(get_deployer_config),
    dispatcher: DeployDispatcher = Depends(get_dispatcher),
):
    """通过查询参数触发部署（便于手动调用）"""
    if not verify_shared_secret(token, config.token.get_secret_value()):
        log.warning("deploy_invalid_token")
        return JSONResponse(status_code=401, content={"error": "Invalid token"})

    log.info("deploy_accepted", trigger="query_token")
    dispatcher.dispatch(DeployRequest())

    return {
        "status": "accepted",
        "message": DEPLOY_STARTED_MESSAGE,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@router.get("/health")
async def health():
    """Webhook 服务存活检查"""
    return {"status": "OK", "service": "deploy-webhook"}
