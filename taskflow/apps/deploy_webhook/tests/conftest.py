"""Deploy Webhook 测试 fixtures"""

import httpx
import pytest
import pytest_asyncio
from pydantic import SecretStr
from taskflow.deploy_webhook.main import create_app
from taskflow.deployer import DeployerConfig, DeployRequest

WEBHOOK_TOKEN = "s3cret-token"


class RecordingDispatcher:
    """只记录请求、不执行部署的调度器"""

    def __init__(self) -> None:
        self.requests: list[DeployRequest] = []

    @property
    def in_flight(self) -> int:
        return 0

    def dispatch(self, request: DeployRequest) -> None:
        self.requests.append(request)


@pytest.fixture
def webhook_config() -> DeployerConfig:
    return DeployerConfig(token=SecretStr(WEBHOOK_TOKEN), workdir="/srv/app")


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest_asyncio.fixture
async def webhook_client(webhook_config, dispatcher):
    app = create_app(config=webhook_config, dispatcher=dispatcher)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://webhook") as c:
        yield c


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {WEBHOOK_TOKEN}"}
