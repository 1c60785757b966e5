"""CLI 入口模块 -- python -m taskflow.deploy_webhook"""

import uvicorn
from taskflow.deployer import load_deployer_config


def main() -> None:
    """CLI 主入口"""
    uvicorn.run(
        "taskflow.deploy_webhook.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=load_deployer_config().port,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
