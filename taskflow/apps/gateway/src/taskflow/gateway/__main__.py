"""CLI 入口模块 -- python -m taskflow.gateway

以 uvicorn 启动任务 API，监听 TASKFLOW_HOST:TASKFLOW_PORT。
"""

import uvicorn
from taskflow.core.config import get_host, get_port


def main() -> None:
    """CLI 主入口"""
    uvicorn.run(
        "taskflow.gateway.main:create_app",
        factory=True,
        host=get_host(),
        port=get_port(),
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
